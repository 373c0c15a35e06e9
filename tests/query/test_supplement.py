"""Tests for Supplementer: list helpers, taxonomy links, location, URLs, defaults."""

import pytest
from folio.config import FolioConfig, SupplementConfig, TaxonomyConfig
from folio.query.supplement import SupplementContext, Supplementer
from folio.query.taxonomy import TaxonomyService
from folio.shared.request import RequestContext


class _UpperRenderer:
    """Stand-in renderer that records its calls."""

    def __init__(self):
        self.calls = []

    def render(self, template, context, fmt=None):
        self.calls.append((template, fmt))
        return template.replace("{{ title }}", str(context.get("title", ""))).upper()


@pytest.fixture()
def supplementer() -> Supplementer:
    return Supplementer(request=RequestContext("/blog/2013-01-02-hello"))


class TestListHelpers:
    def test_tags_example(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "tags": ["red", "blue"]}])

        assert record["tags_list"] == "red, blue"
        assert record["tags_option_list"] == "red|blue"
        assert record["tags_ordered_list"] == "<ol><li>red</li><li>blue</li></ol>"
        assert record["tags_unordered_list"] == "<ul><li>red</li><li>blue</li></ul>"
        assert record["tags_spaced_list"] == "red blue"
        assert record["tags_sentence_list"] == "red and blue"
        assert record["tags_ampersand_sentence_list"] == "red & blue"

    def test_sentence_list_with_three_items(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "authors": ["Ann", "Bo", "Cy"]}])
        assert record["authors_sentence_list"] == "Ann, Bo, and Cy"
        assert record["authors_ampersand_sentence_list"] == "Ann, Bo & Cy"

    def test_list_of_mappings_gets_no_helpers(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "links": [{"href": "/x"}]}])
        assert not any(key.startswith("links_") for key in record)

    def test_empty_list_gets_no_helpers(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "tags": []}])
        assert "tags_list" not in record

    def test_disabled_by_context(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "tags": ["red"]}], {"list_helpers": False})
        assert "tags_list" not in record

    def test_disabled_by_config(self):
        config = FolioConfig(supplement=SupplementConfig(list_helpers=False))
        [record] = Supplementer(config).apply([{"url": "/a", "tags": ["red"]}])
        assert "tags_list" not in record


class TestTaxonomyLinks:
    def test_linked_variants_for_taxonomy_fields(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "_folder": "blog", "tags": ["Red Wine", "blue"]}])

        red = '<a href="/blog/tags/red-wine">Red Wine</a>'
        blue = '<a href="/blog/tags/blue">blue</a>'
        assert record["tags_url_list"] == f"{red}, {blue}"
        assert record["tags_ordered_url_list"] == f"<ol><li>{red}</li><li>{blue}</li></ol>"
        assert record["tags_sentence_url_list"] == f"{red} and {blue}"
        assert "tags_option_url_list" not in record

    def test_non_taxonomy_fields_are_not_linked(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "colors": ["red"]}])
        assert "colors_list" in record
        assert "colors_url_list" not in record

    def test_custom_taxonomy_fields(self):
        taxonomy = TaxonomyService(TaxonomyConfig(fields=["genres"], slugify=False))
        [record] = Supplementer(taxonomy=taxonomy).apply(
            [{"url": "/a", "_folder": "music", "genres": ["Jazz"]}]
        )
        assert record["genres_url_list"] == '<a href="/music/genres/Jazz">Jazz</a>'


class TestLocation:
    LONDON = {"latitude": 51.5074, "longitude": -0.1278}

    def test_coordinates_populated(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "venue": self.LONDON}], {"locate_with": "venue"})
        assert record["latitude"] == 51.5074
        assert record["longitude"] == -0.1278
        assert record["coordinates"] == "51.5074,-0.1278"
        assert "distance_km" not in record

    def test_distance_from_center(self, supplementer):
        context = SupplementContext(locate_with="venue", center_point="48.8566, 2.3522")
        [record] = supplementer.apply([{"url": "/a", "venue": self.LONDON}], context)
        assert record["distance_km"] == pytest.approx(343.5, abs=1.0)
        assert record["distance_mi"] == pytest.approx(record["distance_km"] * 0.621371)

    def test_missing_location_left_alone(self, supplementer):
        records = [{"url": "/a"}, {"url": "/b", "venue": {"latitude": 1.0}}]
        result = supplementer.apply(records, {"locate_with": "venue"})
        assert all("coordinates" not in record for record in result)

    def test_malformed_center_skips_distance(self, supplementer):
        context = {"locate_with": "venue", "center_point": "somewhere"}
        [record] = supplementer.apply([{"url": "/a", "venue": self.LONDON}], context)
        assert record["coordinates"] == "51.5074,-0.1278"
        assert "distance_km" not in record


class TestPopUp:
    def test_pop_up_rendered_as_html(self):
        renderer = _UpperRenderer()
        supplementer = Supplementer(renderer=renderer)
        [record] = supplementer.apply([{"url": "/a", "title": "Cafe"}], {"pop_up_template": "<b>{{ title }}</b>"})
        assert record["marker_pop_up_content"] == "<B>CAFE</B>"
        assert renderer.calls == [("<b>{{ title }}</b>", "html")]

    def test_default_renderer_leaves_html_untouched(self, supplementer):
        [record] = supplementer.apply([{"url": "/a", "title": "Cafe"}], {"pop_up_template": "<b>{{ title }}</b>"})
        assert record["marker_pop_up_content"] == "<b>Cafe</b>"


class TestContextUrls:
    def test_raw_and_page_url(self, supplementer):
        [record] = supplementer.apply([{"url": "/a"}])
        assert record["raw_url"] == "/blog/2013-01-02-hello"
        assert record["page_url"] == "/blog/hello"

    def test_disabled(self, supplementer):
        [record] = supplementer.apply([{"url": "/a"}], {"context_urls": False})
        assert "raw_url" not in record
        assert "page_url" not in record


class TestDefaults:
    def test_record_values_win_over_defaults(self):
        config = FolioConfig(defaults={"site_name": "Folio", "title": "Untitled"})
        [record] = Supplementer(config).apply([{"url": "/a", "title": "Mine"}])
        assert record["site_name"] == "Folio"
        assert record["title"] == "Mine"

    def test_input_not_mutated(self, supplementer):
        original = {"url": "/a", "tags": ["red"], "venue": {"latitude": 1, "longitude": 2}}
        supplementer.apply([original], {"locate_with": "venue"})
        assert original == {"url": "/a", "tags": ["red"], "venue": {"latitude": 1, "longitude": 2}}
