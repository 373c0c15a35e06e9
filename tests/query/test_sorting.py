"""Tests for sort_records: aliases, stability, direction inference, shuffle."""

import random

import pytest
from folio.query.sorting import SORT_ALIASES, resolve_sort_field, sort_records


def _urls(records: list[dict]) -> list[str]:
    return [r["url"] for r in records]


class TestAliases:
    @pytest.mark.parametrize(
        ("alias", "field"),
        [
            ("order_key", "_order_key"),
            ("number", "_order_key"),
            ("datestamp", "datestamp"),
            ("date", "datestamp"),
            ("folder", "_folder"),
            ("distance", "distance_km"),
            ("title", "title"),
        ],
    )
    def test_resolve(self, alias, field):
        assert resolve_sort_field(alias) == field

    def test_alias_table_is_complete(self):
        assert set(SORT_ALIASES) == {"order_key", "number", "datestamp", "date", "folder", "distance"}


class TestSortRecords:
    def test_by_folder_ascending(self):
        records = [{"url": "/a", "_folder": "news"}, {"url": "/b", "_folder": "blog"}]
        assert _urls(sort_records(records, "folder", "asc")) == ["/b", "/a"]

    def test_by_arbitrary_field_missing_values_first(self):
        records = [
            {"url": "/b", "title": "Beta"},
            {"url": "/none"},
            {"url": "/a", "title": "alpha"},
        ]
        assert _urls(sort_records(records, "title")) == ["/none", "/a", "/b"]

    def test_numeric_strings(self):
        records = [{"url": "/10", "rank": "10"}, {"url": "/9", "rank": "9"}]
        assert _urls(sort_records(records, "rank")) == ["/9", "/10"]

    def test_stable_for_equal_keys(self):
        records = [
            {"url": "/1", "group": "b"},
            {"url": "/2", "group": "a"},
            {"url": "/3", "group": "b"},
            {"url": "/4", "group": "a"},
        ]
        assert _urls(sort_records(records, "group", "asc")) == ["/2", "/4", "/1", "/3"]

    def test_desc_reverses_ascending(self):
        records = [{"url": "/1", "n": 1}, {"url": "/3", "n": 3}, {"url": "/2", "n": 2}]
        ascending = sort_records(records, "n", "asc")
        assert sort_records(records, "n", "desc") == list(reversed(ascending))

    def test_unknown_direction_is_ascending(self):
        records = [{"url": "/2", "n": 2}, {"url": "/1", "n": 1}]
        assert _urls(sort_records(records, "n", "sideways")) == ["/1", "/2"]

    def test_distance_alias(self):
        records = [{"url": "/far", "distance_km": 100.0}, {"url": "/near", "distance_km": 1.5}]
        assert _urls(sort_records(records, "distance")) == ["/near", "/far"]

    def test_empty(self):
        assert sort_records([], "title") == []

    def test_does_not_mutate_input(self):
        records = [{"url": "/b", "title": "b"}, {"url": "/a", "title": "a"}]
        sort_records(records, "title")
        assert _urls(records) == ["/b", "/a"]


class TestDefaultDirection:
    def test_date_based_order_key_defaults_desc(self):
        records = [
            {"url": "/old", "_order_key": "2024-01-01", "datestamp": 1704067200},
            {"url": "/new", "_order_key": "2024-03-01", "datestamp": 1709251200},
        ]
        assert _urls(sort_records(records, "order_key")) == ["/new", "/old"]

    def test_number_alias_also_defaults_desc(self):
        records = [
            {"url": "/old", "_order_key": "2024-01-01", "datestamp": 1704067200},
            {"url": "/new", "_order_key": "2024-03-01", "datestamp": 1709251200},
        ]
        assert _urls(sort_records(records, "number")) == ["/new", "/old"]

    def test_numeric_order_key_without_dates_defaults_asc(self):
        records = [
            {"url": "/2", "_order_key": 2, "datestamp": None},
            {"url": "/1", "_order_key": 1, "datestamp": None},
        ]
        assert _urls(sort_records(records, "order_key")) == ["/1", "/2"]

    def test_other_fields_default_asc(self):
        records = [
            {"url": "/b", "title": "b", "_order_key": 1, "datestamp": 100},
            {"url": "/a", "title": "a", "_order_key": 2, "datestamp": 200},
        ]
        assert _urls(sort_records(records, "title")) == ["/a", "/b"]

    def test_explicit_asc_overrides_inference(self):
        records = [
            {"url": "/new", "_order_key": "2024-03-01", "datestamp": 1709251200},
            {"url": "/old", "_order_key": "2024-01-01", "datestamp": 1704067200},
        ]
        assert _urls(sort_records(records, "order_key", "asc")) == ["/old", "/new"]


class TestRandom:
    def test_random_is_a_permutation(self):
        records = [{"url": f"/{i}"} for i in range(20)]
        shuffled = sort_records(records, "random", rng=random.Random(7))
        assert sorted(_urls(shuffled)) == sorted(_urls(records))

    def test_random_uses_injected_rng(self):
        records = [{"url": f"/{i}"} for i in range(20)]
        first = sort_records(records, "random", rng=random.Random(7))
        second = sort_records(records, "random", rng=random.Random(7))
        assert first == second

    def test_random_ignores_direction(self):
        records = [{"url": f"/{i}"} for i in range(5)]
        expected = list(records)
        random.Random(3).shuffle(expected)
        assert sort_records(records, "random", "desc", rng=random.Random(3)) == expected
