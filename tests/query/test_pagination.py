"""Tests for limit_records / isolate_page."""

import pytest
from folio.query.pagination import isolate_page, limit_records, page_offset

RECORDS = [{"url": f"/{i}"} for i in range(1, 26)]


def _urls(records: list[dict]) -> list[str]:
    return [r["url"] for r in records]


class TestLimitRecords:
    def test_noop_without_limit_or_offset(self):
        assert limit_records(RECORDS) == RECORDS

    def test_limit(self):
        assert _urls(limit_records(RECORDS, 3)) == ["/1", "/2", "/3"]

    def test_limit_with_offset(self):
        assert _urls(limit_records(RECORDS, 2, 5)) == ["/6", "/7"]

    def test_offset_without_limit(self):
        assert _urls(limit_records(RECORDS, None, 23)) == ["/24", "/25"]

    def test_offset_past_end(self):
        assert limit_records(RECORDS, 5, 100) == []

    def test_negative_offset_counts_from_end(self):
        assert _urls(limit_records(RECORDS, 2, -3)) == ["/23", "/24"]

    def test_returns_new_list(self):
        result = limit_records(RECORDS, 2)
        result.clear()
        assert len(RECORDS) == 25


class TestPageOffset:
    def test_plain(self):
        assert page_offset(25, 10, 3) == 20

    def test_rejects_bad_page_size(self):
        with pytest.raises(ValueError, match="page_size"):
            page_offset(25, 0, 1)

    def test_clamps_to_last_page(self):
        assert page_offset(25, 10, 99, fix_out_of_range=True) == 20

    def test_clamps_low_pages_to_first(self):
        assert page_offset(25, 10, 0, fix_out_of_range=True) == 0
        assert page_offset(25, 10, -4, fix_out_of_range=True) == 0

    def test_clamp_with_no_records(self):
        assert page_offset(0, 10, 5, fix_out_of_range=True) == 0


class TestIsolatePage:
    def test_middle_page(self):
        assert _urls(isolate_page(RECORDS, 10, 2)) == [f"/{i}" for i in range(11, 21)]

    def test_partial_last_page(self):
        assert _urls(isolate_page(RECORDS, 10, 3)) == [f"/{i}" for i in range(21, 26)]

    @pytest.mark.parametrize("page_size", [0, -3])
    def test_non_positive_page_size_is_empty(self, page_size):
        assert isolate_page(RECORDS, page_size, 1) == []
        assert isolate_page(RECORDS, page_size, 1, fix_out_of_range=True) == []

    def test_out_of_range_without_fix_is_empty(self):
        assert isolate_page(RECORDS, 10, 9) == []

    def test_far_page_matches_last_page_when_fixed(self):
        last = isolate_page(RECORDS, 10, 3, fix_out_of_range=True)
        assert isolate_page(RECORDS, 10, 50, fix_out_of_range=True) == last

    @pytest.mark.parametrize("page", [0, -1, -10])
    def test_low_page_matches_first_page_when_fixed(self, page):
        first = isolate_page(RECORDS, 10, 1, fix_out_of_range=True)
        assert isolate_page(RECORDS, 10, page, fix_out_of_range=True) == first
