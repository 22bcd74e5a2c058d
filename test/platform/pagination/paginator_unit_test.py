"""
Unit tests for the page-number paginator

Test Coverage:
1. Query parsing (defaults, fold policy, clamp)
2. Cursor derivation (next/previous presence)
3. Total pages and window size guard
"""

import pytest

from src.platform.pagination.paginator import MAX_OFFSET, PageCursor, PageRequest, paginate


pytestmark = pytest.mark.unit


class TestPageRequestFromQuery:
    def test_defaults_when_absent(self):
        request = PageRequest.from_query(None, None, default_page_size=10, max_page_size=100)

        assert request.page == 1
        assert request.page_size == 10
        assert request.skip == 0

    @pytest.mark.parametrize('raw_page', ['abc', '', '0', '-3', '1.5'])
    def test_invalid_page_falls_back_to_first(self, raw_page):
        request = PageRequest.from_query(raw_page, '5', default_page_size=10, max_page_size=100)

        assert request.page == 1
        assert request.page_size == 5

    @pytest.mark.parametrize('raw_size', ['0', '-1', 'ten', None])
    def test_invalid_page_size_falls_back_to_default(self, raw_size):
        request = PageRequest.from_query('2', raw_size, default_page_size=10, max_page_size=100)

        assert request.page_size == 10
        assert request.skip == 10

    def test_page_size_is_clamped(self):
        request = PageRequest.from_query('1', '5000', default_page_size=10, max_page_size=100)

        assert request.page_size == 100

    def test_numeric_strings_are_trimmed(self):
        request = PageRequest.from_query(' 3 ', ' 4 ', default_page_size=10, max_page_size=100)

        assert request.page == 3
        assert request.skip == 8
        assert request.limit == 4


class TestPaginate:
    def test_first_page_has_only_next(self):
        page = paginate([1, 2], total_count=5, request=PageRequest(page=1, page_size=2))

        assert page.items == [1, 2]
        assert page.current_page == 1
        assert page.total_pages == 3
        assert page.next_page == PageCursor(page=2, page_size=2)
        assert page.previous_page is None

    def test_middle_page_has_both_cursors(self):
        page = paginate([3, 4], total_count=5, request=PageRequest(page=2, page_size=2))

        assert page.next_page == PageCursor(page=3, page_size=2)
        assert page.previous_page == PageCursor(page=1, page_size=2)

    def test_last_page_has_only_previous(self):
        page = paginate([5], total_count=5, request=PageRequest(page=3, page_size=2))

        assert page.next_page is None
        assert page.previous_page == PageCursor(page=2, page_size=2)

    def test_exact_fit_has_no_next(self):
        # skip + pageSize == total: nothing left after this page
        page = paginate([3, 4], total_count=4, request=PageRequest(page=2, page_size=2))

        assert page.next_page is None
        assert page.total_pages == 2

    def test_page_past_the_end_is_empty_with_previous(self):
        page = paginate([], total_count=1, request=PageRequest(page=2, page_size=1))

        assert page.items == []
        assert page.next_page is None
        assert page.previous_page == PageCursor(page=1, page_size=1)
        assert page.total_pages == 1

    def test_empty_collection(self):
        page = paginate([], total_count=0, request=PageRequest())

        assert page.items == []
        assert page.total_pages == 0
        assert page.next_page is None
        assert page.previous_page is None

    def test_window_larger_than_page_size_is_rejected(self):
        with pytest.raises(ValueError):
            paginate([1, 2, 3], total_count=3, request=PageRequest(page=1, page_size=2))

    def test_items_are_not_reordered(self):
        items = ['c', 'a', 'b']
        page = paginate(items, total_count=3, request=PageRequest(page=1, page_size=3))

        assert page.items == ['c', 'a', 'b']
        assert items == ['c', 'a', 'b']


class TestPageRequestOffsetBound:
    @pytest.mark.parametrize('raw_size', ['1', '10', '100'])
    def test_huge_page_keeps_offset_in_int64(self, raw_size):
        request = PageRequest.from_query(
            '99999999999999999999', raw_size, default_page_size=10, max_page_size=100
        )

        assert request.skip + request.limit <= MAX_OFFSET
        assert request.page > 1

    def test_bounded_page_past_the_end_is_empty(self):
        request = PageRequest.from_query(
            '99999999999999999999', '10', default_page_size=10, max_page_size=100
        )

        page = paginate([], total_count=3, request=request)

        assert page.items == []
        assert page.next_page is None
        assert page.previous_page == PageCursor(page=request.page - 1, page_size=10)
