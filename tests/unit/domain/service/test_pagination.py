"""Unit tests for pagination helpers."""

from commentary.domain.service import pagination


class TestPaginate:
    """Tests for paginate."""

    def test_pages_over_five_items(self):
        """Page size 2 over five items gives three pages."""
        # Arrange
        items = [1, 2, 3, 4, 5]

        # Act
        first = pagination.paginate(items, page_size=2, page_number=1)
        last = pagination.paginate(items, page_size=2, page_number=3)

        # Assert
        assert first.items == [1, 2]
        assert first.total_pages == 3
        assert (first.window_start, first.window_end) == (1, 2)
        assert last.items == [5]
        assert (last.window_start, last.window_end) == (5, 5)
        assert not last.has_next
        assert last.has_previous

    def test_out_of_range_page_redirects_to_first(self):
        """Page 4 of 3 yields page 1 flagged as redirected."""
        # Act
        window = pagination.paginate([1, 2, 3, 4, 5], page_size=2, page_number=4)

        # Assert
        assert window.redirected
        assert window.page_number == 1
        assert window.items == [1, 2]

    def test_page_zero_redirects(self):
        """Page numbers below 1 are out of range too."""
        window = pagination.paginate([1, 2, 3], page_size=2, page_number=0)

        assert window.redirected
        assert window.page_number == 1

    def test_zero_page_size_disables_pagination(self):
        """Page size 0 puts everything on one page."""
        # Act
        window = pagination.paginate(list(range(25)), page_size=0, page_number=7)

        # Assert
        assert window.total_pages == 1
        assert window.page_number == 1
        assert len(window.items) == 25
        assert not window.redirected

    def test_empty_list_is_a_single_empty_page(self):
        """An empty thread still has page 1."""
        # Act
        window = pagination.paginate([], page_size=10, page_number=1)

        # Assert
        assert window.items == []
        assert window.total_pages == 1
        assert (window.window_start, window.window_end) == (0, 0)
        assert not window.redirected


class TestLocatePage:
    """Tests for locate_page."""

    def test_finds_page_of_comment(self):
        """Position 5 with page size 2 is on page 3."""
        assert pagination.locate_page([10, 11, 12, 13, 14], 14, 2) == 3
        assert pagination.locate_page([10, 11, 12, 13, 14], 11, 2) == 1

    def test_unknown_comment(self):
        """Comments not in the order have no page."""
        assert pagination.locate_page([10, 11], 99, 2) is None

    def test_unpaginated(self):
        """Everything is on page 1 without pagination."""
        assert pagination.locate_page([10, 11, 12], 12, 0) == 1


class TestPageLinks:
    """Tests for page_links."""

    def test_single_page_has_no_navigation(self):
        assert pagination.page_links(1, 1) == []

    def test_few_pages_are_all_listed(self):
        assert pagination.page_links(1, 3) == [1, 2, 3]

    def test_gaps_around_current_page(self):
        """First and last pages are always reachable."""
        assert pagination.page_links(6, 12) == [1, None, 4, 5, 6, 7, 8, None, 12]

    def test_no_gap_next_to_first_page(self):
        assert pagination.page_links(4, 10) == [1, 2, 3, 4, 5, 6, None, 10]

    def test_last_page(self):
        assert pagination.page_links(10, 10) == [1, None, 8, 9, 10]
