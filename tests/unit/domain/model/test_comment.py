"""Unit tests for the Comment entity."""

from datetime import datetime, timezone

from commentary.domain.model import sort_key
from commentary.domain.value import CommentStatus
from tests.conftest import make_comment


class TestSortKey:
    """Tests for the sibling order."""

    def test_insertion_index_comes_first(self):
        """Comments sort by insertion index, whatever their id."""
        # Arrange
        later = make_comment(1, sort_index=7)
        earlier = make_comment(2, sort_index=3)

        # Act
        ordered = sorted([later, earlier], key=sort_key)

        # Assert
        assert [c.id for c in ordered] == [2, 1]

    def test_id_breaks_ties(self):
        comments = [make_comment(9, sort_index=4), make_comment(5, sort_index=4)]

        assert [c.id for c in sorted(comments, key=sort_key)] == [5, 9]


class TestWithStatus:
    """Tests for with_status."""

    def test_spam_is_stamped(self):
        now = datetime(2024, 3, 1, tzinfo=timezone.utc)

        spam = make_comment(1).with_status(CommentStatus.SPAM, now)

        assert spam.spam_marked_at == now
        assert spam.with_status(CommentStatus.APPROVED, now).spam_marked_at is None
