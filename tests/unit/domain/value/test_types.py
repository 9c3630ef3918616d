"""Unit tests for domain value objects."""

import pytest
from pydantic import ValidationError

from commentary.domain.value import (
    CommentStatus,
    RemoteCode,
    VoteDirection,
)
from commentary.domain.value.types import REMOTE_CODE_LENGTH


class TestCommentStatus:
    """Tests for CommentStatus."""

    def test_displayable_statuses(self):
        assert CommentStatus.APPROVED.is_displayable
        assert CommentStatus.SPAM_WITH_REPLIES.is_displayable
        assert not CommentStatus.PENDING_APPROVAL.is_displayable
        assert not CommentStatus.SPAM.is_displayable

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("approve", CommentStatus.APPROVED),
            ("1", CommentStatus.APPROVED),
            ("SPAM", CommentStatus.SPAM),
            ("2", CommentStatus.SPAM),
            ("3", None),
            ("0", None),
            ("publish", None),
        ],
    )
    def test_parse_remote(self, value, expected):
        """Only approve and spam can be requested through links."""
        assert CommentStatus.parse_remote(value) == expected


class TestVoteDirection:
    """Tests for VoteDirection."""

    def test_parse(self):
        assert VoteDirection.parse("up") == VoteDirection.UP
        assert VoteDirection.parse(" Down ") == VoteDirection.DOWN

    def test_parse_rejects_other_values(self):
        with pytest.raises(ValueError, match="Invalid vote direction"):
            VoteDirection.parse("sideways")


class TestRemoteCode:
    """Tests for RemoteCode."""

    def test_generated_codes_are_long_and_alphanumeric(self):
        code = RemoteCode.generate()

        assert len(str(code)) == REMOTE_CODE_LENGTH
        assert str(code).isalnum()

    def test_generated_codes_differ(self):
        assert RemoteCode.generate() != RemoteCode.generate()

    @pytest.mark.parametrize("value", ["", "abc-def", "a" * 256, "code with spaces"])
    def test_invalid_codes_are_rejected(self, value):
        with pytest.raises(ValidationError):
            RemoteCode(root=value)
