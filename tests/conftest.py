"""Test configuration and fixtures."""

from datetime import datetime, timezone
from itertools import count

import logfire
import pytest

from commentary.domain.model import Comment
from commentary.domain.value import (
    ROOT_PARENT_ID,
    CommentId,
    CommentStatus,
    FieldId,
    NotificationPreference,
    PageId,
    ThreadKey,
)

logfire.configure(send_to_logfire=False, console=False)

THREAD = ThreadKey(page_id=PageId(1), field_id=FieldId(1))

_sort_indexes = count(1)


def make_comment(
    comment_id: int | None = None,
    parent_id: int = ROOT_PARENT_ID,
    status: CommentStatus = CommentStatus.APPROVED,
    email: str = "reader@example.org",
    author: str = "Reader",
    notification: NotificationPreference = NotificationPreference.NONE,
    sort_index: int | None = None,
    thread: ThreadKey = THREAD,
    stars: int | None = None,
    text: str = "A comment",
) -> Comment:
    """Helper function to build comments for tests.

    Args:
        comment_id: Comment ID, None for unsaved comments
        parent_id: Parent comment, 0 for top-level
        status: Moderation status
        email: Commenter email
        author: Commenter name
        notification: Notification preference
        sort_index: Insertion index, increasing by default
        thread: Thread the comment belongs to
        stars: Star rating
        text: Comment text

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(comment_id) if comment_id is not None else None,
        parent_id=CommentId(parent_id),
        page_id=thread.page_id,
        field_id=thread.field_id,
        author=author,
        email=email,
        text=text,
        stars=stars,
        status=status,
        notification=notification,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        sort_index=sort_index if sort_index is not None else next(_sort_indexes),
    )


@pytest.fixture
def thread() -> ThreadKey:
    """The thread most tests post to."""
    return THREAD
