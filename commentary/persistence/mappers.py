"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict

from commentary.domain.model import Comment, NotificationQueueEntry, Vote
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    FieldId,
    NotificationPreference,
    PageId,
    QueueEntryId,
    RemoteCode,
    UserId,
    VoteDirection,
    VoteId,
)


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(row["id"]),
        parent_id=CommentId(row["parent_id"]),
        page_id=PageId(row["page_id"]),
        field_id=FieldId(row["field_id"]),
        author=row["author"],
        email=row["email"],
        website=row.get("website"),
        text=row["text"],
        stars=row.get("stars"),
        status=CommentStatus(row["status"]),
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        notification=NotificationPreference(row["notification"]),
        created_at=row["created_at"],
        sort_index=row["sort_index"],
        remote_change_used=row["remote_change_used"],
        code=RemoteCode(root=row["code"]),
        user_id=UserId(row["user_id"]),
        ip=row["ip"],
        user_agent=row["user_agent"],
        spam_marked_at=row.get("spam_marked_at"),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    ``id`` is left out for new comments so the sequence assigns it.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    data = comment.model_dump(exclude={"id"} if comment.id is None else None)
    data["status"] = int(comment.status)
    data["notification"] = int(comment.notification)
    data["code"] = str(comment.code)
    return data


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(row["id"]),
        comment_id=CommentId(row["comment_id"]),
        user_id=UserId(row["user_id"]),
        ip=row["ip"],
        user_agent=row["user_agent"],
        direction=VoteDirection(row["direction"]),
        created_at=row["created_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    data = vote.model_dump(exclude={"id"} if vote.id is None else None)
    data["direction"] = int(vote.direction)
    return data


def row_to_queue_entry(row: Dict[str, Any]) -> NotificationQueueEntry:
    """Convert database row to NotificationQueueEntry domain model."""
    return NotificationQueueEntry(
        id=QueueEntryId(row["id"]),
        parent_comment_id=CommentId(row["parent_comment_id"]),
        triggering_comment_id=CommentId(row["triggering_comment_id"]),
        recipient_email=row["recipient_email"],
        page_id=PageId(row["page_id"]),
        field_id=FieldId(row["field_id"]),
        created_at=row["created_at"],
    )


def queue_entry_to_dict(entry: NotificationQueueEntry) -> Dict[str, Any]:
    """Convert NotificationQueueEntry domain model to database dict."""
    return entry.model_dump(exclude={"id"} if entry.id is None else None)
