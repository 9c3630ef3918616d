"""PostgreSQL implementation of Comment repository."""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, List, Optional

from sqlalchemy import func, select

from commentary.domain.error import PersistenceError
from commentary.domain.model import Comment
from commentary.domain.repository import CommentRepository
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    NotificationPreference,
    RemoteCode,
    ThreadKey,
    VoteDirection,
)
from commentary.persistence.mappers import comment_to_dict, row_to_comment
from commentary.persistence.tables import comments_table

from .base import PostgresRepository


class PostgresCommentRepository(PostgresRepository, CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    _ordering = (comments_table.c.sort_index, comments_table.c.id)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self._execute(stmt, "find_comment")
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_code(self, code: RemoteCode) -> Optional[Comment]:
        """Find a comment by its remote link code."""
        stmt = select(comments_table).where(comments_table.c.code == str(code))
        result = await self._execute(stmt, "find_comment_by_code")
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_thread(self, thread: ThreadKey) -> List[Comment]:
        """Find every comment of a thread."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.page_id == thread.page_id)
            .where(comments_table.c.field_id == thread.field_id)
            .order_by(*self._ordering)
        )
        result = await self._execute(stmt, "find_thread_comments")
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id == parent_id)
            .order_by(*self._ordering)
        )
        result = await self._execute(stmt, "find_children")
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def max_sort_index(self, thread: ThreadKey) -> int:
        """Highest insertion index of a thread, 0 if empty."""
        stmt = (
            select(func.coalesce(func.max(comments_table.c.sort_index), 0))
            .where(comments_table.c.page_id == thread.page_id)
            .where(comments_table.c.field_id == thread.field_id)
        )
        result = await self._execute(stmt, "max_sort_index")
        return result.scalar() or 0

    async def has_approved_comment(self, email: str, thread: ThreadKey) -> bool:
        """Check whether an email already has a published comment in a thread."""
        stmt = (
            select(comments_table.c.id)
            .where(comments_table.c.page_id == thread.page_id)
            .where(comments_table.c.field_id == thread.field_id)
            .where(func.lower(comments_table.c.email) == email.strip().lower())
            .where(comments_table.c.status == int(CommentStatus.APPROVED))
            .limit(1)
        )
        result = await self._execute(stmt, "has_approved_comment")
        return result.first() is not None

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = (
            comments_table.insert()
            .values(**comment_to_dict(comment))
            .returning(*comments_table.c)
        )
        result = await self._execute(stmt, "insert_comment")
        return row_to_comment(result.one()._asdict())

    @asynccontextmanager
    async def lock(self, comment_id: CommentId) -> AsyncIterator[Optional[Comment]]:
        """Lock the comment row until the request transaction ends."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.id == comment_id)
            .with_for_update()
        )
        result = await self._execute(stmt, "lock_comment")
        row = result.fetchone()
        yield row_to_comment(row._asdict()) if row else None

    async def increment_votes(
        self, comment_id: CommentId, direction: VoteDirection
    ) -> int:
        """Atomically increment the up- or downvote counter."""
        column = (
            comments_table.c.upvotes
            if direction == VoteDirection.UP
            else comments_table.c.downvotes
        )
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values({column: column + 1})
            .returning(column)
        )
        result = await self._execute(stmt, "increment_votes")
        tally = result.scalar()
        if tally is None:
            raise PersistenceError("increment_votes")
        return tally

    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        spam_marked_at: Optional[datetime],
        mark_remote_change_used: bool = False,
    ) -> Comment:
        """Set the moderation status in a single UPDATE."""
        values: dict = {"status": int(status), "spam_marked_at": spam_marked_at}
        if mark_remote_change_used:
            values["remote_change_used"] = True
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(**values)
            .returning(*comments_table.c)
        )
        result = await self._execute(stmt, "update_status")
        row = result.fetchone()
        if row is None:
            raise PersistenceError("update_status")
        return row_to_comment(row._asdict())

    async def update_notification(
        self, comment_id: CommentId, preference: NotificationPreference
    ) -> None:
        """Set the notification preference of a comment."""
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(notification=int(preference))
        )
        await self._execute(stmt, "update_notification")

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment. Votes and queue entries cascade."""
        stmt = comments_table.delete().where(comments_table.c.id == comment_id)
        await self._execute(stmt, "delete_comment")
