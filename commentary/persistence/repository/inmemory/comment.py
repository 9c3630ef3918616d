"""In-memory comment repository for testing."""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Optional

from commentary.domain.model.comment import Comment, sort_key
from commentary.domain.repository.comment import CommentRepository
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    NotificationPreference,
    RemoteCode,
    ThreadKey,
    VoteDirection,
)

from .store import InMemoryStore


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Reads yield to the event loop before returning, like a database round
    trip, so unsynchronized read-modify-write sequences can interleave.
    """

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self.store = store or InMemoryStore()

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        await asyncio.sleep(0)
        return self.store.comments.get(comment_id)

    async def find_by_code(self, code: RemoteCode) -> Optional[Comment]:
        """Find a comment by its remote link code."""
        await asyncio.sleep(0)
        for comment in self.store.comments.values():
            if comment.code == code:
                return comment
        return None

    async def find_by_thread(self, thread: ThreadKey) -> list[Comment]:
        """Find every comment of a thread."""
        await asyncio.sleep(0)
        comments = [c for c in self.store.comments.values() if c.thread == thread]
        return sorted(comments, key=sort_key)

    async def find_children(self, parent_id: CommentId) -> list[Comment]:
        """Find direct replies to a comment."""
        await asyncio.sleep(0)
        children = [
            c for c in self.store.comments.values() if c.parent_id == parent_id
        ]
        return sorted(children, key=sort_key)

    async def max_sort_index(self, thread: ThreadKey) -> int:
        """Highest insertion index of a thread, 0 if empty."""
        comments = await self.find_by_thread(thread)
        return max((c.sort_index for c in comments), default=0)

    async def has_approved_comment(self, email: str, thread: ThreadKey) -> bool:
        """Check whether an email already has a published comment in a thread."""
        wanted = email.strip().lower()
        return any(
            c.email.lower() == wanted and c.status == CommentStatus.APPROVED
            for c in await self.find_by_thread(thread)
        )

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        await asyncio.sleep(0)
        if any(c.code == comment.code for c in self.store.comments.values()):
            raise ValueError("Duplicate comment code")
        comment_id = self.store.next_comment_id()
        saved = comment.model_copy(update={"id": comment_id})
        self.store.comments[comment_id] = saved
        return saved

    @asynccontextmanager
    async def lock(self, comment_id: CommentId) -> AsyncIterator[Optional[Comment]]:
        """Hold the per-comment asyncio lock."""
        async with self.store.locks[comment_id]:
            yield await self.find_by_id(comment_id)

    async def increment_votes(
        self, comment_id: CommentId, direction: VoteDirection
    ) -> int:
        """Increment the up- or downvote counter.

        Read and write are separate steps, callers serialize through
        ``lock``.
        """
        comment = await self.find_by_id(comment_id)
        if comment is None:
            raise KeyError(comment_id)
        field = "upvotes" if direction == VoteDirection.UP else "downvotes"
        tally = getattr(comment, field) + 1
        await asyncio.sleep(0)
        current = self.store.comments[comment_id]
        self.store.comments[comment_id] = current.model_copy(update={field: tally})
        return tally

    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        spam_marked_at: Optional[datetime],
        mark_remote_change_used: bool = False,
    ) -> Comment:
        """Set the moderation status."""
        comment = self.store.comments[comment_id]
        update: dict = {"status": status, "spam_marked_at": spam_marked_at}
        if mark_remote_change_used:
            update["remote_change_used"] = True
        updated = comment.model_copy(update=update)
        self.store.comments[comment_id] = updated
        return updated

    async def update_notification(
        self, comment_id: CommentId, preference: NotificationPreference
    ) -> None:
        """Set the notification preference of a comment."""
        comment = self.store.comments[comment_id]
        self.store.comments[comment_id] = comment.model_copy(
            update={"notification": preference}
        )

    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment with its votes and queue entries."""
        self.store.delete_comment(comment_id)
