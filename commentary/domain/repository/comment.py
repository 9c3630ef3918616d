"""Comment repository interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import List, Optional

from commentary.domain.model.comment import Comment
from commentary.domain.value import (
    CommentId,
    CommentStatus,
    NotificationPreference,
    RemoteCode,
    ThreadKey,
    VoteDirection,
)


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_code(self, code: RemoteCode) -> Optional[Comment]:
        """Find a comment by its remote link code.

        Args:
            code: The capability token carried in remote links

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_thread(self, thread: ThreadKey) -> List[Comment]:
        """Find every comment of a thread, whatever its status.

        Args:
            thread: The (page, field) thread instance

        Returns:
            Comments ordered by (sort_index, id)
        """
        pass

    @abstractmethod
    async def find_children(self, parent_id: CommentId) -> List[Comment]:
        """Find direct replies to a comment, whatever their status.

        Args:
            parent_id: The parent comment ID

        Returns:
            Replies ordered by (sort_index, id)
        """
        pass

    @abstractmethod
    async def max_sort_index(self, thread: ThreadKey) -> int:
        """Highest insertion index used in a thread.

        Deletions leave gaps, so this can exceed the number of comments.

        Args:
            thread: The thread instance

        Returns:
            The largest ``sort_index`` of the thread, 0 if it is empty
        """
        pass

    @abstractmethod
    async def has_approved_comment(self, email: str, thread: ThreadKey) -> bool:
        """Check whether an email already has a published comment in a thread.

        Emails are compared case-insensitively.

        Args:
            email: Commenter email
            thread: The thread instance

        Returns:
            True if an APPROVED comment by this email exists
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a new comment.

        Args:
            comment: The comment to store, without id

        Returns:
            The stored comment with its id assigned
        """
        pass

    @abstractmethod
    def lock(
        self, comment_id: CommentId
    ) -> AbstractAsyncContextManager[Optional[Comment]]:
        """Hold an exclusive per-comment lock.

        Counter and status updates for one comment are serialized through
        this lock. The context manager yields the current state of the
        comment, or None if it does not exist.

        Args:
            comment_id: The comment to lock
        """
        pass

    @abstractmethod
    async def increment_votes(
        self, comment_id: CommentId, direction: VoteDirection
    ) -> int:
        """Atomically increment the up- or downvote counter.

        Args:
            comment_id: The comment ID
            direction: Which counter to increment

        Returns:
            The new value of the incremented counter
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        spam_marked_at: Optional[datetime],
        mark_remote_change_used: bool = False,
    ) -> Comment:
        """Set the moderation status in a single write.

        Args:
            comment_id: The comment ID
            status: The status to store
            spam_marked_at: Spam timestamp, None unless status is SPAM
            mark_remote_change_used: Also flip the one-shot remote flag

        Returns:
            The updated comment
        """
        pass

    @abstractmethod
    async def update_notification(
        self, comment_id: CommentId, preference: NotificationPreference
    ) -> None:
        """Set the notification preference of a comment.

        Args:
            comment_id: The comment ID
            preference: The new preference
        """
        pass

    @abstractmethod
    async def delete(self, comment_id: CommentId) -> None:
        """Delete a comment together with its votes and queue entries.

        Args:
            comment_id: The comment ID to delete
        """
        pass
