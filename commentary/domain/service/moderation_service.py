"""Moderation domain service.

Status transitions:

    new submission -> APPROVED | PENDING_APPROVAL   (moderation mode)
    any            -> APPROVED                      (moderator)
    any            -> SPAM | SPAM_WITH_REPLIES      (moderator)

A spam verdict on a comment with live replies is stored as
SPAM_WITH_REPLIES so the replies stay reachable in the tree. Spam
ancestors follow their replies: they are promoted when a reply goes live
and demoted again once their last live reply is gone.
"""

from typing import Optional

import logfire

from commentary.config import CommentSettings, ModerationMode
from commentary.domain.error import NotFoundError
from commentary.domain.model.comment import Comment
from commentary.domain.model.outcome import (
    RemoteLinkRejected,
    RemoteLinkRejection,
    StatusChanged,
    StatusChangeOutcome,
)
from commentary.domain.repository import CommentRepository
from commentary.domain.value import (
    MODERATION_TARGETS,
    CommentId,
    CommentStatus,
    ThreadKey,
)

from .base import Service
from .clock import Clock
from .notification_service import NotificationService, parse_code
from .thread_service import ThreadService

# Replies that keep a spam comment in the tree
_LIVE_REPLY_STATUSES = frozenset(
    {
        CommentStatus.APPROVED,
        CommentStatus.PENDING_APPROVAL,
        CommentStatus.SPAM_WITH_REPLIES,
    }
)


class ModerationService(Service):
    """Domain service for comment status transitions."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        notification_service: NotificationService,
        thread_service: ThreadService,
        settings: CommentSettings,
        clock: Clock,
    ) -> None:
        """Initialize moderation service.

        Args:
            comment_repository: Comment repository
            notification_service: Notification service, for queue sync and
                status-change mails
            thread_service: Thread service, for the page of approved comments
            settings: Comment thread configuration
            clock: Time source
        """
        self.comment_repository = comment_repository
        self.notification_service = notification_service
        self.thread_service = thread_service
        self.settings = settings
        self.clock = clock

    async def initial_status(self, email: str, thread: ThreadKey) -> CommentStatus:
        """Status of a new submission.

        Args:
            email: Commenter email
            thread: The thread the comment is posted to

        Returns:
            APPROVED or PENDING_APPROVAL depending on the moderation mode
        """
        mode = self.settings.moderation
        if mode == ModerationMode.NONE:
            return CommentStatus.APPROVED
        if mode == ModerationMode.NEW_COMMENTERS_ONLY:
            if await self.comment_repository.has_approved_comment(email, thread):
                return CommentStatus.APPROVED
        return CommentStatus.PENDING_APPROVAL

    async def resolve_target_status(
        self, comment: Comment, desired: CommentStatus
    ) -> CommentStatus:
        """Status actually stored for a moderator's verdict.

        Args:
            comment: The moderated comment
            desired: APPROVED or SPAM

        Returns:
            ``desired``, or SPAM_WITH_REPLIES for spam with live replies
        """
        if desired != CommentStatus.SPAM or comment.id is None:
            return desired
        children = await self.comment_repository.find_children(comment.id)
        if any(child.status in _LIVE_REPLY_STATUSES for child in children):
            return CommentStatus.SPAM_WITH_REPLIES
        return CommentStatus.SPAM

    async def apply_remote_status_change(
        self, code: str, desired: Optional[CommentStatus]
    ) -> StatusChangeOutcome:
        """Apply a one-shot status link from a moderator mail.

        Args:
            code: Remote link code
            desired: Requested status, None when the link value was not
                understood

        Returns:
            StatusChanged, or RemoteLinkRejected when the code is unknown,
            the status is not a moderation target, or the link was used
        """
        with logfire.span("moderation_service.apply_remote_status_change"):
            parsed = parse_code(code)
            comment = (
                await self.comment_repository.find_by_code(parsed) if parsed else None
            )
            if comment is None or comment.id is None:
                logfire.warn("Remote status change with unknown code")
                return RemoteLinkRejected(reason=RemoteLinkRejection.UNKNOWN_CODE)

            if desired is None or desired not in MODERATION_TARGETS:
                logfire.warn(
                    "Remote status change with invalid status",
                    comment_id=comment.id,
                    desired=str(desired),
                )
                return RemoteLinkRejected(reason=RemoteLinkRejection.INVALID_STATUS)

            async with self.comment_repository.lock(comment.id) as locked:
                if locked is None:
                    return RemoteLinkRejected(reason=RemoteLinkRejection.UNKNOWN_CODE)
                if locked.remote_change_used:
                    logfire.info(
                        "Remote status link already used", comment_id=comment.id
                    )
                    return RemoteLinkRejected(reason=RemoteLinkRejection.ALREADY_USED)
                return await self._transition(
                    comment.id, locked, desired, remote=True
                )

    async def set_status(
        self, comment_id: CommentId, desired: CommentStatus
    ) -> StatusChanged:
        """Set a status from the moderation backend.

        Unlike remote links this path may be used any number of times and
        neither checks nor sets ``remote_change_used``.

        Args:
            comment_id: Comment ID
            desired: APPROVED or SPAM

        Returns:
            The applied transition

        Raises:
            NotFoundError: If the comment does not exist
            ValueError: If the status is not a moderation target
        """
        with logfire.span(
            "moderation_service.set_status",
            comment_id=comment_id,
            desired=desired.name,
        ):
            if desired not in MODERATION_TARGETS:
                raise ValueError(f"Cannot set status {desired.name} by moderation")

            async with self.comment_repository.lock(comment_id) as comment:
                if comment is None:
                    logfire.warn("Moderation of unknown comment", comment_id=comment_id)
                    raise NotFoundError("Comment", str(comment_id))
                return await self._transition(
                    comment_id, comment, desired, remote=False
                )

    async def sync_ancestors(self, comment: Comment) -> None:
        """Bring the spam ancestors of a comment in line with their replies.

        A spam comment is SPAM_WITH_REPLIES exactly while it has live
        replies. After ``comment`` changed status or was deleted, its parent
        may have gained or lost its last live reply. The walk goes up the
        tree, locking one ancestor at a time, and stops at the first one
        that needs no change. These changes send no mails.

        Args:
            comment: The comment whose status changed, or that was deleted
        """
        current = comment
        while not current.is_top_level:
            parent_id = current.parent_id
            async with self.comment_repository.lock(parent_id) as parent:
                if parent is None or not parent.status.is_spam:
                    return
                target = await self.resolve_target_status(
                    parent, CommentStatus.SPAM
                )
                if target == parent.status:
                    return
                current = await self.comment_repository.update_status(
                    parent_id,
                    target,
                    spam_marked_at=parent.spam_marked_at or self.clock.now(),
                )
                logfire.info(
                    "Spam status follows replies",
                    comment_id=parent_id,
                    old_status=parent.status.name,
                    new_status=target.name,
                )

    async def _transition(
        self,
        comment_id: CommentId,
        comment: Comment,
        desired: CommentStatus,
        remote: bool,
    ) -> StatusChanged:
        target = await self.resolve_target_status(comment, desired)
        now = self.clock.now()

        updated = await self.comment_repository.update_status(
            comment_id,
            target,
            spam_marked_at=now if target.is_spam else None,
            mark_remote_change_used=remote,
        )
        logfire.info(
            "Comment status changed",
            comment_id=comment_id,
            old_status=comment.status.name,
            new_status=target.name,
            remote=remote,
        )

        await self.notification_service.on_status_change(
            updated, comment.status, target
        )
        await self.sync_ancestors(updated)

        page = (
            await self.thread_service.locate(updated)
            if target == CommentStatus.APPROVED
            else None
        )
        mail_sent = False
        if target != comment.status:
            mail_sent = await self.notification_service.notify_status_change(
                updated, page
            )

        return StatusChanged(
            comment_id=comment_id,
            old_status=comment.status,
            new_status=target,
            mail_sent=mail_sent,
            page=page,
        )
