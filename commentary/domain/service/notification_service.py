"""Notification domain service."""

from typing import Optional

import logfire
from pydantic import ValidationError

from commentary.config import CommentSettings, NotificationMode
from commentary.domain.error import PersistenceError
from commentary.domain.model.comment import Comment, sort_key
from commentary.domain.model.notification import NotificationQueueEntry
from commentary.domain.model.outcome import (
    CancelOutcome,
    DispatchReport,
    NotificationsCancelled,
    RemoteLinkRejected,
    RemoteLinkRejection,
)
from commentary.domain.repository import CommentRepository, NotificationQueueRepository
from commentary.domain.value import (
    ROOT_PARENT_ID,
    CommentId,
    CommentStatus,
    NotificationPreference,
    RemoteCode,
)

from . import mail_templates
from .base import Service
from .clock import Clock
from .links import LinkBuilder
from .mail import MailDeliveryError, MailMessage, MailSender
from .thread_service import ThreadService


def parse_code(code: str) -> Optional[RemoteCode]:
    """Parse a remote link code, None if it cannot be a valid code."""
    try:
        return RemoteCode(root=code)
    except ValidationError:
        return None


def _normalize(email: str) -> str:
    return email.strip().lower()


class NotificationService(Service):
    """Domain service for reply notifications and moderation mails.

    Reply notifications go through the queue and are sent by
    ``dispatch_pending``. Moderator and status-change mails are sent
    directly; a failed send is logged and never undoes the operation that
    triggered it.
    """

    def __init__(
        self,
        comment_repository: CommentRepository,
        queue_repository: NotificationQueueRepository,
        mail_sender: MailSender,
        thread_service: ThreadService,
        links: LinkBuilder,
        settings: CommentSettings,
        clock: Clock,
    ) -> None:
        """Initialize notification service.

        Args:
            comment_repository: Comment repository
            queue_repository: Notification queue repository
            mail_sender: Outgoing mail
            thread_service: Thread service, used for page links
            links: Link builder for mail links
            settings: Comment thread configuration
            clock: Time source
        """
        self.comment_repository = comment_repository
        self.queue_repository = queue_repository
        self.mail_sender = mail_sender
        self.thread_service = thread_service
        self.links = links
        self.settings = settings
        self.clock = clock

    async def enqueue_for_new_comment(self, comment: Comment) -> set[str]:
        """Queue reply notifications for a published comment.

        Recipients are the commenters of the thread subscribed to every new
        comment, plus the author of the direct parent when subscribed to
        replies. The author never gets notified about their own comment.

        Args:
            comment: The stored, published comment

        Returns:
            The recipients queued by this call
        """
        mode = self.settings.notification_mode
        if mode == NotificationMode.OFF or comment.id is None:
            return set()

        with logfire.span(
            "notification_service.enqueue_for_new_comment",
            comment_id=comment.id,
        ):
            candidates: dict[str, str] = {}

            if mode == NotificationMode.REPLIES_AND_ALL:
                for other in await self.comment_repository.find_by_thread(
                    comment.thread
                ):
                    if other.id == comment.id or other.status == CommentStatus.SPAM:
                        continue
                    if other.notification == NotificationPreference.ON_ALL:
                        candidates.setdefault(_normalize(other.email), other.email)

            if not comment.is_top_level:
                parent = await self.comment_repository.find_by_id(comment.parent_id)
                if (
                    parent is not None
                    and parent.status != CommentStatus.SPAM
                    and parent.notification == NotificationPreference.ON_REPLIES
                ):
                    candidates.setdefault(_normalize(parent.email), parent.email)

            candidates.pop(_normalize(comment.email), None)

            already_queued = await self.queue_repository.find_recipients(comment.id)
            recipients = {
                key: email
                for key, email in candidates.items()
                if key not in already_queued
            }

            if not recipients:
                return set()

            now = self.clock.now()
            await self.queue_repository.add_many(
                [
                    NotificationQueueEntry(
                        parent_comment_id=comment.parent_id,
                        triggering_comment_id=comment.id,
                        recipient_email=email,
                        page_id=comment.page_id,
                        field_id=comment.field_id,
                        created_at=now,
                    )
                    for email in recipients.values()
                ]
            )
            logfire.info(
                "Reply notifications queued",
                comment_id=comment.id,
                recipients=len(recipients),
            )
            return set(recipients.values())

    async def cancel_notifications(self, code: str) -> CancelOutcome:
        """Turn notifications off for the comment owning a code.

        Repeating the cancellation is harmless and reported as such.

        Args:
            code: Remote link code

        Returns:
            NotificationsCancelled, or RemoteLinkRejected for unknown codes
        """
        with logfire.span("notification_service.cancel_notifications"):
            parsed = parse_code(code)
            comment = (
                await self.comment_repository.find_by_code(parsed) if parsed else None
            )
            if comment is None or comment.id is None:
                logfire.warn("Unsubscribe with unknown code")
                return RemoteLinkRejected(reason=RemoteLinkRejection.UNKNOWN_CODE)

            if comment.notification == NotificationPreference.NONE:
                return NotificationsCancelled(
                    comment_id=comment.id, already_cancelled=True
                )

            await self.comment_repository.update_notification(
                comment.id, NotificationPreference.NONE
            )
            logfire.info("Notifications cancelled", comment_id=comment.id)
            return NotificationsCancelled(comment_id=comment.id)

    async def on_status_change(
        self, comment: Comment, old: CommentStatus, new: CommentStatus
    ) -> None:
        """Keep the queue in sync with a moderation transition.

        Publishing a comment that was not shown before queues its
        notifications. Marking it as spam drops everything it triggered.

        Args:
            comment: The comment after the transition
            old: Status before the transition
            new: Status after the transition
        """
        if comment.id is None:
            return
        if new == CommentStatus.APPROVED and not old.is_displayable:
            await self.enqueue_for_new_comment(comment)
        elif new.is_spam:
            dropped = await self.queue_repository.delete_by_triggering_comment(
                comment.id
            )
            if dropped:
                logfire.info(
                    "Queued notifications dropped",
                    comment_id=comment.id,
                    dropped=dropped,
                )

    async def dispatch_pending(self, limit: int = 100) -> DispatchReport:
        """Send queued reply notifications.

        Entries are deleted only after their mail went out. Failed sends
        stay queued for the next run. Entries whose comment is no longer
        shown, or whose recipient unsubscribed meanwhile, are dropped.

        Args:
            limit: Maximum number of entries handled in this run

        Returns:
            Counts of sent, failed and dropped entries
        """
        with logfire.span("notification_service.dispatch_pending", limit=limit):
            entries = await self.queue_repository.find_pending(limit)
            sent = failed = skipped = 0
            pages: dict[CommentId, Optional[int]] = {}

            for entry in entries:
                if entry.id is None:
                    raise PersistenceError("find_pending")
                comment = await self.comment_repository.find_by_id(
                    entry.triggering_comment_id
                )
                subscription = (
                    await self._subscription_for(entry, comment)
                    if comment is not None and comment.is_displayable
                    else None
                )
                if comment is None or subscription is None:
                    await self.queue_repository.delete(entry.id)
                    skipped += 1
                    continue

                if entry.triggering_comment_id not in pages:
                    pages[entry.triggering_comment_id] = (
                        await self.thread_service.locate(comment)
                    )

                message = mail_templates.reply_notification(
                    comment,
                    entry.recipient_email,
                    comment_url=self.links.comment(
                        comment, pages[entry.triggering_comment_id]
                    ),
                    unsubscribe_url=self.links.unsubscribe(subscription),
                )
                if await self._send(message, "reply", comment.id):
                    await self.queue_repository.delete(entry.id)
                    sent += 1
                else:
                    failed += 1

            logfire.info(
                "Notification queue drained",
                sent=sent,
                failed=failed,
                skipped=skipped,
            )
            return DispatchReport(sent=sent, failed=failed, skipped=skipped)

    async def notify_moderators(self, comment: Comment) -> bool:
        """Mail the moderators about a new submission.

        Pending comments get a "publish" link, every comment a "mark as
        spam" link.

        Args:
            comment: The stored comment

        Returns:
            True if the mail was sent
        """
        recipients = self.settings.moderator_emails
        if not recipients:
            logfire.warn("No moderator email configured", comment_id=comment.id)
            return False

        publish_url = (
            self.links.remote_status(comment, CommentStatus.APPROVED)
            if comment.status == CommentStatus.PENDING_APPROVAL
            else None
        )
        message = mail_templates.new_comment_for_moderators(
            comment,
            recipients=list(recipients),
            publish_url=publish_url,
            spam_url=self.links.remote_status(comment, CommentStatus.SPAM),
        )
        return await self._send(message, "moderator", comment.id)

    async def notify_status_change(
        self, comment: Comment, page: Optional[int] = None
    ) -> bool:
        """Mail the commenter that a moderator reviewed their comment.

        Only sent for the statuses listed in ``status_change_notification``.

        Args:
            comment: The comment after the transition
            page: Page the comment is shown on, for the link in approvals

        Returns:
            True if the mail was sent
        """
        if comment.status == CommentStatus.APPROVED:
            wanted = "approved" in self.settings.status_change_notification
            url: Optional[str] = self.links.comment(comment, page)
        elif comment.status.is_spam:
            wanted = "spam" in self.settings.status_change_notification
            url = None
        else:
            wanted = False
            url = None

        if not wanted:
            return False
        return await self._send(
            mail_templates.status_change(comment, url), "status_change", comment.id
        )

    async def _subscription_for(
        self, entry: NotificationQueueEntry, comment: Comment
    ) -> Optional[Comment]:
        """The recipient's comment whose subscription produced an entry.

        Its code goes into the unsubscribe link. None when the recipient
        has unsubscribed since the entry was queued.
        """
        recipient = _normalize(entry.recipient_email)

        if entry.parent_comment_id != ROOT_PARENT_ID:
            parent = await self.comment_repository.find_by_id(entry.parent_comment_id)
            if (
                parent is not None
                and _normalize(parent.email) == recipient
                and parent.notification == NotificationPreference.ON_REPLIES
            ):
                return parent

        subscribed = [
            other
            for other in await self.comment_repository.find_by_thread(comment.thread)
            if _normalize(other.email) == recipient
            and other.notification == NotificationPreference.ON_ALL
            and other.status != CommentStatus.SPAM
        ]
        if not subscribed:
            return None
        return max(subscribed, key=sort_key)

    async def _send(
        self, message: MailMessage, kind: str, comment_id: Optional[CommentId]
    ) -> bool:
        try:
            await self.mail_sender.send(message)
        except MailDeliveryError as e:
            logfire.error(
                "Failed to send mail",
                kind=kind,
                comment_id=comment_id,
                error=str(e),
            )
            return False
        logfire.info(
            "Mail sent",
            kind=kind,
            comment_id=comment_id,
            recipients=len(message.recipients),
        )
        return True
