"""Comment domain service."""

import re
from typing import Optional

import logfire

from commentary.config import CommentSettings, NotificationMode, StarRatingMode
from commentary.domain.error import PersistenceError
from commentary.domain.model.comment import Comment
from commentary.domain.model.outcome import (
    DeletionResult,
    SubmissionAccepted,
    SubmissionInvalid,
    SubmissionOutcome,
)
from commentary.domain.repository import CommentRepository
from commentary.domain.value import (
    ROOT_PARENT_ID,
    CommentForm,
    CommentId,
    CommentStatus,
    NotificationPreference,
    RemoteCode,
    ThreadKey,
    VoterIdentity,
)

from .base import Service
from .clock import Clock
from .moderation_service import ModerationService
from .notification_service import NotificationService
from .thread_service import ThreadService

AUTHOR_MAX_LENGTH = 128
EMAIL_MAX_LENGTH = 255
WEBSITE_MAX_LENGTH = 255
TEXT_MAX_LENGTH = 1024

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)
_HTML_TAG_PATTERN = re.compile(r"<\s*/?\s*[a-zA-Z!][^>]*>")

MESSAGE_PUBLISHED = "Thank you for your comment!"
MESSAGE_PENDING = (
    "Thank you for your comment. Please be patient. Your comment has been "
    "submitted successfully and is waiting for approval."
)


class CommentService(Service):
    """Domain service for submitting and deleting comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        moderation_service: ModerationService,
        notification_service: NotificationService,
        thread_service: ThreadService,
        settings: CommentSettings,
        clock: Clock,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            moderation_service: Moderation service, for the initial status
            notification_service: Notification service
            thread_service: Thread service, for the page of new comments
            settings: Comment thread configuration
            clock: Time source
        """
        self.comment_repository = comment_repository
        self.moderation_service = moderation_service
        self.notification_service = notification_service
        self.thread_service = thread_service
        self.settings = settings
        self.clock = clock

    async def get_comment_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        return await self.comment_repository.find_by_id(comment_id)

    async def submit_comment(
        self,
        thread: ThreadKey,
        form: CommentForm,
        parent_id: CommentId,
        identity: VoterIdentity,
    ) -> SubmissionOutcome:
        """Validate and store a new comment or reply.

        Moderators are mailed about every accepted submission. Reply
        notifications are queued right away when the comment is published
        without moderation.

        Args:
            thread: The thread posted to
            form: Submitted form values
            parent_id: Comment replied to, 0 for a top-level comment
            identity: Submitter fingerprint

        Returns:
            SubmissionAccepted, or SubmissionInvalid with errors per field
        """
        with logfire.span(
            "comment_service.submit_comment",
            page_id=thread.page_id,
            field_id=thread.field_id,
            parent_id=parent_id,
        ):
            errors = await self.validate(thread, form, parent_id)
            if errors:
                logfire.info(
                    "Comment submission rejected",
                    page_id=thread.page_id,
                    fields=sorted(errors),
                )
                return SubmissionInvalid(errors=errors)

            email = form.email.strip()
            status = await self.moderation_service.initial_status(email, thread)
            sort_index = await self.comment_repository.max_sort_index(thread) + 1
            stars = (
                None if self.settings.star_rating == StarRatingMode.OFF else form.stars
            )

            comment = await self.comment_repository.save(
                Comment(
                    parent_id=parent_id,
                    page_id=thread.page_id,
                    field_id=thread.field_id,
                    author=form.author.strip(),
                    email=email,
                    website=(form.website or "").strip() or None,
                    text=form.text.strip(),
                    stars=stars,
                    status=status,
                    notification=form.notification,
                    created_at=self.clock.now(),
                    sort_index=sort_index,
                    code=RemoteCode.generate(),
                    user_id=identity.user_id,
                    ip=identity.ip,
                    user_agent=identity.user_agent,
                )
            )
            if comment.id is None:
                raise PersistenceError("insert_comment")
            logfire.info(
                "Comment submitted",
                comment_id=comment.id,
                status=status.name,
                parent_id=parent_id,
            )

            await self.notification_service.notify_moderators(comment)

            page = None
            if status == CommentStatus.APPROVED:
                await self.notification_service.enqueue_for_new_comment(comment)
                page = await self.thread_service.locate(comment)
                message = MESSAGE_PUBLISHED
            else:
                message = MESSAGE_PENDING

            return SubmissionAccepted(comment=comment, message=message, page=page)

    async def validate(
        self, thread: ThreadKey, form: CommentForm, parent_id: CommentId
    ) -> dict[str, str]:
        """Check a form against the thread configuration.

        Args:
            thread: The thread posted to
            form: Submitted form values
            parent_id: Comment replied to, 0 for a top-level comment

        Returns:
            Error message per field, empty when the form is valid
        """
        errors: dict[str, str] = {}

        author = form.author.strip()
        if not author:
            errors["author"] = "Please enter your name."
        elif len(author) > AUTHOR_MAX_LENGTH:
            errors["author"] = f"Name must be at most {AUTHOR_MAX_LENGTH} characters."

        email = form.email.strip()
        if not email:
            errors["email"] = "Please enter your email address."
        elif len(email) > EMAIL_MAX_LENGTH:
            errors["email"] = f"Email must be at most {EMAIL_MAX_LENGTH} characters."
        elif not _EMAIL_PATTERN.match(email):
            errors["email"] = "Please enter a valid email address."

        website = (form.website or "").strip()
        if website:
            if len(website) > WEBSITE_MAX_LENGTH:
                errors["website"] = (
                    f"Website must be at most {WEBSITE_MAX_LENGTH} characters."
                )
            elif not _URL_PATTERN.match(website):
                errors["website"] = "Please enter a valid URL."

        text = form.text.strip()
        if not text:
            errors["text"] = "Please enter a comment."
        elif len(text) > TEXT_MAX_LENGTH:
            errors["text"] = f"Comment must be at most {TEXT_MAX_LENGTH} characters."
        elif _HTML_TAG_PATTERN.search(text):
            errors["text"] = "HTML is not allowed."

        star_mode = self.settings.star_rating
        if form.stars is None:
            if star_mode == StarRatingMode.REQUIRED:
                errors["stars"] = "Please select a rating."
        elif star_mode == StarRatingMode.OFF:
            errors["stars"] = "Star rating is disabled."
        elif not 1 <= form.stars <= 5:
            errors["stars"] = "Rating must be between 1 and 5."

        depth = 0
        if parent_id != ROOT_PARENT_ID:
            parent = await self.comment_repository.find_by_id(parent_id)
            if (
                parent is None
                or parent.thread != thread
                or not parent.is_displayable
            ):
                errors["parent_id"] = "The comment you are replying to was not found."
            else:
                depth = await self._depth_of(parent) + 1

        if form.notification not in self._allowed_notifications(depth):
            errors["notification"] = "This notification option is not available."

        return errors

    async def delete_comment(self, comment_id: CommentId) -> DeletionResult:
        """Delete a comment that has no replies.

        Votes and queued notifications go with it. A spam parent left
        without live replies falls back to plain SPAM.

        Args:
            comment_id: Comment ID

        Returns:
            DELETED, NOT_FOUND, or REFUSED_HAS_REPLIES when replies exist
        """
        with logfire.span("comment_service.delete_comment", comment_id=comment_id):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment is None:
                return DeletionResult.NOT_FOUND

            if await self.comment_repository.find_children(comment_id):
                logfire.info("Deletion refused, comment has replies", comment_id=comment_id)
                return DeletionResult.REFUSED_HAS_REPLIES

            await self.comment_repository.delete(comment_id)
            logfire.info("Comment deleted", comment_id=comment_id)
            await self.moderation_service.sync_ancestors(comment)
            return DeletionResult.DELETED

    def _allowed_notifications(self, depth: int) -> set[NotificationPreference]:
        mode = self.settings.notification_mode
        allowed = {NotificationPreference.NONE}
        if mode == NotificationMode.OFF:
            return allowed
        # Replies are only offered above the reply cut-off
        if depth < self.settings.max_reply_depth:
            allowed.add(NotificationPreference.ON_REPLIES)
        if mode == NotificationMode.REPLIES_AND_ALL:
            allowed.add(NotificationPreference.ON_ALL)
        return allowed

    async def _depth_of(self, comment: Comment) -> int:
        depth = 0
        current = comment
        while not current.is_top_level:
            parent = await self.comment_repository.find_by_id(current.parent_id)
            if parent is None:
                break
            depth += 1
            current = parent
        return depth
