"""Remote link use case.

A remote link carries a comment ``code`` and exactly one action: either
``status`` (approve / spam, single use) or ``notification=0``
(unsubscribe, idempotent).
"""

from typing import Literal

from pydantic import BaseModel, model_validator

from commentary.application.usecase.base import BaseUseCase
from commentary.domain.model import NotificationsCancelled, RemoteLinkRejected
from commentary.domain.service import ModerationService, NotificationService
from commentary.domain.value import CommentStatus, NotificationPreference


class RemoteActionRequest(BaseModel):
    """Remote link parameters."""

    code: str
    status: str | None = None
    notification: str | None = None

    @model_validator(mode="after")
    def check_single_action(self) -> "RemoteActionRequest":
        """Exactly one of ``status`` and ``notification`` must be given."""
        if (self.status is None) == (self.notification is None):
            raise ValueError("Exactly one of status or notification is required")
        if self.notification is not None and self.notification.strip() != str(
            int(NotificationPreference.NONE)
        ):
            raise ValueError("Only notification=0 (unsubscribe) is supported")
        return self


class RemoteActionResponse(BaseModel):
    """Remote link outcome, with the message shown to the user."""

    action: Literal["status", "unsubscribe"]
    success: bool
    message: str
    reason: str | None = None
    comment_id: int | None = None
    old_status: str | None = None
    new_status: str | None = None
    mail_sent: bool = False
    page: int | None = None
    already_cancelled: bool = False


class RemoteActionUseCase(BaseUseCase):
    """Use case for links clicked in moderator and notification mails."""

    def __init__(
        self,
        moderation_service: ModerationService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize remote action use case.

        Args:
            moderation_service: Moderation domain service
            notification_service: Notification domain service
        """
        self.moderation_service = moderation_service
        self.notification_service = notification_service

    async def execute(self, request: RemoteActionRequest) -> RemoteActionResponse:
        """Execute the action carried by a remote link.

        Args:
            request: Validated link parameters

        Returns:
            Outcome of the action; rejections are reported, not raised
        """
        if request.status is None:
            return await self._unsubscribe(request.code)

        outcome = await self.moderation_service.apply_remote_status_change(
            request.code, CommentStatus.parse_remote(request.status)
        )
        if isinstance(outcome, RemoteLinkRejected):
            return self._rejected("status", outcome)

        return RemoteActionResponse(
            action="status",
            success=True,
            message=outcome.message,
            comment_id=outcome.comment_id,
            old_status=outcome.old_status.name.lower(),
            new_status=outcome.new_status.name.lower(),
            mail_sent=outcome.mail_sent,
            page=outcome.page,
        )

    async def _unsubscribe(self, code: str) -> RemoteActionResponse:
        cancel = await self.notification_service.cancel_notifications(code)
        if isinstance(cancel, NotificationsCancelled):
            return RemoteActionResponse(
                action="unsubscribe",
                success=True,
                message=cancel.message,
                comment_id=cancel.comment_id,
                already_cancelled=cancel.already_cancelled,
            )
        return self._rejected("unsubscribe", cancel)

    @staticmethod
    def _rejected(
        action: Literal["status", "unsubscribe"], rejection: RemoteLinkRejected
    ) -> RemoteActionResponse:
        return RemoteActionResponse(
            action=action,
            success=False,
            message=rejection.message,
            reason=rejection.reason.value,
        )
