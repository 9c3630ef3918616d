"""Set status use case."""

from typing import Literal

from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.domain.service import ModerationService
from commentary.domain.value import CommentId, CommentStatus


class SetStatusRequest(BaseModel):
    """Backend moderation request."""

    comment_id: int
    status: Literal["approved", "spam"]


class SetStatusResponse(BaseModel):
    """Backend moderation response.

    ``new_status`` is ``spam_with_replies`` when a spam verdict hit a
    comment with live replies.
    """

    comment_id: int
    old_status: str
    new_status: str
    mail_sent: bool
    page: int | None = None


class SetStatusUseCase(BaseUseCase):
    """Use case for moderating a comment from the backend."""

    def __init__(self, moderation_service: ModerationService) -> None:
        """Initialize set status use case.

        Args:
            moderation_service: Moderation domain service
        """
        self.moderation_service = moderation_service

    async def execute(self, request: SetStatusRequest) -> SetStatusResponse:
        """Execute the status change.

        Args:
            request: Comment and verdict

        Returns:
            The applied transition

        Raises:
            NotFoundError: If the comment does not exist
        """
        desired = (
            CommentStatus.APPROVED
            if request.status == "approved"
            else CommentStatus.SPAM
        )
        changed = await self.moderation_service.set_status(
            CommentId(request.comment_id), desired
        )
        return SetStatusResponse(
            comment_id=changed.comment_id,
            old_status=changed.old_status.name.lower(),
            new_status=changed.new_status.name.lower(),
            mail_sent=changed.mail_sent,
            page=changed.page,
        )
