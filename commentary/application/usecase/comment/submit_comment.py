"""Submit comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.domain.model import SubmissionInvalid
from commentary.domain.service import CommentService
from commentary.domain.value import (
    CommentForm,
    CommentId,
    FieldId,
    NotificationPreference,
    PageId,
    ThreadKey,
    UserId,
    VoterIdentity,
)


class SubmitCommentRequest(BaseModel):
    """Submit comment request."""

    page_id: int
    field_id: int
    parent_id: int = 0
    author: str = ""
    email: str = ""
    website: str | None = None
    text: str = ""
    stars: int | None = None
    notification: NotificationPreference = NotificationPreference.NONE
    user_id: int = 0
    ip: str = ""
    user_agent: str = ""


class SubmitCommentResponse(BaseModel):
    """Submit comment response.

    ``accepted`` is False when the form was rejected; ``errors`` then holds
    a message per field and nothing was stored.
    """

    accepted: bool
    comment_id: int | None = None
    status: str | None = None
    message: str | None = None
    page: int | None = None
    errors: dict[str, str] = {}


class SubmitCommentUseCase(BaseUseCase):
    """Use case for posting a comment or reply."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize submit comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: SubmitCommentRequest) -> SubmitCommentResponse:
        """Execute submit comment flow.

        Args:
            request: Form values and submitter fingerprint

        Returns:
            Accepted comment details, or the validation errors
        """
        outcome = await self.comment_service.submit_comment(
            thread=ThreadKey(
                page_id=PageId(request.page_id), field_id=FieldId(request.field_id)
            ),
            form=CommentForm(
                author=request.author,
                email=request.email,
                website=request.website,
                text=request.text,
                stars=request.stars,
                notification=request.notification,
            ),
            parent_id=CommentId(request.parent_id),
            identity=VoterIdentity(
                user_id=UserId(request.user_id),
                ip=request.ip,
                user_agent=request.user_agent,
            ),
        )

        if isinstance(outcome, SubmissionInvalid):
            return SubmitCommentResponse(accepted=False, errors=outcome.errors)

        return SubmitCommentResponse(
            accepted=True,
            comment_id=outcome.comment.id,
            status=outcome.comment.status.name.lower(),
            message=outcome.message,
            page=outcome.page,
        )
