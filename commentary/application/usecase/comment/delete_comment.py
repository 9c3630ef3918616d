"""Delete comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.domain.model import DeletionResult
from commentary.domain.service import CommentService
from commentary.domain.value import CommentId


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: int


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: int
    result: DeletionResult


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment from the moderation backend."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete flow.

        Args:
            request: Comment to delete

        Returns:
            DELETED, NOT_FOUND or REFUSED_HAS_REPLIES
        """
        result = await self.comment_service.delete_comment(
            CommentId(request.comment_id)
        )
        return DeleteCommentResponse(comment_id=request.comment_id, result=result)
