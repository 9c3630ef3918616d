"""Locate comment use case."""

from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.domain.error import NotFoundError
from commentary.domain.service import LinkBuilder, ThreadService
from commentary.domain.value import CommentId


class LocateCommentRequest(BaseModel):
    """Locate comment request."""

    page_id: int
    field_id: int
    comment_id: int


class LocateCommentResponse(BaseModel):
    """Page a comment is shown on, with a link jumping to it."""

    comment_id: int
    page: int
    url: str


class LocateCommentUseCase(BaseUseCase):
    """Use case for "jump to my comment" links."""

    def __init__(self, thread_service: ThreadService, links: LinkBuilder) -> None:
        """Initialize locate comment use case.

        Args:
            thread_service: Thread domain service
            links: Link builder
        """
        self.thread_service = thread_service
        self.links = links

    async def execute(self, request: LocateCommentRequest) -> LocateCommentResponse:
        """Execute locate comment flow.

        Args:
            request: Thread and comment

        Returns:
            The page number and link

        Raises:
            NotFoundError: If the comment is not shown in this thread
        """
        comment = await self.thread_service.comment_repository.find_by_id(
            CommentId(request.comment_id)
        )
        if (
            comment is None
            or comment.page_id != request.page_id
            or comment.field_id != request.field_id
        ):
            raise NotFoundError("Comment", str(request.comment_id))

        page = await self.thread_service.locate(comment)
        if page is None:
            raise NotFoundError("Comment", str(request.comment_id))

        return LocateCommentResponse(
            comment_id=request.comment_id,
            page=page,
            url=self.links.comment(comment, page),
        )
