"""Get comments use case."""

from datetime import datetime

from pydantic import BaseModel

from commentary.application.usecase.base import BaseUseCase
from commentary.domain.model import CommentNode
from commentary.domain.service import ThreadService
from commentary.domain.value import FieldId, PageId, ThreadKey

REMOVED_PLACEHOLDER = (
    "Sorry, this post has been removed by moderators for violating "
    "community guidelines."
)


class CommentItem(BaseModel):
    """Comment node in response, in flattened order.

    ``text`` holds a placeholder for comments removed as spam that are kept
    for their replies. Email addresses are never exposed.
    """

    comment_id: int
    parent_id: int
    author: str
    website: str | None
    text: str
    stars: int | None
    upvotes: int
    downvotes: int
    created_at: datetime
    depth: int
    level: int
    level_index: str
    ordinal: int
    is_first: bool
    is_last: bool
    sibling_count: int
    can_reply: bool
    is_removed: bool

    @classmethod
    def from_node(cls, node: CommentNode) -> "CommentItem":
        comment = node.comment
        return cls(
            comment_id=node.comment_id,
            parent_id=comment.parent_id,
            author=comment.author,
            website=None if node.is_removed else comment.website,
            text=REMOVED_PLACEHOLDER if node.is_removed else comment.text,
            stars=comment.stars,
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            created_at=comment.created_at,
            depth=node.depth,
            level=node.level,
            level_index=node.level_index,
            ordinal=node.ordinal,
            is_first=node.is_first,
            is_last=node.is_last,
            sibling_count=node.sibling_count,
            can_reply=node.can_reply,
            is_removed=node.is_removed,
        )


class PaginationInfo(BaseModel):
    """Pagination details ("showing X to Y of Z")."""

    page: int
    total_pages: int
    total_comments: int
    window_start: int
    window_end: int
    links: list[int | None]


class RatingInfo(BaseModel):
    """Star rating summary."""

    count: int
    average: float | None


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    page_id: int
    field_id: int
    page: int = 1


class GetCommentsResponse(BaseModel):
    """Get comments response.

    ``redirected`` is set when the requested page did not exist and page 1
    was served instead.
    """

    page_id: int
    field_id: int
    comments: list[CommentItem]
    pagination: PaginationInfo
    rating: RatingInfo
    redirected: bool = False


class GetCommentsUseCase(BaseUseCase):
    """Use case for reading one page of a thread."""

    def __init__(self, thread_service: ThreadService) -> None:
        """Initialize get comments use case.

        Args:
            thread_service: Thread domain service
        """
        self.thread_service = thread_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Thread and page number

        Returns:
            The comments of the page in flattened order, with pagination
        """
        thread = ThreadKey(
            page_id=PageId(request.page_id), field_id=FieldId(request.field_id)
        )
        page = await self.thread_service.get_page(thread, request.page)
        window = page.window

        return GetCommentsResponse(
            page_id=request.page_id,
            field_id=request.field_id,
            comments=[CommentItem.from_node(node) for node in window.items],
            pagination=PaginationInfo(
                page=window.page_number,
                total_pages=window.total_pages,
                total_comments=window.total_items,
                window_start=window.window_start,
                window_end=window.window_end,
                links=page.links,
            ),
            rating=RatingInfo(count=page.rating.count, average=page.rating.average),
            redirected=window.redirected,
        )
