"""Read side of comment threads."""

from typing import Iterable, Optional

import logfire

from commentary.config import CommentSettings
from commentary.domain.model.comment import Comment
from commentary.domain.model.page import RatingSummary, ThreadPage
from commentary.domain.model.tree import OrderedForest
from commentary.domain.repository import CommentRepository
from commentary.domain.value import CommentId, CommentStatus, ThreadKey

from . import pagination
from .base import Service
from .tree_builder import CommentTreeBuilder


class ThreadService(Service):
    """Domain service for rendering threads and locating comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        tree_builder: CommentTreeBuilder,
        settings: CommentSettings,
    ) -> None:
        """Initialize thread service.

        Args:
            comment_repository: Comment repository
            tree_builder: Tree builder
            settings: Comment thread configuration
        """
        self.comment_repository = comment_repository
        self.tree_builder = tree_builder
        self.settings = settings

    async def get_forest(self, thread: ThreadKey) -> OrderedForest:
        """Build the reader-facing forest of a thread.

        Args:
            thread: The thread instance

        Returns:
            Ordered forest of published comments
        """
        comments = await self.comment_repository.find_by_thread(thread)
        return self.tree_builder.build(
            comments,
            max_depth=self.settings.max_reply_depth,
            sort_descending=self.settings.sort_descending,
        )

    async def get_page(self, thread: ThreadKey, page_number: int = 1) -> ThreadPage:
        """Render one page of a thread.

        Args:
            thread: The thread instance
            page_number: Requested page, out of range yields page 1 with
                ``window.redirected`` set

        Returns:
            The page with navigation and rating summary
        """
        with logfire.span(
            "thread_service.get_page",
            page_id=thread.page_id,
            field_id=thread.field_id,
            page=page_number,
        ):
            comments = await self.comment_repository.find_by_thread(thread)
            forest = self.tree_builder.build(
                comments,
                max_depth=self.settings.max_reply_depth,
                sort_descending=self.settings.sort_descending,
            )
            window = pagination.paginate(
                forest.flatten(), self.settings.page_size, page_number
            )
            if window.redirected:
                logfire.info(
                    "Requested page out of range",
                    page=page_number,
                    total_pages=window.total_pages,
                )

            return ThreadPage(
                page_id=thread.page_id,
                field_id=thread.field_id,
                window=window,
                links=pagination.page_links(window.page_number, window.total_pages),
                rating=self.rating_summary(comments),
                total_comments=window.total_items,
            )

    async def locate_comment(self, comment_id: CommentId) -> Optional[int]:
        """Find the page a comment is shown on.

        Args:
            comment_id: The comment ID

        Returns:
            The page number, or None if the comment is unknown or not shown
        """
        comment = await self.comment_repository.find_by_id(comment_id)
        if comment is None:
            return None
        return await self.locate(comment)

    async def locate(self, comment: Comment) -> Optional[int]:
        """Find the page a known comment is shown on."""
        if comment.id is None:
            return None
        forest = await self.get_forest(comment.thread)
        flat_ids = [node.comment.id for node in forest.flatten()]
        return pagination.locate_page(flat_ids, comment.id, self.settings.page_size)

    @staticmethod
    def rating_summary(comments: Iterable[Comment]) -> RatingSummary:
        """Average star rating over approved comments that carry one."""
        stars = [
            c.stars
            for c in comments
            if c.status == CommentStatus.APPROVED and c.stars is not None
        ]
        if not stars:
            return RatingSummary()
        return RatingSummary(
            count=len(stars), average=round(sum(stars) / len(stars), 2)
        )
