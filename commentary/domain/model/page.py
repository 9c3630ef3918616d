"""Page window over the flattened comment order."""

from typing import Generic, TypeVar

from commentary.domain.model.common import DomainModel
from commentary.domain.value import FieldId, PageId

T = TypeVar("T")


class PageWindow(DomainModel, Generic[T]):
    """One page of a paginated sequence.

    ``window_start`` and ``window_end`` are 1-based positions for the
    "showing X to Y of Z" line, both 0 when there is nothing to show.
    ``redirected`` is set when the requested page was out of range and
    page 1 was returned instead.
    """

    items: list[T]
    page_number: int
    total_pages: int
    total_items: int
    window_start: int
    window_end: int
    redirected: bool = False

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number < self.total_pages


class RatingSummary(DomainModel):
    """Star rating summary of a thread, over published comments."""

    count: int = 0
    average: float | None = None


class ThreadPage(DomainModel):
    """One rendered page of a thread.

    ``window`` holds the nodes of this page in flattened order, ``links``
    the navigation entries (None for a gap).
    """

    page_id: PageId
    field_id: FieldId
    window: PageWindow
    links: list[int | None]
    rating: RatingSummary
    total_comments: int
