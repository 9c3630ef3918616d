"""Page windows over the depth-first comment order.

A page boundary may fall inside a reply chain. Pages are counted over the
flattened forest, not per top-level thread.
"""

import math
from typing import Optional, Sequence, TypeVar

from commentary.domain.model.page import PageWindow

T = TypeVar("T")

# Pages shown on each side of the current page in the navigation
NAV_RADIUS = 2


def total_pages(total_items: int, page_size: int) -> int:
    """Number of pages, at least 1. ``page_size <= 0`` means one page."""
    if page_size <= 0 or total_items == 0:
        return 1
    return math.ceil(total_items / page_size)


def paginate(items: Sequence[T], page_size: int, page_number: int) -> PageWindow[T]:
    """Cut one page out of the flattened order.

    Out-of-range page numbers are not clamped: page 1 is returned with
    ``redirected`` set, so the caller can send the reader to ``?page=1``.

    Args:
        items: Items in flattened order
        page_size: Items per page, ``<= 0`` disables pagination
        page_number: Requested 1-based page number

    Returns:
        The page window
    """
    total_items = len(items)

    if page_size <= 0:
        return PageWindow(
            items=list(items),
            page_number=1,
            total_pages=1,
            total_items=total_items,
            window_start=1 if total_items else 0,
            window_end=total_items,
        )

    pages = total_pages(total_items, page_size)
    redirected = False
    if page_number < 1 or page_number > pages:
        page_number = 1
        redirected = True

    start = (page_number - 1) * page_size
    sliced = list(items[start : start + page_size])

    return PageWindow(
        items=sliced,
        page_number=page_number,
        total_pages=pages,
        total_items=total_items,
        window_start=start + 1 if sliced else 0,
        window_end=start + len(sliced),
        redirected=redirected,
    )


def locate_page(
    flat_ids: Sequence[int], comment_id: int, page_size: int
) -> Optional[int]:
    """Page on which a comment appears.

    Args:
        flat_ids: Comment ids in flattened order
        comment_id: The comment to find
        page_size: Items per page, ``<= 0`` disables pagination

    Returns:
        The 1-based page number, or None if the comment is not shown
    """
    try:
        position = flat_ids.index(comment_id) + 1
    except ValueError:
        return None
    if page_size <= 0:
        return 1
    return math.ceil(position / page_size)


def page_links(current: int, total: int) -> list[Optional[int]]:
    """Navigation entries around the current page.

    First page, a gap, up to two pages on each side of the current one,
    a gap, the last page. ``None`` marks a gap. A single page needs no
    navigation and yields an empty list.
    """
    if total <= 1:
        return []

    links: list[Optional[int]] = []
    if current - NAV_RADIUS - 1 > 0:
        links.append(1)
    if current - NAV_RADIUS - 1 > 1:
        links.append(None)

    for page in range(current - NAV_RADIUS, current + NAV_RADIUS + 1):
        if 1 <= page <= total:
            links.append(page)

    remaining = total - (current + NAV_RADIUS)
    if remaining > 1:
        links.append(None)
    if remaining > 0:
        links.append(total)
    return links
