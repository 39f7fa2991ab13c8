"""Page slicing for list views (admin orders table, /products listing)."""
import math
from typing import Generic, List, Sequence, TypeVar

from pydantic import BaseModel

from ..utils.errors import InvalidArgumentError

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    items: List[T]
    page: int
    per_page: int
    total_pages: int
    total_items: int
    page_numbers: List[int]


def total_pages(total_items: int, per_page: int) -> int:
    return math.ceil(total_items / per_page)


def page_numbers(current_page: int, pages: int, pages_to_show: int = 5) -> List[int]:
    """Numbered buttons shown by the pagination control.

    The window is centred on ``current_page`` and shifted left near the end so
    that ``pages_to_show`` buttons are visible whenever that many pages exist.
    A single page (or none) needs no control at all.
    """
    if pages <= 1:
        return []
    start = max(1, current_page - pages_to_show // 2)
    end = min(pages, start + pages_to_show - 1)
    if pages > pages_to_show and end - start + 1 < pages_to_show:
        start = end - pages_to_show + 1
    start = max(1, start)
    return list(range(start, end + 1))


def paginate(items: Sequence[T], page: int = 1, per_page: int = 10) -> Page:
    if per_page <= 0:
        raise InvalidArgumentError("per_page must be positive")
    pages = total_pages(len(items), per_page)
    if page < 1 or (page > pages and not (page == 1 and pages == 0)):
        raise InvalidArgumentError(f"Page {page} is out of range (1..{max(pages, 1)})")
    start = (page - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        page=page,
        per_page=per_page,
        total_pages=pages,
        total_items=len(items),
        page_numbers=page_numbers(page, pages),
    )
