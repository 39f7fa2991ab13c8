"""Catalog query engine: facet filtering, free-text search, sorting and the
reveal-window growth rule behind the shop grid.

Every function here is pure. Products are read, never mutated, and each call
returns a new list.
"""
import locale
import math
from enum import Enum
from typing import Iterable, List, Sequence, Union

from pydantic import BaseModel, Field

from ..data.models import Product
from ..utils.errors import InvalidArgumentError

ALL_CATEGORIES = "All"


class SortKey(str, Enum):
    featured = "featured"
    price_asc = "price-asc"
    price_desc = "price-desc"
    rating_desc = "rating-desc"
    name_asc = "name-asc"


class FilterState(BaseModel):
    """Sidebar facets. ``price`` and ``rating`` are inclusive bounds."""
    category: str = ALL_CATEGORIES
    price: float = Field(default=200.0, ge=0)
    rating: float = Field(default=0.0, ge=0, le=5)

    @classmethod
    def unbounded(cls) -> "FilterState":
        return cls(category=ALL_CATEGORIES, price=math.inf, rating=0)


def parse_sort_key(value: Union[str, SortKey]) -> SortKey:
    if isinstance(value, SortKey):
        return value
    try:
        return SortKey(value)
    except ValueError:
        raise InvalidArgumentError(f"Unknown sort key: {value!r}") from None


def _check_filters(filters: FilterState) -> None:
    # model_construct() and attribute assignment bypass pydantic validation
    if filters.price is None or math.isnan(filters.price) or filters.price < 0:
        raise InvalidArgumentError(f"Max price must be non-negative, got {filters.price!r}")
    if filters.rating is None or not 0 <= filters.rating <= 5:
        raise InvalidArgumentError(f"Min rating must be between 0 and 5, got {filters.rating!r}")


def matches_search(product: Product, query: str) -> bool:
    q = query.lower()
    return q in product.name.lower() or q in product.description.lower()


def filter_products(all_products: Sequence[Product], filters: FilterState, search_query: str = "") -> List[Product]:
    """Return the products to list, in input order.

    A non-empty (trimmed) search query is the dominant mode: every product
    whose name or description contains it, case-insensitively, is returned and
    the facets are ignored. Otherwise category, max price and min rating are
    applied in that order.
    """
    _check_filters(filters)
    query = (search_query or "").strip()

    if query:
        return [p for p in all_products if matches_search(p, query)]

    result = list(all_products)
    if filters.category != ALL_CATEGORIES:
        result = [p for p in result if p.category == filters.category]
    result = [p for p in result if p.price <= filters.price]
    if filters.rating > 0:
        result = [p for p in result if p.rating >= filters.rating]
    return result


def sort_products(products: Sequence[Product], sort_key: Union[str, SortKey]) -> List[Product]:
    """Stable sort by the field named by ``sort_key``; ``featured`` keeps input order."""
    key = parse_sort_key(sort_key)

    if key is SortKey.price_asc:
        return sorted(products, key=lambda p: p.price)
    if key is SortKey.price_desc:
        # reverse=True keeps equal prices in input order
        return sorted(products, key=lambda p: p.price, reverse=True)
    if key is SortKey.rating_desc:
        return sorted(products, key=lambda p: p.rating, reverse=True)
    if key is SortKey.name_asc:
        # Collates by the process locale (LC_COLLATE); the C locale falls back to code points
        return sorted(products, key=lambda p: locale.strxfrm(p.name.casefold()))
    return list(products)


def query_catalog(all_products: Sequence[Product], filters: FilterState, sort_key: Union[str, SortKey] = SortKey.featured,
                  search_query: str = "") -> List[Product]:
    """filter_products followed by sort_products."""
    return sort_products(filter_products(all_products, filters, search_query), sort_key)


def advance_window(current_size: int, total_count: int, increment: int) -> int:
    """Next reveal-window size after the sentinel became visible.

    A fully revealed window is returned unchanged. A growing window stops at
    ``total_count``.
    """
    if current_size < 0 or total_count < 0:
        raise InvalidArgumentError("Window size and total count must be non-negative")
    if increment <= 0:
        raise InvalidArgumentError("Window increment must be positive")
    if current_size >= total_count:
        return current_size
    return min(current_size + increment, total_count)


def category_facets(products: Iterable[Product]) -> List[str]:
    """``"All"`` followed by every category in first-seen order."""
    seen = []
    for p in products:
        if p.category not in seen:
            seen.append(p.category)
    return [ALL_CATEGORIES] + seen
