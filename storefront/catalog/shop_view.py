"""Per-session shop view: binds the query engine to the search box, the
filter sidebar, the sort dropdown and the infinite-scroll sentinel.

The view owns its debounce and reveal timers and releases them in close().
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ValidationError

from .query import ALL_CATEGORIES, FilterState, SortKey, parse_sort_key, query_catalog
from .timers import Debouncer
from .window import RevealWindow
from ..app.config import Config
from ..data.models import Product
from ..utils.errors import InvalidArgumentError
from ..utils.logger import get_logger

logger = get_logger()


class ShopSnapshot(BaseModel):
    products: List[Product]
    total: int
    visible_count: int
    has_more: bool
    is_loading: bool
    reached_end: bool
    headline: str
    show_homepage_sections: bool
    search_query: str
    pending_query: Optional[str] = None
    filters: FilterState
    sort: SortKey
    categories: List[str]


class ShopView:
    def __init__(self, catalog, debounce_delay: float = None, reveal_delay: float = None,
                 initial_size: int = None, increment: int = None, default_max_price: float = None):
        """
        Args:
            catalog: catalog store exposing ``products``, ``catalog_version``
                and ``categories()`` (an AppState in the running app)
        """
        self.catalog = catalog
        self.filters = FilterState(
            price=Config.DEFAULT_MAX_PRICE if default_max_price is None else default_max_price
        )
        self.sort_key = SortKey.featured
        self.raw_query = ""
        self.committed_query = ""
        self.window = RevealWindow(
            initial_size=initial_size or Config.INITIAL_WINDOW_SIZE,
            increment=increment or Config.WINDOW_INCREMENT,
            delay=Config.REVEAL_DELAY_SECONDS if reveal_delay is None else reveal_delay,
        )
        self.debouncer = Debouncer(
            Config.SEARCH_DEBOUNCE_SECONDS if debounce_delay is None else debounce_delay,
            self._commit_query,
        )
        self._seen_version = catalog.catalog_version

    # ---------------- Inputs ----------------

    def type_search(self, raw: str) -> None:
        """Keystroke in the search box; commits after the debounce delay."""
        self.raw_query = raw
        self.debouncer.push(raw)

    def submit_search(self, raw: str) -> None:
        """Search form submitted; commits now and drops any pending keystroke."""
        self.raw_query = raw
        self.debouncer.cancel()
        self._commit_query(raw)

    def _commit_query(self, raw: str) -> None:
        query = (raw or "").strip()
        if query == self.committed_query:
            return
        logger.info(f"[SHOP] search committed: {query!r}")
        self.committed_query = query
        self.window.reset()

    def set_filters(self, category: Optional[str] = None, price: Optional[float] = None,
                    rating: Optional[float] = None) -> FilterState:
        """Merge a partial filter change into the current facets."""
        merged = self.filters.model_dump()
        for field, value in (("category", category), ("price", price), ("rating", rating)):
            if value is not None:
                merged[field] = value
        try:
            filters = FilterState(**merged)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid filters: {e.errors()[0]['msg']}") from e
        if filters.category not in self.catalog.categories():
            raise InvalidArgumentError(f"Unknown category: {filters.category!r}")
        self.filters = filters
        self.window.reset()
        return filters

    def set_sort(self, sort_key: Union[str, SortKey]) -> SortKey:
        self.sort_key = parse_sort_key(sort_key)
        self.window.reset()
        return self.sort_key

    def reveal_more(self) -> bool:
        """Reveal sentinel became visible."""
        return self.window.trigger(len(self.results()))

    # ---------------- Outputs ----------------

    def _sync_catalog(self) -> None:
        if self.catalog.catalog_version == self._seen_version:
            return
        self._seen_version = self.catalog.catalog_version
        if self.filters.category not in self.catalog.categories():
            self.filters = self.filters.model_copy(update={"category": ALL_CATEGORIES})
        self.window.reset()

    def results(self) -> List[Product]:
        self._sync_catalog()
        return query_catalog(self.catalog.products, self.filters, self.sort_key, self.committed_query)

    def snapshot(self) -> ShopSnapshot:
        results = self.results()
        total = len(results)
        visible = self.window.visible(results)
        return ShopSnapshot(
            products=visible,
            total=total,
            visible_count=len(visible),
            has_more=self.window.has_more(total),
            is_loading=self.window.is_loading,
            reached_end=self.window.reached_end(total),
            headline=f'Results for "{self.committed_query}"' if self.committed_query else "Our Products",
            show_homepage_sections=not self.committed_query,
            search_query=self.committed_query,
            pending_query=self.debouncer.pending_value,
            filters=self.filters,
            sort=self.sort_key,
            categories=self.catalog.categories(),
        )

    def close(self) -> None:
        self.debouncer.cancel()
        self.window.close()
