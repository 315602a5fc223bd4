# src/services/catalog_search.py

"""Catalog search & ranking: the product listing behind every search page.

The same routine backs the home search box, the category browse page and
the full catalog listing:

1. Keep vendors matching the category filter (all when absent).
2. Keep products whose name contains the query (all when absent).
3. Join each product with its vendor's id, name and rating.
4. Stable-sort by price, ascending.
5. For free-text searches only, flag every item at the lowest price.

All functions here are pure: the catalog passed in is never mutated and
every call returns newly built items.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from src.config.settings import Settings
from src.filters.category_filter import CategoryFilter
from src.filters.price_ranker import PriceRanker
from src.filters.query_matcher import QueryMatcher
from src.models.search_result_item import SearchResultItem
from src.models.vendor import Vendor

logger = logging.getLogger("market_search.search")


@dataclass(frozen=True)
class SearchFilters:
    """Optional browse/search filters for one request."""

    category: str | None = None
    query: str | None = None


@dataclass
class Page:
    """One page of a result list."""

    items: list[SearchResultItem] = field(
        default_factory=lambda: list[SearchResultItem]()
    )
    page: int = 1
    per_page: int = Settings.ITEMS_PER_PAGE
    total: int = 0

    @property
    def has_more(self) -> bool:
        """True when later pages still hold results."""
        return self.page * self.per_page < self.total


def search_catalog(
    catalog: Sequence[Vendor] | None,
    filters: SearchFilters | None = None,
) -> list[SearchResultItem]:
    """Return the catalog's matching products, cheapest first.

    Missing filters behave exactly like empty ones, and an empty or
    ``None`` catalog yields ``[]``.  The ``low_price`` flag is only set
    when a non-blank query was given; category browsing and the full
    listing never show it.
    """
    if not catalog:
        return []

    active = filters or SearchFilters()
    query = QueryMatcher.normalise(active.query)

    vendors, _excluded = CategoryFilter.filter_vendors(
        list(catalog), active.category
    )

    results: list[SearchResultItem] = []
    for vendor in vendors:
        for product in vendor.products:
            if QueryMatcher.matches(product.name, query):
                results.append(
                    SearchResultItem.from_product(product, vendor)
                )

    ranked = PriceRanker.sort_by_price(results)
    if query:
        PriceRanker.mark_lowest_price(ranked)

    logger.debug(
        "Search category=%r query=%r: %d of %d vendors, %d products",
        active.category,
        query,
        len(vendors),
        len(catalog),
        len(ranked),
    )
    return ranked


def paginate(
    items: list[SearchResultItem],
    page: int = 1,
    per_page: int = Settings.ITEMS_PER_PAGE,
) -> Page:
    """Slice *items* into 1-based pages of *per_page* entries.

    Page numbers below 1 are clamped to 1; a page past the end is empty.
    """
    if per_page < 1:
        raise ValueError(f"per_page must be positive, got {per_page}")

    current = max(page, 1)
    start = (current - 1) * per_page
    return Page(
        items=items[start:start + per_page],
        page=current,
        per_page=per_page,
        total=len(items),
    )
