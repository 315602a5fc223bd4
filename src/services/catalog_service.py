# src/services/catalog_service.py

"""Request-level orchestration: load the catalog, then search or look up."""

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path

from src.clients.catalog_client import CatalogClient, CatalogFetchError
from src.config.settings import Settings
from src.filters.catalog_validator import CatalogValidator
from src.models.search_result_item import SearchResultItem
from src.models.vendor import Vendor
from src.services.catalog_browser import (
    ProductDetails,
    featured_vendors,
    find_product,
    find_vendor,
    list_categories,
)
from src.services.catalog_search import (
    Page,
    SearchFilters,
    paginate,
    search_catalog,
)
from src.services.related_products import related_products
from src.storage.catalog_cache import CatalogCache
from src.storage.catalog_loader import CatalogLoader, CatalogLoadError

logger = logging.getLogger("market_search.service")


@dataclass
class SearchOutcome:
    """Everything a results page needs for one search request."""

    query: str | None
    category: str | None
    results: list[SearchResultItem] = field(
        default_factory=lambda: list[SearchResultItem]()
    )
    page: Page = field(default_factory=Page)
    invalid_count: int = 0
    cache_hit: bool = False
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @property
    def total(self) -> int:
        """Number of matches across all pages."""
        return len(self.results)


class CatalogService:
    """Coordinates the catalog source, cache and the search functions.

    The catalog is read either from a JSON file or, when a
    :class:`CatalogClient` is supplied, from the hosted store.  Loaded
    catalogs are validated once and cached for ``CATALOG_CACHE_TTL``.
    """

    def __init__(
        self,
        catalog_path: Path | None = None,
        client: CatalogClient | None = None,
        cache: CatalogCache | None = None,
    ) -> None:
        self.catalog_path = catalog_path or Settings.CATALOG_PATH
        self.client = client
        self.cache = cache or CatalogCache()
        self._last_invalid_count = 0

    @property
    def source_label(self) -> str:
        """Cache key for the configured catalog source."""
        if self.client is not None:
            return self.client.source_label
        return f"file:{self.catalog_path}"

    # ── Loading ──────────────────────────────────────────

    def _fetch(self) -> list[Vendor]:
        if self.client is not None:
            return self.client.fetch_catalog()
        return CatalogLoader.load_file(self.catalog_path)

    def load(self) -> tuple[list[Vendor], bool]:
        """Return the validated catalog and whether it came from cache.

        Raises:
            CatalogLoadError: the file source is unreadable or malformed.
            CatalogFetchError: the remote source could not be reached.
        """
        cached = self.cache.get(self.source_label)
        if cached is not None:
            return cached, True

        vendors, self._last_invalid_count = CatalogValidator.validate(
            self._fetch()
        )
        self.cache.store(self.source_label, vendors)
        return vendors, False

    def _safe_load(self, errors: list[str]) -> tuple[list[Vendor], bool]:
        """Load the catalog, recording failures instead of raising."""
        try:
            return self.load()
        except (CatalogLoadError, CatalogFetchError) as exc:
            logger.error("Catalog unavailable: %s", exc, exc_info=True)
            errors.append(str(exc))
            return [], False

    # ── Requests ─────────────────────────────────────────

    def search(
        self,
        query: str | None = None,
        category: str | None = None,
        page: int = 1,
        per_page: int = Settings.ITEMS_PER_PAGE,
    ) -> SearchOutcome:
        """Run one search/browse request; never raises on source errors."""
        outcome = SearchOutcome(query=query, category=category)
        vendors, outcome.cache_hit = self._safe_load(outcome.errors)
        if not outcome.cache_hit:
            outcome.invalid_count = self._last_invalid_count

        outcome.results = search_catalog(
            vendors, SearchFilters(category=category, query=query)
        )
        outcome.page = paginate(outcome.results, page, per_page)

        logger.info(
            "Search query=%r category=%r -> %d results (page %d)",
            query,
            category,
            outcome.total,
            outcome.page.page,
        )
        return outcome

    def categories(self) -> list[str]:
        """Categories available for browsing; empty if the catalog is down."""
        vendors, _cache_hit = self._safe_load([])
        return list_categories(vendors)

    def featured(
        self, count: int = Settings.FEATURED_VENDOR_COUNT
    ) -> list[Vendor]:
        """The vendors highlighted on the home page."""
        vendors, _cache_hit = self._safe_load([])
        return featured_vendors(vendors, count)

    def vendor(self, vendor_id: str) -> Vendor | None:
        """Vendor page lookup; ``None`` when unknown or unavailable."""
        vendors, _cache_hit = self._safe_load([])
        return find_vendor(vendors, vendor_id)

    def details(self, product_id: str) -> ProductDetails | None:
        """Product detail lookup; ``None`` when unknown or unavailable."""
        vendors, _cache_hit = self._safe_load([])
        return find_product(vendors, product_id)

    def related(
        self,
        product_id: str,
        rng: random.Random | None = None,
        limit: int = Settings.RELATED_PRODUCTS_LIMIT,
    ) -> list[SearchResultItem]:
        """Related products for *product_id*; empty when it is unknown."""
        vendors, _cache_hit = self._safe_load([])
        for vendor in vendors:
            for product in vendor.products:
                if product.id == product_id:
                    return related_products(
                        product, vendor, vendors, rng=rng, limit=limit
                    )
        logger.info("No related products: unknown product %s", product_id)
        return []
