# src/services/related_products.py

"""'You may also like' sampling for the product detail page."""

import logging
import random
from collections.abc import Sequence

from src.config.settings import Settings
from src.filters.category_filter import CategoryFilter
from src.models.product import Product
from src.models.search_result_item import SearchResultItem
from src.models.vendor import Vendor

logger = logging.getLogger("market_search.related")


def related_products(
    product: Product,
    vendor: Vendor,
    catalog: Sequence[Vendor] | None,
    rng: random.Random | None = None,
    limit: int = Settings.RELATED_PRODUCTS_LIMIT,
) -> list[SearchResultItem]:
    """Pick up to *limit* random products from the vendor's category.

    Candidates come from every vendor sharing *vendor*'s category
    (including *vendor* itself); *product* is excluded by id.  Without
    an *rng* the sample is unseeded, so callers that need repeatable
    output must pass a seeded ``random.Random``.
    """
    if not catalog or not CategoryFilter.normalise(vendor.category):
        return []

    peers, _excluded = CategoryFilter.filter_vendors(
        list(catalog), vendor.category
    )
    candidates = [
        SearchResultItem.from_product(candidate, owner)
        for owner in peers
        for candidate in owner.products
        if candidate.id != product.id
    ]

    source = rng or random.Random()
    picked = source.sample(
        candidates, max(0, min(limit, len(candidates)))
    )

    logger.debug(
        "Related to %s: %d candidates in '%s', picked %d",
        product.id,
        len(candidates),
        vendor.category,
        len(picked),
    )
    return picked
