# src/services/catalog_browser.py

"""Catalog lookups for the dashboard, marketplace and detail pages."""

from collections.abc import Sequence
from dataclasses import dataclass

from src.config.settings import Settings
from src.models.search_result_item import SearchResultItem
from src.models.vendor import Vendor


@dataclass
class ProductDetails:
    """A product joined with its vendor, as shown on its detail page."""

    item: SearchResultItem
    vendor: Vendor


def list_categories(catalog: Sequence[Vendor]) -> list[str]:
    """Return each non-empty vendor category once, in first-seen order."""
    seen: dict[str, None] = {}
    for vendor in catalog:
        if vendor.category:
            seen.setdefault(vendor.category, None)
    return list(seen)


def featured_vendors(
    catalog: Sequence[Vendor],
    count: int = Settings.FEATURED_VENDOR_COUNT,
) -> list[Vendor]:
    """Return the first *count* vendors in catalog order."""
    return list(catalog[:count])


def find_vendor(
    catalog: Sequence[Vendor], vendor_id: str
) -> Vendor | None:
    """Look up a vendor by id."""
    for vendor in catalog:
        if vendor.id == vendor_id:
            return vendor
    return None


def find_product(
    catalog: Sequence[Vendor], product_id: str
) -> ProductDetails | None:
    """Look up a product by id and join it with its owning vendor."""
    for vendor in catalog:
        for product in vendor.products:
            if product.id == product_id:
                return ProductDetails(
                    item=SearchResultItem.from_product(product, vendor),
                    vendor=vendor,
                )
    return None
