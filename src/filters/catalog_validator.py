# src/filters/catalog_validator.py

"""Catalog hygiene at load time: drop unusable product rows."""

import logging
import math

from src.models.product import Product
from src.models.vendor import Vendor

logger = logging.getLogger("market_search.filters")


class CatalogValidator:
    """Drop products that should never reach a listing."""

    @staticmethod
    def _is_valid(product: Product, vendor: Vendor) -> bool:
        if not product.name.strip():
            logger.debug(
                "Dropped product with empty name (id=%s, vendor=%s)",
                product.id,
                vendor.id,
            )
            return False
        if not math.isfinite(product.price):
            logger.debug(
                "Dropped product with non-finite price "
                "(name=%s, vendor=%s)",
                product.name,
                vendor.id,
            )
            return False
        if product.price < 0:
            logger.debug(
                "Dropped product with negative price "
                "(name=%s, vendor=%s)",
                product.name,
                vendor.id,
            )
            return False
        return True

    @staticmethod
    def validate(
        vendors: list[Vendor],
    ) -> tuple[list[Vendor], int]:
        """Return copies of *vendors* without unusable products.

        Blank names, negative prices and NaN or infinite prices are
        dropped. Free products (price 0) are kept.  The input vendors are not
        modified.  Returns the cleaned vendors and the count of dropped
        products.
        """
        cleaned: list[Vendor] = []
        dropped = 0

        for vendor in vendors:
            kept = [
                p for p in vendor.products
                if CatalogValidator._is_valid(p, vendor)
            ]
            dropped += len(vendor.products) - len(kept)
            cleaned.append(
                Vendor(
                    id=vendor.id,
                    name=vendor.name,
                    category=vendor.category,
                    rating=vendor.rating,
                    products=kept,
                    image=vendor.image,
                    description=vendor.description,
                )
            )

        if dropped:
            logger.info(
                "Validation dropped %d invalid products", dropped
            )

        return cleaned, dropped
