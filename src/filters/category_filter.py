# src/filters/category_filter.py

"""Vendor filtering by marketplace category."""

import logging

from src.models.vendor import Vendor

logger = logging.getLogger("market_search.filters")


class CategoryFilter:
    """Keep only vendors whose category matches a browse filter."""

    @staticmethod
    def normalise(category: str | None) -> str:
        """Return the comparable form of a category, or ``""`` for none."""
        if not category:
            return ""
        return category.strip().lower()

    @staticmethod
    def filter_vendors(
        vendors: list[Vendor],
        category: str | None,
    ) -> tuple[list[Vendor], int]:
        """Drop vendors outside *category* (case-insensitive exact match).

        An absent or blank category keeps every vendor.  Returns the kept
        vendors and the count of excluded ones.
        """
        wanted = CategoryFilter.normalise(category)
        if not wanted:
            return list(vendors), 0

        kept: list[Vendor] = []
        excluded = 0
        for vendor in vendors:
            if CategoryFilter.normalise(vendor.category) == wanted:
                kept.append(vendor)
            else:
                excluded += 1

        if excluded:
            logger.debug(
                "Category '%s' excluded %d vendors", category, excluded
            )

        return kept, excluded
