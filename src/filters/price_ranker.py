# src/filters/price_ranker.py

"""Price ordering and best-price marking for result lists."""

import logging

from src.models.search_result_item import SearchResultItem

logger = logging.getLogger("market_search.filters")


class PriceRanker:
    """Order results by price and flag the cheapest matches."""

    @staticmethod
    def sort_by_price(
        items: list[SearchResultItem],
    ) -> list[SearchResultItem]:
        """Return a new list sorted by price, ascending.

        ``sorted`` is stable, so items with equal prices keep the order
        they were enumerated in (vendor first, then product).
        """
        return sorted(items, key=lambda item: item.price)

    @staticmethod
    def mark_lowest_price(items: list[SearchResultItem]) -> int:
        """Set ``low_price`` on every item tied for the minimum price.

        *items* must already be sorted by price, so the minimum is the
        first element's price.  Returns the number of flagged items.
        """
        if not items:
            return 0

        lowest = items[0].price
        flagged = 0
        for item in items:
            if item.price == lowest:
                item.low_price = True
                flagged += 1

        logger.debug(
            "Flagged %d item(s) at lowest price %.2f", flagged, lowest
        )
        return flagged
