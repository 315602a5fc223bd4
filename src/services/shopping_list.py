# src/services/shopping_list.py

"""Per-session shopping list with running totals and checkout to expenses."""

import logging
from dataclasses import dataclass
from datetime import date

from src.models.search_result_item import SearchResultItem

logger = logging.getLogger("market_search.shopping")


class ShoppingListError(Exception):
    """Base class for shopping list failures."""


class InvalidShoppingItemError(ShoppingListError):
    """Raised when an item cannot be added as given."""


class ShoppingItemNotFoundError(ShoppingListError):
    """Raised when an item id is not on the list."""


@dataclass
class ShoppingListItem:
    """A product the shopper intends to buy."""

    id: int
    product_name: str
    vendor_name: str
    price: float
    quantity: int
    image_url: str = ""
    bought: bool = False

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


@dataclass
class ShoppingTotals:
    """Money already spent, still to spend, and both combined."""

    bought: float
    remaining: float
    grand: float


@dataclass
class Expense:
    """A purchase recorded in the expense tracker."""

    item_name: str
    amount: float
    expense_date: str


class ShoppingList:
    """Ordered list of items; ids increase and are never reused."""

    def __init__(self) -> None:
        self._items: list[ShoppingListItem] = []
        self._next_id = 1

    @property
    def items(self) -> list[ShoppingListItem]:
        return list(self._items)

    def add_item(
        self, item: SearchResultItem, quantity: int = 1
    ) -> ShoppingListItem:
        """Add a result row to the list.

        Raises:
            InvalidShoppingItemError: blank name, negative price or a
                quantity below 1.
        """
        if not item.name.strip():
            raise InvalidShoppingItemError("Item has no product name")
        if item.price < 0:
            raise InvalidShoppingItemError(
                f"Invalid price {item.price} for {item.name}"
            )
        if quantity <= 0:
            raise InvalidShoppingItemError(
                f"Quantity must be at least 1, got {quantity}"
            )

        entry = ShoppingListItem(
            id=self._next_id,
            product_name=item.name,
            vendor_name=item.vendor_name,
            price=item.price,
            quantity=quantity,
            image_url=item.image or "",
        )
        self._next_id += 1
        self._items.append(entry)
        logger.info(
            "Added %s (x%d) from %s to shopping list",
            entry.product_name,
            quantity,
            entry.vendor_name,
        )
        return entry

    def _get(self, item_id: int) -> ShoppingListItem:
        for entry in self._items:
            if entry.id == item_id:
                return entry
        raise ShoppingItemNotFoundError(f"No shopping list item {item_id}")

    def toggle_bought(self, item_id: int) -> ShoppingListItem:
        """Flip an item between 'to buy' and 'bought'."""
        entry = self._get(item_id)
        entry.bought = not entry.bought
        return entry

    def remove(self, item_id: int) -> ShoppingListItem:
        """Delete an item from the list and return it."""
        entry = self._get(item_id)
        self._items.remove(entry)
        logger.info("Removed %s from shopping list", entry.product_name)
        return entry

    def totals(self) -> ShoppingTotals:
        bought = sum(e.line_total for e in self._items if e.bought)
        remaining = sum(e.line_total for e in self._items if not e.bought)
        return ShoppingTotals(
            bought=bought, remaining=remaining, grand=bought + remaining
        )

    def checkout_bought(self, today: date | None = None) -> list[Expense]:
        """Move every bought item off the list into expense records."""
        expense_date = (today or date.today()).isoformat()
        expenses: list[Expense] = []
        remaining: list[ShoppingListItem] = []

        for entry in self._items:
            if not entry.bought:
                remaining.append(entry)
                continue
            name = (
                f"{entry.product_name} (x{entry.quantity})"
                if entry.quantity > 1
                else entry.product_name
            )
            expenses.append(
                Expense(
                    item_name=name,
                    amount=entry.line_total,
                    expense_date=expense_date,
                )
            )

        self._items = remaining
        if expenses:
            logger.info("Moved %d bought items to expenses", len(expenses))
        return expenses
