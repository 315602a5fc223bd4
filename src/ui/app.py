# src/ui/app.py

"""Terminal UI for browsing and searching the market catalog."""

import asyncio
import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Static,
)

from src.config.settings import Settings
from src.models.search_result_item import SearchResultItem
from src.services.catalog_service import CatalogService
from src.services.shopping_list import (
    Expense,
    ShoppingList,
    ShoppingListError,
)
from src.storage.file_manager import FileManager

logger = logging.getLogger("market_search.ui")


class MarketSearchApp(App[object]):
    """Search box, category filter and a price-ordered results table."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("n", "load_more", "More"),
        Binding("p", "sort_price", "Price Sort"),
        Binding("r", "sort_rating", "Rating Sort"),
        Binding("a", "add_to_list", "Add to List"),
        Binding("b", "toggle_bought", "Bought"),
        Binding("x", "remove_from_list", "Remove"),
        Binding("c", "checkout", "Checkout"),
        Binding("s", "save", "Save"),
        Binding("e", "export", "Export CSV"),
    ]

    def __init__(self, service: CatalogService | None = None) -> None:
        super().__init__()
        self.service = service or CatalogService()
        self.results: list[SearchResultItem] = []
        self.visible_count: int = Settings.ITEMS_PER_PAGE
        self.current_label: str = ""
        self.shopping_list = ShoppingList()
        self.expenses: list[Expense] = []
        self._file_manager: FileManager | None = None

    @property
    def file_manager(self) -> FileManager:
        if self._file_manager is None:
            self._file_manager = FileManager()
        return self._file_manager

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Container(
            Static("🧺 Local Market", id="title"),
            Horizontal(
                Input(placeholder="Search products...", id="search_input"),
                Input(placeholder="Category (optional)", id="category_input"),
                Button("Search", variant="primary", id="search_btn"),
                id="search_bar",
            ),
            Static("Ready", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            Static("", id="list_status"),
            cast(
                DataTable[str | Text],
                DataTable(id="list_table", cursor_type="row"),
            ),
            id="main_container",
        )
        yield Footer()

    def _table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )

    def _list_table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one("#list_table", DataTable),
        )

    async def on_mount(self) -> None:
        """Configure columns and show the full catalog on startup."""
        self._table().add_columns(
            "Product", "Price", "Vendor", "Rating", "Deal"
        )
        self._list_table().add_columns(
            "", "Item", "Qty", "Total", "Vendor"
        )
        self.refresh_shopping_list()
        await self.perform_search()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "search_btn":
            await self.perform_search()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id in ("search_input", "category_input"):
            await self.perform_search()

    async def perform_search(self) -> None:
        """Run the search for the current inputs and refill the table."""
        query = self.query_one("#search_input", Input).value.strip()
        category = self.query_one("#category_input", Input).value.strip()
        status = self.query_one("#status", Static)
        status.update("🔍 Searching...")

        outcome = await asyncio.to_thread(
            self.service.search, query or None, category or None
        )
        for error_msg in outcome.errors:
            self.notify(f"Error: {error_msg}", severity="error")

        self.results = outcome.results
        self.visible_count = Settings.ITEMS_PER_PAGE
        self.current_label = query or category or "all"
        self.populate_table()

        if not self.results:
            status.update("❌ No products found")
        else:
            status.update(f"✅ {len(self.results)} products")

    def populate_table(self) -> None:
        """Fill the table with the visible slice of the results."""
        table = self._table()
        table.clear()
        for item in self.results[: self.visible_count]:
            price_style = "bold green" if item.low_price else ""
            label = f"${item.price:,.2f}" + (" ★" if item.low_price else "")
            table.add_row(
                item.name[:50],
                Text(label, style=price_style),
                item.vendor_name,
                f"⭐ {item.vendor_rating:.1f}",
                item.discount or "",
            )

    def action_load_more(self) -> None:
        """Reveal the next page of results."""
        if self.visible_count >= len(self.results):
            return
        self.visible_count = min(
            self.visible_count + Settings.ITEMS_PER_PAGE, len(self.results)
        )
        self.populate_table()

    def action_sort_price(self) -> None:
        """Sort results by price, ascending."""
        self.results.sort(key=lambda i: i.price)
        self.populate_table()

    def action_sort_rating(self) -> None:
        """Sort results by vendor rating, descending."""
        self.results.sort(key=lambda i: i.vendor_rating, reverse=True)
        self.populate_table()

    def action_add_to_list(self) -> None:
        """Add the highlighted product to the shopping list."""
        row = self._table().cursor_row
        if not 0 <= row < min(self.visible_count, len(self.results)):
            return
        try:
            self.shopping_list.add_item(self.results[row])
        except ShoppingListError as e:
            logger.warning("Could not add to shopping list: %s", e)
            self.notify(str(e), severity="error")
            return
        totals = self.shopping_list.totals()
        self.refresh_shopping_list()
        self.notify(
            f"{self.results[row].name} added (list total ${totals.grand:,.2f})"
        )

    def refresh_shopping_list(self) -> None:
        """Redraw the shopping list panel and its running totals."""
        table = self._list_table()
        table.clear()
        for entry in self.shopping_list.items:
            table.add_row(
                "✓" if entry.bought else "",
                Text(
                    entry.product_name,
                    style="strike" if entry.bought else "",
                ),
                str(entry.quantity),
                f"${entry.line_total:,.2f}",
                entry.vendor_name,
            )

        totals = self.shopping_list.totals()
        spent = sum(e.amount for e in self.expenses)
        self.query_one("#list_status", Static).update(
            f"🛒 To buy ${totals.remaining:,.2f} · "
            f"Bought ${totals.bought:,.2f} · "
            f"Expenses ${spent:,.2f} ({len(self.expenses)})"
        )

    def _selected_list_item_id(self) -> int | None:
        items = self.shopping_list.items
        row = self._list_table().cursor_row
        if not 0 <= row < len(items):
            return None
        return items[row].id

    def action_toggle_bought(self) -> None:
        """Mark the highlighted shopping list item bought (or not)."""
        item_id = self._selected_list_item_id()
        if item_id is None:
            self.notify("Shopping list is empty", severity="warning")
            return
        try:
            self.shopping_list.toggle_bought(item_id)
        except ShoppingListError as e:
            logger.warning("Could not update shopping list: %s", e)
            self.notify(str(e), severity="error")
            return
        self.refresh_shopping_list()

    def action_remove_from_list(self) -> None:
        """Drop the highlighted item from the shopping list."""
        item_id = self._selected_list_item_id()
        if item_id is None:
            self.notify("Shopping list is empty", severity="warning")
            return
        try:
            entry = self.shopping_list.remove(item_id)
        except ShoppingListError as e:
            logger.warning("Could not remove from shopping list: %s", e)
            self.notify(str(e), severity="error")
            return
        self.refresh_shopping_list()
        self.notify(f"{entry.product_name} removed")

    def action_checkout(self) -> None:
        """Record bought items as expenses and clear them from the list."""
        expenses = self.shopping_list.checkout_bought()
        if not expenses:
            self.notify("Nothing marked as bought", severity="warning")
            return
        self.expenses.extend(expenses)
        self.refresh_shopping_list()
        amount = sum(e.amount for e in expenses)
        self.notify(
            f"Recorded {len(expenses)} expenses (${amount:,.2f})"
        )

    def action_save(self) -> None:
        """Save current results to a JSON file."""
        if not self.results:
            self.notify("No results to save", severity="warning")
            return
        try:
            path = self.file_manager.save_results(
                self.current_label, self.results
            )
            self.notify(f"Saved to {path}")
        except OSError as e:
            logger.error("Failed to save results", exc_info=True)
            self.notify(f"Save failed: {e}", severity="error")

    def action_export(self) -> None:
        """Export current results to a CSV file."""
        if not self.results:
            self.notify("No results to export", severity="warning")
            return
        try:
            path = self.file_manager.export_csv(
                self.current_label, self.results
            )
            self.notify(f"Exported to {path}")
        except OSError as e:
            logger.error("Failed to export results", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")
