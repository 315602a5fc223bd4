# src/cli/runner.py

"""Headless CLI commands built on the catalog service."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.clients.catalog_client import CatalogClient
from src.config.settings import Settings
from src.models.search_result_item import SearchResultItem
from src.services.catalog_service import CatalogService
from src.storage.file_manager import FileManager, format_tsv, item_to_dict

logger = logging.getLogger("market_search.cli")

# Status messages go to stderr so stdout stays clean for JSON
_err = Console(stderr=True)


def build_service(
    catalog_path: str | None = None,
    remote: bool = False,
) -> CatalogService:
    """Create a service reading the local JSON catalog or the remote store."""
    client = CatalogClient() if remote else None
    path = Path(catalog_path) if catalog_path else None
    return CatalogService(catalog_path=path, client=client)


def _print_table(items: list[SearchResultItem], title: str) -> None:
    """Render results as a Rich table in the order given."""
    table = Table(title=title, show_lines=True, title_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Product", max_width=50)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Vendor", style="magenta")
    table.add_column("Rating", justify="center")
    table.add_column("Deal", style="dim")

    for idx, item in enumerate(items, 1):
        price = f"${item.price:,.2f}"
        if item.low_price:
            price = f"[bold]{price} ★[/bold]"
        table.add_row(
            str(idx),
            item.name,
            price,
            item.vendor_name,
            f"{item.vendor_rating:.1f}",
            item.discount or "",
        )

    Console().print(table)


def _describe(query: str | None, category: str | None) -> str:
    if category:
        return f'Products in "{category}"'
    if query and query.strip():
        return f'Results for "{query.strip()}"'
    return "All Products"


def cli_search(
    service: CatalogService,
    query: str | None,
    category: str | None,
    page: int,
    output_format: str,
    output_dir: str | None,
) -> int:
    """Run a search and print one page; returns 0 on results, 1 otherwise."""
    title = _describe(query, category)
    _err.print(f"[bold]{title}[/bold]  [dim]page {page}[/dim]")

    outcome = service.search(query=query, category=category, page=page)

    for error_msg in outcome.errors:
        _err.print(f"[red]Error: {error_msg}[/red]")

    if not outcome.results:
        _err.print("[yellow]No products found.[/yellow]")
        return 1

    detail = (
        f" ({outcome.invalid_count} invalid dropped)"
        if outcome.invalid_count
        else ""
    )
    more = ", more available" if outcome.page.has_more else ""
    _err.print(
        f"[green]✓ {outcome.total} products{detail}; showing "
        f"{len(outcome.page.items)}{more}[/green]"
    )

    if output_dir is not None:
        try:
            path = FileManager(Path(output_dir)).save_results(
                query or category or "all", outcome.results
            )
            _err.print(f"[dim]Saved → {path}[/dim]")
        except OSError as exc:
            logger.error("Save failed: %s", exc, exc_info=True)
            _err.print(f"[red]Save failed: {exc}[/red]")

    if output_format == "table":
        _print_table(outcome.page.items, title)
    elif output_format == "tsv":
        sys.stdout.write(format_tsv(outcome.page.items) + "\n")
    else:
        json.dump(
            [item_to_dict(i) for i in outcome.page.items],
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


def run_list_categories(service: CatalogService) -> int:
    """Print each browsable category on its own line."""
    categories = service.categories()
    if not categories:
        _err.print("[yellow]No categories available.[/yellow]")
        return 1
    for category in categories:
        sys.stdout.write(f"{category}\n")
    return 0


def run_related(
    service: CatalogService,
    product_id: str,
    output_format: str,
) -> int:
    """Show a product and a random sample of related products."""
    details = service.details(product_id)
    if details is None:
        _err.print(f"[red]Unknown product: {product_id}[/red]")
        return 1

    related = service.related(
        product_id, limit=Settings.RELATED_PRODUCTS_LIMIT
    )
    _err.print(
        f"[bold]{details.item.name}[/bold] from {details.vendor.name} "
        f"(${details.item.price:,.2f})"
    )

    if output_format == "table":
        _print_table(related, "You may also like")
    elif output_format == "tsv":
        sys.stdout.write(format_tsv(related) + "\n")
    else:
        json.dump(
            {
                "product": item_to_dict(details.item),
                "related": [item_to_dict(i) for i in related],
            },
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0


def run_featured(service: CatalogService) -> int:
    """Print the featured vendors, one tab-separated line each."""
    vendors = service.featured()
    if not vendors:
        _err.print("[yellow]No vendors available.[/yellow]")
        return 1
    for vendor in vendors:
        sys.stdout.write(
            f"{vendor.id}\t{vendor.name}\t{vendor.category or ''}\t"
            f"{vendor.rating:.1f}\n"
        )
    return 0


def run_vendor(
    service: CatalogService,
    vendor_id: str,
    output_format: str,
) -> int:
    """Show one vendor and its products in listing order."""
    vendor = service.vendor(vendor_id)
    if vendor is None:
        _err.print(f"[red]Unknown vendor: {vendor_id}[/red]")
        return 1

    items = [SearchResultItem.from_product(p, vendor) for p in vendor.products]
    _err.print(
        f"[bold]{vendor.name}[/bold] ({vendor.category or 'uncategorised'}, "
        f"⭐ {vendor.rating:.1f}) - {len(items)} products"
    )

    if output_format == "table":
        _print_table(items, vendor.name)
    elif output_format == "tsv":
        sys.stdout.write(format_tsv(items) + "\n")
    else:
        json.dump(
            {
                "id": vendor.id,
                "name": vendor.name,
                "category": vendor.category,
                "rating": vendor.rating,
                "description": vendor.description,
                "products": [item_to_dict(i) for i in items],
            },
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0
