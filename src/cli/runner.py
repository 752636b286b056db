# src/cli/runner.py

"""Headless CLI commands: thin Rich-rendered wrappers over the store."""

import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from src.config.settings import Settings
from src.models.product import Product, StockStatus
from src.services.inventory_store import (
    CsvImportError,
    EmptyInventoryError,
    InventoryStore,
)
from src.storage.chart_exporter import export_stock_chart

logger = logging.getLogger("stock_tracker.cli")

# Stderr console for status messages so stdout stays clean for tables
_err = Console(stderr=True)

_STATUS_STYLES: dict[StockStatus, str] = {
    StockStatus.LOW: "red",
    StockStatus.MEDIUM: "yellow",
    StockStatus.HIGH: "green",
}


def _money(value: float) -> str:
    return f"{Settings.CURRENCY_SYMBOL}{value:,.2f}"


def status_markup(product: Product) -> str:
    """Rich markup for a product's stock status label."""
    status = product.status
    label = Settings.STATUS_LABELS[status.value]
    return f"[{_STATUS_STYLES[status]}]{label}[/{_STATUS_STYLES[status]}]"


def _print_products(products: list[Product], title: str) -> None:
    """Render the inventory table to stdout."""
    table = Table(
        title=title,
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim")
    table.add_column("Name", max_width=40)
    table.add_column("SKU", style="magenta")
    table.add_column("Category")
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Value", justify="right", style="green")
    table.add_column("Status", justify="center")

    for p in products:
        table.add_row(
            str(p.id),
            p.name,
            p.sku,
            p.category,
            str(p.quantity),
            _money(p.price),
            _money(p.line_value),
            status_markup(p),
        )

    Console().print(table)


def _confirm(question: str, assume_yes: bool) -> bool:
    if assume_yes:
        return True
    return Confirm.ask(question, console=_err, default=False)


def run_list(
    store: InventoryStore,
    category: str | None = None,
    stock: str | None = None,
    search: str | None = None,
) -> int:
    """Print the filtered inventory table."""
    products = store.list_filtered(
        category=category, stock=stock, query=search
    )
    if not products:
        _err.print("[yellow]No products found.[/yellow]")
        return 0
    _print_products(products, f"Inventory ({len(products)} products)")
    return 0


def run_add(store: InventoryStore, fields: dict[str, Any]) -> int:
    """Add one product from CLI options."""
    product = store.add(fields)
    _err.print(
        f"[green]✓ Added {product.name} "
        f"(id={product.id}, sku={product.sku})[/green]"
    )
    return 0


def run_edit(
    store: InventoryStore, product_id: int, fields: dict[str, Any]
) -> int:
    """Update the given fields of one product."""
    if not fields:
        _err.print("[yellow]Nothing to update.[/yellow]")
        return 1
    product = store.update(product_id, fields)
    if product is None:
        _err.print(f"[yellow]No product with id {product_id}.[/yellow]")
        return 1
    _err.print(f"[green]✓ Updated {product.name}[/green]")
    return 0


def run_delete(
    store: InventoryStore, product_id: int, assume_yes: bool = False
) -> int:
    """Delete one product after confirmation."""
    product = store.get(product_id)
    if product is None:
        _err.print(f"[yellow]No product with id {product_id}.[/yellow]")
        return 1
    if not _confirm(f"Delete {product.name} ({product.sku})?", assume_yes):
        _err.print("[dim]Cancelled.[/dim]")
        return 0
    store.delete(product_id)
    _err.print(f"[green]✓ Deleted {product.name}[/green]")
    return 0


def run_clear(store: InventoryStore, assume_yes: bool = False) -> int:
    """Delete every product after confirmation."""
    if not _confirm(
        "Delete all products? This cannot be undone.", assume_yes
    ):
        _err.print("[dim]Cancelled.[/dim]")
        return 0
    removed = store.clear()
    _err.print(f"[green]✓ Cleared {removed} products[/green]")
    return 0


def run_dashboard(store: InventoryStore) -> int:
    """Print headline metrics, recent products and category stock bars."""
    metrics = store.dashboard_metrics()
    console = Console()

    summary = Table(title="Dashboard", title_style="bold cyan")
    summary.add_column("Total Products", justify="right")
    summary.add_column("Low Stock", justify="right", style="red")
    summary.add_column("Total Value", justify="right", style="green")
    summary.add_column("Categories", justify="right")
    summary.add_row(
        str(metrics.total_products),
        str(metrics.low_stock_count),
        _money(metrics.total_value),
        str(metrics.category_count),
    )
    console.print(summary)

    recent = store.recent_products()
    if recent:
        recent_table = Table(title="Recent Products", title_style="bold")
        recent_table.add_column("Name")
        recent_table.add_column("SKU", style="magenta")
        recent_table.add_column("Qty", justify="right")
        for p in recent:
            recent_table.add_row(p.name, p.sku, f"{p.quantity} units")
        console.print(recent_table)
    else:
        console.print("[dim]No products yet[/dim]")

    bars = store.category_stock_bars()
    if bars:
        bar_table = Table(title="Stock by Category", title_style="bold")
        bar_table.add_column("Category")
        bar_table.add_column("Level")
        bar_table.add_column("Units", justify="right")
        for bar in bars:
            filled = min(int(bar.percentage / 5), 20)
            bar_table.add_row(
                bar.category,
                "[cyan]" + "█" * filled + "[/cyan]" + "░" * (20 - filled),
                str(bar.total_quantity),
            )
        console.print(bar_table)

    return 0


def run_reports(store: InventoryStore) -> int:
    """Print the low-stock, top-products, category and summary reports."""
    report = store.reports()
    console = Console()

    low = Table(title="Low Stock Alert", title_style="bold red")
    low.add_column("Name")
    low.add_column("SKU", style="magenta")
    low.add_column("Qty / Min", justify="right")
    for p in report.low_stock:
        low.add_row(p.name, p.sku, f"{p.quantity} / {p.min_stock}")
    if report.low_stock:
        console.print(low)
    else:
        console.print("[green]All products have sufficient stock[/green]")

    top = Table(title="Top Products by Value", title_style="bold")
    top.add_column("Name")
    top.add_column("Value", justify="right", style="green")
    for p in report.top_products:
        top.add_row(p.name, _money(p.line_value))
    console.print(top)

    cats = Table(title="Categories", title_style="bold")
    cats.add_column("Category")
    cats.add_column("Products", justify="right")
    for c in report.categories:
        cats.add_row(c.category, f"{c.count} products")
    console.print(cats)

    s = report.summary
    summary = Table(title="Summary", title_style="bold cyan")
    summary.add_column("Metric")
    summary.add_column("Value", justify="right")
    summary.add_row("Total Products", str(s.total_products))
    summary.add_row("Total Quantity", str(s.total_quantity))
    summary.add_row("Total Inventory Value", _money(s.total_value))
    summary.add_row("Average Unit Price", _money(s.average_unit_price))
    console.print(summary)

    return 0


def run_export(store: InventoryStore, output_dir: str | None = None) -> int:
    """Write the dated CSV export."""
    directory = Path(output_dir) if output_dir else None
    try:
        path = store.export_csv(directory)
    except EmptyInventoryError:
        _err.print("[yellow]No products to export.[/yellow]")
        return 1
    except OSError as exc:
        logger.error("Export failed: %s", exc, exc_info=True)
        _err.print(f"[red]Export failed: {exc}[/red]")
        return 1
    _err.print(f"[green]✓ Exported {len(store)} products → {path}[/green]")
    return 0


async def run_import(store: InventoryStore, file_path: str) -> int:
    """Import products from a CSV file."""
    try:
        imported = await store.import_file(Path(file_path))
    except CsvImportError as exc:
        logger.error("Import failed: %s", exc)
        _err.print(f"[red]Error importing file: {exc}[/red]")
        return 1
    _err.print(f"[green]✓ Imported {len(imported)} products[/green]")
    return 0


def run_chart(store: InventoryStore, open_browser: bool = True) -> int:
    """Export the stock overview chart as HTML."""
    path = export_stock_chart(
        store.category_stock_bars(),
        store.top_products(),
        open_browser=open_browser,
    )
    if path is None:
        _err.print("[yellow]No products to chart.[/yellow]")
        return 1
    _err.print(f"[green]✓ Chart saved → {path}[/green]")
    return 0
