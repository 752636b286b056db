# src/ui/app.py

"""Terminal UI for the stock_tracker inventory store."""

import logging
from pathlib import Path
from typing import Any, cast

from rich.table import Table
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import (
    Button,
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Select,
    Static,
    TabbedContent,
    TabPane,
)

from src.config.settings import Settings
from src.models.product import Product, StockStatus
from src.services.inventory_store import (
    CsvImportError,
    EmptyInventoryError,
    InventoryStore,
)
from src.storage.chart_exporter import export_stock_chart

logger = logging.getLogger("stock_tracker.ui")

_STATUS_STYLES: dict[StockStatus, str] = {
    StockStatus.LOW: "bold red",
    StockStatus.MEDIUM: "bold yellow",
    StockStatus.HIGH: "bold green",
}

_FORM_FIELDS: list[tuple[str, str]] = [
    ("name", "Product name"),
    ("sku", "SKU"),
    ("category", "Category"),
    ("quantity", "Quantity"),
    ("price", "Unit price"),
    ("min_stock", "Minimum stock"),
    ("description", "Description"),
]

# The edit dialog leaves the description alone
_EDIT_FIELDS = _FORM_FIELDS[:-1]


def _money(value: float) -> str:
    return f"{Settings.CURRENCY_SYMBOL}{value:,.2f}"


def _status_text(product: Product) -> Text:
    status = product.status
    return Text(
        Settings.STATUS_LABELS[status.value], style=_STATUS_STYLES[status]
    )


def _report_table(title: str, rows: list[tuple[str, str]], empty: str) -> Any:
    """Two-column label/value table, or a dim placeholder when empty."""
    if not rows:
        return Text(f"{title}\n{empty}", style="dim")
    table = Table(title=title, show_header=False, expand=True)
    table.add_column("Label")
    table.add_column("Value", justify="right", style="bold")
    for label, value in rows:
        table.add_row(label, value)
    return table


class ConfirmScreen(ModalScreen[bool]):
    """Yes/no confirmation dialog."""

    def __init__(self, question: str) -> None:
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        yield Grid(
            Label(Text(self.question), id="question"),
            Button("Yes", variant="error", id="confirm_yes"),
            Button("Cancel", variant="primary", id="confirm_no"),
            id="dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm_yes")


class EditProductScreen(ModalScreen[dict[str, str] | None]):
    """Modal form pre-filled with a product's editable fields."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, product: Product) -> None:
        super().__init__()
        self.product = product

    def compose(self) -> ComposeResult:
        values = {
            "name": self.product.name,
            "sku": self.product.sku,
            "category": self.product.category,
            "quantity": str(self.product.quantity),
            "price": str(self.product.price),
            "min_stock": str(self.product.min_stock),
        }
        inputs = [
            Input(value=values[field], placeholder=label, id=f"edit_{field}")
            for field, label in _EDIT_FIELDS
        ]
        yield Vertical(
            Static(Text(f"Edit {self.product.name}"), id="edit_title"),
            *inputs,
            Horizontal(
                Button("Save", variant="primary", id="edit_save"),
                Button("Cancel", id="edit_cancel"),
                id="edit_buttons",
            ),
            id="edit_dialog",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "edit_save":
            self.dismiss(
                {
                    field: self.query_one(f"#edit_{field}", Input).value
                    for field, _label in _EDIT_FIELDS
                }
            )
        else:
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class StockTrackerApp(App[object]):
    """Terminal UI for the stock_tracker inventory store."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("e", "edit_selected", "Edit"),
        Binding("d", "delete_selected", "Delete"),
        Binding("x", "export", "Export CSV"),
        Binding("c", "copy_sku", "Copy SKU"),
        Binding("g", "chart", "Chart"),
    ]

    def __init__(self, store: InventoryStore) -> None:
        super().__init__()
        self.store = store
        self.visible_products: list[Product] = []
        self.current_edit_id: int | None = None

    # ── Layout ───────────────────────────────────────────

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        with TabbedContent(id="tabs", initial="dashboard_tab"):
            with TabPane("Dashboard", id="dashboard_tab"):
                yield Horizontal(
                    Static(id="metric_total", classes="metric"),
                    Static(id="metric_low", classes="metric"),
                    Static(id="metric_value", classes="metric"),
                    Static(id="metric_categories", classes="metric"),
                    id="metrics",
                )
                yield Horizontal(
                    Static(id="recent_products", classes="panel"),
                    Static(id="stock_status", classes="panel"),
                )
            with TabPane("Inventory", id="inventory_tab"):
                yield Horizontal(
                    Select[str](
                        [],
                        prompt="All Categories",
                        id="category_filter",
                    ),
                    Select[str](
                        [
                            (Settings.STATUS_LABELS[s.value], s.value)
                            for s in StockStatus
                        ],
                        prompt="All Stock Levels",
                        id="stock_filter",
                    ),
                    Input(
                        placeholder="Search name, SKU, category...",
                        id="search_input",
                    ),
                    id="filter_bar",
                )
                yield cast(
                    DataTable[str | Text],
                    DataTable(
                        id="inventory_table",
                        zebra_stripes=True,
                        cursor_type="row",
                    ),
                )
            with TabPane("Add Product", id="add_tab"):
                yield Vertical(
                    *[
                        Input(placeholder=label, id=f"add_{field}")
                        for field, label in _FORM_FIELDS
                    ],
                    Button("Add Product", variant="primary", id="add_btn"),
                    id="add_form",
                )
            with TabPane("Reports", id="reports_tab"):
                yield Grid(
                    Static(id="low_stock_report", classes="report"),
                    Static(id="top_products_report", classes="report"),
                    Static(id="category_report", classes="report"),
                    Static(id="summary_report", classes="report"),
                    id="reports_grid",
                )
            with TabPane("Settings", id="settings_tab"):
                yield Vertical(
                    Button("Export CSV", id="export_btn"),
                    Horizontal(
                        Input(
                            placeholder="Path to CSV file", id="import_path"
                        ),
                        Button("Import CSV", id="import_btn"),
                        id="import_bar",
                    ),
                    Button("Export Chart", id="chart_btn"),
                    Button("Clear All Data", variant="error", id="clear_btn"),
                    id="settings_panel",
                )
        yield Footer()

    def on_mount(self) -> None:
        """Configure the inventory table and render the initial state."""
        self._table().add_columns(
            "Name", "SKU", "Category", "Qty", "Price", "Value", "Status"
        )
        self.refresh_all()

    def _table(self) -> DataTable[str | Text]:
        return cast(
            DataTable[str | Text],
            self.query_one("#inventory_table", DataTable),
        )

    # ── Rendering ────────────────────────────────────────

    def refresh_all(self) -> None:
        """Re-render every view after a state change."""
        self.refresh_dashboard()
        self.refresh_category_filter()
        self.refresh_table()
        self.refresh_reports()

    def refresh_dashboard(self) -> None:
        metrics = self.store.dashboard_metrics()
        self.query_one("#metric_total", Static).update(
            f"Total Products\n[b]{metrics.total_products}[/b]"
        )
        self.query_one("#metric_low", Static).update(
            f"Low Stock\n[b red]{metrics.low_stock_count}[/b red]"
        )
        self.query_one("#metric_value", Static).update(
            f"Total Value\n[b green]{_money(metrics.total_value)}[/b green]"
        )
        self.query_one("#metric_categories", Static).update(
            f"Categories\n[b]{metrics.category_count}[/b]"
        )

        self.query_one("#recent_products", Static).update(
            _report_table(
                "Recent Products",
                [
                    (f"{p.name} ({p.sku})", f"{p.quantity} units")
                    for p in self.store.recent_products()
                ],
                "No products yet",
            )
        )

        bar_rows: list[tuple[str, str]] = []
        for bar in self.store.category_stock_bars():
            filled = min(int(bar.percentage / 5), 20)
            bar_rows.append(
                (
                    bar.category,
                    "█" * filled + "░" * (20 - filled)
                    + f" {bar.total_quantity}",
                )
            )
        self.query_one("#stock_status", Static).update(
            _report_table("Stock Status", bar_rows, "No data available")
        )

    def refresh_category_filter(self) -> None:
        """Rebuild category options, keeping a still-valid selection."""
        select = cast(
            Select[str], self.query_one("#category_filter", Select)
        )
        current = select.value
        categories = self.store.categories()
        select.set_options((c or "(none)", c) for c in categories)
        if isinstance(current, str) and current in categories:
            select.value = current

    def refresh_table(self) -> None:
        """Fill the DataTable with the filtered products."""
        category = self.query_one("#category_filter", Select).value
        stock = self.query_one("#stock_filter", Select).value
        query = self.query_one("#search_input", Input).value.strip()

        self.visible_products = self.store.list_filtered(
            category=category if isinstance(category, str) else None,
            stock=stock if isinstance(stock, str) else None,
            query=query or None,
        )

        table = self._table()
        table.clear()
        for p in self.visible_products:
            table.add_row(
                p.name,
                p.sku,
                p.category,
                str(p.quantity),
                _money(p.price),
                _money(p.line_value),
                _status_text(p),
                key=str(p.id),
            )

    def refresh_reports(self) -> None:
        report = self.store.reports()
        self.query_one("#low_stock_report", Static).update(
            _report_table(
                "Low Stock Alert",
                [
                    (f"{p.name} ({p.sku})", f"{p.quantity} / {p.min_stock}")
                    for p in report.low_stock
                ],
                "All products have sufficient stock",
            )
        )
        self.query_one("#top_products_report", Static).update(
            _report_table(
                "Top Products by Value",
                [(p.name, _money(p.line_value)) for p in report.top_products],
                "No products",
            )
        )
        self.query_one("#category_report", Static).update(
            _report_table(
                "Categories",
                [
                    (c.category, f"{c.count} products")
                    for c in report.categories
                ],
                "No categories",
            )
        )
        s = report.summary
        self.query_one("#summary_report", Static).update(
            _report_table(
                "Summary",
                [
                    ("Total Products", str(s.total_products)),
                    ("Total Quantity", str(s.total_quantity)),
                    ("Total Inventory Value", _money(s.total_value)),
                    ("Average Unit Price", _money(s.average_unit_price)),
                ],
                "",
            )
        )

    # ── Events ───────────────────────────────────────────

    def on_select_changed(self, event: Select.Changed) -> None:
        """Re-filter when a filter dropdown changes."""
        self.refresh_table()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Live search as the user types."""
        if event.input.id == "search_input":
            self.refresh_table()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        button_id = event.button.id
        if button_id == "add_btn":
            self.add_product()
        elif button_id == "export_btn":
            self.action_export()
        elif button_id == "import_btn":
            await self.import_csv()
        elif button_id == "chart_btn":
            self.action_chart()
        elif button_id == "clear_btn":
            self.confirm_clear()

    def selected_product(self) -> Product | None:
        """The product under the table cursor, if any."""
        row = self._table().cursor_row
        if 0 <= row < len(self.visible_products):
            return self.visible_products[row]
        return None

    # ── Store operations ─────────────────────────────────

    def add_product(self) -> None:
        """Add a product from the form, then reset the form."""
        fields = {
            field: self.query_one(f"#add_{field}", Input).value
            for field, _label in _FORM_FIELDS
        }
        if not fields["name"].strip() or not fields["sku"].strip():
            self.notify("Name and SKU are required", severity="warning")
            return

        self.store.add(fields)
        for field, _label in _FORM_FIELDS:
            self.query_one(f"#add_{field}", Input).value = ""
        self.notify("Product added successfully!")
        self.refresh_all()

    def action_edit_selected(self) -> None:
        """Open the edit dialog for the selected product."""
        product = self.selected_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return
        self.current_edit_id = product.id
        self.push_screen(EditProductScreen(product), self._finish_edit)

    def _finish_edit(self, fields: dict[str, str] | None) -> None:
        product_id = self.current_edit_id
        self.current_edit_id = None
        if fields is None or product_id is None:
            return
        if self.store.update(product_id, fields) is None:
            self.notify("Product no longer exists", severity="warning")
            return
        self.notify("Product updated successfully!")
        self.refresh_all()

    def action_delete_selected(self) -> None:
        """Ask for confirmation, then delete the selected product."""
        product = self.selected_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return

        def _on_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                return
            self.store.delete(product.id)
            self.notify("Product deleted successfully!")
            self.refresh_all()

        self.push_screen(
            ConfirmScreen(
                f"Are you sure you want to delete {product.name}?"
            ),
            _on_confirm,
        )

    def confirm_clear(self) -> None:
        """Ask for confirmation, then delete every product."""

        def _on_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                return
            self.store.clear()
            self.notify("All data cleared")
            self.refresh_all()

        self.push_screen(
            ConfirmScreen(
                "Are you sure you want to delete all products? "
                "This cannot be undone."
            ),
            _on_confirm,
        )

    def action_export(self) -> None:
        """Export the inventory to a dated CSV file."""
        try:
            path = self.store.export_csv()
        except EmptyInventoryError:
            self.notify("No products to export", severity="warning")
            return
        except OSError as e:
            logger.error("Failed to export inventory", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")
            return
        logger.info("Exported inventory to %s", path)
        self.notify(f"Data exported to {path}")

    async def import_csv(self) -> None:
        """Import products from the CSV path typed in the settings tab."""
        path_input = self.query_one("#import_path", Input)
        raw_path = path_input.value.strip()
        if not raw_path:
            self.notify("Enter a CSV file path", severity="warning")
            return

        try:
            imported = await self.store.import_file(Path(raw_path))
        except CsvImportError as e:
            logger.error("Import failed: %s", e)
            self.notify("Error importing file", severity="error")
            return

        path_input.value = ""
        self.notify(f"Imported {len(imported)} products")
        self.refresh_all()

    def action_chart(self) -> None:
        """Export the stock overview chart and open it in a browser."""
        try:
            path = export_stock_chart(
                self.store.category_stock_bars(),
                self.store.top_products(),
            )
        except Exception as e:
            logger.error("Failed to export chart", exc_info=True)
            self.notify(f"Chart failed: {e}", severity="error")
            return
        if path is None:
            self.notify("No products to chart", severity="warning")
            return
        self.notify(f"Chart saved to {path}")

    def action_copy_sku(self) -> None:
        """Copy the selected product's SKU to the clipboard."""
        product = self.selected_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return
        try:
            import pyperclip  # type: ignore[import-untyped]

            pyperclip.copy(product.sku)
            self.notify("SKU copied")
        except Exception:
            logger.error("Failed to copy SKU to clipboard", exc_info=True)
            self.notify("Install pyperclip", severity="warning")
