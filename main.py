# main.py

"""Entry point for the stock_tracker application (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys
from typing import Any

from src.config.logging_config import setup_logging
from src.services.inventory_store import InventoryStore
from src.storage.local_store import LocalStore

logger = logging.getLogger("stock_tracker.main")

_FIELD_OPTIONS: list[tuple[str, str, str]] = [
    ("--name", "name", "Product name."),
    ("--sku", "sku", "Stock-keeping unit code."),
    ("--category", "category", "Free-text category label."),
    ("--quantity", "quantity", "Units in stock."),
    ("--price", "price", "Unit price."),
    ("--min-stock", "min_stock", "Minimum-stock threshold."),
    ("--description", "description", "Free-text description."),
]


def _add_field_options(
    parser: argparse.ArgumentParser, required: tuple[str, ...] = ()
) -> None:
    """Attach one option per editable product field."""
    for flag, dest, help_text in _FIELD_OPTIONS:
        parser.add_argument(
            flag,
            dest=dest,
            default=None,
            required=dest in required,
            help=help_text,
        )


def _collect_fields(args: argparse.Namespace) -> dict[str, Any]:
    """Product fields explicitly given on the command line."""
    return {
        dest: getattr(args, dest)
        for _flag, dest, _help in _FIELD_OPTIONS
        if getattr(args, dest) is not None
    }


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="stock_tracker",
        description="Single-user inventory tracker.",
        epilog="Run without a command to launch the interactive TUI.",
    )
    sub = parser.add_subparsers(dest="command")

    list_cmd = sub.add_parser("list", help="Show the inventory table.")
    list_cmd.add_argument("--category", default=None)
    list_cmd.add_argument(
        "--stock", choices=["low", "medium", "high"], default=None
    )
    list_cmd.add_argument("--search", default=None)

    add_cmd = sub.add_parser("add", help="Add a product.")
    _add_field_options(add_cmd, required=("name", "sku"))

    edit_cmd = sub.add_parser("edit", help="Edit fields of a product.")
    edit_cmd.add_argument("product_id", type=int)
    _add_field_options(edit_cmd)

    delete_cmd = sub.add_parser("delete", help="Delete a product.")
    delete_cmd.add_argument("product_id", type=int)
    delete_cmd.add_argument("-y", "--yes", action="store_true")

    clear_cmd = sub.add_parser("clear", help="Delete all products.")
    clear_cmd.add_argument("-y", "--yes", action="store_true")

    sub.add_parser("dashboard", help="Show dashboard metrics.")
    sub.add_parser("reports", help="Show the four inventory reports.")

    export_cmd = sub.add_parser("export", help="Export to a dated CSV.")
    export_cmd.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Custom output directory (default: data/exports/).",
    )

    import_cmd = sub.add_parser("import", help="Import products from CSV.")
    import_cmd.add_argument("file")

    chart_cmd = sub.add_parser("chart", help="Export an HTML stock chart.")
    chart_cmd.add_argument(
        "--no-browser",
        action="store_false",
        dest="open_browser",
        help="Do not open the chart after writing it.",
    )
    return parser


def _run_tui(store: InventoryStore) -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import StockTrackerApp

    try:
        app = StockTrackerApp(store)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("stock_tracker TUI shutting down")


def _run_cli(store: InventoryStore, args: argparse.Namespace) -> int:
    """Dispatch one headless command and return its exit code."""
    from src.cli import runner

    if args.command == "list":
        return runner.run_list(store, args.category, args.stock, args.search)
    if args.command == "add":
        return runner.run_add(store, _collect_fields(args))
    if args.command == "edit":
        return runner.run_edit(store, args.product_id, _collect_fields(args))
    if args.command == "delete":
        return runner.run_delete(store, args.product_id, args.yes)
    if args.command == "clear":
        return runner.run_clear(store, args.yes)
    if args.command == "dashboard":
        return runner.run_dashboard(store)
    if args.command == "reports":
        return runner.run_reports(store)
    if args.command == "export":
        return runner.run_export(store, args.output_dir)
    if args.command == "import":
        return asyncio.run(runner.run_import(store, args.file))
    return runner.run_chart(store, args.open_browser)


def main() -> None:
    """Route to TUI (no command) or a headless CLI command."""
    log_file = setup_logging()
    logger.info("stock_tracker starting, log file: %s", log_file)

    args = _build_parser().parse_args()

    storage = LocalStore()
    try:
        store = InventoryStore(storage)
        if args.command is None:
            _run_tui(store)
            exit_code = 0
        else:
            exit_code = _run_cli(store, args)
    finally:
        storage.close()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
