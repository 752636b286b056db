# src/storage/csv_codec.py

"""CSV encoding, decoding and file I/O for inventory exports."""

import asyncio
import csv
import io
import logging
from datetime import date
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("stock_tracker.csv")

# Column order after the (ignored) ID column
IMPORT_FIELDS: list[str] = [
    "name",
    "sku",
    "category",
    "quantity",
    "price",
    "min_stock",
    "description",
]


class EmptyInventoryError(ValueError):
    """Raised when an export is requested for an empty inventory."""


class CsvImportError(ValueError):
    """Raised when import content cannot be read or parsed."""


def encode_products(products: list[Product]) -> str:
    """Render products as CSV text.

    The header row is written plain; every data field is double-quoted
    and embedded quotes are doubled.
    """
    if not products:
        raise EmptyInventoryError("No products to export")

    buffer = io.StringIO()
    csv.writer(buffer, lineterminator="\n").writerow(Settings.CSV_HEADERS)

    writer = csv.writer(
        buffer, quoting=csv.QUOTE_ALL, lineterminator="\n"
    )
    for p in products:
        writer.writerow(
            [
                p.id,
                p.name,
                p.sku,
                p.category,
                p.quantity,
                p.price,
                p.min_stock,
                p.description,
            ]
        )
    return buffer.getvalue()


def decode_rows(text: str) -> list[dict[str, Any]]:
    """Parse CSV text into raw field dicts keyed by ``IMPORT_FIELDS``.

    The first row is treated as a header and skipped, as are rows
    holding only whitespace. Column 0 (ID) is ignored; short rows are
    padded with empty strings. Values are kept verbatim, surrounding
    whitespace included.

    Raises:
        CsvImportError: If the text is not parseable CSV.
    """
    try:
        rows = list(csv.reader(io.StringIO(text, newline=""), strict=True))
    except csv.Error as exc:
        logger.warning("CSV parse failed: %s", exc)
        raise CsvImportError(f"Malformed CSV: {exc}") from exc

    records: list[dict[str, Any]] = []
    for row in rows[1:]:
        if not any(cell.strip() for cell in row):
            continue
        values = row[1:] + [""] * (len(IMPORT_FIELDS) + 1 - len(row))
        records.append(dict(zip(IMPORT_FIELDS, values)))

    logger.debug(
        "Decoded %d data rows from %d CSV lines", len(records), len(rows)
    )
    return records


def export_filename(on: date | None = None) -> str:
    """Dated export filename, e.g. ``inventory_2026-10-18.csv``."""
    return f"inventory_{(on or date.today()).isoformat()}.csv"


def write_export(
    products: list[Product], directory: Path | None = None
) -> Path:
    """Write products to a dated CSV file and return its path."""
    content = encode_products(products)

    target_dir = directory or Settings.EXPORTS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    filepath = target_dir / export_filename()

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        f.write(content)

    logger.info("Exported %d products to %s", len(products), filepath)
    return filepath


async def read_import_file(path: Path) -> str:
    """Read an import file's full text off the event loop.

    Raises:
        CsvImportError: If the file is missing, unreadable or not UTF-8.
    """
    try:
        return await asyncio.to_thread(path.read_text, encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read import file %s: %s", path, exc)
        raise CsvImportError(f"Cannot read {path.name}: {exc}") from exc
