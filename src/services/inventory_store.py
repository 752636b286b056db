# src/services/inventory_store.py

"""The inventory store: CRUD, derived views and CSV import/export."""

import json
import logging
import time
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.filters.product_filter import ProductFilter
from src.filters.product_validator import ProductValidator
from src.models.product import Product, StockStatus, to_float, to_int
from src.models.report import (
    CategoryBar,
    CategoryCount,
    DashboardMetrics,
    InventoryReport,
    SummaryReport,
)
from src.storage.csv_codec import (
    CsvImportError,
    EmptyInventoryError,
    decode_rows,
    encode_products,
    read_import_file,
    write_export,
)
from src.storage.local_store import LocalStore

__all__ = ["CsvImportError", "EmptyInventoryError", "InventoryStore"]

logger = logging.getLogger("stock_tracker.store")

_TEXT_FIELDS = ("name", "sku", "category", "description")
_INT_FIELDS = ("quantity", "min_stock")
_FLOAT_FIELDS = ("price",)


def _coerce_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Keep editable fields only, coercing numerics leniently."""
    clean: dict[str, Any] = {}
    for name, value in fields.items():
        if name in _TEXT_FIELDS:
            clean[name] = "" if value is None else str(value)
        elif name in _INT_FIELDS:
            clean[name] = to_int(value)
        elif name in _FLOAT_FIELDS:
            clean[name] = to_float(value)
    return clean


class InventoryStore:
    """Owns the ordered product list and persists it on every mutation.

    The whole collection is stored as one JSON array under
    ``Settings.STORAGE_KEY``; it is read once at construction and
    overwritten in full after each change.
    """

    def __init__(
        self,
        storage: LocalStore,
        storage_key: str | None = None,
    ) -> None:
        self._storage = storage
        self._key = storage_key or Settings.STORAGE_KEY
        self._products: list[Product] = self._load()
        self._last_id = max((p.id for p in self._products), default=0)
        logger.info(
            "InventoryStore ready with %d products (key=%s)",
            len(self._products),
            self._key,
        )

    def __len__(self) -> int:
        return len(self._products)

    @property
    def products(self) -> list[Product]:
        """A shallow copy of the collection in insertion order."""
        return list(self._products)

    # ── Persistence ──────────────────────────────────────

    def _load(self) -> list[Product]:
        raw = self._storage.get(self._key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning(
                "Stored inventory under '%s' is not valid JSON, "
                "starting empty: %s",
                self._key,
                exc,
            )
            return []

        if not isinstance(data, list):
            logger.warning(
                "Stored inventory under '%s' is not a list, starting empty",
                self._key,
            )
            return []

        products: list[Product] = []
        for entry in data:
            try:
                products.append(Product.from_dict(entry))
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning("Skipping unreadable stored product: %s", exc)
        return products

    def _save(self) -> None:
        payload = json.dumps(
            [p.to_dict() for p in self._products], ensure_ascii=False
        )
        self._storage.set(self._key, payload)

    def _next_id(self) -> int:
        """Millisecond-clock id, bumped past the last issued id."""
        candidate = int(time.time() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _build(self, fields: dict[str, Any]) -> Product:
        values: dict[str, Any] = {"name": "", "sku": ""}
        values.update(_coerce_fields(fields))
        return Product(id=self._next_id(), **values)

    # ── CRUD ─────────────────────────────────────────────

    def add(self, fields: dict[str, Any]) -> Product:
        """Create a product from *fields*, append it and persist.

        Unparseable numeric fields become 0; nothing is rejected.
        """
        product = self._build(fields)
        self._products.append(product)
        self._save()
        logger.info(
            "Added product id=%d sku=%s name=%s",
            product.id,
            product.sku,
            product.name,
        )
        return product

    def get(self, product_id: int) -> Product | None:
        """Return the product with *product_id*, or ``None``."""
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def update(
        self, product_id: int, fields: dict[str, Any]
    ) -> Product | None:
        """Mutate the listed fields of a product in place and persist.

        Unknown ids are a silent no-op and return ``None``. ``id`` and
        ``created_at`` are never changed.
        """
        product = self.get(product_id)
        if product is None:
            logger.debug("Update skipped, no product with id=%s", product_id)
            return None

        for name, value in _coerce_fields(fields).items():
            setattr(product, name, value)
        self._save()
        logger.info("Updated product id=%d", product_id)
        return product

    def delete(self, product_id: int) -> bool:
        """Remove the product with *product_id*. Returns whether it existed."""
        before = len(self._products)
        self._products = [p for p in self._products if p.id != product_id]
        removed = len(self._products) != before
        self._save()
        if removed:
            logger.info("Deleted product id=%d", product_id)
        else:
            logger.debug("Delete skipped, no product with id=%s", product_id)
        return removed

    def clear(self) -> int:
        """Remove every product. Returns how many were removed."""
        count = len(self._products)
        self._products = []
        self._save()
        logger.info("Cleared inventory (%d products removed)", count)
        return count

    # ── Derived views ────────────────────────────────────

    def list_filtered(
        self,
        category: str | None = None,
        stock: StockStatus | str | None = None,
        query: str | None = None,
    ) -> list[Product]:
        """Products matching every given filter, in insertion order."""
        return ProductFilter.apply(
            self._products, category=category, stock=stock, query=query
        )

    def categories(self) -> list[str]:
        """Distinct category labels in first-seen order."""
        return list(dict.fromkeys(p.category for p in self._products))

    def total_value(self) -> float:
        return sum((p.line_value for p in self._products), 0.0)

    def low_stock(self) -> list[Product]:
        return [p for p in self._products if p.status is StockStatus.LOW]

    def dashboard_metrics(self) -> DashboardMetrics:
        """Product count, low-stock count, inventory value, category count."""
        return DashboardMetrics(
            total_products=len(self._products),
            low_stock_count=len(self.low_stock()),
            total_value=self.total_value(),
            category_count=len(self.categories()),
        )

    def recent_products(self, limit: int | None = None) -> list[Product]:
        """The last *limit* products added, newest first."""
        count = Settings.RECENT_PRODUCTS_LIMIT if limit is None else limit
        if count <= 0:
            return []
        return self._products[-count:][::-1]

    def category_stock_bars(
        self, limit: int | None = None
    ) -> list[CategoryBar]:
        """Total quantity for the first *limit* categories.

        Percentages are relative to the largest single-product quantity
        (never less than 1), so a category bar can exceed 100.
        """
        count = Settings.STATUS_BAR_CATEGORY_LIMIT if limit is None else limit
        max_qty = max([p.quantity for p in self._products] + [1])

        totals: dict[str, int] = {}
        for p in self._products:
            totals[p.category] = totals.get(p.category, 0) + p.quantity

        return [
            CategoryBar(
                category=category,
                total_quantity=total,
                percentage=total / max_qty * 100,
            )
            for category, total in list(totals.items())[:count]
        ]

    def top_products(self, limit: int | None = None) -> list[Product]:
        """Products by descending line value, without reordering the store."""
        count = Settings.TOP_PRODUCTS_LIMIT if limit is None else limit
        ranked = sorted(
            self._products, key=lambda p: p.line_value, reverse=True
        )
        return ranked[:count]

    def category_counts(self) -> list[CategoryCount]:
        """Product count per category, first-seen order, uncapped."""
        counts: dict[str, int] = {}
        for p in self._products:
            counts[p.category] = counts.get(p.category, 0) + 1
        return [CategoryCount(category=c, count=n) for c, n in counts.items()]

    def summary(self) -> SummaryReport:
        total_quantity = sum(p.quantity for p in self._products)
        total_value = self.total_value()
        return SummaryReport(
            total_products=len(self._products),
            total_quantity=total_quantity,
            total_value=total_value,
            average_unit_price=(
                total_value / total_quantity if total_quantity else 0.0
            ),
        )

    def reports(self) -> InventoryReport:
        """Low stock, top products by value, category counts and summary."""
        return InventoryReport(
            summary=self.summary(),
            low_stock=self.low_stock(),
            top_products=self.top_products(),
            categories=self.category_counts(),
        )

    # ── CSV ──────────────────────────────────────────────

    def to_csv(self) -> str:
        """Render the collection as CSV.

        Raises:
            EmptyInventoryError: If there are no products.
        """
        return encode_products(self._products)

    def export_csv(self, directory: Path | None = None) -> Path:
        """Write a dated CSV export file and return its path.

        Raises:
            EmptyInventoryError: If there are no products.
        """
        return write_export(self._products, directory)

    def from_csv(self, text: str) -> list[Product]:
        """Import products from CSV text and persist.

        Every row gets a fresh id and timestamp; rows without both a
        name and a SKU are dropped. Nothing is appended unless the
        whole text parsed.

        Raises:
            CsvImportError: If the text is not parseable CSV.
        """
        records = decode_rows(text)
        candidates = [self._build(record) for record in records]
        imported, dropped = ProductValidator.validate(candidates)

        if imported:
            self._products.extend(imported)
            self._save()

        logger.info(
            "Imported %d products from CSV (%d rows dropped)",
            len(imported),
            dropped,
        )
        return imported

    async def import_file(self, path: Path) -> list[Product]:
        """Read *path* in a worker thread, then import its contents.

        Raises:
            CsvImportError: If the file cannot be read or parsed.
        """
        text = await read_import_file(path)
        return self.from_csv(text)
