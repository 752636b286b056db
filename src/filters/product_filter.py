# src/filters/product_filter.py

"""Inventory table filtering by category, stock status and search text."""

import logging

from src.models.product import Product, StockStatus

logger = logging.getLogger("stock_tracker.filters")


class ProductFilter:
    """Filters that narrow the inventory table; each keeps input order."""

    @staticmethod
    def by_category(
        products: list[Product], category: str | None
    ) -> list[Product]:
        """Keep products whose category equals *category* exactly.

        ``None`` disables the filter; ``""`` selects uncategorised products.
        """
        if category is None:
            return products
        return [p for p in products if p.category == category]

    @staticmethod
    def by_stock_status(
        products: list[Product], status: StockStatus | str | None
    ) -> list[Product]:
        """Keep products in the given stock bucket.

        *status* may be a :class:`StockStatus` or its string value
        (``"low"``, ``"medium"``, ``"high"``).
        """
        if not status:
            return products
        bucket = StockStatus(status)
        return [p for p in products if p.status is bucket]

    @staticmethod
    def by_search(
        products: list[Product], query: str | None
    ) -> list[Product]:
        """Case-insensitive substring match on name, SKU and category."""
        if not query:
            return products

        needle = query.lower()
        return [
            p
            for p in products
            if needle in p.name.lower()
            or needle in p.sku.lower()
            or needle in p.category.lower()
        ]

    @classmethod
    def apply(
        cls,
        products: list[Product],
        category: str | None = None,
        stock: StockStatus | str | None = None,
        query: str | None = None,
    ) -> list[Product]:
        """Apply every active filter (logical AND)."""
        kept = cls.by_category(products, category)
        kept = cls.by_stock_status(kept, stock)
        kept = cls.by_search(kept, query)

        if len(kept) != len(products):
            logger.debug(
                "Filtered %d -> %d products "
                "(category=%r, stock=%r, query=%r)",
                len(products),
                len(kept),
                category,
                stock,
                query,
            )
        return kept
