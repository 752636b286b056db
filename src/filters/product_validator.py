# src/filters/product_validator.py

"""Import validation: drop rows missing a name or SKU."""

import logging

from src.models.product import Product

logger = logging.getLogger("stock_tracker.filters")


class ProductValidator:
    """Validate imported products and drop those missing identity fields."""

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products with a blank name or a blank SKU.

        Numeric fields are not checked; they were already coerced.
        Returns the valid products and the count of dropped rows.
        """
        valid: list[Product] = []
        dropped = 0

        for product in products:
            if not product.name.strip():
                logger.debug(
                    "Dropped imported row with empty name (sku=%s)",
                    product.sku,
                )
                dropped += 1
                continue
            if not product.sku.strip():
                logger.debug(
                    "Dropped imported row with empty SKU (name=%s)",
                    product.name,
                )
                dropped += 1
                continue
            valid.append(product)

        if dropped:
            logger.info("Import validation dropped %d rows", dropped)

        return valid, dropped
