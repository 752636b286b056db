# src/config/settings.py

"""Central configuration for the stock_tracker application."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the stock_tracker application."""

    # --- Persistence ---
    STORAGE_KEY: str = os.getenv(
        "STOCK_TRACKER_STORAGE_KEY", "inventory_products"
    )

    # --- Derived views ---
    TOP_PRODUCTS_LIMIT: int = 5         # Reports: top-N by line value
    RECENT_PRODUCTS_LIMIT: int = 5      # Dashboard: newest products shown
    STATUS_BAR_CATEGORY_LIMIT: int = 5  # Dashboard: category stock bars

    # --- Display ---
    CURRENCY_SYMBOL: str = os.getenv("STOCK_TRACKER_CURRENCY", "$")
    STATUS_LABELS: dict[str, str] = {
        "low": "Low Stock",
        "medium": "Medium Stock",
        "high": "In Stock",
    }

    # --- CSV ---
    CSV_HEADERS: list[str] = [
        "ID",
        "Name",
        "SKU",
        "Category",
        "Quantity",
        "Unit Price",
        "Min Stock",
        "Description",
    ]

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    DATA_DIR: Path = Path(
        os.getenv("STOCK_TRACKER_DATA_DIR", str(BASE_DIR / "data"))
    )
    STORE_DB_PATH: Path = DATA_DIR / "inventory.db"
    EXPORTS_DIR: Path = DATA_DIR / "exports"
    CHARTS_DIR: Path = DATA_DIR / "charts"
    LOGS_DIR: Path = BASE_DIR / "logs"
