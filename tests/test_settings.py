# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from src.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_storage_key_is_non_empty(self) -> None:
        """STORAGE_KEY must be a non-empty string."""
        self.assertIsInstance(Settings.STORAGE_KEY, str)
        self.assertTrue(Settings.STORAGE_KEY)

    def test_view_limits_positive(self) -> None:
        """Top / recent / status-bar limits must be >= 1."""
        self.assertGreaterEqual(Settings.TOP_PRODUCTS_LIMIT, 1)
        self.assertGreaterEqual(Settings.RECENT_PRODUCTS_LIMIT, 1)
        self.assertGreaterEqual(Settings.STATUS_BAR_CATEGORY_LIMIT, 1)

    def test_csv_headers(self) -> None:
        """The CSV header has the eight export columns in order."""
        self.assertEqual(
            ",".join(Settings.CSV_HEADERS),
            "ID,Name,SKU,Category,Quantity,Unit Price,Min Stock,Description",
        )

    def test_status_labels_cover_buckets(self) -> None:
        """Every stock bucket has a display label."""
        self.assertEqual(
            set(Settings.STATUS_LABELS), {"low", "medium", "high"}
        )

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.DATA_DIR, Path)
        self.assertIsInstance(Settings.STORE_DB_PATH, Path)
        self.assertIsInstance(Settings.EXPORTS_DIR, Path)
        self.assertIsInstance(Settings.CHARTS_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_store_db_inside_data_dir(self) -> None:
        """The database file lives in the data directory."""
        self.assertEqual(Settings.STORE_DB_PATH.parent, Settings.DATA_DIR)


if __name__ == "__main__":
    unittest.main()
