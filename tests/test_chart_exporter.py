# tests/test_chart_exporter.py

"""Tests for the Plotly stock chart exporter."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

from src.models.product import Product
from src.models.report import CategoryBar
from src.storage.chart_exporter import (
    build_stock_figure,
    export_stock_chart,
)


def _bars() -> list[CategoryBar]:
    return [
        CategoryBar(category="Tools", total_quantity=105, percentage=105.0),
        CategoryBar(category="Toys", total_quantity=15, percentage=15.0),
    ]


def _top() -> list[Product]:
    return [
        Product(id=1, name="Hammer", sku="H1", quantity=100, price=7.25),
        Product(id=2, name="Gadget", sku="G1", quantity=15, price=10.0),
    ]


class TestBuildStockFigure(unittest.TestCase):
    """Figure construction with real Plotly objects."""

    def test_two_bar_traces(self) -> None:
        """One trace for categories, one for top products."""
        fig = build_stock_figure(_bars(), _top())
        self.assertEqual(len(fig.data), 2)
        self.assertEqual(list(fig.data[0].x), ["Tools", "Toys"])
        self.assertEqual(list(fig.data[0].y), [105, 15])
        self.assertEqual(list(fig.data[1].x), ["Hammer", "Gadget"])
        self.assertEqual(list(fig.data[1].y), [725.0, 150.0])

    def test_blank_category_labelled(self) -> None:
        """An empty category label is shown as (none)."""
        fig = build_stock_figure(
            [CategoryBar(category="", total_quantity=1, percentage=100.0)],
            [],
        )
        self.assertEqual(list(fig.data[0].x), ["(none)"])


class TestExportStockChart(unittest.TestCase):
    """HTML export behaviour."""

    @patch("src.storage.chart_exporter.webbrowser")
    def test_generates_html_file(self, mock_wb: MagicMock) -> None:
        """Export should create an HTML file and open it."""
        with tempfile.TemporaryDirectory() as tmp:
            path = export_stock_chart(_bars(), _top(), directory=Path(tmp))
            self.assertIsNotNone(path)
            assert path is not None
            self.assertTrue(path.exists())
            self.assertTrue(path.name.startswith("stock_"))
            self.assertTrue(path.name.endswith(".html"))
        mock_wb.open.assert_called_once()

    @patch("src.storage.chart_exporter.webbrowser")
    def test_no_browser_flag(self, mock_wb: MagicMock) -> None:
        """open_browser=False skips the browser."""
        with tempfile.TemporaryDirectory() as tmp:
            export_stock_chart(
                _bars(), _top(), directory=Path(tmp), open_browser=False
            )
        mock_wb.open.assert_not_called()

    @patch("src.storage.chart_exporter.webbrowser")
    def test_empty_returns_none(self, mock_wb: MagicMock) -> None:
        """Nothing to plot returns None without writing."""
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(
                export_stock_chart([], [], directory=Path(tmp))
            )
            self.assertEqual(list(Path(tmp).iterdir()), [])
        mock_wb.open.assert_not_called()

    @patch("src.storage.chart_exporter.webbrowser")
    def test_default_directory_from_settings(
        self, _mock_wb: MagicMock
    ) -> None:
        """Without a directory the configured charts dir is used."""
        from src.config.settings import Settings

        path = export_stock_chart(_bars(), _top(), open_browser=False)
        assert path is not None
        self.assertEqual(path.parent, Settings.CHARTS_DIR)


if __name__ == "__main__":
    unittest.main()
