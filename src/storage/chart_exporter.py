# src/storage/chart_exporter.py

"""Generate an interactive Plotly HTML stock chart from the inventory."""

import importlib
import logging
import webbrowser
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import Any

from src.config.settings import Settings
from src.models.product import Product
from src.models.report import CategoryBar

logger = logging.getLogger("stock_tracker.chart")


def _get_plotly_go() -> ModuleType:
    """Import plotly.graph_objects lazily."""
    return importlib.import_module("plotly.graph_objects")


def _get_make_subplots() -> Any:
    """Import plotly.subplots.make_subplots lazily."""
    return importlib.import_module("plotly.subplots").make_subplots


def _ensure_charts_dir(directory: Path | None = None) -> Path:
    """Create the charts directory if it doesn't exist."""
    target = directory or Settings.CHARTS_DIR
    target.mkdir(parents=True, exist_ok=True)
    return target


def build_stock_figure(
    bars: list[CategoryBar],
    top_products: list[Product],
) -> Any:
    """Two side-by-side bar charts: quantity per category, top line values."""
    go = _get_plotly_go()
    make_subplots = _get_make_subplots()
    currency = Settings.CURRENCY_SYMBOL

    fig: Any = make_subplots(
        rows=1,
        cols=2,
        subplot_titles=("Stock by Category", "Top Products by Value"),
    )
    fig.add_trace(
        go.Bar(
            x=[b.category or "(none)" for b in bars],
            y=[b.total_quantity for b in bars],
            name="Units",
            hovertemplate="%{x}<br>%{y} units<extra></extra>",
        ),
        row=1,
        col=1,
    )
    fig.add_trace(
        go.Bar(
            x=[p.name[:30] for p in top_products],
            y=[p.line_value for p in top_products],
            name="Value",
            hovertemplate=(
                f"%{{x}}<br>{currency}%{{y:,.2f}}<extra></extra>"
            ),
        ),
        row=1,
        col=2,
    )
    fig.update_layout(
        title="Inventory Overview",
        showlegend=False,
        template="plotly_white",
    )
    return fig


def export_stock_chart(
    bars: list[CategoryBar],
    top_products: list[Product],
    directory: Path | None = None,
    open_browser: bool = True,
) -> Path | None:
    """Write the stock overview chart as HTML and return its path.

    Returns ``None`` when there is nothing to plot.
    """
    if not bars:
        logger.warning("No inventory data for stock chart")
        return None

    fig = build_stock_figure(bars, top_products)

    charts_dir = _ensure_charts_dir(directory)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = charts_dir / f"stock_{stamp}.html"
    fig.write_html(str(filepath))
    logger.info("Stock chart saved to %s", filepath)

    if open_browser:
        webbrowser.open(filepath.as_uri())

    return filepath
