# src/models/report.py

"""Derived, non-stored views over the product collection."""

from dataclasses import dataclass, field

from src.models.product import Product


@dataclass
class DashboardMetrics:
    """Headline numbers for the dashboard."""

    total_products: int
    low_stock_count: int
    total_value: float
    category_count: int


@dataclass
class CategoryBar:
    """Total quantity of one category, scaled against the largest product."""

    category: str
    total_quantity: int
    percentage: float


@dataclass
class CategoryCount:
    """Number of products carrying a category label."""

    category: str
    count: int


@dataclass
class SummaryReport:
    """Collection-wide totals."""

    total_products: int
    total_quantity: int
    total_value: float
    average_unit_price: float


@dataclass
class InventoryReport:
    """The four reports shown on the reports page."""

    summary: SummaryReport
    low_stock: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    top_products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    categories: list[CategoryCount] = field(
        default_factory=lambda: list[CategoryCount]()
    )
