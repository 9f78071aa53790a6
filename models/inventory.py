"""
Inventory and sales data models for the retail dashboard.
Includes InventoryRecord, SalesRecord and the derived BusinessMetrics dataclasses.
"""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class InventoryRecord:
    """
    A product line on hand. Stock and price are never negative.
    """

    id: str
    name: str
    category: str
    stock: int
    price: float
    size: str | None = None
    gender: str | None = None

    def __post_init__(self):
        if self.stock < 0:
            raise ValueError(f"stock must be >= 0 (record {self.id})")
        if self.price < 0:
            raise ValueError(f"price must be >= 0 (record {self.id})")


@dataclass(frozen=True)
class SalesRecord:
    """A single sale, attributed to a product category and a region."""

    date: date
    amount: float
    category: str
    region: str

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError("amount must be >= 0")


@dataclass(frozen=True)
class CategorySales:
    category: str
    sales: float


@dataclass(frozen=True)
class CategoryStock:
    category: str
    stock: int


@dataclass(frozen=True)
class RegionSales:
    region: str
    sales: float


@dataclass(frozen=True)
class BusinessMetrics:
    """
    Metrics derived on demand from the sales and inventory sets.

    ``top_categories`` and ``regional_performance`` are ordered by sales,
    highest first; ties keep first-seen order.
    """

    total_sales: float
    average_order_value: float
    top_categories: list[CategorySales] = field(default_factory=list)
    stock_levels: list[CategoryStock] = field(default_factory=list)
    regional_performance: list[RegionSales] = field(default_factory=list)
