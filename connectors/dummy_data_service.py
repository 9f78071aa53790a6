"""
Module: connectors.dummy_data_service

Provides the in-memory data layer for the apparel dashboard: the canonical
inventory and sales sets, filtering, grouping and business metrics.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import date
from typing import Any, TypeVar

from models.enums import ReportType
from models.errors import UnsupportedReportType
from models.inventory import (
    BusinessMetrics,
    CategorySales,
    CategoryStock,
    InventoryRecord,
    RegionSales,
    SalesRecord,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SAMPLE_INVENTORY: tuple[InventoryRecord, ...] = (
    InventoryRecord("101", "Abrigo de Lana", "ABRIGO", 45, 189.99, size="S", gender="Mujer"),
    InventoryRecord("102", "Buzo Deportivo", "BUZOS", 80, 55.50, size="M", gender="Mujer"),
    InventoryRecord("103", "Jeans Slim Fit", "JEANS TERMINADOS", 12, 79.90, size="L", gender="Hombre"),
    InventoryRecord("104", "Polo Clásico", "POLOS", 65, 35.00, size="XL", gender="Hombre"),
    InventoryRecord("105", "Vestido Floral", "VESTIDOS", 30, 95.99, size="XS", gender="Mujer"),
    InventoryRecord("106", "Bermuda de Baño", "ROPA DE BAÑO", 70, 25.99, size="10", gender="Niño"),
    InventoryRecord("107", "Falda Plisada", "FALDA", 40, 38.50, size="8", gender="Niña"),
    InventoryRecord("108", "Pijama Algodón", "PIJAMAS", 25, 45.00, size="XXS", gender="Mujer"),
)

SAMPLE_SALES: tuple[SalesRecord, ...] = (
    SalesRecord(date(2025, 11, 6), 4274.75, "ABRIGO", "Norte"),
    SalesRecord(date(2025, 11, 5), 1150.00, "BUZOS", "Sur"),
    SalesRecord(date(2025, 11, 6), 259.90, "ROPA DE BAÑO", "Este"),
    SalesRecord(date(2025, 11, 4), 383.50, "FALDA", "Oeste"),
    SalesRecord(date(2025, 11, 3), 1200.00, "POLOS", "Centro"),
)


def _as_date(value: date | str | None) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(value)


def group_and_sum(
    records: Iterable[T],
    key: Callable[[T], str],
    value: Callable[[T], float],
) -> list[tuple[str, float]]:
    """
    Sum ``value`` per ``key`` and return the groups ordered by total, highest first.

    Groups are collected in first-seen order and the sort is stable, so ties keep
    the order in which their keys first appeared.
    """
    totals: dict[str, float] = {}
    for record in records:
        group = key(record)
        totals[group] = totals.get(group, 0) + value(record)
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


class DummyDataService:
    """
    In-memory data layer. The only component that reads the canonical record
    sets; callers always receive new lists of immutable records.
    """

    def __init__(
        self,
        inventory: Iterable[InventoryRecord] | None = None,
        sales: Iterable[SalesRecord] | None = None,
    ):
        self._inventory: tuple[InventoryRecord, ...] = (
            tuple(inventory) if inventory is not None else SAMPLE_INVENTORY
        )
        self._sales: tuple[SalesRecord, ...] = tuple(sales) if sales is not None else SAMPLE_SALES

    def list_inventory(self, filter: Mapping[str, Any] | None = None) -> list[InventoryRecord]:
        """
        Return inventory records matching every field of ``filter`` exactly.

        Matching is case-sensitive with no coercion ("XL" != "xl", 12 != "12").
        A key that is not a record field matches nothing.
        """
        if not filter:
            return list(self._inventory)

        missing = object()
        return [
            item
            for item in self._inventory
            if all(getattr(item, key, missing) == value for key, value in filter.items())
        ]

    def list_sales(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[SalesRecord]:
        """Return sales within the inclusive [start_date, end_date] range; either bound may be open."""
        start, end = _as_date(start_date), _as_date(end_date)
        return [
            sale
            for sale in self._sales
            if (start is None or sale.date >= start) and (end is None or sale.date <= end)
        ]

    def compute_metrics(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> BusinessMetrics:
        """Derive business metrics from the sales in range and the full inventory."""
        sales = self.list_sales(start_date, end_date)

        total_sales = sum(sale.amount for sale in sales)
        if sales:
            average_order_value = total_sales / len(sales)
        else:
            logger.debug("No sales between %s and %s; average order value is 0", start_date, end_date)
            average_order_value = 0.0

        by_category = group_and_sum(sales, lambda s: s.category, lambda s: s.amount)
        by_region = group_and_sum(sales, lambda s: s.region, lambda s: s.amount)

        stock_map: dict[str, int] = {}
        for item in self._inventory:
            stock_map[item.category] = stock_map.get(item.category, 0) + item.stock

        return BusinessMetrics(
            total_sales=total_sales,
            average_order_value=average_order_value,
            top_categories=[CategorySales(category, total) for category, total in by_category],
            stock_levels=[CategoryStock(category, stock) for category, stock in stock_map.items()],
            regional_performance=[RegionSales(region, total) for region, total in by_region],
        )

    def generate_report(
        self,
        report_type: ReportType | str,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[InventoryRecord] | list[SalesRecord] | BusinessMetrics:
        """
        Return the raw data behind a report.

        Sales and metrics reports cover the inclusive period given; the inventory
        report is a snapshot and ignores it.

        Raises:
            UnsupportedReportType: if ``report_type`` is not inventory, sales or metrics.
        """
        raw = report_type.value if isinstance(report_type, ReportType) else str(report_type)
        try:
            kind = ReportType(raw.strip().lower())
        except ValueError:
            logger.warning("Rejected report request of type %r", raw)
            raise UnsupportedReportType(raw) from None

        if kind is ReportType.INVENTORY:
            return self.list_inventory()
        if kind is ReportType.SALES:
            return self.list_sales(start_date, end_date)
        return self.compute_metrics(start_date, end_date)
