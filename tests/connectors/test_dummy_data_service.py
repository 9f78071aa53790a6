import logging
import math
from datetime import date

import pytest

from connectors.dummy_data_service import DummyDataService, group_and_sum
from models.enums import ReportType
from models.errors import UnsupportedReportType
from models.inventory import BusinessMetrics, InventoryRecord, SalesRecord


@pytest.fixture
def service() -> DummyDataService:
    return DummyDataService()


# --- Inventory --- #


def test_list_inventory_without_filter(service):
    items = service.list_inventory()
    assert len(items) == 8
    assert all(isinstance(item, InventoryRecord) for item in items)


def test_list_inventory_exact_category(service):
    assert [item.id for item in service.list_inventory({"category": "JEANS TERMINADOS"})] == ["103"]


def test_list_inventory_is_case_sensitive(service):
    assert service.list_inventory({"category": "jeans terminados"}) == []


def test_list_inventory_and_semantics(service):
    items = service.list_inventory({"gender": "Mujer", "size": "M"})
    assert [item.id for item in items] == ["102"]


def test_list_inventory_no_type_coercion(service):
    assert service.list_inventory({"stock": "12"}) == []
    assert [item.id for item in service.list_inventory({"stock": 12})] == ["103"]


def test_list_inventory_unknown_field_matches_nothing(service):
    assert service.list_inventory({"color": "rojo"}) == []


def test_returned_lists_are_copies(service):
    items = service.list_inventory()
    items.clear()
    assert len(service.list_inventory()) == 8


# --- Sales --- #


def test_list_sales_inclusive_range(service):
    sales = service.list_sales("2025-11-05", "2025-11-06")
    assert len(sales) == 3
    assert {sale.category for sale in sales} == {"ABRIGO", "BUZOS", "ROPA DE BAÑO"}


def test_list_sales_open_bounds(service):
    assert len(service.list_sales(start_date=date(2025, 11, 5))) == 3
    assert len(service.list_sales(end_date=date(2025, 11, 4))) == 2
    assert len(service.list_sales()) == 5


def test_list_sales_empty_range(service):
    assert service.list_sales("2024-01-01", "2024-01-31") == []


# --- Metrics --- #


def test_compute_metrics(service):
    metrics = service.compute_metrics()

    assert metrics.total_sales == pytest.approx(7268.15)
    assert metrics.average_order_value == pytest.approx(7268.15 / 5)
    assert [c.category for c in metrics.top_categories] == [
        "ABRIGO",
        "POLOS",
        "BUZOS",
        "FALDA",
        "ROPA DE BAÑO",
    ]
    assert metrics.regional_performance[0].region == "Norte"
    assert [s.category for s in metrics.stock_levels][:3] == ["ABRIGO", "BUZOS", "JEANS TERMINADOS"]
    assert len(metrics.stock_levels) == 8


def test_compute_metrics_is_repeatable(service):
    assert service.compute_metrics() == service.compute_metrics()


def test_compute_metrics_without_sales():
    metrics = DummyDataService(sales=[]).compute_metrics()
    assert metrics.total_sales == 0
    assert metrics.average_order_value == 0.0
    assert not math.isnan(metrics.average_order_value)
    assert metrics.top_categories == []
    assert metrics.regional_performance == []


def test_ties_keep_first_seen_order():
    day = date(2025, 11, 1)
    forward = [SalesRecord(day, 100.0, "A", "Norte"), SalesRecord(day, 100.0, "B", "Sur")]
    backward = list(reversed(forward))

    assert [c.category for c in DummyDataService(sales=forward).compute_metrics().top_categories] == ["A", "B"]
    assert [c.category for c in DummyDataService(sales=backward).compute_metrics().top_categories] == ["B", "A"]


def test_group_and_sum():
    rows = [("x", 1), ("y", 5), ("x", 2)]
    assert group_and_sum(rows, lambda r: r[0], lambda r: r[1]) == [("y", 5), ("x", 3)]


# --- Reports --- #


@pytest.mark.parametrize(
    "report_type, expected_len",
    [("inventory", 8), ("Sales", 5), (ReportType.SALES, 5), (" INVENTORY ", 8)],
)
def test_generate_report_lists(service, report_type, expected_len):
    assert len(service.generate_report(report_type)) == expected_len


def test_generate_report_metrics(service):
    assert isinstance(service.generate_report("metrics"), BusinessMetrics)


def test_generate_report_unsupported(service, caplog):
    with caplog.at_level(logging.WARNING), pytest.raises(UnsupportedReportType) as excinfo:
        service.generate_report("weekly")

    assert excinfo.value.report_type == "weekly"
    assert isinstance(excinfo.value, ValueError)
    assert "Rejected report request" in caplog.text


def test_generate_report_sales_period(service):
    sales = service.generate_report("sales", "2025-11-04", "2025-11-06")
    assert len(sales) == 4
    assert sum(s.amount for s in sales) == pytest.approx(6068.15)


def test_generate_report_metrics_period(service):
    metrics = service.generate_report("metrics", date(2025, 11, 5), date(2025, 11, 6))
    assert metrics.total_sales == pytest.approx(5684.65)


def test_generate_report_inventory_ignores_period(service):
    assert len(service.generate_report("inventory", "2024-01-01", "2024-01-31")) == 8
