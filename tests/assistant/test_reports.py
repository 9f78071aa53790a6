from assistant.reports import summarize_report
from connectors.dummy_data_service import DummyDataService


def test_metrics_summary():
    summary = summarize_report("metrics", DummyDataService().generate_report("metrics"))
    assert "Ventas totales: $7,268.15" in summary
    assert "Categoría líder: ABRIGO" in summary
    assert "Mejor región: Norte" in summary


def test_sales_summary():
    summary = summarize_report("sales", DummyDataService().generate_report("sales"))
    assert summary == "Reporte de ventas: 5 ventas por un total de $7,268.15."


def test_inventory_summary():
    summary = summarize_report("inventory", DummyDataService().generate_report("inventory"))
    assert summary.startswith("Reporte de inventario: 8 productos con 367 unidades en stock.")
    assert "Jeans Slim Fit (12 unidades)" in summary


def test_empty_data_summaries():
    assert "No hay ventas" in summarize_report("metrics", DummyDataService(sales=[]).compute_metrics())
    assert summarize_report("sales", []) == "No encontré registros para el reporte de sales."
