from datetime import date

import pytest

from assistant.chart_builder import (
    build_chart_request,
    detect_chart_kind,
    generate_chart_data,
    request_from_action,
)
from config.config import DEFAULT_PALETTE
from connectors.dummy_data_service import DummyDataService
from models.actions import ChartAction
from models.chart import ChartRequest
from models.enums import ChartKind, GroupBy, Metric


@pytest.fixture
def service() -> DummyDataService:
    return DummyDataService()


# --- Request building --- #


def test_defaults_when_nothing_is_named():
    request = build_chart_request("muéstrame algo")
    assert (request.kind, request.metric, request.group_by) == (
        ChartKind.BAR,
        Metric.SALES,
        GroupBy.CATEGORY,
    )


def test_kind_metric_and_group_from_text():
    request = build_chart_request("gráfica de líneas de ingresos por región")
    assert (request.kind, request.metric, request.group_by) == (
        ChartKind.LINE,
        Metric.REVENUE,
        GroupBy.REGION,
    )


@pytest.mark.parametrize(
    "text, kind",
    [
        ("gráfica de pastel", ChartKind.PIE),
        ("gráfica circular", ChartKind.PIE),
        ("gráfica de área", ChartKind.AREA),
        ("radar de ventas", ChartKind.RADAR),
        ("gráfica de barras", ChartKind.BAR),
        ("gráfica de líneas", ChartKind.LINE),
        ("ventas", None),
        ("abrigos de piel", None),
        ("lista de tareas", None),
    ],
)
def test_detect_chart_kind(text, kind):
    assert detect_chart_kind(text) is kind


def test_kind_needs_whole_word():
    assert build_chart_request("gráfica de abrigos de piel").kind is ChartKind.BAR


def test_period_from_text():
    request = build_chart_request("gráfica de ventas del 2025-11-05 al 2025-11-06")
    assert (request.start_date, request.end_date) == (date(2025, 11, 5), date(2025, 11, 6))


def test_request_from_action():
    action = ChartAction(chart_kind="pie", metric="stock", group_by="region")
    assert request_from_action(action) == ChartRequest(
        kind=ChartKind.PIE, metric=Metric.STOCK, group_by=GroupBy.REGION
    )


# --- Series generation --- #


def test_sales_by_region_pie(service):
    request = build_chart_request("muéstrame ventas por región en gráfica de pastel")
    chart = generate_chart_data(request, service)

    assert request.kind is ChartKind.PIE
    assert chart.labels == ["Norte", "Centro", "Sur", "Oeste", "Este"]
    assert chart.datasets[0].values == pytest.approx([4274.75, 1200.0, 1150.0, 383.5, 259.9])
    assert chart.datasets[0].label == "Ventas ($)"
    assert chart.options.title == "Ventas ($) por Regiones"


def test_revenue_by_category_sorted_descending(service):
    chart = generate_chart_data(ChartRequest(metric=Metric.REVENUE), service)

    assert chart.labels == ["ABRIGO", "POLOS", "BUZOS", "FALDA", "ROPA DE BAÑO"]
    assert chart.datasets[0].values == pytest.approx([4274.75, 1200.0, 1150.0, 383.5, 259.9])


def test_sales_by_date(service):
    chart = generate_chart_data(ChartRequest(group_by=GroupBy.DATE), service)

    assert chart.labels == ["2025-11-06", "2025-11-03", "2025-11-05", "2025-11-04"]
    assert chart.datasets[0].values == pytest.approx([4534.65, 1200.0, 1150.0, 383.5])


def test_stock_is_grouped_by_category(service):
    chart = generate_chart_data(ChartRequest(metric=Metric.STOCK, group_by=GroupBy.REGION), service)

    assert len(chart.labels) == 8
    assert chart.labels[:3] == ["BUZOS", "ROPA DE BAÑO", "POLOS"]
    assert chart.labels[-1] == "JEANS TERMINADOS"
    assert chart.options.x_axis_label == "Categorías"


def test_colors_wrap_around_palette(service):
    chart = generate_chart_data(ChartRequest(metric=Metric.STOCK), service)
    colors = chart.datasets[0].colors

    assert len(colors) == len(chart.labels) == 8
    assert colors[5] == DEFAULT_PALETTE[0]
    assert colors[7] == DEFAULT_PALETTE[2]


def test_line_and_area_styling(service):
    line = generate_chart_data(ChartRequest(kind=ChartKind.LINE), service)
    area = generate_chart_data(ChartRequest(kind=ChartKind.AREA), service)

    assert line.datasets[0].border_colors == [DEFAULT_PALETTE[0]]
    assert not line.datasets[0].fill
    assert area.datasets[0].fill


def test_custom_palette(service):
    chart = generate_chart_data(ChartRequest(), service, palette=["red"])
    assert set(chart.datasets[0].colors) == {"red"}


def test_empty_range_yields_empty_series(service):
    request = ChartRequest(start_date="2024-01-01", end_date="2024-01-31")
    chart = generate_chart_data(request, service)

    assert chart.is_empty
    assert chart.datasets[0].values == []


def test_period_from_text_limits_series(service):
    chart = generate_chart_data(
        build_chart_request("gráfica de ventas del 2025-11-05 al 2025-11-06"), service
    )

    assert chart.labels == ["ABRIGO", "BUZOS", "ROPA DE BAÑO"]
    assert "POLOS" not in chart.labels
    assert chart.datasets[0].values == pytest.approx([4274.75, 1150.0, 259.9])
