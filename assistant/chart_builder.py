"""
Chart request builder: free text -> ChartRequest -> ChartData.
"""

import logging
import re

from config.config import DEFAULT_PALETTE
from connectors.dummy_data_service import DummyDataService, group_and_sum
from models.actions import ChartAction
from models.chart import ChartData, ChartDataset, ChartOptions, ChartRequest
from models.enums import ChartKind, GroupBy, Metric
from utils.text import canonicalize, extract_date_range

__all__ = [
    "build_chart_request",
    "detect_chart_kind",
    "generate_chart_data",
    "request_from_action",
]

logger = logging.getLogger(__name__)


def _words(*keywords: str) -> re.Pattern:
    """Whole-word pattern allowing a plural "s" ("barra" matches "barras" but "pie" not "piel")."""
    return re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")s?\b")


# Each family is checked in order; the first keyword found wins.
_KIND_KEYWORDS: tuple[tuple[ChartKind, re.Pattern], ...] = (
    (ChartKind.LINE, _words("linea", "line")),
    (ChartKind.PIE, _words("pastel", "pie", "circular")),
    (ChartKind.AREA, _words("area")),
    (ChartKind.RADAR, _words("radar")),
    (ChartKind.BAR, _words("barra", "bar chart")),
)
_METRIC_KEYWORDS: tuple[tuple[Metric, tuple[str, ...]], ...] = (
    (Metric.REVENUE, ("ingreso", "revenue", "facturacion")),
    (Metric.STOCK, ("stock", "inventario", "existencias")),
)
_GROUP_KEYWORDS: tuple[tuple[GroupBy, tuple[str, ...]], ...] = (
    (GroupBy.REGION, ("region",)),
    (GroupBy.DATE, ("tiempo", "fecha", "periodo", "mensual", "diario")),
)

METRIC_LABELS = {
    Metric.SALES: "Ventas ($)",
    Metric.REVENUE: "Ingresos ($)",
    Metric.STOCK: "Stock disponible",
}
GROUP_LABELS = {
    GroupBy.CATEGORY: "Categorías",
    GroupBy.REGION: "Regiones",
    GroupBy.DATE: "Período",
}


def _first_match(canonical: str, table, default=None):
    for value, keywords in table:
        if any(keyword in canonical for keyword in keywords):
            return value
    return default


def _first_kind(canonical: str, default=None) -> ChartKind | None:
    for kind, pattern in _KIND_KEYWORDS:
        if pattern.search(canonical):
            return kind
    return default


def detect_chart_kind(text: str) -> ChartKind | None:
    """Return the chart kind named in ``text``, or None when none is mentioned."""
    return _first_kind(canonicalize(text))


def build_chart_request(text: str) -> ChartRequest:
    """
    Derive a chart request from free text.

    Kind defaults to bar, metric to sales and grouping to category unless a
    keyword of the corresponding family is present. ISO dates in the text
    bound the period.
    """
    canonical = canonicalize(text)
    start_date, end_date = extract_date_range(text)
    return ChartRequest(
        kind=_first_kind(canonical, ChartKind.BAR),
        metric=_first_match(canonical, _METRIC_KEYWORDS, Metric.SALES),
        group_by=_first_match(canonical, _GROUP_KEYWORDS, GroupBy.CATEGORY),
        start_date=start_date,
        end_date=end_date,
    )


def request_from_action(action: ChartAction) -> ChartRequest:
    return ChartRequest(
        kind=action.chart_kind,
        metric=action.metric,
        group_by=action.group_by,
        start_date=action.start_date,
        end_date=action.end_date,
    )


def generate_chart_data(
    request: ChartRequest,
    data_service: DummyDataService,
    palette: list[str] | None = None,
) -> ChartData:
    """
    Build chart-ready series for ``request``.

    Sales and revenue sum sale amounts in the requested period; stock sums units
    on hand per category. Groups are ordered by value, highest first. Colors wrap
    around the palette so every value gets one. No records gives an empty series.
    """
    palette = palette or DEFAULT_PALETTE

    if request.metric is Metric.STOCK:
        if request.group_by is not GroupBy.CATEGORY:
            logger.info("Stock has no %s dimension; grouping by category", request.group_by.value)
            request = request.model_copy(update={"group_by": GroupBy.CATEGORY})
        groups = group_and_sum(data_service.list_inventory(), lambda i: i.category, lambda i: i.stock)
    else:
        sales = data_service.list_sales(request.start_date, request.end_date)
        if request.group_by is GroupBy.REGION:
            key = lambda s: s.region  # noqa: E731
        elif request.group_by is GroupBy.DATE:
            key = lambda s: s.date.isoformat()  # noqa: E731
        else:
            key = lambda s: s.category  # noqa: E731
        groups = group_and_sum(sales, key, lambda s: s.amount)

    labels = [label for label, _ in groups]
    values = [float(value) for _, value in groups]
    colors = [palette[i % len(palette)] for i in range(len(values))]
    metric_label = METRIC_LABELS[request.metric]
    group_label = GROUP_LABELS[request.group_by]

    if not values:
        logger.info("No data for %s by %s", request.metric.value, request.group_by.value)

    return ChartData(
        labels=labels,
        datasets=[
            ChartDataset(
                label=metric_label,
                values=values,
                colors=colors,
                border_colors=[palette[0]] if request.kind is ChartKind.LINE else colors,
                fill=request.kind is ChartKind.AREA,
            )
        ],
        options=ChartOptions(
            title=f"{metric_label} por {group_label}",
            x_axis_label=group_label,
            y_axis_label=metric_label,
        ),
    )
