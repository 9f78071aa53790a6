"""Data behind chart and report actions, shared by the dispatcher and the reasoning adapter."""

from typing import Any

from connectors.dummy_data_service import DummyDataService
from models.actions import Action, ChartAction, ReportAction

from .chart_builder import generate_chart_data, request_from_action

__all__ = ["gather_supporting_data"]


def gather_supporting_data(
    action: Action,
    data_service: DummyDataService,
    palette: list[str] | None = None,
) -> tuple[Action, Any]:
    """
    Fetch the data a chart or report action is built on.

    Returns the action, with the series attached for charts, and the data to
    render or send to the enrichment pass.

    Raises:
        UnsupportedReportType: if a report action names an unknown report kind.
        TypeError: if ``action`` is neither a chart nor a report.
    """
    if isinstance(action, ChartAction):
        chart_data = generate_chart_data(request_from_action(action), data_service, palette)
        return action.model_copy(update={"chart_data": chart_data}), chart_data
    if isinstance(action, ReportAction):
        report = data_service.generate_report(action.report_type, action.start_date, action.end_date)
        return action, report
    raise TypeError(f"No supporting data for {action.action} actions")
