"""
Structured actions the assistant can execute.

Exactly one variant is active per action, selected by the ``action`` tag, and each
variant carries everything needed to render it plus a human-readable ``message``.
"""

from datetime import date
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .chart import ChartData
from .enums import ActionKind, ChartKind, Destination, GroupBy, Metric


class _ActionBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    message: str = ""

    @property
    def kind(self) -> ActionKind:
        return ActionKind(self.action)  # type: ignore[attr-defined]


class NavigateAction(_ActionBase):
    action: Literal["navigate"] = "navigate"
    destination: Destination = Destination.DASHBOARD


class ChartAction(_ActionBase):
    action: Literal["chart"] = "chart"
    chart_kind: ChartKind = ChartKind.BAR
    metric: Metric = Metric.SALES
    group_by: GroupBy = GroupBy.CATEGORY
    start_date: date | None = None
    end_date: date | None = None
    chart_data: ChartData | None = None


class ReportAction(_ActionBase):
    action: Literal["report"] = "report"
    # Kept as free text: unsupported kinds are rejected by the data layer.
    report_type: str = "metrics"
    start_date: date | None = None
    end_date: date | None = None
    filters: dict[str, Any] = Field(default_factory=dict)


class FilterAction(_ActionBase):
    action: Literal["filter"] = "filter"
    category: str = ""
    filters: dict[str, Any] = Field(default_factory=dict)


class ChatAction(_ActionBase):
    action: Literal["chat"] = "chat"
    reply: str = ""

    @property
    def display_text(self) -> str:
        return self.reply or self.message


Action = Annotated[
    Union[NavigateAction, ChartAction, ReportAction, FilterAction, ChatAction],
    Field(discriminator="action"),
]

ACTION_ADAPTER: TypeAdapter[Action] = TypeAdapter(Action)
