"""
Chart request and chart-ready series models.
"""

from datetime import date

from pydantic import BaseModel, Field, model_validator

from .enums import ChartKind, GroupBy, Metric


class ChartRequest(BaseModel):
    """Typed description of the chart a user asked for."""

    kind: ChartKind = ChartKind.BAR
    metric: Metric = Metric.SALES
    group_by: GroupBy = GroupBy.CATEGORY
    start_date: date | None = None
    end_date: date | None = None


class ChartDataset(BaseModel):
    label: str
    values: list[float] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    border_colors: list[str] = Field(default_factory=list)
    fill: bool = False


class ChartOptions(BaseModel):
    title: str | None = None
    x_axis_label: str | None = None
    y_axis_label: str | None = None
    legend: bool = True


class ChartData(BaseModel):
    """Labels plus one or more datasets; every dataset has one value per label."""

    labels: list[str] = Field(default_factory=list)
    datasets: list[ChartDataset] = Field(default_factory=list)
    options: ChartOptions = Field(default_factory=ChartOptions)

    @model_validator(mode="after")
    def _check_lengths(self) -> "ChartData":
        for dataset in self.datasets:
            if len(dataset.values) != len(self.labels):
                raise ValueError(
                    f"Dataset '{dataset.label}' has {len(dataset.values)} values "
                    f"for {len(self.labels)} labels"
                )
        return self

    @property
    def is_empty(self) -> bool:
        return not self.labels
