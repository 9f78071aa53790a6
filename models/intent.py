"""
Intent produced by the lexical classifier. Built fresh per input, never persisted.
"""

from dataclasses import dataclass, field
from datetime import date

from .enums import ChartKind, IntentType, ReportType


@dataclass
class IntentData:
    chart_type: ChartKind | None = None
    report_type: ReportType | None = None
    filter: dict[str, str] = field(default_factory=dict)
    path: str | None = None
    start_date: date | None = None
    end_date: date | None = None


@dataclass
class Intent:
    type: IntentType
    confidence: float
    data: IntentData = field(default_factory=IntentData)

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")
