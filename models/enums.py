"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class IntentType(str, Enum):
    """Purpose of a user utterance as seen by the lexical classifier"""

    PLATFORM_DATA = "PLATFORM_DATA"  # Wants figures from the platform
    NAVIGATION = "NAVIGATION"  # Wants to go to a page
    CHART = "CHART"  # Wants to see a chart
    FILTER = "FILTER"  # Wants to filter inventory
    CHAT = "CHAT"  # General conversation
    REPORT = "REPORT"  # Asks for a report
    HELP = "HELP"  # Needs help


class ActionKind(str, Enum):
    """Executable outcomes the assistant can produce"""

    NAVIGATE = "navigate"
    CHART = "chart"
    REPORT = "report"
    FILTER = "filter"
    CHAT = "chat"


class ChartKind(str, Enum):
    BAR = "bar"
    LINE = "line"
    PIE = "pie"
    AREA = "area"
    RADAR = "radar"


class Metric(str, Enum):
    """Quantity being visualized"""

    SALES = "sales"  # Sale amounts per group
    REVENUE = "revenue"  # Same amounts, presented as income
    STOCK = "stock"  # Units on hand


class GroupBy(str, Enum):
    CATEGORY = "category"
    REGION = "region"
    DATE = "date"


class ReportType(str, Enum):
    INVENTORY = "inventory"
    SALES = "sales"
    METRICS = "metrics"


class Destination(str, Enum):
    """Dashboard sections reachable through navigation"""

    INVENTORY = "inventory"
    ANALYTICS = "analytics"
    DASHBOARD = "dashboard"
    SETTINGS = "settings"
    UPLOAD = "upload"

    @property
    def path(self) -> str:
        if self is Destination.DASHBOARD:
            return "/dashboard"
        return f"/dashboard/{self.value}"

    @classmethod
    def from_path(cls, path: str) -> "Destination":
        for destination in cls:
            if destination.path == path:
                return destination
        raise ValueError(f"Unknown dashboard path: {path}")


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"
