"""
Utilities for monitoring assistant turns and raising alerts.

This is the observability sink for dispatch outcomes: errors reach users only as
apology messages, while their counts, latencies and threshold breaches land here.
"""

import logging
from collections import Counter, defaultdict
from datetime import datetime

import numpy as np

logger = logging.getLogger(__name__)


class AssistantMonitor:
    """Records per-turn metrics of the assistant and detects issues."""

    def __init__(
        self,
        component_id: str = "assistant",
        metric_thresholds: dict[str, tuple[float, float]] | None = None,
    ):
        """
        Args:
            component_id: Name reported in alerts.
            metric_thresholds: Dict mapping metric names to (min_value, max_value) tuples.
        """
        self.component_id = component_id
        self.metric_thresholds = metric_thresholds or {}
        # metric_name -> [(timestamp, value)]
        self.metrics_history: dict[str, list[tuple[datetime, float]]] = defaultdict(list)
        self.action_counts: Counter[str] = Counter()
        self.error_counts: Counter[str] = Counter()
        self.alerts: list[str] = []
        logger.info(f"Initialized monitor for {component_id}")

    def record_metrics(self, metrics_dict: dict[str, float], timestamp: datetime | None = None):
        """Record a set of metrics at a specific time."""
        ts = timestamp or datetime.now()
        for metric, value in metrics_dict.items():
            if isinstance(value, bool) or not isinstance(value, int | float):
                logger.warning(
                    f"Metric '{metric}' for {self.component_id} has non-numeric value: {value}. Skipping."
                )
                continue

            self.metrics_history[metric].append((ts, value))
            logger.debug(f"Recorded metric for {self.component_id}: {metric}={value}")

            if metric in self.metric_thresholds:
                min_val, max_val = self.metric_thresholds[metric]
                if not (min_val <= value <= max_val):
                    self.trigger_alert(metric, value, min_val, max_val)

            if self.detect_drift(metric):
                logger.warning(f"Drift detected for metric '{metric}' in {self.component_id}")

    def record_turn(self, action_kind: str, latency_s: float, failed: bool = False):
        """Record the outcome of one dispatched turn."""
        self.action_counts[action_kind] += 1
        self.record_metrics({"latency_s": latency_s, "failed": 1.0 if failed else 0.0})

    def record_error(self, stage: str, exc: BaseException):
        """Log an error raised at ``stage`` without exposing it to the user."""
        self.error_counts[stage] += 1
        logger.error(
            f"{self.component_id} error during {stage}: {type(exc).__name__}: {exc}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )

    def detect_drift(
        self, metric: str, window_size: int = 30, change_threshold_percent: float = 15.0
    ) -> bool:
        """Detect if a metric is drifting significantly from its previous window."""
        history = self.metrics_history.get(metric, [])
        if len(history) < window_size * 2:
            return False

        recent_values = [v for _, v in history[-window_size:]]
        previous_values = [v for _, v in history[-window_size * 2 : -window_size]]

        recent_avg = float(np.mean(recent_values))
        previous_avg = float(np.mean(previous_values))

        if previous_avg == 0:
            return recent_avg != 0

        percent_change = abs((recent_avg - previous_avg) / previous_avg) * 100
        return percent_change > change_threshold_percent

    def failure_rate(self) -> float:
        """Share of recorded turns that failed."""
        values = [v for _, v in self.metrics_history.get("failed", [])]
        if not values:
            return 0.0
        return float(np.mean(values))

    def trigger_alert(self, metric: str, value: float, min_threshold: float, max_threshold: float):
        message = (
            f"ALERT [{self.component_id}] - Metric '{metric}' value {value:.2f} outside "
            f"acceptable range [{min_threshold:.2f}, {max_threshold:.2f}]"
        )
        self.alerts.append(message)
        logger.warning(message)
