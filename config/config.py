"""
Configuration classes for the retail assistant.
Defines classifier, chart and language-model settings in a type-safe, extensible way.
"""

import os
from dataclasses import dataclass, field

DEFAULT_PALETTE = [
    "rgba(255, 99, 132, 0.8)",
    "rgba(54, 162, 235, 0.8)",
    "rgba(255, 206, 86, 0.8)",
    "rgba(75, 192, 192, 0.8)",
    "rgba(153, 102, 255, 0.8)",
]


@dataclass
class ClassifierConfig:
    # A category must score strictly above this to beat the CHAT fallback.
    threshold: float = 0.3


@dataclass
class ChartConfig:
    palette: list[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))


@dataclass
class AssistantConfig:
    api_key: str | None = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.2
    max_tokens: int = 800
    retry_attempts: int = 2  # one retry on transient failure
    retry_backoff: float = 0.5
    request_timeout: float = 20.0
    filter_navigation_delay: float = 0.5
    history_limit: int = 200
    fallback_truncate_chars: int = 100
    max_reply_chars: int = 1000
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)

    @classmethod
    def from_env(cls) -> "AssistantConfig":
        """Build a config from ``OPENAI_API_KEY`` and ``ASSISTANT_*`` variables."""
        defaults = cls()
        return cls(
            api_key=os.getenv("OPENAI_API_KEY") or None,
            model=os.getenv("ASSISTANT_MODEL", defaults.model),
            request_timeout=float(os.getenv("ASSISTANT_TIMEOUT", defaults.request_timeout)),
            retry_attempts=int(os.getenv("ASSISTANT_RETRY_ATTEMPTS", defaults.retry_attempts)),
        )


# Example usage:
# config = AssistantConfig.from_env()
# dispatcher = ActionDispatcher.from_config(config)
