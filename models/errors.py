"""
Error taxonomy for the assistant.

Only failures that callers need to tell apart get a class. An ambiguous
classification resolves to CHAT, and a filter with no matching records yields
an empty series, so neither is an exception.
"""


class AssistantError(Exception):
    """Base class for assistant errors."""


class UnsupportedReportType(AssistantError, ValueError):
    """Raised when a report kind is not one of inventory, sales or metrics."""

    def __init__(self, report_type: str):
        self.report_type = report_type
        super().__init__(f"Unsupported report type: {report_type!r}")


class ReasoningAdapterFailure(AssistantError):
    """Raised when the language-model collaborator cannot be reached or answers unusably."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)
