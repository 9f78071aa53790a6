"""Intent resolution and action dispatch for the dashboard assistant."""

from .dispatcher import ActionDispatcher, DispatchResult, DispatchState, RecordingNavigator  # noqa: F401
from .reasoning_adapter import ReasoningAdapter  # noqa: F401
from .state_store import InMemoryPersistence, JsonFilePersistence, UIStateStore  # noqa: F401
