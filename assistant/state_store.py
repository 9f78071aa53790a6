"""
Process-wide UI state with an injected persistence adapter.

Each field has a single writer by convention: the dispatcher owns the
conversation log and the inventory filter, the rest of the app owns
authentication, theme and panel visibility. The store snapshots the
persistable fields after every mutation.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import ValidationError

from models.conversation import ConversationMessage
from models.state import PERSISTED_FIELDS, UIState

__all__ = ["InMemoryPersistence", "JsonFilePersistence", "PersistenceAdapter", "UIStateStore"]

logger = logging.getLogger(__name__)


class PersistenceAdapter(Protocol):
    def load(self) -> dict[str, Any] | None: ...

    def save(self, snapshot: dict[str, Any]) -> None: ...


class InMemoryPersistence:
    """Keeps the last snapshot in memory. Used by tests and by default."""

    def __init__(self, snapshot: dict[str, Any] | None = None):
        self.snapshot = snapshot
        self.save_count = 0

    def load(self) -> dict[str, Any] | None:
        return self.snapshot

    def save(self, snapshot: dict[str, Any]) -> None:
        self.snapshot = snapshot
        self.save_count += 1


class JsonFilePersistence:
    """Stores the snapshot as a JSON document on disk."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> dict[str, Any] | None:
        if not self.path.exists():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Could not read UI state from {self.path}: {e}")
            return None

    def save(self, snapshot: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(snapshot, ensure_ascii=False, indent=2), encoding="utf-8")


class UIStateStore:
    """
    Get/set access to the UI state, plus typing-indicator bookkeeping.

    Overlapping requests each get a correlation token from ``begin_request``.
    Only the request holding the latest token clears the typing flag, so a fast
    stale request cannot hide one still in flight.
    """

    def __init__(self, persistence: PersistenceAdapter | None = None, history_limit: int | None = None):
        self.persistence = persistence or InMemoryPersistence()
        self.history_limit = history_limit
        self._state = self._restore()
        self._request_counter = 0
        self._latest_token: int | None = None

    def _restore(self) -> UIState:
        snapshot = self.persistence.load()
        if not snapshot:
            return UIState()
        try:
            return UIState.model_validate(
                {k: v for k, v in snapshot.items() if k in PERSISTED_FIELDS}
            )
        except ValidationError as e:
            logger.warning(f"Discarding invalid persisted UI state: {e}")
            return UIState()

    def _persist(self):
        try:
            self.persistence.save(self._state.snapshot())
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Could not persist UI state; keeping it in memory only: {e}")

    # --- Generic accessors --- #

    def get(self, field: str) -> Any:
        if field not in UIState.model_fields:
            raise KeyError(field)
        value = getattr(self._state, field)
        return list(value) if isinstance(value, list) else value

    def set(self, field: str, value: Any) -> None:
        if field not in UIState.model_fields or field in ("chat_messages", "is_typing"):
            raise KeyError(f"{field} is not directly settable")
        self._state = UIState.model_validate({**self._state.model_dump(), field: value})
        self._persist()

    @property
    def state(self) -> UIState:
        return self._state.model_copy(deep=True)

    # --- Named mutations --- #

    def set_inventory_filter(self, value: str):
        self.set("inventory_filter", value)

    def set_authenticated(self, value: bool):
        self.set("is_authenticated", value)

    def set_chat_open(self, value: bool):
        self.set("chat_open", value)

    def toggle_theme(self) -> str:
        theme = "light" if self._state.theme == "dark" else "dark"
        self.set("theme", theme)
        return theme

    def append_chat_message(self, message: ConversationMessage):
        messages = [*self._state.chat_messages, message]
        if self.history_limit and len(messages) > self.history_limit:
            messages = messages[-self.history_limit :]
        self._state = self._state.model_copy(update={"chat_messages": messages})
        self._persist()

    def clear_chat(self):
        self._state = self._state.model_copy(update={"chat_messages": []})
        self._persist()

    # --- Typing indicator --- #

    @property
    def is_typing(self) -> bool:
        return self._state.is_typing

    def begin_request(self) -> int:
        """Turn the typing indicator on and return this request's token."""
        self._request_counter += 1
        self._latest_token = self._request_counter
        self._state = self._state.model_copy(update={"is_typing": True})
        return self._latest_token

    def end_request(self, token: int) -> bool:
        """Clear the typing indicator if ``token`` is the latest; return whether it was cleared."""
        if token != self._latest_token:
            logger.debug("Request %s finished behind request %s; typing stays on", token, self._latest_token)
            return False
        self._latest_token = None
        self._state = self._state.model_copy(update={"is_typing": False})
        return True
