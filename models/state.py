"""
Data models for representing process-wide UI state.
"""

from typing import Literal

from pydantic import BaseModel, Field

from .conversation import ConversationMessage

# Fields written to the persistence adapter. The typing indicator is runtime-only.
PERSISTED_FIELDS = frozenset(
    {"is_authenticated", "theme", "inventory_filter", "chat_open", "chat_messages"}
)


class UIState(BaseModel):
    """State shared by the dashboard and the assistant panel"""

    is_authenticated: bool = False
    theme: Literal["dark", "light"] = "dark"
    inventory_filter: str = ""
    chat_open: bool = False
    chat_messages: list[ConversationMessage] = Field(default_factory=list)
    is_typing: bool = False

    def snapshot(self) -> dict:
        """Return the JSON-compatible subset that survives a restart."""
        return self.model_dump(mode="json", include=set(PERSISTED_FIELDS))
