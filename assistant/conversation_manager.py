"""Manages the assistant panel's conversation log."""

import logging

from models.chart import ChartData
from models.conversation import ConversationMessage
from models.enums import ChartKind, MessageRole

from .state_store import UIStateStore

logger = logging.getLogger(__name__)


class ConversationManager:
    """
    Handles appending to and reading from the append-only conversation log held
    in the UI state store. Messages are appended in completion order; the log is
    cleared only by an explicit user action.
    """

    def __init__(self, store: UIStateStore):
        """
        Initializes the conversation manager.

        Args:
            store: The UI state store that owns the ``chat_messages`` field.
        """
        self.store = store

    def add_message(
        self,
        role: MessageRole | str,
        content: str,
        chart_kind: ChartKind | None = None,
        chart_data: ChartData | None = None,
    ) -> ConversationMessage:
        """
        Appends a message to the conversation log.

        Args:
            role: 'user' or 'assistant'.
            content: The text shown in the panel.
            chart_kind: Kind of chart attached to the message, if any.
            chart_data: Series attached to the message, if any.

        Returns:
            The message that was appended.
        """
        message = ConversationMessage(
            role=MessageRole(role),
            content=content,
            chart_kind=chart_kind,
            chart_data=chart_data,
        )
        self.store.append_chat_message(message)
        logger.debug(f"Added {message.role.value} message. History size: {len(self.store.get('chat_messages'))}")
        return message

    def get_recent_history(self, n: int = 5) -> list[ConversationMessage]:
        """
        Retrieves the most recent messages, ordered from oldest to newest.

        Args:
            n: The maximum number of recent messages to retrieve.
        """
        if n <= 0:
            return []
        return self.store.get("chat_messages")[-n:]

    def get_full_history(self) -> list[ConversationMessage]:
        return self.store.get("chat_messages")

    def clear_history(self):
        """Clears the conversation log."""
        if self.store.get("chat_messages"):
            self.store.clear_chat()
            logger.info("Cleared conversation history.")
        else:
            logger.debug("No history found to clear.")
