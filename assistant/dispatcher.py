"""
Module: assistant.dispatcher

Contains the ActionDispatcher, which runs one request/response cycle of the
assistant panel: interpret the text, execute the action's side effect and
append the reply to the conversation log.

States per turn::

    Idle -> Interpreting -> {Navigating | BuildingChart | AggregatingReport | Filtering | Chatting}
         -> Responding -> Idle

Navigation skips Responding: its message is appended and the route changes
without waiting on any data.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from config.config import AssistantConfig
from connectors.dummy_data_service import DummyDataService
from models.actions import (
    Action,
    ChartAction,
    ChatAction,
    FilterAction,
    NavigateAction,
    ReportAction,
)
from models.conversation import ConversationMessage
from models.enums import Destination, MessageRole
from utils.monitoring import AssistantMonitor

from .conversation_manager import ConversationManager
from .intent_classifier import IntentClassifier
from .local_interpreter import LocalInterpreter
from .prompts import (
    CHART_APOLOGY,
    GENERIC_APOLOGY,
    NO_DATA_NOTE,
    NOT_UNDERSTOOD,
    REPORT_APOLOGY,
)
from .reasoning_adapter import ReasoningAdapter
from .reports import summarize_report
from .state_store import PersistenceAdapter, UIStateStore
from .supporting_data import gather_supporting_data

__all__ = ["ActionDispatcher", "DispatchResult", "DispatchState", "Navigator", "RecordingNavigator"]

logger = logging.getLogger(__name__)


class DispatchState(str, Enum):
    IDLE = "idle"
    INTERPRETING = "interpreting"
    NAVIGATING = "navigating"
    BUILDING_CHART = "building_chart"
    AGGREGATING_REPORT = "aggregating_report"
    FILTERING = "filtering"
    CHATTING = "chatting"
    RESPONDING = "responding"


class Navigator(Protocol):
    def navigate_to(self, path: str) -> None: ...


class RecordingNavigator:
    """Navigator that records requested paths; the presentation layer reads ``current_path``."""

    def __init__(self, current_path: str = "/dashboard"):
        self.current_path = current_path
        self.history: list[str] = []

    def navigate_to(self, path: str) -> None:
        Destination.from_path(path)
        self.history.append(path)
        self.current_path = path
        logger.info(f"Navigated to {path}")


@dataclass
class DispatchResult:
    action: Action
    message: ConversationMessage
    states: list[DispatchState] = field(default_factory=list)
    scheduled_navigation: str | None = None
    failed: bool = False


class ActionDispatcher:
    """
    Orchestrates the assistant. Only this class writes the conversation log and
    the inventory filter. ``submit`` never raises: every failure becomes an
    assistant apology message.
    """

    def __init__(
        self,
        store: UIStateStore,
        navigator: Navigator,
        data_service: DummyDataService | None = None,
        adapter: ReasoningAdapter | None = None,
        local_interpreter: LocalInterpreter | None = None,
        config: AssistantConfig | None = None,
        monitor: AssistantMonitor | None = None,
    ):
        self.config = config or AssistantConfig()
        self.store = store
        self.navigator = navigator
        self.data_service = data_service or DummyDataService()
        self.adapter = adapter
        self.local_interpreter = local_interpreter or LocalInterpreter(
            IntentClassifier(threshold=self.config.classifier.threshold)
        )
        self.monitor = monitor or AssistantMonitor()
        self.conversation = ConversationManager(store)
        self._pending_navigations: set[asyncio.Handle] = set()

    @classmethod
    def from_config(
        cls,
        config: AssistantConfig,
        navigator: Navigator | None = None,
        persistence: PersistenceAdapter | None = None,
    ) -> "ActionDispatcher":
        """Wire a dispatcher with the default data layer and, if a key is set, the language model."""
        data_service = DummyDataService()
        monitor = AssistantMonitor(metric_thresholds={"latency_s": (0.0, config.request_timeout)})
        adapter = ReasoningAdapter.from_config(config, data_service=data_service, monitor=monitor)
        return cls(
            store=UIStateStore(persistence, history_limit=config.history_limit),
            navigator=navigator or RecordingNavigator(),
            data_service=data_service,
            adapter=adapter,
            config=config,
            monitor=monitor,
        )

    # --- Public API --- #

    async def submit(self, text: str) -> DispatchResult | None:
        """
        Process one user submission. Returns None for blank input.

        Overlapping submissions are not serialized; each appends its reply when it
        completes.
        """
        if not text or not text.strip():
            return None

        started = time.perf_counter()
        token = self.store.begin_request()
        states = [DispatchState.IDLE, DispatchState.INTERPRETING]
        try:
            self.conversation.add_message(MessageRole.USER, text)
            result = await self._run(text, states)
        except Exception as exc:  # noqa: BLE001
            self.monitor.record_error("dispatch", exc)
            action = ChatAction(reply=GENERIC_APOLOGY, message="Error de procesamiento")
            states.append(DispatchState.RESPONDING)
            message = self.conversation.add_message(MessageRole.ASSISTANT, GENERIC_APOLOGY)
            result = DispatchResult(action, message, states, failed=True)
        finally:
            self.store.end_request(token)
            states.append(DispatchState.IDLE)

        self.monitor.record_turn(result.action.action, time.perf_counter() - started, result.failed)
        logger.info(
            f"Finished turn. Action: {result.action.action}. Failed: {result.failed}. "
            f"States: {[s.value for s in result.states]}"
        )
        return result

    def clear_conversation(self):
        self.conversation.clear_history()

    # --- Internal Helper Methods --- #

    async def _interpret(self, text: str) -> Action:
        if self.adapter is not None and self.adapter.available:
            return await self.adapter.classify(text)
        return self.local_interpreter.interpret(text)

    async def _run(self, text: str, states: list[DispatchState]) -> DispatchResult:
        action = await self._interpret(text)

        if isinstance(action, NavigateAction):
            states.append(DispatchState.NAVIGATING)
            content = action.message or f"Te llevo a {action.destination.value}"
            message = self.conversation.add_message(MessageRole.ASSISTANT, content)
            self.navigator.navigate_to(action.destination.path)
            return DispatchResult(action, message, states)

        scheduled = None
        failed = False
        chart_kind = chart_data = None

        if isinstance(action, ChartAction):
            states.append(DispatchState.BUILDING_CHART)
            try:
                action, chart_data = gather_supporting_data(
                    action, self.data_service, self.config.chart.palette
                )
                action = await self._enrich(action, chart_data)
                chart_kind = action.chart_kind
                content = action.message or "Aquí tienes la gráfica que solicitaste"
                if chart_data.is_empty:
                    content = f"{content} {NO_DATA_NOTE}"
            except Exception as exc:  # noqa: BLE001
                self.monitor.record_error("chart", exc)
                chart_data = None
                content, failed = CHART_APOLOGY, True

        elif isinstance(action, ReportAction):
            states.append(DispatchState.AGGREGATING_REPORT)
            try:
                action, report = gather_supporting_data(action, self.data_service)
                if self._can_enrich:
                    action = await self._enrich(action, report)
                    content = action.message or "Aquí tienes el reporte solicitado"
                else:
                    content = f"{action.message} {summarize_report(action.report_type, report)}".strip()
            except Exception as exc:  # noqa: BLE001
                self.monitor.record_error("report", exc)
                content, failed = REPORT_APOLOGY, True

        elif isinstance(action, FilterAction):
            states.append(DispatchState.FILTERING)
            self.store.set_inventory_filter(action.category)
            scheduled = self._schedule_navigation(Destination.INVENTORY.path)
            content = action.message or f"Filtrando por: {action.category}"

        else:
            states.append(DispatchState.CHATTING)
            content = action.display_text if isinstance(action, ChatAction) else ""
            content = content or NOT_UNDERSTOOD

        states.append(DispatchState.RESPONDING)
        message = self.conversation.add_message(
            MessageRole.ASSISTANT, content, chart_kind=chart_kind, chart_data=chart_data
        )
        return DispatchResult(action, message, states, scheduled_navigation=scheduled, failed=failed)

    @property
    def _can_enrich(self) -> bool:
        return self.adapter is not None and self.adapter.available

    async def _enrich(self, action: Action, supporting_data) -> Action:
        if not self._can_enrich:
            return action
        return await self.adapter.enrich(action, supporting_data)

    def _schedule_navigation(self, path: str) -> str:
        """Change route after ``filter_navigation_delay`` seconds without blocking the turn."""
        loop = asyncio.get_running_loop()
        delay = self.config.filter_navigation_delay

        def _go():
            self._pending_navigations.discard(handle)
            self.navigator.navigate_to(path)

        if delay > 0:
            handle = loop.call_later(delay, _go)
        else:
            handle = loop.call_soon(_go)
        self._pending_navigations.add(handle)
        return path
