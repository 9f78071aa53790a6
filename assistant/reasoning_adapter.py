"""
Module: assistant.reasoning_adapter

Wraps the language-model collaborator. Phase 1 turns user text into a provisional
Action. For chart and report actions, phase 2 sends the supporting data back for
a richer message. Phase 2 may only replace ``message``: the action tag and the
structured fields always come from phase 1.
"""

import json
import logging
import os
import re
from typing import Any

from openai import AsyncOpenAI
from pydantic import ValidationError

from config.config import AssistantConfig
from connectors.dummy_data_service import DummyDataService
from models.actions import (
    ACTION_ADAPTER,
    Action,
    ChartAction,
    ChatAction,
    ReportAction,
)
from models.errors import ReasoningAdapterFailure
from utils.monitoring import AssistantMonitor
from utils.openai_utils import completion_text, safe_chat_completion
from utils.text import canonicalize, truncate

from .prompts import (
    ENRICHMENT_SYSTEM_PROMPT,
    GENERIC_APOLOGY,
    SYSTEM_PROMPT,
    build_enrichment_prompt,
)
from .supporting_data import gather_supporting_data

__all__ = ["ReasoningAdapter", "normalize_payload", "parse_action_payload", "strip_formatting"]

logger = logging.getLogger(__name__)

_ACTION_ALIASES = {
    "navigate": "navigate",
    "navigation": "navigate",
    "chart": "chart",
    "grafica": "chart",
    "report": "report",
    "reporte": "report",
    "filter": "filter",
    "chat": "chat",
}
_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


def strip_formatting(text: str) -> str:
    """Remove code fences, stray quotes and a leading "json" marker around a payload."""
    cleaned = text.strip()
    fenced = _FENCE.match(cleaned)
    if fenced:
        cleaned = fenced.group(1)
    cleaned = cleaned.strip("`´'\" \n\t")
    if cleaned[:4].lower() == "json":
        cleaned = cleaned[4:].lstrip(" :\n\t")
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start != -1 and end > start:
        cleaned = cleaned[start : end + 1]
    return cleaned


def _pick(source: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        value = source.get(key)
        if value not in (None, ""):
            return value
    return None


def _lower(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def _period(payload: dict[str, Any], data: dict[str, Any]) -> dict[str, Any]:
    return {
        "start_date": _pick(payload, "start_date", "startDate") or _pick(data, "start_date", "startDate"),
        "end_date": _pick(payload, "end_date", "endDate") or _pick(data, "end_date", "endDate"),
    }


def normalize_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Map a reply payload onto the Action field names.

    Accepts the Spanish tags, the nested ``data`` chart shape, camelCase keys and
    ``type`` as chart kind or report type. Unknown actions become chat. Missing
    optional fields are left out so model defaults apply.
    """
    tag = _ACTION_ALIASES.get(canonicalize(str(payload.get("action", ""))).strip())
    message = str(payload.get("message") or "")
    data = payload.get("data") if isinstance(payload.get("data"), dict) else {}

    if tag == "navigate":
        fields = {"destination": _lower(_pick(payload, "destination"))}
    elif tag == "chart":
        fields = {
            "chart_kind": _lower(_pick(payload, "chart_kind", "chartKind", "chartType", "type")),
            "metric": _lower(_pick(payload, "metric") or _pick(data, "metric")),
            "group_by": _lower(
                _pick(payload, "group_by", "groupBy") or _pick(data, "group_by", "groupBy")
            ),
            **_period(payload, data),
        }
    elif tag == "report":
        fields = {
            "report_type": _pick(payload, "report_type", "reportType", "type"),
            **_period(payload, data),
            "filters": payload.get("filters") if isinstance(payload.get("filters"), dict) else None,
        }
    elif tag == "filter":
        fields = {
            "category": _pick(payload, "category"),
            "filters": payload.get("filters") if isinstance(payload.get("filters"), dict) else None,
        }
    else:
        tag = "chat"
        fields = {"reply": str(_pick(payload, "reply", "response", "message") or "")}

    normalized = {"action": tag, "message": message}
    normalized.update({k: v for k, v in fields.items() if v is not None})
    return normalized


def parse_action_payload(text: str) -> Action:
    """
    Parse a collaborator reply into an Action.

    Raises:
        ValueError: if the reply is not a JSON object or does not fit its action shape.
    """
    payload = json.loads(strip_formatting(text))
    if not isinstance(payload, dict):
        raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
    return ACTION_ADAPTER.validate_python(normalize_payload(payload))


class ReasoningAdapter:
    """
    Boundary around the language-model collaborator. Never raises to callers:
    failures become chat actions and are reported to the logs and the monitor.
    """

    def __init__(
        self,
        client: AsyncOpenAI | None,
        *,
        config: AssistantConfig | None = None,
        data_service: DummyDataService | None = None,
        monitor: AssistantMonitor | None = None,
    ):
        self.client = client
        self.config = config or AssistantConfig()
        self.data_service = data_service
        self.monitor = monitor

    @classmethod
    def from_config(
        cls,
        config: AssistantConfig,
        data_service: DummyDataService | None = None,
        monitor: AssistantMonitor | None = None,
    ) -> "ReasoningAdapter":
        """Create the adapter, with no client when the API key is missing or a placeholder."""
        client: AsyncOpenAI | None = None
        resolved_key = config.api_key or os.getenv("OPENAI_API_KEY")
        if resolved_key and resolved_key != "YOUR_API_KEY_HERE":
            try:
                client = AsyncOpenAI(api_key=resolved_key)
                logger.info("AsyncOpenAI client initialized successfully.")
            except Exception as e:
                logger.error(f"Failed to initialize OpenAI client: {e}")
        else:
            logger.warning("OpenAI API key missing or placeholder. Using the local interpreter.")
        return cls(client, config=config, data_service=data_service, monitor=monitor)

    @property
    def available(self) -> bool:
        return self.client is not None

    async def _complete(self, system_prompt: str, user_text: str) -> str:
        if self.client is None:
            raise ReasoningAdapterFailure("Language-model client not available")
        try:
            completion = await safe_chat_completion(
                self.client,
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_text},
                ],
                logger=logger,
                retry_attempts=self.config.retry_attempts,
                retry_backoff=self.config.retry_backoff,
                timeout=self.config.request_timeout,
                max_tokens=self.config.max_tokens,
                temperature=self.config.temperature,
            )
        except Exception as exc:  # noqa: BLE001
            raise ReasoningAdapterFailure("Language-model call failed", cause=exc) from exc
        return completion_text(completion)

    def _report_failure(self, stage: str, exc: BaseException):
        if self.monitor is not None:
            self.monitor.record_error(stage, exc)
        else:
            logger.error(f"Reasoning adapter failure during {stage}: {exc}")

    def _fallback_chat(self, raw: str) -> ChatAction:
        return ChatAction(
            reply=truncate(raw, self.config.max_reply_chars),
            message=truncate(raw, self.config.fallback_truncate_chars),
        )

    async def classify(self, user_text: str) -> Action:
        """Phase 1: return the provisional action for ``user_text``."""
        try:
            raw = await self._complete(SYSTEM_PROMPT, user_text)
        except ReasoningAdapterFailure as exc:
            self._report_failure("interpret", exc.cause or exc)
            return ChatAction(reply=GENERIC_APOLOGY, message="Error de procesamiento")

        try:
            action = parse_action_payload(raw)
        except (ValueError, ValidationError) as exc:
            logger.info("Reply was not a recognized action (%s); treating it as chat", exc)
            return self._fallback_chat(raw)

        logger.debug("Collaborator proposed action %s", action.action)
        return action

    async def enrich(self, action: Action, supporting_data: Any) -> Action:
        """
        Phase 2: ask for a richer message grounded on ``supporting_data``.

        Returns ``action`` unchanged when the call fails, the reply does not parse
        or it names a different action.
        """
        if not isinstance(action, (ChartAction, ReportAction)) or self.client is None:
            return action
        try:
            raw = await self._complete(
                ENRICHMENT_SYSTEM_PROMPT, build_enrichment_prompt(action, supporting_data)
            )
            refined = parse_action_payload(raw)
        except ReasoningAdapterFailure as exc:
            logger.warning("Enrichment call failed; keeping the first-pass message: %s", exc.cause or exc)
            return action
        except (ValueError, ValidationError) as exc:
            logger.warning("Enrichment reply did not parse; keeping the first-pass message: %s", exc)
            return action

        if refined.action != action.action or not refined.message.strip():
            logger.warning(
                "Enrichment returned %s instead of %s; keeping the first-pass message",
                refined.action,
                action.action,
            )
            return action
        return action.model_copy(update={"message": refined.message.strip()})

    async def interpret(self, user_text: str) -> Action:
        """
        Run phase 1 and, for chart and report actions, the enrichment pass.

        Standalone entry point for callers that want the final action without the
        dispatcher; the dispatcher runs the same two phases around its own
        error handling.
        """
        action = await self.classify(user_text)
        if not isinstance(action, (ChartAction, ReportAction)) or self.data_service is None:
            return action
        try:
            action, supporting = gather_supporting_data(
                action, self.data_service, self.config.chart.palette
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning("Could not gather supporting data for enrichment: %s", exc)
            return action
        return await self.enrich(action, supporting)
