"""
Fully local interpretation of user text, used when no language model is configured.

The navigation resolver runs first and any match short-circuits. Otherwise the
lexical classifier picks an intent, which maps onto the same Action shapes the
language model produces.
"""

import logging
import re

from models.actions import (
    Action,
    ChartAction,
    ChatAction,
    FilterAction,
    NavigateAction,
    ReportAction,
)
from models.enums import IntentType, ReportType
from utils.text import canonicalize

from .chart_builder import build_chart_request
from .intent_classifier import IntentClassifier
from .navigation import resolve_destination

__all__ = ["LocalInterpreter", "HELP_TEXT", "DEFAULT_REPLY", "GREETING"]

logger = logging.getLogger(__name__)

DESTINATION_NAMES = {
    "inventory": "la página de inventario",
    "analytics": "las analíticas",
    "dashboard": "el dashboard principal",
    "settings": "la configuración",
    "upload": "la página de carga de datos",
}
REPORT_NAMES = {"sales": "ventas", "inventory": "inventario", "metrics": "métricas"}
CHART_NAMES = {"bar": "barras", "line": "líneas", "pie": "pastel", "area": "área", "radar": "radar"}

HELP_TEXT = (
    "Puedo ayudarte a:\n"
    "• Navegar: 'Muéstrame el inventario'\n"
    "• Mostrar gráficas: 'Genera la gráfica de barras'\n"
    "• Filtrar inventario: 'Camisa XL para hombre'\n"
    "• Generar reportes: 'Reporte de ventas'"
)
GREETING = (
    "¡Hola! Soy tu asistente de Telar. Puedo mostrarte gráficas, filtrar inventario "
    "y ayudarte a navegar. ¿Qué necesitas?"
)
DEFAULT_REPLY = (
    "Puedo ayudarte a navegar, mostrar gráficas específicas o filtrar el inventario. "
    "Prueba decir 'muéstrame la gráfica de barras' o 'camisa XL'."
)
_GREETING_WORDS = {"hola", "hello", "hi", "hey", "buenas", "buenos"}


class LocalInterpreter:
    """Maps text to an Action without any external collaborator."""

    def __init__(self, classifier: IntentClassifier | None = None):
        self.classifier = classifier or IntentClassifier()

    def interpret(self, text: str) -> Action:
        navigation = resolve_destination(text)
        if navigation is not None:
            destination = navigation.destination
            return NavigateAction(
                destination=destination,
                message=f"Te llevo a {DESTINATION_NAMES[destination.value]}.",
            )

        intent = self.classifier.classify(text)
        logger.debug("Local intent %s (%.2f) for %r", intent.type.value, intent.confidence, text)

        if intent.type is IntentType.CHART:
            request = build_chart_request(text)
            return ChartAction(
                chart_kind=request.kind,
                metric=request.metric,
                group_by=request.group_by,
                start_date=request.start_date,
                end_date=request.end_date,
                message=f"Aquí está la gráfica de {CHART_NAMES[request.kind.value]} que solicitaste.",
            )

        if intent.type in (IntentType.REPORT, IntentType.PLATFORM_DATA):
            report_type = intent.data.report_type or ReportType.METRICS
            return ReportAction(
                report_type=report_type.value,
                start_date=intent.data.start_date,
                end_date=intent.data.end_date,
                message=f"Aquí tienes el reporte de {REPORT_NAMES[report_type.value]}.",
            )

        if intent.type is IntentType.FILTER:
            return FilterAction(
                category=text.strip(),
                filters=dict(intent.data.filter),
                message=f'Perfecto, te muestro el inventario filtrado por "{text.strip()}".',
            )

        if intent.type is IntentType.HELP:
            return ChatAction(reply=HELP_TEXT, message="Ayuda")

        if intent.type is IntentType.NAVIGATION:
            return ChatAction(
                reply="¿A qué sección quieres ir? Inventario, analíticas, dashboard, carga de datos o configuración.",
                message="¿A qué sección quieres ir?",
            )

        words = set(re.findall(r"[a-z]+", canonicalize(text)))
        if words & _GREETING_WORDS:
            return ChatAction(reply=GREETING, message="Saludo")
        return ChatAction(reply=DEFAULT_REPLY, message="Sugerencias")
