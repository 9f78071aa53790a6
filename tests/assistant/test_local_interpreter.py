from datetime import date

import pytest

from assistant.intent_classifier import IntentClassifier
from assistant.local_interpreter import DEFAULT_REPLY, GREETING, HELP_TEXT, LocalInterpreter
from models.actions import ChartAction, ChatAction, FilterAction, NavigateAction, ReportAction
from models.enums import ChartKind, Destination


@pytest.fixture
def interpreter() -> LocalInterpreter:
    return LocalInterpreter()


def test_navigation(interpreter):
    action = interpreter.interpret("llévame a inventario")
    assert isinstance(action, NavigateAction)
    assert action.destination is Destination.INVENTORY
    assert action.message == "Te llevo a la página de inventario."


def test_chart(interpreter):
    action = interpreter.interpret("genera la gráfica de barras")
    assert isinstance(action, ChartAction)
    assert action.chart_kind is ChartKind.BAR
    assert action.message == "Aquí está la gráfica de barras que solicitaste."


def test_report_with_type(interpreter):
    action = interpreter.interpret("genera un reporte de ventas")
    assert isinstance(action, ReportAction)
    assert action.report_type == "sales"


def test_chart_carries_period(interpreter):
    action = interpreter.interpret("gráfica de ventas del 2025-11-05 al 2025-11-06")
    assert isinstance(action, ChartAction)
    assert (action.start_date, action.end_date) == (date(2025, 11, 5), date(2025, 11, 6))


def test_report_carries_period(interpreter):
    action = interpreter.interpret("reporte de ventas entre 2025-11-04 y 2025-11-06")
    assert isinstance(action, ReportAction)
    assert action.report_type == "sales"
    assert (action.start_date, action.end_date) == (date(2025, 11, 4), date(2025, 11, 6))


def test_platform_data_defaults_to_metrics(interpreter):
    action = interpreter.interpret("¿cuántos datos totales?")
    assert isinstance(action, ReportAction)
    assert action.report_type == "metrics"


def test_filter_uses_literal_text(interpreter):
    action = interpreter.interpret("  camisa XL para hombre ")
    assert isinstance(action, FilterAction)
    assert action.category == "camisa XL para hombre"
    assert action.filters == {"size": "XL", "gender": "Hombre"}


def test_help(interpreter):
    action = interpreter.interpret("ayuda")
    assert isinstance(action, ChatAction)
    assert action.reply == HELP_TEXT


def test_navigation_without_destination_asks_for_one(interpreter):
    action = interpreter.interpret("llévame a la página")
    assert isinstance(action, ChatAction)
    assert action.message == "¿A qué sección quieres ir?"


def test_greeting(interpreter):
    assert interpreter.interpret("¡Hola!").reply == GREETING


def test_default_reply(interpreter):
    action = interpreter.interpret("xyz qwerty")
    assert isinstance(action, ChatAction)
    assert action.reply == DEFAULT_REPLY


def test_threshold_is_applied():
    interpreter = LocalInterpreter(IntentClassifier(threshold=0.9))
    action = interpreter.interpret("camisa XL")
    assert not isinstance(action, FilterAction)
    assert action.reply == DEFAULT_REPLY
