import pytest

from assistant.intent_classifier import (
    CATEGORY_PRIORITY,
    IntentClassifier,
    KeywordGroup,
    classify,
)
from models.enums import ChartKind, IntentType, ReportType


@pytest.fixture
def classifier() -> IntentClassifier:
    return IntentClassifier()


# --- Fallback policy --- #


@pytest.mark.parametrize("text", ["", "   ", "xyz qwerty", "el cielo está despejado"])
def test_unrecognized_input_falls_back_to_chat(classifier, text):
    intent = classifier.classify(text)
    assert intent.type is IntentType.CHAT
    assert intent.confidence == 1.0


def test_partial_match_below_threshold_is_chat(classifier):
    """'total' alone scores 0.2 for PLATFORM_DATA, which is not enough."""
    assert classifier.scores("total")[IntentType.PLATFORM_DATA] == pytest.approx(0.2)
    intent = classifier.classify("total")
    assert intent.type is IntentType.CHAT
    assert intent.confidence == 1.0


def test_score_exactly_at_threshold_is_chat():
    tables = {IntentType.HELP: (KeywordGroup((("socorro",),), 0.3),)}
    intent = IntentClassifier(indicators=tables).classify("socorro")
    assert intent.type is IntentType.CHAT


# --- Categories --- #


def test_navigation_keyword_short_circuits(classifier):
    intent = classifier.classify("llévame a inventario")
    assert intent.type is IntentType.NAVIGATION
    assert intent.confidence == 1.0
    assert intent.data.path == "/dashboard/inventory"


def test_chart_intent_with_kind(classifier):
    intent = classifier.classify("genera la gráfica de barras")
    assert intent.type is IntentType.CHART
    assert intent.confidence == pytest.approx(0.5)
    assert intent.data.chart_type is ChartKind.BAR


def test_chart_intent_pie(classifier):
    intent = classifier.classify("muéstrame ventas por región en gráfica de pastel")
    assert intent.type is IntentType.CHART
    assert intent.data.chart_type is ChartKind.PIE


def test_report_intent_with_type(classifier):
    intent = classifier.classify("genera un reporte de ventas")
    assert intent.type is IntentType.REPORT
    assert intent.confidence == pytest.approx(0.6)
    assert intent.data.report_type is ReportType.SALES


def test_platform_data_intent(classifier):
    intent = classifier.classify("¿cuántos datos totales?")
    assert intent.type is IntentType.PLATFORM_DATA
    assert intent.confidence == pytest.approx(0.35)
    assert intent.data.report_type is None


def test_filter_intent_extracts_fields(classifier):
    intent = classifier.classify("camisa XL para hombre")
    assert intent.type is IntentType.FILTER
    assert intent.confidence == pytest.approx(0.4)
    assert intent.data.filter == {"size": "XL", "gender": "Hombre"}


@pytest.mark.parametrize("text", ["ayuda", "help", "¿qué puedes hacer?"])
def test_help_intent(classifier, text):
    intent = classifier.classify(text)
    assert intent.type is IntentType.HELP
    assert intent.confidence == 1.0


def test_date_range_extracted(classifier):
    intent = classifier.classify("reporte de ventas entre 2025-11-04 y 2025-11-06")
    assert intent.type is IntentType.REPORT
    assert intent.data.start_date.isoformat() == "2025-11-04"
    assert intent.data.end_date.isoformat() == "2025-11-06"


# --- Canonicalization --- #


def test_accented_and_unaccented_forms_score_the_same(classifier):
    accented = classifier.scores("genera la gráfica de barras")
    plain = classifier.scores("GENERA LA GRAFICA DE BARRAS")
    assert accented == plain


def test_keyword_group_is_canonicalized():
    group = KeywordGroup((("Gráfica",),), 1.0)
    assert group.concepts == (("grafica",),)
    assert group.score("una grafica") == 1.0


# --- Scoring and tie-breaking --- #


def test_normalizes_by_groups_with_hits_only():
    tables = {
        IntentType.CHART: (
            KeywordGroup((("grafica",),), 0.8),
            KeywordGroup((("barra",), ("pastel",)), 1.0),
            KeywordGroup((("radar",),), 1.0),
        )
    }
    scores = IntentClassifier(indicators=tables).scores("grafica")
    assert scores[IntentType.CHART] == pytest.approx(0.8)


def test_exact_tie_resolved_by_priority_list():
    shared = (KeywordGroup((("empate",),), 0.8),)
    # HELP declared first in the table, but CHART ranks higher in the priority list.
    tables = {IntentType.HELP: shared, IntentType.CHART: shared}
    intent = IntentClassifier(indicators=tables).classify("empate")
    assert CATEGORY_PRIORITY.index(IntentType.CHART) < CATEGORY_PRIORITY.index(IntentType.HELP)
    assert intent.type is IntentType.CHART
    assert intent.confidence == pytest.approx(0.8)


def test_module_level_classify_uses_default_tables():
    assert classify("ayuda").type is IntentType.HELP
