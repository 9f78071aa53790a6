"""
Lexical intent classifier.

Scores raw text against weighted keyword groups per intent category. Both the
input and the keyword tables are canonicalized (lowercase, no diacritics), so
"gráfica" and "grafica" are the same keyword. No stemming is performed.

Scoring, per category:

* each group contributes ``weight * matched_concepts / concepts_in_group``;
* the sum is divided by the number of groups with at least one hit.

Dividing by the groups that hit keeps a large group from diluting a category
with a single strong match. It does not stop one strong group and one weak
group from averaging each other down. The best category wins only when it
scores strictly above the threshold; otherwise the result is CHAT with
confidence 1.0. That 1.0 marks the fallback policy and is not a measured
confidence.
"""

import logging
import re
from dataclasses import dataclass

from models.enums import IntentType, ReportType
from models.intent import Intent, IntentData
from utils.text import canonicalize, extract_date_range

from .chart_builder import detect_chart_kind
from .navigation import NAVIGATION_COMMANDS, resolve_destination

__all__ = [
    "CATEGORY_PRIORITY",
    "INTENT_INDICATORS",
    "IntentClassifier",
    "KeywordGroup",
    "classify",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KeywordGroup:
    """A weighted group of concepts; each concept lists interchangeable variants."""

    concepts: tuple[tuple[str, ...], ...]
    weight: float

    def __post_init__(self):
        canonical = tuple(tuple(canonicalize(v) for v in concept) for concept in self.concepts)
        object.__setattr__(self, "concepts", canonical)

    def score(self, canonical_text: str) -> float:
        matched = sum(1 for concept in self.concepts if any(v in canonical_text for v in concept))
        return matched / len(self.concepts) * self.weight if matched else 0.0


def _group(weight: float, *concepts: str | tuple[str, ...]) -> KeywordGroup:
    return KeywordGroup(
        tuple((c,) if isinstance(c, str) else tuple(c) for c in concepts),
        weight,
    )


def _destination_concepts() -> tuple[tuple[str, ...], ...]:
    by_destination: dict[str, list[str]] = {}
    for keyword, destination in NAVIGATION_COMMANDS:
        by_destination.setdefault(destination.value, []).append(keyword)
    return tuple(tuple(words) for words in by_destination.values())


GARMENTS = (
    "camisa", "shirt", "pantalon", "pants", "vestido", "dress", "zapato",
    "accesorio", "polo", "jeans", "abrigo", "falda", "buzo", "pijama",
)

INTENT_INDICATORS: dict[IntentType, tuple[KeywordGroup, ...]] = {
    IntentType.NAVIGATION: (
        _group(0.7, ("llévame", "llevarme"), ("navega", "navegar", "ir a"), ("abre", "abrir")),
        _group(0.5, ("página", "vista", "sección")),
        _group(1.0, *_destination_concepts()),
    ),
    IntentType.PLATFORM_DATA: (
        _group(0.6, ("datos", "información"), ("métricas", "estadísticas")),
        _group(0.4, ("cuánto", "cuántos", "cuánta", "cuántas"), ("total", "cantidad")),
        _group(0.5, "ventas", ("stock", "existencias"), "productos", "categorías"),
    ),
    IntentType.CHART: (
        _group(0.8, ("gráfica", "gráfico", "chart", "visualización", "diagrama")),
        _group(1.0, "barra", ("pastel", "pie", "circular"), ("línea", "line"), "área", "radar"),
    ),
    IntentType.REPORT: (
        _group(1.0, ("reporte", "informe", "resumen")),
        _group(0.6, "venta", ("inventario", "stock"), "métrica"),
    ),
    IntentType.FILTER: (
        _group(0.7, ("filtra", "busca", "encuentra")),
        _group(0.5, "categoría", "tipo", "talla", "marca", "precio", "color"),
        _group(0.4, GARMENTS),
        _group(0.4, ("xxs", "xs", "xl", "xxl", "talla")),
        _group(0.4, ("hombre", "mujer", "niño", "niña")),
    ),
    IntentType.HELP: (
        _group(1.0, ("ayuda", "help", "qué puedes", "funciones")),
    ),
}

# Exact ties go to the category listed first.
CATEGORY_PRIORITY: tuple[IntentType, ...] = (
    IntentType.NAVIGATION,
    IntentType.CHART,
    IntentType.REPORT,
    IntentType.FILTER,
    IntentType.PLATFORM_DATA,
    IntentType.HELP,
)

_REPORT_KEYWORDS = (
    ("venta", ReportType.SALES),
    ("inventario", ReportType.INVENTORY),
    ("metrica", ReportType.METRICS),
)
_SIZES = {"xxs": "XXS", "xs": "XS", "s": "S", "m": "M", "l": "L", "xl": "XL", "xxl": "XXL"}
_GENDERS = {"hombre": "Hombre", "mujer": "Mujer", "nino": "Niño", "nina": "Niña"}


class IntentClassifier:
    """Weighted keyword classifier over fixed tables."""

    def __init__(
        self,
        indicators: dict[IntentType, tuple[KeywordGroup, ...]] | None = None,
        priority: tuple[IntentType, ...] = CATEGORY_PRIORITY,
        threshold: float = 0.3,
    ):
        self.indicators = indicators if indicators is not None else INTENT_INDICATORS
        self.priority = tuple(p for p in priority if p in self.indicators) + tuple(
            t for t in self.indicators if t not in priority
        )
        self.threshold = threshold

    def scores(self, text: str) -> dict[IntentType, float]:
        """Normalized score per category, in priority order."""
        canonical = canonicalize(text)
        result: dict[IntentType, float] = {}
        for intent_type in self.priority:
            group_scores = [g.score(canonical) for g in self.indicators[intent_type]]
            hits = [s for s in group_scores if s > 0]
            result[intent_type] = sum(hits) / len(hits) if hits else 0.0
        return result

    def classify(self, text: str) -> Intent:
        if not text or not text.strip():
            return Intent(IntentType.CHAT, 1.0)

        navigation = resolve_destination(text)
        if navigation is not None:
            return Intent(
                IntentType.NAVIGATION,
                navigation.confidence,
                IntentData(path=navigation.path),
            )

        best_type, best_score = IntentType.CHAT, 0.0
        for intent_type, score in self.scores(text).items():
            if score > best_score:
                best_type, best_score = intent_type, score

        if best_score <= self.threshold:
            logger.debug("No category above %.2f for %r; falling back to CHAT", self.threshold, text)
            return Intent(IntentType.CHAT, 1.0)

        return Intent(best_type, min(best_score, 1.0), self._extract_data(best_type, text))

    def _extract_data(self, intent_type: IntentType, text: str) -> IntentData:
        canonical = canonicalize(text)
        data = IntentData()

        if intent_type is IntentType.CHART:
            data.chart_type = detect_chart_kind(canonical)

        if intent_type in (IntentType.PLATFORM_DATA, IntentType.REPORT):
            for keyword, report_type in _REPORT_KEYWORDS:
                if keyword in canonical:
                    data.report_type = report_type
                    break

        if intent_type is IntentType.FILTER:
            data.filter = _extract_filter(canonical)

        data.start_date, data.end_date = extract_date_range(text)

        return data


def _extract_filter(canonical: str) -> dict[str, str]:
    """Pick inventory field values (size, gender) mentioned as whole words."""
    words = re.findall(r"[a-z0-9]+", canonical)
    result: dict[str, str] = {}
    for word in words:
        if word in _SIZES and "size" not in result and (len(word) > 1 or "talla" in words):
            result["size"] = _SIZES[word]
        elif word in _GENDERS and "gender" not in result:
            result["gender"] = _GENDERS[word]
    return result


_default_classifier = IntentClassifier()


def classify(text: str) -> Intent:
    """Classify ``text`` with the default tables."""
    return _default_classifier.classify(text)
