from __future__ import annotations

"""Prompt text for the language-model collaborator.

`SYSTEM_PROMPT` defines the five action shapes the assistant understands; the
enrichment builders format the second pass that turns supporting data into a
richer message. Builders return plain strings and carry no role metadata.
"""

import dataclasses
import json
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel

__all__ = [
    "SYSTEM_PROMPT",
    "ENRICHMENT_SYSTEM_PROMPT",
    "build_enrichment_prompt",
    "to_jsonable",
    "GENERIC_APOLOGY",
    "CHART_APOLOGY",
    "REPORT_APOLOGY",
    "NOT_UNDERSTOOD",
    "NO_DATA_NOTE",
]


SYSTEM_PROMPT = """Eres un asistente especializado para una tienda de ropa.
Tu objetivo es interpretar las solicitudes del usuario y convertirlas en una acción ejecutable.
Responde ÚNICAMENTE con un objeto JSON válido, sin markdown, sin bloques de código y sin texto adicional.

ACCIONES DISPONIBLES:

1. Navegación, si el usuario quiere ir a una página:
{"action": "navigate", "destination": "inventory|analytics|dashboard|settings|upload", "message": "Te llevo a [página]"}

2. Gráfica, si pide ver datos de forma visual:
{"action": "chart", "type": "bar|line|pie|area|radar", "metric": "sales|revenue|stock", "groupBy": "category|region|date", "startDate": "YYYY-MM-DD", "endDate": "YYYY-MM-DD", "message": "Aquí tienes la gráfica que solicitaste"}

3. Reporte, si pide un informe o análisis:
{"action": "report", "type": "sales|inventory|metrics", "startDate": "YYYY-MM-DD", "endDate": "YYYY-MM-DD", "filters": {}, "message": "Aquí tienes el reporte solicitado"}

4. Filtro, si quiere filtrar o buscar productos del inventario:
{"action": "filter", "category": "texto a buscar", "filters": {}, "message": "Mostrando resultados filtrados"}

5. Chat, para cualquier otra conversación:
{"action": "chat", "response": "tu respuesta detallada", "message": "respuesta corta"}

REGLAS:
- Incluye SIEMPRE la propiedad "action" y un "message" amigable en español.
- Usa solo los valores listados para destination, type, metric y groupBy.
- Incluye startDate y endDate solo si el usuario menciona un período; omítelos en otro caso.
- Si no estás seguro, usa la acción "chat".

Ejemplo: "llévame a la página de inventario"
{"action": "navigate", "destination": "inventory", "message": "Te llevo a la página de inventario"}"""


ENRICHMENT_SYSTEM_PROMPT = """Eres un analista de negocio de una tienda de ropa.
Recibes una acción JSON ya decidida y los datos que la respaldan.
Devuelve el MISMO objeto JSON, con la misma "action" y los mismos campos,
cambiando solo "message" por un análisis breve (2 a 4 frases) basado exclusivamente en los datos.
No inventes cifras. Sin markdown ni texto fuera del JSON."""


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses, pydantic models and dates into JSON-compatible values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return to_jsonable(dataclasses.asdict(value))
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def build_enrichment_prompt(action: BaseModel, supporting_data: Any) -> str:
    """Return the user prompt for the second, message-refining pass."""
    action_json = json.dumps(
        action.model_dump(mode="json", exclude={"chart_data"}), ensure_ascii=False
    )
    data_json = json.dumps(to_jsonable(supporting_data), ensure_ascii=False, indent=2)
    return f"""
        Acción decidida:
        {action_json}

        Datos de respaldo:
        {data_json}

        Mantén el mismo formato JSON y actualiza solo "message" con un análisis relevante.
        """


# User-facing copy
GENERIC_APOLOGY = "Lo siento, hubo un error procesando tu solicitud."
CHART_APOLOGY = "Lo siento, hubo un error generando la gráfica."
REPORT_APOLOGY = "Lo siento, no pude generar ese reporte."
NOT_UNDERSTOOD = "No entendí tu solicitud. ¿Podrías reformularla?"
NO_DATA_NOTE = "No hay datos para el período solicitado."
