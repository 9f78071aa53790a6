"""Text helpers shared by keyword tables, user input and collaborator replies."""

import re
import unicodedata
from datetime import date

__all__ = ["canonicalize", "extract_date_range", "truncate"]

_ISO_DATE = re.compile(r"\b(\d{4}-\d{2}-\d{2})\b")


def canonicalize(text: str) -> str:
    """Lowercase ``text`` and strip diacritics ("Gráfica" -> "grafica", "baño" -> "bano")."""
    decomposed = unicodedata.normalize("NFKD", text.lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    if limit <= 0 or len(text) <= limit:
        return text
    return text[:limit] + suffix


def extract_date_range(text: str) -> tuple[date | None, date | None]:
    """
    Return the period named in ``text`` as ISO dates.

    The first date found is the start and the second the end; either may be
    missing. A malformed date such as 2025-13-40 discards the whole range.
    """
    found = _ISO_DATE.findall(text)
    try:
        start = date.fromisoformat(found[0]) if found else None
        end = date.fromisoformat(found[1]) if len(found) > 1 else None
    except ValueError:
        return None, None
    return start, end
