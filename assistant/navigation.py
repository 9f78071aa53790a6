"""Direct keyword-to-destination lookup, checked before any weighted scoring."""

from dataclasses import dataclass

from models.enums import Destination
from utils.text import canonicalize

__all__ = ["NAVIGATION_COMMANDS", "NavigationMatch", "resolve_destination"]

# Checked in declaration order; the first keyword contained in the input wins.
NAVIGATION_COMMANDS: tuple[tuple[str, Destination], ...] = (
    ("inventario", Destination.INVENTORY),
    ("inventory", Destination.INVENTORY),
    ("analytics", Destination.ANALYTICS),
    ("analíticas", Destination.ANALYTICS),
    ("dashboard", Destination.DASHBOARD),
    ("inicio", Destination.DASHBOARD),
    ("upload", Destination.UPLOAD),
    ("settings", Destination.SETTINGS),
    ("configuración", Destination.SETTINGS),
    ("ajustes", Destination.SETTINGS),
)

_CANONICAL_COMMANDS = tuple((canonicalize(keyword), dest) for keyword, dest in NAVIGATION_COMMANDS)


@dataclass(frozen=True)
class NavigationMatch:
    destination: Destination
    confidence: float = 1.0

    @property
    def path(self) -> str:
        return self.destination.path


def resolve_destination(text: str) -> NavigationMatch | None:
    """Return the destination of the first registered keyword found in ``text``, else None."""
    canonical = canonicalize(text)
    for keyword, destination in _CANONICAL_COMMANDS:
        if keyword in canonical:
            return NavigationMatch(destination)
    return None
