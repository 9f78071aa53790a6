import pytest

from assistant.navigation import NavigationMatch, resolve_destination
from models.enums import Destination


@pytest.mark.parametrize(
    "text, path",
    [
        ("llévame a inventario", "/dashboard/inventory"),
        ("LLEVAME A INVENTARIO", "/dashboard/inventory"),
        ("Abre la configuración", "/dashboard/settings"),
        ("ir a analíticas", "/dashboard/analytics"),
        ("volver al inicio", "/dashboard"),
        ("quiero ir a upload", "/dashboard/upload"),
    ],
)
def test_resolves_registered_keywords(text, path):
    match = resolve_destination(text)
    assert match is not None
    assert match.path == path
    assert match.confidence == 1.0


def test_first_registered_keyword_wins():
    assert resolve_destination("inventario y ajustes").destination is Destination.INVENTORY


@pytest.mark.parametrize("text", ["hola", "", "genera la gráfica de barras"])
def test_no_keyword_returns_none(text):
    assert resolve_destination(text) is None


def test_match_path_follows_destination():
    assert NavigationMatch(Destination.DASHBOARD).path == "/dashboard"
