"""
Tabla de rutas.

El guard solo lee los flags de cada ruta; las vistas que las atienden
viven en memoria.api.
"""

from dataclasses import dataclass

from memoria.config import Settings, get_settings
from memoria.utils.errors import RouteNotFoundError


@dataclass(frozen=True)
class Route:
    """Ruta navegable con sus requisitos."""

    name: str
    path: str
    requires_auth: bool = False
    requires_guest: bool = False
    requires_profile: bool = False
    redirect: str | None = None  # alias estático, sin vista propia


class RouteTable:
    """Resuelve paths a rutas."""

    def __init__(self, routes: list[Route]):
        self._by_path = {route.path: route for route in routes}

    def __contains__(self, path: str) -> bool:
        return self._normalize(path) in self._by_path

    def resolve(self, path: str) -> Route:
        route = self._by_path.get(self._normalize(path))
        if route is None:
            raise RouteNotFoundError(path)
        return route

    @staticmethod
    def _normalize(path: str) -> str:
        if len(path) > 1:
            return path.rstrip("/")
        return path


def build_route_table(settings: Settings | None = None) -> RouteTable:
    """Construye la tabla por defecto a partir de la configuración."""
    settings = settings or get_settings()
    return RouteTable([
        Route(name="root", path="/", redirect=settings.login_route),
        Route(name="login", path=settings.login_route, requires_guest=True),
        Route(name="signup", path="/signup", requires_guest=True),
        Route(name="profile", path=settings.profile_route, requires_auth=True),
        Route(
            name="notes",
            path=settings.default_route,
            requires_auth=True,
            requires_profile=True,
        ),
    ])
