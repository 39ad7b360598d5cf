"""Router - Tabla de rutas, guard de navegación y navegador."""

from memoria.router.routes import Route, RouteTable, build_route_table
from memoria.router.guard import GuardResult, GuardState, NavigationGuard
from memoria.router.navigator import Navigator

__all__ = [
    "Route",
    "RouteTable",
    "build_route_table",
    "GuardResult",
    "GuardState",
    "NavigationGuard",
    "Navigator",
]
