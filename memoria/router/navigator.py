"""Navigator - Router que aplica el guard antes de cada vista."""

import logging

from memoria.router.guard import NavigationGuard
from memoria.router.routes import Route, RouteTable
from memoria.utils.errors import NavigationError

logger = logging.getLogger(__name__)


class Navigator:
    """
    Resuelve paths, aplica el guard y sigue sus redirecciones.

    Uso:
        route = await navigator.push("/notes")
        # route puede ser distinta de la pedida si el guard redirigió
    """

    def __init__(self, routes: RouteTable, guard: NavigationGuard, max_redirects: int = 5):
        self.routes = routes
        self.guard = guard
        self.max_redirects = max_redirects
        self.current_route: Route | None = None

    async def push(self, path: str) -> Route:
        """
        Navega a ``path``.

        Raises:
            RouteNotFoundError: si el path no está en la tabla
            NavigationError: si se encadenan demasiadas redirecciones
        """
        route = self.routes.resolve(path)
        redirects = 0

        try:
            while True:
                if route.redirect:
                    target = route.redirect
                else:
                    result = await self.guard.before_each(route)
                    if result.allowed:
                        break
                    target = result.redirect_to

                redirects += 1
                if redirects > self.max_redirects:
                    raise NavigationError(
                        f"Demasiadas redirecciones navegando a {path}",
                        {"path": path, "last_redirect": target},
                    )
                route = self.routes.resolve(target)

            self.current_route = route
            logger.debug(f"Navegación {path} -> {route.path}")
            return route
        finally:
            self.guard.after_each()
