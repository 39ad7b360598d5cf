"""
Navigation Guard - Pipeline de verificaciones antes de cada navegación.

Orden de las verificaciones para una ruta destino:
    1. requires_auth sin identidad      -> login
    2. requires_guest con identidad     -> ruta por defecto
    3. requires_profile con identidad   -> ruta de perfil si no existe perfil

La verificación de perfil es fail-open: si CheckProfileExists lanza, la
navegación continúa. Un fallo transitorio del backend deja pasar sin perfil.

Dos navegaciones simultáneas no se serializan; la última en terminar
decide el indicador de carga. Las transiciones quedan registradas en
``transitions`` (solo las últimas TRANSITIONS_LIMIT) para poder observarlo.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum

from memoria.domain.usecases.profile import CheckProfileExists
from memoria.router.routes import Route
from memoria.services.identity import IdentityProvider
from memoria.state import LoadingState
from memoria.utils.errors import ErrorCategory, log_error

logger = logging.getLogger(__name__)

TRANSITIONS_LIMIT = 100


class GuardState(str, Enum):
    """Estados de la máquina del guard."""
    IDLE = "idle"
    CHECKING_AUTH = "checking_auth"
    CHECKING_PROFILE = "checking_profile"
    REDIRECTING = "redirecting"
    ALLOWED = "allowed"


_VALID_TRANSITIONS: dict[GuardState, frozenset[GuardState]] = {
    GuardState.IDLE: frozenset({GuardState.CHECKING_AUTH}),
    GuardState.CHECKING_AUTH: frozenset({
        GuardState.CHECKING_PROFILE,
        GuardState.REDIRECTING,
        GuardState.ALLOWED,
    }),
    GuardState.CHECKING_PROFILE: frozenset({GuardState.REDIRECTING, GuardState.ALLOWED}),
    # Tras redirigir se vuelve a evaluar la nueva ruta
    GuardState.REDIRECTING: frozenset({GuardState.CHECKING_AUTH, GuardState.IDLE}),
    GuardState.ALLOWED: frozenset({GuardState.CHECKING_AUTH, GuardState.IDLE}),
}


@dataclass(frozen=True)
class GuardResult:
    """Decisión del guard para una ruta."""

    allowed: bool
    redirect_to: str | None = None
    reason: str = ""

    @classmethod
    def allow(cls, reason: str = "") -> "GuardResult":
        return cls(allowed=True, reason=reason)

    @classmethod
    def redirect(cls, path: str, reason: str) -> "GuardResult":
        return cls(allowed=False, redirect_to=path, reason=reason)


class NavigationGuard:
    """
    Máquina de estados del guard de navegación.

    Uso:
        result = await guard.before_each(route)
        ...
        guard.after_each()
    """

    def __init__(
        self,
        identity: IdentityProvider,
        check_profile_exists: CheckProfileExists,
        loading: LoadingState,
        login_route: str = "/login",
        default_route: str = "/notes",
        profile_route: str = "/profile",
        clear_delay: float = 0.3,
    ):
        self._identity = identity
        self._check_profile_exists = check_profile_exists
        self._loading = loading
        self.login_route = login_route
        self.default_route = default_route
        self.profile_route = profile_route
        self._clear_delay = clear_delay

        self.state = GuardState.IDLE
        self.transitions: deque[tuple[GuardState, GuardState]] = deque(maxlen=TRANSITIONS_LIMIT)
        self._pending_clears: set[asyncio.Task] = set()

    def _transition(self, new_state: GuardState) -> None:
        if new_state not in _VALID_TRANSITIONS[self.state]:
            # Navegaciones solapadas: se registra pero no se bloquea
            logger.warning(f"Transición inesperada del guard: {self.state.value} -> {new_state.value}")
        self.transitions.append((self.state, new_state))
        self.state = new_state

    async def before_each(self, to: Route) -> GuardResult:
        """Evalúa las condiciones de la ruta destino."""
        self._loading.set_loading(True)
        self._transition(GuardState.CHECKING_AUTH)

        user = self._identity.current_user

        if to.requires_auth and user is None:
            return self._redirect(self.login_route, "requires_auth")

        if to.requires_guest and user is not None:
            return self._redirect(self.default_route, "requires_guest")

        if to.requires_profile and user is not None:
            self._transition(GuardState.CHECKING_PROFILE)
            try:
                has_profile = await self._check_profile_exists.execute(user.uid)
                if not has_profile and to.path != self.profile_route:
                    return self._redirect(self.profile_route, "requires_profile")
            except Exception as e:
                # Fail-open: no dejar al usuario atrapado por un check roto
                log_error(e, "navigation_guard.check_profile", ErrorCategory.NAVIGATION, {"path": to.path})

        self._transition(GuardState.ALLOWED)
        logger.debug(f"Navegación permitida: {to.path}")
        return GuardResult.allow()

    def _redirect(self, path: str, reason: str) -> GuardResult:
        self._transition(GuardState.REDIRECTING)
        logger.info(f"Redirigiendo a {path} ({reason})")
        return GuardResult.redirect(path, reason)

    def after_each(self) -> asyncio.Task:
        """Programa el apagado del indicador de carga tras un breve retardo."""
        task = asyncio.create_task(self._clear_loading())
        self._pending_clears.add(task)
        task.add_done_callback(self._pending_clears.discard)
        return task

    async def _clear_loading(self) -> None:
        await asyncio.sleep(self._clear_delay)
        self._loading.set_loading(False)
        self._transition(GuardState.IDLE)

    async def wait_idle(self) -> None:
        """Espera a que terminen los apagados pendientes del indicador."""
        if self._pending_clears:
            await asyncio.gather(*list(self._pending_clears))

    def cancel_pending(self) -> None:
        for task in list(self._pending_clears):
            task.cancel()
