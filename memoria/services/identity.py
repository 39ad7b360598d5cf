"""
Identity Provider - Contrato con el proveedor de identidad externo.

El núcleo solo necesita la identidad actual (síncrona) y una
notificación de cambios de estado de autenticación.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Usuario autenticado según el proveedor."""

    uid: str
    email: str | None = None


AuthStateCallback = Callable[[Identity | None], None]


class IdentityProvider(ABC):
    """Interface del proveedor de identidad."""

    @property
    @abstractmethod
    def current_user(self) -> Identity | None:
        """Identidad actual, None si no hay sesión."""

    @abstractmethod
    def on_auth_state_changed(self, callback: AuthStateCallback) -> Callable[[], None]:
        """Suscribe un callback; retorna la función para desuscribirse."""

    @abstractmethod
    async def wait_until_ready(self) -> Identity | None:
        """Espera el primer estado de autenticación conocido."""


class LocalIdentityProvider(IdentityProvider):
    """
    Proveedor en proceso para desarrollo, de un solo usuario.

    La sesión es global al proceso: un login desde cualquier cliente
    cambia la identidad de todos. Por eso las vistas de login lo
    rechazan en producción, donde se inyecta un proveedor externo.

    Como en los SDK de identidad, al suscribirse tras el arranque el
    callback recibe el estado actual de inmediato.
    """

    def __init__(self):
        self._current: Identity | None = None
        self._listeners: list[AuthStateCallback] = []
        self._ready = asyncio.Event()

    @property
    def current_user(self) -> Identity | None:
        return self._current

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Callable[[], None]:
        self._listeners.append(callback)
        if self.is_ready:
            callback(self._current)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def wait_until_ready(self) -> Identity | None:
        await self._ready.wait()
        return self._current

    def start(self, identity: Identity | None = None) -> None:
        """Resuelve el estado inicial (sesión restaurada o ninguna)."""
        self._set(identity)

    def sign_in(self, uid: str, email: str | None = None) -> Identity:
        identity = Identity(uid=uid, email=email)
        self._set(identity)
        logger.info(f"Sesión iniciada: {uid}")
        return identity

    def sign_out(self) -> None:
        if self._current:
            logger.info(f"Sesión cerrada: {self._current.uid}")
        self._set(None)

    def _set(self, identity: Identity | None) -> None:
        self._current = identity
        self._ready.set()
        for listener in list(self._listeners):
            listener(identity)
