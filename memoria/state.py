"""Estado compartido entre guards y vistas.

Estos objetos viven dentro del AppContext; no hay singletons de módulo.
"""

from collections import deque
from dataclasses import dataclass, field

from memoria.domain.entities.profile import Profile

# Solo se guardan los últimos cambios del indicador
HISTORY_LIMIT = 50


@dataclass
class LoadingState:
    """Indicador global de carga durante la navegación."""

    is_loading: bool = False
    history: deque[bool] = field(default_factory=lambda: deque(maxlen=HISTORY_LIMIT), repr=False)

    def set_loading(self, value: bool) -> None:
        self.is_loading = value
        self.history.append(value)


@dataclass
class ProfileState:
    """Perfil cargado y estado de la última operación sobre él."""

    profile: Profile | None = None
    is_loading: bool = False
    error: str | None = None

    def reset(self) -> None:
        self.profile = None
        self.is_loading = False
        self.error = None
