"""
Profile Service - Perfil del usuario actual para la capa de vistas.

Combina el proveedor de identidad con los casos de uso de perfil y
publica el resultado en ProfileState:
- check_profile: False si no hay sesión o si la verificación falla
- save_profile: True/False, el mensaje de error queda en el estado
- load_profile: el perfil o None
"""

import logging
from typing import Any

from memoria.domain.entities.profile import Profile
from memoria.domain.usecases.profile import CheckProfileExists, GetProfile, SaveProfile
from memoria.services.identity import IdentityProvider
from memoria.state import ProfileState

logger = logging.getLogger(__name__)

NOT_AUTHENTICATED = "El usuario no está autenticado"
SAVE_FAILED = "No se pudo guardar el perfil"
LOAD_FAILED = "No se pudo cargar el perfil"


class ProfileService:
    """Servicio de perfil ligado a la sesión actual."""

    def __init__(
        self,
        identity: IdentityProvider,
        save_profile: SaveProfile,
        get_profile: GetProfile,
        check_profile_exists: CheckProfileExists,
        state: ProfileState | None = None,
    ):
        self._identity = identity
        self._save_profile = save_profile
        self._get_profile = get_profile
        self._check_profile_exists = check_profile_exists
        self.state = state or ProfileState()

    async def check_profile(self) -> bool:
        """Verifica si el usuario actual tiene perfil."""
        user = self._identity.current_user
        if user is None:
            return False

        try:
            return await self._check_profile_exists.execute(user.uid)
        except Exception as e:
            logger.error(f"Error verificando perfil: {e}")
            return False

    async def save_profile(self, profile_data: dict[str, Any]) -> bool:
        """Guarda el perfil del usuario actual."""
        user = self._identity.current_user
        if user is None:
            self.state.error = NOT_AUTHENTICATED
            return False

        self.state.is_loading = True
        self.state.error = None
        try:
            self.state.profile = await self._save_profile.execute(user.uid, profile_data)
            return True
        except Exception as e:
            logger.error(f"Error guardando perfil: {e}")
            self.state.error = str(e) or SAVE_FAILED
            return False
        finally:
            self.state.is_loading = False

    async def load_profile(self) -> Profile | None:
        """Carga el perfil del usuario actual."""
        user = self._identity.current_user
        if user is None:
            return None

        self.state.is_loading = True
        self.state.error = None
        try:
            self.state.profile = await self._get_profile.execute(user.uid)
            return self.state.profile
        except Exception as e:
            logger.error(f"Error cargando perfil: {e}")
            self.state.error = str(e) or LOAD_FAILED
            return None
        finally:
            self.state.is_loading = False
