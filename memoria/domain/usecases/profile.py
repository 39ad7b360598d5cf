"""
Casos de uso de perfil.

CheckProfileExists nunca lanza: los guards de navegación lo llaman
sin manejo de errores.
"""

import logging
from typing import Any

from memoria.domain.entities.profile import Profile
from memoria.domain.repositories.base import IProfileRepository
from memoria.utils.errors import ValidationError
from memoria.utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

USER_ID_NOT_GIVEN = "No se especificó el ID de usuario"


class SaveProfile:
    """Crea o actualiza el perfil conservando la fecha de creación."""

    def __init__(self, profile_repository: IProfileRepository):
        self._repo = profile_repository

    async def execute(self, user_id: str, profile_data: dict[str, Any]) -> Profile:
        """
        Args:
            user_id: ID del usuario (clave del perfil)
            profile_data: name y gender

        Returns:
            El perfil guardado, con sus timestamps actuales
        """
        existing = await self._repo.find_by_user_id(user_id)

        now = utc_now_iso()
        profile = Profile.from_dict({
            "user_id": user_id,
            "name": profile_data.get("name"),
            "gender": profile_data.get("gender"),
            "created_at": existing.created_at if existing else now,
            "updated_at": now,
        })

        profile.validate()
        await self._repo.save(profile)

        logger.info(f"Perfil {'actualizado' if existing else 'creado'} para {user_id}")
        return profile


class GetProfile:
    """Obtiene el perfil de un usuario; None si todavía no tiene."""

    def __init__(self, profile_repository: IProfileRepository):
        self._repo = profile_repository

    async def execute(self, user_id: str | None) -> Profile | None:
        if not user_id:
            raise ValidationError(USER_ID_NOT_GIVEN, field="user_id")
        return await self._repo.find_by_user_id(user_id)


class CheckProfileExists:
    """Verifica si el usuario ya tiene perfil."""

    def __init__(self, profile_repository: IProfileRepository):
        self._repo = profile_repository

    async def execute(self, user_id: str | None) -> bool:
        if not user_id:
            return False
        return bool(await self._repo.exists(user_id))
