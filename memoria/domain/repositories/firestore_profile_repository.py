"""
FirestoreProfileRepository - Perfiles en Firestore.

El documento vive en ``profiles/{user_id}``: guardar siempre es upsert.
"""

import logging

from memoria.config import get_settings
from memoria.domain.entities.profile import Profile
from memoria.domain.repositories.base import IProfileRepository
from memoria.services.firestore import FirestoreService, get_firestore_service
from memoria.utils.errors import StoreError
from memoria.utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


class FirestoreProfileRepository(IProfileRepository):
    """Repositorio de perfiles usando Firestore como backend."""

    def __init__(
        self,
        firestore_service: FirestoreService | None = None,
        collection: str | None = None,
    ):
        self._store = firestore_service or get_firestore_service()
        self.collection = collection or get_settings().profiles_collection

    async def save(self, profile: Profile) -> None:
        """Valida y reemplaza el documento del usuario."""
        profile.validate()

        try:
            await self._store.set_document(
                self.collection, profile.user_id, profile.to_store_format()
            )
            logger.info(f"Perfil guardado: {profile.user_id}")
        except Exception as e:
            logger.error(f"Error guardando perfil {profile.user_id}: {e}")
            raise StoreError("Error al guardar el perfil", e) from e

    async def find_by_user_id(self, user_id: str) -> Profile | None:
        """Obtiene el perfil del usuario."""
        try:
            data = await self._store.get_document(self.collection, user_id)
        except Exception as e:
            logger.error(f"Error obteniendo perfil {user_id}: {e}")
            raise StoreError("Error al obtener el perfil", e) from e

        if data is None:
            return None
        return Profile.from_store(user_id, data)

    async def exists(self, user_id: str) -> bool:
        """Verifica si existe el perfil. Cualquier fallo cuenta como False."""
        try:
            return await self.find_by_user_id(user_id) is not None
        except Exception as e:
            logger.error(f"Error verificando perfil {user_id}: {e}")
            return False

    async def update(self, profile: Profile) -> None:
        """Actualiza el perfil refrescando updated_at."""
        profile.updated_at = utc_now_iso()
        await self.save(profile)
