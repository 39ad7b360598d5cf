"""
FirestoreNoteRepository - Implementación del repositorio de notas usando Firestore.

Este repositorio traduce entre las entidades del dominio y los documentos
de Firestore, manteniendo la lógica de negocio desacoplada.
"""

import logging

from memoria.config import get_settings
from memoria.domain.entities.note import Note
from memoria.domain.repositories.base import INoteRepository
from memoria.services.firestore import FirestoreService, get_firestore_service
from memoria.utils.errors import PermissionDeniedError, StoreError
from memoria.utils.timestamps import parse_timestamp, utc_now_iso

logger = logging.getLogger(__name__)

NOTE_NOT_OWNED = "La nota no pertenece al usuario"


class FirestoreNoteRepository(INoteRepository):
    """
    Repositorio de notas usando Firestore como backend.

    Responsabilidades:
    - Traducir entre Note (dominio) y documentos de Firestore
    - Decidir entre insertar o actualizar según el ID
    - Rechazar updates sobre notas de otro usuario
    - Envolver fallos del almacén en StoreError
    """

    def __init__(
        self,
        firestore_service: FirestoreService | None = None,
        collection: str | None = None,
    ):
        self._store = firestore_service or get_firestore_service()
        self.collection = collection or get_settings().notes_collection

    async def save(self, note: Note) -> str:
        """Guarda una nota: update si tiene ID, insert si no."""
        note.validate()

        try:
            if note.id:
                current = await self._store.get_document(self.collection, note.id)
                if current is not None and current.get("userId") != note.user_id:
                    logger.warning(f"Usuario {note.user_id} intentó modificar la nota {note.id}")
                    raise PermissionDeniedError(NOTE_NOT_OWNED, {"note_id": note.id})

                data = note.to_store_format()
                # Update parcial: el dueño y createdAt no cambian nunca
                data.pop("userId")
                data.pop("createdAt")
                data["updatedAt"] = utc_now_iso()
                await self._store.update_document(self.collection, note.id, data)
                logger.info(f"Nota actualizada: {note.id}")
                return note.id

            note_id = await self._store.add_document(self.collection, note.to_store_format())
            logger.info(f"Nota creada: {note_id}")
            return note_id
        except PermissionDeniedError:
            raise
        except Exception as e:
            logger.error(f"Error guardando nota: {e}")
            raise StoreError("Error al guardar la nota", e) from e

    async def find_by_id(self, id: str) -> Note | None:
        """Obtiene una nota por su ID."""
        try:
            data = await self._store.get_document(self.collection, id)
        except Exception as e:
            logger.error(f"Error obteniendo nota {id}: {e}")
            raise StoreError("Error al obtener la nota", e) from e

        if data is None:
            return None
        return Note.from_store(id, data)

    async def find_by_user_id(self, user_id: str) -> list[Note]:
        """Obtiene las notas del usuario, más recientes primero."""
        try:
            documents = await self._store.query_by_field(self.collection, "userId", user_id)
        except Exception as e:
            logger.error(f"Error obteniendo notas del usuario {user_id}: {e}")
            raise StoreError("Error al obtener las notas", e) from e

        notes = [Note.from_store(doc_id, data) for doc_id, data in documents]
        # Orden en cliente para no requerir un índice compuesto
        notes.sort(key=lambda n: parse_timestamp(n.updated_at), reverse=True)
        return notes
