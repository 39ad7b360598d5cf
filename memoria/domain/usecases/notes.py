"""
Casos de uso de notas.

Cada caso de uso recibe un único repositorio y expone ``execute``.
"""

import logging
from typing import Any

from memoria.domain.entities.note import USER_ID_REQUIRED, Note
from memoria.domain.repositories.base import INoteRepository
from memoria.utils.errors import ValidationError

logger = logging.getLogger(__name__)

# Campos que el llamador puede fijar; los timestamps los decide el dominio
_NOTE_INPUT_FIELDS = ("id", "user_id", "userId", "title", "content", "tags")


class CreateNote:
    """Crea una nota, o la actualiza en sitio si los parámetros traen ``id``."""

    def __init__(self, note_repository: INoteRepository):
        self._repo = note_repository

    async def execute(self, params: dict[str, Any]) -> str:
        """
        Args:
            params: id (opcional), user_id, title, content, tags

        Returns:
            ID de la nota guardada
        """
        note = Note.from_dict({k: v for k, v in params.items() if k in _NOTE_INPUT_FIELDS})
        note.validate()

        note_id = await self._repo.save(note)
        logger.debug(f"CreateNote -> {note_id}")
        return note_id


class GetUserNotes:
    """Lista las notas de un usuario."""

    def __init__(self, note_repository: INoteRepository):
        self._repo = note_repository

    async def execute(self, user_id: str | None) -> list[Note]:
        if not user_id:
            raise ValidationError(USER_ID_REQUIRED, field="user_id")
        return await self._repo.find_by_user_id(user_id)
