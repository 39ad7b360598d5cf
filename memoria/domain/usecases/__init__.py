"""Use Cases - Una operación de negocio por clase, sobre un solo repositorio."""

from memoria.domain.usecases.notes import CreateNote, GetUserNotes
from memoria.domain.usecases.profile import (
    SaveProfile,
    GetProfile,
    CheckProfileExists,
)

__all__ = [
    "CreateNote",
    "GetUserNotes",
    "SaveProfile",
    "GetProfile",
    "CheckProfileExists",
]
