"""Domain Repositories - Interfaces y implementaciones."""

from memoria.domain.repositories.base import (
    INoteRepository,
    IProfileRepository,
)
from memoria.domain.repositories.firestore_note_repository import FirestoreNoteRepository
from memoria.domain.repositories.firestore_profile_repository import FirestoreProfileRepository

__all__ = [
    # Interfaces
    "INoteRepository",
    "IProfileRepository",
    # Implementations
    "FirestoreNoteRepository",
    "FirestoreProfileRepository",
]
