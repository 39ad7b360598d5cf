"""Domain Entities - Dataclasses del dominio."""

from memoria.domain.entities.note import Note
from memoria.domain.entities.profile import Profile, Gender

__all__ = [
    "Note",
    "Profile",
    "Gender",
]
