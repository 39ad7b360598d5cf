"""
Profile Entity - Perfil del usuario.

El ``user_id`` es a la vez identidad y clave del documento, por lo que
solo existe un perfil por usuario.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from memoria.domain.entities.note import USER_ID_REQUIRED, is_blank
from memoria.utils.errors import ValidationError
from memoria.utils.timestamps import utc_now_iso

NAME_MAX_LENGTH = 50

NAME_REQUIRED = "El nombre es obligatorio"
NAME_TOO_LONG = f"El nombre debe tener como máximo {NAME_MAX_LENGTH} caracteres"
GENDER_INVALID = "Selecciona un género válido"


class Gender(str, Enum):
    """Géneros permitidos."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


VALID_GENDERS = tuple(g.value for g in Gender)


@dataclass
class Profile:
    """Entidad de Perfil."""

    user_id: str | None
    name: str | None
    gender: str | None

    # Metadata
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Construye un perfil desde un dict suelto (snake_case o camelCase)."""
        gender = data.get("gender")
        return cls(
            user_id=data.get("user_id", data.get("userId")),
            name=data.get("name"),
            gender=gender.value if isinstance(gender, Gender) else gender,
            created_at=data.get("created_at") or data.get("createdAt") or utc_now_iso(),
            updated_at=data.get("updated_at") or data.get("updatedAt") or utc_now_iso(),
        )

    @classmethod
    def from_store(cls, user_id: str, data: dict[str, Any]) -> "Profile":
        """Reconstruye la entidad; la clave del documento es el user_id."""
        return cls.from_dict({**data, "user_id": user_id})

    def validate(self) -> None:
        """
        Valida las reglas de negocio.

        El nombre no se recorta antes de medir ni de guardar.

        Raises:
            ValidationError: con la primera regla incumplida
        """
        if is_blank(self.user_id):
            raise ValidationError(USER_ID_REQUIRED, field="user_id")

        if is_blank(self.name):
            raise ValidationError(NAME_REQUIRED, field="name")

        if len(self.name) > NAME_MAX_LENGTH:
            raise ValidationError(NAME_TOO_LONG, field="name")

        if self.gender not in VALID_GENDERS:
            raise ValidationError(GENDER_INVALID, field="gender")

    def to_store_format(self) -> dict[str, Any]:
        """Documento para el almacén, sin el user_id (es la clave)."""
        return {
            "name": self.name,
            "gender": self.gender,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convierte a diccionario para serialización."""
        return {
            "user_id": self.user_id,
            "name": self.name,
            "gender": self.gender,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
