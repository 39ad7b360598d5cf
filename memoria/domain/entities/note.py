"""
Note Entity - Representación de una nota del dominio.

Esta entidad es independiente de Firestore: solo conoce el formato
de documento que el repositorio guarda.
"""

from dataclasses import dataclass, field
from typing import Any

from memoria.utils.errors import ValidationError
from memoria.utils.timestamps import utc_now_iso

TITLE_MAX_LENGTH = 100

USER_ID_REQUIRED = "El ID de usuario es obligatorio"
TITLE_REQUIRED = "El título es obligatorio"
TITLE_TOO_LONG = f"El título debe tener como máximo {TITLE_MAX_LENGTH} caracteres"
TAGS_NOT_A_LIST = "Las etiquetas deben ser una lista"


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


@dataclass
class Note:
    """
    Entidad de Nota.

    ``id`` queda vacío hasta que el almacén asigna uno al insertar.
    """

    user_id: str | None
    title: str | None
    content: str = ""
    tags: list[str] = field(default_factory=list)
    id: str | None = None

    # Metadata
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Note":
        """Construye una nota desde un dict suelto (snake_case o camelCase)."""
        tags = data.get("tags")
        return cls(
            id=data.get("id") or None,
            user_id=data.get("user_id", data.get("userId")),
            title=data.get("title"),
            content=data.get("content") or "",
            tags=[] if tags is None else tags,
            created_at=data.get("created_at") or data.get("createdAt") or utc_now_iso(),
            updated_at=data.get("updated_at") or data.get("updatedAt") or utc_now_iso(),
        )

    @classmethod
    def from_store(cls, id: str, data: dict[str, Any]) -> "Note":
        """Reconstruye la entidad desde un documento del almacén."""
        return cls.from_dict({**data, "id": id})

    def validate(self) -> None:
        """
        Valida las reglas de negocio.

        Raises:
            ValidationError: con la primera regla incumplida
        """
        if is_blank(self.user_id):
            raise ValidationError(USER_ID_REQUIRED, field="user_id")

        if is_blank(self.title):
            raise ValidationError(TITLE_REQUIRED, field="title")

        if len(self.title) > TITLE_MAX_LENGTH:
            raise ValidationError(TITLE_TOO_LONG, field="title")

        if not isinstance(self.tags, (list, tuple)):
            raise ValidationError(TAGS_NOT_A_LIST, field="tags")

    def to_store_format(self) -> dict[str, Any]:
        """Documento para el almacén; el ``id`` es la clave y no se incluye."""
        return {
            "userId": self.user_id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_dict(self) -> dict[str, Any]:
        """Convierte a diccionario para serialización."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
