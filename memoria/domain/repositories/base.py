"""
Repository Interfaces - Contratos para la capa de persistencia.

Estas interfaces definen los métodos que cualquier implementación
de repositorio debe proveer, permitiendo cambiar de Firestore a otro
backend sin modificar la lógica de negocio.
"""

from abc import ABC, abstractmethod

from memoria.domain.entities.note import Note
from memoria.domain.entities.profile import Profile


class INoteRepository(ABC):
    """
    Interface para repositorio de notas.

    Capacidades: save, find_by_id, find_by_user_id.
    """

    @abstractmethod
    async def save(self, note: Note) -> str:
        """Guarda una nota (inserta o actualiza) y retorna su ID."""
        raise NotImplementedError("save() debe implementarse")

    @abstractmethod
    async def find_by_id(self, id: str) -> Note | None:
        """Obtiene una nota por su ID, None si no existe."""
        raise NotImplementedError("find_by_id() debe implementarse")

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> list[Note]:
        """Obtiene las notas de un usuario."""
        raise NotImplementedError("find_by_user_id() debe implementarse")


class IProfileRepository(ABC):
    """
    Interface para repositorio de perfiles.

    Capacidades: save, find_by_user_id, exists, update.
    """

    @abstractmethod
    async def save(self, profile: Profile) -> None:
        """Guarda el perfil en la clave de su user_id."""
        raise NotImplementedError("save() debe implementarse")

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Profile | None:
        """Obtiene el perfil de un usuario, None si no existe."""
        raise NotImplementedError("find_by_user_id() debe implementarse")

    @abstractmethod
    async def exists(self, user_id: str) -> bool:
        """Verifica si el usuario tiene perfil. Nunca lanza."""
        raise NotImplementedError("exists() debe implementarse")

    @abstractmethod
    async def update(self, profile: Profile) -> None:
        """Refresca updated_at y guarda."""
        raise NotImplementedError("update() debe implementarse")
