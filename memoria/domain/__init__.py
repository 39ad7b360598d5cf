"""
Domain module - Entidades, repositorios y casos de uso.

Este módulo implementa el patrón Repository para desacoplar
la lógica de negocio de la persistencia (Firestore).

Estructura:
    - entities/: Dataclasses que representan el dominio
    - repositories/: Interfaces y implementaciones de persistencia
    - usecases/: Una operación de negocio por clase

NOTA: Los repositories NO se exportan aquí para evitar imports circulares.
Importar directamente de memoria.domain.repositories cuando se necesiten.
"""

from memoria.domain.entities import Note, Profile, Gender

__all__ = [
    # Entities
    "Note",
    "Profile",
    "Gender",
]
