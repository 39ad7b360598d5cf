"""Manejo centralizado de errores y excepciones."""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    """Categorías de errores."""

    VALIDATION = "validation"
    DATABASE = "database"
    AUTH = "auth"
    NAVIGATION = "navigation"
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Contexto de un error para logging."""

    category: ErrorCategory
    operation: str
    error_type: str
    message: str
    details: dict[str, Any] | None = None
    traceback_str: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convierte a diccionario para logging."""
        return {
            "category": self.category.value,
            "operation": self.operation,
            "error_type": self.error_type,
            "message": self.message,
            "details": self.details,
        }


class MemoriaError(Exception):
    """Excepción base para Memoria.

    El mensaje llega al usuario sin traducir, por eso ``__str__``
    devuelve solo el texto.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_response(self) -> dict[str, Any]:
        return {"error": {"category": self.category.value, "message": self.message}}


class ValidationError(MemoriaError):
    """Error de validación de una entidad."""

    def __init__(self, message: str, field: str | None = None, details: dict[str, Any] | None = None):
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, ErrorCategory.VALIDATION, details)
        self.field = field


class StoreError(MemoriaError):
    """Fallo del almacén de documentos, con prefijo legible."""

    def __init__(self, prefix: str, original: Exception, details: dict[str, Any] | None = None):
        details = details or {}
        details["original_error"] = type(original).__name__
        super().__init__(f"{prefix}: {original}", ErrorCategory.DATABASE, details)
        self.original = original


class AuthenticationError(MemoriaError):
    """No hay usuario autenticado."""

    def __init__(self, message: str = "El usuario no está autenticado"):
        super().__init__(message, ErrorCategory.AUTH)


class PermissionDeniedError(MemoriaError):
    """El recurso pertenece a otro usuario."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCategory.AUTH, details)


class NavigationError(MemoriaError):
    """Error del router de navegación."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCategory.NAVIGATION, details)


class RouteNotFoundError(NavigationError):
    """La ruta solicitada no existe en la tabla."""

    def __init__(self, path: str):
        super().__init__(f"Ruta no encontrada: {path}", {"path": path})
        self.path = path


def log_error(
    error: Exception,
    operation: str,
    category: ErrorCategory = ErrorCategory.UNKNOWN,
    extra: dict[str, Any] | None = None,
) -> ErrorContext:
    """
    Registra un error con contexto estructurado.

    Args:
        error: La excepción capturada
        operation: Nombre de la operación que falló
        category: Categoría del error
        extra: Información adicional

    Returns:
        ErrorContext con los detalles del error
    """
    if isinstance(error, MemoriaError):
        category = error.category
        details = {**(error.details or {}), **(extra or {})}
    else:
        details = extra or {}

    context = ErrorContext(
        category=category,
        operation=operation,
        error_type=type(error).__name__,
        message=str(error),
        details=details,
        traceback_str=traceback.format_exc(),
    )

    logger.error(
        f"Error en {operation}: {error}",
        extra={"error_context": context.to_dict()},
    )

    return context
