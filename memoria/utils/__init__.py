"""Utilidades de Memoria."""

from memoria.utils.errors import (
    MemoriaError,
    ValidationError,
    StoreError,
    AuthenticationError,
    NavigationError,
    PermissionDeniedError,
    RouteNotFoundError,
    ErrorCategory,
    ErrorContext,
    log_error,
)

__all__ = [
    "MemoriaError",
    "ValidationError",
    "StoreError",
    "AuthenticationError",
    "NavigationError",
    "PermissionDeniedError",
    "RouteNotFoundError",
    "ErrorCategory",
    "ErrorContext",
    "log_error",
]
