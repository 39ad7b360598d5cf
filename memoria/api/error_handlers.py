"""Error Handlers - handlers globales de excepciones.

Los mensajes de dominio llegan al cliente sin traducir.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from memoria.utils.errors import (
    AuthenticationError,
    MemoriaError,
    PermissionDeniedError,
    RouteNotFoundError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[MemoriaError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (StoreError, status.HTTP_502_BAD_GATEWAY),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (RouteNotFoundError, status.HTTP_404_NOT_FOUND),
]


def status_for(exc: MemoriaError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def memoria_error_response(exc: MemoriaError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content=exc.to_response())


def register_error_handlers(app: FastAPI) -> None:
    """Registra los handlers globales en la app."""

    @app.exception_handler(MemoriaError)
    async def memoria_error_handler(request: Request, exc: MemoriaError):
        logger.warning(
            f"{type(exc).__name__} en {request.url.path}: {exc.message}",
            extra={"category": exc.category.value},
        )
        return memoria_error_response(exc)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Excepción no controlada en {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": {"category": "unknown", "message": "Error interno"}},
        )
