"""
Memoria - notas personales y perfil de usuario.

FastAPI application. El AppContext se crea en el arranque y la app no
atiende peticiones hasta conocer el estado de autenticación inicial.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from memoria import __version__
from memoria.api.error_handlers import register_error_handlers
from memoria.api.pages import navigation_guard_middleware, router
from memoria.config import get_settings
from memoria.context import AppContext, create_app_context
from memoria.services.identity import LocalIdentityProvider

# Configurar logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(context: AppContext | None = None) -> FastAPI:
    """Crea la aplicación; ``context`` permite inyectar dependencias en tests."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle de la aplicación."""
        logger.info("Iniciando Memoria...")

        ctx = context or create_app_context(settings)
        app.state.context = ctx

        identity = ctx.identity
        if isinstance(identity, LocalIdentityProvider) and not identity.is_ready:
            # Sin sesión persistida: el estado inicial es "sin usuario"
            identity.start()
        user = await identity.wait_until_ready()
        logger.info(f"Estado de autenticación inicial: {user.uid if user else 'sin sesión'}")

        logger.info("Memoria lista!")

        yield

        logger.info("Deteniendo Memoria...")
        await ctx.aclose()
        logger.info("Memoria detenida.")

    app = FastAPI(
        title="Memoria",
        description="Notas personales y perfil de usuario sobre Firestore",
        version=__version__,
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.middleware("http")(navigation_guard_middleware)
    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check básico."""
        return {"status": "healthy", "service": "memoria", "version": __version__}

    return app


app = create_app()


# ==================== DEV MODE ====================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "memoria.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
