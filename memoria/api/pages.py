"""
Vistas JSON y guard de navegación HTTP.

Todo GET a una ruta de la tabla pasa por el Navigator; si el guard
redirige, el cliente recibe un 307 hacia la ruta final.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel, Field

from memoria.api.error_handlers import memoria_error_response
from memoria.context import AppContext
from memoria.services.identity import Identity, LocalIdentityProvider
from memoria.utils.errors import AuthenticationError, MemoriaError

logger = logging.getLogger(__name__)

router = APIRouter()


# ==================== DEPENDENCIAS ====================


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def require_identity(ctx: AppContext = Depends(get_context)) -> Identity:
    user = ctx.identity.current_user
    if user is None:
        raise AuthenticationError()
    return user


def get_local_identity(ctx: AppContext = Depends(get_context)) -> LocalIdentityProvider:
    """Proveedor en proceso; solo fuera de producción, la sesión es global."""
    if ctx.settings.is_production or not isinstance(ctx.identity, LocalIdentityProvider):
        raise AuthenticationError("El inicio de sesión lo gestiona el proveedor externo")
    return ctx.identity


# ==================== MIDDLEWARE ====================


async def navigation_guard_middleware(request: Request, call_next):
    """Aplica el guard de navegación a los GET sobre rutas de la tabla."""
    ctx: AppContext = request.app.state.context
    path = request.url.path

    if request.method != "GET" or path not in ctx.navigator.routes:
        return await call_next(request)

    try:
        route = await ctx.navigator.push(path)
    except MemoriaError as e:
        logger.warning(f"Navegación fallida a {path}: {e}")
        return memoria_error_response(e)

    if route.path != ctx.navigator.routes.resolve(path).path:
        return RedirectResponse(route.path, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return await call_next(request)


# ==================== SCHEMAS ====================


class SessionRequest(BaseModel):
    user_id: str
    email: str | None = None


class NoteRequest(BaseModel):
    id: str | None = None
    title: str | None = None
    content: str = ""
    tags: list[str] = Field(default_factory=list)


class ProfileRequest(BaseModel):
    name: str | None = None
    gender: str | None = None


# ==================== AUTH ====================


@router.get("/login")
async def login_view():
    return {"view": "login"}


@router.get("/signup")
async def signup_view():
    return {"view": "signup"}


@router.post("/login")
@router.post("/signup")
async def login(
    body: SessionRequest,
    ctx: AppContext = Depends(get_context),
    identity: LocalIdentityProvider = Depends(get_local_identity),
):
    """Abre sesión en el proveedor en proceso e indica si ya hay perfil."""
    user = identity.sign_in(body.user_id, body.email)
    has_profile = await ctx.profile_service.check_profile()
    return {"user_id": user.uid, "email": user.email, "has_profile": has_profile}


@router.post("/logout")
async def logout(
    ctx: AppContext = Depends(get_context),
    identity: LocalIdentityProvider = Depends(get_local_identity),
):
    identity.sign_out()
    ctx.profile_state.reset()
    return {"status": "ok"}


# ==================== NOTES ====================


@router.get("/notes")
async def list_notes(
    ctx: AppContext = Depends(get_context),
    user: Identity = Depends(require_identity),
):
    notes = await ctx.get_user_notes.execute(user.uid)
    return {"notes": [note.to_dict() for note in notes]}


@router.post("/notes", status_code=status.HTTP_201_CREATED)
async def save_note(
    body: NoteRequest,
    ctx: AppContext = Depends(get_context),
    user: Identity = Depends(require_identity),
):
    """Crea una nota, o la actualiza si el cuerpo trae id."""
    note_id = await ctx.create_note.execute({**body.model_dump(), "user_id": user.uid})
    return {"id": note_id}


# ==================== PROFILE ====================


@router.get("/profile")
async def get_profile(
    ctx: AppContext = Depends(get_context),
    user: Identity = Depends(require_identity),
):
    profile = await ctx.profile_service.load_profile()
    return {
        "profile": profile.to_dict() if profile else None,
        "error": ctx.profile_state.error,
    }


@router.post("/profile")
async def save_profile(
    body: ProfileRequest,
    ctx: AppContext = Depends(get_context),
    user: Identity = Depends(require_identity),
):
    if not await ctx.profile_service.save_profile(body.model_dump()):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": {"category": "profile", "message": ctx.profile_state.error}},
        )
    return {"profile": ctx.profile_state.profile.to_dict()}
