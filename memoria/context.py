"""
AppContext - Estado compartido de la aplicación.

Se crea una vez al arrancar, lo leen y escriben el guard y las vistas,
y se cierra al apagar. Reemplaza los observables globales.
"""

import logging
from dataclasses import dataclass, field

from memoria.config import Settings, get_settings
from memoria.domain.repositories.base import INoteRepository, IProfileRepository
from memoria.domain.repositories.firestore_note_repository import FirestoreNoteRepository
from memoria.domain.repositories.firestore_profile_repository import FirestoreProfileRepository
from memoria.domain.usecases import (
    CheckProfileExists,
    CreateNote,
    GetProfile,
    GetUserNotes,
    SaveProfile,
)
from memoria.router import NavigationGuard, Navigator, build_route_table
from memoria.services.firestore import FirestoreService
from memoria.services.identity import IdentityProvider, LocalIdentityProvider
from memoria.services.profile_service import ProfileService
from memoria.state import LoadingState, ProfileState

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Dependencias y estado compartido de una instancia de la aplicación."""

    settings: Settings
    identity: IdentityProvider
    note_repository: INoteRepository
    profile_repository: IProfileRepository
    create_note: CreateNote
    get_user_notes: GetUserNotes
    save_profile: SaveProfile
    get_profile: GetProfile
    check_profile_exists: CheckProfileExists
    profile_service: ProfileService
    guard: NavigationGuard
    navigator: Navigator
    loading: LoadingState = field(default_factory=LoadingState)
    profile_state: ProfileState = field(default_factory=ProfileState)
    store: FirestoreService | None = None

    async def aclose(self) -> None:
        """Libera el estado al apagar."""
        self.guard.cancel_pending()
        self.loading.set_loading(False)
        self.profile_state.reset()
        if self.store is not None:
            await self.store.close()
        logger.info("AppContext cerrado")


def create_app_context(
    settings: Settings | None = None,
    identity: IdentityProvider | None = None,
    store: FirestoreService | None = None,
    note_repository: INoteRepository | None = None,
    profile_repository: IProfileRepository | None = None,
) -> AppContext:
    """Construye el contexto con sus dependencias; cualquiera puede inyectarse."""
    settings = settings or get_settings()
    identity = identity or LocalIdentityProvider()

    if note_repository is None or profile_repository is None:
        store = store or FirestoreService()
    note_repository = note_repository or FirestoreNoteRepository(store, settings.notes_collection)
    profile_repository = profile_repository or FirestoreProfileRepository(
        store, settings.profiles_collection
    )

    loading = LoadingState()
    profile_state = ProfileState()

    save_profile = SaveProfile(profile_repository)
    get_profile = GetProfile(profile_repository)
    check_profile_exists = CheckProfileExists(profile_repository)

    guard = NavigationGuard(
        identity=identity,
        check_profile_exists=check_profile_exists,
        loading=loading,
        login_route=settings.login_route,
        default_route=settings.default_route,
        profile_route=settings.profile_route,
        clear_delay=settings.loading_clear_delay,
    )

    return AppContext(
        settings=settings,
        identity=identity,
        note_repository=note_repository,
        profile_repository=profile_repository,
        create_note=CreateNote(note_repository),
        get_user_notes=GetUserNotes(note_repository),
        save_profile=save_profile,
        get_profile=get_profile,
        check_profile_exists=check_profile_exists,
        profile_service=ProfileService(
            identity, save_profile, get_profile, check_profile_exists, profile_state
        ),
        guard=guard,
        navigator=Navigator(build_route_table(settings), guard, settings.max_redirects),
        loading=loading,
        profile_state=profile_state,
        store=store,
    )
