"""Configuracion de la aplicacion usando Pydantic Settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuracion principal de Memoria."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    app_env: str = "development"
    log_level: str = "INFO"

    # Firestore
    firestore_project_id: str = ""
    firestore_database: str = "(default)"
    firestore_emulator_host: str = ""
    notes_collection: str = "notes"
    profiles_collection: str = "profiles"

    # Navegacion
    login_route: str = "/login"
    default_route: str = "/notes"
    profile_route: str = "/profile"
    loading_clear_delay_ms: int = 300
    max_redirects: int = 5

    @property
    def loading_clear_delay(self) -> float:
        """Retardo en segundos antes de apagar el indicador de carga."""
        return self.loading_clear_delay_ms / 1000

    @property
    def uses_emulator(self) -> bool:
        return bool(self.firestore_emulator_host)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Obtiene la configuracion cacheada."""
    return Settings()
