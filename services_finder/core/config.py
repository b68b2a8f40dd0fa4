"""Application configuration via pydantic-settings.

Loads all settings from environment variables with sensible defaults.
A global `settings` singleton is available for import throughout the app.
``SUPABASE_URL`` and ``SUPABASE_KEY`` have no default: the service refuses
to start without them.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from services_finder.models.enums import OccupationMatch


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str
    PROVIDERS_TABLE: str = "workers"
    PROFILES_TABLE: str = "profiles"

    # Base URL used in auth e-mail redirects (sign-up, password reset)
    SITE_URL: str = "http://localhost:3000"

    # Filtering
    OCCUPATION_MATCH: OccupationMatch = OccupationMatch.case_insensitive

    # CORS
    ALLOWED_ORIGINS: str = "*"

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()  # type: ignore[call-arg]
