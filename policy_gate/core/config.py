"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (e.g. SECRET_KEY) are validated at
load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SURFACES = ("web", "admin", "mobile")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except secret_key, which is
    validated in validate_required.
    """

    # App
    app_name: str = "policy-gate"
    app_version: str = "1.0.0"
    debug: bool = False
    # "production" hides raw error text from error envelopes (diagnostics channel off)
    environment: str = "development"

    # Localization
    default_language: str = "vi"
    supported_languages: str = "vi,en,ko"
    language_header: str = "X-Language"

    # Client surface served by the HTTP adapter: web (store console), admin, mobile
    client_surface: str = "web"

    # Security
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # Database (empty URL = mutating actions cannot open a transaction)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Optional JSON file mapping action name -> list of permission codes
    permission_registry_path: str | None = None

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required(self) -> "Settings":
        """Validate required env, surface name and language list."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.client_surface not in _SURFACES:
            raise ValueError(
                f"client_surface must be one of {', '.join(_SURFACES)}, got: {self.client_surface!r}"
            )
        if self.default_language not in self.language_list:
            raise ValueError(
                f"default_language {self.default_language!r} is not in supported_languages"
            )
        return self

    @property
    def language_list(self) -> tuple[str, ...]:
        """Supported language codes in declared order."""
        return tuple(
            lang.strip().lower()
            for lang in self.supported_languages.split(",")
            if lang.strip()
        )

    @property
    def is_production(self) -> bool:
        """True when raw error detail must never reach clients."""
        return self.environment.lower() == "production" and not self.debug


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
