"""Application configuration via pydantic-settings.

All values loaded from the .env file at the project root.
The .env file takes precedence over OS-level environment variables
so stale system env vars never shadow the project config.
"""

from pathlib import Path
from typing import Tuple, Type

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hostlingo.services.language.tags import is_undetermined, normalize_tag

# Resolve .env from project root (two levels up: hostlingo/core/config.py → project root)
_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Central application settings. .env file wins over OS env vars."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Override source priority: .env file > OS env vars > defaults."""
        return (init_settings, dotenv_settings, env_settings, file_secret_settings)

    # --- LLM ---
    openai_api_key: str = ""
    openai_base_url: str | None = None
    translate_model: str = "gpt-4o-mini"
    detect_model: str = "gpt-4o-mini"
    llm_timeout_seconds: float = 20.0

    # --- Languages ---
    host_lang: str = "ja"
    default_guest_lang: str = "en"

    # --- Guest language cookie ---
    guest_lang_cookie_name: str = "guest_lang"
    guest_lang_cookie_max_age: int = 1800
    cookie_secure: bool = True

    # --- App ---
    app_env: str = "development"
    git_commit_sha: str | None = None
    log_level: str = "INFO"

    @field_validator("host_lang", "default_guest_lang")
    @classmethod
    def _valid_language_tag(cls, value: str) -> str:
        tag = normalize_tag(value)
        if tag is None or is_undetermined(tag):
            raise ValueError(f"'{value}' is not a usable BCP-47 language tag")
        return tag

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key.strip())


settings = Settings()
