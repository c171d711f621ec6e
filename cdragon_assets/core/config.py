"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import APP_URL, CDRAGON_URL, DEFAULT_LOCALES, LANGUAGES, LOL_WIKI_URL, PATCHES

ENV_FILE_OPT: str | None = None

# Only load .env if it exists (for local development)
_env_path = Path(".env")
if _env_path.exists():
    load_dotenv(dotenv_path=_env_path)
    ENV_FILE_OPT = str(_env_path)


class Settings(BaseSettings):
    """Crawler configuration.

    Loads settings from ``CDRAGON_``-prefixed environment variables. In local
    development these can be provided via a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CDRAGON_",
        env_file=ENV_FILE_OPT,
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    log_level: str = Field(default="INFO", description="Logging level")

    # Upstream sources
    cdragon_url: str = Field(default=CDRAGON_URL, description="Content mirror base host")
    wiki_url: str = Field(default=LOL_WIKI_URL, description="League wiki base URL")
    app_url: str = Field(default=APP_URL, description="Public URL of the published tree")

    # Crawl scope
    patch: str = Field(default="pbe", description="Content channel to crawl (latest or pbe)")
    locales: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LOCALES), description="Locales to crawl"
    )
    fallback_locale: str = Field(
        default="default", description="Locale used when the primary locale request fails"
    )

    # Output
    data_dir: Path = Field(default=Path(".data"), description="Root of the written JSON tree")

    # Concurrency and HTTP
    concurrency: int = Field(default=10, ge=1, description="Per-category write ceiling")
    request_timeout: float = Field(default=60.0, description="HTTP timeout per request (seconds)")
    retry_attempts: int = Field(default=4, ge=1, description="HTTP attempts per request")
    retry_base_delay: float = Field(default=1.0, description="Initial retry delay (seconds)")
    retry_max_delay: float = Field(default=100.0, description="Retry delay cap (seconds)")

    @field_validator("patch")
    @classmethod
    def _known_patch(cls, value: str) -> str:
        if value not in PATCHES:
            raise ValueError(f"Unknown patch {value!r}, expected one of {', '.join(PATCHES)}")
        return value

    @field_validator("locales")
    @classmethod
    def _known_locales(cls, value: List[str]) -> List[str]:
        unknown = [locale for locale in value if locale not in LANGUAGES]
        if unknown:
            raise ValueError(f"Unknown locales: {', '.join(unknown)}")
        return value

    @field_validator("fallback_locale")
    @classmethod
    def _known_fallback(cls, value: str) -> str:
        if value not in LANGUAGES:
            raise ValueError(f"Unknown fallback locale {value!r}")
        return value


# Global settings instance
settings = Settings()
