"""Application Configuration: environment and config.toml driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Precedence: init args > CHOREBOARD_* env vars > .env > config.toml > defaults
    - log_level is always a valid stdlib logging level name

Design Decisions:
    - config.toml kept as a source: existing deployments keep `database` and
      `log_level` there
    - database is a logical name, not a URL: the store connector resolves the file
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CHOREBOARD_",
        env_file=".env",
        toml_file="config.toml",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database: str = "choreboard"
    database_pool_size: int = 5

    # API
    host: str = "127.0.0.1"
    port: int = 8080

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database")
    @classmethod
    def database_not_blank(cls, v: str) -> str:
        if not v.strip(" ./\\"):
            raise ValueError("database must name a file")
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level '{v}'")
        return level

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
