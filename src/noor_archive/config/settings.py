"""
Configuration settings for the Noor archive.

This module handles environment variable loading and configuration management
using Pydantic for validation and type safety. Values are resolved from init
arguments, ``NOOR_*`` environment variables, a ``.env`` file and finally an
optional YAML file, in that order of precedence.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple, Type

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_FILE = "noor.yaml"
CONFIG_FILE_ENV_VAR = "NOOR_CONFIG_FILE"


class Settings(BaseSettings):
    """
    Noor archive configuration settings.

    All settings can be overridden via environment variables prefixed with
    ``NOOR_`` (for example ``NOOR_SUBMIT_ENDPOINT``).
    """

    # Remote store configuration
    submit_endpoint: str = Field(
        default="",
        description="URL receiving submission POSTs; empty keeps data local only"
    )
    fetch_endpoint: str = Field(
        default="",
        description="URL returning the submission list; defaults to submit_endpoint"
    )
    request_timeout: Optional[float] = Field(
        default=None,
        description="Timeout in seconds for remote requests (None uses the HTTP client default)"
    )

    # Local store configuration
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the local submission store"
    )
    storage_key: str = Field(
        default="noorSubmissions",
        description="Well-known key the submission collection is stored under"
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: str = Field(
        default="text",
        description="Logging format (json or text)"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional file receiving a rotated copy of the logs"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    model_config = SettingsConfigDict(
        env_prefix="NOOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("submit_endpoint", "fetch_endpoint", mode="before")
    @classmethod
    def _strip_endpoint(cls, value):
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        yaml_file = Path(os.environ.get(CONFIG_FILE_ENV_VAR, DEFAULT_CONFIG_FILE))
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file),
            file_secret_settings,
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Configured settings instance
    """
    return Settings()
