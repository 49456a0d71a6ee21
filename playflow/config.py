"""Configuration management using pydantic-settings."""

import logging
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from playflow.exceptions import ConfigurationError

_ENV_FILES = (".env", "../.env")


class PipelineSettings(BaseSettings):
    """Executor behavior shared by every pipeline built with these settings."""

    model_config = SettingsConfigDict(
        env_prefix="PLAYFLOW_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Reserved key that ends a run early when truthy; empty disables the marker.
    stop_key: str | None = "stop"
    log_steps: bool = True
    max_message_chars: int = Field(
        default=2000,
        ge=16,
        description="Cap for serialized structured failure payloads in error messages.",
    )

    @field_validator("stop_key", mode="before")
    @classmethod
    def _blank_stop_key(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=_ENV_FILES,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
    console: bool = True
    file: str | None = None
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=0)
    backup_count: int = Field(default=5, ge=0)
    # Host applications usually own the root handlers.
    propagate: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _known_level(cls, value: object) -> str:
        name = str(value or "INFO").strip().upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"unknown log level: {value!r}")
        return name


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILES, env_file_encoding="utf-8", extra="ignore"
    )

    log_dir: str = "./logs"

    pipeline: PipelineSettings = PipelineSettings()

    # Logging
    logging: LoggingSettings = LoggingSettings()

    @model_validator(mode="after")
    def _validate_log_dir(self) -> "Settings":
        raw = str(self.log_dir or "").strip()
        if not raw:
            raise ConfigurationError("LOG_DIR must not be empty")
        self.log_dir = str(Path(raw).expanduser())
        return self
