"""Mini README: Centralised configuration for MessMate.

Structure:
    * MessMateSettings - pydantic-settings model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Values come from ``MESSMATE_*`` environment variables or a local ``.env``
    file. The CLI and web front end both read the data directory and storage
    key from here so they share one persisted document.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MessMateSettings(BaseSettings):
    """Runtime configuration for the MessMate ledger."""

    model_config = SettingsConfigDict(
        env_prefix="MESSMATE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label controlling auto-reload and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted application document.",
    )
    storage_key: str = Field(
        "messmate_db_v2",
        description="Key (file stem) under which the application document is stored.",
    )
    export_directory: Path = Field(
        Path("exports"),
        description="Directory where CSV exports are written by the CLI.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the JSON front end to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the JSON front end exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field("INFO", description="Root logging level.")

    @field_validator("data_directory", "export_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[Union[str, Path]]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @field_validator("log_level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> MessMateSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return MessMateSettings()
