"""
Configuration Management for BudgetFlow

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Slot names and the export filename are configuration rather than
constants so tests and alternative front ends can point the ledger
somewhere else without touching code.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from budgetflow.models.entry import Theme


class StorageSettings(BaseSettings):
    """Durable slot storage configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BUDGETFLOW_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path.home() / ".budgetflow",
        description="Directory holding one JSON file per slot"
    )
    data_slot: str = Field(
        default="budgetFlowData",
        min_length=1,
        description="Slot holding the serialized ledger"
    )
    theme_slot: str = Field(
        default="budgetFlowTheme",
        min_length=1,
        description="Slot holding the last chosen display theme"
    )
    export_filename: str = Field(
        default="budgetflow_data.json",
        description="Filename offered for exported ledgers"
    )
    write_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="How many times a failed slot write is attempted"
    )

    @field_validator("data_dir")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Allow ~ in the configured directory."""
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BUDGETFLOW_",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for the activity log"
    )

    # Presentation defaults handed to the front end
    currency_symbol: str = Field(
        default="£",
        max_length=5,
        description="Symbol prefixed to formatted amounts"
    )
    default_theme: Theme = Field(
        default=Theme.LIGHT,
        description="Theme used when none has been saved"
    )
    export_indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation of exported JSON"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
