"""
Configuration Management for Travel Budget

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The budget itself (allowances, caps) lives in the budget document on disk;
this module only describes where the documents are and who may talk to
the ledger.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Location of the three ledger documents."""

    model_config = SettingsConfigDict(
        env_prefix="TRAVEL_BUDGET_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_directory: Path = Field(
        default=Path("."),
        description="Directory holding the budget, state and log documents"
    )
    budget_filename: str = Field(
        default="budget.json",
        min_length=1,
        description="Read-only budget document (allowances, caps, pool)"
    )
    state_filename: str = Field(
        default="state.json",
        min_length=1,
        description="Mutable state document (remaining amounts, balance)"
    )
    log_filename: str = Field(
        default="log.json",
        min_length=1,
        description="Append-only expense log document"
    )

    @field_validator('data_directory', mode='before')
    @classmethod
    def expand_data_directory(cls, v) -> Path:
        """Expand user directories so '~/trip' works from the environment."""
        return Path(v).expanduser()

    @property
    def budget_path(self) -> Path:
        return self.data_directory / self.budget_filename

    @property
    def state_path(self) -> Path:
        return self.data_directory / self.state_filename

    @property
    def log_path(self) -> Path:
        return self.data_directory / self.log_filename


class ChatSettings(BaseSettings):
    """Chat channel configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRAVEL_BUDGET_CHAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    authorized_channel: str = Field(
        default="Finanzas Viaje 2026",
        min_length=1,
        description="Exact name of the only channel the ledger answers to"
    )
    currency_label: str = Field(
        default="euros",
        min_length=1,
        description="Word used after amounts in replies"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug logging"
    )


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

    # Sub-settings are built on access so a bad value in one
    # section does not stop the others from loading.

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def chat(self) -> ChatSettings:
        return ChatSettings()

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


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry describing each failure.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "chat", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
