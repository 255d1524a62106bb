"""Application settings loaded from the environment.

Uses pydantic-settings for validation. The CLIs load a local .env file into
the environment first, when one exists.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the queue operation tools."""

    model_config = SettingsConfigDict(env_prefix="QUEUE_OPS_")

    app_name: str = Field(default="Queue Operations Protocol")
    warn_legacy_operations: bool = Field(default=True, description="Report legacy operation names")
    json_indent: int | None = Field(default=None, description="Indentation of printed JSON")


def get_settings() -> Settings:
    """Return the loaded settings instance."""
    return Settings()
