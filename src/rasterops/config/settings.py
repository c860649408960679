"""Environment-driven application settings.

All values are loaded from environment variables (prefix ``RASTEROPS_``) or
a ``.env`` file in the working directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DemoSettings(BaseSettings):
    """Parameters of the demonstration run."""

    model_config = SettingsConfigDict(env_prefix="RASTEROPS_DEMO_")

    output_dir: Path = Path(".")
    brightness_delta: int = Field(default=50, ge=-255, le=255)
    contrast_factor: float = Field(default=1.5, ge=0.0, le=10.0)


class Settings(BaseSettings):
    """Top-level settings aggregator."""

    model_config = SettingsConfigDict(
        env_prefix="RASTEROPS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    demo: DemoSettings = Field(default_factory=DemoSettings)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


# Module-level singleton, read once at import.
settings = Settings()


def get_settings() -> Settings:
    """Return the module-level Settings singleton."""
    return settings
