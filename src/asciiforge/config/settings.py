"""Environment-driven application settings.

Values are loaded from environment variables (prefix ``ASCIIFORGE_``) or a
``.env`` file in the working directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RenderSettings(BaseSettings):
    """Rendering defaults shared by the CLI, decorators and streaming."""

    model_config = SettingsConfigDict(env_prefix="ASCIIFORGE_", env_file=".env", extra="ignore")

    default_char: str = Field(default="*", min_length=1, max_length=1)
    stream_delay_ms: int = Field(default=50, ge=0, le=5000)
    """Pause between rows when animating output."""
    density_ramp: str = Field(default=" .:-=+*#%@", min_length=1)
    """Light-to-dark ramp used by the gradient fill."""
    dots_seed: int | None = None
    """Fixed seed for the dots fill; unset means a fresh random pattern each run."""


class ExportSettings(BaseSettings):
    """Where exported art files land."""

    model_config = SettingsConfigDict(env_prefix="ASCIIFORGE_EXPORT_", env_file=".env", extra="ignore")

    directory: Path = Path("ascii-exports")
    extension: str = ".txt"


class Settings(BaseSettings):
    """Top-level settings aggregator."""

    model_config = SettingsConfigDict(
        env_prefix="ASCIIFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    render: RenderSettings = Field(default_factory=RenderSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


# Module-level singleton, import and use directly.
settings = Settings()


def get_settings() -> Settings:
    """Return the module-level Settings singleton."""
    return settings
