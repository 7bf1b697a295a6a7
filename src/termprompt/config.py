"""
Runtime settings for termprompt.

Settings are read from ``TERMPROMPT_*`` environment variables (and an optional
``.env`` file). Per-prompt options always take precedence over these values.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from termprompt.constants import DEFAULT_ESCAPE_TIMEOUT


class PromptSettings(BaseSettings):
    """Process-wide defaults for prompt rendering and input handling."""

    show: bool = True
    """Write frames to the output stream. ``False`` suppresses all output."""

    color: bool = True
    """Emit ANSI styling. Disable for dumb terminals or log capture."""

    ascii_symbols: bool = False
    """Use the ASCII glyph table instead of unicode prefix/separator symbols."""

    rows: int | None = Field(default=None, ge=1)
    cols: int | None = Field(default=None, ge=1)

    escape_timeout: float = Field(default=DEFAULT_ESCAPE_TIMEOUT, ge=0)

    logger_level: str = "warning"

    model_config = SettingsConfigDict(
        env_prefix="TERMPROMPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


_settings: PromptSettings | None = None


def get_settings() -> PromptSettings:
    """Return the cached settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = PromptSettings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
