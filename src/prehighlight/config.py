"""Centralised configuration using pydantic-settings.

All environment variables are read through the Settings class.
Consumers call ``get_settings()`` to obtain a cached, validated instance.
No ``.env`` file is read: only variables set in the environment of the
run apply, so a stray file in the working directory cannot change output.

Every default reproduces the tool's fixed behaviour, so nothing has to be
configured for a normal run.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Sub-models (one per configuration domain)
# ---------------------------------------------------------------------------
class HighlightConfig(BaseModel):
    """Block rewriting and language registry options."""

    marker_class: str = "sourceCode"
    extra_languages: dict[str, str] = {}
    disabled_languages: list[str] = []

    @field_validator("marker_class")
    @classmethod
    def marker_is_single_token(cls, value: str) -> str:
        if not value or value.split() != [value]:
            msg = f"HIGHLIGHT__MARKER_CLASS must be one class token, got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("extra_languages")
    @classmethod
    def language_names_are_tokens(cls, value: dict[str, str]) -> dict[str, str]:
        for name, lexer in value.items():
            if not name or name.split() != [name]:
                msg = f"Language name must be one class token, got {name!r}"
                raise ValueError(msg)
            if not lexer.strip():
                msg = f"Language {name!r} needs a Pygments lexer alias"
                raise ValueError(msg)
        return value


class LoggingConfig(BaseModel):
    """Log level and optional log file directory."""

    level: str = "WARNING"
    log_dir: Path | None = None

    @field_validator("level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"LOGGING__LEVEL must be one of {', '.join(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Settings read from environment variables, with type validation.

    Environment variables use double-underscore delimiter for nesting:
    ``HIGHLIGHT__MARKER_CLASS``, ``HIGHLIGHT__EXTRA_LANGUAGES``,
    ``LOGGING__LEVEL``, etc. Dict and list values are given as JSON.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        env_nested_delimiter="__",
        extra="ignore",
    )

    highlight: HighlightConfig = HighlightConfig()
    logging: LoggingConfig = LoggingConfig()


# ---------------------------------------------------------------------------
# Singleton access
# ---------------------------------------------------------------------------
@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance.

    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    return Settings()
