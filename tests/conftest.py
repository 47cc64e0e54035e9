"""Shared pytest fixtures for prehighlight tests."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import pytest

from prehighlight.config import get_settings
from prehighlight.engine import HighlightEngine
from prehighlight.pipeline.languages import (
    DEFAULT_LANGUAGES,
    build_registry,
    default_registry,
)

if TYPE_CHECKING:
    from collections.abc import Generator

    from prehighlight.pipeline.languages import LanguageRegistry

_ENV_PREFIXES = ("HIGHLIGHT__", "LOGGING__")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop configuration env vars and reset the cached settings/registry."""
    for key in list(os.environ):
        if key.startswith(_ENV_PREFIXES):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    default_registry.cache_clear()
    yield
    get_settings.cache_clear()
    default_registry.cache_clear()


@pytest.fixture
def registry() -> LanguageRegistry:
    """The built-in language registry, independent of settings."""
    return build_registry(DEFAULT_LANGUAGES)


@pytest.fixture
def engine(registry: LanguageRegistry) -> HighlightEngine:
    """A fresh engine over the built-in registry."""
    return HighlightEngine(registry)


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None]:
    """Undo handlers and level changes made by setup_logging() in a test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
