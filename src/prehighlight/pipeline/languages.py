"""Supported language registry and per-block language resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING

from prehighlight.pipeline.attributes import class_tokens

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageSpec:
    """A language the pipeline can highlight.

    Attributes:
        name: Class token that selects the language (``"rust"``).
        lexer: Pygments lexer alias used to tokenize it.
    """

    name: str
    lexer: str


type LanguageRegistry = Mapping[str, LanguageSpec]

DEFAULT_LANGUAGES: tuple[LanguageSpec, ...] = (
    LanguageSpec("rust", "rust"),
    LanguageSpec("javascript", "javascript"),
    LanguageSpec("html", "html"),
    LanguageSpec("css", "css"),
    LanguageSpec("python", "python"),
)


def build_registry(specs: Iterable[LanguageSpec]) -> LanguageRegistry:
    """Build a read-only name -> spec mapping.

    Raises:
        ValueError: If two specs share a name.
    """
    registry: dict[str, LanguageSpec] = {}
    for spec in specs:
        if spec.name in registry:
            msg = f"Duplicate language name in registry: {spec.name!r}"
            raise ValueError(msg)
        registry[spec.name] = spec
    return MappingProxyType(registry)


@lru_cache(maxsize=1)
def default_registry() -> LanguageRegistry:
    """Return the process-wide registry, built once from settings.

    Starts from ``DEFAULT_LANGUAGES``, adds ``HIGHLIGHT__EXTRA_LANGUAGES``
    (overriding a built-in of the same name) and drops
    ``HIGHLIGHT__DISABLED_LANGUAGES``.  Call ``default_registry.cache_clear()``
    in tests to reset.
    """
    from prehighlight.config import get_settings

    config = get_settings().highlight
    specs = {spec.name: spec for spec in DEFAULT_LANGUAGES}
    for name, lexer in config.extra_languages.items():
        specs[name] = LanguageSpec(name, lexer)
    for name in config.disabled_languages:
        specs.pop(name, None)

    logger.debug("Language registry: %s", ", ".join(specs))
    return build_registry(specs.values())


def _first_registered(tokens: Iterable[str], registry: LanguageRegistry) -> str | None:
    for token in tokens:
        if token in registry:
            return token
    return None


def resolve_language(
    code_attrs: str,
    pre_attrs: str,
    registry: LanguageRegistry,
) -> str | None:
    """Pick the language for a block from its ``<code>`` and ``<pre>`` classes.

    The first registered class token on ``<code>`` wins; the ``<pre>``
    classes are only consulted when ``<code>`` names no registered language,
    so a per-block hint overrides a block-level default.

    Returns:
        The language name, or None when neither tag names one.
    """
    return _first_registered(class_tokens(code_attrs), registry) or _first_registered(
        class_tokens(pre_attrs), registry
    )
