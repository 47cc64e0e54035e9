"""Pygments-backed highlighting engine.

Turns raw source text into an HTML fragment where every token with a
syntactic category is wrapped in ``<span class="...">``.  Categories are
the dotted, lower-cased Pygments token type without the ``Token`` root
(``keyword.namespace``); each dotted segment becomes one class, so CSS can
target ``.keyword`` as well as ``.keyword.namespace``.

Architecture:
    ``HighlightEngine`` owns its lexers and class table and is meant to be
    created per document-processing call.  ``render_tokens`` is a pure
    function: the token type -> class lookup is passed in explicitly rather
    than captured.
"""

from __future__ import annotations

import html as html_module
import logging
from typing import TYPE_CHECKING

from pygments.lexers import get_lexer_by_name
from pygments.token import Text, Token
from pygments.util import ClassNotFound

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from pygments.lexer import Lexer
    from pygments.token import _TokenType

    from prehighlight.pipeline.languages import LanguageRegistry

logger = logging.getLogger(__name__)

# Text and its subtypes (Text.Whitespace) are rendered as bare text.
_PLAIN = Text


class HighlightError(Exception):
    """Highlighting a block failed; the block should be left untouched."""

    def __init__(self, message: str, language: str) -> None:
        self.language = language
        super().__init__(message)


def token_category(ttype: _TokenType) -> str:
    """Return the dotted category for a Pygments token type.

    ``Token.Keyword.Namespace`` -> ``keyword.namespace``.  The root type and
    plain text/whitespace map to the empty string (rendered without a span).
    """
    if ttype is Token or ttype in _PLAIN:
        return ""
    return ".".join(part.lower() for part in ttype)


def _classes_for(ttype: _TokenType) -> str:
    return token_category(ttype).replace(".", " ")


def render_tokens(
    tokens: Iterable[tuple[_TokenType, str]],
    classes: Mapping[_TokenType, str],
) -> str:
    """Render a token stream to HTML.

    Adjacent tokens sharing a class string are coalesced into one span.
    Token text is HTML-escaped; tokens whose class string is empty (or
    missing from *classes*) are emitted unwrapped.

    Args:
        tokens: ``(token_type, text)`` pairs as produced by a Pygments lexer.
        classes: Read-only token type -> class string lookup.

    Returns:
        The HTML fragment.
    """
    parts: list[str] = []
    current_class = ""
    current_text: list[str] = []

    def flush() -> None:
        if not current_text:
            return
        escaped = html_module.escape("".join(current_text))
        if current_class:
            parts.append(f'<span class="{current_class}">{escaped}</span>')
        else:
            parts.append(escaped)
        current_text.clear()

    for ttype, value in tokens:
        if not value:
            continue
        css_class = classes.get(ttype, "")
        if css_class != current_class:
            flush()
            current_class = css_class
        current_text.append(value)
    flush()

    return "".join(parts)


class HighlightEngine:
    """Per-call highlighting engine over a language registry.

    Lexers and the class lookup table are built lazily and cached on the
    instance only, so instances must not be shared between concurrent calls.
    """

    def __init__(self, registry: LanguageRegistry) -> None:
        self._registry = registry
        self._lexers: dict[str, Lexer] = {}
        self._classes: dict[_TokenType, str] = {}

    def _lexer_for(self, language: str) -> Lexer:
        lexer = self._lexers.get(language)
        if lexer is not None:
            return lexer

        spec = self._registry.get(language)
        if spec is None:
            msg = f"Language not registered: {language!r}"
            raise HighlightError(msg, language)
        try:
            # Keep leading/trailing newlines exactly as written in the block.
            lexer = get_lexer_by_name(spec.lexer, stripnl=False, ensurenl=False)
        except ClassNotFound as exc:
            msg = f"No Pygments lexer for alias {spec.lexer!r}"
            raise HighlightError(msg, language) from exc

        self._lexers[language] = lexer
        return lexer

    def highlight(self, language: str, source: str) -> str:
        """Tokenize *source* as *language* and render it to HTML.

        Raises:
            HighlightError: If the language is unknown or tokenizing fails.
        """
        lexer = self._lexer_for(language)
        logger.debug("Highlighting %d chars as %s", len(source), language)
        try:
            tokens = list(lexer.get_tokens(source))
        except Exception as exc:
            msg = f"Tokenizing {language} source failed: {exc}"
            raise HighlightError(msg, language) from exc

        for ttype, _ in tokens:
            if ttype not in self._classes:
                self._classes[ttype] = _classes_for(ttype)
        return render_tokens(tokens, self._classes)
