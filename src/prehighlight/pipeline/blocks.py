"""Locate ``<pre><code>`` blocks in an HTML document and highlight them.

The document is treated as text, not a DOM: a single pattern finds
``<pre ...>`` + optional whitespace + ``<code ...>`` + body + ``</code>`` +
optional whitespace + ``</pre>``.  Nested or malformed markup is out of
scope; anything the pattern does not match, and any matched block that
cannot be highlighted, is copied through byte for byte.

A highlighted block is replaced by::

    <div class="sourceCode"><pre{pre_attrs}><code{code_attrs}>...</code></pre></div>

where the marker class is added to both tags and the language name to
``<code>``.
"""

# Pattern: Functional Core (pure string -> string transformation)

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prehighlight.engine import HighlightEngine, HighlightError
from prehighlight.pipeline.attributes import merge_classes
from prehighlight.pipeline.entities import decode_entities
from prehighlight.pipeline.languages import default_registry, resolve_language

if TYPE_CHECKING:
    from collections.abc import Iterator

    from prehighlight.pipeline.languages import LanguageRegistry

logger = logging.getLogger(__name__)

DEFAULT_MARKER_CLASS = "sourceCode"

_BLOCK_PATTERN = re.compile(
    r"<pre(?P<pre_attrs>[^>]*)>\s*"
    r"<code(?P<code_attrs>[^>]*)>(?P<code>.*?)</code>"
    r"\s*</pre>",
    re.DOTALL,
)


@dataclass(frozen=True, slots=True)
class BlockMatch:
    """One ``<pre><code>`` span in a document.

    Attributes:
        start: Offset of ``<pre`` in the document.
        end: Offset just past ``</pre>``.
        pre_attrs: Raw attribute text of the ``<pre>`` tag.
        code_attrs: Raw attribute text of the ``<code>`` tag.
        code_text: HTML-escaped body between ``<code ...>`` and ``</code>``.
            Nested markup is kept as opaque text.
        source: The full matched text.
    """

    start: int
    end: int
    pre_attrs: str
    code_attrs: str
    code_text: str
    source: str


@dataclass(slots=True)
class RewriteReport:
    """Per-document block counts."""

    found: int = 0
    highlighted: int = 0
    unresolved: int = 0
    failed: int = 0

    @property
    def unchanged(self) -> int:
        return self.unresolved + self.failed


def find_blocks(document: str) -> Iterator[BlockMatch]:
    """Yield non-overlapping blocks in document order."""
    for match in _BLOCK_PATTERN.finditer(document):
        yield BlockMatch(
            start=match.start(),
            end=match.end(),
            pre_attrs=match.group("pre_attrs"),
            code_attrs=match.group("code_attrs"),
            code_text=match.group("code"),
            source=match.group(0),
        )


def _render_block(
    block: BlockMatch,
    language: str,
    rendered: str,
    marker_class: str,
) -> str:
    pre_attrs = merge_classes(block.pre_attrs, [marker_class])
    code_attrs = merge_classes(block.code_attrs, [marker_class, language])
    return (
        f'<div class="{marker_class}">'
        f"<pre{pre_attrs}><code{code_attrs}>{rendered}</code></pre>"
        "</div>"
    )


def _rewrite_block(
    block: BlockMatch,
    registry: LanguageRegistry,
    engine: HighlightEngine,
    marker_class: str,
    report: RewriteReport,
) -> str:
    """Return the replacement text for *block* (its source when unchanged)."""
    language = resolve_language(block.code_attrs, block.pre_attrs, registry)
    if language is None:
        logger.debug("No registered language for block at offset %d", block.start)
        report.unresolved += 1
        return block.source

    try:
        rendered = engine.highlight(language, decode_entities(block.code_text))
    except HighlightError as exc:
        logger.warning(
            "Leaving %s block at offset %d unhighlighted: %s",
            exc.language,
            block.start,
            exc,
        )
        report.failed += 1
        return block.source

    report.highlighted += 1
    return _render_block(block, language, rendered, marker_class)


def rewrite_document_with_report(
    document: str,
    *,
    registry: LanguageRegistry | None = None,
    engine: HighlightEngine | None = None,
    marker_class: str = DEFAULT_MARKER_CLASS,
) -> tuple[str, RewriteReport]:
    """Highlight every resolvable block in *document*.

    Blocks are located on the original document and the output is assembled
    in one pass, so replacements never shift later matches.

    Args:
        document: The HTML document.
        registry: Supported languages; defaults to ``default_registry()``.
        engine: Highlighting engine; a fresh one is created for this call
            when omitted.
        marker_class: Class added to ``<pre>``, ``<code>`` and the wrapper
            ``<div>`` of each highlighted block.

    Returns:
        ``(rewritten_document, report)``.
    """
    if registry is None:
        registry = default_registry()
    if engine is None:
        engine = HighlightEngine(registry)

    report = RewriteReport()
    parts: list[str] = []
    last_end = 0

    for block in find_blocks(document):
        report.found += 1
        parts.append(document[last_end : block.start])
        parts.append(_rewrite_block(block, registry, engine, marker_class, report))
        last_end = block.end

    if not parts:
        return document, report

    parts.append(document[last_end:])
    return "".join(parts), report


def rewrite_document(
    document: str,
    *,
    registry: LanguageRegistry | None = None,
    engine: HighlightEngine | None = None,
    marker_class: str = DEFAULT_MARKER_CLASS,
) -> str:
    """Like ``rewrite_document_with_report`` but return only the document."""
    rewritten, _ = rewrite_document_with_report(
        document,
        registry=registry,
        engine=engine,
        marker_class=marker_class,
    )
    return rewritten
