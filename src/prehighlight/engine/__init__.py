"""Highlighting engine adapter (Pygments)."""

from prehighlight.engine.pygments_engine import (
    HighlightEngine,
    HighlightError,
    render_tokens,
    token_category,
)

__all__ = [
    "HighlightEngine",
    "HighlightError",
    "render_tokens",
    "token_category",
]
