"""Block detection, language resolution, decoding and attribute merging."""

from prehighlight.pipeline.attributes import class_tokens, extract_class, merge_classes
from prehighlight.pipeline.blocks import (
    DEFAULT_MARKER_CLASS,
    BlockMatch,
    RewriteReport,
    find_blocks,
    rewrite_document,
    rewrite_document_with_report,
)
from prehighlight.pipeline.entities import decode_entities
from prehighlight.pipeline.languages import (
    DEFAULT_LANGUAGES,
    LanguageRegistry,
    LanguageSpec,
    build_registry,
    default_registry,
    resolve_language,
)

__all__ = [
    "DEFAULT_LANGUAGES",
    "DEFAULT_MARKER_CLASS",
    "BlockMatch",
    "LanguageRegistry",
    "LanguageSpec",
    "RewriteReport",
    "build_registry",
    "class_tokens",
    "decode_entities",
    "default_registry",
    "extract_class",
    "find_blocks",
    "merge_classes",
    "resolve_language",
    "rewrite_document",
    "rewrite_document_with_report",
]
