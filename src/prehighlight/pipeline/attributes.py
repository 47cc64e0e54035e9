"""Class attribute lookup and merging on raw tag attribute strings.

An attribute string is the raw text between a tag name and its closing
``>``, e.g. `` id="x" class="a b"``.  It is never parsed into a map:
only the first well-formed ``class`` attribute is read or rewritten and
everything else is passed through untouched.

Double-quoted ``class`` values are looked up first; the single-quoted form
is only tried when no double-quoted one exists.  Class tokens are
case-sensitive and only split on whitespace.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

# Lookup requires a non-empty value; merging also rewrites class="".
_CLASS_DQ = re.compile(r'class\s*=\s*"([^"]+)"')
_CLASS_SQ = re.compile(r"class\s*=\s*'([^']+)'")
_CLASS_DQ_ANY = re.compile(r'class\s*=\s*"([^"]*)"')
_CLASS_SQ_ANY = re.compile(r"class\s*=\s*'([^']*)'")


def extract_class(attrs: str) -> str | None:
    """Return the raw value of the first ``class`` attribute in *attrs*.

    The value is returned as written (not split into tokens).  Returns None
    when there is no non-empty ``class`` attribute.
    """
    match = _CLASS_DQ.search(attrs) or _CLASS_SQ.search(attrs)
    if match is None:
        return None
    return match.group(1)


def class_tokens(attrs: str) -> list[str]:
    """Whitespace-split tokens of the ``class`` attribute, in document order."""
    value = extract_class(attrs)
    return value.split() if value else []


def _union(existing: Iterable[str], new_classes: Iterable[str]) -> list[str]:
    """Append each of *new_classes* not already present, keeping order."""
    tokens = list(existing)
    for token in new_classes:
        if token not in tokens:
            tokens.append(token)
    return tokens


def merge_classes(attrs: str, new_classes: Iterable[str]) -> str:
    """Add *new_classes* to the ``class`` attribute of *attrs*.

    Tokens already present are not repeated.  The quote style of an
    existing ``class`` attribute is kept; a missing one is appended as
    ``class="..."`` after the other attributes.  Other attributes are
    passed through verbatim.

    Args:
        attrs: Raw attribute string from a start tag.
        new_classes: Class tokens to add, in the order they should be
            appended (e.g. the marker class, then a language name).

    Returns:
        The empty string when there are no attributes at all, otherwise the
        attribute string with exactly one leading space, ready to be
        written as ``<tag{result}>``.
    """
    additions = [token for value in new_classes for token in value.split()]
    result = attrs

    for pattern, quote in ((_CLASS_DQ_ANY, '"'), (_CLASS_SQ_ANY, "'")):
        match = pattern.search(result)
        if match is None:
            continue
        merged = " ".join(_union(match.group(1).split(), additions))
        before, after = result[: match.start()], result[match.end() :]
        result = f"{before}class={quote}{merged}{quote}{after}"
        break
    else:
        if additions:
            new_attr = f'class="{" ".join(_union([], additions))}"'
            existing = result.strip()
            result = f"{existing} {new_attr}" if existing else new_attr

    if not result.strip():
        return ""
    return " " + result.lstrip()
