"""HTML character reference decoding for code block bodies.

Only the references an HTML serialiser emits for ``<pre><code>`` content
are recognised: ``&lt;``, ``&gt;``, ``&amp;``, ``&quot;`` and numeric
references (``&#65;``, ``&#x41;``, ``&#X41;``).  Anything else, including
malformed references, is passed through literally.

``html.unescape`` is deliberately not used: it also expands every named
entity and semicolon-less legacy references, which would rewrite code such
as ``a &copy b`` or ``&ampersand``.
"""

from __future__ import annotations

import re

_NAMED_REFERENCES: dict[str, str] = {
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
}

_REFERENCE_PATTERN = re.compile(
    r"&(?:(?P<named>lt|gt|amp|quot)"
    r"|#[xX](?P<hex>[0-9A-Fa-f]+)"
    r"|#(?P<dec>[0-9]+));"
)

_MAX_CODE_POINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)


def _code_point_to_char(code: int) -> str | None:
    """Return the character for *code*, or None for surrogates and overflow."""
    if code > _MAX_CODE_POINT or code in _SURROGATES:
        return None
    return chr(code)


def _replace_reference(match: re.Match[str]) -> str:
    named = match.group("named")
    if named is not None:
        return _NAMED_REFERENCES[named]

    hex_digits = match.group("hex")
    if hex_digits is not None:
        digits, base = hex_digits, 16
    else:
        digits, base = match.group("dec"), 10
    # int() refuses very long decimal strings; anything past 8 significant
    # digits is out of range in either base.
    significant = digits.lstrip("0")
    char = (
        _code_point_to_char(int(significant or "0", base))
        if len(significant) <= 8
        else None
    )
    if char is None:
        # The rest of the reference holds no "&", so re-scanning it after the
        # literal ampersand would copy it through unchanged anyway.
        return match.group(0)
    return char


def decode_entities(text: str) -> str:
    """Decode HTML character references in *text*.

    Never raises: unrecognised or malformed references (no terminating
    ``;``, invalid digits, or a code point with no character) are emitted
    literally and scanning resumes right after their ``&``.

    Args:
        text: HTML-escaped text, e.g. the body of a ``<code>`` element.

    Returns:
        The raw text with recognised references replaced.
    """
    if "&" not in text:
        return text
    return _REFERENCE_PATTERN.sub(_replace_reference, text)
