"""Decode the character references that appear in post text.

Post text arrives with ``<``, ``>`` and ``&`` escaped. Only numeric
references and the six names below are decoded; any other ``&name;``
stays verbatim.
"""

import re

from .codepoints import char_from_int

NAMED_REFERENCES = {
    "nbsp": " ",
    "lt": "<",
    "gt": ">",
    "amp": "&",
    "quot": '"',
    "apos": "'",
}

# '&' + at least two chars without '&', ';' or whitespace + ';'
_REFERENCE_RE = re.compile(r"&([^&;\s]{2,});")
_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def _decode_reference(match: re.Match) -> str:
    name = match.group(1)
    named = NAMED_REFERENCES.get(name)
    if named is not None:
        return named

    if name[0] != "#":
        return match.group(0)

    if name[1] in "xX":
        digits, base, pattern = name[2:], 16, _HEX_RE
    else:
        digits, base, pattern = name[1:], 10, _DECIMAL_RE

    if not pattern.fullmatch(digits):
        raise ValueError(f"Malformed numeric character reference: {match.group(0)}")
    return char_from_int(int(digits, base))


def html_decode(source: str) -> str:
    """Decode character references in a single left-to-right pass.

    Output of a decoded reference is never scanned again, so ``&amp;amp;``
    becomes ``&amp;``.

    Raises:
        ValueError: a numeric reference has invalid digits or is out of range.
    """
    if "&" not in source:
        return source
    return _REFERENCE_RE.sub(_decode_reference, source)
