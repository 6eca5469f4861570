"""Code-point indexing of post text.

Entity indices count code points, never UTF-16 units. A Python ``str`` is
already indexed by code point, but text that went through a UTF-16 layer
with ``surrogatepass`` can still carry a high/low surrogate pair as two
elements. Those pairs collapse into a single LogicalChar here so indices
stay aligned either way.
"""

from dataclasses import dataclass

HIGH_SURROGATES = range(0xD800, 0xDC00)
LOW_SURROGATES = range(0xDC00, 0xE000)
MAX_CODE_POINT = 0x10FFFF


@dataclass(frozen=True)
class LogicalChar:
    units: str  # one element, or a surrogate pair kept exactly as given

    @property
    def is_wide(self) -> bool:
        """True when the scalar value lies outside the Basic Multilingual Plane."""
        return self.code_point > 0xFFFF

    @property
    def code_point(self) -> int:
        if len(self.units) == 2:
            high, low = ord(self.units[0]), ord(self.units[1])
            return 0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00)
        return ord(self.units)


def get_code_points(text: str) -> list[LogicalChar]:
    """Split text into logical characters.

    Lone surrogates are kept as their own LogicalChar.
    """
    result: list[LogicalChar] = []
    i = 0
    length = len(text)
    while i < length:
        c = text[i]
        if (
            ord(c) in HIGH_SURROGATES
            and i + 1 < length
            and ord(text[i + 1]) in LOW_SURROGATES
        ):
            result.append(LogicalChar(text[i : i + 2]))
            i += 2
        else:
            result.append(LogicalChar(c))
            i += 1
    return result


def join_code_points(chars: list[LogicalChar], start: int, count: int) -> str:
    """Rebuild the exact substring for ``count`` logical chars from ``start``."""
    return "".join(c.units for c in chars[start : start + count])


def char_from_int(code: int) -> str:
    """Return the string for a Unicode scalar value."""
    if code < 0 or code > MAX_CODE_POINT:
        raise ValueError(f"Code point out of range: {code:#x}")
    return chr(code)
