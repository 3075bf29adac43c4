"""Text conversion for fixed-width numbers.

Only the bases in ``StringBase`` are supported.  Output is lowercase;
input is case-insensitive.  Parsing never raises: anything that is not
entirely made of digits valid for the base yields ``None``.  The empty
string parses to zero, and values too large for the layout wrap just as
addition does.

All arithmetic goes through the number's own operations, so these
functions work for any layout, including non-power-of-two bases.  Each
output character costs one short division and each input character one
small multiply-and-add, both linear in the digit count.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from layout import StringBase

if TYPE_CHECKING:
    from number import Number

DIGIT_CHARS = "0123456789abcdef"

FORMAT_BASES = {
    "": StringBase.DECIMAL,
    "d": StringBase.DECIMAL,
    "b": StringBase.BINARY,
    "o": StringBase.OCTAL,
    "x": StringBase.HEXADECIMAL,
}


def radix(base: StringBase | int) -> int:
    """Validate ``base`` and return it as a plain int."""
    if isinstance(base, StringBase):
        return base.value
    try:
        return StringBase(base).value
    except ValueError:
        raise ValueError(f"unsupported string base: {base!r}") from None


def decode_char(c: str, base: int) -> int | None:
    """Digit value of ``c`` in ``base``, or None if it is not a valid digit."""
    value = DIGIT_CHARS.find(c.lower()) if len(c) == 1 else -1
    if value < 0 or value >= base:
        return None
    return value


def to_string(value: Number, base: StringBase | int = StringBase.DECIMAL) -> str:
    """Render ``value`` in ``base``; zero renders as "0"."""
    b = radix(base)
    if not value:
        return "0"
    chars: list[str] = []
    n = value
    while n:
        n, d = n.divmod_small(b)
        chars.append(DIGIT_CHARS[d])

    chars.reverse()
    return "".join(chars)


def from_string(
    cls: type[Number], text: str, base: StringBase | int = StringBase.DECIMAL
) -> Number | None:
    """Parse ``text`` into ``cls``; None unless every character is a digit of ``base``."""
    b = radix(base)
    result = cls(0)
    # May wrap, as base 10 does in a one-bit layout; results are mod capacity anyway.
    step = cls(b)

    for c in text:
        value = decode_char(c, b)
        if value is None:
            return None
        result = result.multiply(step).add(value)

    return result


def format_value(value: Number, spec: str) -> str:
    """``format()`` support: "", "d", "b", "o" or "x"."""
    try:
        base = FORMAT_BASES[spec]
    except KeyError:
        raise ValueError(
            f"unknown format code {spec!r} for {type(value).__name__}"
        ) from None
    return to_string(value, base)
