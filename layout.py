"""
Layout layer for fixed-width numbers.

A layout fixes the *shape* of every value built from it: how many bits
each digit is stored in, how many digits there are, and the largest
value a single digit may hold.  The base of the positional system is
one more than that maximum, so any base from 2 up to 2**width is
available - it need not be a power of two.

This module also provides the policy enums that decide what happens
when a result cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class StringBase(Enum):
    """Radix of a textual representation."""

    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEXADECIMAL = 16


class OverflowMode(Enum):
    """What to do when a result needs more digits than the layout has."""

    WRAP = auto()        # Keep the low digits (like C unsigned)
    ERROR = auto()       # Raise NumberOverflowError


class DivZeroMode(Enum):
    """What to do on division or modulus by zero."""

    ZERO = auto()        # Return 0 (total function)
    ERROR = auto()       # Raise NumberDivisionByZeroError


@dataclass(frozen=True)
class DigitLayout:
    """
    Value parameters of a fixed-width number.

    ``width`` is the storage width of one digit in bits, ``count`` the
    number of digits and ``digit_max`` the largest value a digit may
    hold.  ``digit_max`` defaults to the full storage range.
    """

    width: int
    count: int
    digit_max: int | None = None

    def __post_init__(self):
        if self.width < 1:
            raise ValueError(f"width ({self.width}) must be >= 1")
        if self.count < 1:
            raise ValueError(f"count ({self.count}) must be >= 1")
        storage_max = (1 << self.width) - 1
        if self.digit_max is None:
            object.__setattr__(self, "digit_max", storage_max)
        elif not 1 <= self.digit_max <= storage_max:
            raise ValueError(
                f"digit_max ({self.digit_max}) must be in [1, {storage_max}] "
                f"for {self.width}-bit digits"
            )

    @property
    def base(self) -> int:
        return self.digit_max + 1

    @property
    def capacity(self) -> int:
        """Number of distinct representable values (base ** count)."""
        return self.base ** self.count

    @property
    def max_value(self) -> int:
        return self.capacity - 1

    def widened(self, extra: int) -> DigitLayout:
        """Same base and storage width with ``extra`` more digits."""
        return DigitLayout(self.width, self.count + extra, self.digit_max)

    def resized(self, count: int) -> DigitLayout:
        return DigitLayout(self.width, count, self.digit_max)

    def same_base(self, other: DigitLayout) -> bool:
        return self.width == other.width and self.digit_max == other.digit_max

    def describe(self) -> str:
        return f"{self.count} x base-{self.base} ({self.width}-bit digits)"


# ---------------------------------------------------------------------------
# Common layout presets
# ---------------------------------------------------------------------------

BINARY_BYTE = DigitLayout(width=1, count=8)              # behaves like uint8
BYTE_PAIR = DigitLayout(width=8, count=2)                # 0 .. 65535
DECIMAL_32 = DigitLayout(width=8, count=32, digit_max=9)
UINT128 = DigitLayout(width=32, count=4)
UINT256 = DigitLayout(width=8, count=32)

# Small layouts useful for exhaustive verification
TINY = DigitLayout(width=2, count=2, digit_max=2)        # base 3, 0 .. 8
SMALL = DigitLayout(width=4, count=2, digit_max=14)      # base 15, 0 .. 224

PRESETS: dict[str, DigitLayout] = {
    "binary_byte": BINARY_BYTE,
    "byte_pair": BYTE_PAIR,
    "decimal_32": DECIMAL_32,
    "uint128": UINT128,
    "uint256": UINT256,
}
