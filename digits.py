"""Fixed-length digit storage.

A ``DigitArray`` holds exactly ``layout.count`` digits, most significant
first, so that comparing two runs lexicographically orders them by
value::

    index:   0          1               count-1
           [ B^(n-1),   B^(n-2),  ...,  B^0     ]

Digits are addressed by *power* (the exponent of their place value)
rather than by index.  Reads past the top return zero and writes past
the top are dropped, which lets values of different widths be combined
without bounds checks at every call site.

The array is the only mutable thing in the arithmetic engine; it is
used as scratch space inside an operation and frozen into a ``Number``
before anything is returned to a caller.
"""
from __future__ import annotations

from typing import Iterable, Iterator

from layout import DigitLayout


class DigitArray:
    __slots__ = ("layout", "_digits")

    def __init__(self, layout: DigitLayout, digits: Iterable[int] | None = None) -> None:
        self.layout = layout
        if digits is None:
            self._digits = [0] * layout.count
            return
        values = list(digits)
        if len(values) != layout.count:
            raise ValueError(
                f"expected {layout.count} digits, got {len(values)}"
            )
        for v in values:
            if not 0 <= v <= layout.digit_max:
                raise ValueError(
                    f"digit {v} is outside [0, {layout.digit_max}]"
                )
        self._digits = values

    # -- accessors ----------------------------------------------------------

    def digit(self, power: int) -> int:
        """Digit whose place value is base**power; zero beyond the top."""
        if power < 0:
            raise IndexError("Negative digit power")
        if power >= self.layout.count:
            return 0
        return self._digits[self.layout.count - 1 - power]

    def set_digit(self, power: int, value: int) -> None:
        """Store ``value mod base`` at ``power``; a no-op beyond the top."""
        if power < 0:
            raise IndexError("Negative digit power")
        if power < self.layout.count:
            self._digits[self.layout.count - 1 - power] = value % self.layout.base

    def most_significant_digit(self) -> int:
        """Count of digits up to and including the highest nonzero one.

        Zero for an all-zero array.
        """
        n = self.layout.count
        for d in self._digits:
            if d != 0:
                break
            n -= 1
        return n

    # -- helpers ------------------------------------------------------------

    def is_zero(self) -> bool:
        return not any(self._digits)

    def copy(self) -> DigitArray:
        clone = DigitArray.__new__(DigitArray)
        clone.layout = self.layout
        clone._digits = list(self._digits)
        return clone

    def resized(self, layout: DigitLayout) -> DigitArray:
        """Copy into ``layout``: zero-extend or drop high digits."""
        out = DigitArray(layout)
        for power in range(min(layout.count, self.layout.count)):
            out.set_digit(power, self.digit(power))
        return out

    def as_tuple(self) -> tuple[int, ...]:
        return tuple(self._digits)

    def __len__(self) -> int:
        return self.layout.count

    def __iter__(self) -> Iterator[int]:
        return iter(self._digits)

    def __repr__(self) -> str:
        return f"DigitArray({self._digits!r}, base={self.layout.base})"
