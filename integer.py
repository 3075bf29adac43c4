"""
Signed fixed-width integers in sign-magnitude form.

An ``Integer`` pairs a sign flag with a ``Number`` magnitude of the same
layout.  All magnitude arithmetic is delegated to the unsigned engine;
this module only decides the sign of each result.

Canonical zero: a zero magnitude is always paired with the positive
flag, whatever the operation that produced it, so there is exactly one
zero and it compares equal to itself.

Division truncates toward zero and the remainder takes the sign of the
dividend, as in C - this differs from Python's floor division on
``int``.  Unary plus forces the sign positive rather than being a no-op.
"""

from __future__ import annotations

import functools
import logging
from typing import ClassVar

import codec
from layout import DigitLayout, StringBase
from number import Number, number_type

logger = logging.getLogger(__name__)


@functools.total_ordering
class Integer:
    """
    Immutable fixed-width signed integer.

    Use ``integer_type(layout)`` for the concrete class.  Native ``int``
    operands are split into sign and magnitude; magnitudes that do not
    fit wrap silently.  As with ``Number``, comparison operators and
    ``hash`` follow the exact numeric value and ``bool`` is not an
    operand.
    """

    layout: ClassVar[DigitLayout]
    number_type: ClassVar[type[Number]]
    __slots__ = ("_positive", "_magnitude")

    def __init__(self, value: int = 0) -> None:
        if not hasattr(type(self), "layout"):
            raise TypeError("use integer_type(layout) to build a concrete Integer class")
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"expected int, got {type(value).__name__}")
        magnitude = self.number_type(value if value >= 0 else -value)
        self._positive = value >= 0 or not magnitude
        self._magnitude = magnitude

    @classmethod
    def from_parts(cls, positive: bool, magnitude: Number | int) -> Integer:
        """Build from a sign flag and magnitude; zero is made positive."""
        if not isinstance(magnitude, Number):
            magnitude = cls.number_type(magnitude)
        elif type(magnitude) is not cls.number_type:
            raise TypeError(
                f"magnitude must be {cls.number_type.__name__}, "
                f"got {type(magnitude).__name__}"
            )
        obj = object.__new__(cls)
        obj._positive = bool(positive) or not magnitude
        obj._magnitude = magnitude
        return obj

    @classmethod
    def from_string(
        cls, text: str, base: StringBase | int = StringBase.DECIMAL
    ) -> Integer | None:
        """Parse an optional leading sign followed by an unsigned number."""
        positive = True
        if text[:1] in ("+", "-"):
            positive = text[0] == "+"
            text = text[1:]
        magnitude = cls.number_type.from_string(text, base)
        if magnitude is None:
            return None
        return cls.from_parts(positive, magnitude)

    @classmethod
    def parse(cls, text: str, base: StringBase | int = StringBase.DECIMAL) -> Integer:
        value = cls.from_string(text, base)
        if value is None:
            raise ValueError(f"invalid base-{codec.radix(base)} integer: {text!r}")
        return value

    def coerce(self, other: Integer | int) -> Integer:
        if type(other) is type(self):
            return other
        if isinstance(other, Integer):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(other).__name__}"
            )
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(other)
        raise TypeError(f"unsupported operand type {type(other).__name__}")

    def _operand(self, other: object) -> Integer | None:
        if isinstance(other, bool):
            return None
        if isinstance(other, (Integer, int)):
            return self.coerce(other)
        return None

    # -- accessors ----------------------------------------------------------

    @property
    def positive(self) -> bool:
        return self._positive

    @property
    def negative(self) -> bool:
        return not self._positive

    @property
    def magnitude(self) -> Number:
        return self._magnitude

    # -- core operations ----------------------------------------------------

    def plus(self) -> Integer:
        """Same magnitude, sign forced positive."""
        return self.from_parts(True, self._magnitude)

    def negate(self) -> Integer:
        if not self._magnitude:
            return self
        return self.from_parts(not self._positive, self._magnitude)

    def add(self, other: Integer | int) -> Integer:
        other = self.coerce(other)
        if self._positive == other._positive:
            return self.from_parts(self._positive, self._magnitude.add(other._magnitude))
        order = self._magnitude.compare(other._magnitude)
        if order < 0:
            return self.from_parts(other._positive, other._magnitude.subtract(self._magnitude))
        if order > 0:
            return self.from_parts(self._positive, self._magnitude.subtract(other._magnitude))
        return type(self)()

    def subtract(self, other: Integer | int) -> Integer:
        return self.add(self.coerce(other).negate())

    def multiply(self, other: Integer | int) -> Integer:
        other = self.coerce(other)
        return self.from_parts(
            self._positive == other._positive,
            self._magnitude.multiply(other._magnitude),
        )

    def divide(self, other: Integer | int) -> Integer:
        """Quotient truncated toward zero; zero when dividing by zero."""
        other = self.coerce(other)
        return self.from_parts(
            self._positive == other._positive,
            self._magnitude.divide(other._magnitude),
        )

    def modulus(self, other: Integer | int) -> Integer:
        """Remainder with the dividend's sign; zero when dividing by zero."""
        other = self.coerce(other)
        return self.from_parts(self._positive, self._magnitude.modulus(other._magnitude))

    def divmod(self, other: Integer | int) -> tuple[Integer, Integer]:
        return self.divide(other), self.modulus(other)

    def compare(self, other: Integer | int) -> int:
        other = self.coerce(other)
        if self._positive != other._positive:
            return 1 if self._positive else -1
        order = self._magnitude.compare(other._magnitude)
        return order if self._positive else -order

    # -- convenience --------------------------------------------------------

    def succ(self) -> Integer:
        return self.add(1)

    def pred(self) -> Integer:
        return self.subtract(1)

    def to_native(self, bits: int) -> int:
        """The value as a native ``bits``-wide two's-complement integer would hold it."""
        value = int(self) % (1 << bits)
        if value >= 1 << (bits - 1):
            value -= 1 << bits
        return value

    def to_string(
        self, base: StringBase | int = StringBase.DECIMAL, show_positive: bool = False
    ) -> str:
        sign = "-" if self.negative else ("+" if show_positive else "")
        return sign + self._magnitude.to_string(base)

    def show(self) -> str:
        """Debug form: sign flag and raw digits, most significant first."""
        digits = "".join(f"{d}|" for d in self._magnitude.digits)
        return f"({int(self._positive)}, {digits})"

    # -- Python protocols ---------------------------------------------------

    def __int__(self) -> int:
        value = int(self._magnitude)
        return value if self._positive else -value

    def __bool__(self) -> bool:
        return bool(self._magnitude)

    def __eq__(self, other: object) -> bool:
        if type(other) is type(self):
            return self._positive == other._positive and self._magnitude == other._magnitude
        if isinstance(other, int) and not isinstance(other, bool):
            return int(self) == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, int) and not isinstance(other, bool):
            return int(self) < other
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(int(self))

    def __pos__(self) -> Integer:
        return self.plus()

    def __neg__(self) -> Integer:
        return self.negate()

    def __abs__(self) -> Integer:
        return self.plus()

    def __add__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else self.subtract(other)

    def __rsub__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else other.subtract(self)

    def __mul__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else self.multiply(other)

    def __rmul__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else other.multiply(self)

    def __floordiv__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else self.divide(other)

    def __rfloordiv__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else other.divide(self)

    def __mod__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else self.modulus(other)

    def __rmod__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else other.modulus(self)

    def __divmod__(self, other):
        other = self._operand(other)
        return NotImplemented if other is None else self.divmod(other)

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, spec: str) -> str:
        show_positive = spec.startswith("+")
        if show_positive:
            spec = spec[1:]
        sign = "-" if self.negative else ("+" if show_positive else "")
        return sign + codec.format_value(self._magnitude, spec)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


@functools.lru_cache(maxsize=None)
def integer_type(layout: DigitLayout) -> type[Integer]:
    """The (cached) concrete ``Integer`` class for ``layout``."""
    magnitude_type = number_type(layout)
    name = f"Integer{layout.count}x{layout.base}"
    cls = type(
        name,
        (Integer,),
        {"__slots__": (), "layout": layout, "number_type": magnitude_type},
    )
    logger.debug("created %s for %s", name, layout.describe())
    return cls
