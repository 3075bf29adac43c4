"""
Unsigned fixed-width arithmetic.

A ``Number`` is an immutable run of ``layout.count`` digits in base
``layout.base``.  Every operation consumes its operands and produces a
fresh value; nothing is ever resized, so results that need more digits
than the layout has silently wrap modulo ``base ** count``:

  - addition and subtraction drop the final carry / borrow
  - multiplication keeps only the low ``count`` digits of the product
  - division and modulus by zero return zero

Callers that need to *know* when that happens use ``checked.py``.

The algorithms are the classical ones - carry propagation, schoolbook
multiplication and Knuth's Algorithm D for long division - written for
an arbitrary base rather than a power of two.  They favour clarity over
speed.

Concrete types are produced by ``number_type(layout)``; instances of
different layouts never mix implicitly.
"""

from __future__ import annotations

import functools
import logging
from typing import ClassVar, Iterable

import codec
from digits import DigitArray
from layout import DigitLayout, StringBase

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Digit-run primitives
# ---------------------------------------------------------------------------

def add_digits(a: DigitArray, b: DigitArray) -> tuple[DigitArray, int]:
    """Digit-wise sum in ``a.layout`` and the carry out of the top digit."""
    base = a.layout.base
    result = DigitArray(a.layout)
    carry = 0
    for power in range(a.layout.count):
        total = a.digit(power) + b.digit(power) + carry
        carry = 1 if total >= base else 0
        result.set_digit(power, total)
    return result, carry


def subtract_digits(a: DigitArray, b: DigitArray) -> tuple[DigitArray, int]:
    """Digit-wise difference in ``a.layout`` and the borrow out of the top digit."""
    base = a.layout.base
    result = DigitArray(a.layout)
    borrow = 0
    for power in range(a.layout.count):
        diff = (base + a.digit(power)) - (b.digit(power) + borrow)
        borrow = 1 if diff < base else 0
        result.set_digit(power, diff)
    return result, borrow


def multiply_digits(a: DigitArray, b: DigitArray) -> DigitArray:
    """Schoolbook product, ``a.count + b.count`` digits wide (never truncated)."""
    base = a.layout.base
    w = DigitArray(a.layout.widened(b.layout.count))
    n = b.most_significant_digit()
    m = a.most_significant_digit()

    for j in range(n):
        k = 0
        for i in range(m):
            t = a.digit(i) * b.digit(j) + w.digit(i + j) + k
            k = t // base
            w.set_digit(i + j, t)
        w.set_digit(j + m, k)

    return w


def scale_digits(a: DigitArray, factor: int, layout: DigitLayout) -> DigitArray:
    """Multiply by a small non-negative integer into ``layout``."""
    base = layout.base
    out = DigitArray(layout)
    carry = 0
    for power in range(layout.count):
        t = a.digit(power) * factor + carry
        out.set_digit(power, t)
        carry = t // base
    return out


def short_divide_digits(a: DigitArray, k: int) -> tuple[DigitArray, int]:
    """Divide by a positive native int: quotient in ``a.layout`` and the remainder.

    One pass from the top digit down.  ``k`` need not fit in a digit or
    even in the layout.
    """
    base = a.layout.base
    quotient = DigitArray(a.layout)
    rem = 0
    for power in range(a.layout.count - 1, -1, -1):
        q, rem = divmod(rem * base + a.digit(power), k)
        quotient.set_digit(power, q)
    return quotient, rem


def compare_digits(a: DigitArray, b: DigitArray) -> int:
    """-1, 0 or 1; works across runs of different lengths."""
    for power in range(max(len(a), len(b)) - 1, -1, -1):
        da, db = a.digit(power), b.digit(power)
        if da != db:
            return -1 if da < db else 1
    return 0


def divide_digits(a: DigitArray, b: DigitArray) -> DigitArray:
    """
    Long division: the quotient ``a // b`` in ``a.layout``.

    Knuth's Algorithm D.  Both operands are first scaled so the
    divisor's leading digit is at least base/2, which bounds the error
    of each two-digit quotient estimate to at most two.  The scaled
    values live in a layout one digit wider so the scaling never wraps.
    Single-digit divisors take the one-pass short division instead.

    Division by zero yields zero.
    """
    layout = a.layout
    base = layout.base
    quotient = DigitArray(layout)

    if a.is_zero():
        return quotient
    if b.is_zero():
        logger.debug("division by zero in %s, returning 0", layout.describe())
        return quotient
    order = compare_digits(b, a)
    if order > 0:
        return quotient
    if order == 0:
        quotient.set_digit(0, 1)
        return quotient
    if b.most_significant_digit() == 1 and b.digit(0) == 1:
        return a.copy()
    if b.most_significant_digit() == 1:
        quotient, _ = short_divide_digits(a, b.digit(0))
        return quotient
    # From here on: b has at least two digits and b < a

    wide = layout.widened(1)
    norm = base // (b.digit(b.most_significant_digit() - 1) + 1)
    num = scale_digits(a, norm, wide)
    den = scale_digits(b, norm, wide)
    n = den.most_significant_digit()
    m = num.most_significant_digit() - n
    lead = den.digit(n - 1)
    second = den.digit(n - 2) if n >= 2 else 0

    for j in range(m, -1, -1):
        # Estimate from the top two digits of the remaining dividend.
        top = num.digit(j + n) * base + num.digit(j + n - 1)
        qh, rh = divmod(top, lead)
        third = num.digit(j + n - 2) if j + n >= 2 else 0

        while qh >= base or qh * second > base * rh + third:
            qh -= 1
            rh += lead
            if rh >= base:
                break

        # The n + 1 dividend digits the trial product is taken from.
        window = DigitArray(wide)
        for i in range(j, j + n + 1):
            window.set_digit(i - j, num.digit(i))

        trial = scale_digits(den, qh, wide)
        while compare_digits(window, trial) < 0:
            qh -= 1
            trial = scale_digits(den, qh, wide)

        quotient.set_digit(j, qh)
        remainder, _ = subtract_digits(window, trial)
        for i in range(j, j + n + 1):
            num.set_digit(i, remainder.digit(i - j))

    return quotient


# ---------------------------------------------------------------------------
# The value type
# ---------------------------------------------------------------------------

@functools.total_ordering
class Number:
    """
    Immutable fixed-width unsigned integer.

    Do not instantiate directly; use ``number_type(layout)`` to get the
    concrete class for a layout.  ``int`` operands are accepted wherever
    a ``Number`` is and are converted with the same silent wrap as the
    constructor.  ``bool`` is not an operand.

    The comparison operators and ``hash`` follow the exact numeric value,
    so ``N(0) < 65536`` holds and ``{N(5), 5}`` has one element.
    ``compare()`` is an arithmetic operation like the others: its ``int``
    argument wraps first.
    """

    layout: ClassVar[DigitLayout]
    __slots__ = ("_digits",)

    def __init__(self, value: int = 0) -> None:
        if not hasattr(type(self), "layout"):
            raise TypeError("use number_type(layout) to build a concrete Number class")
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"expected int, got {type(value).__name__}")
        layout = self.layout
        arr = DigitArray(layout)
        for power in range(layout.count):
            if value == 0:
                break
            value, d = divmod(value, layout.base)
            arr.set_digit(power, d)
        self._digits = arr.as_tuple()

    # -- construction -------------------------------------------------------

    @classmethod
    def from_array(cls, arr: DigitArray) -> Number:
        """Freeze a digit run of the same base; extra high digits are dropped."""
        if not arr.layout.same_base(cls.layout):
            raise ValueError(
                f"cannot build base-{cls.layout.base} number from base-{arr.layout.base} digits"
            )
        if arr.layout.count != cls.layout.count:
            arr = arr.resized(cls.layout)
        obj = object.__new__(cls)
        obj._digits = arr.as_tuple()
        return obj

    @classmethod
    def from_digits(cls, digits: Iterable[int]) -> Number:
        """Build from an explicit most-significant-first digit sequence."""
        return cls.from_array(DigitArray(cls.layout, digits))

    @classmethod
    def from_string(cls, text: str, base: StringBase | int = StringBase.DECIMAL) -> Number | None:
        return codec.from_string(cls, text, base)

    @classmethod
    def parse(cls, text: str, base: StringBase | int = StringBase.DECIMAL) -> Number:
        """Like ``from_string`` but raises ``ValueError`` on bad input."""
        value = cls.from_string(text, base)
        if value is None:
            raise ValueError(f"invalid base-{codec.radix(base)} number: {text!r}")
        return value

    def coerce(self, other: Number | int) -> Number:
        if type(other) is type(self):
            return other
        if isinstance(other, Number):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(other).__name__}; "
                "widen or truncate explicitly"
            )
        if isinstance(other, int) and not isinstance(other, bool):
            return type(self)(other)
        raise TypeError(f"unsupported operand type {type(other).__name__}")

    def _operand(self, other: object) -> Number | None:
        if isinstance(other, bool):
            return None
        if isinstance(other, (Number, int)):
            return self.coerce(other)
        return None

    # -- digit access -------------------------------------------------------

    @property
    def digits(self) -> tuple[int, ...]:
        """Most-significant-first digits."""
        return self._digits

    def digit(self, power: int) -> int:
        if power < 0:
            raise IndexError("Negative digit power")
        if power >= self.layout.count:
            return 0
        return self._digits[self.layout.count - 1 - power]

    def most_significant_digit(self) -> int:
        return self.to_array().most_significant_digit()

    def with_digit(self, power: int, value: int) -> Number:
        """Copy with ``value mod base`` stored at ``power`` (no-op past the top)."""
        arr = self.to_array()
        arr.set_digit(power, value)
        return type(self).from_array(arr)

    def to_array(self) -> DigitArray:
        return DigitArray(self.layout, self._digits)

    # -- core operations ----------------------------------------------------

    def add(self, other: Number | int) -> Number:
        result, _ = add_digits(self.to_array(), self.coerce(other).to_array())
        return type(self).from_array(result)

    def subtract(self, other: Number | int) -> Number:
        result, _ = subtract_digits(self.to_array(), self.coerce(other).to_array())
        return type(self).from_array(result)

    def multiply(self, other: Number | int) -> Number:
        product = multiply_digits(self.to_array(), self.coerce(other).to_array())
        return type(self).from_array(product)

    def divide(self, other: Number | int) -> Number:
        quotient = divide_digits(self.to_array(), self.coerce(other).to_array())
        return type(self).from_array(quotient)

    def modulus(self, other: Number | int) -> Number:
        """``self - (self // other) * other``; zero when ``other`` is zero."""
        other = self.coerce(other)
        if not other:
            return type(self)()
        return self.subtract(self.divide(other).multiply(other))

    def divmod(self, other: Number | int) -> tuple[Number, Number]:
        other = self.coerce(other)
        if not other:
            return type(self)(), type(self)()
        quotient = self.divide(other)
        return quotient, self.subtract(quotient.multiply(other))

    def divmod_small(self, k: int) -> tuple[Number, int]:
        """Quotient and native remainder for a positive native divisor.

        ``k`` need not be representable in the layout, so this works
        even where ``type(self)(k)`` would wrap.
        """
        if k <= 0:
            raise ValueError(f"divisor must be positive, got {k}")
        quotient, rem = short_divide_digits(self.to_array(), k)
        return type(self).from_array(quotient), rem

    def power(self, exponent: Number | int) -> Number:
        """
        Square-and-multiply.

        The exponent's bits are read by short division by two, so it is
        any value of this type, including in layouts where two wraps.
        """
        exponent = self.coerce(exponent)
        result = type(self)(1)
        b = self

        while exponent:
            exponent, bit = exponent.divmod_small(2)
            if bit:
                result = result.multiply(b)
            if exponent:
                b = b.multiply(b)

        return result

    def compare(self, other: Number | int) -> int:
        other = self.coerce(other)
        if self._digits == other._digits:
            return 0
        return -1 if self._digits < other._digits else 1

    # -- convenience --------------------------------------------------------

    def succ(self) -> Number:
        return self.add(1)

    def pred(self) -> Number:
        return self.subtract(1)

    def widen(self, count: int) -> Number:
        """Zero-extend into the same base with ``count`` digits."""
        if count < self.layout.count:
            raise ValueError(
                f"cannot widen {self.layout.count} digits to {count}; use truncate()"
            )
        return number_type(self.layout.resized(count)).from_array(self.to_array())

    def truncate(self, count: int) -> Number:
        """Keep only the low ``count`` digits (explicitly lossy)."""
        if count > self.layout.count:
            raise ValueError(
                f"cannot truncate {self.layout.count} digits to {count}; use widen()"
            )
        return number_type(self.layout.resized(count)).from_array(self.to_array())

    def to_native(self, bits: int) -> int:
        """The value as a native ``bits``-wide unsigned integer would hold it."""
        return int(self) % (1 << bits)

    def to_string(self, base: StringBase | int = StringBase.DECIMAL) -> str:
        return codec.to_string(self, base)

    # -- Python protocols ---------------------------------------------------

    def __int__(self) -> int:
        value = 0
        for d in self._digits:
            value = value * self.layout.base + d
        return value

    def __bool__(self) -> bool:
        return any(self._digits)

    def __eq__(self, other: object) -> bool:
        if type(other) is type(self):
            return self._digits == other._digits
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

    def __pow__(self, other, modulo=None):
        if modulo is not None:
            return NotImplemented
        other = self._operand(other)
        return NotImplemented if other is None else self.power(other)

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, spec: str) -> str:
        return codec.format_value(self, spec)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


@functools.lru_cache(maxsize=None)
def number_type(layout: DigitLayout) -> type[Number]:
    """The (cached) concrete ``Number`` class for ``layout``."""
    name = f"Number{layout.count}x{layout.base}"
    cls = type(name, (Number,), {"__slots__": (), "layout": layout})
    logger.debug("created %s for %s", name, layout.describe())
    return cls
