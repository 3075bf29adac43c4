"""Request and response models for the arithmetic service.

A layout is registered under a name and then referenced by that name
from operation and conversion requests.  Operands travel as text in
one of the ``StringBase`` radixes so arbitrarily wide values survive
JSON.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from layout import DigitLayout, StringBase

# Service limits; multiplication and division are quadratic in the digit count.
MAX_DIGITS = 64
MAX_DIGIT_WIDTH = 32
# A full-width binary operand plus a sign.
MAX_OPERAND_LENGTH = MAX_DIGITS * MAX_DIGIT_WIDTH + 1
MAX_EXPONENT_BITS = 64


# ---------------------------------------------------------------------------
# Layouts
# ---------------------------------------------------------------------------

class LayoutConfig(BaseModel):
    """Digit layout parameters, validated the same way as ``DigitLayout``."""

    width: int = Field(..., ge=1, le=MAX_DIGIT_WIDTH, description="Bits per stored digit")
    count: int = Field(..., ge=1, le=MAX_DIGITS, description="Number of digits")
    digit_max: int | None = Field(
        default=None,
        ge=1,
        description="Largest digit value; defaults to 2**width - 1",
    )

    @model_validator(mode="after")
    def digit_max_fits_width(self) -> LayoutConfig:
        if self.digit_max is not None and self.digit_max > (1 << self.width) - 1:
            raise ValueError(
                f"digit_max {self.digit_max} does not fit in {self.width} bits"
            )
        return self

    def to_layout(self) -> DigitLayout:
        return DigitLayout(self.width, self.count, self.digit_max)

    @classmethod
    def from_layout(cls, layout: DigitLayout) -> LayoutConfig:
        return cls(width=layout.width, count=layout.count, digit_max=layout.digit_max)


class LayoutCreate(BaseModel):
    """Payload for registering a named layout."""

    name: str = Field(..., min_length=1, max_length=64)
    layout: LayoutConfig

    @field_validator("name")
    @classmethod
    def name_is_identifier(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"Layout name must be a valid identifier, got {v!r}")
        return v


class LayoutRecord(BaseModel):
    """A registered layout as returned by the API."""

    name: str
    layout: LayoutConfig
    base: int
    max_value: str = Field(..., description="Largest unsigned value, in decimal")

    @classmethod
    def build(cls, name: str, layout: DigitLayout) -> LayoutRecord:
        return cls(
            name=name,
            layout=LayoutConfig.from_layout(layout),
            base=layout.base,
            max_value=str(layout.max_value),
        )


class LayoutListResponse(BaseModel):
    items: list[LayoutRecord]
    total: int


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------

class Signedness(str, Enum):
    UNSIGNED = "unsigned"
    SIGNED = "signed"


class Operation(str, Enum):
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    POW = "pow"


class Mode(str, Enum):
    LEGACY = "legacy"    # wrap silently, x / 0 == 0
    STRICT = "strict"    # reject overflow and division by zero


def _check_base(v: int) -> int:
    try:
        StringBase(v)
    except ValueError:
        raise ValueError(f"base must be one of 2, 8, 10, 16, got {v}") from None
    return v


class OperationRequest(BaseModel):
    layout: str = Field(..., description="Name of a registered layout")
    signedness: Signedness = Signedness.UNSIGNED
    operation: Operation
    lhs: str = Field(..., max_length=MAX_OPERAND_LENGTH)
    rhs: str = Field(..., max_length=MAX_OPERAND_LENGTH)
    base: int = Field(default=10, description="Radix of operands and result")
    mode: Mode = Mode.LEGACY

    @field_validator("base")
    @classmethod
    def base_supported(cls, v: int) -> int:
        return _check_base(v)


class OperationResponse(BaseModel):
    result: str
    fault: str | None = None
    digits: list[int] = Field(
        default_factory=list, description="Magnitude digits, most significant first"
    )


class ConvertRequest(BaseModel):
    layout: str
    signedness: Signedness = Signedness.UNSIGNED
    text: str = Field(..., max_length=MAX_OPERAND_LENGTH)
    from_base: int = 10
    to_base: int = 10

    @field_validator("from_base", "to_base")
    @classmethod
    def bases_supported(cls, v: int) -> int:
        return _check_base(v)


class ConvertResponse(BaseModel):
    text: str
    digits: list[int]
