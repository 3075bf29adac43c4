"""Token-stream reading and writing.

A thin layer over the stateless codec for callers that consume
whitespace-separated text.  The base is chosen by a ``StreamFormat``
passed in explicitly rather than by state hidden in the stream:
octal, decimal or hexadecimal, with anything else falling back to
decimal.  Binary is deliberately not reachable from here; use
``to_string`` / ``from_string`` directly for it.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TextIO, Union

from integer import Integer
from layout import StringBase
from number import Number

Value = Union[Number, Integer]


class Basefield(Enum):
    OCT = auto()
    DEC = auto()
    HEX = auto()


_BASES = {
    Basefield.OCT: StringBase.OCTAL,
    Basefield.DEC: StringBase.DECIMAL,
    Basefield.HEX: StringBase.HEXADECIMAL,
}


@dataclass(frozen=True)
class StreamFormat:
    basefield: Basefield | None = Basefield.DEC
    showpos: bool = False

    @property
    def string_base(self) -> StringBase:
        return _BASES.get(self.basefield, StringBase.DECIMAL)


DEFAULT_FORMAT = StreamFormat()


def read_token(stream: TextIO) -> str:
    """Skip leading whitespace and read up to the next whitespace or EOF."""
    c = stream.read(1)
    while c and c.isspace():
        c = stream.read(1)
    chars: list[str] = []
    while c and not c.isspace():
        chars.append(c)
        c = stream.read(1)
    return "".join(chars)


def read_number(
    stream: TextIO, cls: type[Value], fmt: StreamFormat = DEFAULT_FORMAT
) -> Value | None:
    """Parse the next token as ``cls``.

    Returns None at end of input or when the token is not a valid
    number in the selected base.  ``Integer`` classes accept a leading
    sign.
    """
    token = read_token(stream)
    if not token:
        return None
    return cls.from_string(token, fmt.string_base)


def write_number(stream: TextIO, value: Value, fmt: StreamFormat = DEFAULT_FORMAT) -> None:
    if isinstance(value, Integer):
        stream.write(value.to_string(fmt.string_base, show_positive=fmt.showpos))
    else:
        stream.write(value.to_string(fmt.string_base))
