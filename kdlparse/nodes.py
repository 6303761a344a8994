"""Value and node definitions for parsed KDL documents."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Keyword(Enum):
    TRUE = "true"
    FALSE = "false"
    NULL = "null"


class Radix(IntEnum):
    BINARY = 2
    OCTAL = 8
    HEX = 16

    @property
    def prefix(self) -> str:
        return {Radix.BINARY: "0b", Radix.OCTAL: "0o", Radix.HEX: "0x"}[self]


class DecimalNumber(BaseModel):
    """A decimal literal split into its parts.

    ``fractional_digits`` keeps leading zeros of the fraction: ``1.05`` is
    ``integral=1, fractional=5, fractional_digits=2``. ``exponent`` is None
    when the literal had no exponent part.
    """

    model_config = ConfigDict(extra="forbid")

    negative: bool = False
    integral: int = Field(default=0, ge=0)
    fractional: int = Field(default=0, ge=0)
    fractional_digits: int = Field(default=0, ge=0)
    exponent_negative: bool = False
    exponent: int | None = Field(default=None, ge=0)

    def to_python(self) -> int | float:
        if self.fractional_digits == 0 and self.exponent is None:
            return -self.integral if self.negative else self.integral
        text = str(self.integral)
        if self.fractional_digits:
            text += "." + str(self.fractional).zfill(self.fractional_digits)
        if self.exponent is not None:
            text += "e" + ("-" if self.exponent_negative else "") + str(self.exponent)
        value = float(text)
        return -value if self.negative else value


class BasedNumber(BaseModel):
    model_config = ConfigDict(extra="forbid")

    radix: Radix
    magnitude: int = Field(ge=0)
    negative: bool = False

    def to_python(self) -> int:
        return -self.magnitude if self.negative else self.magnitude


class BaseValue(BaseModel):
    type_hint: str | None = None


class NullValue(BaseValue):
    kind: Literal["null"] = "null"

    @property
    def python_value(self) -> None:
        return None


class BoolValue(BaseValue):
    kind: Literal["bool"] = "bool"
    value: bool

    @property
    def python_value(self) -> bool:
        return self.value


class StringValue(BaseValue):
    kind: Literal["string"] = "string"
    value: str

    @property
    def python_value(self) -> str:
        return self.value


class NumberValue(BaseValue):
    kind: Literal["number"] = "number"
    value: DecimalNumber | BasedNumber

    @property
    def python_value(self) -> int | float:
        return self.value.to_python()


KdlValue = Annotated[Union[NullValue, BoolValue, StringValue, NumberValue], Field(discriminator="kind")]


def keyword_value(keyword: Keyword) -> NullValue | BoolValue:
    if keyword is Keyword.NULL:
        return NullValue()
    return BoolValue(value=keyword is Keyword.TRUE)


class Node(BaseModel):
    """A node stored in a ``KdlDocument`` arena.

    ``children`` and ``parent`` hold arena indices; the parent link does not
    own anything.
    """

    index: int = Field(ge=0)
    name: str
    type_hint: str | None = None
    values: list[KdlValue] = Field(default_factory=list)
    properties: dict[str, KdlValue] = Field(default_factory=dict)
    children: list[int] = Field(default_factory=list)
    parent: int | None = None

    def add_value(self, value: KdlValue) -> None:
        self.values.append(value)

    def set_property(self, name: str, value: KdlValue) -> None:
        # Re-assignment keeps the key where it first appeared.
        self.properties[name] = value

    @property
    def arguments(self) -> list[object]:
        return [value.python_value for value in self.values]

    def get(self, name: str, default: object = None) -> object:
        value = self.properties.get(name)
        return default if value is None else value.python_value


__all__ = [
    "Keyword",
    "Radix",
    "DecimalNumber",
    "BasedNumber",
    "BaseValue",
    "NullValue",
    "BoolValue",
    "StringValue",
    "NumberValue",
    "KdlValue",
    "keyword_value",
    "Node",
]
