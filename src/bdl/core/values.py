"""
Variable values for BDL documents.

A value is exactly one of four variants, discriminated by the ``kind`` field:
string, number, boolean or empty. Equality follows the active variant, so an
empty string and the empty value are never equal.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class StringValue(BaseModel):
    """Quoted text value (``"..."``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["string"] = "string"
    value: str

    def __str__(self) -> str:
        return self.value

    def to_python(self) -> str:
        return self.value


class NumberValue(BaseModel):
    """Decimal number value, stored as a 64-bit float."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: float

    def __str__(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)

    def to_python(self) -> float:
        return self.value


class BooleanValue(BaseModel):
    """Literal ``true`` or ``false``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["boolean"] = "boolean"
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def to_python(self) -> bool:
        return self.value


class EmptyValue(BaseModel):
    """Declared variable with no initial value (empty or ``{}``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"

    def __str__(self) -> str:
        return "{}"

    def to_python(self) -> None:
        return None


Value = Annotated[
    StringValue | NumberValue | BooleanValue | EmptyValue,
    Field(discriminator="kind"),
]

