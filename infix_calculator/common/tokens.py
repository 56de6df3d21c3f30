"""Immutable token types produced by the tokenizer."""
import math
from typing import Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Number(BaseModel):
    """A number literal, converted to its value once at tokenization time."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(..., description="Finite value of the literal")

    @field_validator("value")
    def value_must_be_finite(cls, v: float) -> float:
        """Reject infinities and NaN."""
        if not math.isfinite(v):
            raise ValueError("Number literal must be finite")
        return v

    def negated(self) -> "Number":
        """Return the same literal with its sign flipped."""
        return Number(value=-self.value)

    def __str__(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return str(self.value)


class Operator(BaseModel):
    """An operator or a parenthesis."""

    model_config = ConfigDict(frozen=True)

    symbol: Literal["+", "-", "*", "/", "(", ")"] = Field(..., description="Operator symbol")

    def __str__(self) -> str:
        return self.symbol


Token = Union[Number, Operator]


def is_symbol(token: Union[Token, None], symbol: str) -> bool:
    """Tell whether ``token`` is the operator ``symbol``."""
    return isinstance(token, Operator) and token.symbol == symbol


def render(tokens: Iterable[Token]) -> str:
    """Join tokens with single spaces, e.g. ``2 * ( 3 + -1 )``."""
    return " ".join(str(token) for token in tokens)
