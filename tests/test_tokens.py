"""Test token types Number and Operator."""
from pydantic import ValidationError
import pytest

from infix_calculator.common.tokens import Number, Operator, is_symbol, render


def test_number_coerces_int_to_float() -> None:
    """Integer values are stored as floats and compare equal."""
    assert Number(value=3) == Number(value=3.0)
    assert isinstance(Number(value=3).value, float)


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
def test_number_rejects_non_finite_values(value: float) -> None:
    """Infinite and NaN values are not valid literals."""
    with pytest.raises(ValidationError):
        Number(value=value)


def test_number_is_immutable() -> None:
    """Tokens cannot be modified once produced."""
    token = Number(value=1.0)
    with pytest.raises(ValidationError):
        token.value = 2.0


def test_number_negated() -> None:
    """negated flips the sign and leaves the original untouched."""
    token = Number(value=2.5)
    assert token.negated() == Number(value=-2.5)
    assert token.value == 2.5


@pytest.mark.parametrize("value,expected", [
    (2.0, "2"),
    (-1.0, "-1"),
    (2.5, "2.5"),
    (0.125, "0.125"),
])
def test_number_str(value: float, expected: str) -> None:
    """Whole numbers render without a decimal part."""
    assert str(Number(value=value)) == expected


def test_operator_rejects_unknown_symbol() -> None:
    """Only arithmetic operators and parentheses are operators."""
    with pytest.raises(ValidationError):
        Operator(symbol="^")


def test_is_symbol() -> None:
    """is_symbol only matches operators carrying the given symbol."""
    assert is_symbol(Operator(symbol="("), "(")
    assert not is_symbol(Operator(symbol=")"), "(")
    assert not is_symbol(Number(value=1.0), "(")
    assert not is_symbol(None, "(")


def test_render() -> None:
    """render joins tokens with single spaces."""
    tokens = [Number(value=-1), Operator(symbol="*"), Operator(symbol="("), Number(value=2.5), Operator(symbol=")")]
    assert render(tokens) == "-1 * ( 2.5 )"
