"""Errors raised while evaluating arithmetic expressions."""


class ExpressionError(ValueError):
    """Base class for every failure of the evaluation pipeline."""


class InvalidExpression(ExpressionError):
    """The expression is malformed: bad characters, unbalanced parentheses, bad literals or operands."""


class DivisionByZero(ExpressionError):
    """The divisor of a ``/`` operation evaluated to zero."""
