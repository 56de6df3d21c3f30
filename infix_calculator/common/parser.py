"""Parse and evaluate infix arithmetic expressions safely."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Callable, List

from infix_calculator.common.config import settings
from infix_calculator.common.errors import DivisionByZero, InvalidExpression
from infix_calculator.common.logger import logger
from infix_calculator.common.tokens import Number, Operator, Token, is_symbol, render


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]

OPERATOR_SYMBOLS = "+-*/()"
DIGITS = "0123456789"
ALLOWED_CHARACTERS = frozenset(DIGITS + "." + OPERATOR_SYMBOLS)

# "(" is a sentinel: lower than every real operator, so only ")" removes it
PRECEDENCE: dict[str, int] = {
    "(": 1,
    "+": 2,
    "-": 2,
    "*": 3,
    "/": 3,
}


def _divide(left: float, right: float) -> float:
    if right == 0:
        raise DivisionByZero(f"Division by zero: {left} / {right}")
    return left / right


# No "-": binary subtraction is rewritten as addition during normalization
OPERATIONS: dict[str, OperatorFn] = {
    "+": operator.add,
    "*": operator.mul,
    "/": _divide,
}


class ExpressionParser:
    """
    Parse and evaluate infix arithmetic expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Stateless: every call is independent and reentrant

    Algorithm:
        1. Validate parentheses balance and allowed characters
        2. Tokenize into numbers and operators
        3. Normalize: insert implicit multiplications, fold minus signs into numbers
        4. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        5. Evaluate RPN using a stack and round the result

    Examples:
        - Infix expression: 5 - 2(3)
        - Normalized: 5 + -2 * ( 3 )
        - Corresponding RPN: 5 -2 3 * +
    """

    @staticmethod
    def validate(expr: str) -> None:
        """
        Reject structurally invalid input.

        :param str expr: Raw arithmetic expression

        :raises InvalidExpression: On unbalanced parentheses or a disallowed character
        """
        depth = 0
        for char in expr:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
                if depth < 0:
                    raise InvalidExpression(f"Closing parenthesis without opening one: {expr!r}")
        if depth != 0:
            raise InvalidExpression(f"Unbalanced parentheses: {expr!r}")

        for char in "".join(expr.split()):
            if char not in ALLOWED_CHARACTERS:
                raise InvalidExpression(f"Invalid character {char!r} in expression: {expr!r}")

    @staticmethod
    def _to_number(literal: str) -> Number:
        """
        Convert a number literal to a Number token.

        :param str literal: Digits with at most one decimal point

        :return: Number token
        :rtype: Number
        :raises InvalidExpression: If the literal is malformed or too large
        """
        if literal.endswith("."):
            raise InvalidExpression(f"Number cannot end with a decimal point: {literal!r}")
        if any(char not in DIGITS and char != "." for char in literal):
            raise InvalidExpression(f"Invalid number literal: {literal!r}")
        value = float(literal)
        if not math.isfinite(value):
            raise InvalidExpression(f"Number literal is too large: {literal[:20]}...")
        return Number(value=value)

    @staticmethod
    def tokenize(expr: str) -> List[Token]:
        """
        Split an arithmetic expression into tokens.

        Whitespace is ignored. Operators and parentheses are single tokens,
        consecutive digits and decimal points are merged into one number.

        :param str expr: Arithmetic expression

        :return: List of tokens
        :rtype: List[Token]
        :raises InvalidExpression: If a number literal is malformed
        """
        chars = "".join(expr.split())
        tokens: List[Token] = []
        i = 0
        while i < len(chars):
            if chars[i] in OPERATOR_SYMBOLS:
                tokens.append(Operator(symbol=chars[i]))
                i += 1
                continue

            # Greedily consume the rest of the number literal
            literal = chars[i]
            i += 1
            while i < len(chars) and chars[i] not in OPERATOR_SYMBOLS:
                if chars[i] == "." and "." in literal:
                    raise InvalidExpression(f"Number has more than one decimal point: {expr!r}")
                literal += chars[i]
                i += 1
            tokens.append(ExpressionParser._to_number(literal))
        return tokens

    @staticmethod
    def fix_parentheses_multiplication(tokens: List[Token]) -> List[Token]:
        """
        Insert the ``*`` implied by parentheses adjacency.

        ``(2)(3)`` -> ``(2)*(3)``, ``2(3)`` -> ``2*(3)``, ``(3)2`` -> ``(3)*2``.

        :param List[Token] tokens: Tokens as produced by tokenize

        :return: New list of tokens with explicit multiplications
        :rtype: List[Token]
        """
        result: List[Token] = []
        for token in tokens:
            if result:
                previous = result[-1]
                closes = is_symbol(previous, ")")
                if (
                    (closes or isinstance(previous, Number)) and is_symbol(token, "(")
                ) or (closes and isinstance(token, Number)):
                    result.append(Operator(symbol="*"))
            result.append(token)
        return result

    @staticmethod
    def fix_negative_numbers(tokens: List[Token]) -> List[Token]:
        """
        Remove every standalone ``-`` from the token sequence.

        A minus sign following a number or ``)`` is a subtraction and becomes
        ``+`` followed by a negated operand. Negated numbers are folded into a
        negative Number token, a negated ``(`` becomes ``-1 * (``:

            - ``5 - 3``       -> ``5 + -3``
            - ``-(2 + 3)``    -> ``-1 * (2 + 3)``
            - ``5 - (2 + 3)`` -> ``5 + -1 * (2 + 3)``
            - ``5 - -3``      -> ``5 + 3``

        :param List[Token] tokens: Tokens with explicit multiplications

        :return: New list of tokens without any ``-`` operator
        :rtype: List[Token]
        :raises InvalidExpression: If a minus sign has no operand to apply to
        """
        result: List[Token] = []
        negate = False
        for token in tokens:
            if is_symbol(token, "-"):
                previous = result[-1] if result else None
                if isinstance(previous, Number) or is_symbol(previous, ")"):
                    result.append(Operator(symbol="+"))
                negate = not negate
                continue

            if negate:
                if isinstance(token, Number):
                    token = token.negated()
                elif is_symbol(token, "("):
                    result.extend([Number(value=-1), Operator(symbol="*")])
                else:
                    raise InvalidExpression(f"Minus sign must be followed by a number or '(', got {token}")
                negate = False
            result.append(token)

        if negate:
            raise InvalidExpression("Expression cannot end with a minus sign")
        return result

    @staticmethod
    def to_rpn(tokens: List[Token]) -> List[Token]:
        """
        Convert a list of tokens into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

        :param List[Token] tokens: List of arithmetic tokens

        :return: List of tokens in RPN order, without parentheses
        :rtype: List[Token]
        :raises InvalidExpression: If parentheses do not match
        """
        output: List[Token] = []
        stack: List[Operator] = []

        for token in tokens:
            if isinstance(token, Number):
                # Numbers are added directly to the output
                output.append(token)
            elif token.symbol == "(":
                stack.append(token)
            elif token.symbol == ")":
                # Flush the parenthesized group, dropping its "("
                while True:
                    if not stack:
                        raise InvalidExpression("Closing parenthesis without opening one")
                    top = stack.pop()
                    if top.symbol == "(":
                        break
                    output.append(top)
            else:
                # Operator: pop operators from stack with higher or equal precedence
                prec = PRECEDENCE[token.symbol]
                while stack and PRECEDENCE[stack[-1].symbol] >= prec:
                    output.append(stack.pop())
                stack.append(token)

        # Append remaining operators in reverse order (stack top first)
        while stack:
            top = stack.pop()
            if top.symbol == "(":
                raise InvalidExpression("Opening parenthesis is never closed")
            output.append(top)
        return output

    @staticmethod
    def evaluate_rpn(postfix: List[Token]) -> float:
        """
        Evaluate tokens in Reverse Polish Notation using a stack.

        :param List[Token] postfix: Tokens as produced by to_rpn

        :return: Unrounded result
        :rtype: float
        :raises InvalidExpression: If operands and operators do not match up
        :raises DivisionByZero: If a divisor is zero
        """
        stack: List[float] = []
        for token in postfix:
            if isinstance(token, Number):
                stack.append(token.value)
                continue

            if token.symbol not in OPERATIONS:
                raise InvalidExpression(f"Unexpected operator {token.symbol!r} in normalized expression")
            # Operator requires two operands
            if len(stack) < 2:
                raise InvalidExpression(f"Not enough operands for {token.symbol!r}")
            right: float = stack.pop()
            left: float = stack.pop()
            stack.append(OPERATIONS[token.symbol](left, right))

        if len(stack) != 1:
            raise InvalidExpression(f"Expression must reduce to a single value, got {len(stack)}")
        if not math.isfinite(stack[0]):
            raise InvalidExpression("Result is not a finite number")
        return stack[0]

    @staticmethod
    def round_result(value: float, decimal_places: int) -> float:
        """
        Round half up to ``decimal_places`` digits to absorb floating-point noise.

        :param float value: Raw result
        :param int decimal_places: Number of decimal digits to keep

        :return: Rounded result
        :rtype: float
        """
        scale = 10 ** decimal_places
        scaled = value * scale
        if not math.isfinite(scaled):
            # Too large to carry any fractional digit
            return value
        return math.floor(scaled + 0.5) / scale

    @staticmethod
    def evaluate(expr: str) -> float:
        """
        Evaluate an arithmetic expression safely.

        :param str expr: Arithmetic expression string

        :return: Computed result, rounded to the configured decimal places
        :rtype: float
        :raises InvalidExpression: If expression is invalid or malformed
        :raises DivisionByZero: If the expression divides by zero
        """
        ExpressionParser.validate(expr)

        tokens: List[Token] = ExpressionParser.tokenize(expr)
        tokens = ExpressionParser.fix_parentheses_multiplication(tokens)
        tokens = ExpressionParser.fix_negative_numbers(tokens)
        logger.debug(f"Normalized {expr!r} to: {render(tokens)}")

        rpn: List[Token] = ExpressionParser.to_rpn(tokens)
        logger.debug(f"RPN of {expr!r}: {render(rpn)}")

        return ExpressionParser.round_result(ExpressionParser.evaluate_rpn(rpn), settings.decimal_places)
