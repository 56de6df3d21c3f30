"""
Command-line entrypoint.

This script:
- Reads expressions from the command line and/or from a text file
- Evaluates each of them independently
- Prints one line per expression: ``<expr> = <result>`` or ``<expr> -> ERROR: <reason>``

Expressions starting with a minus sign must follow ``--``::

    infix-calculator -- "-(2+3)" "5-3"
"""

import argparse
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pydantic import BaseModel, Field, FilePath, ValidationError, model_validator

from infix_calculator.common.errors import ExpressionError
from infix_calculator.common.logger import logger
from infix_calculator.common.operations import OperationFailure, OperationRequest, OperationResult
from infix_calculator.common.parser import ExpressionParser


Outcome = Union[OperationResult, OperationFailure]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expressions : List[str]
        Expressions given on the command line.
    file_path : FilePath, optional
        Path to a file containing one expression per line.
    """

    expressions: List[str] = Field(default_factory=list)
    file_path: Optional[FilePath] = None

    @model_validator(mode="after")
    def require_some_input(self) -> "CliArgs":
        """Ensure there is at least one source of expressions."""
        if not self.expressions and self.file_path is None:
            raise ValueError("Provide at least one expression or --file")
        return self


def parse_args(argv: Optional[Sequence[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="infix-calculator",
        description="Evaluate arithmetic expressions (+ - * / and parentheses)",
    )

    parser.add_argument(
        "expressions",
        nargs="*",
        help="Expressions to evaluate",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="file_path",
        help="Path to a file containing one expression per line",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(expressions=args.expressions, file_path=args.file_path)
    except ValidationError as exc:
        parser.error(str(exc))


def load_expressions(cli_args: CliArgs) -> List[str]:
    """
    Collect expressions from the command line, then from the input file.

    Empty lines of the file are skipped.

    :param CliArgs cli_args: Validated CLI arguments

    :return: Expressions in evaluation order
    :rtype: List[str]
    """
    expressions: List[str] = list(cli_args.expressions)
    if cli_args.file_path is not None:
        lines = Path(cli_args.file_path).read_text(encoding="utf-8").splitlines()
        expressions.extend(line.strip() for line in lines if line.strip())
    return expressions


def run_expression(expression: str, line_number: int) -> Outcome:
    """
    Evaluate one expression and wrap the outcome.

    :param str expression: Arithmetic expression
    :param int line_number: Position of the expression in the input

    Only blank requests and evaluation errors become failures, anything else propagates.

    :return: OperationResult on success, OperationFailure otherwise
    :rtype: Outcome
    """
    logger.info(f"🧮🏁 Evaluating line {line_number}: {expression}")
    try:
        request = OperationRequest(expression=expression)
        result = ExpressionParser.evaluate(request.expression)
    except (ExpressionError, ValidationError) as exc:
        logger.error(f"🧮❌ Failed on line {line_number}: {exc}")
        return OperationFailure(expression=expression, error=str(exc))

    logger.info(f"🧮✅ Line {line_number} evaluated: {result}")
    return OperationResult(expression=expression, result=result)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Evaluate every expression and print the outcomes.

    :return: 0 if every expression was evaluated, 1 otherwise
    :rtype: int
    """
    cli_args = parse_args(argv)
    outcomes: List[Outcome] = [
        run_expression(expr, line_number)
        for line_number, expr in enumerate(load_expressions(cli_args), start=1)
    ]

    for outcome in outcomes:
        print(outcome)

    return 0 if all(isinstance(outcome, OperationResult) for outcome in outcomes) else 1


if __name__ == "__main__":
    raise SystemExit(main())
