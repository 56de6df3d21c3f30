"""Test the command-line entrypoint."""
from pathlib import Path

import pytest

from infix_calculator.common.operations import OperationFailure, OperationResult
from infix_calculator.main import CliArgs, load_expressions, main, parse_args, run_expression


@pytest.fixture
def operations_file(tmp_path: Path) -> Path:
    """Create an input file with a blank line in the middle."""
    path = tmp_path / "operations.txt"
    path.write_text("1+1\n\n  2*2  \n", encoding="utf-8")
    return path


def test_parse_args_expressions() -> None:
    """Positional arguments become expressions."""
    cli_args = parse_args(["1+1", "2(3)"])
    assert cli_args.expressions == ["1+1", "2(3)"]
    assert cli_args.file_path is None


def test_parse_args_requires_input() -> None:
    """Calling without expressions nor file exits with a usage error."""
    with pytest.raises(SystemExit):
        parse_args([])


def test_parse_args_rejects_missing_file(tmp_path: Path) -> None:
    """A file path that does not exist exits with a usage error."""
    with pytest.raises(SystemExit):
        parse_args(["--file", str(tmp_path / "missing.txt")])


def test_load_expressions_skips_blank_lines(operations_file: Path) -> None:
    """Command-line expressions come first, then stripped non-empty file lines."""
    cli_args = CliArgs(expressions=["3-1"], file_path=operations_file)
    assert load_expressions(cli_args) == ["3-1", "1+1", "2*2"]


def test_run_expression_result() -> None:
    """A valid expression gives an OperationResult."""
    outcome = run_expression("(2)(3)(4)", 1)
    assert outcome == OperationResult(expression="(2)(3)(4)", result=24.0)


@pytest.mark.parametrize("expr", ["5/0", "(1+2", "1..5", ""])
def test_run_expression_failure(expr: str) -> None:
    """Invalid expressions give an OperationFailure carrying the reason."""
    outcome = run_expression(expr, 3)
    assert isinstance(outcome, OperationFailure)
    assert outcome.expression == expr
    assert outcome.error


def test_main_prints_results(capsys) -> None:
    """main prints one line per expression and succeeds."""
    assert main(["--", "2+3*4", "-(2+3)"]) == 0
    assert capsys.readouterr().out.splitlines() == ["2+3*4 = 14.0", "-(2+3) = -5.0"]


def test_main_reports_errors(capsys) -> None:
    """main keeps going after a failure and returns 1."""
    assert main(["5/0", "1/3"]) == 1
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("5/0 -> ERROR: ")
    assert lines[1] == "1/3 = 0.3333"


def test_main_reads_file(operations_file: Path, capsys) -> None:
    """main evaluates every expression of the input file."""
    assert main(["--file", str(operations_file)]) == 0
    assert capsys.readouterr().out.splitlines() == ["1+1 = 2.0", "2*2 = 4.0"]
