# test_pipeline.py

import logging

import pytest

from calcengine.config import CalculatorConfig
from calcengine.errors import ErrorKind
from calcengine.pipeline import EvaluationResult, calculate


def test_calculate_success():
    result = calculate("2+3×4")
    assert result == EvaluationResult(value=14)
    assert result.ok


@pytest.mark.parametrize("expr,kind", [
    ("5/0", ErrorKind.DIVISION_BY_ZERO),
    ("(3+4", ErrorKind.UNBALANCED_PARENTHESES),
    ("3++4", ErrorKind.CONSECUTIVE_OPERATORS),
    ("+3", ErrorKind.LEADING_OPERATOR),
    ("3+", ErrorKind.TRAILING_OPERATOR),
    ("()", ErrorKind.EMPTY_PARENTHESES),
    ("", ErrorKind.EMPTY_EXPRESSION),
    ("2+a", ErrorKind.INVALID_CHARACTER),
    ("(-3)", ErrorKind.MALFORMED_EXPRESSION),
    ("(3)4", ErrorKind.MALFORMED_EXPRESSION),
])
def test_calculate_reports_error_kind(expr, kind):
    result = calculate(expr)
    assert not result.ok
    assert result.value is None
    assert result.error == kind


def test_calculate_digit_limit_keeps_value():
    result = calculate("9999999999*10", CalculatorConfig(max_digits=10))
    assert result.error == ErrorKind.DIGIT_LIMIT_EXCEEDED
    assert result.value == 99999999990


def test_calculate_digit_limit_boundary():
    assert calculate("9999999999").ok
    assert calculate("123", CalculatorConfig(max_digits=3)).ok
    assert not calculate("1000", CalculatorConfig(max_digits=3)).ok


def test_calculate_negative_result_digits_ignore_sign():
    assert calculate("1-1000", CalculatorConfig(max_digits=3)).value == -999


def test_calculate_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="calcengine.pipeline"):
        calculate("1+1")
        calculate("1/0")
    messages = [r.getMessage() for r in caplog.records]
    assert any("'1+1' = 2" in m for m in messages)
    assert any("Division by zero" in m for m in messages)


# ---------------------------
# Inputs and results of any size
# ---------------------------

def test_calculate_deep_nesting_returns_error_kind():
    result = calculate("(" * 2000 + "1" + ")" * 2000)
    assert result == EvaluationResult(error=ErrorKind.MALFORMED_EXPRESSION)


def test_calculate_long_literal_returns_digit_limit():
    result = calculate("1" * 5000)
    assert result.error == ErrorKind.DIGIT_LIMIT_EXCEEDED
    assert result.value == (10 ** 5000 - 1) // 9


def test_calculate_huge_product_returns_digit_limit():
    result = calculate("*".join(["9999999999"] * 500))
    assert result.error == ErrorKind.DIGIT_LIMIT_EXCEEDED
    assert result.value == (10 ** 10 - 1) ** 500


def test_calculate_huge_intermediate_within_limit():
    big = "9" * 5000
    assert calculate(f"{big}-{big}+7") == EvaluationResult(value=7)
