"""
Error taxonomy for the expression engine.

Every failure carries an ``ErrorKind``; the message text is informational only.
Exceptions are raised where a problem is detected and converted to a kind at the
pipeline boundary (see ``calcengine.pipeline.calculate``).
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Distinguishable failure kinds reported to the caller."""
    INVALID_CHARACTER = "invalid_character"
    DIVISION_BY_ZERO = "division_by_zero"
    MALFORMED_EXPRESSION = "malformed_expression"
    UNMATCHED_PARENTHESIS = "unmatched_parenthesis"
    UNBALANCED_PARENTHESES = "unbalanced_parentheses"
    LEADING_OPERATOR = "leading_operator"
    TRAILING_OPERATOR = "trailing_operator"
    CONSECUTIVE_OPERATORS = "consecutive_operators"
    EMPTY_PARENTHESES = "empty_parentheses"
    EMPTY_EXPRESSION = "empty_expression"
    DIGIT_LIMIT_EXCEEDED = "digit_limit_exceeded"


_MESSAGES = {
    ErrorKind.INVALID_CHARACTER: "Invalid character",
    ErrorKind.DIVISION_BY_ZERO: "Division by zero",
    ErrorKind.MALFORMED_EXPRESSION: "Malformed expression",
    ErrorKind.UNMATCHED_PARENTHESIS: "Missing closing parenthesis",
    ErrorKind.UNBALANCED_PARENTHESES: "Unbalanced parentheses",
    ErrorKind.LEADING_OPERATOR: "Expression starts with an operator",
    ErrorKind.TRAILING_OPERATOR: "Expression ends with an operator",
    ErrorKind.CONSECUTIVE_OPERATORS: "Consecutive operators",
    ErrorKind.EMPTY_PARENTHESES: "Empty parentheses",
    ErrorKind.EMPTY_EXPRESSION: "Expression is empty",
    ErrorKind.DIGIT_LIMIT_EXCEEDED: "Result exceeds the digit limit",
}


def describe(kind: ErrorKind) -> str:
    """Return the default human-readable message for an error kind."""
    return _MESSAGES[kind]


# ---------------------------
# Exceptions
# ---------------------------

class CalculatorError(Exception):
    """Base class for calculator errors. ``kind`` identifies the failure."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        super().__init__(message or describe(kind))


class LexerError(CalculatorError):
    """Raised for characters outside the expression alphabet."""

    def __init__(self, char: str, pos: int):
        self.char = char
        self.pos = pos
        super().__init__(
            ErrorKind.INVALID_CHARACTER,
            f"Invalid character {char!r} at position {pos}",
        )


class ParseError(CalculatorError):
    """Raised when the token stream does not match the grammar."""
    pass


class EvalError(CalculatorError):
    """Raised for arithmetic failures during evaluation."""
    pass


class ValidationError(CalculatorError):
    """Raised by ``ValidationResult.raise_for_error`` for structural problems."""
    pass
