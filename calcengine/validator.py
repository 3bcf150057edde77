"""
Input validation for incrementally built expressions.

``can_append`` gates each keystroke before it reaches the accumulated expression;
``validate_complete`` checks the finished expression before it is evaluated.
Both work on the raw string and do not depend on the tokenizer's output.
"""

from dataclasses import dataclass
from typing import Optional

from calcengine.errors import ErrorKind, ValidationError
from calcengine.tokenizer import normalize_operators, strip_whitespace

_OPERATORS = frozenset('+-×÷*/')


def is_digit(char: str) -> bool:
    return len(char) == 1 and '0' <= char <= '9'


def is_operator(char: str) -> bool:
    return len(char) == 1 and char in _OPERATORS


# ---------------------------
# Keystroke gate
# ---------------------------

def can_append(current_expression: str, candidate: str) -> bool:
    """Return True if appending ``candidate`` keeps the expression plausible.

    The decision depends only on the class of the last non-whitespace character
    (start, digit, operator, '(' or ')') plus, for ')', the running paren tally.
    """
    expr = strip_whitespace(current_expression)
    last = expr[-1] if expr else ''

    if is_digit(candidate):
        return True
    if is_operator(candidate):
        return is_digit(last) or last == ')'
    if candidate == '(':
        return not expr or is_operator(last) or last == '('
    if candidate == ')':
        open_count = expr.count('(') - expr.count(')')
        return open_count > 0 and (is_digit(last) or last == ')')
    return False


# ---------------------------
# Whole-expression validation
# ---------------------------

@dataclass(frozen=True)
class ValidationResult:
    """Outcome of ``validate_complete``; ``error`` is None when ``valid``."""
    valid: bool
    error: Optional[ErrorKind] = None

    def raise_for_error(self) -> None:
        if not self.valid:
            raise ValidationError(self.error)


_OK = ValidationResult(True)


def _invalid(kind: ErrorKind) -> ValidationResult:
    return ValidationResult(False, kind)


def validate_complete(expression: str) -> ValidationResult:
    """Structurally validate a finished expression; the first violation wins.

    Checks, in order: parenthesis balance, leading operator, consecutive
    operators, trailing operator, empty '()' pair, empty input. Only a true
    first-character operator counts as leading; an operator right after '('
    is left to the parser.
    """
    normalized = normalize_operators(strip_whitespace(expression))

    depth = 0
    for char in normalized:
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth < 0:
                return _invalid(ErrorKind.UNBALANCED_PARENTHESES)
    if depth != 0:
        return _invalid(ErrorKind.UNBALANCED_PARENTHESES)

    if normalized and is_operator(normalized[0]):
        return _invalid(ErrorKind.LEADING_OPERATOR)

    for curr, nxt in zip(normalized, normalized[1:]):
        if is_operator(curr) and is_operator(nxt):
            return _invalid(ErrorKind.CONSECUTIVE_OPERATORS)

    if normalized and is_operator(normalized[-1]):
        return _invalid(ErrorKind.TRAILING_OPERATOR)

    if '()' in normalized:
        return _invalid(ErrorKind.EMPTY_PARENTHESES)

    if not normalized:
        return _invalid(ErrorKind.EMPTY_EXPRESSION)

    return _OK


def is_within_digit_limit(value: int, max_digits: int) -> bool:
    """True if ``value`` has at most ``max_digits`` decimal digits (sign ignored)."""
    return abs(value) < 10 ** max_digits
