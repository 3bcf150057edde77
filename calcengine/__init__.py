"""Integer arithmetic expression engine: tokenizer, evaluator and input validator."""

from calcengine.config import CalculatorConfig, load_config
from calcengine.errors import (
    CalculatorError,
    ErrorKind,
    EvalError,
    LexerError,
    ParseError,
    ValidationError,
    describe,
)
from calcengine.evaluator import Parser, evaluate, floor_divide
from calcengine.formatting import format_expression, stringify_tokens
from calcengine.pipeline import EvaluationResult, calculate
from calcengine.tokenizer import Token, TokenType, tokenize
from calcengine.validator import (
    ValidationResult,
    can_append,
    is_within_digit_limit,
    validate_complete,
)

__all__ = [
    "CalculatorConfig",
    "CalculatorError",
    "ErrorKind",
    "EvalError",
    "EvaluationResult",
    "LexerError",
    "ParseError",
    "Parser",
    "Token",
    "TokenType",
    "ValidationError",
    "ValidationResult",
    "calculate",
    "can_append",
    "describe",
    "evaluate",
    "floor_divide",
    "format_expression",
    "is_within_digit_limit",
    "load_config",
    "stringify_tokens",
    "tokenize",
    "validate_complete",
]
