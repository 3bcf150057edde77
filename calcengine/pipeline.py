"""
Full evaluation pipeline: validate -> tokenize -> evaluate -> digit-limit check.

This is the boundary where raised ``CalculatorError``s become result values.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from calcengine.config import CalculatorConfig
from calcengine.errors import CalculatorError, ErrorKind, ValidationError
from calcengine.evaluator import evaluate
from calcengine.tokenizer import tokenize
from calcengine.validator import is_within_digit_limit, validate_complete

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Either a value or an error kind.

    For DIGIT_LIMIT_EXCEEDED the computed value is kept alongside the error so
    the caller can decide what to do with it.
    """
    value: Optional[int] = None
    error: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def calculate(expression: str, config: Optional[CalculatorConfig] = None) -> EvaluationResult:
    """Evaluate a complete expression, reporting any failure as an ErrorKind."""
    config = config or CalculatorConfig()

    try:
        validate_complete(expression).raise_for_error()
        value = evaluate(tokenize(expression))
    except ValidationError as e:
        logger.debug(f"Rejected {expression!r}: {e.kind.value}")
        return EvaluationResult(error=e.kind)
    except CalculatorError as e:
        logger.debug(f"Evaluation of {expression!r} failed: {e}")
        return EvaluationResult(error=e.kind)

    if not is_within_digit_limit(value, config.max_digits):
        logger.debug(f"Result of {expression!r} exceeds {config.max_digits} digits")
        return EvaluationResult(value=value, error=ErrorKind.DIGIT_LIMIT_EXCEEDED)

    logger.debug(f"{expression!r} = {value}")
    return EvaluationResult(value=value)
