"""
Caller-side calculator session.

The accumulated expression, the visible result or error, and the bounded history
live in an immutable ``CalculatorState``. Every transition takes a state and
returns a new one, so nothing is held in module-level state.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Optional, Tuple

from calcengine.config import CalculatorConfig
from calcengine.errors import ErrorKind
from calcengine.formatting import format_expression
from calcengine.pipeline import calculate
from calcengine.validator import can_append

logger = logging.getLogger(__name__)

# Keyboard keys mapped to input symbols.
KEY_MAP: Dict[str, str] = {
    **{str(d): str(d) for d in range(10)},
    '+': '+',
    '-': '-',
    '*': '×',
    '/': '÷',
    '(': '(',
    ')': ')',
}

# Errors after which the expression is discarded rather than left for editing.
RESETTING_ERRORS = frozenset({ErrorKind.DIVISION_BY_ZERO, ErrorKind.DIGIT_LIMIT_EXCEEDED})


@dataclass(frozen=True)
class HistoryEntry:
    expression: str
    result: int


@dataclass(frozen=True)
class CalculatorState:
    expression: str = ''
    result: Optional[int] = None
    error: Optional[ErrorKind] = None
    history: Tuple[HistoryEntry, ...] = ()


def press(state: CalculatorState, symbol: str) -> CalculatorState:
    """Feed one input symbol; rejected symbols leave the expression unchanged.

    While a result is showing, an operator continues from that result and a
    digit or '(' starts a new expression.
    """
    state = replace(state, error=None)

    if state.result is not None:
        carried = str(state.result)
        if can_append('', symbol):
            return replace(state, expression=symbol, result=None)
        if can_append(carried, symbol):
            return replace(state, expression=carried + symbol, result=None)
        logger.debug(f"Rejected {symbol!r} after result {state.result}")
        return state

    if not can_append(state.expression, symbol):
        logger.debug(f"Rejected {symbol!r} after {state.expression!r}")
        return state
    return replace(state, expression=state.expression + symbol)


def equals(state: CalculatorState, config: Optional[CalculatorConfig] = None) -> CalculatorState:
    """Evaluate the accumulated expression and record it in history on success."""
    config = config or CalculatorConfig()
    if not state.expression:
        return state

    outcome = calculate(state.expression, config)
    if not outcome.ok:
        expression = '' if outcome.error in RESETTING_ERRORS else state.expression
        return replace(state, expression=expression, result=None, error=outcome.error)

    entry = HistoryEntry(format_expression(state.expression), outcome.value)
    history = ((entry,) + state.history)[:config.history_count]
    return replace(state, result=outcome.value, error=None, history=history)


def clear(state: CalculatorState) -> CalculatorState:
    """Reset expression, result and error; history is kept."""
    return CalculatorState(history=state.history)


def delete(state: CalculatorState) -> CalculatorState:
    """Dismiss a showing result, otherwise drop the last character."""
    if state.result is not None:
        return replace(state, result=None, error=None)
    return replace(state, expression=state.expression[:-1], error=None)


def clear_history(state: CalculatorState) -> CalculatorState:
    return replace(state, history=())


def handle_key(
    state: CalculatorState,
    key: str,
    config: Optional[CalculatorConfig] = None,
) -> CalculatorState:
    """Dispatch a keyboard key the way a keypad front end would; unknown keys are ignored."""
    if key in KEY_MAP:
        return press(state, KEY_MAP[key])
    if key in ('Enter', '='):
        return equals(state, config)
    if key == 'Escape':
        return clear(state)
    if key == 'Backspace':
        return delete(state)
    return state
