# test_session.py

from calcengine.config import CalculatorConfig
from calcengine.errors import ErrorKind
from calcengine.session import (
    CalculatorState,
    HistoryEntry,
    clear,
    clear_history,
    delete,
    equals,
    handle_key,
    press,
)


def feed(state, symbols):
    for s in symbols:
        state = press(state, s)
    return state


def test_keypad_scenario_rejects_paren_after_digit():
    state = feed(CalculatorState(), ["2", "(", "+", "3", "×", "4"])
    assert state.expression == "2+3×4"
    state = equals(state)
    assert state.result == 14
    assert state.error is None
    assert state.history == (HistoryEntry("2+3×4", 14),)


def test_press_rejected_symbol_leaves_state():
    state = feed(CalculatorState(), ["3", "+"])
    assert press(state, "+") == state
    assert press(CalculatorState(), ")") == CalculatorState()


def test_operator_continues_from_result():
    state = equals(feed(CalculatorState(), "6×7"))
    state = press(state, "+")
    assert state.expression == "42+"
    assert state.result is None


def test_digit_or_paren_starts_new_expression_after_result():
    state = equals(feed(CalculatorState(), "6×7"))
    assert press(state, "5").expression == "5"
    assert press(state, "(").expression == "("


def test_close_paren_after_result_is_rejected():
    state = equals(feed(CalculatorState(), "6×7"))
    assert press(state, ")") == state


def test_history_is_newest_first_and_bounded():
    config = CalculatorConfig(history_count=2)
    state = CalculatorState()
    for expr in ("1+1", "2+2", "3+3"):
        state = equals(feed(clear(state), expr), config)
    assert [h.result for h in state.history] == [6, 4]


def test_history_count_zero_keeps_nothing():
    state = equals(feed(CalculatorState(), "1+1"), CalculatorConfig(history_count=0))
    assert state.result == 2
    assert state.history == ()


def test_history_stores_formatted_expression():
    state = equals(feed(CalculatorState(), "8/2*3"))
    assert state.history[0] == HistoryEntry("8÷2×3", 12)


def test_equals_on_empty_expression_is_noop():
    state = CalculatorState()
    assert equals(state) is state


def test_division_by_zero_resets_expression():
    state = equals(feed(CalculatorState(), "5÷0"))
    assert state.error == ErrorKind.DIVISION_BY_ZERO
    assert state.expression == ""
    assert state.history == ()


def test_digit_limit_resets_expression():
    state = equals(feed(CalculatorState(), "99×9"), CalculatorConfig(max_digits=2))
    assert state.error == ErrorKind.DIGIT_LIMIT_EXCEEDED
    assert state.expression == ""
    assert state.result is None


def test_validation_error_keeps_expression_for_editing():
    state = equals(feed(CalculatorState(), "(3"))
    assert state.error == ErrorKind.UNBALANCED_PARENTHESES
    assert state.expression == "(3"
    state = press(state, ")")
    assert state.error is None
    assert state.expression == "(3)"


def test_delete():
    state = feed(CalculatorState(), "12")
    assert delete(state).expression == "1"
    assert delete(CalculatorState()) == CalculatorState()

    shown = equals(feed(CalculatorState(), "1+2"))
    dismissed = delete(shown)
    assert dismissed.result is None
    assert dismissed.expression == "1+2"


def test_clear_keeps_history():
    state = equals(feed(CalculatorState(), "1+2"))
    cleared = clear(state)
    assert cleared.expression == ""
    assert cleared.result is None
    assert cleared.history == state.history
    assert clear_history(cleared).history == ()


def test_handle_key():
    state = CalculatorState()
    for key in ("2", "*", "(", "3", "-", "1", ")", "x"):
        state = handle_key(state, key)
    assert state.expression == "2×(3-1)"
    assert handle_key(state, "Backspace").expression == "2×(3-1"
    assert handle_key(state, "Enter").result == 4
    assert handle_key(state, "=").result == 4
    assert handle_key(state, "Escape").expression == ""


def test_long_keypad_number_reports_digit_limit():
    state = feed(CalculatorState(), ["1"] * 5000)
    state = equals(state)
    assert state.error == ErrorKind.DIGIT_LIMIT_EXCEEDED
    assert state.expression == ""


def test_deeply_nested_keypad_input_reports_malformed():
    symbols = ["("] * 2000 + ["1"] + [")"] * 2000
    state = equals(feed(CalculatorState(), symbols))
    assert state.error == ErrorKind.MALFORMED_EXPRESSION
    assert len(state.expression) == 4001
