"""
Command-line front end: one-shot evaluation or an interactive keypad-style REPL.

Each REPL line is fed to the session one symbol at a time, exactly as a keypad
would, so symbols the validator rejects are dropped. '=' evaluates.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from calcengine.config import CalculatorConfig, load_config
from calcengine.errors import ErrorKind, describe
from calcengine.formatting import format_expression
from calcengine.pipeline import calculate
from calcengine.session import (
    KEY_MAP,
    CalculatorState,
    clear,
    clear_history,
    delete,
    equals,
    press,
)

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Integer calculator help:\n"
    "Type digits, + - * / (or × ÷) and parentheses; '=' evaluates.\n"
    "Division floors toward negative infinity (7/2 = 3).\n"
    "Symbols that cannot follow the current input are ignored.\n"
    "Commands:\n"
    "  :help                  show help\n"
    "  :clear                 clear the current expression\n"
    "  :del                   delete the last character\n"
    "  :history               show recent results\n"
    "  :clearhistory          forget all history\n"
    "  :exit                  exit\n"
)


_LINE_SYMBOLS = frozenset(KEY_MAP) | {'×', '÷', '='}


def error_message(kind: ErrorKind, config: CalculatorConfig) -> str:
    if kind == ErrorKind.DIGIT_LIMIT_EXCEEDED:
        return f"Error: {describe(kind)} ({config.max_digits} digits)"
    return f"Error: {describe(kind)}"


class REPL:
    """Read-Eval-Print Loop driving a ``CalculatorState``."""

    def __init__(self, config: Optional[CalculatorConfig] = None):
        self.config = config or CalculatorConfig()
        self.state = CalculatorState()

    def _process_command(self, line: str) -> Optional[str]:
        """Run a ':' command and return its output, or None if the line is not a command.

        Raises EOFError for :exit / :quit.
        """
        s = line.strip()
        if not s.startswith(':'):
            return None
        cmd = s[1:].strip().lower()
        if cmd in {'exit', 'quit'}:
            raise EOFError()
        if cmd == 'help':
            return HELP_TEXT
        if cmd == 'clear':
            self.state = clear(self.state)
            return "(cleared)"
        if cmd == 'del':
            self.state = delete(self.state)
            return self._render()[1]
        if cmd == 'history':
            if not self.state.history:
                return "(no history)"
            return "\n".join(f"{h.expression} = {h.result}" for h in self.state.history)
        if cmd == 'clearhistory':
            self.state = clear_history(self.state)
            return "(history cleared)"
        return f"Unknown command: {cmd}"

    def _render(self) -> Tuple[bool, str]:
        if self.state.error is not None:
            return False, error_message(self.state.error, self.config)
        if self.state.result is not None:
            return True, str(self.state.result)
        return True, format_expression(self.state.expression)

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Feed a line (command or keypad input). Returns (ok, output)."""
        cmd_out = self._process_command(line)
        if cmd_out is not None:
            return True, cmd_out

        unknown = [ch for ch in line if not (ch.isspace() or ch in _LINE_SYMBOLS)]
        if unknown:
            return False, f"Error: {describe(ErrorKind.INVALID_CHARACTER)} {unknown[0]!r}"

        for ch in line:
            if ch.isspace():
                continue
            if ch == '=':
                self.state = equals(self.state, self.config)
            elif ch in KEY_MAP:
                self.state = press(self.state, KEY_MAP[ch])
            else:
                self.state = press(self.state, ch)
        return self._render()

    def repl_loop(self) -> None:
        print("Integer calculator. Type :help for help. Ctrl-D or :exit to quit.")
        while True:
            try:
                line = input('> ')
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print("Exiting.")
                break
            if not line.strip():
                continue
            try:
                _, out = self.evaluate_line(line)
            except EOFError:
                print("Exiting.")
                break
            print(out)


# ---------------------------
# Entry point
# ---------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calc-engine", description="Integer expression calculator.")
    parser.add_argument("--expr", help="Evaluate a single expression and exit")
    parser.add_argument("--max-digits", type=int, help="Maximum digits in a result (default: 10)")
    parser.add_argument("--history-count", type=int, help="History entries to keep (default: 5)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    overrides = {
        k: v for k, v in (("max_digits", args.max_digits), ("history_count", args.history_count))
        if v is not None
    }
    try:
        config = CalculatorConfig(**{**load_config().model_dump(), **overrides})
    except PydanticValidationError as e:
        parser.error(str(e))

    if args.expr is not None:
        outcome = calculate(args.expr, config)
        if outcome.ok:
            print(outcome.value)
            return 0
        print(error_message(outcome.error, config))
        return 1

    REPL(config).repl_loop()
    return 0


if __name__ == '__main__':
    sys.exit(main())
