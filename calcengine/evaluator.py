"""
Recursive-descent evaluator for integer arithmetic.

Grammar (precedence low -> high):
    expression : term (('+' | '-') term)*
    term       : factor (('*' | '/') factor)*
    factor     : NUMBER | '(' expression ')'

Values are Python ints, which are arbitrary precision: there is no overflow, and
the only size bound is the caller's digit limit. Division floors toward negative
infinity.
"""

from typing import List, Sequence, Union

from calcengine.errors import ErrorKind, EvalError, ParseError
from calcengine.tokenizer import Token, TokenType, tokenize


def floor_divide(left: int, right: int) -> int:
    """Integer division rounding toward negative infinity: (-7, 2) -> -4, (7, -2) -> -4."""
    if right == 0:
        raise EvalError(ErrorKind.DIVISION_BY_ZERO)
    return left // right


_ADDITIVE = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
}

_MULTIPLICATIVE = {
    '*': lambda a, b: a * b,
    '/': floor_divide,
}


class Parser:
    """Single forward pass over a token list; each grammar rule is one method.

    Holds only the tokens and a cursor. One token of lookahead decides every branch.
    """

    def __init__(self, tokens: Sequence[Token]):
        if not tokens or tokens[-1].type != TokenType.END:
            raise ParseError(ErrorKind.MALFORMED_EXPRESSION, "Token sequence must end with END")
        self.tokens = tokens
        self.pos = 0

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def _at_operator(self, table: dict) -> bool:
        tok = self._current()
        return tok.type == TokenType.OPERATOR and tok.value in table

    def parse(self) -> int:
        """Evaluate the whole token list; trailing tokens are an error."""
        try:
            value = self.parse_expression()
        except RecursionError:
            raise ParseError(
                ErrorKind.MALFORMED_EXPRESSION,
                "Parentheses nested too deeply",
            ) from None
        tok = self._current()
        if tok.type != TokenType.END:
            raise ParseError(
                ErrorKind.MALFORMED_EXPRESSION,
                f"Unexpected token {tok.value!r} at position {tok.pos}",
            )
        return value

    def parse_expression(self) -> int:
        """expression : term (('+' | '-') term)*"""
        result = self.parse_term()
        while self._at_operator(_ADDITIVE):
            op = self._advance().value
            right = self.parse_term()
            result = _ADDITIVE[op](result, right)
        return result

    def parse_term(self) -> int:
        """term : factor (('*' | '/') factor)*"""
        result = self.parse_factor()
        while self._at_operator(_MULTIPLICATIVE):
            op = self._advance().value
            right = self.parse_factor()
            result = _MULTIPLICATIVE[op](result, right)
        return result

    def parse_factor(self) -> int:
        """factor : NUMBER | '(' expression ')'"""
        tok = self._current()
        if tok.type == TokenType.NUMBER:
            self._advance()
            return tok.value
        if tok.type == TokenType.LPAREN:
            self._advance()
            value = self.parse_expression()
            closing = self._current()
            if closing.type != TokenType.RPAREN:
                raise ParseError(
                    ErrorKind.UNMATCHED_PARENTHESIS,
                    f"Expected ')' at position {closing.pos}",
                )
            self._advance()
            return value
        raise ParseError(
            ErrorKind.MALFORMED_EXPRESSION,
            f"Expected number or '(' at position {tok.pos}, got {tok.type}",
        )


def evaluate(source: Union[str, List[Token]]) -> int:
    """Evaluate an expression string or an already tokenized expression.

    Raises:
        LexerError: if a string contains a character outside the alphabet.
        ParseError: for empty input, grammar violations, a missing ')' or
            parentheses nested deeper than the interpreter stack allows.
        EvalError: for division by zero.
    """
    if isinstance(source, str):
        if not source.strip():
            raise ParseError(ErrorKind.EMPTY_EXPRESSION)
        source = tokenize(source)
    return Parser(source).parse()
