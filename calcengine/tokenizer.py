"""
Tokenizer for calculator expressions.

Produces tokens: NUMBER, OPERATOR, LPAREN, RPAREN, END.
Whitespace is stripped before scanning, so token positions are offsets into the
whitespace-free text. Display glyphs are normalized: '×' -> '*', '÷' -> '/'.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from calcengine.errors import LexerError

_WHITESPACE = re.compile(r"\s+")
_DIGIT_CHUNK = 4000

# Every accepted operator glyph mapped to its canonical tag.
CANONICAL_OPERATORS: Dict[str, str] = {
    '+': '+',
    '-': '-',
    '*': '*',
    '×': '*',
    '/': '/',
    '÷': '/',
}


class TokenType:
    """Enumeration of token types."""
    NUMBER = 'NUMBER'
    OPERATOR = 'OPERATOR'
    LPAREN = 'LPAREN'
    RPAREN = 'RPAREN'
    END = 'END'


@dataclass(frozen=True)
class Token:
    """Represents a token with type, value, and position in the stripped input."""
    type: str
    value: Optional[object] = None
    pos: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.pos})"


def strip_whitespace(text: str) -> str:
    return _WHITESPACE.sub('', text)


def normalize_operators(text: str) -> str:
    """Rewrite the display glyphs '×' and '÷' to their ASCII canonical form."""
    return text.replace('×', '*').replace('÷', '/')


def digits_to_int(digits: str) -> int:
    """Parse a decimal digit run of any length.

    Converts in chunks so the interpreter's str-to-int digit limit never applies.
    """
    value = 0
    for start in range(0, len(digits), _DIGIT_CHUNK):
        chunk = digits[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def tokenize(expression: str) -> List[Token]:
    """Convert an expression into a token list terminated by a single END token.

    Consecutive digits are consumed greedily into one non-negative integer. No
    upper bound is enforced here; the digit limit belongs to the caller.

    Raises:
        LexerError: on the first character outside the expression alphabet.
    """
    text = strip_whitespace(expression)
    tokens: List[Token] = []
    pos = 0
    length = len(text)
    while pos < length:
        ch = text[pos]
        if ch.isdigit() and ch.isascii():
            start = pos
            while pos < length and text[pos].isdigit() and text[pos].isascii():
                pos += 1
            tokens.append(Token(TokenType.NUMBER, digits_to_int(text[start:pos]), start))
            continue
        if ch in CANONICAL_OPERATORS:
            tokens.append(Token(TokenType.OPERATOR, CANONICAL_OPERATORS[ch], pos))
        elif ch == '(':
            tokens.append(Token(TokenType.LPAREN, ch, pos))
        elif ch == ')':
            tokens.append(Token(TokenType.RPAREN, ch, pos))
        else:
            raise LexerError(ch, pos)
        pos += 1
    tokens.append(Token(TokenType.END, None, pos))
    return tokens
