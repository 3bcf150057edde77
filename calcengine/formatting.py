"""Display helpers. Purely cosmetic; evaluation never depends on them."""

import re
from typing import Iterable

from calcengine.tokenizer import Token, TokenType

_WHITESPACE_RUN = re.compile(r"\s+")

_DISPLAY_GLYPHS = {'*': '×', '/': '÷'}


def format_expression(expression: str) -> str:
    """Map '*' and '/' to '×' and '÷', collapse whitespace runs and trim."""
    text = expression.replace('*', '×').replace('/', '÷')
    return _WHITESPACE_RUN.sub(' ', text).strip()


def stringify_tokens(tokens: Iterable[Token], display: bool = False) -> str:
    """Render tokens back to text using canonical operators (or display glyphs)."""
    parts = []
    for tok in tokens:
        if tok.type == TokenType.END:
            break
        if tok.type == TokenType.OPERATOR and display:
            parts.append(_DISPLAY_GLYPHS.get(tok.value, tok.value))
        else:
            parts.append(str(tok.value))
    return ''.join(parts)
