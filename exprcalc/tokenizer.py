"""Tokenizer — turns an expression string into a stream of Tokens.

Numbers are maximal runs of digits and at most one decimal point (``.5``
and ``2.`` are both valid). Parentheses and square brackets are folded into
the same LGROUP/RGROUP kinds here, so nothing downstream can tell them apart.
"""

from __future__ import annotations

from typing import Iterator

from exprcalc.errors import MalformedNumberError, UnexpectedCharacterError
from exprcalc.models import SYMBOLS, Token, TokenKind

_NUMBER_CHARS = frozenset("0123456789.")


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield tokens left to right, ending with an END sentinel.

    Raises LexError subclasses lazily, at the point the bad input is reached.
    """
    pos = 0
    length = len(text)

    while pos < length:
        ch = text[pos]

        if ch.isspace():
            pos += 1
            continue

        if ch in _NUMBER_CHARS:
            start = pos
            while pos < length and text[pos] in _NUMBER_CHARS:
                pos += 1
            lexeme = text[start:pos]
            if lexeme.count(".") > 1:
                second = lexeme.index(".", lexeme.index(".") + 1)
                raise MalformedNumberError(
                    f"Malformed number {lexeme!r}: more than one decimal point",
                    start + second,
                )
            if lexeme == ".":
                raise MalformedNumberError("Malformed number '.': no digits", start)
            yield Token(TokenKind.NUMBER, start, lexeme, float(lexeme))
            continue

        kind = SYMBOLS.get(ch)
        if kind is None:
            raise UnexpectedCharacterError(f"Unexpected character {ch!r}", pos)
        yield Token(kind, pos, ch)
        pos += 1

    yield Token(TokenKind.END, length)


def tokenize(text: str) -> list[Token]:
    """Tokenize the whole expression eagerly."""
    return list(iter_tokens(text))
