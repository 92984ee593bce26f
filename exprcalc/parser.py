"""Precedence-climbing parser — Token stream → AST.

Grammar, lowest to highest precedence:

    expr   := term (('+' | '-') term)*
    term   := unary (('*' | '/')? unary)*      juxtaposition is implicit '*'
    unary  := '-' unary | power
    power  := atom ('^' unary)?                right-associative
    atom   := NUMBER | LGROUP expr RGROUP

``^`` binds tighter than a leading unary minus (``-2^2 == -4``) while its
exponent may carry one (``2^-1 == 0.5``). A group may be closed by either
bracket style.

The parser reads one token of lookahead from any iterable, so it works
directly on the lazy ``iter_tokens`` generator.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from exprcalc.environment import DEFAULT_MAX_DEPTH, Settings
from exprcalc.errors import (
    NestingTooDeepError,
    TrailingInputError,
    UnexpectedTokenError,
    UnmatchedGroupError,
)
from exprcalc.models import BinaryOp, BinOp, Literal, Node, Token, TokenKind, UnaryMinus

_ADDITIVE = {TokenKind.PLUS: BinOp.ADD, TokenKind.MINUS: BinOp.SUB}
_MULTIPLICATIVE = {TokenKind.STAR: BinOp.MUL, TokenKind.SLASH: BinOp.DIV}

# Tokens that can start an operand; seeing one where an operator could go
# means implicit multiplication.
_OPERAND_START = frozenset({TokenKind.NUMBER, TokenKind.LGROUP})


class Parser:
    """Single-use recursive-descent parser over a token stream."""

    def __init__(self, tokens: Iterable[Token], max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._max_depth = max_depth
        self._depth = 0
        self._open_groups: list[Token] = []
        self._current = Token(TokenKind.END, 0)
        self._advance()

    def _advance(self) -> Token:
        """Consume the current token and load the next one."""
        consumed = self._current
        nxt = next(self._tokens, None)
        if nxt is None:
            # Stream ended without a sentinel; synthesize one.
            nxt = Token(TokenKind.END, consumed.pos + len(consumed.text))
        self._current = nxt
        return consumed

    def _descend(self, token: Token) -> None:
        self._depth += 1
        if self._depth > self._max_depth:
            raise NestingTooDeepError(
                f"Expression nested deeper than {self._max_depth} levels", token.pos,
            )

    def _ascend(self) -> None:
        self._depth -= 1

    def parse(self) -> Node:
        """Parse a complete expression; the stream must end right after it."""
        try:
            node = self._expr()
        except RecursionError:
            # max_depth set above what the interpreter stack allows
            raise NestingTooDeepError(
                "Expression nested deeper than the interpreter allows", self._current.pos,
            ) from None
        tok = self._current
        if tok.kind != TokenKind.END:
            if tok.kind == TokenKind.RGROUP:
                raise TrailingInputError(f"Unmatched closing {tok.describe()}", tok.pos)
            raise TrailingInputError(f"Unexpected {tok.describe()} after complete expression", tok.pos)
        return node

    def _expr(self) -> Node:
        left = self._term()
        while self._current.kind in _ADDITIVE:
            op = _ADDITIVE[self._advance().kind]
            right = self._term()
            left = BinaryOp(op, left, right)
        return left

    def _term(self) -> Node:
        left = self._unary()
        while True:
            kind = self._current.kind
            if kind in _MULTIPLICATIVE:
                op = _MULTIPLICATIVE[self._advance().kind]
            elif kind in _OPERAND_START:
                op = BinOp.MUL
            else:
                return left
            right = self._unary()
            left = BinaryOp(op, left, right)

    def _unary(self) -> Node:
        if self._current.kind != TokenKind.MINUS:
            return self._power()
        minus = self._advance()
        self._descend(minus)
        operand = self._unary()
        self._ascend()
        return UnaryMinus(operand)

    def _power(self) -> Node:
        base = self._atom()
        if self._current.kind != TokenKind.CARET:
            return base
        caret = self._advance()
        self._descend(caret)
        exponent = self._unary()
        self._ascend()
        return BinaryOp(BinOp.POW, base, exponent)

    def _atom(self) -> Node:
        tok = self._current

        if tok.kind == TokenKind.NUMBER:
            self._advance()
            return Literal(tok.value)

        if tok.kind == TokenKind.LGROUP:
            self._advance()
            self._descend(tok)
            self._open_groups.append(tok)
            inner = self._expr()
            closer = self._current
            if closer.kind == TokenKind.END:
                raise UnmatchedGroupError(f"Unclosed group {tok.describe()}", tok.pos)
            if closer.kind != TokenKind.RGROUP:
                raise UnexpectedTokenError(
                    f"Expected closing bracket, got {closer.describe()}", closer.pos,
                )
            self._advance()
            self._open_groups.pop()
            self._ascend()
            return inner

        if tok.kind == TokenKind.END and self._open_groups:
            opener = self._open_groups[-1]
            raise UnmatchedGroupError(f"Unclosed group {opener.describe()}", opener.pos)

        raise UnexpectedTokenError(
            f"Unexpected {tok.describe()}, expected a number or group", tok.pos,
        )


def parse(tokens: Iterable[Token], settings: Optional[Settings] = None) -> Node:
    """Parse a token stream into an AST."""
    settings = settings or Settings()
    return Parser(tokens, max_depth=settings.max_depth).parse()
