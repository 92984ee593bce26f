"""Data models for the exprcalc evaluator.

TokenKind, Token, the AST node types and CheckResult — all the typed
structures that flow through tokenizer → parser → evaluator → CLI.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class TokenKind(str, Enum):
    """Lexical token kinds."""

    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    LGROUP = "lgroup"
    RGROUP = "rgroup"
    END = "end"


# Single-character lexemes. Both bracket styles collapse to one group kind.
SYMBOLS: dict[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.STAR,
    "/": TokenKind.SLASH,
    "^": TokenKind.CARET,
    "(": TokenKind.LGROUP,
    "[": TokenKind.LGROUP,
    ")": TokenKind.RGROUP,
    "]": TokenKind.RGROUP,
}


@dataclass(frozen=True)
class Token:
    """One lexeme with its offset in the source text."""

    kind: TokenKind
    pos: int
    text: str = ""
    value: Optional[float] = None

    def describe(self) -> str:
        """Human-readable form for error messages."""
        if self.kind == TokenKind.END:
            return "end of input"
        return repr(self.text)


class BinOp(str, Enum):
    """Binary operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class UnaryMinus:
    operand: Node


@dataclass(frozen=True)
class BinaryOp:
    op: BinOp
    left: Node
    right: Node


Node = Union[Literal, UnaryMinus, BinaryOp]


@dataclass
class CheckResult:
    """Outcome of one corpus case.

    ``expected`` is either a float or the name of an error class; ``actual``
    holds the computed value or the raised error's class name.
    """

    expression: str
    expected: Union[float, str]
    actual: Union[float, str, None] = None
    message: str = ""
    passed: bool = False

    @property
    def verdict(self) -> str:
        return "pass" if self.passed else "fail"

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "expression": self.expression,
            "expected": self.expected,
            "actual": self.actual,
            "message": self.message,
            "verdict": self.verdict,
        }


@dataclass
class CheckSummary:
    """All corpus results from one ``check`` invocation."""

    source: str
    results: list[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def verdict(self) -> str:
        if self.total == 0:
            return "no-cases"
        if self.passed == self.total:
            return "pass"
        if self.passed > 0:
            return "partial"
        return "fail"

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "passed": self.passed,
            "total": self.total,
            "verdict": self.verdict,
            "results": [r.to_dict() for r in self.results],
        }

    def save(self, path: Path) -> None:
        """Write the summary as JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
