"""Error taxonomy for exprcalc.

Every failure the core can produce is an EvaluationError subclass carrying
the character offset it refers to (None when no single position applies).
EvaluationError derives from ValueError so callers that only know about
"bad input" can catch that.
"""

from __future__ import annotations

from typing import Optional


class EvaluationError(ValueError):
    """Base class for all tokenizer, parser and evaluator failures."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} at position {self.position}"


# --- Tokenizer ---

class LexError(EvaluationError):
    pass


class MalformedNumberError(LexError):
    pass


class UnexpectedCharacterError(LexError):
    pass


# --- Parser ---

class ParseError(EvaluationError):
    pass


class UnexpectedTokenError(ParseError):
    pass


class UnmatchedGroupError(ParseError):
    pass


class TrailingInputError(ParseError):
    pass


class NestingTooDeepError(ParseError):
    pass


# --- Evaluator ---

class EvalError(EvaluationError):
    pass


class DivisionByZeroError(EvalError, ZeroDivisionError):
    pass


class DomainError(EvalError):
    pass


class NumericOverflowError(EvalError, OverflowError):
    pass


def error_class(name: str) -> Optional[type[EvaluationError]]:
    """Look up an error class by name (used by corpus files)."""
    cls = globals().get(name)
    if isinstance(cls, type) and issubclass(cls, EvaluationError):
        return cls
    return None
