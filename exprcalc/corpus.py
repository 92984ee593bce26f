"""Reference corpus for ``exprcalc check``.

The built-in cases are the reference answers the evaluator is held to.
Additional corpora can be loaded from text files with one case per line:

    # comment
    2 + 2 => 4
    (2 => UnmatchedGroupError

The right-hand side is either a number or the name of an error class from
exprcalc.errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from exprcalc.errors import error_class

_SEPARATOR = "=>"


@dataclass(frozen=True)
class CorpusCase:
    """One expression and its expected value or error class name."""

    expression: str
    expected: Union[float, str]

    @property
    def expects_error(self) -> bool:
        return isinstance(self.expected, str)


def _cases(pairs: list[tuple[str, Union[float, str]]]) -> list[CorpusCase]:
    return [CorpusCase(expr, expected) for expr, expected in pairs]


BUILTIN_CASES: list[CorpusCase] = _cases([
    # simple operations
    ("2 + 2", 4.0),
    ("5 - 3", 2.0),
    ("5 * 6", 30.0),
    ("12 / 4", 3.0),
    # negatives
    ("5 - 10", -5.0),
    # decimals
    ("2.07 + 3.13", 5.20),
    ("6.39 - 4.27", 2.12),
    # exponents
    ("2^2", 4.0),
    ("8^(1/3)", 2.0),
    ("8^(2/3)", 4.0),
    ("4^.5", 2.0),
    # order of operations
    ("5 * 5 + 2", 27.0),
    ("2 + 3 * 2", 8.0),
    ("5 * 5 - 2", 23.0),
    ("2 - 3 * 2", -4.0),
    ("5 / 5 + 2", 3.0),
    ("2 + 6 / 3", 4.0),
    ("5 / 5 - 2", -1.0),
    ("2 - 6 / 3", 0.0),
    ("3 ^ 2 - 2", 7.0),
    ("4 + 2 ^ 3", 12.0),
    ("5 ^ 2 / 5", 5.0),
    ("34 - 8 ^ 2", -30.0),
    # square brackets are identical to parens
    ("[[4]]", 4.0),
    ("2 * [2 + 3]", 10.0),
    # adjacent multiplication
    ("4(3)", 12.0),
    ("4(2(3))", 24.0),
    ("5(2*5+3)", 65.0),
    # malformed input
    ("2 +", "UnexpectedTokenError"),
    ("(2", "UnmatchedGroupError"),
    ("2 $ 3", "UnexpectedCharacterError"),
    ("1.2.3", "MalformedNumberError"),
    ("2 )", "TrailingInputError"),
    ("1 / 0", "DivisionByZeroError"),
    ("(-8)^(1/3)", "DomainError"),
])


class CorpusFormatError(ValueError):
    """A corpus file line could not be understood."""

    def __init__(self, path: Path, lineno: int, reason: str) -> None:
        super().__init__(f"{path}:{lineno}: {reason}")
        self.path = path
        self.lineno = lineno


def parse_case(line: str) -> CorpusCase:
    """Parse ``EXPRESSION => EXPECTED``; raises ValueError if malformed."""
    if _SEPARATOR not in line:
        raise ValueError(f"missing {_SEPARATOR!r}")
    expression, expected_text = line.rsplit(_SEPARATOR, 1)
    expression = expression.strip()
    expected_text = expected_text.strip()
    if not expected_text:
        raise ValueError("missing expected value")

    try:
        return CorpusCase(expression, float(expected_text))
    except ValueError:
        pass
    if error_class(expected_text) is None:
        raise ValueError(f"expected value {expected_text!r} is neither a number nor an error name")
    return CorpusCase(expression, expected_text)


def load_corpus(path: Path) -> list[CorpusCase]:
    """Load cases from a corpus file."""
    cases: list[CorpusCase] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            cases.append(parse_case(line))
        except ValueError as e:
            raise CorpusFormatError(path, lineno, str(e)) from None
    return cases
