"""exprcalc runner — composes tokenize → parse → evaluate.

``run`` is the single entry point the CLI drives. ``check_corpus`` runs a
list of reference cases through it and collects a CheckSummary, the way a
test judge would.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from exprcalc.corpus import CorpusCase
from exprcalc.environment import Settings
from exprcalc.errors import EvaluationError, error_class
from exprcalc.evaluator import evaluate
from exprcalc.models import CheckResult, CheckSummary
from exprcalc.parser import parse
from exprcalc.tokenizer import iter_tokens

# Decimal inputs like 6.39 - 4.27 don't land exactly on their decimal answer.
CHECK_REL_TOL = 1e-9
CHECK_ABS_TOL = 1e-12


def run(text: str, settings: Optional[Settings] = None) -> float:
    """Evaluate one expression string.

    Raises:
        EvaluationError: the first lex, parse or evaluation error hit.
    """
    settings = settings or Settings()
    tree = parse(iter_tokens(text), settings)
    return evaluate(tree, settings)


def format_result(value: float, digits: Optional[int] = None) -> str:
    """Render a result for stdout.

    Without ``digits`` the shortest string that reads back as the same float,
    minus a redundant ``.0`` (``4.0`` → ``4``). With ``digits``, that many
    significant digits.
    """
    if digits is not None:
        return f"{value:.{digits}g}"
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def _check_case(case: CorpusCase, settings: Settings) -> CheckResult:
    result = CheckResult(expression=case.expression, expected=case.expected)
    try:
        value = run(case.expression, settings)
    except EvaluationError as e:
        result.actual = type(e).__name__
        result.message = str(e)
        if case.expects_error:
            expected_cls = error_class(case.expected)
            result.passed = expected_cls is not None and isinstance(e, expected_cls)
        return result

    result.actual = value
    if not case.expects_error:
        result.passed = math.isclose(
            value, case.expected, rel_tol=CHECK_REL_TOL, abs_tol=CHECK_ABS_TOL,
        )
    return result


def check_corpus(
    cases: Iterable[CorpusCase],
    source: str = "builtin",
    settings: Optional[Settings] = None,
) -> CheckSummary:
    """Run every case and collect pass/fail results."""
    settings = settings or Settings()
    summary = CheckSummary(source=source)
    for case in cases:
        summary.results.append(_check_case(case, settings))
    return summary
