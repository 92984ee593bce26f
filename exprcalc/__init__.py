"""exprcalc — arithmetic expression evaluator.

Parses + - * / ^ with the usual precedence (^ right-associative), treats
() and [] as the same grouping, reads juxtaposition as multiplication and
evaluates to a float.

Usage:
    python -m exprcalc eval "5(2*5+3)"   # 65
    python -m exprcalc check             # Run the reference corpus

    >>> from exprcalc import run
    >>> run("8^(2/3)")
    4.0
"""

from exprcalc.evaluator import evaluate
from exprcalc.parser import parse
from exprcalc.runner import format_result, run
from exprcalc.tokenizer import iter_tokens, tokenize

__all__ = ["evaluate", "format_result", "iter_tokens", "parse", "run", "tokenize"]
