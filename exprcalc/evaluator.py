"""Evaluator — reduces an AST to a float.

The walk uses an explicit stack instead of Python recursion: left-deep
trees from long chains like ``1+1+...+1`` are as deep as they are long, and
only nesting depth is bounded by the parser.
"""

from __future__ import annotations

import math
from typing import Optional

from exprcalc.environment import Settings
from exprcalc.errors import DivisionByZeroError, DomainError, NumericOverflowError
from exprcalc.models import BinaryOp, BinOp, Literal, Node, UnaryMinus


def _snap(value: float, tolerance: float) -> float:
    """Round ``value`` to the nearest integer if within ``tolerance`` (relative).

    ``8 ** (2/3)`` comes out as 3.9999999999999996; this makes it 4.0.
    Zero is never a snap target, so tiny results like ``2^-40`` survive.
    """
    if tolerance <= 0.0 or not math.isfinite(value):
        return value
    nearest = round(value)
    if nearest == 0 or nearest == value:
        return value
    if abs(value - nearest) <= tolerance * abs(value):
        return float(nearest)
    return value


def power(base: float, exponent: float, tolerance: float = 0.0) -> float:
    """Real-valued exponentiation with typed failures."""
    if base == 0.0 and exponent < 0.0:
        raise DivisionByZeroError(f"Zero raised to negative power {exponent!r}")
    if base < 0.0 and not float(exponent).is_integer():
        raise DomainError(
            f"Negative base {base!r} with non-integer exponent {exponent!r} has no real value"
        )
    try:
        result = math.pow(base, exponent)
    except OverflowError:
        raise NumericOverflowError(f"{base!r} ^ {exponent!r} is too large") from None
    # Integral exponents are already correctly rounded by math.pow.
    if float(exponent).is_integer():
        return result
    return _snap(result, tolerance)


def divide(left: float, right: float) -> float:
    if right == 0.0:
        raise DivisionByZeroError(f"Division of {left!r} by zero")
    return left / right


def _apply(op: BinOp, left: float, right: float, tolerance: float) -> float:
    if op == BinOp.ADD:
        return left + right
    if op == BinOp.SUB:
        return left - right
    if op == BinOp.MUL:
        return left * right
    if op == BinOp.DIV:
        return divide(left, right)
    if op == BinOp.POW:
        return power(left, right, tolerance)
    raise TypeError(f"Unknown operator: {op!r}")


def evaluate(node: Node, settings: Optional[Settings] = None) -> float:
    """Evaluate an AST.

    Args:
        node: Root of the tree produced by ``parse``.
        settings: Supplies the ^ snap tolerance. Defaults to ``Settings()``.

    Returns:
        The value as a float.

    Raises:
        EvalError: DivisionByZeroError, DomainError or NumericOverflowError.
    """
    tolerance = (settings or Settings()).pow_snap_tolerance

    # Post-order walk: a node is pushed once to expand its children and once
    # more (expanded=True) to combine their values.
    pending: list[tuple[Node, bool]] = [(node, False)]
    values: list[float] = []

    while pending:
        current, expanded = pending.pop()

        if isinstance(current, Literal):
            values.append(float(current.value))
        elif isinstance(current, UnaryMinus):
            if expanded:
                values.append(-values.pop())
            else:
                pending.append((current, True))
                pending.append((current.operand, False))
        elif isinstance(current, BinaryOp):
            if expanded:
                right = values.pop()
                left = values.pop()
                values.append(_apply(current.op, left, right, tolerance))
            else:
                pending.append((current, True))
                pending.append((current.right, False))
                pending.append((current.left, False))
        else:
            raise TypeError(f"Not an expression node: {current!r}")

    return values.pop()
