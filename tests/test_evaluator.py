"""Tests for the AST evaluator."""

import math

import pytest

from exprcalc.environment import Settings
from exprcalc.errors import DivisionByZeroError, DomainError, EvalError, NumericOverflowError
from exprcalc.evaluator import evaluate, power
from exprcalc.models import BinaryOp, BinOp, Literal, UnaryMinus


def n(v):
    return Literal(float(v))


# --- Node kinds ---

def test_literal():
    assert evaluate(n(2.5)) == 2.5


def test_unary_minus():
    assert evaluate(UnaryMinus(n(3))) == -3.0


@pytest.mark.parametrize("op,expected", [
    (BinOp.ADD, 8.0),
    (BinOp.SUB, 4.0),
    (BinOp.MUL, 12.0),
    (BinOp.DIV, 3.0),
    (BinOp.POW, 36.0),
])
def test_binary_ops(op, expected):
    assert evaluate(BinaryOp(op, n(6), n(2))) == expected


def test_left_before_right():
    tree = BinaryOp(BinOp.SUB, BinaryOp(BinOp.DIV, n(10), n(4)), n(1))
    assert evaluate(tree) == 1.5


def test_deep_left_chain():
    tree = n(0)
    for _ in range(10_000):
        tree = BinaryOp(BinOp.ADD, tree, n(1))
    assert evaluate(tree) == 10_000.0


# --- Division ---

def test_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        evaluate(BinaryOp(BinOp.DIV, n(1), n(0)))


def test_division_by_negative_zero():
    with pytest.raises(DivisionByZeroError):
        evaluate(BinaryOp(BinOp.DIV, n(1), UnaryMinus(n(0))))


def test_division_by_zero_is_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        evaluate(BinaryOp(BinOp.DIV, n(5), BinaryOp(BinOp.SUB, n(2), n(2))))


# --- Exponentiation ---

def test_cube_root_exact():
    assert power(8.0, 1 / 3, tolerance=1e-12) == 2.0


def test_two_thirds_snaps_to_integer():
    assert power(8.0, 2 / 3, tolerance=1e-12) == 4.0


def test_snapping_disabled():
    raw = power(8.0, 2 / 3, tolerance=0.0)
    assert raw == pytest.approx(4.0)
    assert raw == math.pow(8.0, 2 / 3)


def test_square_root():
    assert power(4.0, 0.5) == 2.0


def test_small_results_not_snapped_to_zero():
    assert power(2.0, -40.0, tolerance=1e-12) == 2.0 ** -40


def test_non_integral_results_untouched():
    assert power(2.0, 0.5, tolerance=1e-12) == math.sqrt(2.0)


def test_negative_base_integer_exponent():
    assert power(-2.0, 3.0) == -8.0


def test_negative_base_fractional_exponent():
    with pytest.raises(DomainError):
        power(-8.0, 1 / 3)


def test_zero_to_negative_power():
    with pytest.raises(DivisionByZeroError):
        power(0.0, -1.0)


def test_zero_to_zero():
    assert power(0.0, 0.0) == 1.0


def test_overflow():
    with pytest.raises(NumericOverflowError):
        evaluate(BinaryOp(BinOp.POW, n(10), n(400)))


def test_eval_errors_share_base():
    for cls in (DivisionByZeroError, DomainError, NumericOverflowError):
        assert issubclass(cls, EvalError)


def test_settings_tolerance_used():
    tree = BinaryOp(BinOp.POW, n(8), BinaryOp(BinOp.DIV, n(2), n(3)))
    assert evaluate(tree, Settings(pow_snap_tolerance=1e-12)) == 4.0
    assert evaluate(tree, Settings(pow_snap_tolerance=0.0)) != 4.0


def test_integral_exponent_not_snapped():
    assert power(1.0000000000001, 1.0, tolerance=1e-12) == 1.0000000000001
    assert power(2.0000000000001, 2.0, tolerance=1e-12) == math.pow(2.0000000000001, 2.0)
