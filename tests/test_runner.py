"""End-to-end tests for run() and format_result().

Covers arithmetic, precedence, brackets, adjacent multiplication, exponents
and malformed input — the same ground as the reference corpus, asserted
directly.
"""

import pytest

from exprcalc import run
from exprcalc.environment import Settings
from exprcalc.errors import (
    DivisionByZeroError,
    DomainError,
    EvaluationError,
    LexError,
    ParseError,
    UnexpectedCharacterError,
    UnmatchedGroupError,
)
from exprcalc.runner import format_result


# --- Basic arithmetic (5 tests) ---

@pytest.mark.parametrize("expr,expected", [
    ("2 + 2", 4.0),
    ("5 - 3", 2.0),
    ("5 * 6", 30.0),
    ("12 / 4", 3.0),
    ("5 - 10", -5.0),
])
def test_simple_operations(expr, expected):
    assert run(expr) == expected


@pytest.mark.parametrize("expr,expected", [
    ("2.07 + 3.13", 5.20),
    ("6.39 - 4.27", 2.12),
])
def test_decimals(expr, expected):
    assert run(expr) == pytest.approx(expected)


# --- Operator precedence ---

@pytest.mark.parametrize("expr,expected", [
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
])
def test_order_of_operations(expr, expected):
    assert run(expr) == expected


def test_power_right_associative():
    assert run("2^3^2") == 512.0


def test_unary_minus_below_power():
    assert run("-2^2") == -4.0


def test_negated_group_power():
    assert run("(-2)^2") == 4.0


def test_negative_exponent():
    assert run("2^-1") == 0.5


# --- Brackets and adjacent multiplication ---

def test_square_brackets():
    assert run("[[4]]") == 4.0


def test_brackets_with_operator():
    assert run("2 * [2 + 3]") == 10.0


def test_mismatched_bracket_styles():
    assert run("(2 + 3] * [1 + 1)") == 10.0


@pytest.mark.parametrize("expr,expected", [
    ("4(3)", 12.0),
    ("4(2(3))", 24.0),
    ("5(2*5+3)", 65.0),
    ("(2)(3)(4)", 24.0),
])
def test_adjacent_multiplication(expr, expected):
    assert run(expr) == expected


# --- Exponents ---

@pytest.mark.parametrize("expr,expected", [
    ("2^2", 4.0),
    ("8^(1/3)", 2.0),
    ("8^(2/3)", 4.0),
    ("4^.5", 2.0),
])
def test_fractional_exponents_exact(expr, expected):
    assert run(expr) == expected


# --- Literals round-trip ---

@pytest.mark.parametrize("literal", ["0", "7", "3.14159", ".25", "1234567.891", "0.1"])
def test_literal_round_trip(literal):
    assert run(literal) == float(literal)


# --- Malformed input ---

@pytest.mark.parametrize("expr,error", [
    ("2 +", ParseError),
    ("(2", UnmatchedGroupError),
    ("2 $ 3", UnexpectedCharacterError),
    ("1..2", LexError),
    ("1 / 0", DivisionByZeroError),
    ("(-8)^(1/3)", DomainError),
])
def test_malformed_input(expr, error):
    with pytest.raises(error):
        run(expr)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        run("2 + + ")
    assert issubclass(EvaluationError, ValueError)


def test_depth_from_settings():
    with pytest.raises(ParseError):
        run("((1))", Settings(max_depth=1))


# --- Output formatting ---

@pytest.mark.parametrize("value,text", [
    (4.0, "4"),
    (-30.0, "-30"),
    (0.5, "0.5"),
    (2.1199999999999997, "2.1199999999999997"),
    (1e20, "1e+20"),
])
def test_format_result(value, text):
    assert format_result(value) == text


@pytest.mark.parametrize("value", [0.1 + 0.2, 1 / 3, -2.5e-7, 6.02214076e23, 4.0])
def test_format_result_round_trips(value):
    assert float(format_result(value)) == value


def test_format_result_digits():
    assert format_result(1 / 3, digits=4) == "0.3333"
    assert format_result(65.0, digits=3) == "65"


@pytest.mark.parametrize("expr", ["1.0000000000001^1", "2.0000000000001^2", "3.0000000000001^3"])
def test_integral_exponents_keep_ieee_result(expr):
    base, exponent = expr.split("^")
    assert run(expr) == float(base) ** float(exponent)
