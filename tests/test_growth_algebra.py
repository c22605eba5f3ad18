# tests/test_growth_algebra.py
"""
Growth algebra: constructors, add, multiply, raise_to_power, compose.
"""

import math
from fractions import Fraction

import pytest

from growth_engine.domain import (
    GrowthExpression, GrowthKind, GrowthTerm,
    add, as_number, compose, constant, cubic, exponential, factorial, linear,
    log_ratio, logarithmic, multiply, polynomial, quadratic, raise_to_power, real_power,
    rename, to_notation,
)
from growth_engine.errors import MalformedInput, UnsupportedStructure

from conftest import g


# ============================================================================
# MULTIPLY
# ============================================================================

MULTIPLY_CASES = [
    (quadratic(), g("n log n"), "n³ log n"),
    (linear("n"), linear("m"), "n·m"),
    (constant(), linear(), "n"),
    (exponential("n", 2), exponential("n", 3), "6^n"),
    (logarithmic(), logarithmic(), "log² n"),
    (factorial(), linear(), "n·n!"),
]


@pytest.mark.parametrize("left, right, expected", MULTIPLY_CASES)
def test_multiply_combines_factors_per_variable(left, right, expected):
    assert to_notation(multiply(left, right)) == expected


def test_multiply_is_commutative():
    pairs = [(linear("n"), linear("m")), (g("n log n"), g("2^k")), (g("n + m"), g("k"))]
    for a, b in pairs:
        assert multiply(a, b) == multiply(b, a)


def test_multiply_is_associative():
    a, b, c = g("n + m"), g("log n"), g("k^2")
    assert multiply(multiply(a, b), c) == multiply(a, multiply(b, c))


def test_multiply_distributes_over_sums():
    result = multiply(g("n + m"), linear("k"))
    assert len(result.summands) == 2
    assert to_notation(result) == "n·k + k·m"


# ============================================================================
# ADD
# ============================================================================

def test_add_is_union_of_summands():
    assert add(linear(), linear()) == linear()
    assert len(add(linear(), quadratic()).summands) == 2


def test_add_is_commutative():
    assert add(g("n"), g("k log k")) == add(g("k log k"), g("n"))


def test_empty_expression_is_constant():
    assert GrowthExpression() == constant()
    assert constant().is_constant
    assert to_notation(constant()) == "1"


# ============================================================================
# NUMBERS
# ============================================================================

def test_log_ratio_is_exact_for_rational_powers():
    assert log_ratio(8, 2) == Fraction(3)
    assert log_ratio(2, 4) == Fraction(1, 2)
    assert log_ratio(1, 2) == 0


def test_log_ratio_is_float_when_irrational():
    value = log_ratio(3, 2)
    assert isinstance(value, float)
    assert math.isclose(value, math.log2(3))


def test_log_ratio_rejects_base_one():
    with pytest.raises(MalformedInput):
        log_ratio(2, 1)


def test_real_power_is_exact_when_rational():
    assert real_power(4, Fraction(1, 2)) == Fraction(2)
    assert real_power(2, 3) == Fraction(8)
    assert isinstance(real_power(2, Fraction(1, 2)), float)


def test_as_number():
    assert as_number(2) == Fraction(2)
    assert as_number(0.5) == Fraction(1, 2)
    assert as_number("3/2") == Fraction(3, 2)
    with pytest.raises(MalformedInput):
        as_number(True)
    with pytest.raises(MalformedInput):
        as_number("two")


# ============================================================================
# REFERENCE TERM
# ============================================================================

def test_raise_to_power():
    assert raise_to_power(8, 2) == cubic()
    assert raise_to_power(2, 2) == linear()
    assert raise_to_power(1, 2) == constant()
    assert raise_to_power(4, 2, "m") == quadratic("m")
    assert to_notation(raise_to_power(3, 2)) == "n^1.58"


# ============================================================================
# TERMS
# ============================================================================

INVALID_TERMS = [
    (GrowthKind.EXPONENTIAL, "n", 1),
    (GrowthKind.EXPONENTIAL, "n", None),
    (GrowthKind.POLYNOMIAL, "n", -1),
    (GrowthKind.LOGARITHMIC, "n", 0),
    (GrowthKind.POLYNOMIAL, "2n", 1),
    (GrowthKind.CONSTANT, "n", 0),
    ("cubic", "n", 3),
]


@pytest.mark.parametrize("kind, variable, degree", INVALID_TERMS)
def test_invalid_terms_are_malformed(kind, variable, degree):
    with pytest.raises(MalformedInput):
        GrowthTerm(kind, variable, degree)


def test_term_defaults():
    assert GrowthTerm(GrowthKind.CONSTANT).degree == 0
    assert GrowthTerm(GrowthKind.POLYNOMIAL, "n").degree == 1
    assert GrowthExpression.of(GrowthTerm("polynomial", "n", 2)) == quadratic()


# ============================================================================
# COMPOSE / RENAME
# ============================================================================

def test_compose_substitutes_size_expression():
    assert compose(linear("m"), "m", quadratic()) == quadratic()
    assert compose(logarithmic("m"), "m", quadratic()) == logarithmic()
    assert compose(polynomial("m", Fraction(1, 2)), "m", quadratic()) == linear()


def test_compose_log_of_product_splits_per_variable():
    result = compose(logarithmic("m"), "m", g("n·k"))
    assert result == add(logarithmic("n"), logarithmic("k"))


def test_compose_exponential_needs_linear_size():
    assert compose(exponential("m", 2), "m", linear("k")) == exponential("k", 2)
    with pytest.raises(UnsupportedStructure):
        compose(exponential("m", 2), "m", quadratic())


def test_rename():
    assert rename(g("k log k"), {"k": "n"}) == g("n log n")
    assert rename(g("n·k"), {"k": "n"}) == quadratic()
