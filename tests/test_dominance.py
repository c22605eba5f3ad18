# tests/test_dominance.py
"""
Dominance comparator: ordering, relations between variables, sum simplification.
"""

import math

import pytest

from growth_engine.domain import (
    Ordering, VariableRelations,
    add, compare, constant, dominant_terms, equals, linear, polynomial_gap, quadratic,
    simplify_sum, to_notation,
)
from growth_engine.errors import MalformedInput

from conftest import g, relations


# ============================================================================
# ORDERING
# ============================================================================

# Ordered from slowest to fastest
CHAIN = ["1", "log n", "log² n", "n^(1/2)", "n", "n log n", "n²", "n^100", "2^n", "n·2^n", "3^n", "n!", "(n!)^2"]


def test_chain_is_strictly_increasing():
    exprs = [g(text) for text in CHAIN]
    for i, left in enumerate(exprs):
        for right in exprs[i + 1:]:
            assert compare(left, right) is Ordering.STRICTLY_SLOWER
            assert compare(right, left) is Ordering.STRICTLY_FASTER


@pytest.mark.parametrize("text", CHAIN + ["n·m", "n + k log k"])
def test_compare_is_reflexive(text):
    assert compare(g(text), g(text)) is Ordering.EQUAL


def test_constant_factors_are_ignored():
    assert equals(g("3n^2"), quadratic())
    assert equals(g("5"), constant())


def test_independent_variables_are_incomparable():
    assert compare(g("n·m"), quadratic()) is Ordering.INCOMPARABLE
    assert compare(g("n"), g("m")) is Ordering.INCOMPARABLE
    assert compare(g("n + k log k"), g("n log n")) is Ordering.INCOMPARABLE


def test_sum_against_its_summands():
    assert compare(g("n"), g("n + m")) is Ordering.STRICTLY_SLOWER
    assert compare(g("n + m"), g("n·m")) is Ordering.STRICTLY_SLOWER


# ============================================================================
# RELATIONS
# ============================================================================

def test_upper_bound_relation_orders_products():
    rel = relations("m <= n")
    assert compare(g("n·m"), quadratic(), rel) is Ordering.STRICTLY_SLOWER
    assert compare(g("m"), g("n"), rel) is Ordering.STRICTLY_SLOWER
    assert compare(g("n"), g("m"), rel) is Ordering.STRICTLY_FASTER


def test_upper_bounds_are_transitive():
    rel = relations("k <= m", "m ≤ n")
    assert compare(g("k"), g("n"), rel) is Ordering.STRICTLY_SLOWER


def test_equality_relation_aliases_variables():
    rel = relations("k = n")
    assert compare(g("k log k"), g("n log n"), rel) is Ordering.EQUAL
    assert compare(g("n·k"), quadratic(), rel) is Ordering.EQUAL


def test_relation_parsing():
    rel = VariableRelations.parse(["k <= n", "m == n", "j = k"])
    assert rel.at_most == (("k", "n"),)
    assert rel.equal == (("m", "n"), ("j", "k"))
    assert not rel.is_empty
    assert VariableRelations().is_empty


@pytest.mark.parametrize("text", ["k < n", "k <= ", "2 = n", "k >= n"])
def test_invalid_relations_are_malformed(text):
    with pytest.raises(MalformedInput):
        VariableRelations.parse([text])


# ============================================================================
# SIMPLIFY
# ============================================================================

SIMPLIFY_CASES = [
    ("n + n^2", "n²"),
    ("1 + log n + n", "n"),
    ("n + k log k", "n + k log k"),
    ("n log n + n + k", "n log n + k"),
    ("2^n + n^100", "2^n"),
    ("n·m + n + m", "n·m"),
]


@pytest.mark.parametrize("text, expected", SIMPLIFY_CASES)
def test_simplify_sum(text, expected):
    assert to_notation(simplify_sum(g(text))) == expected


def test_simplify_sum_is_idempotent_on_f_plus_f():
    for text in ["n + k log k", "n²", "n·m + 2^k"]:
        f = simplify_sum(g(text))
        assert simplify_sum(add(f, f)) == f


def test_simplify_sum_is_commutative():
    a, b = g("n + k log k"), g("m² + n log n")
    assert simplify_sum(add(a, b)) == simplify_sum(add(b, a))


def test_simplify_sum_with_relations():
    assert to_notation(simplify_sum(g("n + k log k"), relations("k = n"))) == "n log n"
    assert to_notation(simplify_sum(g("n² + n·m"), relations("m <= n"))) == "n²"


def test_dominant_terms():
    terms = dominant_terms(g("n + n^2 + k"))
    assert len(terms) == 2


# ============================================================================
# POLYNOMIAL GAP
# ============================================================================

def test_polynomial_gap():
    assert polynomial_gap(quadratic(), g("n^3"), "n") == 1
    assert polynomial_gap(g("n log n"), linear(), "n") == 0
    assert polynomial_gap(g("2^n"), linear(), "n") == -math.inf
    assert polynomial_gap(linear(), g("n!"), "n") == math.inf


def test_polynomial_gap_needs_single_products():
    with pytest.raises(MalformedInput):
        polynomial_gap(g("n + m"), linear(), "n")
