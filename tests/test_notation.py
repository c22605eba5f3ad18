# tests/test_notation.py
"""
Asymptotic notation: rendering, parsing (Lark grammar) and JSON serialization.
"""

from fractions import Fraction

import pytest

from growth_engine.domain import (
    add, big_o, big_theta, constant, exponential, factorial, format_number, linear,
    logarithmic, multiply, parse_growth, polynomial, quadratic, to_json, to_notation,
)
from growth_engine.errors import MalformedInput


# ============================================================================
# RENDERING
# ============================================================================

RENDER_CASES = [
    (constant(), "1"),
    (linear(), "n"),
    (quadratic(), "n²"),
    (polynomial("n", 3), "n³"),
    (polynomial("n", 4), "n^4"),
    (polynomial("n", Fraction(1, 2)), "n^(1/2)"),
    (logarithmic(), "log n"),
    (logarithmic("n", 2), "log² n"),
    (logarithmic("n", 5), "(log n)^5"),
    (multiply(linear(), logarithmic()), "n log n"),
    (exponential("n", 2), "2^n"),
    (exponential("n", Fraction(3, 2)), "(3/2)^n"),
    (factorial(), "n!"),
    (factorial("n", 2), "(n!)^2"),
    (multiply(linear("n"), linear("m")), "n·m"),
    (add(linear("n"), multiply(linear("k"), logarithmic("k"))), "n + k log k"),
]


@pytest.mark.parametrize("expression, expected", RENDER_CASES)
def test_to_notation(expression, expected):
    assert to_notation(expression) == expected


def test_big_o_simplifies_before_rendering():
    assert big_o(add(linear(), quadratic())) == "O(n²)"
    assert big_theta(add(linear(), quadratic())) == "Θ(n²)"
    assert big_o(constant()) == "O(1)"


def test_format_number():
    assert format_number(Fraction(3)) == "3"
    assert format_number(Fraction(1, 2)) == "(1/2)"
    assert format_number(1.5849625007211563) == "1.58"
    assert format_number(2) == "2"


# ============================================================================
# PARSING
# ============================================================================

PARSE_CASES = [
    ("n", "n"),
    ("1", "1"),
    ("3n^2", "n²"),
    ("n log n", "n log n"),
    ("n*log n", "n log n"),
    ("O(n·m)", "n·m"),
    ("Θ(n²)", "n²"),
    ("3n^2 + k log k", "n² + k log k"),
    ("2^n", "2^n"),
    ("n!", "n!"),
    ("log^2 n", "log² n"),
    ("log² n", "log² n"),
    ("(log n)^3", "log³ n"),
    ("(n!)^2", "(n!)^2"),
    ("n^(1/2)", "n^(1/2)"),
    ("(3/2)^n", "(3/2)^n"),
    ("n^2·2^n", "n²·2^n"),
    ("log n^2", "log n"),
    ("log(n^2)", "log n"),
    ("n log(n)", "n log n"),
    ("log² n³", "log² n"),
]


@pytest.mark.parametrize("text, expected", PARSE_CASES)
def test_parse_growth(text, expected):
    assert to_notation(parse_growth(text)) == expected


def test_rendered_notation_parses_back():
    for text in ["n log n", "n·m", "n + k log k", "log² n", "(n!)^2", "n^(1/2)", "(3/2)^n"]:
        expr = parse_growth(text)
        assert parse_growth(to_notation(expr)) == expr


@pytest.mark.parametrize("text", ["", "   ", "n +", "O(n", "n^", "1^n", "n ^ -1", "n^(1/0)", "log n^0", "log(n"])
def test_invalid_notation_is_malformed(text):
    with pytest.raises(MalformedInput):
        parse_growth(text)


# ============================================================================
# JSON
# ============================================================================

def test_to_json():
    data = to_json(parse_growth("n log n + k"))
    assert data == {
        "summands": [
            {
                "notation": "n log n",
                "terms": [
                    {"kind": "polynomial", "variable": "n", "degree": 1},
                    {"kind": "logarithmic", "variable": "n", "degree": 1},
                ],
            },
            {
                "notation": "k",
                "terms": [{"kind": "polynomial", "variable": "k", "degree": 1}],
            },
        ]
    }


def test_to_json_constant_has_no_terms():
    assert to_json(constant()) == {"summands": [{"notation": "1", "terms": []}]}
