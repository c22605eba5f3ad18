"""
Asymptotic notation for growth expressions.

Rendering:
    to_notation(expr)  -> "n log n", "n·m", "n + k log k", "n^1.58"
    big_o(expr)        -> "O(n log n)"

Parsing (Lark, LALR):
    parse_growth("3n^2 + k log k")  -> n² + k log k
    parse_growth("O(n·m)")          -> n·m

Constant coefficients are accepted by the parser and dropped.
"""

from __future__ import annotations

from fractions import Fraction
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from lark import Lark, Transformer, v_args
from lark.exceptions import LarkError, VisitError

from ..config import settings
from ..errors import ClassificationError, MalformedInput
from .dominance import VariableRelations, simplify_sum
from .growth import (
    GrowthExpression, Number, Product, VariableFactor, ONE,
    add, constant, exponential, factorial, is_integral, logarithmic, multiply, polynomial,
)


# -------- Rendering --------

_SUPERSCRIPTS = {2: "²", 3: "³"}


def format_number(x: Number) -> str:
    if is_integral(x):
        return str(int(x))
    if isinstance(x, Fraction):
        return f"({x.numerator}/{x.denominator})"
    return f"{x:.{settings.FLOAT_PRECISION}g}"


def _render_factor(f: VariableFactor) -> str:
    v = f.variable
    head: List[str] = []
    tail: List[str] = []

    if f.poly:
        if f.poly == 1:
            head.append(v)
        elif is_integral(f.poly) and int(f.poly) in _SUPERSCRIPTS:
            head.append(f"{v}{_SUPERSCRIPTS[int(f.poly)]}")
        else:
            head.append(f"{v}^{format_number(f.poly)}")

    if f.log:
        if f.log == 1:
            head.append(f"log {v}")
        elif is_integral(f.log) and int(f.log) in _SUPERSCRIPTS:
            head.append(f"log{_SUPERSCRIPTS[int(f.log)]} {v}")
        else:
            head.append(f"(log {v})^{format_number(f.log)}")

    if f.base != 1:
        tail.append(f"{format_number(f.base)}^{v}")

    if f.fact:
        tail.append(f"{v}!" if f.fact == 1 else f"({v}!)^{format_number(f.fact)}")

    parts = ([" ".join(head)] if head else []) + tail
    return "·".join(parts)


def render_product(p: Product) -> str:
    if p.is_constant:
        return "1"
    return "·".join(_render_factor(f) for f in p.factors)


def to_notation(expression: GrowthExpression) -> str:
    """Body of the asymptotic notation, summands in canonical order."""
    return " + ".join(render_product(p) for p in expression.summands)


def big_o(expression: GrowthExpression, relations: Optional[VariableRelations] = None) -> str:
    return f"O({to_notation(simplify_sum(expression, relations))})"


def big_theta(expression: GrowthExpression, relations: Optional[VariableRelations] = None) -> str:
    return f"Θ({to_notation(simplify_sum(expression, relations))})"


def _json_number(x: Number):
    return int(x) if is_integral(x) else float(x)


def to_json(expression: GrowthExpression) -> Dict[str, Any]:
    return {
        "summands": [
            {
                "notation": render_product(p),
                "terms": [
                    {"kind": t.kind.value, "variable": t.variable, "degree": _json_number(t.degree)}
                    for t in p.terms()
                ],
            }
            for p in expression.summands
        ]
    }


# -------- Parsing --------

class GrammarLoader:
    """Loads the growth notation grammar from the package."""

    _grammar_path = Path(__file__).parents[1] / "grammar" / "growth.lark"

    @classmethod
    @lru_cache(maxsize=1)
    def load(cls) -> str:
        if not cls._grammar_path.exists():
            raise FileNotFoundError(f"Grammar file not found: {cls._grammar_path}")
        with open(cls._grammar_path, "r", encoding="utf-8") as f:
            return f.read()


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    return Lark(GrammarLoader.load(), start="start", parser="lalr", lexer="contextual")


def _fraction(numerator, denominator) -> Fraction:
    try:
        return Fraction(str(numerator)) / Fraction(str(denominator))
    except ZeroDivisionError as e:
        raise MalformedInput(f"Division by zero in {numerator}/{denominator}") from e


@v_args(inline=True)
class GrowthBuilder(Transformer):
    """Parse tree → GrowthExpression."""

    def sum(self, *products):
        return add(*products)

    def product(self, *factors):
        return multiply(*factors)

    def coefficient(self, _number):
        return constant()

    def power(self, var, exponent=ONE):
        return polynomial(str(var), exponent)

    def logarithm(self, *items):
        if len(items) == 2:
            exponent, var = items
            return logarithmic(str(var), exponent)
        return logarithmic(str(items[0]))

    def log_argument(self, var, exponent=ONE):
        # log(v^k) = k·log v
        if exponent <= 0:
            raise MalformedInput(f"Logarithm of {var}^{exponent} does not grow")
        return str(var)

    def logarithm_grouped(self, var, exponent):
        return logarithmic(str(var), exponent)

    def factorial(self, var):
        return factorial(str(var))

    def factorial_grouped(self, var, exponent):
        return factorial(str(var), exponent)

    def exponential(self, number, var):
        return exponential(str(var), Fraction(str(number)))

    def exponential_fraction(self, numerator, denominator, var):
        return exponential(str(var), _fraction(numerator, denominator))

    def number_exponent(self, number):
        return Fraction(str(number))

    def fraction_exponent(self, numerator, denominator):
        return _fraction(numerator, denominator)

    def superscript_exponent(self, token):
        return Fraction({"²": 2, "³": 3}[str(token)])


def parse_growth(text: str) -> GrowthExpression:
    """
    Parse asymptotic notation into a growth expression.

    Raises:
        MalformedInput: If the text is not valid notation or describes an
            invalid term (e.g. ``1^n``).
    """
    if not isinstance(text, str) or not text.strip():
        raise MalformedInput("Empty growth notation")
    try:
        tree = get_parser().parse(text)
    except LarkError as e:
        raise MalformedInput(f"Invalid growth notation {text!r}: {e}") from e
    try:
        return GrowthBuilder().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ClassificationError):
            raise e.orig_exc from None
        raise
