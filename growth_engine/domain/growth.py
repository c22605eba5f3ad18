"""
Growth algebra.

Symbolic vocabulary of elementary growth kinds over named size variables:

    constant < log^p v < v^d < r^v < (v!)^s

A product keeps one ``VariableFactor`` per variable, so ``n² · n log n``
collapses to ``n³ log n`` while ``n · m`` stays a product of two independent
factors. A ``GrowthExpression`` is a sum of such products. Constant
coefficients are never represented: ``3n²`` and ``n²`` are the same value.

Exponents and bases are exact ``Fraction`` values whenever they are
rational and ``float`` only for irrational results such as ``log_2 3``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from functools import reduce
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..errors import MalformedInput, UnsupportedStructure

Number = Union[Fraction, float]

ZERO = Fraction(0)
ONE = Fraction(1)


class GrowthKind(str, Enum):
    CONSTANT = "constant"
    LOGARITHMIC = "logarithmic"
    POLYNOMIAL = "polynomial"
    EXPONENTIAL = "exponential"
    FACTORIAL = "factorial"


# -------- Numbers --------

def as_number(value) -> Number:
    """Coerce user input to an exact Fraction when it has a short rational form."""
    if isinstance(value, bool):
        raise MalformedInput(f"Not a number: {value!r}")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedInput(f"Not a finite number: {value!r}")
        guess = Fraction(value).limit_denominator(1000)
        return guess if float(guess) == value else value
    if isinstance(value, str):
        try:
            return Fraction(value.strip())
        except (ValueError, ZeroDivisionError) as e:
            raise MalformedInput(f"Not a number: {value!r}") from e
    raise MalformedInput(f"Not a number: {value!r}")


def _is_power(base: Fraction, exponent: Fraction, target: Fraction) -> bool:
    """base^(p/q) == target, checked as base^p == target^q."""
    p, q = exponent.numerator, exponent.denominator
    if abs(p) > 4096 or q > 1000:
        return False
    return base ** p == target ** q


def log_ratio(a, b) -> Number:
    """
    log_b(a), exact whenever a is a rational power of b.

        log_ratio(8, 2) == Fraction(3)
        log_ratio(2, 4) == Fraction(1, 2)
        log_ratio(3, 2) ≈ 1.58496 (float)
    """
    a, b = as_number(a), as_number(b)
    if a <= 0 or b <= 0 or b == 1:
        raise MalformedInput(f"log_{b}({a}) is undefined")
    if a == 1:
        return ZERO
    approx = math.log(a) / math.log(b)
    if isinstance(a, Fraction) and isinstance(b, Fraction):
        guess = Fraction(approx).limit_denominator(64)
        if _is_power(b, guess, a):
            return guess
    return approx


def real_power(value, exponent) -> Number:
    """value^exponent, exact when the result is rational."""
    value, exponent = as_number(value), as_number(exponent)
    if isinstance(value, Fraction) and isinstance(exponent, Fraction):
        if exponent.denominator == 1:
            return value ** exponent.numerator
        approx = float(value) ** float(exponent)
        guess = Fraction(approx).limit_denominator(1000)
        if guess > 0 and _is_power(value, exponent, guess):
            return guess
        return approx
    return float(value) ** float(exponent)


def is_integral(x: Number) -> bool:
    if isinstance(x, Fraction):
        return x.denominator == 1
    return float(x).is_integer()


def _check_variable(name) -> str:
    if not isinstance(name, str) or not name.isidentifier():
        raise MalformedInput(f"Invalid size variable: {name!r}")
    return name


def variable_order(name: str) -> Tuple[int, str]:
    # n primero, resto alfabético
    if name == "n":
        return (0, name)
    return (1, name)


# -------- Terms --------

@dataclass(frozen=True)
class GrowthTerm:
    """
    Atomic growth unit ``(kind, variable, degree)``.

    Attributes:
        kind: One of the five growth kinds.
        variable: Size variable; always None for a constant term.
        degree: Rational exponent for polynomial terms, base (> 1) for
            exponential terms, power of the factor for logarithmic and
            factorial terms (default 1). Always 0 for a constant term.
    """
    kind: GrowthKind
    variable: Optional[str] = None
    degree: Optional[Number] = None

    def __post_init__(self):
        try:
            kind = GrowthKind(self.kind)
        except ValueError as e:
            raise MalformedInput(f"Unknown growth kind: {self.kind!r}") from e
        object.__setattr__(self, "kind", kind)

        if kind is GrowthKind.CONSTANT:
            if self.variable is not None or self.degree not in (None, 0):
                raise MalformedInput("A constant term has no variable and degree 0")
            object.__setattr__(self, "degree", ZERO)
            return

        _check_variable(self.variable)
        if self.degree is None:
            if kind is GrowthKind.EXPONENTIAL:
                raise MalformedInput("An exponential term needs a base")
            degree = ONE
        else:
            degree = as_number(self.degree)

        if kind is GrowthKind.EXPONENTIAL and degree <= 1:
            raise MalformedInput(f"Exponential base must be > 1, got {degree}")
        if kind is GrowthKind.POLYNOMIAL and degree < 0:
            raise MalformedInput(f"Negative polynomial degree: {degree}")
        if kind in (GrowthKind.LOGARITHMIC, GrowthKind.FACTORIAL) and degree <= 0:
            raise MalformedInput(f"The power of a {kind.value} term must be positive, got {degree}")
        object.__setattr__(self, "degree", degree)

    def as_factor(self) -> Optional["VariableFactor"]:
        if self.kind is GrowthKind.CONSTANT:
            return None
        if self.kind is GrowthKind.POLYNOMIAL:
            return VariableFactor(self.variable, poly=self.degree)
        if self.kind is GrowthKind.LOGARITHMIC:
            return VariableFactor(self.variable, log=self.degree)
        if self.kind is GrowthKind.EXPONENTIAL:
            return VariableFactor(self.variable, base=self.degree)
        return VariableFactor(self.variable, fact=self.degree)


@dataclass(frozen=True)
class VariableFactor:
    """
    Everything a product says about one variable v:

        v^poly · (log v)^log · base^v · (v!)^fact

    ``rank`` orders factors of the same variable asymptotically.
    """
    variable: str
    poly: Number = ZERO
    log: Number = ZERO
    base: Number = ONE
    fact: Number = ZERO

    @property
    def rank(self) -> Tuple[Number, Number, Number, Number]:
        return (self.fact, self.base, self.poly, self.log)

    @property
    def tier(self) -> GrowthKind:
        if self.fact:
            return GrowthKind.FACTORIAL
        if self.base != 1:
            return GrowthKind.EXPONENTIAL
        if self.poly:
            return GrowthKind.POLYNOMIAL
        if self.log:
            return GrowthKind.LOGARITHMIC
        return GrowthKind.CONSTANT

    def is_unit(self) -> bool:
        return self.poly == 0 and self.log == 0 and self.base == 1 and self.fact == 0

    def times(self, other: "VariableFactor") -> "VariableFactor":
        return VariableFactor(
            self.variable,
            poly=self.poly + other.poly,
            log=self.log + other.log,
            base=self.base * other.base,
            fact=self.fact + other.fact,
        )

    def scaled(self, power: Number) -> "VariableFactor":
        """The factor raised to ``power``."""
        return VariableFactor(
            self.variable,
            poly=self.poly * power,
            log=self.log * power,
            base=real_power(self.base, power),
            fact=self.fact * power,
        )

    def renamed(self, variable: str) -> "VariableFactor":
        return VariableFactor(variable, self.poly, self.log, self.base, self.fact)

    def terms(self) -> Tuple[GrowthTerm, ...]:
        out: List[GrowthTerm] = []
        if self.poly:
            out.append(GrowthTerm(GrowthKind.POLYNOMIAL, self.variable, self.poly))
        if self.log:
            out.append(GrowthTerm(GrowthKind.LOGARITHMIC, self.variable, self.log))
        if self.base != 1:
            out.append(GrowthTerm(GrowthKind.EXPONENTIAL, self.variable, self.base))
        if self.fact:
            out.append(GrowthTerm(GrowthKind.FACTORIAL, self.variable, self.fact))
        return tuple(out)


# -------- Products and sums --------

@dataclass(frozen=True)
class Product:
    """Product of per-variable factors; the empty product is the constant."""
    factors: Tuple[VariableFactor, ...] = ()

    def __post_init__(self):
        merged: Dict[str, VariableFactor] = {}
        for f in self.factors:
            merged[f.variable] = merged[f.variable].times(f) if f.variable in merged else f
        ordered = tuple(
            merged[name]
            for name in sorted(merged, key=variable_order)
            if not merged[name].is_unit()
        )
        object.__setattr__(self, "factors", ordered)

    @classmethod
    def from_terms(cls, terms: Iterable[GrowthTerm]) -> "Product":
        return cls(tuple(f for f in (t.as_factor() for t in terms) if f is not None))

    @property
    def variables(self) -> Tuple[str, ...]:
        return tuple(f.variable for f in self.factors)

    @property
    def is_constant(self) -> bool:
        return not self.factors

    def factor(self, variable: str) -> VariableFactor:
        for f in self.factors:
            if f.variable == variable:
                return f
        return VariableFactor(variable)

    def times(self, other: "Product") -> "Product":
        return Product(self.factors + other.factors)

    def without(self, variable: str) -> "Product":
        return Product(tuple(f for f in self.factors if f.variable != variable))

    def terms(self) -> Tuple[GrowthTerm, ...]:
        return tuple(t for f in self.factors for t in f.terms())

    def sort_key(self):
        # mayor crecimiento primero dentro de la misma variable
        return tuple(
            (variable_order(f.variable), tuple(-x for x in f.rank))
            for f in self.factors
        )


@dataclass(frozen=True)
class GrowthExpression:
    """
    Sum of products. Summands are deduplicated and kept in a deterministic
    order; dominance reduction is the comparator's job (``simplify_sum``).
    """
    summands: Tuple[Product, ...] = ()

    def __post_init__(self):
        unique = set(self.summands) or {Product()}
        object.__setattr__(self, "summands", tuple(sorted(unique, key=Product.sort_key)))

    @classmethod
    def of(cls, *terms: GrowthTerm) -> "GrowthExpression":
        return cls((Product.from_terms(terms),))

    @property
    def variables(self) -> Tuple[str, ...]:
        names = {v for p in self.summands for v in p.variables}
        return tuple(sorted(names, key=variable_order))

    @property
    def is_constant(self) -> bool:
        return all(p.is_constant for p in self.summands)

    @property
    def is_single_product(self) -> bool:
        return len(self.summands) == 1


# -------- Constructors --------

def constant() -> GrowthExpression:
    return GrowthExpression()


def polynomial(variable: str = "n", degree=1) -> GrowthExpression:
    return GrowthExpression.of(GrowthTerm(GrowthKind.POLYNOMIAL, variable, degree))


def linear(variable: str = "n") -> GrowthExpression:
    return polynomial(variable, 1)


def quadratic(variable: str = "n") -> GrowthExpression:
    return polynomial(variable, 2)


def cubic(variable: str = "n") -> GrowthExpression:
    return polynomial(variable, 3)


def logarithmic(variable: str = "n", power=1) -> GrowthExpression:
    return GrowthExpression.of(GrowthTerm(GrowthKind.LOGARITHMIC, variable, power))


def exponential(variable: str = "n", base=2) -> GrowthExpression:
    return GrowthExpression.of(GrowthTerm(GrowthKind.EXPONENTIAL, variable, base))


def factorial(variable: str = "n", power=1) -> GrowthExpression:
    return GrowthExpression.of(GrowthTerm(GrowthKind.FACTORIAL, variable, power))


# -------- Operators --------

def add(*expressions: GrowthExpression) -> GrowthExpression:
    """Union of summands; reduction is deferred to ``simplify_sum``."""
    return GrowthExpression(tuple(p for e in expressions for p in e.summands))


def _multiply_two(a: GrowthExpression, b: GrowthExpression) -> GrowthExpression:
    return GrowthExpression(tuple(p.times(q) for p in a.summands for q in b.summands))


def multiply(*expressions: GrowthExpression) -> GrowthExpression:
    """
    Distributes over sums and combines factors per variable: polynomial
    degrees and log powers add, exponential bases multiply (their effective
    exponents add), factorial powers add. Different variables never collapse.
    """
    return reduce(_multiply_two, expressions, constant())


def raise_to_power(a, b, variable: str = "n") -> GrowthExpression:
    """Reference term n^(log_b a) of a divide and conquer recurrence."""
    exponent = log_ratio(a, b)
    if exponent == 0:
        return constant()
    if exponent < 0:
        raise MalformedInput(f"log_{b}({a}) is negative")
    return polynomial(variable, exponent)


def rename(expression: GrowthExpression, mapping: Dict[str, str]) -> GrowthExpression:
    if not mapping:
        return expression
    return GrowthExpression(tuple(
        Product(tuple(f.renamed(mapping.get(f.variable, f.variable)) for f in p.factors))
        for p in expression.summands
    ))


def _linear_variable(expression: GrowthExpression) -> Optional[str]:
    if not expression.is_single_product:
        return None
    factors = expression.summands[0].factors
    if len(factors) != 1:
        return None
    f = factors[0]
    if f.poly == 1 and f.log == 0 and f.base == 1 and f.fact == 0:
        return f.variable
    return None


def _log_of(product: Product) -> List[VariableFactor]:
    """
    Summands of Θ(log product): log(Π g_v) = Σ log g_v, each term keeping
    only its fastest part (v log v for factorials, v for exponentials,
    log v for polynomials).
    """
    out: List[VariableFactor] = []
    for g in product.factors:
        if g.fact:
            out.append(VariableFactor(g.variable, poly=ONE, log=ONE))
        elif g.base != 1:
            out.append(VariableFactor(g.variable, poly=ONE))
        elif g.poly:
            out.append(VariableFactor(g.variable, log=ONE))
        else:
            raise UnsupportedStructure(f"log log {g.variable} is not an elementary growth kind")
    return out


def _compose_factor(f: VariableFactor, inner: GrowthExpression) -> GrowthExpression:
    if f.is_unit():
        return constant()

    if f.base != 1 or f.fact:
        target = _linear_variable(inner)
        if target is None:
            raise UnsupportedStructure(
                "Exponential and factorial factors compose only with a single linear size"
            )
        return GrowthExpression((Product((f.renamed(target),)),))

    # (Σ q)^d (log Σ q)^p ≍ Σ q^d (log q)^p para sumas finitas
    parts: List[Product] = []
    for q in inner.summands:
        powered = Product(tuple(g.scaled(f.poly) for g in q.factors))
        if not f.log:
            parts.append(powered)
            continue
        logs = _log_of(q)
        if not logs:
            parts.append(powered)
        for lg in logs:
            parts.append(powered.times(Product((lg.scaled(f.log),))))
    return GrowthExpression(tuple(parts))


def compose(outer: GrowthExpression, variable: str, inner: GrowthExpression) -> GrowthExpression:
    """
    Substitute the size expression ``inner`` for ``variable`` in ``outer``.

        compose(linear("m"), "m", quadratic("n"))       → n²
        compose(logarithmic("m"), "m", quadratic("n"))  → log n
        compose(logarithmic("m"), "m", n·k)             → log n + log k
    """
    summands: List[Product] = []
    for product in outer.summands:
        rest = GrowthExpression((product.without(variable),))
        composed = _compose_factor(product.factor(variable), inner)
        summands.extend(multiply(rest, composed).summands)
    return GrowthExpression(tuple(summands))
