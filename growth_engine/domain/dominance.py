"""
Dominance comparator.

Decides the asymptotic ordering of two growth expressions and reduces sums
to their dominant summands. Size variables are independent unless related
through ``VariableRelations``; products over independent variables that pull
in opposite directions are INCOMPARABLE and both stay in a sum.
"""

from __future__ import annotations

import itertools
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..errors import MalformedInput
from .growth import GrowthExpression, Number, Product, VariableFactor, rename


class Ordering(str, Enum):
    """How ``f`` grows with respect to ``g`` in ``compare(f, g)``."""
    STRICTLY_SLOWER = "strictly_slower"
    EQUAL = "equal"
    STRICTLY_FASTER = "strictly_faster"
    INCOMPARABLE = "incomparable"


_RELATION_RE = re.compile(r"^\s*([A-Za-z_]\w*)\s*(<=|≤|==|=)\s*([A-Za-z_]\w*)\s*$")


@dataclass(frozen=True)
class VariableRelations:
    """
    Declared relations between size variables.

    Attributes:
        equal: Pairs ``(k, n)`` meaning ``k = n``; ``k`` is replaced by ``n``.
        at_most: Pairs ``(k, n)`` meaning ``k <= n``.
    """
    equal: Tuple[Tuple[str, str], ...] = ()
    at_most: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, statements: Iterable[str]) -> "VariableRelations":
        """Build relations from strings like ``"k <= n"``, ``"k ≤ n"`` or ``"k = n"``."""
        equal: List[Tuple[str, str]] = []
        at_most: List[Tuple[str, str]] = []
        for text in statements:
            match = _RELATION_RE.match(text)
            if not match:
                raise MalformedInput(f"Invalid variable relation: {text!r}")
            left, op, right = match.groups()
            if op in ("=", "=="):
                equal.append((left, right))
            else:
                at_most.append((left, right))
        return cls(tuple(equal), tuple(at_most))

    @property
    def is_empty(self) -> bool:
        return not self.equal and not self.at_most

    def aliases(self) -> Dict[str, str]:
        parent: Dict[str, str] = {}

        def find(x: str) -> str:
            while parent.get(x, x) != x:
                x = parent[x]
            return x

        for left, right in self.equal:
            a, b = find(left), find(right)
            if a != b:
                parent[a] = b
        return {name: find(name) for name in parent}

    def canonical(self, expression: GrowthExpression) -> GrowthExpression:
        """Apply equalities: every variable is replaced by its representative."""
        return rename(expression, self.aliases())

    def bounds(self) -> Dict[str, Tuple[str, ...]]:
        """Transitive closure of the ``<=`` relation, after aliasing."""
        alias = self.aliases()
        direct: Dict[str, set] = {}
        for small, big in self.at_most:
            small, big = alias.get(small, small), alias.get(big, big)
            if small != big:
                direct.setdefault(small, set()).add(big)

        closed: Dict[str, Tuple[str, ...]] = {}
        for start in direct:
            seen: set = set()
            stack = list(direct[start])
            while stack:
                v = stack.pop()
                if v in seen or v == start:
                    continue
                seen.add(v)
                stack.extend(direct.get(v, ()))
            closed[start] = tuple(sorted(seen))
        return closed


NO_RELATIONS = VariableRelations()


# -------- Products --------

def _pointwise_le(p: Product, q: Product) -> bool:
    for v in set(p.variables) | set(q.variables):
        if p.factor(v).rank > q.factor(v).rank:
            return False
    return True


def _upper_candidates(p: Product, bounds: Dict[str, Tuple[str, ...]]) -> Iterator[Product]:
    """``p`` with bounded variables optionally replaced by their upper bounds."""
    choices = [
        ((f,) + tuple(f.renamed(big) for big in bounds.get(f.variable, ())))
        for f in p.factors
    ]
    for combo in itertools.product(*choices):
        yield Product(tuple(combo))


def _product_le(p: Product, q: Product, bounds: Dict[str, Tuple[str, ...]]) -> bool:
    """p = O(q)."""
    if not bounds:
        return _pointwise_le(p, q)
    return any(_pointwise_le(u, q) for u in _upper_candidates(p, bounds))


def _expression_le(f: GrowthExpression, g: GrowthExpression, bounds) -> bool:
    return all(any(_product_le(p, q, bounds) for q in g.summands) for p in f.summands)


# -------- Public API --------

def compare(
        f: GrowthExpression,
        g: GrowthExpression,
        relations: Optional[VariableRelations] = None,
) -> Ordering:
    """
    Asymptotic ordering of ``f`` with respect to ``g``.

    Per variable: constant < logarithmic < polynomial < exponential <
    factorial, and degree/base decide within a kind. A sum is O of another
    when each of its summands is O of some summand of the other.
    """
    relations = relations or NO_RELATIONS
    f, g = relations.canonical(f), relations.canonical(g)
    bounds = relations.bounds()
    f_le_g = _expression_le(f, g, bounds)
    g_le_f = _expression_le(g, f, bounds)
    if f_le_g and g_le_f:
        return Ordering.EQUAL
    if f_le_g:
        return Ordering.STRICTLY_SLOWER
    if g_le_f:
        return Ordering.STRICTLY_FASTER
    return Ordering.INCOMPARABLE


def equals(a: GrowthExpression, b: GrowthExpression, relations: Optional[VariableRelations] = None) -> bool:
    """Mutual non-strict dominance, e.g. 3n² equals n²."""
    return compare(a, b, relations) is Ordering.EQUAL


def simplify_sum(
        expression: GrowthExpression,
        relations: Optional[VariableRelations] = None,
) -> GrowthExpression:
    """
    Drop every summand strictly dominated by another summand; of several
    EQUAL summands only the first in canonical order survives. Pairwise
    incomparable summands are all kept:

        n + n²       → n²
        n + k log k  → n + k log k
    """
    relations = relations or NO_RELATIONS
    expression = relations.canonical(expression)
    bounds = relations.bounds()
    summands = expression.summands
    kept: List[Product] = []
    for i, p in enumerate(summands):
        dominated = False
        for j, q in enumerate(summands):
            if i == j or not _product_le(p, q, bounds):
                continue
            if not _product_le(q, p, bounds) or j < i:
                dominated = True
                break
        if not dominated:
            kept.append(p)
    return GrowthExpression(tuple(kept))


def dominant_terms(expression: GrowthExpression, relations: Optional[VariableRelations] = None) -> Tuple[Product, ...]:
    return simplify_sum(expression, relations).summands


def polynomial_gap(f: GrowthExpression, g: GrowthExpression, variable: str) -> Number:
    """
    Polynomial separation of single-product ``f`` and ``g`` in ``variable``.

    Returns ε > 0 when f = O(g / variable^ε), ε < 0 when f is faster by a
    polynomial factor, 0 when their polynomial degrees coincide (they may
    still differ by logarithms) and ±inf when an exponential or factorial
    factor separates them.
    """
    if not (f.is_single_product and g.is_single_product):
        raise MalformedInput("polynomial_gap needs single-product expressions")
    ff: VariableFactor = f.summands[0].factor(variable)
    gf: VariableFactor = g.summands[0].factor(variable)
    f_top, g_top = (ff.fact, ff.base), (gf.fact, gf.base)
    if f_top != g_top:
        return -math.inf if f_top > g_top else math.inf
    return gf.poly - ff.poly
