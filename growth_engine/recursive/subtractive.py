"""
Decrease & conquer recurrences T(n) = Σ T(n - k_i) + f(n).

The call tree has Θ(ρ^n) nodes, where ρ is the largest real root of

    Σ x^(-k_i) = 1

(ρ = 1 for a single call, ρ = a^(1/k) for a calls with the same decrement k,
the golden ratio for T(n-1) + T(n-2)). The total is the heavier of the leaf
count and the work summed along the deepest chain.
"""

import logging
import math
from fractions import Fraction
from typing import Tuple

from ..domain import (
    GrowthExpression, Number, Product,
    exponential, format_number, linear, multiply, real_power, render_product,
)
from ..errors import UnsolvableRecurrence

logger = logging.getLogger(__name__)

_BISECTION_STEPS = 200


def characteristic_root(decrements: Tuple[int, ...]) -> Number:
    """
    Growth rate ρ of the call tree.

    Args:
        decrements: Positive integer decrements, one per recursive call.

    Returns:
        Exact Fraction when ρ is rational, float otherwise.
    """
    if len(set(decrements)) == 1:
        return real_power(len(decrements), Fraction(1, decrements[0]))

    def excess(x: float) -> float:
        return sum(x ** -k for k in decrements) - 1

    # excess(1) = a - 1 > 0 y excess(a + 1) < 0
    lo, hi = 1.0, float(len(decrements)) + 1.0
    for _ in range(_BISECTION_STEPS):
        mid = (lo + hi) / 2
        if excess(mid) > 0:
            lo = mid
        else:
            hi = mid
    root = (lo + hi) / 2

    guess = Fraction(root).limit_denominator(1000)
    if sum(guess ** -k for k in decrements) == 1:
        return guess
    return root


def leaf_count(decrements: Tuple[int, ...], variable: str) -> GrowthExpression:
    """Θ(ρ^n) leaves; a single chain has O(1) leaves."""
    rho = characteristic_root(decrements)
    if rho == 1:
        return GrowthExpression()
    return exponential(variable, rho)


def solve_subtractive_term(
        decrements: Tuple[int, ...],
        work: Product,
        variable: str,
) -> Tuple[GrowthExpression, str, str]:
    """
    Closed form for one summand of the work, ``work`` being a product over
    ``variable`` only.

    Returns:
        (expression, method, explanation)
    """
    f = work.factor(variable)
    rho = characteristic_root(decrements)
    own = GrowthExpression((work,))
    size = linear(variable)
    shown = render_product(work)

    if rho == 1:
        if f.fact or f.base != 1:
            return own, "subtractive_chain_root", (
                f"Single call chain: f({variable}) = {shown} shrinks geometrically "
                f"down the chain, the first call dominates"
            )
        return multiply(own, size), "subtractive_chain_sum", (
            f"Single call chain of length {variable}/{format_number(decrements[0])}: "
            f"Σ f({variable} - i·k) = Θ({variable}·{shown})"
        )

    calls = exponential(variable, rho)
    rate = format_number(rho)

    if f.fact:
        return own, "subtractive_root", (
            f"Factorial work {shown} outgrows the Θ({rate}^{variable}) calls, the root dominates"
        )

    if f.base != 1:
        if f.base == rho:
            return multiply(own, size), "subtractive_all_levels", (
                f"Work base equals the call growth rate {rate}: "
                f"every level costs Θ({shown}), over {variable} levels"
            )
        if math.isclose(float(f.base), float(rho), rel_tol=1e-9):
            raise UnsolvableRecurrence(
                f"Cannot separate the work base {format_number(f.base)} "
                f"from the call growth rate {rate}"
            )
        if f.base > rho:
            return own, "subtractive_root", (
                f"Work base {format_number(f.base)} > call growth rate {rate}, the root dominates"
            )

    logger.debug("subtractive leaves: decrements=%s rate=%s", decrements, rate)
    return calls, "subtractive_leaves", (
        f"{len(decrements)} calls per level with growth rate {rate}: "
        f"Θ({rate}^{variable}) calls outgrow f({variable}) = {shown}"
    )
