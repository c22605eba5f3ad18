import logging
import math
from dataclasses import dataclass, replace
from typing import Optional

from ..domain import (
    GrowthExpression, Number, Ordering, Product, VariableFactor,
    compare, format_number, log_ratio, logarithmic, multiply, polynomial_gap,
    raise_to_power, real_power,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MasterTheoremCase:
    case: int
    expression: GrowthExpression
    explanation: str


def critical_exponent(a, b) -> Number:
    """log_b(a): exponent of the reference term n^(log_b a)."""
    return log_ratio(a, b)


def regularity_holds(a, b, work: VariableFactor) -> bool:
    """
    a·f(n/b) <= c·f(n) for some c < 1.

    For n^d (log n)^p this is a < b^d; exponential and factorial work always
    satisfies it because f(n/b) is smaller than f(n) by more than any
    constant.
    """
    if work.fact or work.base != 1:
        return True
    return a < real_power(b, work.poly)


def align_degree(work: Product, variable: str, c: Number) -> Product:
    """
    ``work`` with its polynomial degree replaced by ``c`` when the two only
    differ by float rounding, e.g. n^(math.log2(3)) against log_2 3.
    """
    f = work.factor(variable)
    if f.poly == c or not isinstance(f.poly, float) and not isinstance(c, float):
        return work
    if not math.isclose(float(f.poly), float(c), rel_tol=1e-9):
        return work
    return work.without(variable).times(Product((replace(f, poly=c),)))


def apply_master_theorem(a, b, work: Product, variable: str) -> Optional[MasterTheoremCase]:
    """
    Master Theorem for T(n) = a·T(n/b) + f(n), with ``work`` a product over
    ``variable`` only. Returns None when no case applies (no polynomial
    separation from the reference term and not equal to it).
    """
    work = align_degree(work, variable, critical_exponent(a, b))
    reference = raise_to_power(a, b, variable)
    f = GrowthExpression((work,))
    c = critical_exponent(a, b)
    ordering = compare(f, reference)
    gap = polynomial_gap(f, reference, variable)

    if ordering is Ordering.STRICTLY_SLOWER and gap > 0:
        logger.debug("master theorem case 1: a=%s b=%s gap=%s", a, b, gap)
        return MasterTheoremCase(
            case=1,
            expression=reference,
            explanation=(
                f"Master Theorem case 1: f({variable}) = O({variable}^({format_number(c)} - ε)) "
                f"with ε = {format_number(gap)} > 0, the leaves dominate → "
                f"Θ({variable}^{format_number(c)})"
            ),
        )

    if ordering is Ordering.EQUAL:
        logger.debug("master theorem case 2: a=%s b=%s", a, b)
        return MasterTheoremCase(
            case=2,
            expression=multiply(reference, logarithmic(variable)),
            explanation=(
                f"Master Theorem case 2: f({variable}) = Θ({variable}^{format_number(c)}), "
                f"every level costs the same over log_{format_number(b)} {variable} levels"
            ),
        )

    if ordering is Ordering.STRICTLY_FASTER and gap < 0:
        if regularity_holds(a, b, work.factor(variable)):
            logger.debug("master theorem case 3: a=%s b=%s gap=%s", a, b, gap)
            return MasterTheoremCase(
                case=3,
                expression=f,
                explanation=(
                    f"Master Theorem case 3: f({variable}) = Ω({variable}^({format_number(c)} + ε)) "
                    f"and a·f({variable}/b) <= c·f({variable}), the root dominates → Θ(f({variable}))"
                ),
            )

    return None
