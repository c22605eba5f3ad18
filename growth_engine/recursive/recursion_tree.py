from dataclasses import dataclass
from enum import Enum

from ..domain import (
    GrowthExpression, Product,
    format_number, log_ratio, logarithmic, multiply, raise_to_power, render_product,
)
from .master_theorem import align_degree


class DominantPart(str, Enum):
    ROOT = "root"
    LEAVES = "leaves"
    ALL_LEVELS = "all-levels"


@dataclass(frozen=True)
class RecursionTreeResult:
    """
    Result of the recursion-tree method.

    Attributes:
        expression: Closed form of the sum over all levels.
        height: Height of the tree, e.g. "log_2(n)".
        per_level_cost: Cost of level i, e.g. "C_i = 2^i · f(n / 2^i)".
        dominant_part: Which part of the tree carries the total.
        explanation: Human-readable derivation.
    """
    expression: GrowthExpression
    height: str
    per_level_cost: str
    dominant_part: DominantPart
    explanation: str


def sum_recursion_tree(a, b, work: Product, variable: str) -> RecursionTreeResult:
    """
    Sum the per-level work a^i · f(n / b^i) for i = 0 .. log_b n.

    With f(n) = n^d (log n)^p the level cost is (a / b^d)^i · n^d · log^p(n / b^i):

    - d > log_b a: decreasing geometric series, the root dominates → f(n)
    - d < log_b a: increasing geometric series, the leaves dominate → n^(log_b a)
    - d = log_b a: every level costs n^d · log^p(n / b^i), and
      Σ_{j=1..log n} j^p = Θ(log^(p+1) n) → n^d log^(p+1) n

    Exponential and factorial work shrinks faster than any geometric series
    down the tree, so the root dominates. Log powers are never negative, so
    every representable work term has one of these closed forms.
    """
    c = log_ratio(a, b)
    work = align_degree(work, variable, c)
    f = work.factor(variable)
    reference = raise_to_power(a, b, variable)

    height = f"log_{format_number(b)}({variable})"
    per_level_cost = (
        f"C_i = {format_number(a)}^i · f({variable} / {format_number(b)}^i), "
        f"f({variable}) = {render_product(work)}"
    )

    if f.fact or f.base != 1:
        part = DominantPart.ROOT
        expression = GrowthExpression((work,))
    elif f.poly > c:
        part = DominantPart.ROOT
        expression = GrowthExpression((work,))
    elif f.poly < c:
        part = DominantPart.LEAVES
        expression = reference
    else:
        part = DominantPart.ALL_LEVELS
        expression = multiply(reference, logarithmic(variable, f.log + 1))

    explanation = (
        f"Recursion tree of height {height}; {per_level_cost}. "
        f"Critical exponent log_{format_number(b)}({format_number(a)}) = {format_number(c)}, "
        f"the {part.value} dominate"
    )
    return RecursionTreeResult(
        expression=expression,
        height=height,
        per_level_cost=per_level_cost,
        dominant_part=part,
        explanation=explanation,
    )
