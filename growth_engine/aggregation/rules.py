"""Composition rules for sequences, conditionals and loops.

Each rule receives the already-computed growth of the node's children and
returns the growth of the node, reduced to its dominant summands:

- Sequence:     Σ children
- Conditional:  condition + max(branches)
- Loop:         iterations × body
"""

import logging
from typing import Iterable, List, Optional

from ..domain import (
    GrowthExpression, Ordering, VariableRelations,
    add, compare, constant, multiply, simplify_sum, to_notation,
)
from ..domain.structure import IterationCount
from ..errors import MalformedInput
from .loop_shapes import estimate_iterations

logger = logging.getLogger(__name__)


def sequence_cost(
        costs: Iterable[GrowthExpression],
        relations: Optional[VariableRelations] = None,
) -> GrowthExpression:
    """Left-to-right ``add`` of the children, then ``simplify_sum``.

    An empty sequence costs O(1).
    """
    total = constant()
    for cost in costs:
        total = add(total, cost)
    return simplify_sum(total, relations)


def max_cost(
        costs: Iterable[GrowthExpression],
        relations: Optional[VariableRelations] = None,
) -> GrowthExpression:
    """Costs not strictly slower than another; incomparable ones are all kept.

    EQUAL costs are interchangeable, the first one wins.
    """
    candidates: List[GrowthExpression] = [simplify_sum(c, relations) for c in costs]
    if not candidates:
        raise MalformedInput("A conditional needs at least one branch")

    kept: List[GrowthExpression] = []
    for i, cost in enumerate(candidates):
        beaten = False
        for j, other in enumerate(candidates):
            if i == j:
                continue
            ordering = compare(cost, other, relations)
            if ordering is Ordering.STRICTLY_SLOWER or (ordering is Ordering.EQUAL and j < i):
                beaten = True
                break
        if not beaten:
            kept.append(cost)
    return simplify_sum(add(*kept), relations)


def conditional_cost(
        condition: GrowthExpression,
        branches: Iterable[GrowthExpression],
        relations: Optional[VariableRelations] = None,
) -> GrowthExpression:
    return simplify_sum(add(condition, max_cost(branches, relations)), relations)


def loop_cost(
        iterations: IterationCount,
        body: GrowthExpression,
        relations: Optional[VariableRelations] = None,
) -> GrowthExpression:
    """``iterations × body``.

    A triangular count already is the closed form of the dependent inner
    loop, so it is multiplied once and never squared again.
    """
    count = estimate_iterations(iterations)
    logger.debug("loop shape=%s count=%s", iterations.shape, to_notation(count))
    return simplify_sum(multiply(count, body), relations)
