"""Classification driver.

Walks a structural tree top-down and dispatches every node to its rule:

- GrowthExpression  → the leaf cost itself
- Sequence          → ``sequence_cost`` of the children
- Conditional       → ``conditional_cost`` of condition and branches
- Loop              → ``loop_cost`` of the iteration count and the body
- Recursive         → ``solve_recurrence``

Every node that is classified leaves a ``ProvenanceStep`` on the trace, in
post-order. Failures are not recovered: descent stops at the failing node
and the error is returned as a value, carrying that node's path and the
trace gathered up to it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..aggregation import conditional_cost, loop_cost, sequence_cost
from ..config import settings
from ..domain import (
    Conditional, GrowthExpression, IterationCount, Loop, Recursive, Sequence, VariableRelations,
    big_o, node_kind, simplify_sum, to_notation,
)
from ..errors import ClassificationError, DepthLimitExceeded, UnsupportedStructure
from ..recursive import solve_recurrence

logger = logging.getLogger(__name__)

ROOT_PATH = "root"


@dataclass(frozen=True)
class ProvenanceStep:
    """
    One rule application.

    Attributes:
        path: Slash-separated location of the node, e.g. ``root/seq[1]/loop/body``.
        node: The classified node.
        rule: Rule applied, e.g. ``sequence``, ``loop:triangular`` or
            ``recursive:master_theorem_case_2``.
        result: Growth of the node after simplification.
        label: Caller-supplied name of the node, if any.
    """
    path: str
    node: Any = field(repr=False, compare=False)
    rule: str
    result: GrowthExpression
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "path": self.path,
            "kind": node_kind(self.node),
            "rule": self.rule,
            "result": to_notation(self.result),
            "label": self.label,
        }


@dataclass(frozen=True)
class ClassificationResult:
    """Either ``expression`` or ``error`` is set; ``trace`` is always present."""
    expression: Optional[GrowthExpression] = None
    trace: Tuple[ProvenanceStep, ...] = ()
    error: Optional[ClassificationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def big_o(self) -> Optional[str]:
        if self.expression is None:
            return None
        return big_o(self.expression)


class _Descent:
    """State of one ``classify`` call; never shared between calls."""

    def __init__(self, relations: VariableRelations, max_depth: int) -> None:
        self.relations = relations
        self.max_depth = max_depth
        self.trace: List[ProvenanceStep] = []

    def visit(self, node, path: str, depth: int) -> GrowthExpression:
        try:
            if depth > self.max_depth:
                raise DepthLimitExceeded(self.max_depth)
            expression, rule = self._dispatch(node, path, depth)
        except ClassificationError as err:
            if err.path is None:
                err.path = path
            raise

        logger.debug("%s: %s → %s", path, rule, to_notation(expression))
        self.trace.append(ProvenanceStep(path, node, rule, expression, getattr(node, "label", None)))
        return expression

    def _dispatch(self, node, path: str, depth: int) -> Tuple[GrowthExpression, str]:
        relations = self.relations
        child_depth = depth + 1

        if isinstance(node, GrowthExpression):
            return simplify_sum(node, relations), "cost"

        if isinstance(node, Sequence):
            costs = [
                self.visit(child, f"{path}/seq[{i}]", child_depth)
                for i, child in enumerate(node.children)
            ]
            return sequence_cost(costs, relations), "sequence"

        if isinstance(node, Conditional):
            condition = self.visit(node.condition, f"{path}/cond", child_depth)
            branches = [
                self.visit(branch, f"{path}/branch[{i}]", child_depth)
                for i, branch in enumerate(node.branches)
            ]
            return conditional_cost(condition, branches, relations), "conditional"

        if isinstance(node, Loop):
            if not isinstance(node.iterations, IterationCount):
                raise UnsupportedStructure(f"Loop without an iteration count: {node.iterations!r}")
            body = self.visit(node.body, f"{path}/loop/body", child_depth)
            return loop_cost(node.iterations, body, relations), f"loop:{node.iterations.shape}"

        if isinstance(node, Recursive):
            solution = solve_recurrence(node.recurrence, relations)
            return solution.expression, f"recursive:{solution.method}"

        raise UnsupportedStructure(f"Unknown structural node: {node_kind(node)}")


def _as_relations(relations) -> VariableRelations:
    if relations is None:
        return VariableRelations()
    if isinstance(relations, VariableRelations):
        return relations
    return VariableRelations.parse(relations)


def classify(
        node,
        relations: Optional[Union[VariableRelations, Iterable[str]]] = None,
        max_depth: Optional[int] = None,
) -> ClassificationResult:
    """
    Classify a structural tree into its canonical growth expression.

    Args:
        node: Root of the structural tree.
        relations: ``VariableRelations`` or statements like ``"k <= n"``.
        max_depth: Nesting limit; defaults to ``settings.MAX_DEPTH``.

    Returns:
        ClassificationResult. Errors never escape: they are returned in
        ``error`` with the partial trace.
    """
    limit = settings.MAX_DEPTH if max_depth is None else max_depth
    descent: Optional[_Descent] = None
    try:
        rel = _as_relations(relations)
        descent = _Descent(rel, limit)
        expression = descent.visit(node, ROOT_PATH, 0)
        expression = simplify_sum(expression, rel)
    except ClassificationError as err:
        trace = tuple(descent.trace) if descent is not None else ()
        err.trace = trace
        if err.path is None:
            err.path = ROOT_PATH
        logger.warning("classification failed [%s] at %s: %s", err.code, err.path, err.message)
        return ClassificationResult(expression=None, trace=trace, error=err)

    return ClassificationResult(expression=expression, trace=tuple(descent.trace))
