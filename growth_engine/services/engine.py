"""Request handlers behind the HTTP routes."""

from __future__ import annotations

import logging

from ..domain import VariableRelations, big_o, compare, parse_growth, to_json
from ..recursive import solve_recurrence
from ..schemas import (
    ClassifyReq, ClassifyResp, CompareReq, CompareResp, ErrorInfo,
    SolveRecurrenceReq, SolveRecurrenceResp, TraceStep,
)
from .classifier import classify
from .payloads import node_from_model, recurrence_from_model

logger = logging.getLogger(__name__)


def classify_core(req: ClassifyReq) -> ClassifyResp:
    """
    Classify a JSON tree.

    Classification errors are part of the response; only errors raised while
    converting the request (bad notation in a leaf, bad relation syntax)
    propagate to the router.
    """
    relations = VariableRelations.parse(req.relations)
    tree = node_from_model(req.tree)
    result = classify(tree, relations, max_depth=req.max_depth)

    trace = [TraceStep(**step.to_dict()) for step in result.trace]
    if not result.ok:
        return ClassifyResp(ok=False, trace=trace, error=ErrorInfo(**result.error.to_dict()))

    return ClassifyResp(
        ok=True,
        big_o=result.big_o(),
        expression=to_json(result.expression),
        trace=trace,
    )


def solve_recurrence_core(req: SolveRecurrenceReq) -> SolveRecurrenceResp:
    relations = VariableRelations.parse(req.relations)
    recurrence = recurrence_from_model(req.recurrence)
    solution = solve_recurrence(recurrence, relations)
    return SolveRecurrenceResp(
        equation=recurrence.equation(),
        big_o=big_o(solution.expression),
        method=solution.method,
        steps=list(solution.steps),
        explanation=solution.explanation,
        expression=to_json(solution.expression),
    )


def compare_core(req: CompareReq) -> CompareResp:
    relations = VariableRelations.parse(req.relations)
    left, right = parse_growth(req.left), parse_growth(req.right)
    ordering = compare(left, right, relations)
    logger.debug("compare %s vs %s → %s", req.left, req.right, ordering.value)
    return CompareResp(
        ordering=ordering.value,
        left=big_o(left, relations),
        right=big_o(right, relations),
    )
