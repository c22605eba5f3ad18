"""Conversion of API models into engine values."""

from __future__ import annotations

from ..domain import (
    Conditional, GrowthExpression, GrowthTerm, IterationCount, Loop, Recurrence,
    RecurrenceDescription, Recursive, Sequence, StructuralNode, SubtractiveRecurrence,
    constant, parse_growth,
)
from ..errors import MalformedInput, UnsupportedStructure
from ..schemas import (
    ConditionalNode, CostNode, LoopNode, RecurrenceModel, RecursiveNode, SequenceNode,
)


def growth_from_model(model: CostNode) -> GrowthExpression:
    if model.growth is not None and model.terms is not None:
        raise MalformedInput("A cost node takes either 'growth' or 'terms', not both")
    if model.terms is not None:
        return GrowthExpression.of(*(GrowthTerm(t.kind, t.variable, t.degree) for t in model.terms))
    if model.growth is None:
        return constant()
    return parse_growth(model.growth)


def recurrence_from_model(model: RecurrenceModel) -> Recurrence:
    if model.type == "subtract":
        if not model.decrements:
            raise MalformedInput("A subtractive recurrence needs at least one decrement")
        return SubtractiveRecurrence(
            decrements=tuple(model.decrements),
            work=model.work,
            base_case=model.base_case,
            variable=model.variable,
        )

    if model.branching is None or model.shrink is None:
        raise MalformedInput("A divide and conquer recurrence needs 'branching' and 'shrink'")
    shrink = tuple(model.shrink) if isinstance(model.shrink, list) else model.shrink
    return RecurrenceDescription(
        branching=model.branching,
        shrink=shrink,
        work=model.work,
        base_case=model.base_case,
        variable=model.variable,
    )


def node_from_model(model) -> StructuralNode:
    """JSON tree (already validated by pydantic) → structural node."""
    if isinstance(model, CostNode):
        return growth_from_model(model)

    if isinstance(model, SequenceNode):
        return Sequence(tuple(node_from_model(c) for c in model.children), label=model.label)

    if isinstance(model, ConditionalNode):
        condition = node_from_model(model.condition) if model.condition is not None else constant()
        return Conditional(
            condition=condition,
            branches=tuple(node_from_model(b) for b in model.branches),
            label=model.label,
        )

    if isinstance(model, LoopNode):
        body = node_from_model(model.body) if model.body is not None else constant()
        return Loop(IterationCount(model.shape, model.size), body=body, label=model.label)

    if isinstance(model, RecursiveNode):
        return Recursive(recurrence_from_model(model.recurrence), label=model.label)

    raise UnsupportedStructure(f"Unknown node model: {type(model).__name__}")
