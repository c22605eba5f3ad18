"""
Recurrence solver.

Divide & conquer, T(n) = a·T(n/b) + f(n):

1. The work f is split into summands; each summand is the product of its
   factor in the recurrence variable and a multiplier over other variables.
2. For each summand the Master Theorem is tried first; when no case applies
   (e.g. f = n^(log_b a) / log n style gaps) the recursion-tree sum is used.
3. The leaves contribute n^(log_b a) · base_case.

Decrease & conquer, T(n) = Σ T(n - k_i) + f(n), is solved through the
characteristic root of the call tree (see ``subtractive``).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config import settings
from ..domain import (
    GrowthExpression, Number, Product, Recurrence, RecurrenceDescription,
    SubtractiveRecurrence, VariableRelations,
    add, as_number, format_number, is_integral, multiply, raise_to_power,
    simplify_sum, to_notation,
)
from ..errors import MalformedInput, UnsupportedRecurrenceShape, UnsupportedStructure
from .master_theorem import apply_master_theorem
from .recursion_tree import sum_recursion_tree
from .subtractive import leaf_count, solve_subtractive_term

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecurrenceSolution:
    """
    Closed form of a recurrence.

    Attributes:
        expression: Simplified growth of T(n).
        method: Rule(s) used, e.g. "master_theorem_case_2" or
            "master_theorem_case_1+recursion_tree_all-levels".
        steps: One line per solved summand plus the leaf contribution.
        explanation: Human-readable summary.
    """
    expression: GrowthExpression
    method: str
    steps: Tuple[str, ...]
    explanation: str


def _resolve_variable(name: Optional[str]) -> str:
    variable = name or settings.DEFAULT_VARIABLE
    if not variable.isidentifier():
        raise MalformedInput(f"Invalid size variable: {variable!r}")
    return variable


def _check_base_case(base_case: GrowthExpression, variable: str) -> None:
    if variable in base_case.variables:
        raise MalformedInput(
            f"The base case cannot depend on the recurrence variable {variable}: "
            f"{to_notation(base_case)}"
        )


def _split(work: GrowthExpression, variable: str) -> List[Tuple[Product, GrowthExpression]]:
    """(factor in ``variable``, multiplier over the other variables) per summand."""
    return [
        (Product((p.factor(variable),)), GrowthExpression((p.without(variable),)))
        for p in simplify_sum(work).summands
    ]


def validate_divide_and_conquer(recurrence: RecurrenceDescription) -> Tuple[Number, Number]:
    """
    Check a >= 1 and b > 1.

    Returns:
        (a, b) as numbers.

    Raises:
        MalformedInput: Parameters out of range, or the number of per-branch
            shrink factors differs from a.
        UnsupportedRecurrenceShape: Per-branch shrink factors differ.
    """
    a = as_number(recurrence.branching)
    if a < 1:
        raise MalformedInput(f"Branching factor a must be >= 1, got {format_number(a)}")

    shrink = recurrence.shrink
    if isinstance(shrink, tuple):
        if not shrink:
            raise MalformedInput("At least one shrink factor is required")
        values = tuple(as_number(s) for s in shrink)
        if len(set(values)) > 1:
            raise UnsupportedRecurrenceShape(
                "Subproblems of different sizes ("
                + ", ".join(f"n/{format_number(v)}" for v in values)
                + ") are not supported"
            )
        if len(values) != a:
            raise MalformedInput(
                f"Expected one shrink factor per branch ({format_number(a)}), got {len(values)}"
            )
        b = values[0]
    else:
        b = as_number(shrink)

    if b <= 1:
        raise MalformedInput(f"Shrink factor b must be > 1, got {format_number(b)}")
    return a, b


def solve_divide_and_conquer(
        recurrence: RecurrenceDescription,
        relations: Optional[VariableRelations] = None,
) -> RecurrenceSolution:
    a, b = validate_divide_and_conquer(recurrence)
    variable = _resolve_variable(recurrence.variable)
    _check_base_case(recurrence.base_case, variable)

    parts: List[GrowthExpression] = []
    methods: List[str] = []
    steps: List[str] = []
    notes: List[str] = []

    for own, multiplier in _split(recurrence.work, variable):
        case = apply_master_theorem(a, b, own, variable)
        if case is not None:
            solved, method, note = case.expression, f"master_theorem_case_{case.case}", case.explanation
        else:
            tree = sum_recursion_tree(a, b, own, variable)
            solved = tree.expression
            method = f"recursion_tree_{tree.dominant_part.value}"
            note = tree.explanation
        part = multiply(solved, multiplier)
        parts.append(part)
        methods.append(method)
        notes.append(note)
        steps.append(f"{method}: f = {to_notation(multiply(GrowthExpression((own,)), multiplier))} → {to_notation(part)}")

    leaves = multiply(raise_to_power(a, b, variable), recurrence.base_case)
    steps.append(f"leaves: {variable}^(log_{format_number(b)} {format_number(a)}) · T(1) → {to_notation(leaves)}")

    total = simplify_sum(add(*parts, leaves), relations)
    method = "+".join(dict.fromkeys(methods))
    logger.info("solved %s via %s → %s", recurrence.equation(variable), method, to_notation(total))
    return RecurrenceSolution(
        expression=total,
        method=method,
        steps=tuple(steps),
        explanation="; ".join(notes),
    )


def validate_subtractive(recurrence: SubtractiveRecurrence) -> Tuple[int, ...]:
    if not recurrence.decrements:
        raise MalformedInput("At least one recursive call is required")
    out: List[int] = []
    for k in recurrence.decrements:
        if isinstance(k, bool):
            raise MalformedInput(f"Decrement must be a positive integer, got {k!r}")
        value = as_number(k)
        if not is_integral(value) or value < 1:
            raise MalformedInput(f"Decrement must be a positive integer, got {format_number(value)}")
        out.append(int(value))
    return tuple(out)


def solve_subtractive(
        recurrence: SubtractiveRecurrence,
        relations: Optional[VariableRelations] = None,
) -> RecurrenceSolution:
    decrements = validate_subtractive(recurrence)
    variable = _resolve_variable(recurrence.variable)
    _check_base_case(recurrence.base_case, variable)

    parts: List[GrowthExpression] = []
    methods: List[str] = []
    steps: List[str] = []
    notes: List[str] = []

    for own, multiplier in _split(recurrence.work, variable):
        solved, method, note = solve_subtractive_term(decrements, own, variable)
        part = multiply(solved, multiplier)
        parts.append(part)
        methods.append(method)
        notes.append(note)
        steps.append(f"{method}: f = {to_notation(multiply(GrowthExpression((own,)), multiplier))} → {to_notation(part)}")

    leaves = multiply(leaf_count(decrements, variable), recurrence.base_case)
    steps.append(f"leaves: {to_notation(leaves)}")

    total = simplify_sum(add(*parts, leaves), relations)
    method = "+".join(dict.fromkeys(methods))
    logger.info("solved %s via %s → %s", recurrence.equation(variable), method, to_notation(total))
    return RecurrenceSolution(
        expression=total,
        method=method,
        steps=tuple(steps),
        explanation="; ".join(notes),
    )


def solve_recurrence(
        recurrence: Recurrence,
        relations: Optional[VariableRelations] = None,
) -> RecurrenceSolution:
    """
    Closed-form growth of a recurrence.

    Args:
        recurrence: ``RecurrenceDescription`` or ``SubtractiveRecurrence``.
        relations: Known relations between size variables, applied to the
            final simplification.

    Raises:
        MalformedInput, UnsupportedRecurrenceShape, UnsolvableRecurrence
    """
    if isinstance(recurrence, RecurrenceDescription):
        return solve_divide_and_conquer(recurrence, relations)
    if isinstance(recurrence, SubtractiveRecurrence):
        return solve_subtractive(recurrence, relations)
    raise UnsupportedStructure(f"Unknown recurrence description: {type(recurrence).__name__}")
