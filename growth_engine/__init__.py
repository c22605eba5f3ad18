"""Symbolic asymptotic growth classification engine."""

from .domain import (
    GrowthExpression, Ordering, VariableRelations,
    big_o, compare, parse_growth, simplify_sum, to_notation,
)
from .errors import (
    ClassificationError, DepthLimitExceeded, MalformedInput,
    UnsolvableRecurrence, UnsupportedRecurrenceShape, UnsupportedStructure,
)
from .recursive import RecurrenceSolution, solve_recurrence
from .services import ClassificationResult, ProvenanceStep, classify

__version__ = "1.0.0"

__all__ = [
    "GrowthExpression", "Ordering", "VariableRelations",
    "big_o", "compare", "parse_growth", "simplify_sum", "to_notation",
    "ClassificationError", "DepthLimitExceeded", "MalformedInput",
    "UnsolvableRecurrence", "UnsupportedRecurrenceShape", "UnsupportedStructure",
    "RecurrenceSolution", "solve_recurrence",
    "ClassificationResult", "ProvenanceStep", "classify",
]
