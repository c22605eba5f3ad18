"""
Recurrence relation models.

Defines the recurrence shapes a recursive call can be described with.
Descriptions are plain values: they are validated by the recurrence solver,
so a malformed description is reported as a classification error instead of
failing when the tree is built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from .growth import GrowthExpression, Number, constant
from .notation import format_number, parse_growth, to_notation


def as_growth(value) -> GrowthExpression:
    """Accept a GrowthExpression or asymptotic notation text."""
    if isinstance(value, GrowthExpression):
        return value
    return parse_growth(value)


@dataclass(frozen=True)
class RecurrenceDescription:
    """
    Divide & conquer recurrence:

        T(n) = a·T(n/b) + f(n),   T(n) = base_case for n below a threshold

    Attributes:
        branching: Number of subproblems a (must be >= 1).
        shrink: Division factor b (must be > 1), or one factor per branch.
            Distinct per-branch factors are not supported.
        work: Non-recursive work f(n).
        base_case: Cost of a leaf of the recursion.
        variable: Size variable the recurrence is written in (None means
            the configured default).
    """
    branching: Number
    shrink: Union[Number, Tuple[Number, ...]]
    work: GrowthExpression = field(default_factory=constant)
    base_case: GrowthExpression = field(default_factory=constant)
    variable: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "work", as_growth(self.work))
        object.__setattr__(self, "base_case", as_growth(self.base_case))
        if isinstance(self.shrink, list):
            object.__setattr__(self, "shrink", tuple(self.shrink))

    def equation(self, variable: str = "n") -> str:
        v = self.variable or variable
        shrinks = self.shrink if isinstance(self.shrink, tuple) else None
        if shrinks and len(set(shrinks)) > 1:
            calls = " + ".join(f"T({v}/{format_number(b)})" for b in shrinks)
        else:
            b = shrinks[0] if shrinks else self.shrink
            a = format_number(self.branching)
            calls = f"{'' if a == '1' else a + '·'}T({v}/{format_number(b)})"
        return f"T({v}) = {calls} + {to_notation(self.work)}"


@dataclass(frozen=True)
class SubtractiveRecurrence:
    """
    Decrease & conquer recurrence:

        T(n) = T(n - k_1) + ... + T(n - k_a) + f(n)

    Attributes:
        decrements: One positive integer decrement per recursive call,
            e.g. ``(1,)`` for factorial, ``(1, 1)`` for Hanoi, ``(1, 2)``
            for naive Fibonacci.
        work: Non-recursive work f(n).
        base_case: Cost of a leaf of the recursion.
        variable: Size variable (None means the configured default).
    """
    decrements: Tuple[int, ...]
    work: GrowthExpression = field(default_factory=constant)
    base_case: GrowthExpression = field(default_factory=constant)
    variable: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "work", as_growth(self.work))
        object.__setattr__(self, "base_case", as_growth(self.base_case))
        object.__setattr__(self, "decrements", tuple(self.decrements))

    def equation(self, variable: str = "n") -> str:
        v = self.variable or variable
        calls = " + ".join(f"T({v}-{k})" for k in self.decrements) or "?"
        return f"T({v}) = {calls} + {to_notation(self.work)}"


Recurrence = Union[RecurrenceDescription, SubtractiveRecurrence]
