"""
Structural description of an algorithm.

A closed tagged union of frozen nodes built by the caller (the source
analysis collaborator) and only read by the engine:

    Sequence(children)
    Conditional(condition, branches)
    Loop(iterations, body)
    Recursive(recurrence)
    GrowthExpression            (leaf: elementary operations)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from .growth import GrowthExpression, constant
from .recurrence import Recurrence, as_growth


class LoopShape(str, Enum):
    """Resolved loop-control shapes over a range of size m."""
    LINEAR = "linear"              # i += c               → m
    LOGARITHMIC = "logarithmic"    # i *= c, i /= c       → log m
    TRIANGULAR = "triangular"      # inner bound depends on the outer index → m²
    SQUARE_ROOT = "square_root"    # while i*i <= m       → m^(1/2)


@dataclass(frozen=True)
class IterationCount:
    """
    Attributes:
        shape: Loop shape name; unknown names are reported by the aggregator.
        size: Size of the iterated range, as an expression or notation
            (``"n"``, ``"n^2"``, ``"m"``).
    """
    shape: str
    size: GrowthExpression = field(default_factory=lambda: as_growth("n"))

    def __post_init__(self):
        shape = self.shape.value if isinstance(self.shape, LoopShape) else self.shape
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "size", as_growth(self.size))

    @classmethod
    def linear(cls, size="n") -> "IterationCount":
        return cls(LoopShape.LINEAR.value, size)

    @classmethod
    def logarithmic(cls, size="n") -> "IterationCount":
        return cls(LoopShape.LOGARITHMIC.value, size)

    @classmethod
    def triangular(cls, size="n") -> "IterationCount":
        return cls(LoopShape.TRIANGULAR.value, size)

    @classmethod
    def square_root(cls, size="n") -> "IterationCount":
        return cls(LoopShape.SQUARE_ROOT.value, size)


@dataclass(frozen=True)
class Sequence:
    children: Tuple["StructuralNode", ...] = ()
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True)
class Conditional:
    """``condition`` is evaluated once; only one of ``branches`` runs."""
    condition: "StructuralNode" = field(default_factory=constant)
    branches: Tuple["StructuralNode", ...] = ()
    label: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "branches", tuple(self.branches))


@dataclass(frozen=True)
class Loop:
    iterations: IterationCount
    body: "StructuralNode" = field(default_factory=constant)
    label: Optional[str] = None


@dataclass(frozen=True)
class Recursive:
    recurrence: Recurrence
    label: Optional[str] = None


StructuralNode = Union[GrowthExpression, Sequence, Conditional, Loop, Recursive]


def node_kind(node) -> str:
    if isinstance(node, GrowthExpression):
        return "cost"
    if isinstance(node, Sequence):
        return "sequence"
    if isinstance(node, Conditional):
        return "conditional"
    if isinstance(node, Loop):
        return "loop"
    if isinstance(node, Recursive):
        return "recursive"
    return type(node).__name__
