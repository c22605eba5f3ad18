"""
schemas.py - Request/response models of the growth classification API
=====================================================================

Structural trees travel as JSON tagged by ``kind``:

    {"kind": "sequence", "children": [
        {"kind": "loop", "shape": "linear", "size": "n",
         "body": {"kind": "cost", "growth": "1"}},
        {"kind": "recursive", "recurrence": {"type": "divide", "branching": 2,
                                             "shrink": 2, "work": "n"}}
    ]}

Leaves accept asymptotic notation (``"n log n"``) or an explicit term list.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

NumberLike = Union[int, float, str]


# ---------------------------------------------------------------------------
# 1. STRUCTURAL TREE
# ---------------------------------------------------------------------------

class TermModel(BaseModel):
    """
    Atomic growth term.

    Attributes:
        kind: constant, logarithmic, polynomial, exponential or factorial.
        variable: Size variable (omitted for constants).
        degree: Polynomial degree, exponential base, or power of a log or
            factorial term. Fractions may be given as text (``"1/2"``).
    """
    kind: Literal["constant", "logarithmic", "polynomial", "exponential", "factorial"]
    variable: Optional[str] = None
    degree: Optional[NumberLike] = None


class CostNode(BaseModel):
    """Elementary cost: ``growth`` notation or a product of ``terms``."""
    kind: Literal["cost"]
    growth: Optional[str] = None
    terms: Optional[List[TermModel]] = None


class SequenceNode(BaseModel):
    kind: Literal["sequence"]
    children: List["NodeModel"] = Field(default_factory=list)
    label: Optional[str] = None


class ConditionalNode(BaseModel):
    kind: Literal["conditional"]
    condition: Optional["NodeModel"] = None
    branches: List["NodeModel"] = Field(default_factory=list)
    label: Optional[str] = None


class LoopNode(BaseModel):
    """
    Attributes:
        shape: linear, logarithmic, triangular or square_root.
        size: Size of the iterated range in notation (``"n"``, ``"m"``, ``"n^2"``).
        body: Cost of one iteration (O(1) when omitted).
    """
    kind: Literal["loop"]
    shape: str
    size: str = "n"
    body: Optional["NodeModel"] = None
    label: Optional[str] = None


class RecurrenceModel(BaseModel):
    """
    Attributes:
        type: "divide" for T(n) = a·T(n/b) + f(n), "subtract" for
            T(n) = Σ T(n - k_i) + f(n).
        branching: a (divide only).
        shrink: b, or one b per branch (divide only).
        decrements: k_i, one per call (subtract only).
        work: f(n) in notation.
        base_case: Cost of a leaf in notation.
        variable: Size variable; the configured default when omitted.
    """
    type: Literal["divide", "subtract"] = "divide"
    branching: Optional[NumberLike] = None
    shrink: Optional[Union[NumberLike, List[NumberLike]]] = None
    decrements: Optional[List[int]] = None
    work: str = "1"
    base_case: str = "1"
    variable: Optional[str] = None


class RecursiveNode(BaseModel):
    kind: Literal["recursive"]
    recurrence: RecurrenceModel
    label: Optional[str] = None


NodeModel = Annotated[
    Union[CostNode, SequenceNode, ConditionalNode, LoopNode, RecursiveNode],
    Field(discriminator="kind"),
]

SequenceNode.model_rebuild()
ConditionalNode.model_rebuild()
LoopNode.model_rebuild()


# ---------------------------------------------------------------------------
# 2. REQUESTS
# ---------------------------------------------------------------------------

class ClassifyReq(BaseModel):
    """
    Attributes:
        tree: Root of the structural tree.
        relations: Relations between size variables (``"k <= n"``, ``"k = n"``).
        max_depth: Nesting limit; the configured MAX_DEPTH when omitted.
    """
    tree: NodeModel
    relations: List[str] = Field(default_factory=list)
    max_depth: Optional[int] = None


class SolveRecurrenceReq(BaseModel):
    recurrence: RecurrenceModel
    relations: List[str] = Field(default_factory=list)


class CompareReq(BaseModel):
    left: str
    right: str
    relations: List[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# 3. RESPONSES
# ---------------------------------------------------------------------------

class ErrorInfo(BaseModel):
    code: str
    message: str
    path: Optional[str] = None


class TraceStep(BaseModel):
    path: str
    kind: str
    rule: str
    result: str
    label: Optional[str] = None


class ClassifyResp(BaseModel):
    """
    Attributes:
        ok: False when the classification failed.
        big_o: Canonical bound, e.g. "O(n + k log k)".
        expression: Serialized canonical expression.
        trace: Provenance, one step per classified node in post-order.
        error: Failure (code, message, path of the failing node).
    """
    ok: bool
    big_o: Optional[str] = None
    expression: Optional[Dict[str, Any]] = None
    trace: List[TraceStep] = Field(default_factory=list)
    error: Optional[ErrorInfo] = None


class SolveRecurrenceResp(BaseModel):
    equation: str
    big_o: str
    method: str
    steps: List[str] = Field(default_factory=list)
    explanation: str
    expression: Dict[str, Any]


class CompareResp(BaseModel):
    """``ordering`` describes ``left`` with respect to ``right``."""
    ordering: Literal["strictly_slower", "equal", "strictly_faster", "incomparable"]
    left: str
    right: str
