"""
errors.py
=========

Error taxonomy of the growth classification engine.

Every failure the engine can report is a ``ClassificationError``. Rules raise
them; the classification driver turns them into values on the result, tagged
with the path of the failing node and the provenance gathered up to it.
"""

from __future__ import annotations

from typing import Optional, Tuple, Any


class ClassificationError(Exception):
    code = "CLASSIFICATION_ERROR"

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.trace: Tuple[Any, ...] = ()

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "path": self.path}


class UnsupportedStructure(ClassificationError):
    """An iteration-count or node shape the aggregator does not recognize."""

    code = "UNSUPPORTED_STRUCTURE"


class UnsolvableRecurrence(ClassificationError):
    """No Master Theorem case and no closed form for the recursion-tree sum."""

    code = "UNSOLVABLE_RECURRENCE"


class UnsupportedRecurrenceShape(ClassificationError):
    """Divide and conquer with subproblems of different sizes."""

    code = "UNSUPPORTED_RECURRENCE_SHAPE"


class MalformedInput(ClassificationError):
    """Out-of-range parameters: a < 1, b <= 1, negative degrees, bad notation."""

    code = "MALFORMED_INPUT"


class DepthLimitExceeded(MalformedInput):
    def __init__(self, limit: int, path: Optional[str] = None) -> None:
        super().__init__(f"Structural nesting exceeds the depth limit of {limit}", path)
        self.limit = limit
