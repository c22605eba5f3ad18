from .classifier import ClassificationResult, ProvenanceStep, classify
from .engine import classify_core, compare_core, solve_recurrence_core
from .payloads import growth_from_model, node_from_model, recurrence_from_model

__all__ = [
    "ClassificationResult", "ProvenanceStep", "classify",
    "classify_core", "compare_core", "solve_recurrence_core",
    "growth_from_model", "node_from_model", "recurrence_from_model",
]
