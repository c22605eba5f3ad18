from .loop_shapes import SHAPE_GROWTH, estimate_iterations, resolve_shape
from .rules import conditional_cost, loop_cost, max_cost, sequence_cost

__all__ = [
    "SHAPE_GROWTH", "estimate_iterations", "resolve_shape",
    "conditional_cost", "loop_cost", "max_cost", "sequence_cost",
]
