from .growth import (
    GrowthKind, GrowthTerm, VariableFactor, Product, GrowthExpression, Number,
    as_number, log_ratio, real_power, is_integral, variable_order,
    constant, polynomial, linear, quadratic, cubic, logarithmic, exponential, factorial,
    add, multiply, raise_to_power, compose, rename,
)

from .dominance import (
    Ordering, VariableRelations, NO_RELATIONS,
    compare, equals, simplify_sum, dominant_terms, polynomial_gap,
)

from .notation import (
    format_number, render_product, to_notation, big_o, big_theta, to_json,
    parse_growth,
)

from .recurrence import (
    RecurrenceDescription, SubtractiveRecurrence, Recurrence, as_growth,
)

from .structure import (
    LoopShape, IterationCount, Sequence, Conditional, Loop, Recursive,
    StructuralNode, node_kind,
)

__all__ = [
    "GrowthKind", "GrowthTerm", "VariableFactor", "Product", "GrowthExpression", "Number",
    "as_number", "log_ratio", "real_power", "is_integral", "variable_order",
    "constant", "polynomial", "linear", "quadratic", "cubic", "logarithmic", "exponential",
    "factorial", "add", "multiply", "raise_to_power", "compose", "rename",
    "Ordering", "VariableRelations", "NO_RELATIONS",
    "compare", "equals", "simplify_sum", "dominant_terms", "polynomial_gap",
    "format_number", "render_product", "to_notation", "big_o", "big_theta", "to_json",
    "parse_growth",
    "RecurrenceDescription", "SubtractiveRecurrence", "Recurrence", "as_growth",
    "LoopShape", "IterationCount", "Sequence", "Conditional", "Loop", "Recursive",
    "StructuralNode", "node_kind",
]
