from fractions import Fraction

from ..domain import GrowthExpression, compose, linear, logarithmic, polynomial, quadratic
from ..domain.structure import IterationCount, LoopShape
from ..errors import UnsupportedStructure

# Placeholder variable the shape growth is written in before the loop's
# size expression is composed into it.
_SIZE = "_size"

SHAPE_GROWTH = {
    LoopShape.LINEAR: linear(_SIZE),
    LoopShape.LOGARITHMIC: logarithmic(_SIZE),
    # Σ_{i<m} i = (m² - m)/2
    LoopShape.TRIANGULAR: quadratic(_SIZE),
    LoopShape.SQUARE_ROOT: polynomial(_SIZE, Fraction(1, 2)),
}


def resolve_shape(shape) -> LoopShape:
    try:
        return LoopShape(shape)
    except ValueError:
        raise UnsupportedStructure(
            f"Unrecognized iteration-count shape {shape!r}; "
            f"expected one of {', '.join(s.value for s in LoopShape)}"
        ) from None


def estimate_iterations(count: IterationCount) -> GrowthExpression:
    """Number of iterations of a loop, as a growth expression over its size."""
    shape = resolve_shape(count.shape)
    return compose(SHAPE_GROWTH[shape], _SIZE, count.size)
