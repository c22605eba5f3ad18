from .master_theorem import (
    MasterTheoremCase, align_degree, apply_master_theorem, critical_exponent, regularity_holds,
)
from .recursion_tree import DominantPart, RecursionTreeResult, sum_recursion_tree
from .subtractive import characteristic_root, leaf_count, solve_subtractive_term
from .solver import (
    RecurrenceSolution, solve_divide_and_conquer, solve_recurrence, solve_subtractive,
    validate_divide_and_conquer, validate_subtractive,
)

__all__ = [
    "MasterTheoremCase", "align_degree", "apply_master_theorem", "critical_exponent", "regularity_holds",
    "DominantPart", "RecursionTreeResult", "sum_recursion_tree",
    "characteristic_root", "leaf_count", "solve_subtractive_term",
    "RecurrenceSolution", "solve_divide_and_conquer", "solve_recurrence", "solve_subtractive",
    "validate_divide_and_conquer", "validate_subtractive",
]
