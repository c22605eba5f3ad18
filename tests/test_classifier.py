# tests/test_classifier.py
"""
Classification driver: end-to-end trees, provenance trace and error reporting.
"""

from growth_engine.domain import (
    Conditional, IterationCount, Loop, Ordering, RecurrenceDescription, Recursive, Sequence,
    SubtractiveRecurrence, compare, constant, linear, quadratic,
)
from growth_engine.errors import (
    DepthLimitExceeded, MalformedInput, UnsupportedRecurrenceShape, UnsupportedStructure,
)
from growth_engine.services import classify

from conftest import g, relations


# ============================================================================
# CASOS END-TO-END
# ============================================================================

def test_leaf():
    result = classify(linear())
    assert result.ok
    assert result.big_o() == "O(n)"
    assert [step.path for step in result.trace] == ["root"]
    assert result.trace[0].rule == "cost"


def test_sequence_of_linear_and_quadratic():
    result = classify(Sequence([linear(), quadratic()]))
    assert result.big_o() == "O(n²)"


def test_triangular_loop():
    result = classify(Loop(IterationCount.triangular(), constant()))
    assert result.big_o() == "O(n²)"
    assert result.trace[-1].rule == "loop:triangular"


def test_nested_independent_loops():
    tree = Loop(IterationCount.linear("n"), Loop(IterationCount.linear("m"), constant()))
    result = classify(tree)
    assert result.big_o() == "O(n·m)"
    assert compare(result.expression, quadratic()) is Ordering.INCOMPARABLE


def test_nested_loops_with_bounded_inner_size():
    tree = Loop(IterationCount.linear("n"), Loop(IterationCount.linear("m"), constant()))
    result = classify(tree, ["m <= n"])
    assert result.big_o() == "O(n·m)"
    assert compare(result.expression, quadratic(), relations("m <= n")) is Ordering.STRICTLY_SLOWER


def test_mixed_variable_sequence():
    tree = Sequence([linear("n"), g("k log k"), linear("n")])
    assert classify(tree).big_o() == "O(n + k log k)"
    assert classify(tree, ["k = n"]).big_o() == "O(n log n)"


def test_conditional_takes_worst_branch():
    tree = Conditional(condition=g("log n"), branches=[linear(), quadratic(), constant()])
    assert classify(tree).big_o() == "O(n²)"


def test_loop_around_binary_search():
    search = Recursive(RecurrenceDescription(1, 2, "1"))
    result = classify(Loop(IterationCount.linear(), search))
    assert result.big_o() == "O(n log n)"


def test_merge_sort_after_scan():
    tree = Sequence([
        Loop(IterationCount.linear(), constant()),
        Recursive(RecurrenceDescription(2, 2, "n")),
    ])
    result = classify(tree)
    assert result.big_o() == "O(n log n)"
    rules = {step.path: step.rule for step in result.trace}
    assert rules["root/seq[1]"] == "recursive:master_theorem_case_2"
    assert rules["root/seq[0]/loop/body"] == "cost"


def test_hanoi():
    result = classify(Recursive(SubtractiveRecurrence((1, 1), "1")))
    assert result.big_o() == "O(2^n)"


def test_classification_is_deterministic():
    tree = Sequence([g("n"), Loop(IterationCount.logarithmic(), g("k")), g("m^2")])
    assert classify(tree).expression == classify(tree).expression


# ============================================================================
# PROVENANCE
# ============================================================================

def test_trace_is_post_order():
    tree = Sequence([
        Loop(IterationCount.linear(), constant()),
        Conditional(constant(), [linear()]),
    ])
    paths = [step.path for step in classify(tree).trace]
    assert paths == [
        "root/seq[0]/loop/body",
        "root/seq[0]",
        "root/seq[1]/cond",
        "root/seq[1]/branch[0]",
        "root/seq[1]",
        "root",
    ]


def test_trace_step_serialization():
    step = classify(Loop(IterationCount.linear(), constant())).trace[-1]
    assert step.to_dict() == {"path": "root", "kind": "loop", "rule": "loop:linear", "result": "n", "label": None}


# ============================================================================
# ERRORES
# ============================================================================

def test_error_is_returned_with_failing_path():
    tree = Sequence([linear(), Recursive(RecurrenceDescription(2, 1, "n"))])
    result = classify(tree)
    assert not result.ok
    assert result.expression is None
    assert result.big_o() is None
    assert isinstance(result.error, MalformedInput)
    assert result.error.path == "root/seq[1]"
    assert [step.path for step in result.trace] == ["root/seq[0]"]
    assert result.error.trace == result.trace


def test_descent_stops_at_first_error():
    tree = Sequence([
        Recursive(RecurrenceDescription(2, [2, 3], "n")),
        Loop(IterationCount("spiral"), constant()),
    ])
    result = classify(tree)
    assert isinstance(result.error, UnsupportedRecurrenceShape)
    assert result.error.path == "root/seq[0]"
    assert result.trace == ()


def test_unknown_loop_shape():
    result = classify(Loop(IterationCount("spiral"), constant()))
    assert isinstance(result.error, UnsupportedStructure)
    assert result.error.code == "UNSUPPORTED_STRUCTURE"
    assert result.error.path == "root"
    assert [step.path for step in result.trace] == ["root/loop/body"]


def test_unknown_node():
    result = classify(Sequence([linear(), "while(true)"]))
    assert isinstance(result.error, UnsupportedStructure)
    assert result.error.path == "root/seq[1]"


def test_empty_conditional_is_malformed():
    result = classify(Conditional(constant(), []))
    assert isinstance(result.error, MalformedInput)
    assert result.error.path == "root"


def test_depth_limit():
    tree = constant()
    for _ in range(5):
        tree = Loop(IterationCount.linear(), tree)
    result = classify(tree, max_depth=3)
    assert isinstance(result.error, DepthLimitExceeded)
    assert result.error.code == "MALFORMED_INPUT"
    assert result.error.path == "root/loop/body/loop/body/loop/body/loop/body"

    assert classify(tree, max_depth=5).big_o() == "O(n^5)"


def test_invalid_relation_is_an_error_value():
    result = classify(linear(), ["k > n"])
    assert isinstance(result.error, MalformedInput)
    assert result.error.path == "root"
    assert result.error.to_dict()["code"] == "MALFORMED_INPUT"


def test_loop_without_iteration_count():
    result = classify(Sequence([linear(), Loop(None, constant())]))
    assert isinstance(result.error, UnsupportedStructure)
    assert result.error.path == "root/seq[1]"
    assert [step.path for step in result.trace] == ["root/seq[0]"]


# ============================================================================
# ETIQUETAS
# ============================================================================

def test_labels_are_carried_into_the_trace():
    tree = Sequence(
        [Loop(IterationCount.linear(), constant(), label="scan"), Recursive(RecurrenceDescription(2, 2, "n"), label="sort")],
        label="main",
    )
    labels = {step.path: step.label for step in classify(tree).trace}
    assert labels == {
        "root/seq[0]/loop/body": None,
        "root/seq[0]": "scan",
        "root/seq[1]": "sort",
        "root": "main",
    }
