import pytest


@pytest.mark.parametrize(
    "source,expected",
    [
        ("== 1 1", "1"),
        ("== 1 2", "0"),
        ("!= 1 2", "1"),
        ("== {1 2} {1 2}", "1"),
        ("== {1 2} {1 3}", "0"),
        ("== {1 2} {1 2 3}", "0"),
        ("== {} {}", "1"),
        ("== {} ()", "0"),
        ('== "a" "a"', "1"),
        ('== "a" a', "Error: Unbound Symbol 'a'"),
        ('== "a" {a}', "0"),
        ("== + +", "1"),
        ("== + plus", "1"),
        ("== + -", "0"),
        ("> 2 1", "1"),
        ("> 1 2", "0"),
        (">= 2 2", "1"),
        ("< 1 2", "1"),
        ("<= 3 2", "0"),
    ],
)
def test_comparisons(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("== 1", "Error: Function '==' passed incorrect number of arguments. Got 1, Expected 2."),
        ("> 1 2 3", "Error: Function '>' passed incorrect number of arguments. Got 3, Expected 2."),
        ("< 1 {}", "Error: Function '<' passed incorrect type for argument 1. Got Q-Expression, Expected Number."),
    ],
)
def test_comparison_preconditions(run, source, expected):
    assert run(source) == expected


def test_lambdas_compare_by_formals_and_body(run):
    assert run("== (\\ {x} {x}) (\\ {x} {x})") == "1"
    assert run("== (\\ {x} {x}) (\\ {y} {y})") == "0"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("if 1 {+ 1 1} {+ 2 2}", "2"),
        ("if 0 {+ 1 1} {+ 2 2}", "4"),
        ("if -5 {1} {2}", "1"),
        ("if (> 3 2) {head {7 8}} {tail {7 8}}", "{7}"),
        ("if 1 {} {x}", "()"),
        ("if 0 {undefined} {42}", "42"),
    ],
)
def test_if(run, source, expected):
    assert run(source) == expected


def test_if_branch_sees_caller_bindings(run):
    assert run("def {x} 10", "if (== x 10) {* x 2} {0}") == "20"


@pytest.mark.parametrize(
    "source,expected",
    [
        ("if 1 {1}", "Error: Function 'if' passed incorrect number of arguments. Got 2, Expected 3."),
        ("if {1} {1} {2}", "Error: Function 'if' passed incorrect type for argument 0. Got Q-Expression, Expected Number."),
        ("if 1 2 {2}", "Error: Function 'if' passed incorrect type for argument 1. Got Number, Expected Q-Expression."),
    ],
)
def test_if_preconditions(run, source, expected):
    assert run(source) == expected
