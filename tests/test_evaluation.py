import pytest

from lispy.evaluation.evaluator import evaluate
from lispy.types.environment import Environment
from lispy.types.error_value import Error, ErrorKind, division_by_zero, unbound_symbol
from lispy.types.value import Builtin, Lambda, Number, QExpr, SExpr, String, Symbol

# -----------------------------------------------------
# Fixtures
# -----------------------------------------------------

def do_sum(_, args):
    return Number(sum(a.value for a in args))


@pytest.fixture
def env():
    env = Environment()
    env.bind_local("+", Builtin("+", do_sum))
    env.bind_local("x", Number(42))
    env.bind_local("y", Number(100))
    return env

# -----------------------------------------------------
# Tests
# -----------------------------------------------------

@pytest.mark.parametrize(
    "value",
    [
        Number(1),
        String("hello"),
        division_by_zero(),
        QExpr((Symbol("undefined"), SExpr())),
        Lambda(QExpr(), QExpr(), Environment()),
    ],
)
def test_inert_values_evaluate_to_themselves(env, value):
    assert evaluate(env, value) is value


def test_symbol_lookup(env):
    assert evaluate(env, Symbol("x")) == Number(42)
    assert evaluate(env, Symbol("y")) == Number(100)


def test_unbound_symbol_is_an_error_value(env):
    result = evaluate(env, Symbol("undefined_name"))
    assert isinstance(result, Error)
    assert result.kind is ErrorKind.UNBOUND_SYMBOL
    assert result.symbol == "undefined_name"


def test_empty_sexpr_is_identity(env):
    empty = SExpr()
    assert evaluate(env, empty) is empty


def test_single_child_is_transparent(env):
    assert evaluate(env, SExpr((Symbol("x"),))) == Number(42)
    assert evaluate(env, SExpr((SExpr((Number(7),)),))) == Number(7)
    assert isinstance(evaluate(env, SExpr((Symbol("+"),))), Builtin)


def test_simple_call(env):
    expr = SExpr((Symbol("+"), Number(1), Symbol("x"), SExpr((Symbol("+"), Number(2), Number(3)))))
    assert evaluate(env, expr) == Number(48)


def test_first_error_wins(env):
    expr = SExpr((Symbol("+"), Symbol("a"), Number(1), Symbol("b")))
    assert evaluate(env, expr) == unbound_symbol("a")


def test_error_in_head_position(env):
    expr = SExpr((Symbol("nope"), Number(1)))
    assert evaluate(env, expr) == unbound_symbol("nope")


def test_children_are_evaluated_before_the_call(env):
    calls = []

    def record(_, args):
        calls.append(args)
        return SExpr()

    env.bind_local("rec", Builtin("rec", record))
    evaluate(env, SExpr((Symbol("rec"), Symbol("x"), QExpr((Symbol("x"),)))))
    assert calls == [[Number(42), QExpr((Symbol("x"),))]]


@pytest.mark.parametrize(
    "head,kind",
    [
        (Number(1), "Number"),
        (String("s"), "String"),
        (QExpr(), "Q-Expression"),
        (SExpr(), "S-Expression"),
    ],
)
def test_sexpr_must_start_with_function(env, head, kind):
    result = evaluate(env, SExpr((head, Number(2))))
    assert result.kind is ErrorKind.NOT_A_FUNCTION
    assert result.message == (
        f"S-expression does not start with a function. Got {kind}, Expected Function."
    )
