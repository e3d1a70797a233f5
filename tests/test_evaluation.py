import pytest

from schemer.builtin import env_builtin
from schemer.evaluation.evaluator import evaluate
from schemer.reader.parser import read
from schemer.types.environment import Environment
from schemer.types.errors import (
    SchemeArityError,
    SchemeSyntaxError,
    SchemeTypeError,
    SchemeUnboundSymbol,
)
from schemer.types.lambda_fn import Lambda
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.symbol import Symbol
from schemer.types.unspecified import Unspecified


@pytest.fixture
def env():
    """Return a fresh environment with the builtins registered."""
    e = Environment()
    env_builtin.register(e)
    return e


def run(source: str, env: Environment, macros: MacroEnvironment | None = None):
    macros = macros or MacroEnvironment()
    result = Unspecified
    for form in read(source):
        result = evaluate(form, env, macros)
    return result


@pytest.mark.parametrize(
    "source, expected",
    [
        ("42", 42),
        ("3.5", 3.5),
        ('"text"', "text"),
        ("#t", True),
        ("#f", False),
        ("#\\a", "a"),
        ("'()", []),
        ("()", []),
    ],
)
def test_self_evaluating(env, source, expected):
    assert run(source, env) == expected


def test_symbol_lookup(env):
    env.define(Symbol("x"), 5)
    assert run("x", env) == 5


def test_unbound_symbol(env):
    with pytest.raises(SchemeUnboundSymbol, match="nope"):
        run("nope", env)


def test_improper_list_cannot_be_evaluated(env):
    with pytest.raises(SchemeSyntaxError):
        run("(+ 1 . 2)", env)


def test_application_evaluates_left_to_right(env):
    run(
        """
        (define trace '())
        (define (note x) (set! trace (cons x trace)) x)
        """,
        env,
    )
    assert run("(list (note 1) (note 2) (note 3))", env) == [1, 2, 3]
    assert run("trace", env) == [3, 2, 1]


def test_operator_is_evaluated(env):
    assert run("((if #t + -) 3 2)", env) == 5


def test_apply_non_procedure(env):
    with pytest.raises(SchemeTypeError, match="non-procedure"):
        run("(5 1)", env)


def test_closures_capture_environment(env):
    run("(define (adder n) (lambda (x) (+ x n)))", env)
    assert run("((adder 10) 5)", env) == 15


def test_lambda_value(env):
    fn = run("(lambda (x y) x)", env)
    assert isinstance(fn, Lambda)
    assert fn.formals == [Symbol("x"), Symbol("y")]
    assert fn.rest is None


@pytest.mark.parametrize(
    "source, expected",
    [
        ("((lambda (x . rest) rest) 1 2 3)", [2, 3]),
        ("((lambda (x . rest) rest) 1)", []),
        ("((lambda args args) 1 2)", [1, 2]),
        ("((lambda args args))", []),
    ],
)
def test_rest_parameters(env, source, expected):
    assert run(source, env) == expected


@pytest.mark.parametrize(
    "source, message",
    [
        ("((lambda (x y) x) 1)", "too few"),
        ("((lambda (x) x) 1 2)", "too many"),
        ("((lambda (x . r) x))", "too few"),
    ],
)
def test_arity_errors(env, source, message):
    with pytest.raises(SchemeArityError, match=message):
        run(source, env)


def test_only_false_is_false(env):
    assert run("(if 0 'yes 'no)", env) is Symbol("yes")
    assert run("(if '() 'yes 'no)", env) is Symbol("yes")
    assert run('(if "" \'yes \'no)', env) is Symbol("yes")
    assert run("(if #f 'yes 'no)", env) is Symbol("no")


def test_deep_tail_recursion(env):
    run(
        """
        (define (fact n acc)
          (if (= n 0)
              acc
              (fact (- n 1) (* n acc))))
        """,
        env,
    )
    result = run("(fact 1500 1)", env)
    assert isinstance(result, int) and result > 0


def test_mutual_tail_recursion(env):
    run(
        """
        (define (even? n) (if (= n 0) #t (odd? (- n 1))))
        (define (odd? n) (if (= n 0) #f (even? (- n 1))))
        """,
        env,
    )
    assert run("(even? 10001)", env) is False


def test_evaluate_without_macros(env):
    assert evaluate(read("(+ 1 2)")[0], env) == 3


def test_macro_use_is_expanded_before_evaluation(env):
    macros = MacroEnvironment()
    run("(define-syntax inc (syntax-rules () ((_ x) (+ x 1))))", env, macros)
    assert run("(inc (inc 1))", env, macros) == 3


def test_special_form_keywords_only_act_in_operator_position(env):
    run("(define (f if) if)", env)
    assert run("(f 3)", env) == 3
