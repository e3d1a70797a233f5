import pytest

from schemer.reader.parser import read
from schemer.types.errors import (
    SchemeArityError,
    SchemeError,
    SchemeInvalidSymbol,
    SchemeSyntaxError,
    SchemeTypeError,
    SchemeUnboundSymbol,
)
from schemer.types.lambda_fn import Lambda
from schemer.types.symbol import Symbol
from schemer.types.unspecified import Unspecified


def datum(source: str):
    [form] = read(source)
    return form


# ------------------ quote / quasiquote ------------------

def test_quote_returns_datum_unevaluated(bare):
    assert bare.eval("'(+ 1 2)") == datum("(+ 1 2)")
    assert bare.eval("(quote x)") is Symbol("x")


def test_quote_arity(bare):
    with pytest.raises(SchemeArityError):
        bare.eval("(quote a b)")


@pytest.mark.parametrize(
    "source, expected",
    [
        ("`(1 2 3)", [1, 2, 3]),
        ("`(1 ,(+ 1 1) 3)", [1, 2, 3]),
        ("`(1 ,@(list 2 3) 4)", [1, 2, 3, 4]),
        ("`(1 ,@'() 2)", [1, 2]),
        ("`x", Symbol("x")),
        ("`,(+ 2 3)", 5),
        ("`(1 . ,(+ 1 1))", ([1], 2)),
        ("`(1 . ,(list 2 3))", [1, 2, 3]),
        ("`((a ,(+ 1 1)) (b ,@(list 3)))", datum("((a 2) (b 3))")),
    ],
)
def test_quasiquote(bare, source, expected):
    assert bare.eval(source) == expected


def test_nested_quasiquote_keeps_inner_unquote(bare):
    assert bare.eval("`(1 `(2 ,(3 ,(+ 1 3))))") == datum("(1 `(2 ,(3 4)))")


def test_unquote_splicing_requires_list(bare):
    with pytest.raises(SchemeTypeError):
        bare.eval("`(1 ,@42)")


@pytest.mark.parametrize("source", [",x", ",@x"])
def test_unquote_outside_quasiquote(bare, source):
    with pytest.raises(SchemeSyntaxError):
        bare.eval(source)


# ------------------ if ------------------

def test_one_armed_if(bare):
    assert bare.eval("(if #f 1)") is Unspecified
    assert bare.eval("(if #t 1)") == 1


def test_if_arity(bare):
    with pytest.raises(SchemeArityError):
        bare.eval("(if)")


# ------------------ lambda / define ------------------

def test_lambda_needs_body(bare):
    with pytest.raises(SchemeArityError):
        bare.eval("(lambda (x))")


@pytest.mark.parametrize("source", ["(lambda (1) 1)", "(lambda (x x) x)", "(lambda (x . 5) x)"])
def test_lambda_rejects_bad_formals(bare, source):
    with pytest.raises(SchemeInvalidSymbol):
        bare.eval(source)


def test_define_variable(bare):
    assert bare.eval("(define x 10)") is Unspecified
    assert bare.eval("x") == 10


def test_define_procedure_shorthand(bare):
    bare.eval("(define (add a b) (+ a b))")
    fn = bare.eval("add")
    assert isinstance(fn, Lambda)
    assert fn.name == "add"
    assert bare.eval("(add 2 3)") == 5


def test_define_procedure_with_rest(bare):
    bare.eval("(define (tail-of first . others) others)")
    assert bare.eval("(tail-of 1 2 3)") == [2, 3]


def test_define_names_anonymous_lambda(bare):
    bare.eval("(define square (lambda (x) (* x x)))")
    assert bare.eval("square").name == "square"


def test_define_body_is_a_sequence(bare):
    bare.eval("(define (f) (define y 2) (* y 3))")
    assert bare.eval("(f)") == 6


def test_define_rejects_non_symbol(bare):
    with pytest.raises(SchemeError):
        bare.eval("(define 5 1)")


# ------------------ set! ------------------

def test_set_updates_nearest_binding(bare):
    bare.eval("(define x 1)")
    bare.eval("(define (bump) (set! x (+ x 1)))")
    assert bare.eval("(bump)") is Unspecified
    assert bare.eval("x") == 2


def test_set_unbound(bare):
    with pytest.raises(SchemeUnboundSymbol):
        bare.eval("(set! nowhere 1)")


# ------------------ letrec / begin ------------------

def test_letrec_mutual_recursion(bare):
    source = """
    (letrec ((ev? (lambda (n) (if (= n 0) #t (od? (- n 1)))))
             (od? (lambda (n) (if (= n 0) #f (ev? (- n 1))))))
      (ev? 100))
    """
    assert bare.eval(source) is True


def test_letrec_names_its_procedures(bare):
    assert repr(bare.eval("(letrec ((f (lambda () 1))) f)")) == "#<procedure f>"


def test_letrec_bindings_are_local(bare):
    bare.eval("(letrec ((hidden 1)) hidden)")
    with pytest.raises(SchemeUnboundSymbol):
        bare.eval("hidden")


@pytest.mark.parametrize("source", ["(letrec)", "(letrec ((x)) x)", "(letrec ((1 2)) 1)"])
def test_letrec_malformed(bare, source):
    with pytest.raises(SchemeError):
        bare.eval(source)


def test_begin(bare):
    assert bare.eval("(begin)") is Unspecified
    assert bare.eval("(begin 1 2 3)") == 3


# ------------------ eval ------------------

def test_eval_evaluates_constructed_expression(bare):
    assert bare.eval("(eval (list '+ 1 2))") == 3
    assert bare.eval("(eval ''x)") is Symbol("x")


def test_eval_sees_current_environment(bare):
    assert bare.eval("((lambda (y) (eval 'y)) 7)") == 7


# ------------------ macroexpand ------------------

def test_macroexpand_1_expands_once(itp):
    assert itp.eval("(macroexpand-1 '(let* ((a 1) (b a)) b))") == datum("(let ((a 1)) (let* ((b a)) b))")


def test_macroexpand_expands_fully(itp):
    assert itp.eval("(macroexpand '(and a b))") == datum("(if a b #f)")
    assert itp.eval("(macroexpand (and a b))") == datum("(if a b #f)")


def test_macroexpand_leaves_non_macro_forms(itp):
    assert itp.eval("(macroexpand-1 '(f x))") == datum("(f x)")


def test_macroexpand_does_not_evaluate(itp):
    itp.eval("(macroexpand '(and (car '()) 1))")
