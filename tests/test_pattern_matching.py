import pytest

from schemer.reader.parser import read
from schemer.syntax_rules.pattern import Repetition, match, pattern_variables
from schemer.types.symbol import Symbol

a, b, c, x, y = (Symbol(n) for n in "abcxy")
ELSE = Symbol("else")


def m(pattern_src: str, form_src: str, literals=()):
    [pattern] = read(pattern_src)
    [form] = read(form_src)
    return match(pattern, form, frozenset(Symbol(l) for l in literals))


def test_variable_binds_any_form():
    assert m("x", "(1 2 3)") == {x: [1, 2, 3]}


def test_wildcard_binds_nothing():
    assert m("(_ x)", "(1 2)") == {x: 2}


def test_literal_matches_only_identical_symbol():
    assert m("(else x)", "(else 1)", literals=["else"]) == {x: 1}
    assert m("(else x)", "(other 1)", literals=["else"]) is None


def test_literal_never_binds():
    bindings = m("(else x)", "(else 1)", literals=["else"])
    assert ELSE not in bindings


def test_fixed_list_requires_exact_length():
    assert m("(a b)", "(1 2)") == {a: 1, b: 2}
    assert m("(a b)", "(1)") is None
    assert m("(a b)", "(1 2 3)") is None


def test_list_pattern_does_not_match_atom():
    assert m("(a b)", "5") is None


@pytest.mark.parametrize(
    "pattern, form",
    [
        ('"step"', '"step"'),
        ("3", "3"),
        ("#t", "#t"),
    ],
)
def test_non_symbol_atoms_match_by_equality(pattern, form):
    assert m(pattern, form) == {}


def test_non_symbol_atoms_of_other_type_do_not_match():
    assert m("#t", "1") is None
    assert m('"step"', "step") is None


def test_ellipsis_zero_repetitions():
    assert m("(a ...)", "()") == {a: Repetition([])}


def test_ellipsis_captures_sequence():
    assert m("(a ...)", "(1 2 3)") == {a: Repetition([1, 2, 3])}


def test_ellipsis_with_leading_and_trailing_patterns():
    bindings = m("(a b ... c)", "(1 2 3 4)")
    assert bindings == {a: 1, b: Repetition([2, 3]), c: 4}


def test_ellipsis_needs_room_for_fixed_patterns():
    assert m("(a b ... c)", "(1)") is None


def test_captured_list_is_not_a_repetition():
    bindings = m("(a b ...)", "((1 2))")
    assert bindings[a] == [1, 2]
    assert bindings[b] == Repetition([])


def test_nested_ellipsis():
    bindings = m("((a b ...) ...)", "((1 2 3) (4) (5 6))")
    assert bindings[a] == Repetition([1, 4, 5])
    assert bindings[b] == Repetition([Repetition([2, 3]), Repetition([]), Repetition([6])])


def test_ellipsis_sub_pattern_failure_fails_whole_match():
    assert m("((a b) ...)", "((1 2) (3))") is None


def test_dotted_tail_captures_remaining_forms():
    assert m("(a . rest)", "(1 2 3)") == {a: 1, Symbol("rest"): [2, 3]}
    assert m("(a . rest)", "(1)") == {a: 1, Symbol("rest"): []}


def test_dotted_tail_against_dotted_form():
    assert m("(a . rest)", "(1 2 . 3)") == {a: 1, Symbol("rest"): ([2], 3)}


def test_do_binding_shape():
    bindings = m("((var init step ...) ...)", "((i 0 (+ i 1)) (acc '()))")
    assert bindings[Symbol("var")] == Repetition([Symbol("i"), Symbol("acc")])
    assert bindings[Symbol("step")] == Repetition(
        [Repetition([[Symbol("+"), Symbol("i"), 1]]), Repetition([])]
    )


def test_proper_pattern_rejects_improper_form():
    assert m("(a b)", "(1 . 2)") is None
    assert m("(a ...)", "(1 2 . 3)") is None


def test_pattern_variables_in_order():
    [pattern] = read("((name val) ... body1 . body2)")
    assert pattern_variables(pattern, frozenset()) == [
        Symbol("name"), Symbol("val"), Symbol("body1"), Symbol("body2")
    ]


def test_pattern_variables_skip_literals_and_wildcard():
    [pattern] = read("(_ else x ...)")
    assert pattern_variables(pattern, frozenset({ELSE})) == [x]
