import pytest

from schemer.reader.parser import read
from schemer.syntax_rules.transformer import SyntaxRules
from schemer.types.errors import SchemeNameError, SchemeSyntaxError
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.symbol import Symbol


def define(macros: MacroEnvironment, name: str, clauses: str, literals=()):
    rules = [(p, t) for p, t in read(clauses)]
    macros.define_macro(Symbol(name), SyntaxRules([Symbol(l) for l in literals], rules))


def parse(source: str):
    [form] = read(source)
    return form


@pytest.fixture
def macro_env():
    macros = MacroEnvironment()
    define(macros, "inc", "((_ x) (+ x 1))")
    define(macros, "twice", "((_ x) (inc (inc x)))")
    return macros


def test_is_macro_use(macro_env):
    assert macro_env.is_macro_use(parse("(inc 1)"))
    assert not macro_env.is_macro_use(parse("(f 1)"))
    assert not macro_env.is_macro_use(parse("inc"))
    assert not macro_env.is_macro_use([])


def test_expand_1_expands_head_once(macro_env):
    assert macro_env.expand_1(parse("(twice 3)")) == parse("(inc (inc 3))")


def test_expand_1_leaves_non_macro_forms(macro_env):
    form = parse("(f (inc 1))")
    assert macro_env.expand_1(form) is form


def test_macro_expand_head_reaches_fixed_point(macro_env):
    define(macro_env, "alias", "((_ x) (twice x))")
    assert macro_env.macro_expand_head(parse("(alias 3)")) == parse("(+ (inc 3) 1)")


def test_macro_expand_all_recurses_into_subforms(macro_env):
    assert macro_env.macro_expand_all(parse("(f (twice 3))")) == parse("(f (+ (+ 3 1) 1))")


def test_expand_rewrites_then_expands(macro_env):
    assert macro_env.expand(Symbol("twice"), parse("(twice 0)")) == parse("(+ (+ 0 1) 1)")


def test_expand_unknown_macro(macro_env):
    with pytest.raises(SchemeNameError):
        macro_env.expand(Symbol("nope"), parse("(nope)"))


@pytest.mark.parametrize(
    "source",
    [
        "(quote (inc 1))",
        "(quasiquote (inc 1))",
    ],
)
def test_quoted_forms_are_not_expanded(macro_env, source):
    form = parse(source)
    assert macro_env.macro_expand_all(form) == form


def test_binding_positions_are_not_expanded(macro_env):
    form = parse("(lambda (inc) (inc 1))")
    # Body is expanded, formals are not
    assert macro_env.macro_expand_all(form) == parse("(lambda (inc) (+ 1 1))")


def test_letrec_binding_names_are_kept(macro_env):
    form = parse("(letrec ((inc (inc 1))) inc)")
    assert macro_env.macro_expand_all(form) == parse("(letrec ((inc (+ 1 1))) inc)")


def test_dotted_forms_are_expanded(macro_env):
    assert macro_env.macro_expand_all(parse("((inc 1) . 5)")) == parse("((+ 1 1) . 5)")


def test_redefinition_is_rejected(macro_env):
    with pytest.raises(SchemeNameError):
        define(macro_env, "inc", "((_ x) x)")


def test_runaway_expansion_is_bounded():
    macros = MacroEnvironment(max_steps=50)
    define(macros, "forever", "((_ x) (forever x))")
    with pytest.raises(SchemeSyntaxError, match="did not finish") as info:
        macros.macro_expand_head(parse("(forever 1)"))
    assert info.value.macro is Symbol("forever")


def test_max_steps_from_environment(monkeypatch):
    monkeypatch.setenv("SCHEMER_MAX_EXPANSION_STEPS", "7")
    assert MacroEnvironment().max_steps == 7


def test_gen_sym_is_fresh():
    macros = MacroEnvironment()
    assert macros.gen_sym("t") is not macros.gen_sym("t")
