"""Built-in procedures for the schemer runtime environment.

This module defines arithmetic, comparison, list processing, predicates,
string helpers, hash tables and the registration utility exposing them
to Scheme code.
Every builtin takes the calling environment and a list of evaluated
arguments.
"""
from __future__ import annotations

from numbers import Number

from schemer import LispValue
from schemer.types.char import Char
from schemer.types.environment import Environment
from schemer.types.errors import SchemeArityError, SchemeTypeError
from schemer.types.hash_table import HashTable
from schemer.types.lambda_fn import Lambda
from schemer.types.pairs import is_pair, join, split
from schemer.types.symbol import Symbol
from schemer.reader.parser import NUMBER_RE, parse_atom


def _exactly(name: str, expr: list[LispValue], n: int) -> None:
    if len(expr) != n:
        noun = "argument" if n == 1 else "arguments"
        raise SchemeArityError(f"{name} requires exactly {n} {noun}")


def _numbers(name: str, expr: list[LispValue]) -> None:
    for x in expr:
        if not is_number(x):
            raise SchemeTypeError(f"All arguments to {name} must be numbers")


def is_number(x: LispValue) -> bool:
    return isinstance(x, Number) and not isinstance(x, bool)


def _is_string(x: LispValue) -> bool:
    return isinstance(x, str) and not isinstance(x, Char)


def proper_list(value: LispValue, who: str) -> list[LispValue]:
    """Return the elements of a proper list, or raise SchemeTypeError."""
    if isinstance(value, list):
        return value
    from schemer.printer import to_string
    raise SchemeTypeError(f"{who}: expected a proper list, got {to_string(value)}")


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the numeric sum of all arguments; errors if any arg is non-numeric."""
    _numbers("+", expr)
    return sum(expr)


def sub(env: Environment, expr: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not expr:
        raise SchemeArityError("- requires at least 1 argument")
    _numbers("-", expr)
    if len(expr) == 1:
        return -expr[0]
    result = expr[0]
    for x in expr[1:]:
        result -= x
    return result


def mul(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the product of all arguments; errors if any arg is non-numeric."""
    _numbers("*", expr)
    result = 1
    for x in expr:
        result *= x
    return result


def _divide(a, b):
    if b == 0:
        raise ZeroDivisionError("Division by zero")
    if isinstance(a, int) and isinstance(b, int) and a % b == 0:
        return a // b
    return a / b


def div(env: Environment, expr: list[LispValue]) -> LispValue:
    """Divide left-to-right; with one arg returns the reciprocal.

    Exact integer quotients stay integers.
    """
    if not expr:
        raise SchemeArityError("/ requires at least 1 argument")
    _numbers("/", expr)
    if len(expr) == 1:
        return _divide(1, expr[0])
    result = expr[0]
    for x in expr[1:]:
        result = _divide(result, x)
    return result


def _chain(name: str, op):
    def compare(env: Environment, expr: list[LispValue]) -> bool:
        _numbers(name, expr)
        return all(op(a, b) for a, b in zip(expr, expr[1:]))

    compare.__name__ = name
    compare.__doc__ = f"Chainable {name}: #t if the relation holds for every adjacent pair."
    return compare


num_eq = _chain("=", lambda a, b: a == b)
lt = _chain("<", lambda a, b: a < b)
lte = _chain("<=", lambda a, b: a <= b)
gt = _chain(">", lambda a, b: a > b)
gte = _chain(">=", lambda a, b: a >= b)


# -------------------------------
# Equivalence
# -------------------------------
def is_eqv(a: LispValue, b: LispValue) -> bool:
    """Identity, except numbers compare by value within the same type,
    characters compare by value and the empty list is unique."""
    if a is b:
        return True
    if isinstance(a, list) and isinstance(b, list):
        return not a and not b
    if is_number(a) and is_number(b):
        return type(a) is type(b) and a == b
    if isinstance(a, Char) and isinstance(b, Char):
        return a == b
    return False


def is_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality over lists, dotted lists and strings."""
    if is_eqv(a, b):
        return True
    if _is_string(a) and _is_string(b):
        return a == b
    pa, pb = split(a), split(b)
    if pa is None or pb is None:
        return False
    (ia, ta), (ib, tb) = pa, pb
    if len(ia) != len(ib):
        return False
    return all(is_equal(x, y) for x, y in zip(ia, ib)) and is_equal(ta, tb)


def eq(env: Environment, expr: list[LispValue]) -> bool:
    _exactly("eq?", expr, 2)
    return is_eqv(*expr)


def eqv(env: Environment, expr: list[LispValue]) -> bool:
    _exactly("eqv?", expr, 2)
    return is_eqv(*expr)


def equal(env: Environment, expr: list[LispValue]) -> bool:
    _exactly("equal?", expr, 2)
    return is_equal(*expr)


def logical_not(env: Environment, expr: list[LispValue]) -> bool:
    """Logical NOT for a single value; only #f is false."""
    _exactly("not", expr, 1)
    return expr[0] is False


# -------------------------------
# Lists
# -------------------------------
def cons(env: Environment, expr: list[LispValue]) -> LispValue:
    """Prepend head to tail; a non-list tail makes a dotted list."""
    _exactly("cons", expr, 2)
    head, tail = expr
    return join([head], tail)


def car(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return the first element of a pair; the empty list is an error."""
    _exactly("car", expr, 1)
    parts = split(expr[0])
    if parts is None or not parts[0]:
        from schemer.printer import to_string
        raise SchemeTypeError(f"car: expected a pair, got {to_string(expr[0])}")
    return parts[0][0]


def cdr(env: Environment, expr: list[LispValue]) -> LispValue:
    """Return everything after the first element of a pair."""
    _exactly("cdr", expr, 1)
    parts = split(expr[0])
    if parts is None or not parts[0]:
        from schemer.printer import to_string
        raise SchemeTypeError(f"cdr: expected a pair, got {to_string(expr[0])}")
    items, tail = parts
    return join(items[1:], tail)


def list_builtin(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    """Construct a list from the provided arguments (identity)."""
    return list(expr)


def append(env: Environment, expr: list[LispValue]) -> LispValue:
    """Concatenate lists; the last argument may be any value and becomes the tail."""
    if not expr:
        return []
    result: list[LispValue] = []
    for item in expr[:-1]:
        result.extend(proper_list(item, "append"))
    return join(result, expr[-1])


def length(env: Environment, expr: list[LispValue]) -> int:
    _exactly("length", expr, 1)
    return len(proper_list(expr[0], "length"))


def reverse(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    _exactly("reverse", expr, 1)
    return list(reversed(proper_list(expr[0], "reverse")))


# -------------------------------
# Predicates
# -------------------------------
def _predicate(name: str, test):
    def predicate(env: Environment, expr: list[LispValue]) -> bool:
        _exactly(name, expr, 1)
        return test(expr[0])

    predicate.__name__ = name
    return predicate


null = _predicate("null?", lambda x: isinstance(x, list) and not x)
pair = _predicate("pair?", is_pair)
list_p = _predicate("list?", lambda x: isinstance(x, list))
boolean_p = _predicate("boolean?", lambda x: isinstance(x, bool))
number_p = _predicate("number?", is_number)
string_p = _predicate("string?", _is_string)
char_p = _predicate("char?", lambda x: isinstance(x, Char))
symbol_p = _predicate("symbol?", lambda x: isinstance(x, Symbol))
procedure_p = _predicate("procedure?", lambda x: isinstance(x, Lambda) or callable(x))


# -------------------------------
# Strings and symbols
# -------------------------------
def _strings(name: str, expr: list[LispValue]) -> None:
    for x in expr:
        if not _is_string(x):
            raise SchemeTypeError(f"All arguments to {name} must be strings")


def string_append(env: Environment, expr: list[LispValue]) -> str:
    _strings("string-append", expr)
    return "".join(expr)


def string_length(env: Environment, expr: list[LispValue]) -> int:
    _exactly("string-length", expr, 1)
    _strings("string-length", expr)
    return len(expr[0])


def string_eq(env: Environment, expr: list[LispValue]) -> bool:
    _strings("string=?", expr)
    return all(a == b for a, b in zip(expr, expr[1:]))


def symbol_to_string(env: Environment, expr: list[LispValue]) -> str:
    """(symbol->string x) -> the name of symbol x"""
    _exactly("symbol->string", expr, 1)
    if not isinstance(expr[0], Symbol):
        raise SchemeTypeError("symbol->string expects a symbol")
    return expr[0].id


def string_to_symbol(env: Environment, expr: list[LispValue]) -> Symbol:
    """(string->symbol x) -> Symbol corresponding to string x"""
    _exactly("string->symbol", expr, 1)
    _strings("string->symbol", expr)
    return Symbol(expr[0])


def string_to_number(env: Environment, expr: list[LispValue]) -> LispValue:
    """(string->number s) -> the number s denotes, or #f."""
    _exactly("string->number", expr, 1)
    _strings("string->number", expr)
    text = expr[0].strip()
    if not NUMBER_RE.fullmatch(text):
        return False
    return parse_atom(text)


def string_to_list(env: Environment, expr: list[LispValue]) -> list[Char]:
    """(string->list s) -> the characters of s"""
    _exactly("string->list", expr, 1)
    _strings("string->list", expr)
    return [Char(c) for c in expr[0]]


def list_to_string(env: Environment, expr: list[LispValue]) -> str:
    """(list->string chars) -> the string made of chars"""
    _exactly("list->string", expr, 1)
    chars = proper_list(expr[0], "list->string")
    for c in chars:
        if not isinstance(c, Char):
            raise SchemeTypeError("list->string expects a list of characters")
    return "".join(str(c) for c in chars)


def _index(name: str, value: LispValue) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise SchemeTypeError(f"{name} expects integer indices")
    return value


def substring(env: Environment, expr: list[LispValue]) -> str:
    """(substring s start [end]) -> characters start (inclusive) to end (exclusive)"""
    if len(expr) not in (2, 3):
        raise SchemeArityError("Usage: (substring str start [end])")
    _strings("substring", expr[:1])
    s = expr[0]
    start = _index("substring", expr[1])
    end = _index("substring", expr[2]) if len(expr) == 3 else len(s)
    if not 0 <= start <= end <= len(s):
        raise SchemeTypeError(f"Cannot index string from {start} to {end}")
    return s[start:end]


def string_split(env: Environment, expr: list[LispValue]) -> list[str]:
    """(string-split s ch) -> the pieces of s between occurrences of ch"""
    _exactly("string-split", expr, 2)
    _strings("string-split", expr[:1])
    if not isinstance(expr[1], Char):
        raise SchemeTypeError("string-split expects a character separator")
    return expr[0].split(str(expr[1]))


def string_contains(env: Environment, expr: list[LispValue]) -> LispValue:
    """(string-contains s1 s2) -> index of the first s2 in s1, or #f"""
    _exactly("string-contains", expr, 2)
    _strings("string-contains", expr)
    index = expr[0].find(expr[1])
    return index if index >= 0 else False


def string_prefix_p(env: Environment, expr: list[LispValue]) -> bool:
    """(string-prefix? prefix s) -> #t if s starts with prefix"""
    _exactly("string-prefix?", expr, 2)
    _strings("string-prefix?", expr)
    prefix, s = expr
    return s.startswith(prefix)


# -------------------------------
# Hash tables
# -------------------------------
def make_hash_table(env: Environment, expr: list[LispValue]) -> HashTable:
    _exactly("make-hash-table", expr, 0)
    return HashTable()


def _table(name: str, value: LispValue) -> HashTable:
    if not isinstance(value, HashTable):
        raise SchemeTypeError(f"{name} expects a hash table")
    return value


def hash_ref(env: Environment, expr: list[LispValue]) -> LispValue:
    """(hash-ref table key) -> the value stored under key, or #f"""
    _exactly("hash-ref", expr, 2)
    table, key = _table("hash-ref", expr[0]), expr[1]
    # Procedures are never keys
    if isinstance(key, Lambda) or callable(key):
        return False
    return table.get(key)


def hash_set(env: Environment, expr: list[LispValue]) -> LispValue:
    """(hash-set! table key value) -> value, after storing it under key"""
    _exactly("hash-set!", expr, 3)
    table, key, value = _table("hash-set!", expr[0]), expr[1], expr[2]
    table.set(key, value)
    return value


def register(env: Environment) -> None:
    """Register all builtin procedures into the given environment."""
    from schemer.builtin.procedures import apply, map_builtin, for_each

    env.update(
        {
            Symbol("+"): add,
            Symbol("-"): sub,
            Symbol("*"): mul,
            Symbol("/"): div,
            Symbol("="): num_eq,
            Symbol("<"): lt,
            Symbol("<="): lte,
            Symbol(">"): gt,
            Symbol(">="): gte,
            Symbol("eq?"): eq,
            Symbol("eqv?"): eqv,
            Symbol("equal?"): equal,
            Symbol("not"): logical_not,
            Symbol("cons"): cons,
            Symbol("car"): car,
            Symbol("cdr"): cdr,
            Symbol("list"): list_builtin,
            Symbol("append"): append,
            Symbol("length"): length,
            Symbol("reverse"): reverse,
            Symbol("null?"): null,
            Symbol("pair?"): pair,
            Symbol("list?"): list_p,
            Symbol("boolean?"): boolean_p,
            Symbol("number?"): number_p,
            Symbol("string?"): string_p,
            Symbol("char?"): char_p,
            Symbol("symbol?"): symbol_p,
            Symbol("procedure?"): procedure_p,
            Symbol("string-append"): string_append,
            Symbol("string-length"): string_length,
            Symbol("string=?"): string_eq,
            Symbol("symbol->string"): symbol_to_string,
            Symbol("string->symbol"): string_to_symbol,
            Symbol("string->number"): string_to_number,
            Symbol("string->list"): string_to_list,
            Symbol("list->string"): list_to_string,
            Symbol("substring"): substring,
            Symbol("string-split"): string_split,
            Symbol("string-contains"): string_contains,
            Symbol("string-prefix?"): string_prefix_p,
            Symbol("make-hash-table"): make_hash_table,
            Symbol("hash-ref"): hash_ref,
            Symbol("hash-set!"): hash_set,
            Symbol("apply"): apply,
            Symbol("map"): map_builtin,
            Symbol("for-each"): for_each,
        }
    )
