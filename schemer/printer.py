"""Render values in Scheme notation."""

from __future__ import annotations

from io import StringIO

from schemer import LispValue
from schemer.types.char import Char
from schemer.types.hash_table import HashTable
from schemer.types.lambda_fn import Lambda
from schemer.types.pairs import split
from schemer.types.symbol import Symbol, QUOTE, QUASIQUOTE, UNQUOTE, UNQUOTE_SPLICING

_ABBREVIATIONS = {
    QUOTE: "'",
    QUASIQUOTE: "`",
    UNQUOTE: ",",
    UNQUOTE_SPLICING: ",@",
}

_CHAR_NAMES = {
    " ": "space",
    "\n": "newline",
    "\t": "tab",
    "\r": "return",
    "\0": "nul",
}

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\t": "\\t",
    "\r": "\\r",
}


def to_string(value: LispValue) -> str:
    with StringIO() as buffer:
        _write(value, buffer)
        return buffer.getvalue()


def _write(value: LispValue, out: StringIO) -> None:
    if value is True:
        out.write("#t")
    elif value is False:
        out.write("#f")
    elif isinstance(value, Symbol):
        out.write(value.id)
    elif isinstance(value, Char):
        out.write("#\\")
        out.write(_CHAR_NAMES.get(value, value))
    elif isinstance(value, str):
        out.write('"')
        out.write("".join(_ESCAPES.get(c, c) for c in value))
        out.write('"')
    elif isinstance(value, HashTable):
        out.write(f"#<hash-table {len(value)}>")
    elif isinstance(value, Lambda):
        out.write(repr(value))
    elif callable(value) and not isinstance(value, (list, tuple)):
        name = getattr(value, "__name__", "builtin")
        out.write(f"#<procedure {name}>")
    elif (parts := split(value)) is not None:
        elements, tail = parts
        if len(elements) == 2 and isinstance(tail, list) and isinstance(elements[0], Symbol) and elements[0] in _ABBREVIATIONS:
            out.write(_ABBREVIATIONS[elements[0]])
            _write(elements[1], out)
            return
        out.write("(")
        for i, item in enumerate(elements):
            if i:
                out.write(" ")
            _write(item, out)
        if not isinstance(tail, list):
            out.write(" . ")
            _write(tail, out)
        out.write(")")
    else:
        out.write(str(value) if isinstance(value, (int, float)) else repr(value))
