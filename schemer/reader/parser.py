"""
  Scheme Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits Python primitives instead of cons cells:

    - lists -> Python list
    - dotted lists -> (list_part, tail), normalised so (a . (b)) reads as (a b)
    - symbols -> Symbol (interned)
    - #t / #f -> True / False
    - strings -> str
    - characters -> Char (a one-character str)
    - numbers -> int/float, #b/#o/#x radix integers
    - quote forms -> [Symbol("quote"), expr], etc.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from schemer import SExpression
from schemer.types.char import Char
from schemer.types.errors import SchemeSyntaxError
from schemer.types.pairs import join
from schemer.types.symbol import Symbol, QUOTE, QUASIQUOTE, UNQUOTE, UNQUOTE_SPLICING


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<ml_start>#\|)"  # multi-line comment start
    r"|(?P<quote>[\'`])"  # ' and `
    r"|(?P<unquote>,@|,)"  # , and ,@
    r"|(?P<lparen>[(\[])"  # ( or [
    r"|(?P<rparen>[)\]])"  # ) or ]
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r"|(?P<char>#\\(?:newline|space|tab|return|nul|.))"  # character literals, named or single-char
    r"|(?P<boolean>#true|#false|#t|#f)(?![^\s()\[\]\";])"  # booleans
    r"|(?P<radix>#b[01]+|#o[0-7]+|#x[0-9A-Fa-f]+|#d[0-9]+)"  # binary, octal, hex, decimal
    r'|(?P<symbol>[^\s()\[\]\'",;`]+)'  # fallback: symbols and numbers
    r")",
    re.DOTALL,
)

NUMBER_RE = re.compile(r"[+-]?(\d+\.?\d*([eE][+-]?\d+)?|\.\d+([eE][+-]?\d+)?)")

NAMED_CHARS: dict[str, str] = {
    "space": " ",
    "newline": "\n",
    "tab": "\t",
    "return": "\r",
    "nul": "\0",
}

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
}

QUOTE_FORMS: dict[str, Symbol] = {
    "'": QUOTE,
    "`": QUASIQUOTE,
    ",": UNQUOTE,
    ",@": UNQUOTE_SPLICING,
}

DOT = "."


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)

    def skip_whitespace_and_comments():
        nonlocal pos
        while pos < n:
            match = TOKEN_RE.match(source, pos)
            if not match:
                if source[pos].isspace():
                    pos += 1
                    continue
                raise SchemeSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
            if match.group("comment"):
                pos = match.end()
            elif match.group("ml_start"):
                pos = match.end()
                depth = 1
                while depth > 0:
                    if pos >= n:
                        raise SchemeSyntaxError("Unterminated multi-line comment")
                    if source.startswith("#|", pos):
                        depth += 1
                        pos += 2
                    elif source.startswith("|#", pos):
                        depth -= 1
                        pos += 2
                    else:
                        pos += 1
            else:
                break

    while pos < n:
        skip_whitespace_and_comments()
        if pos >= n:
            break

        m = TOKEN_RE.match(source, pos)
        if not m:
            raise SchemeSyntaxError(f"Unknown token at {pos}: {source[pos:pos + 10]!r}")
        for nm in TOKEN_RE.groupindex:
            if m.group(nm):
                yield nm, m.group(nm)
                pos = m.end()
                break
        else:
            raise SchemeSyntaxError(f"Unknown token at {pos}: {source[pos:pos + 10]!r}")


def _unescape(body: str) -> str:
    def repl(m: re.Match) -> str:
        ch = m.group(1)
        if ch not in STRING_ESCAPES:
            raise SchemeSyntaxError(f"Unknown string escape \\{ch}")
        return STRING_ESCAPES[ch]
    return re.sub(r"\\(.)", repl, body, flags=re.DOTALL)


def parse_atom(tok_val: str) -> SExpression:
    """Classify a bare token as a number or a symbol."""
    if NUMBER_RE.fullmatch(tok_val):
        try:
            return int(tok_val)
        except ValueError:
            return float(tok_val)
    return Symbol(tok_val)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression:
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            if tok_val == DOT:
                raise SchemeSyntaxError("Unexpected '.' outside of a list")
            return parse_atom(tok_val)

        if tok_type == "boolean":
            self.advance()
            return tok_val in ("#t", "#true")

        # Quote forms
        if tok_type in ("quote", "unquote"):
            self.advance()
            if self.peek()[0] is None:
                raise SchemeSyntaxError(f"Expected a datum after {tok_val}")
            expr = self.parse_expr()
            return [QUOTE_FORMS[tok_val], expr]

        # List or dotted list
        if tok_type == "lparen":
            self.advance()
            items: list[SExpression] = []
            while True:
                kind, val = self.peek()
                if kind == "rparen":
                    self.advance()
                    return items
                if kind is None:
                    raise SchemeSyntaxError("Unmatched '('")
                if kind == "symbol" and val == DOT:
                    self.advance()
                    if not items:
                        raise SchemeSyntaxError("Expected a datum before '.'")
                    if self.peek()[0] in (None, "rparen"):
                        raise SchemeSyntaxError("Expected a datum after '.'")
                    cdr_expr = self.parse_expr()
                    if self.peek()[0] != "rparen":
                        raise SchemeSyntaxError("Expected ')' after dotted cdr")
                    self.advance()
                    return join(items, cdr_expr)
                items.append(self.parse_expr())

        if tok_type == "rparen":
            raise SchemeSyntaxError("Unexpected ')'")

        if tok_type == "char":
            self.advance()
            val = tok_val[2:]  # strip off "#\"
            if len(val) == 1:
                return Char(val)
            return Char(NAMED_CHARS[val.lower()])

        # String
        if tok_type == "string":
            self.advance()
            return _unescape(tok_val[1:-1])

        # Radix numbers
        if tok_type == "radix":
            self.advance()
            base = {"b": 2, "o": 8, "x": 16, "d": 10}[tok_val[1]]
            return int(tok_val[2:], base)

        raise SchemeSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> list[SExpression]:
    """Parse every datum in `source`."""
    return list(TokenStream(lex(source)).parse_all())
