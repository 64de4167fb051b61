"""
  iku Lexer

- Lazy: tokens are scanned one at a time as the Lexer is iterated.
- Emits `(start, Token, end)` triples, where start/end are byte offsets.
- Whitespace and `//` line comments are skipped between tokens.
- Automatic semicolon insertion: a newline inside skipped text becomes a
  single `;` token when the previous token can end a statement.
- Errors are data: the first unscannable run is yielded as an IkuLexError and
  ends the pass (no resynchronisation).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Union

from iku.errors import IkuLexError

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class TokenKind(Enum):
    OPEN_BRACE = "{"
    CLOSE_BRACE = "}"
    OPEN_PARENS = "("
    CLOSE_PARENS = ")"
    SEMICOLON = ";"
    COMMA = ","
    DEFINE = ":="
    EQUALS = "="
    DOUBLE_EQUALS = "=="
    NOT_EQUALS = "!="
    LESS = "<"
    LESS_EQUALS = "<="
    GREATER = ">"
    GREATER_EQUALS = ">="
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    BANG = "!"
    AND_AND = "&&"
    OR_OR = "||"
    FUNC = "func"
    IF = "if"
    ELSE = "else"
    BOOL = "bool"
    STRING = "string"
    INT = "int"
    NAME = "name"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: str | int | bool | None = None

    def __str__(self) -> str:
        if self.kind is TokenKind.STRING:
            return f'"{self.value}"'
        if self.kind is TokenKind.BOOL:
            return "true" if self.value else "false"
        if self.value is not None:
            return str(self.value)
        return self.kind.value


@dataclass(frozen=True, order=True)
class Location:
    """A byte offset inside some piece of source text."""
    offset: int = 0


Span = Union[tuple[Location, Token, Location], IkuLexError]


# Fixed symbols and keywords. The first pattern that matches wins, so longer
# operators come before their prefixes; keywords only match whole words.
SIMPLE_MATCHES: list[tuple[str, Token]] = [
    (r"\{", Token(TokenKind.OPEN_BRACE)),
    (r"\}", Token(TokenKind.CLOSE_BRACE)),
    (r"\(", Token(TokenKind.OPEN_PARENS)),
    (r"\)", Token(TokenKind.CLOSE_PARENS)),
    (r";", Token(TokenKind.SEMICOLON)),
    (r":=", Token(TokenKind.DEFINE)),
    (r"==", Token(TokenKind.DOUBLE_EQUALS)),
    (r"!=", Token(TokenKind.NOT_EQUALS)),
    (r"=", Token(TokenKind.EQUALS)),
    (r"<=", Token(TokenKind.LESS_EQUALS)),
    (r"<", Token(TokenKind.LESS)),
    (r">=", Token(TokenKind.GREATER_EQUALS)),
    (r">", Token(TokenKind.GREATER)),
    (r",", Token(TokenKind.COMMA)),
    (r"\+", Token(TokenKind.PLUS)),
    (r"-(?![0-9])", Token(TokenKind.MINUS)),  # "-1" is an integer literal
    (r"\*", Token(TokenKind.STAR)),
    (r"/", Token(TokenKind.SLASH)),
    (r"%", Token(TokenKind.PERCENT)),
    (r"&&", Token(TokenKind.AND_AND)),
    (r"\|\|", Token(TokenKind.OR_OR)),
    (r"!", Token(TokenKind.BANG)),
    (r"true\b", Token(TokenKind.BOOL, True)),
    (r"false\b", Token(TokenKind.BOOL, False)),
    (r"func\b", Token(TokenKind.FUNC)),
    (r"if\b", Token(TokenKind.IF)),
    (r"else\b", Token(TokenKind.ELSE)),
]

SIMPLE_RE = re.compile(
    "|".join(f"(?P<t{i}>{pattern})" for i, (pattern, _) in enumerate(SIMPLE_MATCHES))
)
SKIP_RE = re.compile(r"(?://[^\n]*|\s)+")
NAME_RE = re.compile(r"[a-z]\w*")
STRING_RE = re.compile(r'"([^"]*)"')
INT_RE = re.compile(r"-?[0-9]+")

# Tokens after which a newline ends the statement.
TERMINATORS = frozenset({
    TokenKind.CLOSE_PARENS,
    TokenKind.CLOSE_BRACE,
    TokenKind.INT,
    TokenKind.STRING,
    TokenKind.NAME,
})

ESCAPES: dict[str, str] = {
    "n": "\n",
    "\\": "\\",
    "r": "\r",
    "t": "\t",
}


def process_string_literal(text: str) -> str:
    """Decode escape sequences in the interior of a string literal.

    Unknown escapes are kept as backslash plus character.
    """
    out: list[str] = []
    escaping = False
    for c in text:
        if escaping:
            out.append(ESCAPES.get(c, "\\" + c))
            escaping = False
        elif c == "\\":
            escaping = True
        else:
            out.append(c)
    return "".join(out)


class Lexer:
    """Iterator over the spans of `data`. Consumable once, front to back."""

    def __init__(self, data: str):
        self.data = data
        self.pos = 0
        self.byte_pos = 0
        self.can_insert_semi = False

    def __iter__(self) -> Lexer:
        return self

    def __next__(self) -> Span:
        res = self._advance()
        if res is None:
            raise StopIteration
        if not isinstance(res, IkuLexError):
            _, tok, _ = res
            self.can_insert_semi = tok.kind in TERMINATORS
        return res

    def _consume(self, text: str) -> tuple[Location, Location]:
        start = Location(self.byte_pos)
        self.pos += len(text)
        self.byte_pos += len(text.encode("utf-8"))
        return start, Location(self.byte_pos)

    def _fail(self, message: str) -> IkuLexError:
        error = IkuLexError(f"{message} at position {self.byte_pos}", self.byte_pos)
        # Nothing more can be scanned in this pass
        self._consume(self.data[self.pos:])
        return error

    def _advance(self) -> Span | None:
        m = SKIP_RE.match(self.data, self.pos)
        if m:
            skipped = m.group()
            start, end = self._consume(skipped)
            # Several newlines in one run still give a single semicolon
            if self.can_insert_semi and "\n" in skipped:
                return start, Token(TokenKind.SEMICOLON), end

        if self.pos >= len(self.data):
            return None

        m = SIMPLE_RE.match(self.data, self.pos)
        if m:
            token = SIMPLE_MATCHES[int(m.lastgroup[1:])][1]
            start, end = self._consume(m.group())
            return start, token, end

        m = NAME_RE.match(self.data, self.pos)
        if m:
            start, end = self._consume(m.group())
            return start, Token(TokenKind.NAME, m.group()), end

        m = STRING_RE.match(self.data, self.pos)
        if m:
            value = process_string_literal(m.group(1))
            start, end = self._consume(m.group())
            return start, Token(TokenKind.STRING, value), end

        m = INT_RE.match(self.data, self.pos)
        if m:
            value = int(m.group())
            if not INT64_MIN <= value <= INT64_MAX:
                return self._fail("Integer literal out of range")
            start, end = self._consume(m.group())
            return start, Token(TokenKind.INT, value), end

        return self._fail("Unrecognized characters")


def lex(source: str) -> Iterator[Span]:
    """Token generator over `source`; a fresh call restarts from scratch."""
    return Lexer(source)
