"""
  iku Parser

Recursive descent over the Lexer's spans, producing a Program.

    program   := (function | ';')*
    function  := 'func' NAME '(' [param (',' param)*] ')' body
    param     := NAME [NAME]
    body      := '{' [stmt (';' stmt)*] '}'
    stmt      := NAME ':=' expr | NAME '=' expr | expr
    expr      := and ('||' and)*
    and       := cmp ('&&' cmp)*
    cmp       := sum [cmp_op sum]
    sum       := term (('+' | '-') term)*
    term      := unary (('*' | '/' | '%') unary)*
    unary     := '!' unary | primary
    primary   := INT | STRING | BOOL | NAME | NAME '(' args ')' | '(' tuple ')'
               | body | 'if' expr body ['else' (body | if)]
"""

from __future__ import annotations

from typing import Iterable, Optional

from iku.errors import IkuLexError, IkuSyntaxError
from iku.reader.lexer import Lexer, Span, Token, TokenKind
from iku.types.ast import (
    Assign,
    BinOp,
    Block,
    Call,
    ConditionalOp,
    ConditionalOperator,
    Declare,
    Expr,
    Function,
    If,
    Lit,
    MakeTuple,
    Name,
    Not,
    Operator,
    Param,
    Program,
)

COMPARISONS: dict[TokenKind, Operator] = {
    TokenKind.DOUBLE_EQUALS: Operator.EQUALS,
    TokenKind.NOT_EQUALS: Operator.NOT_EQUALS,
    TokenKind.LESS: Operator.LESS,
    TokenKind.LESS_EQUALS: Operator.LESS_EQUALS,
    TokenKind.GREATER: Operator.GREATER,
    TokenKind.GREATER_EQUALS: Operator.GREATER_EQUALS,
}
SUMS: dict[TokenKind, Operator] = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUB,
}
TERMS: dict[TokenKind, Operator] = {
    TokenKind.STAR: Operator.MUL,
    TokenKind.SLASH: Operator.DIV,
    TokenKind.PERCENT: Operator.MOD,
}
LITERALS = (TokenKind.INT, TokenKind.STRING, TokenKind.BOOL)


class TokenStream:
    def __init__(self, spans: Iterable[Span]):
        self.spans = iter(spans)
        self.buffer: list[tuple[Token, int]] = []
        self.end = 0

    def _fill(self, n: int) -> None:
        while len(self.buffer) < n:
            span = next(self.spans, None)
            if span is None:
                return
            if isinstance(span, IkuLexError):
                raise span
            start, token, end = span
            self.buffer.append((token, start.offset))
            self.end = end.offset

    def peek(self, ahead: int = 0) -> Optional[Token]:
        self._fill(ahead + 1)
        if len(self.buffer) <= ahead:
            return None
        return self.buffer[ahead][0]

    def position(self) -> int:
        self._fill(1)
        return self.buffer[0][1] if self.buffer else self.end

    def at(self, kind: TokenKind) -> bool:
        tok = self.peek()
        return tok is not None and tok.kind is kind

    def advance(self) -> Token:
        self._fill(1)
        if not self.buffer:
            raise IkuSyntaxError("Unexpected end of input", self.end)
        return self.buffer.pop(0)[0]

    def expect(self, kind: TokenKind) -> Token:
        tok = self.peek()
        if tok is None or tok.kind is not kind:
            found = "end of input" if tok is None else f"'{tok}'"
            raise IkuSyntaxError(f"Expected '{kind.value}' but found {found}", self.position())
        return self.advance()

    def skip_semicolons(self) -> None:
        while self.at(TokenKind.SEMICOLON):
            self.advance()

    # ------------------------
    # Declarations
    # ------------------------
    def parse_program(self) -> Program:
        functions: list[Function] = []
        self.skip_semicolons()
        while self.peek() is not None:
            functions.append(self.parse_function())
            self.skip_semicolons()
        return Program(tuple(functions))

    def parse_function(self) -> Function:
        self.expect(TokenKind.FUNC)
        name = self.expect(TokenKind.NAME).value
        self.expect(TokenKind.OPEN_PARENS)
        params: list[Param] = []
        if not self.at(TokenKind.CLOSE_PARENS):
            params.append(self.parse_param())
            while self.at(TokenKind.COMMA):
                self.advance()
                params.append(self.parse_param())
        self.expect(TokenKind.CLOSE_PARENS)
        return Function(name, tuple(params), self.parse_body())

    def parse_param(self) -> Param:
        name = self.expect(TokenKind.NAME).value
        annotation = None
        if self.at(TokenKind.NAME):
            annotation = self.advance().value
        return Param(name, annotation)

    def parse_body(self) -> tuple[Expr, ...]:
        self.expect(TokenKind.OPEN_BRACE)
        exprs: list[Expr] = []
        self.skip_semicolons()
        while not self.at(TokenKind.CLOSE_BRACE):
            exprs.append(self.parse_statement())
            if not self.at(TokenKind.CLOSE_BRACE):
                self.expect(TokenKind.SEMICOLON)
                self.skip_semicolons()
        self.expect(TokenKind.CLOSE_BRACE)
        return tuple(exprs)

    def parse_statement(self) -> Expr:
        tok = self.peek()
        if tok is not None and tok.kind is TokenKind.NAME:
            nxt = self.peek(1)
            if nxt is not None and nxt.kind is TokenKind.DEFINE:
                self.advance()
                self.advance()
                return Declare(tok.value, self.parse_expr())
            if nxt is not None and nxt.kind is TokenKind.EQUALS:
                self.advance()
                self.advance()
                return Assign(tok.value, self.parse_expr())
        return self.parse_expr()

    # ------------------------
    # Expressions, lowest precedence first
    # ------------------------
    def parse_expr(self) -> Expr:
        left = self.parse_and()
        while self.at(TokenKind.OR_OR):
            self.advance()
            left = ConditionalOp(ConditionalOperator.OR, left, self.parse_and())
        return left

    def parse_and(self) -> Expr:
        left = self.parse_comparison()
        while self.at(TokenKind.AND_AND):
            self.advance()
            left = ConditionalOp(ConditionalOperator.AND, left, self.parse_comparison())
        return left

    def parse_comparison(self) -> Expr:
        left = self.parse_sum()
        tok = self.peek()
        if tok is not None and tok.kind in COMPARISONS:
            self.advance()
            left = BinOp(COMPARISONS[tok.kind], left, self.parse_sum())
        return left

    def parse_sum(self) -> Expr:
        left = self.parse_term()
        while (tok := self.peek()) is not None:
            if tok.kind in SUMS:
                self.advance()
                left = BinOp(SUMS[tok.kind], left, self.parse_term())
            elif tok.kind is TokenKind.INT and tok.value < 0:
                # `n-1` lexes as NAME INT(-1); the sign is the subtraction
                self.advance()
                left = BinOp(Operator.ADD, left, self.parse_term(Lit(tok.value)))
            else:
                break
        return left

    def parse_term(self, left: Optional[Expr] = None) -> Expr:
        if left is None:
            left = self.parse_unary()
        while (tok := self.peek()) is not None and tok.kind in TERMS:
            self.advance()
            left = BinOp(TERMS[tok.kind], left, self.parse_unary())
        return left

    def parse_unary(self) -> Expr:
        if self.at(TokenKind.BANG):
            self.advance()
            return Not(self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        tok = self.peek()
        if tok is None:
            raise IkuSyntaxError("Unexpected end of input", self.position())

        if tok.kind in LITERALS:
            self.advance()
            return Lit(tok.value)

        if tok.kind is TokenKind.NAME:
            self.advance()
            if self.at(TokenKind.OPEN_PARENS):
                self.advance()
                return Call(tok.value, self.parse_arguments())
            return Name(tok.value)

        if tok.kind is TokenKind.OPEN_PARENS:
            return self.parse_parenthesised()

        if tok.kind is TokenKind.OPEN_BRACE:
            return Block(self.parse_body())

        if tok.kind is TokenKind.IF:
            return self.parse_if()

        raise IkuSyntaxError(f"Unexpected token '{tok}'", self.position())

    def parse_arguments(self) -> tuple[Expr, ...]:
        # Opening parenthesis already consumed
        args: list[Expr] = []
        if not self.at(TokenKind.CLOSE_PARENS):
            args.append(self.parse_expr())
            while self.at(TokenKind.COMMA):
                self.advance()
                args.append(self.parse_expr())
        self.expect(TokenKind.CLOSE_PARENS)
        return tuple(args)

    def parse_parenthesised(self) -> Expr:
        """`()` and `(a,)` are tuples, `(a)` is grouping, `(a, b)` a tuple."""
        self.expect(TokenKind.OPEN_PARENS)
        if self.at(TokenKind.CLOSE_PARENS):
            self.advance()
            return MakeTuple(())
        first = self.parse_expr()
        if self.at(TokenKind.CLOSE_PARENS):
            self.advance()
            return first
        items = [first]
        while self.at(TokenKind.COMMA):
            self.advance()
            if self.at(TokenKind.CLOSE_PARENS):
                break
            items.append(self.parse_expr())
        self.expect(TokenKind.CLOSE_PARENS)
        return MakeTuple(tuple(items))

    def parse_if(self) -> Expr:
        self.expect(TokenKind.IF)
        cond = self.parse_expr()
        then = self.parse_body()
        otherwise: tuple[Expr, ...] = ()
        if self.at(TokenKind.ELSE):
            self.advance()
            if self.at(TokenKind.IF):
                otherwise = (self.parse_if(),)
            else:
                otherwise = self.parse_body()
        return If(cond, then, otherwise)


def parse(source: str | Iterable[Span]) -> Program:
    """Parse raw text, or spans already produced by a Lexer, into a Program."""
    spans = Lexer(source) if isinstance(source, str) else source
    stream = TokenStream(spans)
    try:
        return stream.parse_program()
    except RecursionError:
        raise IkuSyntaxError("Expression nested too deeply", stream.end) from None
