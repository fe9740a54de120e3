"""PicoCalc parser — evaluates arithmetic while descending the grammar.

Grammar, loosest binding first::

    expression := term ( ('+' | '-') term )*
    term       := primary ( ('*' | '/') primary )*
    primary    := ['-'] ( NUMBER | '(' expression ')' )

No tree is built: each rule returns the float value of the text it consumed.
"""

from __future__ import annotations

import math

from picocalc.errors import (
    LexError,
    NumberParseError,
    ParseError,
    TokenizerError,
    UnbalancedParenError,
)
from picocalc.lexer import Lexer
from picocalc.tokens import Token, TokenType


class Parser:
    """Recursive descent evaluator with a single token of lookahead."""

    def __init__(self, source: str, *, strict: bool = False) -> None:
        self._source = source
        self._lexer = Lexer(source)
        self._lookahead: Token | None = None
        self._strict = strict

    def parse(self) -> float:
        try:
            value = self._expression()
        except RecursionError as exc:
            raise self._error("expression nested too deeply") from exc
        if self._strict:
            tok = self._get_token()
            if tok.type != TokenType.EOF:
                raise self._error("unexpected token after expression")
        return value

    # ------------------------------------------------------------------
    # Token navigation
    # ------------------------------------------------------------------

    def _get_token(self) -> Token:
        if self._lookahead is not None:
            tok = self._lookahead
            self._lookahead = None
            return tok
        try:
            return self._lexer.next_token()
        except LexError as exc:
            raise TokenizerError(exc) from exc

    def _back_token(self, tok: Token) -> None:
        self._lookahead = tok

    def _error(self, message: str) -> ParseError:
        return ParseError(message, self._lexer.offset, self._source)

    # ------------------------------------------------------------------
    # Grammar rules
    # ------------------------------------------------------------------

    def _expression(self) -> float:
        left = self._term()
        while True:
            tok = self._get_token()
            if tok.type not in (TokenType.PLUS, TokenType.MINUS):
                self._back_token(tok)
                return left
            right = self._term()
            if tok.type == TokenType.PLUS:
                left += right
            else:
                left -= right

    def _term(self) -> float:
        left = self._primary()
        while True:
            tok = self._get_token()
            if tok.type not in (TokenType.STAR, TokenType.SLASH):
                self._back_token(tok)
                return left
            right = self._primary()
            if tok.type == TokenType.STAR:
                left *= right
            else:
                left = _divide(left, right)

    def _primary(self) -> float:
        negate = False
        tok = self._get_token()
        if tok.type == TokenType.MINUS:
            negate = True
            tok = self._get_token()

        if tok.type == TokenType.NUMBER:
            value = self._number(tok)
        elif tok.type == TokenType.LPAREN:
            value = self._expression()
            if self._get_token().type != TokenType.RPAREN:
                raise UnbalancedParenError("Missing ')' error.", self._lexer.offset, self._source)
        else:
            # Permissive mode: anything else reads as 0.0 and is left for the caller
            self._back_token(tok)
            if self._strict:
                raise self._error("expected number or '('")
            value = 0.0

        return -value if negate else value

    def _number(self, tok: Token) -> float:
        # float() also accepts non-ASCII decimal digits
        if not tok.value.isascii():
            raise NumberParseError(
                f"invalid number literal '{tok.value}'", self._lexer.offset, self._source
            )
        try:
            return float(tok.value)
        except ValueError as exc:
            raise NumberParseError(
                f"invalid number literal '{tok.value}'", self._lexer.offset, self._source
            ) from exc


def _divide(left: float, right: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity and 0/0 is nan."""
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def parse(source: str, *, strict: bool = False) -> float:
    """Convenience function: evaluate source text and return the result."""
    return Parser(source, strict=strict).parse()
