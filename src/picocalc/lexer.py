"""PicoCalc lexer — pulls tokens from arithmetic source text one at a time."""

from __future__ import annotations

import logging
from enum import Enum, auto

from picocalc.errors import LexError, MalformedNumberError
from picocalc.tokens import END_CHARS, SINGLE_CHAR_TOKENS, Token, TokenType

logger = logging.getLogger(__name__)


class _ScanState(Enum):
    INITIAL = auto()  # not inside a numeric literal
    INTEGER = auto()  # digits seen, no '.' yet
    DECIMAL = auto()  # '.' consumed


class Lexer:
    """Scan arithmetic source text into Token objects on demand."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._state = _ScanState.INITIAL

    @property
    def offset(self) -> int:
        return self._pos

    def next_token(self) -> Token:
        """Return the next token, or EOF once the input is exhausted."""
        self._skip_whitespace()
        if self._is_at_end():
            return Token(TokenType.EOF)

        start = self._pos
        ch = self._advance()
        self._state = _ScanState.INITIAL

        if ch.isnumeric():
            return self._scan_number(start)

        if ch == ".":
            return self._scan_dot(start)

        tt = SINGLE_CHAR_TOKENS.get(ch)
        if tt is None:
            raise self._error("Syntax error.", start)
        return Token(tt)

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _is_at_end(self) -> bool:
        return self._pos >= len(self._source) or self._source[self._pos] in END_CHARS

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        return ch

    def _skip_whitespace(self) -> None:
        while not self._is_at_end() and self._peek().isspace():
            self._advance()

    def _error(self, message: str, offset: int | None = None) -> LexError:
        if offset is None:
            offset = self._pos
        return LexError(message, offset, self._source)

    # ------------------------------------------------------------------
    # Numeric literals
    # ------------------------------------------------------------------

    def _scan_dot(self, start: int) -> Token:
        # A '.' only continues a literal already in INTEGER state
        if self._state != _ScanState.INTEGER:
            raise self._error("Syntax error.", start)
        self._state = _ScanState.DECIMAL
        return self._scan_number(start)

    def _scan_number(self, start: int) -> Token:
        if self._state == _ScanState.INITIAL:
            self._state = _ScanState.INTEGER

        while self._peek().isnumeric() or self._peek() == ".":
            if self._peek() == ".":
                if self._state != _ScanState.INTEGER:
                    raise self._error("Syntax error.")
                self._state = _ScanState.DECIMAL
            self._advance()

        logger.debug("number literal ends at offset %d, state %s", self._pos, self._state.name)

        if self._state == _ScanState.INITIAL:
            raise MalformedNumberError("Not a number.", start, self._source)
        return Token(TokenType.NUMBER, self._source[start : self._pos])


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text up to and including EOF."""
    lexer = Lexer(source)
    tokens = [lexer.next_token()]
    while tokens[-1].type != TokenType.EOF:
        tokens.append(lexer.next_token())
    return tokens
