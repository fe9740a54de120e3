"""--debug token stream dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from picocalc.lexer import Lexer
from picocalc.tokens import Token, TokenType


def dump_tokens(source: str, *, file: TextIO = sys.stderr) -> None:
    """Print one line per token of *source* to *file*, as each is scanned."""
    lexer = Lexer(source)
    while True:
        tok = lexer.next_token()
        file.write(_describe(tok) + "\n")
        if tok.type == TokenType.EOF:
            return


def _describe(tok: Token) -> str:
    if tok.type == TokenType.NUMBER:
        return f"{tok.type.name} {tok.value!r}"
    return tok.type.name
