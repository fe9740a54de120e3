"""Token types and the token data structure."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    NUMBER = auto()  # digits with at most one '.'

    # Operators
    PLUS = auto()  # +
    MINUS = auto()  # -
    STAR = auto()  # *
    SLASH = auto()  # /

    # Grouping
    LPAREN = auto()  # (
    RPAREN = auto()  # )

    EOF = auto()  # end of string, \n or \0


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexer token. Only NUMBER tokens carry a value (the literal text)."""

    type: TokenType
    value: str = ""


SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

# Characters that end the input even when more source follows
END_CHARS = frozenset("\n\0")
