"""Error types with formatted source context."""

from __future__ import annotations


class CalcError(Exception):
    """Base for all evaluation errors, with offset and source context."""

    def __init__(self, message: str, offset: int, source: str) -> None:
        self.message = message
        self.offset = offset
        self.source = source
        super().__init__(self.format())

    @property
    def column(self) -> int:
        """1-based column of the error on the first source line."""
        return self.offset + 1

    def format(self, filename: str = "<expr>") -> str:
        # Scanning stops at the first newline, so the error is always on line 1
        source_line = self.source.split("\n", 1)[0].rstrip("\r")
        col = min(self.column, len(source_line) + 1)

        pad = " " * (col - 1)
        gutter_width = 2
        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{1:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:1:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class LexError(CalcError):
    """Raised on the first unrecognized or misplaced character."""


class MalformedNumberError(LexError):
    """Raised when a numeric literal completes in an inconsistent scan state."""


class ParseError(CalcError):
    """Raised on the first grammar violation."""


class NumberParseError(ParseError):
    """Raised when a NUMBER token's text cannot be converted to a float."""


class UnbalancedParenError(ParseError):
    """Raised when an opened group has no matching ')'."""


class TokenizerError(ParseError):
    """Raised by the parser when the lexer fails while fetching a token."""

    def __init__(self, lex_error: LexError) -> None:
        self.lex_error = lex_error
        super().__init__(lex_error.message, lex_error.offset, lex_error.source)
