"""PicoCalc arithmetic expression evaluator."""

from __future__ import annotations

__version__ = "0.1.0"


def evaluate(source: str, *, strict: bool = False) -> float:
    """Tokenize and evaluate an arithmetic expression, returning a float."""
    from picocalc.parser import parse

    return parse(source, strict=strict)
