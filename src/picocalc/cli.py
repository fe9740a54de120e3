"""Command-line interface for PicoCalc."""

from __future__ import annotations

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from picocalc.errors import CalcError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    expression: str | None
    input_file: Path | None
    strict: bool
    precision: int | None
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="picocalc",
        description="Evaluate arithmetic expressions",
    )
    p.add_argument(
        "expression",
        nargs="?",
        help="Expression to evaluate ('-' reads one expression per line from stdin)",
    )
    p.add_argument(
        "-f",
        "--file",
        metavar="FILE",
        help="Evaluate every non-blank line of FILE",
    )
    p.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Reject missing operands and trailing tokens instead of reading them as 0",
    )
    p.add_argument(
        "--precision",
        type=int,
        default=None,
        metavar="N",
        help="Print results with N digits after the decimal point",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover picocalc.toml)",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens and debug log to stderr")
    return p


def load_config(config_path: Path | None, search_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else search_dir / "picocalc.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    if (args.expression is None) == (args.file is None):
        raise argparse.ArgumentTypeError("give exactly one of EXPRESSION or --file")

    input_file = Path(args.file) if args.file else None
    search_dir = Path(".")
    if input_file is not None and input_file.parent.parts:
        search_dir = input_file.parent

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, search_dir)
    calc = config.get("calc")
    if not isinstance(calc, dict):
        calc = {}

    strict = False
    cfg_strict = calc.get("strict")
    if cfg_strict is not None:
        if not isinstance(cfg_strict, bool):
            raise argparse.ArgumentTypeError(f"calc.strict must be a boolean, got {cfg_strict!r}")
        strict = cfg_strict
    if args.strict is not None:
        strict = args.strict

    precision: int | None = None
    cfg_precision = calc.get("precision")
    if cfg_precision is not None:
        # bool is an int subclass
        if isinstance(cfg_precision, bool) or not isinstance(cfg_precision, int):
            raise argparse.ArgumentTypeError(
                f"calc.precision must be an integer, got {cfg_precision!r}"
            )
        precision = cfg_precision
    if args.precision is not None:
        precision = args.precision
    if precision is not None and precision < 0:
        raise argparse.ArgumentTypeError(f"precision must not be negative: {precision}")

    return CliOptions(
        expression=args.expression,
        input_file=input_file,
        strict=strict,
        precision=precision,
        debug=args.debug,
    )


def read_expressions(options: CliOptions) -> list[str]:
    """Return the expressions to evaluate, one per non-blank input line."""
    if options.input_file is not None:
        text = options.input_file.read_text(encoding="utf-8")
    elif options.expression == "-":
        text = sys.stdin.read()
    else:
        assert options.expression is not None
        return [options.expression]
    return [line for line in text.splitlines() if line.strip()]


def format_result(value: float, precision: int | None) -> str:
    """Render a result, fixed-point when a precision is given."""
    if precision is None:
        return repr(value)
    return f"{value:.{precision}f}"


def evaluate_expression(source: str, options: CliOptions) -> float:
    """Evaluate one expression, dumping its tokens first in debug mode."""
    from picocalc.debug import dump_tokens
    from picocalc.parser import parse

    if options.debug:
        dump_tokens(source, file=sys.stderr)
    return parse(source, strict=options.strict)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        expressions = read_expressions(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    filename = str(options.input_file) if options.input_file else "<expr>"
    for source in expressions:
        try:
            value = evaluate_expression(source, options)
        except CalcError as exc:
            print(exc.format(filename), file=sys.stderr)
            return 1
        print(format_result(value, options.precision))

    return 0
