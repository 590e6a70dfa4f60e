from __future__ import annotations

import argparse
import json
import logging

from .api import process_expression
from .config import MAX_ROUNDING_DIGITS, VERSION
from .types import CalcResult

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"quit", "exit"}


def precision_type(text: str) -> int:
    """argparse type for --precision: an integer in 0..MAX_ROUNDING_DIGITS."""
    try:
        digits = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if not 0 <= digits <= MAX_ROUNDING_DIGITS:
        raise argparse.ArgumentTypeError(
            f"precision must be between 0 and {MAX_ROUNDING_DIGITS}, got {digits}"
        )
    return digits


def print_result_pretty(res: CalcResult, output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result of process_expression
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), ensure_ascii=False))
        return
    if not res.ok:
        print("Error:", res.message)
        return
    print(res.result)


def print_help_text() -> None:
    """Print help text for REPL commands."""
    help_text = f"""Kalkulator Mini version {VERSION}

Expressions:      2 * (3 + 4), 1.5pi, sin(pi/2), ln(e), log100(10)
Postfix (RPN):    3 4 + 2 *
Linear equations: 2x + 1 = 2 * (1 - x)
Constants:        pi, e
Functions:        sin cos tan ln log logN (e.g. log2(8)); sinpi = sin(pi)

Commands: help, quit, exit"""
    print(help_text)


def repl_loop(output_format: str = "human") -> None:
    """Interactive REPL loop: one expression per line."""
    try:
        import readline  # noqa: F401
    except (ImportError, ModuleNotFoundError):
        # readline not available on Windows - that's fine
        pass

    print("Kalkulator Mini - type 'help' for commands, 'quit' to exit.")
    while True:
        try:
            raw = input(">>> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue
        command = raw.lower()
        if command in QUIT_COMMANDS:
            print("Goodbye.")
            break
        if command == "help":
            print_help_text()
            continue
        print_result_pretty(process_expression(raw), output_format=output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Kalkulator Mini CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="kalkulator-mini")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Evaluate one expression and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p",
        "--precision",
        type=precision_type,
        help=f"Set rounding precision (decimal places, 0-{MAX_ROUNDING_DIGITS})",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    args = parser.parse_args(argv)

    from .logging_config import setup_logging

    setup_logging(level=args.log_level, log_file=args.log_file)

    import kalkulator_mini.config as _config

    if args.precision is not None:
        _config.ROUNDING_DIGITS = args.precision
    if args.version:
        print(VERSION)
        return 0
    if args.eval_expr is not None:
        expr = args.eval_expr.strip()
        # Remove ">>>" prompt if present
        if expr.startswith(">>>"):
            expr = expr[3:].strip()
        logger.debug("Evaluating --eval input %r", expr)
        res = process_expression(expr)
        print_result_pretty(res, output_format=args.format)
        return 0 if res.ok else 1

    repl_loop(output_format=args.format)
    return 0


if __name__ == "__main__":
    """Allow running the CLI module directly with python -m kalkulator_mini.cli"""
    import sys

    sys.exit(main_entry())
