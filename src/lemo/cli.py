"""Command-line driver for lemo.

Usage:
    lemo [--tokens] [--stack-capacity N] [-v] <source-file>

Exit status is 0 on success, 1 when the program fails to load, lex or run,
and 2 for usage errors.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from lemo import __version__
from lemo.config import DEFAULT_STACK_CAPACITY, InterpreterConfig, config_context
from lemo.errors import LemoError
from lemo.evaluator import interpret
from lemo.lexer import lex
from lemo.serialization import to_json
from lemo.source import read_source
from lemo.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lemo",
        description="Run a lemo stack-language program.",
    )
    parser.add_argument("source", metavar="source.lemo", help="Program to run")
    parser.add_argument(
        "--tokens",
        action="store_true",
        help="Print the lexed tokens as JSON instead of running the program",
    )
    parser.add_argument(
        "--stack-capacity",
        type=_positive_int,
        default=DEFAULT_STACK_CAPACITY,
        metavar="N",
        help=f"Maximum stack depth (default: {DEFAULT_STACK_CAPACITY})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        configure_logging(logging.DEBUG)

    config = InterpreterConfig(stack_capacity=args.stack_capacity)
    try:
        with config_context(config):
            source = read_source(args.source)
            tokens = lex(source, source_file=args.source)
            if args.tokens:
                sys.stdout.write(to_json(tokens, indent=2) + "\n")
            else:
                interpret(tokens, out=sys.stdout)
    except LemoError as exc:
        logger.debug("Run aborted by %s", type(exc).__name__)
        sys.stdout.flush()
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
