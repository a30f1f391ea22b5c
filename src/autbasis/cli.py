"""Batch command line interface.

Reads one automaton per line, ``<n> <transitions> <accepts>``, for example
``2 0111 1``, classifies each and prints a summary.
"""

import argparse
import logging
import shlex
import sys
from typing import IO, List, Optional

from autbasis.automaton.dfa import Automaton
from autbasis.checker import AdditiveBasisChecker
from autbasis.config import Config
from autbasis.diagnostics.report import Summary
from autbasis.exceptions import AutbasisError, InconsistentResultError
from autbasis.prover.walnut import WalnutOracle


logger = logging.getLogger(__name__)

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def parse_line(line: str) -> Optional[Automaton]:
    """Parse one input line, returning None for blank and comment lines."""
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    fields = line.split()
    if len(fields) not in (2, 3):
        raise AutbasisError(f"expected '<n> <transitions> <accepts>', got {line!r}")
    try:
        state_count = int(fields[0])
    except ValueError:
        raise AutbasisError(f"invalid state count {fields[0]!r}") from None
    accepts = fields[2] if len(fields) == 3 else ""
    return Automaton.from_encoding(state_count, fields[1], accepts)


def _order_bound(text: str):
    """MAX for ``-o``/``-O``. Other text is kept for ``parse_args`` to open as the input."""
    return int(text) if text.isdigit() else text


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autbasis",
        description="Classify growth and GCD of automatic sets of integers.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=argparse.FileType("r"),
        default=sys.stdin,
        help="file with one automaton per line (default: stdin)",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="more logging, repeatable"
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="print only the summary"
    )
    parser.add_argument(
        "-l", "--keep-logs", action="store_true", help="keep Walnut log files"
    )
    parser.add_argument(
        "-o",
        dest="order",
        nargs="?",
        type=_order_bound,
        const=0,
        default=None,
        metavar="MAX",
        help="compute the asymptotic additive basis order, up to MAX summands",
    )
    parser.add_argument(
        "-O",
        dest="plain_order",
        nargs="?",
        type=_order_bound,
        const=0,
        default=None,
        metavar="MAX",
        help="also compute the non-asymptotic order, up to MAX summands",
    )
    parser.add_argument("--walnut-dir", help="Walnut installation directory")
    parser.add_argument(
        "--walnut-command", help="command starting the prover inside the Walnut directory"
    )
    parser.add_argument(
        "--growth-length",
        type=int,
        default=Config.heuristic_growth_word_length,
        help="minimum word length for the heuristic growth check",
    )
    parser.add_argument(
        "--gcd-bits",
        type=int,
        default=Config.heuristic_gcd_bits,
        help="bit width for the heuristic GCD check",
    )
    parser.add_argument(
        "--no-cross-check", action="store_true", help="skip the heuristic checks"
    )
    parser.add_argument(
        "--strict-gcd",
        action="store_true",
        help="fail when the heuristic GCD disagrees",
    )
    return parser


def parse_args(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None):
    """Parse ``argv``, reading ``-o FILE`` as the order flag followed by the input file."""
    args = parser.parse_args(argv)
    for dest in ("order", "plain_order"):
        value = getattr(args, dest)
        if not isinstance(value, str):
            continue
        if args.input is not sys.stdin:
            parser.error(f"invalid MAX value: {value!r}")
        try:
            args.input = argparse.FileType("r")(value)
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))
        setattr(args, dest, 0)
    return args


def config_from_args(args: argparse.Namespace) -> Config:
    compute_order = args.order is not None or args.plain_order is not None
    max_order = None
    for value in (args.order, args.plain_order):
        if value:
            max_order = value
    config = Config(
        heuristic_growth_word_length=args.growth_length,
        heuristic_gcd_bits=args.gcd_bits,
        cross_check=not args.no_cross_check,
        strict_gcd=args.strict_gcd,
        compute_order=compute_order,
        compute_plain_order=args.plain_order is not None,
        max_order=max_order,
        walnut_dir=args.walnut_dir,
        keep_logs=args.keep_logs,
    )
    if args.walnut_command:
        config.walnut_command = shlex.split(args.walnut_command)
    return config


def run(lines: IO[str], checker: AdditiveBasisChecker, quiet: bool, out: IO[str]) -> int:
    """Check every automaton in ``lines`` and print the results.

    Returns:
        Exit status: 0 on success, 1 if some line failed, 2 on an
        inconsistency between exact and heuristic results.
    """
    summary = Summary(max_order=checker.config.max_order)
    status = 0

    for number, line in enumerate(lines, 1):
        try:
            automaton = parse_line(line)
            if automaton is None:
                continue
            if not automaton.has_leading_zero_loop:
                logger.info("Line %d: leading zeros are significant, skipping", number)
                continue
            report = checker.check(automaton)
        except InconsistentResultError as e:
            print(f"line {number}: {e}", file=sys.stderr)
            return 2
        except AutbasisError as e:
            print(f"line {number}: {e}", file=sys.stderr)
            status = 1
            continue

        summary.add(report)
        if report.growth.is_exponential and report.has_unit_gcd and not quiet:
            print(line.strip(), file=out)
            for order_line in report.describe_orders(checker.config.max_order):
                print(order_line, file=out)

    for summary_line in summary.render():
        print(summary_line, file=out)
    return status


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parse_args(parser, argv)

    level = LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    oracle = WalnutOracle.from_config(config) if config.walnut_dir else None
    checker = AdditiveBasisChecker(config, oracle)
    try:
        return run(args.input, checker, args.quiet, sys.stdout)
    finally:
        if oracle is not None:
            oracle.close()


if __name__ == "__main__":
    sys.exit(main())
