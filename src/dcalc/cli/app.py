"""CLI application entry point and command routing for dcalc.

This module is the **sole error boundary** for the entire application.
It catches :class:`~dcalc.exceptions.DcalcError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Architecture notes
------------------
* No arithmetic or parsing lives here — all work is delegated to
  :func:`dcalc.core.evaluator.evaluate`.
* Results are written to stdout; every diagnostic goes to stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys

from dcalc.cli import exit_codes
from dcalc.cli.console import console
from dcalc.cli.render import print_error, print_result, print_tokens
from dcalc.config.logging import configure_logging
from dcalc.config.settings import CalcSettings
from dcalc.core.evaluator import evaluate
from dcalc.core.limits import interpreter_digit_cap
from dcalc.exceptions import DcalcError
from dcalc.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``dcalc "<expression>"`` — evaluate once and print the result
    * ``dcalc``                — interactive session
    * ``dcalc --version``
    """
    parser = argparse.ArgumentParser(
        prog="dcalc",
        description="Exact decimal calculator. Evaluates EXPRESSION, or starts "
        "an interactive session when it is omitted.",
        epilog="Put '--' before an expression that starts with '-', "
        "e.g. dcalc -- '-2^2'.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "expression",
        nargs="?",
        default=None,
        help="Expression to evaluate, e.g. '0.1 + 0.2'.",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=None,
        metavar="N",
        help="Round divisions that do not terminate to N fractional digits "
        "instead of rejecting them.",
    )
    parser.add_argument(
        "--max-digits",
        type=int,
        default=None,
        metavar="N",
        help="Largest number of digits a result may have.",
    )
    parser.add_argument(
        "--max-exponent",
        type=int,
        default=None,
        metavar="N",
        help="Largest exponent accepted by '^'.",
    )
    parser.add_argument(
        "--show-tokens",
        action="store_true",
        help="Print the token stream to stderr before evaluating.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=None,
        help="Emit logs as JSON lines.",
    )
    return parser


def _allow_long_results(max_digits: int) -> None:
    """Lift CPython's int-to-str digit cap when *max_digits* exceeds it."""
    current = interpreter_digit_cap()
    if current and current < max_digits:
        logger.debug("Raising int string conversion limit to %d", max_digits)
        sys.set_int_max_str_digits(max_digits)


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_expression(
    expression: str,
    settings: CalcSettings,
    *,
    show_tokens: bool,
) -> int:
    """Evaluate a single expression and print its result.

    Evaluation errors are rendered here rather than at the boundary so
    that one-shot mode and the interactive loop report them identically.
    """
    try:
        if show_tokens:
            print_tokens(expression)
        result = evaluate(expression, settings.to_limits())
    except DcalcError as exc:
        print_error(exc)
        return exit_codes.GENERAL_ERROR
    print_result(result)
    return exit_codes.SUCCESS


def _handle_interactive(settings: CalcSettings, *, show_tokens: bool) -> int:
    """Dispatch the interactive read-eval-print loop."""
    from dcalc.cli.repl import run_repl

    return run_repl(settings, show_tokens=show_tokens)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the dcalc CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.

    Raises
    ------
    ConfigurationError
        When flags or ``DCALC_*`` variables hold invalid values.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = CalcSettings.from_cli(
        max_digits=args.max_digits,
        max_exponent=args.max_exponent,
        division_scale=args.scale,
        verbose=args.verbose,
        log_json=args.log_json,
    )
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    _allow_long_results(settings.max_digits)

    if args.expression is None:
        return _handle_interactive(settings, show_tokens=args.show_tokens)

    return _handle_expression(
        args.expression,
        settings,
        show_tokens=args.show_tokens,
    )


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except DcalcError as exc:
        print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
