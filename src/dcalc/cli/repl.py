"""Interactive read-eval-print loop.

A malformed expression is reported and the loop keeps reading; nothing
carries over from one line to the next.
"""

from __future__ import annotations

import sys
from collections.abc import Callable

from dcalc.cli import exit_codes
from dcalc.cli.console import console
from dcalc.cli.render import print_error, print_result, print_tokens
from dcalc.config.settings import CalcSettings
from dcalc.core.evaluator import evaluate
from dcalc.exceptions import DcalcError

PROMPT = "> "
BANNER = "Type in an expression and hit enter (Ctrl+D or 'quit' to leave)."

_EXIT_WORDS = frozenset({"exit", "quit"})


def _read_line(prompt: str) -> str:
    """Read one line, prompting only when attached to a terminal."""
    return input(prompt if sys.stdin.isatty() else "")


def run_repl(
    settings: CalcSettings,
    *,
    show_tokens: bool = False,
    read_line: Callable[[str], str] | None = None,
) -> int:
    """Evaluate lines until end of input or an exit word.

    Parameters
    ----------
    settings:
        Resolved settings; converted to evaluation limits once.
    show_tokens:
        Dump each line's tokens to stderr before evaluating it.
    read_line:
        Line source that raises ``EOFError`` when input is exhausted.
        Defaults to reading stdin; injectable for deterministic testing.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS`; evaluation errors never end the loop.
    """
    read = read_line or _read_line
    limits = settings.to_limits()
    console.print(f"[dim]{BANNER}[/dim]")

    while True:
        try:
            line = read(PROMPT)
        except EOFError:
            return exit_codes.SUCCESS

        expression = line.strip()
        if not expression:
            continue
        if expression.lower() in _EXIT_WORDS:
            return exit_codes.SUCCESS

        try:
            if show_tokens:
                print_tokens(expression)
            result = evaluate(expression, limits)
        except DcalcError as exc:
            print_error(exc)
            continue
        print_result(result)
