"""Output helpers shared by one-shot mode and the interactive loop.

Results go to stdout, unstyled, so ``dcalc`` composes in pipelines;
diagnostics go to stderr through :data:`~dcalc.cli.console.console`.
"""

from __future__ import annotations

import sys

from dcalc.cli.console import console, escape_markup
from dcalc.core.lexer import Lexer
from dcalc.core.number import ExactDecimal
from dcalc.exceptions import DcalcError


def print_result(value: ExactDecimal) -> None:
    sys.stdout.write(value.to_display_string() + "\n")
    sys.stdout.flush()


def print_error(exc: DcalcError) -> None:
    console.error(str(exc), exc.hint)


def print_tokens(expression: str) -> None:
    """Dump the token stream of *expression* to stderr, one per line.

    Stops at the first lexing error, which propagates to the caller.
    """
    console.print("[dim]Tokens:[/dim]")
    for token in Lexer(expression):
        console.print(
            f"  {token.position:>4}  {token.kind.name:<7} "
            f"{escape_markup(token.text)}",
        )
