"""CLI console helpers with optional Rich support.

This module avoids module-level imports of Rich so bootstrap paths
(``--help``, ``--version``) and plain result output keep working even
when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from dcalc.exceptions import MissingDependencyError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``MissingDependencyError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise MissingDependencyError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def escape_markup(text: str) -> str:
    """Escape Rich markup in user-supplied *text*; identity without Rich."""
    try:
        from rich.markup import escape
    except ModuleNotFoundError:
        return text
    return escape(text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with plain-stderr fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except MissingDependencyError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def error(self, message: str, hint: str | None = None) -> None:
        """Render an error line and an optional hint line."""
        try:
            rich_console = get_rich_console()
        except MissingDependencyError:
            print(f"Error: {message}", file=sys.stderr)
            if hint:
                print(f"Hint: {hint}", file=sys.stderr)
            return
        rich_console.print(f"[bold red]Error:[/bold red] {escape_markup(message)}")
        if hint:
            rich_console.print(f"[yellow]Hint:[/yellow] {escape_markup(hint)}")


console = _ConsoleProxy()
