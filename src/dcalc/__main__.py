"""Allow ``python -m dcalc`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m dcalc`` behaves identically to the ``dcalc`` console script.
"""

from __future__ import annotations

from dcalc.cli.app import cli

if __name__ == "__main__":
    cli()
