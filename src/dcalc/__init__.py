"""dcalc — exact decimal expression calculator.

The public surface is :func:`evaluate` and :class:`ExactDecimal`;
everything else is an implementation detail of the core pipeline or
the command-line shell.
"""

from dcalc.core.evaluator import evaluate
from dcalc.core.number import ExactDecimal
from dcalc.version import __version__

__all__: list[str] = ["ExactDecimal", "__version__", "evaluate"]
