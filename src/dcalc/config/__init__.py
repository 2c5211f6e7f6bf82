"""Configuration layer — settings resolution and logging setup.

Rules
-----
* May import from ``core``; never from ``cli``.
* No user-facing output.
"""

from dcalc.config.logging import configure_logging
from dcalc.config.settings import CalcSettings

__all__: list[str] = ["CalcSettings", "configure_logging"]
