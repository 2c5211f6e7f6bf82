"""Evaluation limits and division policy consumed by the decimal engine.

Limits are a plain frozen value passed explicitly into every operation
that needs them.  There is no process-wide arithmetic context, so
concurrent evaluations with different limits never interfere.
"""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass


class DivisionPolicy(enum.Enum):
    """What to do with a quotient that has no finite decimal expansion."""

    EXACT = "exact"
    """Reject with :class:`~dcalc.exceptions.NonTerminatingDivisionError`."""

    ROUND = "round"
    """Round half-even to :attr:`EvalLimits.division_scale` digits."""


DEFAULT_MAX_DIGITS: int = 4000
"""Kept below CPython's default int/str limit (4300) so results print.

Larger values need :func:`sys.set_int_max_str_digits` raised first.
"""

DEFAULT_MAX_EXPONENT: int = 100_000

DEFAULT_DIVISION_SCALE: int = 100


def interpreter_digit_cap() -> int:
    """Longest int CPython converts to or from text, ``0`` when unlimited."""
    get_limit = getattr(sys, "get_int_max_str_digits", None)
    if get_limit is None:
        return 0
    return get_limit()


@dataclass(frozen=True, slots=True)
class EvalLimits:
    """Size guards and division behaviour for one evaluation."""

    max_digits: int = DEFAULT_MAX_DIGITS
    """Upper bound on both significand digits and scale of any result."""

    max_exponent: int = DEFAULT_MAX_EXPONENT
    """Largest exponent accepted by ``^``."""

    division_policy: DivisionPolicy = DivisionPolicy.EXACT

    division_scale: int = DEFAULT_DIVISION_SCALE
    """Fractional digits kept when :attr:`division_policy` is ``ROUND``."""

    def __post_init__(self) -> None:
        if self.max_digits < 1:
            raise ValueError(f"max_digits must be positive, got {self.max_digits}")
        if self.max_exponent < 0:
            raise ValueError(
                f"max_exponent must be non-negative, got {self.max_exponent}",
            )
        if self.division_scale < 0:
            raise ValueError(
                f"division_scale must be non-negative, got {self.division_scale}",
            )
        cap = interpreter_digit_cap()
        if cap and self.max_digits > cap:
            raise ValueError(
                f"max_digits ({self.max_digits}) exceeds the interpreter's int/str "
                f"conversion limit of {cap} digits; raise it with "
                "sys.set_int_max_str_digits() first",
            )

    @classmethod
    def rounding(cls, scale: int, **overrides: int) -> EvalLimits:
        """Limits that round non-terminating quotients to *scale* digits."""
        return cls(
            division_policy=DivisionPolicy.ROUND,
            division_scale=scale,
            **overrides,
        )


DEFAULT_LIMITS = EvalLimits()
