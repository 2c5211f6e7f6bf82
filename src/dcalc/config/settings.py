"""Unified settings — CLI flags and environment variables in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags that were actually given
  2. Env vars     — ``DCALC_*`` prefix
  3. Code defaults

Uses Pydantic Settings v2.  The resolved object is frozen and converts
to the core's :class:`~dcalc.core.limits.EvalLimits` via
:meth:`CalcSettings.to_limits`.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dcalc.core.limits import DEFAULT_MAX_DIGITS, DEFAULT_MAX_EXPONENT, EvalLimits
from dcalc.exceptions import ConfigurationError


class CalcSettings(BaseSettings):
    """Settings for one dcalc process.

    Attributes:
        max_digits: Ceiling on significand digits and scale of results.
        max_exponent: Largest exponent accepted by ``^``.
        division_scale: Round non-terminating quotients to this many
            fractional digits.  ``None`` rejects them instead.
        verbose: Enable DEBUG logging.
        log_json: Emit logs as JSON lines.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="DCALC_",
    )

    max_digits: int = Field(default=DEFAULT_MAX_DIGITS, ge=1)
    max_exponent: int = Field(default=DEFAULT_MAX_EXPONENT, ge=0)
    division_scale: int | None = Field(default=None, ge=0)

    verbose: bool = False
    log_json: bool = False

    @model_validator(mode="after")
    def _scale_within_digits(self) -> CalcSettings:
        if self.division_scale is not None and self.division_scale > self.max_digits:
            msg = (
                f"division_scale ({self.division_scale}) cannot exceed "
                f"max_digits ({self.max_digits})"
            )
            raise ValueError(msg)
        return self

    @classmethod
    def from_cli(cls, **overrides: Any) -> CalcSettings:
        """Build settings from CLI values, skipping flags left unset.

        Raises
        ------
        ConfigurationError
            When a flag or ``DCALC_*`` variable holds an invalid value.
        """
        explicit = {key: value for key, value in overrides.items() if value is not None}
        try:
            return cls(**explicit)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "settings"
            raise ConfigurationError(
                f"Invalid setting {location}: {first['msg']}",
                hint="Check the command-line flags and DCALC_* environment variables.",
            ) from exc

    def to_limits(self) -> EvalLimits:
        if self.division_scale is None:
            return EvalLimits(
                max_digits=self.max_digits,
                max_exponent=self.max_exponent,
            )
        return EvalLimits.rounding(
            self.division_scale,
            max_digits=self.max_digits,
            max_exponent=self.max_exponent,
        )
