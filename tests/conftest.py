"""Shared pytest fixtures and configuration for the dcalc test suite.

Guidelines
----------
* Core tests must be pure — no I/O, no side effects.
* CLI tests drive :func:`dcalc.cli.app.main` with explicit argv.
* Tests must not depend on ``DCALC_*`` variables from the environment.
"""

from __future__ import annotations

import pytest

from dcalc.core.limits import EvalLimits


@pytest.fixture(autouse=True)
def _clean_dcalc_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DCALC_MAX_DIGITS",
        "DCALC_MAX_EXPONENT",
        "DCALC_DIVISION_SCALE",
        "DCALC_VERBOSE",
        "DCALC_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def rounding_limits() -> EvalLimits:
    return EvalLimits.rounding(5)
