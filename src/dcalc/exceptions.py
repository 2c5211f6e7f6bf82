"""Custom exception hierarchy for dcalc.

Every failure of the evaluation pipeline surfaces as a subclass of
:class:`DcalcError`.  Components fail on the first error and never fall
back to an approximate value, so callers only ever see either an exact
result or one of these exceptions.

Hierarchy
---------
DcalcError
├── LexError
├── ParseError
│   └── UnexpectedTokenError
│       ├── UnmatchedParenthesisError
│       └── EmptyInputError
├── DecimalArithmeticError
│   ├── DivisionByZeroError
│   ├── NonTerminatingDivisionError
│   ├── UnsupportedExponentError
│   └── ResultTooLargeError
├── ConfigurationError
└── MissingDependencyError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dcalc.core.tokens import Token


class DcalcError(Exception):
    """Base exception for all dcalc errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


EvalError = DcalcError
"""Name used for the error type at the :func:`~dcalc.evaluate` boundary."""


# --- Lexing ----------------------------------------------------------------

class LexError(DcalcError):
    """Raised when the input contains a character no token can start with."""

    def __init__(self, character: str, position: int) -> None:
        super().__init__(
            f"Unexpected character {character!r} at offset {position}",
        )
        self.character: str = character
        self.position: int = position


# --- Parsing ---------------------------------------------------------------

class ParseError(DcalcError):
    """Raised when the token stream violates the expression grammar."""


class UnexpectedTokenError(ParseError):
    """Raised when a token cannot continue the current grammar position."""

    def __init__(
        self,
        token: Token,
        message: str | None = None,
        *,
        hint: str | None = None,
    ) -> None:
        if message is None:
            message = f"Unexpected {token.describe()} at offset {token.position}"
        super().__init__(message, hint=hint)
        self.token: Token = token
        self.position: int = token.position


class UnmatchedParenthesisError(UnexpectedTokenError):
    """Raised for a stray ``)`` or a ``(`` that is never closed."""


class EmptyInputError(UnexpectedTokenError):
    """Raised when the input holds nothing but whitespace."""


# --- Arithmetic ------------------------------------------------------------

class DecimalArithmeticError(DcalcError):
    """Raised when the decimal engine cannot produce an exact result."""


class DivisionByZeroError(DecimalArithmeticError):
    """Raised when the divisor is zero."""


class NonTerminatingDivisionError(DecimalArithmeticError):
    """Raised when a quotient has no finite decimal expansion."""


class UnsupportedExponentError(DecimalArithmeticError):
    """Raised for negative or fractional exponents."""


class ResultTooLargeError(DecimalArithmeticError):
    """Raised when a result would exceed the configured size limits."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(DcalcError):
    """Raised when settings from flags or environment are invalid."""


class MissingDependencyError(DcalcError):
    """Raised when an optional runtime dependency is not installed."""
