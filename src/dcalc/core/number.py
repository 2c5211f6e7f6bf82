"""Exact decimal numbers built on Python's unbounded ``int``.

An :class:`ExactDecimal` is a scaled integer: ``significand × 10^-scale``.
Addition, subtraction and multiplication are always exact.  Division is
exact whenever the quotient terminates in base ten; otherwise the
:class:`~dcalc.core.limits.DivisionPolicy` decides between rejecting the
division and rounding it.  No operation ever goes through ``float``.

Every result is checked against :class:`~dcalc.core.limits.EvalLimits`
so that runaway computations such as ``9^99999999`` fail fast with
:class:`~dcalc.exceptions.ResultTooLargeError` instead of exhausting
memory.
"""

from __future__ import annotations

import functools
import logging
import math
import re
from dataclasses import dataclass

from dcalc.core.limits import DEFAULT_LIMITS, DivisionPolicy, EvalLimits
from dcalc.exceptions import (
    DivisionByZeroError,
    NonTerminatingDivisionError,
    ResultTooLargeError,
    UnsupportedExponentError,
)

logger = logging.getLogger(__name__)

_LITERAL_RE = re.compile(r"(?P<whole>[0-9]*)(?:\.(?P<fraction>[0-9]*))?")

_LOG10_2 = math.log10(2)


@functools.lru_cache(maxsize=64)
def _power_of_ten(exponent: int) -> int:
    return 10**exponent


def _multiplicity(value: int, prime: int) -> int:
    """Return how many times *prime* divides *value* (``value > 0``)."""
    count = 0
    while value % prime == 0:
        value //= prime
        count += 1
    return count


@functools.total_ordering
@dataclass(frozen=True, slots=True, eq=False, repr=False)
class ExactDecimal:
    """Signed decimal value ``significand × 10^-scale``.

    Equality, hashing and ordering compare mathematical values, so
    ``ExactDecimal(150, 2) == ExactDecimal(15, 1)``.  The stored scale is
    whatever the producing operation yielded; use :meth:`normalized` to
    drop trailing fractional zeros.
    """

    significand: int
    scale: int = 0

    def __post_init__(self) -> None:
        if self.scale < 0:
            raise ValueError(f"scale must be non-negative, got {self.scale}")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> ExactDecimal:
        """Parse an unsigned literal such as ``42``, ``0.25``, ``.5`` or ``5.``.

        The scale is the number of digits written after the point, so
        ``1.50`` parses to ``ExactDecimal(150, 2)``.

        Raises
        ------
        ValueError
            When *text* is not a digits-and-optional-point literal with
            at least one digit.
        """
        match = _LITERAL_RE.fullmatch(text)
        if match is None:
            raise ValueError(f"{text!r} is not a decimal literal")
        whole = match.group("whole")
        fraction = match.group("fraction") or ""
        if not whole and not fraction:
            raise ValueError(f"{text!r} is not a decimal literal")
        digits = (whole + fraction).lstrip("0") or "0"
        return cls(int(digits), len(fraction))

    @classmethod
    def from_int(cls, value: int) -> ExactDecimal:
        return cls(value, 0)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.significand == 0

    def is_integer(self) -> bool:
        return self.normalized().scale == 0

    def normalized(self) -> ExactDecimal:
        """Return the same value with trailing fractional zeros removed."""
        if self.significand == 0:
            return ZERO
        significand, scale = self.significand, self.scale
        while scale > 0 and significand % 10 == 0:
            significand //= 10
            scale -= 1
        if scale == self.scale:
            return self
        return ExactDecimal(significand, scale)

    def within(self, limits: EvalLimits = DEFAULT_LIMITS) -> ExactDecimal:
        """Return ``self`` if it fits *limits*, else raise.

        Raises
        ------
        ResultTooLargeError
            When the significand has more than ``limits.max_digits``
            digits or the scale exceeds ``limits.max_digits``, even after
            trailing zeros are dropped.
        """
        if self._fits(limits):
            return self
        value = self.normalized()
        if value is not self and value._fits(limits):
            return value
        raise ResultTooLargeError(
            f"Result exceeds the limit of {limits.max_digits} digits",
            hint="Raise the limit with --max-digits or DCALC_MAX_DIGITS.",
        )

    def _fits(self, limits: EvalLimits) -> bool:
        return (
            self.scale <= limits.max_digits
            and abs(self.significand) < _power_of_ten(limits.max_digits)
        )

    def _aligned(self, other: ExactDecimal) -> tuple[int, int, int]:
        """Both significands rescaled to the larger of the two scales."""
        scale = max(self.scale, other.scale)
        left = self.significand * _power_of_ten(scale - self.scale)
        right = other.significand * _power_of_ten(scale - other.scale)
        return left, right, scale

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: ExactDecimal, limits: EvalLimits = DEFAULT_LIMITS) -> ExactDecimal:
        left, right, scale = self._aligned(other)
        return ExactDecimal(left + right, scale).within(limits)

    def sub(self, other: ExactDecimal, limits: EvalLimits = DEFAULT_LIMITS) -> ExactDecimal:
        left, right, scale = self._aligned(other)
        return ExactDecimal(left - right, scale).within(limits)

    def mul(self, other: ExactDecimal, limits: EvalLimits = DEFAULT_LIMITS) -> ExactDecimal:
        return ExactDecimal(
            self.significand * other.significand,
            self.scale + other.scale,
        ).within(limits)

    def neg(self) -> ExactDecimal:
        return ExactDecimal(-self.significand, self.scale)

    def div(self, other: ExactDecimal, limits: EvalLimits = DEFAULT_LIMITS) -> ExactDecimal:
        """Divide by *other*.

        The quotient is reduced to lowest terms first.  It terminates in
        base ten exactly when the reduced denominator has no prime
        factors besides 2 and 5, in which case the result is exact and
        its scale is the larger of the two multiplicities.

        Raises
        ------
        DivisionByZeroError
            When *other* is zero.
        NonTerminatingDivisionError
            When the quotient does not terminate and the policy is
            :attr:`DivisionPolicy.EXACT`.
        """
        if other.is_zero():
            raise DivisionByZeroError(
                f"Division by zero: {self} / {other}",
            )

        numerator = self.significand * _power_of_ten(other.scale)
        denominator = other.significand * _power_of_ten(self.scale)
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        divisor = math.gcd(numerator, denominator)
        numerator //= divisor
        denominator //= divisor

        twos = _multiplicity(denominator, 2)
        fives = _multiplicity(denominator, 5)
        if denominator == 2**twos * 5**fives:
            scale = max(twos, fives)
            factor = _power_of_ten(scale) // denominator
            return ExactDecimal(numerator * factor, scale).within(limits)

        if limits.division_policy is DivisionPolicy.EXACT:
            raise NonTerminatingDivisionError(
                f"{self} / {other} has no finite decimal expansion",
                hint="Pass --scale N to round the quotient to N fractional digits.",
            )

        logger.debug(
            "Rounding non-terminating quotient %s / %s to %d digits",
            self,
            other,
            limits.division_scale,
        )
        return _round_half_even(
            numerator, denominator, limits.division_scale,
        ).normalized().within(limits)

    def pow(self, exponent: ExactDecimal, limits: EvalLimits = DEFAULT_LIMITS) -> ExactDecimal:
        """Raise to a non-negative integer power by repeated squaring.

        ``0^0`` is ``1``.  Bases of magnitude one short-circuit, so
        ``1^n`` never trips the exponent ceiling.

        Raises
        ------
        UnsupportedExponentError
            When *exponent* is negative or has a fractional part.
        ResultTooLargeError
            When *exponent* exceeds ``limits.max_exponent`` or the
            result is predicted to exceed ``limits.max_digits``.
        """
        power = exponent.normalized()
        if power.scale != 0 or power.significand < 0:
            raise UnsupportedExponentError(
                f"Exponent must be a non-negative integer, got {exponent}",
            )
        count = power.significand
        base = self.normalized()

        if count == 0:
            return ONE
        if base.is_zero():
            return ZERO
        if base.scale == 0 and abs(base.significand) == 1:
            return base if count % 2 else ONE
        if count > limits.max_exponent:
            raise ResultTooLargeError(
                f"Exponent {count} exceeds the limit of {limits.max_exponent}",
                hint="Raise the limit with --max-exponent or DCALC_MAX_EXPONENT.",
            )

        # A normalized base keeps its scale exact under powers, and its
        # magnitude is at least 2^(bit_length - 1).
        min_digits = (abs(base.significand).bit_length() - 1) * count * _LOG10_2
        if base.scale * count > limits.max_digits or min_digits > limits.max_digits:
            raise ResultTooLargeError(
                f"{self}^{count} exceeds the limit of {limits.max_digits} digits",
                hint="Raise the limit with --max-digits or DCALC_MAX_DIGITS.",
            )

        result = ONE
        square = base
        while True:
            if count & 1:
                result = result.mul(square, limits)
            count >>= 1
            if not count:
                return result
            square = square.mul(square, limits)

    # ------------------------------------------------------------------
    # Operator protocol
    # ------------------------------------------------------------------

    def __add__(self, other: object) -> ExactDecimal:
        if not isinstance(other, (ExactDecimal, int)):
            return NotImplemented
        return self.add(_coerce(other))

    def __sub__(self, other: object) -> ExactDecimal:
        if not isinstance(other, (ExactDecimal, int)):
            return NotImplemented
        return self.sub(_coerce(other))

    def __mul__(self, other: object) -> ExactDecimal:
        if not isinstance(other, (ExactDecimal, int)):
            return NotImplemented
        return self.mul(_coerce(other))

    def __truediv__(self, other: object) -> ExactDecimal:
        if not isinstance(other, (ExactDecimal, int)):
            return NotImplemented
        return self.div(_coerce(other))

    def __pow__(self, other: object) -> ExactDecimal:
        if not isinstance(other, (ExactDecimal, int)):
            return NotImplemented
        return self.pow(_coerce(other))

    def __neg__(self) -> ExactDecimal:
        return self.neg()

    def __pos__(self) -> ExactDecimal:
        return self

    def __abs__(self) -> ExactDecimal:
        return self.neg() if self.significand < 0 else self

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (ExactDecimal, int)):
            return NotImplemented
        left, right, _ = self._aligned(_coerce(other))
        return left == right

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, (ExactDecimal, int)):
            return NotImplemented
        left, right, _ = self._aligned(_coerce(other))
        return left < right

    def __hash__(self) -> int:
        value = self.normalized()
        if value.scale == 0:
            return hash(value.significand)
        return hash((value.significand, value.scale))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_display_string(self) -> str:
        """Canonical text: sign, integer part and trimmed fraction.

        >>> ExactDecimal(-2500, 4).to_display_string()
        '-0.25'
        """
        value = self.normalized()
        sign = "-" if value.significand < 0 else ""
        digits = str(abs(value.significand))
        if value.scale == 0:
            return sign + digits
        digits = digits.rjust(value.scale + 1, "0")
        return f"{sign}{digits[:-value.scale]}.{digits[-value.scale:]}"

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        return f"ExactDecimal('{self.to_display_string()}')"


def _coerce(value: ExactDecimal | int) -> ExactDecimal:
    if isinstance(value, ExactDecimal):
        return value
    return ExactDecimal.from_int(value)


def _round_half_even(numerator: int, denominator: int, scale: int) -> ExactDecimal:
    """Round ``numerator / denominator`` (``denominator > 0``) to *scale* digits."""
    sign = -1 if numerator < 0 else 1
    quotient, remainder = divmod(abs(numerator) * _power_of_ten(scale), denominator)
    twice = 2 * remainder
    if twice > denominator or (twice == denominator and quotient % 2 == 1):
        quotient += 1
    return ExactDecimal(sign * quotient, scale)


ZERO = ExactDecimal(0)
ONE = ExactDecimal(1)
