"""End-to-end tests for :func:`dcalc.evaluate`.

These exercise the full lex → parse → arithmetic pipeline through the
public entry point only.
"""

from __future__ import annotations

import sys
import threading

import pytest

from dcalc import ExactDecimal, evaluate
from dcalc.core.limits import EvalLimits
from dcalc.exceptions import (
    DecimalArithmeticError,
    DivisionByZeroError,
    LexError,
    NonTerminatingDivisionError,
    ParseError,
    ResultTooLargeError,
    UnexpectedTokenError,
    UnsupportedExponentError,
)


class TestExactness:
    def test_point_one_plus_point_two(self) -> None:
        assert evaluate("0.1 + 0.2") == ExactDecimal.parse("0.3")

    def test_result_displays_without_noise(self) -> None:
        assert evaluate("0.1 + 0.2").to_display_string() == "0.3"
        assert evaluate("1 / 4").to_display_string() == "0.25"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0.1 * 3", "0.3"),
            ("1.1 * 1.1", "1.21"),
            ("0.7 + 0.1", "0.8"),
            ("4.35 * 100", "435"),
            ("1 - 0.9", "0.1"),
            ("3 * 1.1", "3.3"),
        ],
    )
    def test_classic_float_pitfalls(self, text: str, expected: str) -> None:
        assert evaluate(text).to_display_string() == expected

    def test_large_integers(self) -> None:
        assert evaluate("99999999999999999999 + 1") == ExactDecimal(10**20)


class TestProperties:
    def test_precedence(self) -> None:
        assert evaluate("5 + 8 * 2") == 21
        assert evaluate("(5 + 8) * 2") == 26

    def test_power_is_right_associative(self) -> None:
        assert evaluate("2^3^2") == 512

    def test_unary_minus_binds_looser_than_power(self) -> None:
        assert evaluate("-2^2") == -4

    def test_idempotent(self) -> None:
        first = evaluate("1.5 * (2 - 0.25) ^ 2")
        second = evaluate("1.5 * (2 - 0.25) ^ 2")
        assert first == second
        assert first.to_display_string() == second.to_display_string() == "4.59375"

    def test_error_does_not_affect_next_call(self) -> None:
        with pytest.raises(ParseError):
            evaluate("(1 +")
        assert evaluate("1 + 1") == 2

    def test_concurrent_calls_are_independent(self) -> None:
        results: dict[int, ExactDecimal] = {}

        def work(n: int) -> None:
            results[n] = evaluate(f"{n} * 0.1 + {n} / 4")

        threads = [threading.Thread(target=work, args=(n,)) for n in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        for n in range(16):
            assert results[n] == ExactDecimal(n * 35, 2)


class TestErrorKinds:
    def test_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            evaluate("1 / 0")

    @pytest.mark.parametrize(
        ("text", "error"),
        [
            ("5 + ", UnexpectedTokenError),
            ("(5 + 3", ParseError),
            ("5 $ 3", LexError),
            ("", ParseError),
            ("2 ^ 0.5", UnsupportedExponentError),
            ("1 / 3", NonTerminatingDivisionError),
            ("9^99999999", ResultTooLargeError),
        ],
    )
    def test_malformed_or_inexact_input(
        self, text: str, error: type[Exception],
    ) -> None:
        with pytest.raises(error):
            evaluate(text)

    def test_arithmetic_errors_share_base(self) -> None:
        with pytest.raises(DecimalArithmeticError):
            evaluate("2 ^ -1")


class TestLimits:
    def test_rounding_limits(self) -> None:
        limits = EvalLimits.rounding(10)
        assert evaluate("1 / 3", limits).to_display_string() == "0.3333333333"
        assert evaluate("2 / 3", limits).to_display_string() == "0.6666666667"

    def test_rounding_result_feeds_further_arithmetic(self) -> None:
        limits = EvalLimits.rounding(2)
        assert evaluate("1 / 3 * 3", limits) == ExactDecimal(99, 2)

    def test_digit_ceiling(self) -> None:
        limits = EvalLimits(max_digits=20)
        assert evaluate("10 ^ 19", limits) == ExactDecimal(10**19)
        with pytest.raises(ResultTooLargeError):
            evaluate("10 ^ 25", limits)

    def test_default_limits_allow_big_powers(self) -> None:
        result = evaluate("2 ^ 1000")
        assert result == ExactDecimal(2**1000)

    @pytest.mark.skipif(
        not getattr(sys, "get_int_max_str_digits", lambda: 0)(),
        reason="interpreter has no int/str digit limit",
    )
    def test_ceiling_above_interpreter_cap_rejected(self) -> None:
        cap = sys.get_int_max_str_digits()
        with pytest.raises(ValueError, match="set_int_max_str_digits"):
            EvalLimits(max_digits=cap + 1)

    @pytest.mark.skipif(
        not hasattr(sys, "set_int_max_str_digits"),
        reason="interpreter has no int/str digit limit",
    )
    def test_ceiling_above_default_cap_once_lifted(self) -> None:
        previous = sys.get_int_max_str_digits()
        sys.set_int_max_str_digits(6000)
        try:
            limits = EvalLimits(max_digits=5000)
            power = evaluate("10 ^ 4500", limits).to_display_string()
            assert power == "1" + "0" * 4500
            assert evaluate("1" * 5000, limits) == ExactDecimal(int("1" * 5000))
        finally:
            sys.set_int_max_str_digits(previous)
