"""Tests for the precedence-climbing parser (core/parser.py).

The parser is driven with hand-built token lists where that isolates it
from the lexer, and with :class:`~dcalc.core.lexer.Lexer` elsewhere.
"""

from __future__ import annotations

import pytest

from dcalc.core.lexer import Lexer
from dcalc.core.limits import EvalLimits
from dcalc.core.number import ExactDecimal
from dcalc.core.parser import MAX_NESTING_DEPTH, Parser
from dcalc.core.tokens import Token, TokenKind
from dcalc.exceptions import (
    DivisionByZeroError,
    EmptyInputError,
    ParseError,
    ResultTooLargeError,
    UnexpectedTokenError,
    UnmatchedParenthesisError,
)


def _parse(text: str, limits: EvalLimits | None = None) -> ExactDecimal:
    if limits is None:
        return Parser(Lexer(text)).parse()
    return Parser(Lexer(text), limits).parse()


class TestTokenInput:
    def test_accepts_plain_token_list(self) -> None:
        tokens = [
            Token(TokenKind.NUMBER, "6", 0),
            Token(TokenKind.SLASH, "/", 1),
            Token(TokenKind.NUMBER, "4", 2),
            Token(TokenKind.END, "", 3),
        ]
        assert Parser(tokens).parse() == ExactDecimal(15, 1)

    def test_stops_pulling_after_first_error(self) -> None:
        pulled: list[Token] = []

        def source() -> object:
            for token in Lexer("(1 + ) * 2"):
                pulled.append(token)
                yield token

        with pytest.raises(UnexpectedTokenError):
            Parser(source()).parse()  # type: ignore[arg-type]
        assert [token.text for token in pulled] == ["(", "1", "+", ")"]


class TestPrecedence:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("42", 42),
            ("5 + 8 * 2", 21),
            ("(5 + 8) * 2", 26),
            ("5 + 10 * 2", 25),
            ("2 * (10 + 11)", 42),
            ("5 - 5 + 5", 5),
            ("8 / 2 / 2", 2),
            ("2 ^ 3 ^ 2", 512),
            ("(2 ^ 3) ^ 2", 64),
            ("2 * 3 ^ 2", 18),
            ("1 + 2 * 3 - 4 / 2", 5),
            ("((7))", 7),
        ],
    )
    def test_binary_operators(self, text: str, expected: int) -> None:
        assert _parse(text) == expected


class TestPrefixOperators:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("-2 ^ 2", -4),
            ("(-2) ^ 2", 4),
            ("-2 * (10 + 11)", -42),
            ("-2 * 3", -6),
            ("3 * -2", -6),
            ("2 - -3", 5),
            ("--2", 2),
            ("+3", 3),
            ("-+-4", 4),
            ("-(1 + 2)", -3),
            ("2 ^ -0", 1),
        ],
    )
    def test_values(self, text: str, expected: int) -> None:
        assert _parse(text) == expected

    def test_negative_exponent_reaches_engine(self) -> None:
        from dcalc.exceptions import UnsupportedExponentError

        with pytest.raises(UnsupportedExponentError):
            _parse("2 ^ -1")


class TestGrammarErrors:
    def test_empty_input(self) -> None:
        with pytest.raises(EmptyInputError):
            _parse("")

    def test_whitespace_only(self) -> None:
        with pytest.raises(EmptyInputError):
            _parse("   ")

    def test_trailing_operator(self) -> None:
        with pytest.raises(UnexpectedTokenError) as exc_info:
            _parse("5 + ")
        assert exc_info.value.token.is_end
        assert exc_info.value.position == 4

    def test_missing_closing_paren(self) -> None:
        with pytest.raises(UnmatchedParenthesisError) as exc_info:
            _parse("(5 + 3")
        assert exc_info.value.token.is_end
        assert "offset 0" in str(exc_info.value)

    def test_stray_closing_paren(self) -> None:
        with pytest.raises(UnmatchedParenthesisError) as exc_info:
            _parse("5 + 3)")
        assert exc_info.value.token.kind is TokenKind.RPAREN
        assert exc_info.value.position == 5

    def test_empty_parentheses(self) -> None:
        with pytest.raises(UnexpectedTokenError) as exc_info:
            _parse("()")
        assert not isinstance(exc_info.value, UnmatchedParenthesisError)
        assert exc_info.value.token.kind is TokenKind.RPAREN

    def test_operator_where_primary_expected(self) -> None:
        with pytest.raises(UnexpectedTokenError) as exc_info:
            _parse("* 5")
        assert exc_info.value.token.kind is TokenKind.STAR
        assert exc_info.value.position == 0

    def test_adjacent_numbers(self) -> None:
        with pytest.raises(UnexpectedTokenError) as exc_info:
            _parse("5 5")
        assert exc_info.value.token.text == "5"
        assert exc_info.value.position == 2

    def test_double_point_literal(self) -> None:
        with pytest.raises(UnexpectedTokenError) as exc_info:
            _parse("1.2.3")
        assert exc_info.value.token.text == ".3"

    def test_leading_close_paren(self) -> None:
        with pytest.raises(UnexpectedTokenError):
            _parse(")")


class TestNesting:
    def test_deep_but_allowed(self) -> None:
        depth = MAX_NESTING_DEPTH - 10
        assert _parse("(" * depth + "1" + ")" * depth) == 1

    def test_parentheses_too_deep(self) -> None:
        depth = MAX_NESTING_DEPTH + 50
        with pytest.raises(ParseError, match="nested"):
            _parse("(" * depth + "1" + ")" * depth)

    def test_prefix_chain_too_deep(self) -> None:
        with pytest.raises(ParseError, match="nested"):
            _parse("-" * (MAX_NESTING_DEPTH + 50) + "1")

    def test_parser_recovers_depth_after_error(self) -> None:
        parser = Parser(Lexer("(" * 5 + "1"))
        with pytest.raises(UnmatchedParenthesisError):
            parser.parse()
        assert parser._depth == 0


class TestArithmeticPropagation:
    def test_division_by_zero(self) -> None:
        with pytest.raises(DivisionByZeroError):
            _parse("1 / (2 - 2)")

    def test_literal_too_long(self) -> None:
        with pytest.raises(ResultTooLargeError):
            _parse("1" * 11, EvalLimits(max_digits=10))

    def test_literal_with_many_fraction_digits(self) -> None:
        with pytest.raises(ResultTooLargeError):
            _parse("0." + "0" * 20 + "1", EvalLimits(max_digits=10))

    def test_leading_zeros_do_not_count_towards_ceiling(self) -> None:
        assert _parse("0" * 4001 + "1") == 1
        assert _parse("0" * 20 + "1.5", EvalLimits(max_digits=2)) == ExactDecimal(15, 1)

    def test_fraction_zeros_still_count_towards_ceiling(self) -> None:
        with pytest.raises(ResultTooLargeError):
            _parse("1." + "0" * 10, EvalLimits(max_digits=10))

    def test_limits_are_applied(self) -> None:
        assert _parse("1 / 3", EvalLimits.rounding(3)) == ExactDecimal(333, 3)
