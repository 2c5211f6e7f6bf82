"""Precedence-climbing parser that evaluates while it parses.

The parser pulls tokens one at a time from a lexer and folds every
operator into a running :class:`~dcalc.core.number.ExactDecimal` as
soon as both of its operands are known.  No syntax tree is kept; the
call stack of :meth:`Parser.parse_expr` is the only structure needed to
resolve precedence.

Grammar (informal)::

    expr    := primary (binop expr)*      -- folded by precedence
    primary := NUMBER
             | '(' expr ')'
             | ('-' | '+') expr@NEG
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from dcalc.core.limits import DEFAULT_LIMITS, EvalLimits
from dcalc.core.number import ExactDecimal
from dcalc.core.operators import PREC_ADDITIVE, Operator, binary_operator
from dcalc.core.tokens import Token, TokenKind
from dcalc.exceptions import (
    EmptyInputError,
    ParseError,
    ResultTooLargeError,
    UnexpectedTokenError,
    UnmatchedParenthesisError,
)

MAX_NESTING_DEPTH: int = 200
"""Deepest allowed chain of parentheses, prefix signs and powers."""

_BINARY: dict[Operator, Callable[[ExactDecimal, ExactDecimal, EvalLimits], ExactDecimal]] = {
    Operator.ADD: ExactDecimal.add,
    Operator.SUB: ExactDecimal.sub,
    Operator.MUL: ExactDecimal.mul,
    Operator.DIV: ExactDecimal.div,
    Operator.POW: ExactDecimal.pow,
}


class Parser:
    """Single-use evaluator over one token stream.

    Parameters
    ----------
    tokens:
        Token source ending with an ``END`` token, normally a
        :class:`~dcalc.core.lexer.Lexer`.
    limits:
        Size guards and division policy handed to every arithmetic step.
    """

    def __init__(
        self,
        tokens: Iterable[Token],
        limits: EvalLimits = DEFAULT_LIMITS,
    ) -> None:
        self._tokens = iter(tokens)
        self._limits = limits
        self._depth = 0
        self._current: Token = next(self._tokens)

    # ------------------------------------------------------------------
    # Token cursor
    # ------------------------------------------------------------------

    def _advance(self) -> Token:
        token = self._current
        if not token.is_end:
            self._current = next(self._tokens)
        return token

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def parse(self) -> ExactDecimal:
        """Evaluate the whole stream; every token up to ``END`` must be used."""
        if self._current.is_end:
            raise EmptyInputError(self._current, "Cannot evaluate empty input")

        value = self.parse_expr(PREC_ADDITIVE)

        leftover = self._current
        if leftover.kind is TokenKind.RPAREN:
            raise UnmatchedParenthesisError(
                leftover,
                f"Unmatched ')' at offset {leftover.position}",
            )
        if not leftover.is_end:
            raise UnexpectedTokenError(
                leftover,
                hint="Expected an operator between operands.",
            )
        return value

    def parse_expr(self, min_precedence: int) -> ExactDecimal:
        """Parse a primary, then fold binary operators binding at least
        as tightly as *min_precedence*."""
        self._enter()
        try:
            value = self.parse_primary()
            while True:
                operator = binary_operator(self._current.kind)
                if operator is None or operator.precedence < min_precedence:
                    return value
                self._advance()
                operand = self.parse_expr(operator.operand_precedence())
                value = _BINARY[operator](value, operand, self._limits)
        finally:
            self._depth -= 1

    def parse_primary(self) -> ExactDecimal:
        token = self._current
        kind = token.kind

        if kind is TokenKind.NUMBER:
            self._advance()
            return self._literal(token)

        if kind is TokenKind.LPAREN:
            self._advance()
            if self._current.kind is TokenKind.RPAREN:
                raise UnexpectedTokenError(
                    self._current,
                    f"Empty parentheses at offset {token.position}",
                )
            value = self.parse_expr(PREC_ADDITIVE)
            if self._current.kind is not TokenKind.RPAREN:
                raise UnmatchedParenthesisError(
                    self._current,
                    f"Missing ')' for '(' at offset {token.position}, "
                    f"found {self._current.describe()}",
                )
            self._advance()
            return value

        if kind is TokenKind.MINUS:
            self._advance()
            return self.parse_expr(Operator.NEG.precedence).neg()

        if kind is TokenKind.PLUS:
            self._advance()
            return self.parse_expr(Operator.NEG.precedence)

        if kind is TokenKind.END:
            raise UnexpectedTokenError(
                token,
                "Unexpected end of input, expected a number or '('",
            )

        raise UnexpectedTokenError(
            token,
            hint="Expected a number, '(' or a sign here.",
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _enter(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            self._depth -= 1
            raise ParseError(
                f"Expression is nested more than {MAX_NESTING_DEPTH} levels deep",
            )

    def _literal(self, token: Token) -> ExactDecimal:
        whole, _, fraction = token.text.partition(".")
        digit_count = len(whole.lstrip("0")) + len(fraction)
        if digit_count > self._limits.max_digits:
            raise ResultTooLargeError(
                f"Number at offset {token.position} has {digit_count} digits, "
                f"the limit is {self._limits.max_digits}",
                hint="Raise the limit with --max-digits or DCALC_MAX_DIGITS.",
            )
        return ExactDecimal.parse(token.text).within(self._limits)
