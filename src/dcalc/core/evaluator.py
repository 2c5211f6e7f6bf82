"""Public evaluation entry point: text in, exact decimal out."""

from __future__ import annotations

import logging

from dcalc.core.lexer import Lexer
from dcalc.core.limits import DEFAULT_LIMITS, EvalLimits
from dcalc.core.number import ExactDecimal
from dcalc.core.parser import Parser

logger = logging.getLogger(__name__)


def evaluate(text: str, limits: EvalLimits | None = None) -> ExactDecimal:
    """Evaluate the arithmetic expression in *text*.

    Each call builds its own lexer and parser, so repeated and
    concurrent calls are independent of each other.

    Raises
    ------
    LexError
        When *text* contains a character that starts no token.
    ParseError
        When the tokens do not form a complete expression.
    DecimalArithmeticError
        When an operation has no exact result within *limits*.
    """
    limits = limits or DEFAULT_LIMITS
    logger.debug("Evaluating %r", text)
    result = Parser(Lexer(text), limits).parse()
    logger.debug("Evaluated %r -> %s", text, result)
    return result
