"""Operator kinds with their precedence and associativity.

Operators form a closed enum; binding strength is looked up in a single
table instead of being spread across the parser.

Precedence (low → high)::

    ADD SUB  <  MUL DIV  <  NEG  <  POW

``NEG`` binding looser than ``POW`` makes ``-2^2`` evaluate to ``-4``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from dcalc.core.tokens import TokenKind


class Associativity(enum.Enum):
    LEFT = "left"
    RIGHT = "right"


class Operator(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    NEG = "neg"

    @property
    def precedence(self) -> int:
        return _TABLE[self].precedence

    @property
    def associativity(self) -> Associativity:
        return _TABLE[self].associativity

    def operand_precedence(self) -> int:
        """Minimum precedence for the right-hand operand of this operator.

        Left-associative operators require strictly tighter binding on
        their right so that ``a - b - c`` folds as ``(a - b) - c``.
        """
        if self.associativity is Associativity.RIGHT:
            return self.precedence
        return self.precedence + 1


@dataclass(frozen=True, slots=True)
class _Binding:
    precedence: int
    associativity: Associativity


PREC_ADDITIVE = 1
PREC_MULTIPLICATIVE = 2
PREC_PREFIX = 3
PREC_POWER = 4

_TABLE: dict[Operator, _Binding] = {
    Operator.ADD: _Binding(PREC_ADDITIVE, Associativity.LEFT),
    Operator.SUB: _Binding(PREC_ADDITIVE, Associativity.LEFT),
    Operator.MUL: _Binding(PREC_MULTIPLICATIVE, Associativity.LEFT),
    Operator.DIV: _Binding(PREC_MULTIPLICATIVE, Associativity.LEFT),
    Operator.NEG: _Binding(PREC_PREFIX, Associativity.RIGHT),
    Operator.POW: _Binding(PREC_POWER, Associativity.RIGHT),
}

BINARY_OPERATORS: dict[TokenKind, Operator] = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUB,
    TokenKind.STAR: Operator.MUL,
    TokenKind.SLASH: Operator.DIV,
    TokenKind.CARET: Operator.POW,
}
"""Tokens that can appear between two operands."""


def binary_operator(kind: TokenKind) -> Operator | None:
    """Return the binary operator for *kind*, or ``None``."""
    return BINARY_OPERATORS.get(kind)
