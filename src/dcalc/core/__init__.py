"""Core layer — lexer, parser and exact decimal arithmetic.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``config``.
* No module-level mutable state; every evaluation is self-contained.
"""

from dcalc.core.evaluator import evaluate
from dcalc.core.lexer import Lexer, tokenize
from dcalc.core.limits import DEFAULT_LIMITS, DivisionPolicy, EvalLimits
from dcalc.core.number import ExactDecimal
from dcalc.core.operators import Associativity, Operator
from dcalc.core.parser import Parser
from dcalc.core.tokens import Token, TokenKind

__all__: list[str] = [
    "DEFAULT_LIMITS",
    "Associativity",
    "DivisionPolicy",
    "EvalLimits",
    "ExactDecimal",
    "Lexer",
    "Operator",
    "Parser",
    "Token",
    "TokenKind",
    "evaluate",
    "tokenize",
]
