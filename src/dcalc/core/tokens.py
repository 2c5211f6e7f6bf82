"""Token model produced by the lexer.

Tokens are **frozen** dataclasses — immutable value objects that carry
their kind, their source text and the byte offset they started at.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenKind(enum.Enum):
    """Closed set of token kinds recognised by the lexer."""

    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    LPAREN = "("
    RPAREN = ")"
    END = "end of input"


SINGLE_CHAR_TOKENS: dict[str, TokenKind] = {
    kind.value: kind
    for kind in TokenKind
    if kind not in (TokenKind.NUMBER, TokenKind.END)
}
"""Operator and parenthesis characters mapped to their token kind."""


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexical token."""

    kind: TokenKind
    """What the token is."""

    text: str
    """Source text.  Numbers keep their literal exactly as written."""

    position: int
    """Byte offset of the first character in the UTF-8 encoded input."""

    @property
    def is_end(self) -> bool:
        return self.kind is TokenKind.END

    def describe(self) -> str:
        """Human-readable label used in diagnostics."""
        if self.kind is TokenKind.NUMBER:
            return f"number {self.text}"
        if self.kind is TokenKind.END:
            return "end of input"
        return f"'{self.text}'"
