"""Lexer — turns expression text into a lazy stream of tokens.

The token stream is produced on demand by a generator, so the parser
pulls exactly as many tokens as it needs and a lexing error further
along the input is only reported once the parser gets there.  A
:class:`Lexer` can be iterated any number of times; each iteration
restarts from the beginning of the text.
"""

from __future__ import annotations

from collections.abc import Iterator

from dcalc.core.tokens import SINGLE_CHAR_TOKENS, Token, TokenKind
from dcalc.exceptions import LexError

_DIGITS = frozenset("0123456789")
_POINT = "."


class Lexer:
    """Restartable token source over a single input string."""

    def __init__(self, text: str) -> None:
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def __iter__(self) -> Iterator[Token]:
        return _scan(self._text)


def tokenize(text: str) -> Iterator[Token]:
    """Return a one-shot token iterator for *text*, ending with ``END``."""
    return iter(Lexer(text))


def _scan(text: str) -> Iterator[Token]:
    index = 0
    offset = 0
    length = len(text)

    while index < length:
        char = text[index]

        if char.isspace():
            index += 1
            offset += len(char.encode("utf-8"))
            continue

        kind = SINGLE_CHAR_TOKENS.get(char)
        if kind is not None:
            yield Token(kind, char, offset)
            index += 1
            offset += 1
            continue

        if char in _DIGITS or char == _POINT:
            end = _number_end(text, index)
            literal = text[index:end]
            if literal == _POINT:
                raise LexError(char, offset)
            yield Token(TokenKind.NUMBER, literal, offset)
            # Number literals are pure ASCII, one byte per character.
            offset += end - index
            index = end
            continue

        raise LexError(char, offset)

    yield Token(TokenKind.END, "", offset)


def _number_end(text: str, start: int) -> int:
    """Return the index just past the maximal number run at *start*.

    The run is ``digits* ['.' digits*]``; at most one decimal point is
    consumed, so ``1.2.3`` lexes as ``1.2`` followed by ``.3``.
    """
    index = start
    length = len(text)
    while index < length and text[index] in _DIGITS:
        index += 1
    if index < length and text[index] == _POINT:
        index += 1
        while index < length and text[index] in _DIGITS:
            index += 1
    return index
