from __future__ import annotations

import enum

from dataclasses import dataclass
from typing import IO, Iterator, Optional, Union

CHUNK_SIZE = 4096


class TokenKind(enum.Enum):
    RIGHT = '>'
    LEFT = '<'
    INC = '+'
    DEC = '-'
    OUTPUT = '.'
    INPUT = ','
    OPEN = '['
    CLOSE = ']'

    @classmethod
    def from_char(cls, ch: str) -> Optional['TokenKind']:
        return _BY_CHAR.get(ch)

    @property
    def char(self) -> str:
        return self.value


_BY_CHAR = {k.value: k for k in TokenKind}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    line: int
    column: int


def _chunks(source: Union[str, IO[str]]) -> Iterator[str]:
    if isinstance(source, str):
        yield source
        return
    while True:
        chunk = source.read(CHUNK_SIZE)
        if not chunk:
            return
        yield chunk


def tokenize(source: Union[str, IO[str]]) -> Iterator[Token]:
    """
    Scan program text into instruction tokens.

    Everything that is not one of the eight instruction characters is a
    comment and is skipped. Line and column are 1-based and point at the
    instruction character itself.

    Args:
        source: program text, or a text stream read in CHUNK_SIZE pieces

    Yields:
        Token for every instruction character, in source order
    """
    line = 1
    column = 0
    for chunk in _chunks(source):
        for ch in chunk:
            if ch == '\n':
                line += 1
                column = 0
                continue
            column += 1
            kind = _BY_CHAR.get(ch)
            if kind is not None:
                yield Token(kind, line, column)
