"""
Lossless tokenization of text into word-runs and whitespace-runs.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple

_TOKEN_PATTERN = re.compile(r"\s+|\S+")


class TokenKind(str, Enum):
    WORD = "word"
    SPACE = "space"


@dataclass(frozen=True)
class Token:
    text: str
    kind: TokenKind
    position: int

    @property
    def is_space(self) -> bool:
        return self.kind is TokenKind.SPACE


def tokenize(text: str) -> Tuple[Token, ...]:
    """
    Splits text on whitespace / non-whitespace boundaries.
    Every character lands in exactly one token, so detokenize(tokenize(s)) == s.

    Example: "Hi  there\\n" -> ("Hi", "  ", "there", "\\n")
    """
    tokens = []
    for position, match in enumerate(_TOKEN_PATTERN.finditer(text)):
        chunk = match.group()
        kind = TokenKind.SPACE if chunk[0].isspace() else TokenKind.WORD
        tokens.append(Token(text=chunk, kind=kind, position=position))
    return tuple(tokens)


def detokenize(tokens: Iterable[Token]) -> str:
    return "".join(t.text for t in tokens)
