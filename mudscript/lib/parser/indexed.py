"""
Tokenizer for indexed variable access.

Splits text into plain runs and `name[index]` / `name(index)` forms, where
`name` starts with one of the active sigils. Brackets nest, so
`$list[$pick[0]]` yields a single indexed form whose index is `$pick[0]`.
A form without its closing bracket is left as plain text.
"""

from dataclasses import dataclass
from typing import Final, Union

BRACKETS: Final[dict[str, str]] = {"[": "]", "(": ")"}
NAME_CHARS: Final[frozenset[str]] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-."
)


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class IndexedVar:
    """`name` and `index` as written; `open` is the bracket used."""

    name: str
    index: str
    open: str = "["

    @property
    def source(self) -> str:
        return f"{self.name}{self.open}{self.index}{BRACKETS[self.open]}"


IndexedToken = Union[PlainText, IndexedVar]


def _name_start(text: str, end: int, sigils: list[str]) -> int:
    """Start of a sigil-prefixed name ending at `end`, or -1."""
    start: int = end
    while start > 0 and text[start - 1] in NAME_CHARS:
        start -= 1
    if start == end:
        return -1
    for sigil in sorted(sigils, key=len, reverse=True):
        begin: int = start - len(sigil)
        if begin >= 0 and text.startswith(sigil, begin):
            return begin
    return -1


def _closing(text: str, start: int, open_char: str) -> int:
    """Index of the bracket closing the one at `start`, or -1."""
    close_char: str = BRACKETS[open_char]
    depth: int = 0
    for i in range(start, len(text)):
        if text[i] == open_char:
            depth += 1
        elif text[i] == close_char:
            depth -= 1
            if depth == 0:
                return i
    return -1


def indexed_tokenize(text: str, sigils: list[str]) -> list[IndexedToken]:
    """Split `text` into plain runs and indexed variable forms.

    Args:
        text: Input text
        sigils: Prefixes that may start a variable name

    Returns:
        Tokens whose sources concatenate back to `text`
    """
    tokens: list[IndexedToken] = []
    plain_start: int = 0
    i: int = 0
    while i < len(text):
        char: str = text[i]
        if char not in BRACKETS:
            i += 1
            continue

        name_start: int = _name_start(text, i, sigils)
        close: int = _closing(text, i, char) if name_start >= plain_start else -1
        if close < 0:
            i += 1
            continue

        if name_start > plain_start:
            tokens.append(PlainText(text[plain_start:name_start]))
        tokens.append(IndexedVar(text[name_start:i], text[i + 1 : close], char))
        i = close + 1
        plain_start = i

    if plain_start < len(text):
        tokens.append(PlainText(text[plain_start:]))
    return tokens
