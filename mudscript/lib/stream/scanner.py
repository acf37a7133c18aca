"""
Flat event scanner for the game protocol's pseudo-XML.

Turns one line into `Text`, `TagOpen`, `TagClose` and `SelfClose` events
without building a tree. All of the grammar's leniency lives here:

- Attribute values may be single-quoted, double-quoted or bare.
- A quoted value may contain the other quote character unescaped, and a
  backslash-escaped delimiter becomes a literal quote.
- The game sometimes sends the delimiter itself unescaped inside a value
  (`subtitle=" - ["Kertigen's Honor"]"`). A quote therefore only closes a
  value when what follows is the tag terminator, end of line, or whitespace
  and another `name=`. If no quote qualifies, the value runs to the last
  delimiter sitting right before the tag terminator.
- Anything that cannot be read as a tag (`a < b`, an unterminated tag) stays
  in the surrounding text.
"""

import re
from dataclasses import dataclass, field
from typing import Final, Optional, Union
from mudscript.lib.log import LOG

_WHITESPACE: Final[str] = " \t\r\n"
_NAME_END: Final[frozenset[str]] = frozenset(_WHITESPACE + "/><")
_KEY_END: Final[frozenset[str]] = frozenset(_WHITESPACE + "=/><")
_QUOTES: Final[str] = "\"'"

_CLOSES_VALUE: Final[re.Pattern] = re.compile(
    r"\s*/?>|\s*$|\s+[^\s=/>\"'<]+\s*="
)


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class TagOpen:
    name: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SelfClose:
    name: str
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TagClose:
    name: str


ScanEvent = Union[Text, TagOpen, SelfClose, TagClose]


def _skip_spaces(line: str, i: int) -> int:
    while i < len(line) and line[i] in _WHITESPACE:
        i += 1
    return i


def _unescape(raw: str, quote: str) -> str:
    return raw.replace("\\" + quote, quote)


class StreamScanner:
    """Scans a single line into flat events; keeps no state between calls."""

    def scan(self, line: str) -> list[ScanEvent]:
        events: list[ScanEvent] = []
        text_start: int = 0
        i: int = 0
        while i < len(line):
            if line[i] != "<":
                i += 1
                continue

            parsed: Optional[tuple[ScanEvent, int]] = self.read_tag(line, i)
            if parsed is None:
                i += 1
                continue

            event, end = parsed
            if i > text_start:
                events.append(Text(line[text_start:i]))
            events.append(event)
            i = end
            text_start = end

        if text_start < len(line):
            events.append(Text(line[text_start:]))
        return events

    def read_tag(self, line: str, start: int) -> Optional[tuple[ScanEvent, int]]:
        """Read the tag beginning at `line[start] == "<"`.

        Returns:
            The event and the index just past the tag, or None when the text
            at `start` is not a well-enough formed tag
        """
        i: int = start + 1
        closing: bool = i < len(line) and line[i] == "/"
        if closing:
            i += 1

        name_start: int = i
        while i < len(line) and line[i] not in _NAME_END:
            i += 1
        name: str = line[name_start:i]
        if not name or not name[0].isalpha():
            return None

        if closing:
            end: int = line.find(">", i)
            if end < 0 or line[i:end].strip():
                LOG(f"Malformed close tag kept as text: {line[start:]!r}")
                return None
            return TagClose(name.lower()), end + 1

        attributes: dict[str, str] = {}
        while True:
            i = _skip_spaces(line, i)
            if i >= len(line) or line[i] == "<":
                LOG(f"Unterminated tag kept as text: {line[start:]!r}")
                return None
            if line.startswith("/>", i):
                return SelfClose(name.lower(), attributes), i + 2
            if line[i] == ">":
                return TagOpen(name.lower(), attributes), i + 1

            key_start: int = i
            while i < len(line) and line[i] not in _KEY_END:
                i += 1
            key: str = line[key_start:i]
            if not key:
                # a lone '/' or '=' inside the tag
                i += 1
                continue

            value: str = ""
            i = _skip_spaces(line, i)
            if i < len(line) and line[i] == "=":
                i = _skip_spaces(line, i + 1)
                read: Optional[tuple[str, int]] = self.read_value(line, i)
                if read is None:
                    LOG(f"Unterminated attribute '{key}' in {line[start:]!r}")
                    return None
                value, i = read

            attributes.setdefault(key, value)

    def read_value(self, line: str, start: int) -> Optional[tuple[str, int]]:
        """Read an attribute value starting at `start`.

        Returns:
            The unescaped value and the index just past it, or None when a
            quoted value never closes
        """
        if start >= len(line) or line[start] not in _QUOTES:
            i: int = start
            while (
                i < len(line)
                and line[i] not in _WHITESPACE + ">"
                and not line.startswith("/>", i)
            ):
                i += 1
            return line[start:i], i

        quote: str = line[start]
        chars: list[str] = []
        i = start + 1
        while i < len(line):
            char: str = line[i]
            if char == "\\" and i + 1 < len(line) and line[i + 1] == quote:
                chars.append(quote)
                i += 2
                continue
            if char == quote and _CLOSES_VALUE.match(line, i + 1):
                return "".join(chars), i + 1
            chars.append(char)
            i += 1

        return self.recover_value(line, start)

    def recover_value(self, line: str, start: int) -> Optional[tuple[str, int]]:
        """Close the value at the delimiter right before the tag terminator."""
        quote: str = line[start]
        terminator: Optional[re.Match] = re.compile(
            re.escape(quote) + r"\s*/?>"
        ).search(line, start + 1)
        if terminator is None:
            return None
        end: int = terminator.start()
        LOG(f"Recovered unbalanced quotes in attribute value: {line[start:end + 1]!r}")
        return _unescape(line[start + 1 : end], quote), end + 1
