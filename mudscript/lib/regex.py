"""
Regular expression compilation, caching and match enumeration.

`RegexEngine` owns an append-only cache of compiled patterns. One engine is
created by whoever wires the substitution engine together and is passed to it
by reference, so every substitution shares the same compiled patterns.

All ranges reported by `MatchResult` are character offsets into the original
string, which makes range-based in-place replacement correct for non-ASCII
text.

Example:
    engine = RegexEngine()
    regex = engine.compile(r"([$]([a-zA-Z0-9]+))")
    for match in regex.all_matches("$a and $b"):
        print(match.value_at(2), match.range_of(0))
"""

import re
import threading
from typing import Optional
from mudscript.lib.log import LOG


class InvalidPattern(ValueError):
    """Raised when a pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern '{pattern}': {reason}")
        self.pattern: str = pattern
        self.reason: str = reason


class MatchResult:
    """One match of a `Regex` against an input string."""

    def __init__(self, input_text: str, result: re.Match) -> None:
        self._input: str = input_text
        self._result: re.Match = result

    @property
    def count(self) -> int:
        """Number of ranges: the whole match plus every capture group."""
        return (self._result.re.groups or 0) + 1

    def range_of(self, index: int) -> Optional[tuple[int, int]]:
        if index >= self.count:
            return None
        start, end = self._result.span(index)
        if start < 0:
            return None
        return start, end

    def value_at(self, index: int) -> Optional[str]:
        span: Optional[tuple[int, int]] = self.range_of(index)
        if span is None:
            return None
        return self._input[span[0] : span[1]]


class Regex:
    """A compiled pattern with enumeration helpers."""

    def __init__(self, pattern: str, flags: int = 0) -> None:
        self.pattern: str = pattern
        try:
            self.expression: re.Pattern = re.compile(pattern, flags)
        except re.error as e:
            raise InvalidPattern(pattern, str(e)) from e

    def replace(self, input_text: str, template: str) -> str:
        return self.expression.sub(template, input_text)

    def matches(self, input_text: str) -> list[tuple[int, int]]:
        """Ranges of the first match and each of its participating groups."""
        first: Optional[MatchResult] = self.first_match(input_text)
        if first is None:
            return []
        ranges: list[tuple[int, int]] = []
        for i in range(first.count):
            span = first.range_of(i)
            if span is not None:
                ranges.append(span)
        return ranges

    def has_matches(self, input_text: str) -> bool:
        return self.expression.search(input_text) is not None

    def first_match(self, input_text: str) -> Optional[MatchResult]:
        result: Optional[re.Match] = self.expression.search(input_text)
        if result is None:
            return None
        return MatchResult(input_text, result)

    def all_matches(self, input_text: str) -> list[MatchResult]:
        return [
            MatchResult(input_text, result)
            for result in self.expression.finditer(input_text)
        ]


class RegexEngine:
    """Compiles patterns once and hands out the cached `Regex`.

    Entries are never evicted; the set of patterns in play (the substitution
    cascade plus user match patterns) is small and long-lived.
    """

    def __init__(self) -> None:
        self._cache: dict[tuple[str, int], Regex] = {}
        self._lock: threading.Lock = threading.Lock()

    def compile(self, pattern: str, flags: int = 0) -> Regex:
        """Return the cached `Regex` for `pattern`, compiling it on first use.

        Raises:
            InvalidPattern: If `pattern` is not valid regular expression syntax
        """
        key: tuple[str, int] = (pattern, flags)
        with self._lock:
            cached: Optional[Regex] = self._cache.get(key)
            if cached is not None:
                return cached
            try:
                regex: Regex = Regex(pattern, flags)
            except InvalidPattern as e:
                LOG(str(e))
                raise
            self._cache[key] = regex
            return regex

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, pattern: str) -> bool:
        with self._lock:
            return any(key[0] == pattern for key in self._cache)
