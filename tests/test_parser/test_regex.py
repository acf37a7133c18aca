"""Tests for the regex engine."""

import pytest
from mudscript.lib.regex import InvalidPattern, RegexEngine


@pytest.fixture
def regex_engine() -> RegexEngine:
    return RegexEngine()


def test_compile_caches(regex_engine: RegexEngine) -> None:
    first = regex_engine.compile(r"\d+")
    assert regex_engine.compile(r"\d+") is first
    assert r"\d+" in regex_engine
    assert len(regex_engine) == 1


def test_invalid_pattern(regex_engine: RegexEngine) -> None:
    with pytest.raises(InvalidPattern) as error:
        regex_engine.compile("([a-z")
    assert error.value.pattern == "([a-z"
    assert isinstance(error.value, ValueError)
    assert len(regex_engine) == 0


def test_all_matches_use_character_ranges(regex_engine: RegexEngine) -> None:
    text = "ñandú $uno y $dos"
    matches = regex_engine.compile(r"([$]([a-z]+))").all_matches(text)
    assert [match.value_at(2) for match in matches] == ["uno", "dos"]
    start, end = matches[0].range_of(0)
    assert text[start:end] == "$uno"
    assert matches[0].count == 3
    assert matches[0].range_of(3) is None


def test_first_match_and_matches(regex_engine: RegexEngine) -> None:
    regex = regex_engine.compile(r"You (see|hear)(?: (\w+))?")
    assert regex.has_matches("You see")
    assert not regex.has_matches("Nothing")
    assert regex.first_match("Nothing") is None
    assert regex.matches("Nothing") == []
    # the optional group did not participate, so it has no range
    assert regex.matches("You see") == [(0, 7), (4, 7)]
    assert regex.matches("You see Bob") == [(0, 11), (4, 7), (8, 11)]
    match = regex.first_match("You hear")
    assert match is not None
    assert match.value_at(1) == "hear"
    assert match.value_at(2) is None


def test_replace(regex_engine: RegexEngine) -> None:
    assert regex_engine.compile(r"\s+").replace("a   b  c", " ") == "a b c"
