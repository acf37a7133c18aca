"""Tests for the flat protocol scanner and the tree builder."""

import pytest
from mudscript.lib.stream.builder import TreeBuilder, tag_value
from mudscript.lib.stream.scanner import (
    SelfClose,
    StreamScanner,
    TagClose,
    TagOpen,
    Text,
)
from mudscript.models.dataModel import Tag


@pytest.fixture
def scanner() -> StreamScanner:
    return StreamScanner()


def test_scan_events(scanner: StreamScanner) -> None:
    events = scanner.scan("<b>hi</B><br/> tail")
    assert events == [
        TagOpen("b", {}),
        Text("hi"),
        TagClose("b"),
        SelfClose("br", {}),
        Text(" tail"),
    ]


def test_scan_bare_and_valueless_attributes(scanner: StreamScanner) -> None:
    events = scanner.scan("<d cmd=north hidden>n</d>")
    assert events[0] == TagOpen("d", {"cmd": "north", "hidden": ""})


def test_scan_duplicate_attribute_keeps_first(scanner: StreamScanner) -> None:
    events = scanner.scan("<a id='one' id='two'/>")
    assert events == [SelfClose("a", {"id": "one"})]


def test_scan_spaces_around_equals(scanner: StreamScanner) -> None:
    events = scanner.scan('<a id = "x y" />')
    assert events == [SelfClose("a", {"id": "x y"})]


def test_scan_quoted_gt_inside_value(scanner: StreamScanner) -> None:
    events = scanner.scan('<a title="x > y">t</a>')
    assert events[0] == TagOpen("a", {"title": "x > y"})


def test_recover_value_before_terminator(scanner: StreamScanner) -> None:
    # the only delimiter that can close the value sits right before '/>'
    events = scanner.scan('<a title="say "hi"there"/>')
    assert events == [SelfClose("a", {"title": 'say "hi"there'})]


def test_unclosed_quote_degrades_to_text(scanner: StreamScanner) -> None:
    events = scanner.scan('<a title="never closed>')
    assert events == [Text('<a title="never closed>')]


def test_malformed_close_tag_is_text(scanner: StreamScanner) -> None:
    assert scanner.scan("</a b>") == [Text("</a b>")]


def test_tag_value_joins_child_values() -> None:
    children = [Tag(name="skin", value="one"), Tag(name="skin", value="two")]
    assert tag_value(children) == "one,two"
    assert tag_value([Tag.text("a"), Tag(name="d", value="b"), Tag.text("c")]) == "ac"
    assert tag_value([]) == ""


def test_builder_closes_inner_tags_implicitly() -> None:
    tags = TreeBuilder().build(
        [TagOpen("a", {}), TagOpen("b", {}), Text("x"), TagClose("a")]
    )
    assert len(tags) == 1
    assert tags[0].name == "a"
    assert tags[0].children[0].name == "b"
    assert tags[0].children[0].value == "x"
    assert tags[0].value == "x"


def test_escaped_quote_before_terminator_is_recovered(scanner: StreamScanner) -> None:
    events = scanner.scan('<a v="abc\\"/>')
    assert events == [SelfClose("a", {"v": "abc\\"})]
