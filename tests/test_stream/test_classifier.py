"""Tests for stream classification and the variables it writes."""

from unittest.mock import Mock
import pytest
from mudscript.lib.stream import StreamClassifier
from mudscript.lib.stream.classifier import room_title
from mudscript.lib.variables import GlobalVariables
from mudscript.models.dataModel import StreamEventKind


@pytest.fixture
def classifier(store: GlobalVariables) -> StreamClassifier:
    return StreamClassifier(store=store)


def test_plain_text_line(classifier: StreamClassifier) -> None:
    events = classifier.stream("Please wait for connection to game server.\r\n")
    assert len(events) == 1
    assert events[0].kind == StreamEventKind.TEXT
    assert events[0].tags[0].value == "Please wait for connection to game server.\r\n"


def test_prompt_sets_variables(
    classifier: StreamClassifier, store: GlobalVariables
) -> None:
    events = classifier.stream('<prompt time="1576081991">&gt;</prompt>\r\n')
    assert [event.kind for event in events] == [StreamEventKind.PROMPT]
    assert store.get("prompt") == ">"
    assert store.get("gametime") == "1576081991"


def test_room_objs(classifier: StreamClassifier, store: GlobalVariables) -> None:
    events = classifier.stream(
        "<component id='room objs'>You also see a stick.</component>\r\n"
    )
    assert len(events) == 1
    assert events[0].kind == StreamEventKind.ROOM
    assert store.get("roomobjs") == "You also see a stick."


def test_room_exits(classifier: StreamClassifier, store: GlobalVariables) -> None:
    events = classifier.stream(
        "<component id='room exits'>Obvious paths: <d>north</d>, <d>south</d>."
        "<compass></compass></component>\r\n"
    )
    assert len(events) == 1
    assert events[0].kind == StreamEventKind.ROOM
    assert store.get("roomexits") == "Obvious paths: north, south."


def test_room_desc(classifier: StreamClassifier, store: GlobalVariables) -> None:
    desc = "The stone road, once the pinnacle of craftsmanship, is cracked and worn."
    classifier.stream(f"<component id='room desc'>{desc}</component>\r\n")
    assert store.get("roomdesc") == desc


def test_unknown_component_is_text(classifier: StreamClassifier) -> None:
    events = classifier.stream("<component id='exp Athletics'>rank 12</component>")
    assert [event.kind for event in events] == [StreamEventKind.TEXT]


def test_compass_dirs(classifier: StreamClassifier, store: GlobalVariables) -> None:
    events = classifier.stream(
        '<compass><dir value="n"/><dir value="se"/></compass>\n'
    )
    assert [event.kind for event in events] == [StreamEventKind.COMPASS]
    assert store.get("roomexitdirs") == "n,se"


def test_nav_and_room_title(
    classifier: StreamClassifier, store: GlobalVariables
) -> None:
    events = classifier.stream(
        "<nav/><streamWindow id='room' title='Room' "
        "subtitle=\" - [The Crossing, Hodierna Way]\"/>\n"
    )
    assert [event.kind for event in events] == [
        StreamEventKind.NAV,
        StreamEventKind.STREAM_WINDOW,
    ]
    assert store.get("roomtitle") == "The Crossing, Hodierna Way"


def test_text_is_grouped_around_events() -> None:
    handler = Mock()
    classifier = StreamClassifier(handler=handler)
    events = classifier.stream(
        "<pushBold/>A goblin<popBold/> attacks! <prompt>&gt;</prompt>\n"
    )
    assert [event.kind for event in events] == [
        StreamEventKind.TEXT,
        StreamEventKind.PROMPT,
    ]
    assert [tag.name for tag in events[0].tags] == [
        "pushbold",
        "text",
        "popbold",
        "text",
        "text",
    ]
    assert handler.call_count == 2


def test_room_title_decoration() -> None:
    assert room_title(' - ["Kertigen\'s Honor"]') == '"Kertigen\'s Honor"'
    assert room_title("Plain") == "Plain"
