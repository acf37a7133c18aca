"""
Stream classification for tokenized protocol lines.

Maps the tags of one line to `StreamEvent`s and the variable writes the rest
of the client relies on:

- `<component id='room desc'>` (and `room objs`, `room players`,
  `room exits`) sets `roomdesc` / `roomobjs` / `roomplayers` / `roomexits`
- `<prompt time="...">` sets `prompt` and `gametime`
- `<compass><dir value="n"/>...</compass>` sets `roomexitdirs`
- `<streamWindow id='room' subtitle=" - [Title]">` sets `roomtitle`
- `<nav/>` marks a room move for the map resolver

Everything else on the line is gathered into one TEXT event.
"""

import html
from typing import Callable, Final, Optional, Self
from mudscript.lib.stream.tokenizer import StreamTokenizer
from mudscript.lib.variables import VariableStore
from mudscript.models.dataModel import StreamEvent, StreamEventKind, Tag

ROOM_COMPONENTS: Final[dict[str, str]] = {
    "room desc": "roomdesc",
    "room objs": "roomobjs",
    "room players": "roomplayers",
    "room exits": "roomexits",
}

StreamHandler = Callable[[StreamEvent], None]


def room_title(subtitle: str) -> str:
    """Strip the ` - [...]` decoration the game puts around room titles."""
    title: str = subtitle
    if title.startswith(" - "):
        title = title[3:]
    if title.startswith("[") and title.endswith("]"):
        title = title[1:-1]
    return title.strip()


class StreamClassifier:
    """Classifies protocol lines and writes the resulting variables.

    Attributes:
        store: Variables to update; None skips the writes
        handler: Called once per event, in order
    """

    def __init__(
        self: Self,
        store: Optional[VariableStore] = None,
        handler: Optional[StreamHandler] = None,
        tokenizer: Optional[StreamTokenizer] = None,
    ) -> None:
        self.store: Optional[VariableStore] = store
        self.handler: Optional[StreamHandler] = handler
        self.tokenizer: StreamTokenizer = tokenizer or StreamTokenizer()

    def stream(self: Self, line: str) -> list[StreamEvent]:
        """Tokenize and classify one raw protocol line."""
        return self.classify(self.tokenizer.read(line))

    def classify(self: Self, tags: list[Tag]) -> list[StreamEvent]:
        events: list[StreamEvent] = []
        text_event: Optional[StreamEvent] = None

        for tag in tags:
            event: Optional[StreamEvent] = self.classify_tag(tag)
            if event is not None:
                events.append(event)
                continue
            if text_event is None:
                text_event = StreamEvent(kind=StreamEventKind.TEXT)
                events.append(text_event)
            text_event.tags.append(tag)

        if text_event is not None and not any(
            not tag.is_text or tag.value.strip() for tag in text_event.tags
        ):
            events.remove(text_event)

        for event in events:
            if self.store is not None:
                for key, value in event.variables.items():
                    self.store.set(key, value)
            if self.handler is not None:
                self.handler(event)

        return events

    def classify_tag(self: Self, tag: Tag) -> Optional[StreamEvent]:
        """The event for a single tag, or None if it is plain output."""
        if tag.name == "component":
            variable: Optional[str] = ROOM_COMPONENTS.get(tag.attr("id", "") or "")
            if variable is None:
                return None
            return StreamEvent(
                kind=StreamEventKind.ROOM,
                tags=[tag],
                variables={variable: tag.inner_text().strip()},
            )

        if tag.name == "prompt":
            variables: dict[str, str] = {"prompt": html.unescape(tag.value).strip()}
            if tag.has_attr("time"):
                variables["gametime"] = tag.attr("time") or ""
            return StreamEvent(
                kind=StreamEventKind.PROMPT, tags=[tag], variables=variables
            )

        if tag.name == "compass":
            dirs: list[str] = [
                child.attr("value") or ""
                for child in tag.children
                if child.name == "dir" and child.has_attr("value")
            ]
            return StreamEvent(
                kind=StreamEventKind.COMPASS,
                tags=[tag],
                variables={"roomexitdirs": ",".join(dirs)},
            )

        if tag.name == "nav":
            return StreamEvent(kind=StreamEventKind.NAV, tags=[tag])

        if tag.name == "streamwindow" and tag.attr("id") == "room":
            return StreamEvent(
                kind=StreamEventKind.STREAM_WINDOW,
                tags=[tag],
                variables={"roomtitle": room_title(tag.attr("subtitle", "") or "")},
            )

        return None
