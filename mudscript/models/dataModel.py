"""
dataModel.py

This module defines the data models shared by the stream tokenizer, the
script lexer, the variable store and the stream classifier. These shapes are
the boundary contracts with the external interpreter, classifier and map
resolver.

Features:
- `Tag`: one parsed unit of the inbound game protocol.
- `ScriptToken` / `TokenKind`: one lexed automation-script instruction.
- `DynamicValue` / `DynamicKind`: literal or computed variable bindings.
- `StreamEvent` / `StreamEventKind`: classified protocol events.
- `InputLine`: a numbered line of input for the inspection CLI.

Usage:
Import these models to structure data exchanged between components.
"""

from pydantic import BaseModel, Field
from typing import Mapping, Optional, Dict
from types import MappingProxyType
from enum import Enum
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Tag:
    """A parsed protocol tag.

    Attributes:
        name: Lowercased tag name; root-level text is named `text`
        attributes: Read-only, insertion-ordered attribute mapping
        value: Direct text of the tag, or comma-joined child values
        children: Ordered child tags (text children are `text` tags)
        self_closing: Whether the tag was written as `<name/>`
    """

    name: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    value: str = ""
    children: tuple["Tag", ...] = ()
    self_closing: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.lower())
        object.__setattr__(
            self, "attributes", MappingProxyType(dict(self.attributes))
        )
        object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def text(cls, value: str) -> "Tag":
        return cls(name="text", value=value)

    @property
    def is_text(self) -> bool:
        return self.name == "text"

    def has_attr(self, key: str) -> bool:
        return key in self.attributes

    def attr(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.attributes.get(key, default)

    def inner_text(self) -> str:
        """All descendant text concatenated in document order."""
        if self.is_text:
            return self.value
        if not self.children:
            return self.value
        return "".join(child.inner_text() for child in self.children)


class TokenKind(Enum):
    """
    Enum for script instruction kinds.
    """

    COMMENT = "comment"
    DEBUG = "debug"
    ECHO = "echo"
    EXIT = "exit"
    GOTO = "goto"
    LABEL = "label"
    MATCH = "match"
    MATCHRE = "matchre"
    MATCHWAIT = "matchwait"
    PAUSE = "pause"
    PUT = "put"
    RANDOM = "random"
    SAVE = "save"
    SEND = "send"
    VARIABLE = "variable"
    WAITFOR = "waitfor"
    WAITFORRE = "waitforre"


@dataclass(frozen=True)
class ScriptToken:
    """One lexed script instruction.

    Attributes:
        kind: The instruction kind
        values: Zero to two string payloads

    Example:
        * "match mylabel some text" lexes to
          ScriptToken(TokenKind.MATCH, ("mylabel", "some text"))
    """

    kind: TokenKind
    values: tuple[str, ...] = ()

    @property
    def first(self) -> Optional[str]:
        return self.values[0] if self.values else None

    @property
    def second(self) -> Optional[str]:
        return self.values[1] if len(self.values) > 1 else None

    def __str__(self) -> str:
        return self.kind.value


class DynamicKind(Enum):
    """
    Closed set of computed variable kinds.
    """

    CURRENT_DATE = "date"
    CURRENT_DATETIME = "datetime"
    CURRENT_TIME = "time"


@dataclass(frozen=True)
class DynamicValue:
    """A variable binding: either a literal string or a computed kind.

    Exactly one of `literal` / `computed` is meaningful; `computed` wins when
    set. Computed values are evaluated by the store on every read.
    """

    literal: Optional[str] = None
    computed: Optional[DynamicKind] = None

    @classmethod
    def of(cls, value: Optional[str]) -> "DynamicValue":
        return cls(literal=value)

    @classmethod
    def dynamic(cls, kind: DynamicKind) -> "DynamicValue":
        return cls(computed=kind)

    @property
    def is_computed(self) -> bool:
        return self.computed is not None


class StreamEventKind(Enum):
    """
    Enum for classified protocol events.
    """

    TEXT = "text"
    PROMPT = "prompt"
    ROOM = "room"
    COMPASS = "compass"
    NAV = "nav"
    STREAM_WINDOW = "streamwindow"


@dataclass
class StreamEvent:
    """Classified protocol event.

    Attributes:
        kind: Event kind
        tags: Tags that produced the event
        variables: Variable writes performed for this event
    """

    kind: StreamEventKind
    tags: list[Tag] = field(default_factory=list)
    variables: Dict[str, str] = field(default_factory=dict)


class InputLine(BaseModel):
    """A numbered line of CLI input.

    Attributes:
        number: 1-based line number
        text: Line text including any line terminator
    """

    number: int = Field(..., ge=1, description="1-based line number.")
    text: str = Field(..., description="Raw line text.")
