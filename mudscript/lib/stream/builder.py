"""
Tree builder folding scanner events into `Tag`s.

Close tags match the nearest open tag of the same (lowercased) name; tags
opened inside it are closed implicitly. A close tag with no matching open
tag is dropped, and anything still open at the end of the line is closed.
"""

from dataclasses import dataclass, field
from typing import Iterable
from mudscript.lib.log import LOG
from mudscript.lib.stream.scanner import ScanEvent, SelfClose, TagClose, TagOpen, Text
from mudscript.models.dataModel import Tag


@dataclass
class _OpenTag:
    name: str
    attributes: dict[str, str]
    children: list[Tag] = field(default_factory=list)


def tag_value(children: Iterable[Tag]) -> str:
    """Value of a tag from its children.

    The direct text children concatenated; with no text children, the values
    of the child tags joined by commas (`<dialogData><skin>one</skin>
    <skin>two</skin></dialogData>` has the value `one,two`).
    """
    nodes: list[Tag] = list(children)
    texts: list[str] = [child.value for child in nodes if child.is_text]
    if texts:
        return "".join(texts)
    return ",".join(child.value for child in nodes)


class TreeBuilder:
    def build(self, events: Iterable[ScanEvent]) -> list[Tag]:
        roots: list[Tag] = []
        stack: list[_OpenTag] = []

        def attach(tag: Tag) -> None:
            if stack:
                stack[-1].children.append(tag)
            else:
                roots.append(tag)

        def finish() -> None:
            node: _OpenTag = stack.pop()
            attach(
                Tag(
                    name=node.name,
                    attributes=node.attributes,
                    value=tag_value(node.children),
                    children=tuple(node.children),
                )
            )

        for event in events:
            if isinstance(event, Text):
                attach(Tag.text(event.text))
            elif isinstance(event, SelfClose):
                attach(Tag(name=event.name, attributes=event.attributes, self_closing=True))
            elif isinstance(event, TagOpen):
                stack.append(_OpenTag(event.name, event.attributes))
            elif isinstance(event, TagClose):
                depth: int = next(
                    (
                        len(stack) - i
                        for i, node in enumerate(reversed(stack))
                        if node.name == event.name
                    ),
                    0,
                )
                if not depth:
                    LOG(f"Dropped stray close tag </{event.name}>")
                    continue
                while len(stack) >= depth:
                    finish()

        while stack:
            LOG(f"Implicitly closed <{stack[-1].name}> at end of line")
            finish()

        return roots
