"""
Game stream tokenizer.

Reads one line of inbound protocol text into an ordered list of `Tag`s by
running the flat scanner and then the tree builder. Root-level text becomes
`text` tags. Each call is independent of the previous one.

Example:
    tokens = StreamTokenizer().read("<spell>None</spell>\\n")
    # [Tag(name="spell", value="None", ...), Tag(name="text", value="\\n")]
"""

from typing import Self
from mudscript.lib.log import LOG
from mudscript.lib.stream.builder import TreeBuilder
from mudscript.lib.stream.scanner import StreamScanner
from mudscript.models.dataModel import Tag


class StreamTokenizer:
    def __init__(self: Self) -> None:
        self.scanner: StreamScanner = StreamScanner()
        self.builder: TreeBuilder = TreeBuilder()

    def read(self: Self, line: str) -> list[Tag]:
        """Tokenize one protocol line.

        Args:
            line: Raw line, usually including its line terminator

        Returns:
            Tags in document order. A line without `<` is a single `text`
            tag equal to the line; input that fails to parse at all also
            degrades to a single `text` tag.
        """
        if "<" not in line:
            return [Tag.text(line)]

        try:
            return self.builder.build(self.scanner.scan(line))
        except Exception as e:
            LOG(f"Stream tokenize failed, passing line through as text: {e}")
            return [Tag.text(line)]
