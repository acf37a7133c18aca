"""
Script lexer for the automation language.

Classifies one line of script source into a single `ScriptToken`.

The lexer is a small mode machine. A stack of `LexMode`s starts at COMMAND;
COMMAND reads the leading word and pushes the mode the dispatch table maps it
to. That mode consumes the rest of the line, appends its token and returns
None, which pops the stack back to COMMAND. Each mode's routine is a plain
function in `MODE_HANDLERS`.

Grammar:
- `# anything`          comment, remainder after '#'
- `word:`               label, colon stripped
- `match L text`        two payloads: first word, then the rest
- `echo text`           one payload: the whole remainder
- `exit`                no payload
- anything else         no token

Example:
    lexer = ScriptLexer()
    lexer.read("match mylabel some text")
    # ScriptToken(kind=TokenKind.MATCH, values=("mylabel", "some text"))
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Final, Optional, Self
from mudscript.models.dataModel import ScriptToken, TokenKind

_SPACES: Final[str] = " \t"


class LexMode(Enum):
    COMMAND = "command"
    SINGLE = "single"
    PAIR = "pair"
    EXIT = "exit"


@dataclass
class LexContext:
    """Cursor over the line being lexed plus the tokens produced so far."""

    text: str
    position: int = 0
    target: list[ScriptToken] = field(default_factory=list)
    kind: Optional[TokenKind] = None

    @property
    def first(self) -> Optional[str]:
        return self.text[self.position] if self.position < len(self.text) else None

    def consume_spaces(self) -> None:
        while self.position < len(self.text) and self.text[self.position] in _SPACES:
            self.position += 1

    def parse_word(self) -> str:
        start: int = self.position
        while self.position < len(self.text) and self.text[self.position] not in _SPACES:
            self.position += 1
        return self.text[start : self.position]

    def parse_to_end(self) -> str:
        rest: str = self.text[self.position :]
        self.position = len(self.text)
        return rest


# Leading word -> (mode, kind). `setvariable` and `var` share one kind.
KNOWN_COMMANDS: Final[dict[str, tuple[LexMode, TokenKind]]] = {
    "debug": (LexMode.SINGLE, TokenKind.DEBUG),
    "echo": (LexMode.SINGLE, TokenKind.ECHO),
    "exit": (LexMode.EXIT, TokenKind.EXIT),
    "goto": (LexMode.SINGLE, TokenKind.GOTO),
    "match": (LexMode.PAIR, TokenKind.MATCH),
    "matchre": (LexMode.PAIR, TokenKind.MATCHRE),
    "matchwait": (LexMode.SINGLE, TokenKind.MATCHWAIT),
    "pause": (LexMode.SINGLE, TokenKind.PAUSE),
    "put": (LexMode.SINGLE, TokenKind.PUT),
    "random": (LexMode.PAIR, TokenKind.RANDOM),
    "save": (LexMode.SINGLE, TokenKind.SAVE),
    "send": (LexMode.SINGLE, TokenKind.SEND),
    "setvariable": (LexMode.PAIR, TokenKind.VARIABLE),
    "var": (LexMode.PAIR, TokenKind.VARIABLE),
    "waitfor": (LexMode.SINGLE, TokenKind.WAITFOR),
    "waitforre": (LexMode.SINGLE, TokenKind.WAITFORRE),
}


def read_command(context: LexContext) -> Optional[LexMode]:
    context.consume_spaces()
    if context.first is None:
        return None

    if context.first == "#":
        context.position += 1
        context.target.append(ScriptToken(TokenKind.COMMENT, (context.parse_to_end(),)))
        return None

    word: str = context.parse_word()
    if word.endswith(":"):
        context.target.append(ScriptToken(TokenKind.LABEL, (word[:-1],)))
        return None

    known: Optional[tuple[LexMode, TokenKind]] = KNOWN_COMMANDS.get(word.lower())
    if known is None:
        return None
    mode, context.kind = known
    return mode


def read_single(context: LexContext) -> Optional[LexMode]:
    context.consume_spaces()
    context.target.append(ScriptToken(context.kind, (context.parse_to_end(),)))
    return None


def read_pair(context: LexContext) -> Optional[LexMode]:
    context.consume_spaces()
    first: str = context.parse_word()
    context.consume_spaces()
    context.target.append(ScriptToken(context.kind, (first, context.parse_to_end())))
    return None


def read_exit(context: LexContext) -> Optional[LexMode]:
    context.target.append(ScriptToken(TokenKind.EXIT))
    return None


MODE_HANDLERS: Final[dict[LexMode, Callable[[LexContext], Optional[LexMode]]]] = {
    LexMode.COMMAND: read_command,
    LexMode.SINGLE: read_single,
    LexMode.PAIR: read_pair,
    LexMode.EXIT: read_exit,
}


class ScriptLexer:
    """Lexes script lines one at a time; no state survives between calls."""

    def __init__(self: Self) -> None:
        self.modes: list[LexMode] = [LexMode.COMMAND]

    def read(self: Self, line: str) -> Optional[ScriptToken]:
        """Lex one line.

        Args:
            line: Script source line; a trailing line terminator is ignored

        Returns:
            The instruction, or None for blank lines and unknown commands
        """
        context: LexContext = LexContext(text=line.rstrip("\r\n"))
        self.modes = [LexMode.COMMAND]

        while self.modes:
            current: LexMode = self.modes[-1]
            next_mode: Optional[LexMode] = MODE_HANDLERS[current](context)
            if next_mode is not None:
                self.modes.append(next_mode)
                continue
            self.modes.pop()
            if context.target:
                break

        self.modes = [LexMode.COMMAND]
        return context.target[0] if context.target else None


def lex_script(source: str) -> list[tuple[int, ScriptToken]]:
    """Lex a whole script, keeping 1-based line numbers of token lines."""
    lexer: ScriptLexer = ScriptLexer()
    tokens: list[tuple[int, ScriptToken]] = []
    for number, line in enumerate(source.splitlines(), start=1):
        token: Optional[ScriptToken] = lexer.read(line)
        if token is not None:
            tokens.append((number, token))
    return tokens
