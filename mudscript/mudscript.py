"""
mudscript Main Module.

Entry point for the mudscript inspection CLI: the text-interpretation core of
a MUD client (protocol tokenizer, script lexer, variable substitution) exposed
as commands for debugging captures and scripts.

Examples:
    Show the tags in a protocol capture:
        $ mudscript tokenize capture.log

    Lex a script:
        $ mudscript lex hunt.cmd

    Expand variables:
        $ mudscript expand 'go $dirs[1]' -v 'dirs=north|east|south'
"""

import signal
import sys
from types import FrameType
from typing import Final, Optional
from rich.console import Console
from mudscript.commands.app import cli

__version__: Final[str] = "0.1.0"

console: Final[Console] = Console()


def signal_handle(sig: int, frame: Optional[FrameType]) -> None:
    """Exit quietly on Ctrl-C.

    Args:
        sig: Signal number
        frame: Current stack frame
    """
    console.print("\n[bold cyan]Interrupted. Exiting.[/bold cyan]")
    sys.exit(0)


def main() -> None:
    """Console script entry point."""
    signal.signal(signal.SIGINT, signal_handle)
    cli.main(prog_name="mudscript")


if __name__ == "__main__":
    main()
