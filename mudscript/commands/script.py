"""
Script inspection command.

Command:
- lex [FILE]: list the instruction lexed from every script line
"""

from typing import IO
from rich.console import Console
from rich.table import Table
from rich.markup import escape
import click
from mudscript.commands.base import RichCommand, rich_help
from mudscript.lib.log import LOG
from mudscript.lib.script import lex_script

console: Console = Console()


@click.command(
    cls=RichCommand,
    short_help="Lex a script",
    help=rich_help(
        command="lex",
        description="Show the instruction each script line lexes to.",
        usage="mudscript lex [FILE]",
        args={"[FILE]": "Script to read; stdin when omitted."},
    ),
)
@click.argument("source", type=click.File("r"), default="-")
def lex(source: IO[str]) -> None:
    """
    Print a table of line number, instruction kind and payloads.

    :param source: Open text stream of script source.
    """
    try:
        table: Table = Table(title="Script instructions")
        table.add_column("Line", justify="right", style="yellow")
        table.add_column("Kind", style="cyan")
        table.add_column("Field 1", style="green")
        table.add_column("Field 2", style="green")

        for number, token in lex_script(source.read()):
            table.add_row(
                str(number),
                str(token),
                escape(token.first or ""),
                escape(token.second or ""),
            )
        console.print(table)
    except Exception as e:
        LOG(f"Error lexing script: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
