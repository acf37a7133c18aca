"""
Rich-rendered Click base classes and shared command helpers.

This module defines:
- `RichGroup`: a Click group whose help lists subcommands in a Rich table.
- `RichCommand`: a Click command whose help is shown in a Rich panel.
- `rich_help`: builds the marked-up help text commands pass to `RichCommand`.
- `lines_read` / `bindings_parse`: input helpers shared by the commands.
"""

from typing import IO, Iterable
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
import click
from mudscript.lib.log import LOG
from mudscript.models.dataModel import InputLine

console: Console = Console()


def rich_help(command: str, description: str, usage: str, args: dict) -> str:
    """
    Generate Rich-enhanced help text for commands.

    :param command: The command name.
    :param description: Description of the command.
    :param usage: Usage syntax for the command.
    :param args: Dictionary of arguments and their descriptions.
    :return: Formatted Rich help string.
    """
    help_text = f"[bold cyan]{description}[/bold cyan]\n\n"
    help_text += f"[bold yellow]Usage:[/bold yellow]\n    [green]{usage}[/green]\n\n"
    if args:
        help_text += "[bold yellow]Arguments:[/bold yellow]\n"
        for arg, desc in args.items():
            help_text += f"    [green]{arg}[/green]: {desc}\n"
    return help_text


class RichGroup(click.Group):
    """
    A Click Group that renders its help with Rich.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            info_name: str = ctx.info_name or "mudscript"
            console.print(
                f"[bold yellow]Usage:[/bold yellow] [cyan]{info_name}[/cyan] "
                f"[magenta][OPTIONS] COMMAND [ARGS]...[/magenta]\n"
            )
            if self.help:
                console.print(f"[bold cyan]{self.help.strip()}[/bold cyan]\n")

            if self.commands:
                table: Table = Table(title="Available Commands", show_header=False)
                for name, command in sorted(self.commands.items()):
                    table.add_row(
                        f"[cyan]{name}[/cyan]",
                        command.short_help or "No description available.",
                    )
                console.print(table)
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")


class RichCommand(click.Command):
    """
    A Click Command that renders its help text in a Rich panel.
    """

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        try:
            help_text: str = self.help or "No help text available."
            panel_width: int = min(
                max(len(line) for line in help_text.splitlines()) + 10, 80
            )
            console.print(
                Panel(help_text, expand=False, width=panel_width, border_style="cyan")
            )
        except Exception as e:
            LOG(f"Help rendering error: {e}")
            console.print(f"[bold red]Help rendering error:[/bold red] {e}")


def lines_read(stream: IO[str]) -> list[InputLine]:
    """Number the lines of an input stream, keeping line terminators."""
    return [
        InputLine(number=number, text=text)
        for number, text in enumerate(stream.readlines(), start=1)
    ]


def bindings_parse(bindings: Iterable[str]) -> dict[str, str]:
    """
    Parse NAME=VALUE pairs.

    :raises click.BadParameter: If a binding has no '=' or an empty name.
    """
    values: dict[str, str] = {}
    for binding in bindings:
        name, sep, value = binding.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got '{binding}'")
        values[name] = value
    return values
