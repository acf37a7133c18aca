"""
Variable Commands

This module provides CLI commands for trying out variable substitution
against a throwaway `GlobalVariables` store seeded from the command line.

Commands:
- expand <text> [-v NAME=VALUE ...]: Substitute `$` references in text.
- vars [-v NAME=VALUE ...]: List all variables, computed ones included.
"""

from rich.console import Console
from rich.table import Table
from rich.markup import escape
import click
from mudscript.commands.base import RichCommand, rich_help, bindings_parse
from mudscript.lib.log import LOG
from mudscript.lib.parser import VariableSubstitutionEngine
from mudscript.lib.variables import GlobalVariables

console: Console = Console()

engine: VariableSubstitutionEngine = VariableSubstitutionEngine()


def store_seed(bindings: tuple[str, ...]) -> GlobalVariables:
    """
    Create a store holding the given NAME=VALUE bindings.

    :param bindings: Raw NAME=VALUE strings.
    :return: A fresh `GlobalVariables`.
    """
    values: dict[str, str] = bindings_parse(bindings)
    store: GlobalVariables = GlobalVariables()
    for name, value in values.items():
        store.set(name, value)
    return store


@click.command(
    cls=RichCommand,
    short_help="Expand variables in text",
    help=rich_help(
        command="expand",
        description="Substitute $variable references in text.",
        usage="mudscript expand <text> [-v NAME=VALUE ...]",
        args={
            "<text>": "Text containing $name or $name[index] references.",
            "-v NAME=VALUE": "A variable binding; repeatable.",
        },
    ),
)
@click.argument("text", type=str)
@click.option("-v", "--var", "bindings", multiple=True, help="NAME=VALUE binding")
def expand(text: str, bindings: tuple[str, ...]) -> None:
    """
    Print `text` with its references expanded.

    :param text: The text to expand.
    :param bindings: NAME=VALUE variable bindings.
    """
    store: GlobalVariables = store_seed(bindings)
    try:
        console.print(escape(engine.replace_globals(text, store)))
    except Exception as e:
        LOG(f"Error expanding '{text}': {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
    finally:
        store.close()


@click.command(
    name="vars",
    cls=RichCommand,
    short_help="List variables",
    help=rich_help(
        command="vars",
        description="List all variables sorted by name.",
        usage="mudscript vars [-v NAME=VALUE ...]",
        args={"-v NAME=VALUE": "A variable binding; repeatable."},
    ),
)
@click.option("-v", "--var", "bindings", multiple=True, help="NAME=VALUE binding")
def showall(bindings: tuple[str, ...]) -> None:
    """
    Print the sorted variable snapshot.

    :param bindings: NAME=VALUE variable bindings.
    """
    store: GlobalVariables = store_seed(bindings)
    try:
        table: Table = Table(title="Variables")
        table.add_column("Name", style="cyan")
        table.add_column("Value", style="green")
        for name, value in store.snapshot():
            table.add_row(escape(name), escape(value))
        console.print(table)
    except Exception as e:
        LOG(f"Error listing variables: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
    finally:
        store.close()
