"""
Defines the main Click command group for the mudscript application.

This module provides:
- The root `cli` command group for the application.
- Integration with Rich-enhanced Click classes (`RichGroup`).
- Registration of subcommands from other modules.
"""

import click
from mudscript.commands.base import RichGroup
from mudscript.commands.script import lex
from mudscript.commands.stream import tokenize
from mudscript.commands.var import expand, showall


@click.group(
    cls=RichGroup,
    help="""
    mudscript

    Inspect game protocol lines, automation scripts and variable expansion.
    """,
)
def cli() -> None:
    """
    The root Click command group for mudscript.
    """
    pass


# Explicitly annotate `cli` as `click.Group` for static type checking
cli: click.Group = cli

cli.add_command(tokenize)
cli.add_command(lex)
cli.add_command(expand)
cli.add_command(showall)
