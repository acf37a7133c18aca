"""
Stream inspection command.

Command:
- tokenize [FILE]: show the tag tree of every protocol line (stdin by default)
"""

from typing import IO
from rich.console import Console
from rich.tree import Tree
from rich.markup import escape
import click
from mudscript.commands.base import RichCommand, rich_help, lines_read
from mudscript.lib.log import LOG
from mudscript.lib.stream import StreamTokenizer
from mudscript.models.dataModel import Tag

console: Console = Console()


def tag_label(tag: Tag) -> str:
    """One-line Rich markup summary of a tag."""
    if tag.is_text:
        return f"[white]text[/white] {escape(repr(tag.value))}"
    attrs: str = " ".join(
        f"[magenta]{escape(key)}[/magenta]={escape(repr(value))}"
        for key, value in tag.attributes.items()
    )
    closing: str = " [dim]/[/dim]" if tag.self_closing else ""
    label: str = f"[cyan]{tag.name}[/cyan]"
    if attrs:
        label += f" {attrs}"
    return f"{label}{closing} [green]{escape(repr(tag.value))}[/green]"


def tag_tree(tag: Tag, tree: Tree) -> None:
    branch: Tree = tree.add(tag_label(tag))
    for child in tag.children:
        tag_tree(child, branch)


@click.command(
    cls=RichCommand,
    short_help="Tokenize protocol lines",
    help=rich_help(
        command="tokenize",
        description="Show the tags parsed from each line of game protocol text.",
        usage="mudscript tokenize [FILE]",
        args={"[FILE]": "Protocol capture to read; stdin when omitted."},
    ),
)
@click.argument("source", type=click.File("r"), default="-")
def tokenize(source: IO[str]) -> None:
    """
    Print a tag tree per input line.

    :param source: Open text stream of protocol lines.
    """
    try:
        tokenizer: StreamTokenizer = StreamTokenizer()
        for line in lines_read(source):
            tree: Tree = Tree(f"[bold yellow]line {line.number}[/bold yellow]")
            for tag in tokenizer.read(line.text):
                tag_tree(tag, tree)
            console.print(tree)
    except Exception as e:
        LOG(f"Error tokenizing input: {e}")
        console.print(f"[bold red]Error: {e}[/bold red]")
