import logging
import traceback

import typer
from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.text import Text

from create_obsidian_plugin.core.exceptions import ScaffoldError

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def handle_error(err: ScaffoldError):
    """Prints a ScaffoldError and its suggestions to stderr, then exits with status 1."""
    console.print(f"[bold red]❌ Error:[/bold red] {escape(err.message)}", soft_wrap=True)

    if err.suggestions:
        console.print("\n[bold green]Suggested solutions:[/bold green]")
        for i, suggestion in enumerate(err.suggestions, 1):
            suggestion_text = Text(f"{i}. {suggestion.action}: {suggestion.description}\n")
            if suggestion.command:
                suggestion_text.append("   Run: ", style="bold")
                suggestion_text.append(suggestion.command, style="cyan")
            console.print(Padding(suggestion_text, (0, 1)))

    logger.debug("Error details: %s", err.get_debug_info())
    raise typer.Exit(code=1)


def handle_fatal_error(error: Exception, show_traceback: bool = False):
    """Reports an unexpected exception and exits with status 1."""
    if show_traceback:
        console.print("\n[red]FATAL ERROR STACK TRACE:[/red]")
        console.print(escape("".join(traceback.format_exception(
            type(error), error, error.__traceback__
        ))), soft_wrap=True)

    console.print(f"[bold red]❌ Unexpected error:[/bold red] {escape(str(error))}", soft_wrap=True)
    raise typer.Exit(code=1)
