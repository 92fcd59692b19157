"""
CLI Utilities

Shared helpers for the command line: logging setup and result output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from create_obsidian_plugin.naming import PluginDescriptor

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration for the application.

    Records go to stderr through rich. Warnings and errors are always shown;
    --verbose adds debug output. Calling this again replaces the handler.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(
            console=Console(stderr=True),
            show_path=verbose,
            rich_tracebacks=verbose,
        )],
        force=True,
    )


def print_success(descriptor: PluginDescriptor) -> None:
    """Print the confirmation line for a created project."""
    console.print(
        f"[green]✅ Created {escape(descriptor.name)} Plugin Project "
        f"at {escape(str(descriptor.directory))}.[/green]",
        soft_wrap=True,
        highlight=False,
    )
