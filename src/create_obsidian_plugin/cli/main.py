#!/usr/bin/env python3
"""
create-obsidian-plugin CLI Main Application

Typer-based command-line interface that scaffolds a new Obsidian plugin
project from the sample plugin template.
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from create_obsidian_plugin.cli import __version__
from create_obsidian_plugin.cli.error_handling import handle_error, handle_fatal_error
from create_obsidian_plugin.cli.utils import console, print_success, setup_logging
from create_obsidian_plugin.core.config import ConfigManager
from create_obsidian_plugin.core.exceptions import ScaffoldError
from create_obsidian_plugin.creator import create_plugin

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="create-obsidian-plugin",
    help="Create a new Obsidian plugin project from the official sample plugin.",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    add_completion=False,
)


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]create-obsidian-plugin[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.command()
def create(
    plugin_id: str = typer.Argument(
        ...,
        metavar="<plugin-id>",
        help="Kebab-case plugin id, e.g. [cyan]my-tool[/cyan]. The 'obsidian-' prefix is added when missing."
    ),
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        metavar="<plugin-path>",
        help="Path to destination directory (defaults to the plugin id)"
    ),
    description: Optional[str] = typer.Option(
        None,
        "--description",
        "-d",
        metavar="<plugin-description>",
        help="Plugin description"
    ),
    name: Optional[str] = typer.Option(
        None,
        "--name",
        "-n",
        help="Display name (defaults to the capitalized plugin id)"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML or JSON file overriding template settings"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging output"
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
):
    """
    Scaffold a new Obsidian plugin project.

    [bold]Examples:[/bold]

    • [cyan]create-obsidian-plugin my-tool[/cyan]
    • [cyan]create-obsidian-plugin my-tool -p ./plugins/my-tool -d "Does things"[/cyan]
    """
    setup_logging(verbose)

    try:
        config = ConfigManager(config_file).load_config({'verbose': verbose})
        plugin = create_plugin(
            plugin_id,
            name=name,
            description=description,
            directory=path,
            config=config.scaffold,
        )
    except ScaffoldError as err:
        handle_error(err)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        logger.debug("Unhandled exception", exc_info=True)
        handle_fatal_error(e, show_traceback=verbose)
    else:
        print_success(plugin)


def main():
    """Entry point for the create-obsidian-plugin console script."""
    app()


if __name__ == "__main__":
    main()
