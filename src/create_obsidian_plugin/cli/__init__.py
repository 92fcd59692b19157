"""Command-line interface for create-obsidian-plugin."""

from create_obsidian_plugin import __version__

__all__ = ["__version__"]
