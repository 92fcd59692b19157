"""
create-obsidian-plugin

Scaffolds a new Obsidian plugin project from the official sample plugin
template.
"""

from create_obsidian_plugin.creator import create_plugin
from create_obsidian_plugin.naming import PluginDescriptor, build_descriptor

__version__ = "0.1.0"

__all__ = [
    "create_plugin",
    "build_descriptor",
    "PluginDescriptor",
    "__version__",
]
