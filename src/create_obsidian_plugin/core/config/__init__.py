"""
Configuration Management Package

Provides Pydantic-based configuration models and management for
create-obsidian-plugin.
"""

from create_obsidian_plugin.core.config.models import AppConfig, ScaffoldConfig
from create_obsidian_plugin.core.config.manager import ConfigManager

__all__ = [
    "AppConfig",
    "ScaffoldConfig",
    "ConfigManager",
]
