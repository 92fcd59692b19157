"""
Core create-obsidian-plugin Package

Contains the error hierarchy and configuration layer shared by the
scaffolding steps and the CLI.
"""

from create_obsidian_plugin.core.exceptions import (
    ScaffoldError,
    ValidationError,
    ExistsError,
    FetchError,
    FilesystemError,
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    RecoverySuggestion
)

__all__ = [
    "ScaffoldError",
    "ValidationError",
    "ExistsError",
    "FetchError",
    "FilesystemError",
    "ConfigurationError",
    "ErrorCode",
    "ErrorContext",
    "RecoverySuggestion",
]
