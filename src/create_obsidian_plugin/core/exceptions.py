"""
Core Exception Hierarchy for create-obsidian-plugin

Provides error classification with error codes, recovery suggestions and
context information so the CLI can report every failure the same way.
"""

import sys
import traceback
import time
from enum import Enum
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
from dataclasses import dataclass, field


class ErrorCode(Enum):
    """Standard error codes for different error categories."""

    # Validation errors (1000-1999)
    VALIDATION_INVALID_INPUT = 1001
    VALIDATION_NOT_KEBAB_CASE = 1002
    VALIDATION_EMPTY_IDENTIFIER = 1003

    # File system errors (2000-2999)
    FS_DESTINATION_EXISTS = 2001
    FS_READ_FAILED = 2002
    FS_WRITE_FAILED = 2003
    FS_MOVE_FAILED = 2004
    FS_DECODE_FAILED = 2005
    FS_UNSAFE_ARCHIVE_ENTRY = 2006

    # Network errors (3000-3999)
    NETWORK_CONNECTION_FAILED = 3001
    NETWORK_INVALID_RESPONSE = 3002
    NETWORK_INVALID_ARCHIVE = 3003

    # Configuration errors (4000-4999)
    CONFIG_INVALID_FORMAT = 4001
    CONFIG_INVALID_VALUE = 4002
    CONFIG_FILE_NOT_FOUND = 4003

    # Generic/unknown errors (9000-9999)
    UNKNOWN_ERROR = 9000


@dataclass
class ErrorContext:
    """Contextual information about an error occurrence."""

    operation: str = ""
    url: Optional[str] = None
    file_path: Optional[str] = None
    plugin_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    user_context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for serialization."""
        return {
            'operation': self.operation,
            'url': self.url,
            'file_path': self.file_path,
            'plugin_id': self.plugin_id,
            'timestamp': self.timestamp,
            'user_context': self.user_context
        }


@dataclass
class RecoverySuggestion:
    """Structured recovery suggestion for error resolution."""

    action: str  # Brief action description
    description: str  # Detailed explanation
    command: Optional[str] = None  # CLI command to resolve
    priority: int = 1  # Priority order (1=highest)

    def to_dict(self) -> Dict[str, Any]:
        """Convert suggestion to dictionary."""
        return {
            'action': self.action,
            'description': self.description,
            'command': self.command,
            'priority': self.priority
        }


class ScaffoldError(Exception):
    """
    Base exception for all scaffolding errors.

    Every error is terminal for a run: the CLI prints the message and any
    suggestions, then exits with a non-zero status.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None,
        suggestions: Optional[List[RecoverySuggestion]] = None
    ):
        """
        Initialize scaffold error.

        Args:
            message: Human-readable error description
            error_code: Standardized error code
            context: Contextual information about the error
            cause: Original exception that caused this error
            suggestions: List of recovery suggestions
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.suggestions: List[RecoverySuggestion] = []
        for suggestion in suggestions or []:
            self.add_suggestion(suggestion)

    def add_suggestion(self, suggestion: RecoverySuggestion) -> None:
        """Add a recovery suggestion to the error."""
        self.suggestions.append(suggestion)
        # Sort by priority
        self.suggestions.sort(key=lambda s: s.priority)

    def get_user_message(self) -> str:
        """Get user-friendly error message with suggestions."""
        lines = [f"Error: {self.message}"]

        if self.suggestions:
            lines.append("\nSuggested solutions:")
            for i, suggestion in enumerate(self.suggestions[:3], 1):
                lines.append(f"  {i}. {suggestion.action}")
                lines.append(f"     {suggestion.description}")
                if suggestion.command:
                    lines.append(f"     Command: {suggestion.command}")

        return "\n".join(lines)

    def get_debug_info(self) -> Dict[str, Any]:
        """Get comprehensive debug information."""
        cause_trace = None
        if self.cause is not None:
            cause_trace = "".join(traceback.format_exception(
                type(self.cause), self.cause, self.cause.__traceback__
            ))
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code.value,
            'context': self.context.to_dict(),
            'cause': {
                'type': type(self.cause).__name__ if self.cause else None,
                'message': str(self.cause) if self.cause else None,
                'traceback': cause_trace
            },
            'suggestions': [s.to_dict() for s in self.suggestions],
            'platform': sys.platform,
        }


class ValidationError(ScaffoldError):
    """Exception for invalid plugin identifiers and other bad input."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_INVALID_INPUT,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext(operation="validate")
        if field_name:
            context.user_context['field_name'] = field_name
            context.user_context['field_value'] = field_value

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.VALIDATION_NOT_KEBAB_CASE and field_value:
            from create_obsidian_plugin.naming import kebab_case

            suggested = kebab_case(str(field_value))
            if suggested:
                self.add_suggestion(RecoverySuggestion(
                    action="Use a kebab-case id",
                    description=f"Plugin ids are lower-case words joined by dashes, e.g. '{suggested}'.",
                    command=f"create-obsidian-plugin {suggested}",
                    priority=1
                ))


class ExistsError(ScaffoldError):
    """Exception raised when the destination directory is already present."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext(operation="extract")
        if path is not None:
            context.file_path = str(path)

        kwargs['context'] = context
        kwargs.setdefault('error_code', ErrorCode.FS_DESTINATION_EXISTS)

        super().__init__(message, **kwargs)

        self.add_suggestion(RecoverySuggestion(
            action="Choose another destination",
            description="Existing directories are never overwritten. Remove it or pick a new path.",
            command="create-obsidian-plugin <plugin-id> --path <new-directory>",
            priority=1
        ))


class FetchError(ScaffoldError):
    """Exception for template download failures."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.NETWORK_CONNECTION_FAILED,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext(operation="fetch")
        if url:
            context.url = url
        if status_code is not None:
            context.user_context['status_code'] = status_code

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)
        self.status_code = status_code

        if error_code == ErrorCode.NETWORK_CONNECTION_FAILED:
            self.add_suggestion(RecoverySuggestion(
                action="Check internet connection",
                description="Verify that GitHub is reachable from this machine and try again.",
                priority=1
            ))


class FilesystemError(ScaffoldError):
    """Exception for read, write, move and remove failures."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.FS_WRITE_FAILED,
        path: Optional[Union[str, Path]] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if path is not None:
            context.file_path = str(path)

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)


class ConfigurationError(ScaffoldError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_INVALID_FORMAT,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext(operation="configure")
        if config_key:
            context.user_context['config_key'] = config_key
            context.user_context['config_value'] = config_value

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.CONFIG_INVALID_VALUE:
            self.add_suggestion(RecoverySuggestion(
                action="Check configuration values",
                description="Review the configuration file for invalid values and correct them.",
                priority=1
            ))
