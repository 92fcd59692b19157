"""
Plugin identifier normalization.

Turns the raw identifier typed on the command line into a PluginDescriptor:
the id is checked for kebab-case, namespaced with the plugin id prefix and
used to derive the display name and class names written into the template.
"""

import re
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from create_obsidian_plugin.core.config.models import DEFAULT_PLUGIN_ID_PREFIX
from create_obsidian_plugin.core.exceptions import ErrorCode, ValidationError


_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_UPPER_RUN = re.compile(r"([A-Z])([A-Z][a-z])")
_SEPARATORS = re.compile(r"[^A-Za-z0-9]+")


def split_words(value: str) -> List[str]:
    """
    Split a string into words on separators and case boundaries.

    Examples:
        >>> split_words("my-tool")
        ['my', 'tool']
        >>> split_words("myHTMLTool")
        ['my', 'HTML', 'Tool']
    """
    spaced = _LOWER_UPPER.sub(r"\1 \2", value)
    spaced = _UPPER_RUN.sub(r"\1 \2", spaced)
    return [word for word in _SEPARATORS.split(spaced) if word]


def kebab_case(value: str) -> str:
    """Lower-case words joined by dashes."""
    return "-".join(word.lower() for word in split_words(value))


def capital_case(value: str) -> str:
    """Capitalized words joined by spaces."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in split_words(value))


def pascal_case(value: str) -> str:
    """
    Capitalized words joined without a separator.

    A word after the first that starts with a digit is prefixed with an
    underscore so that "v2 tool" and "v 2tool" stay distinguishable.
    """
    parts = []
    for index, word in enumerate(split_words(value)):
        part = word[:1].upper() + word[1:].lower()
        if index > 0 and part[:1].isdigit():
            part = f"_{part}"
        parts.append(part)
    return "".join(parts)


class PluginDescriptor(BaseModel):
    """Inputs and outputs of a single scaffolding run."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Kebab-case plugin id, always namespaced")
    name: str = Field(description="Display name written into the template")
    description: str = Field(default="", description="Plugin description for the manifest")
    directory: Path = Field(description="Destination directory of the generated project")

    @property
    def class_name(self) -> str:
        """Identifier used in place of the template's plugin class."""
        return pascal_case(self.name)

    @property
    def setting_class_name(self) -> str:
        return f"{self.class_name}Setting"


def normalize_plugin_id(raw_id: str, prefix: str = DEFAULT_PLUGIN_ID_PREFIX) -> str:
    """
    Validate a plugin id and namespace it.

    Args:
        raw_id: Identifier as typed by the user
        prefix: Namespace prepended when the id does not start with it

    Returns:
        The prefixed id

    Raises:
        ValidationError: If the id is empty or not already kebab-case
    """
    if not raw_id:
        raise ValidationError(
            "Id must not be empty",
            error_code=ErrorCode.VALIDATION_EMPTY_IDENTIFIER,
            field_name="plugin_id",
            field_value=raw_id
        )

    if raw_id != kebab_case(raw_id):
        raise ValidationError(
            "Id must be kebab-case",
            error_code=ErrorCode.VALIDATION_NOT_KEBAB_CASE,
            field_name="plugin_id",
            field_value=raw_id
        )

    if not raw_id.startswith(prefix):
        return f"{prefix}{raw_id}"
    return raw_id


def derive_display_name(plugin_id: str, prefix: str = DEFAULT_PLUGIN_ID_PREFIX) -> str:
    """Display name from the id with the namespace removed, e.g. "My Tool"."""
    return capital_case(plugin_id.replace(prefix, "", 1))


def build_descriptor(
    plugin_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    directory: Optional[Union[str, Path]] = None,
    prefix: str = DEFAULT_PLUGIN_ID_PREFIX,
) -> PluginDescriptor:
    """
    Build the descriptor for a plugin, applying defaults for missing values.

    The name defaults to the capitalized id without its prefix, the
    description to an empty string and the directory to the id itself.
    """
    normalized_id = normalize_plugin_id(plugin_id, prefix)
    return PluginDescriptor(
        id=normalized_id,
        name=name or derive_display_name(normalized_id, prefix),
        description=description or "",
        directory=Path(directory) if directory else Path(normalized_id),
    )
