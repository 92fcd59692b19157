"""
Configuration Models

Pydantic models for type-safe configuration management with validation,
defaults, and field documentation.
"""

import re
from typing import Optional
from pydantic import BaseModel, Field, field_validator


DEFAULT_TEMPLATE_URL = (
    "https://github.com/obsidianmd/obsidian-sample-plugin/archive/refs/heads/master.zip"
)
DEFAULT_PLUGIN_ID_PREFIX = "obsidian-"


class ScaffoldConfig(BaseModel):
    """Configuration for template download and rewriting."""

    template_url: str = Field(
        default=DEFAULT_TEMPLATE_URL,
        description="URL of the zip archive holding the template project"
    )
    plugin_id_prefix: str = Field(
        default=DEFAULT_PLUGIN_ID_PREFIX,
        description="Namespace prepended to plugin ids that lack it"
    )
    readme_filename: str = Field(
        default="README.md",
        description="File at the project root left untouched by placeholder rewriting"
    )

    # Request Settings
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Request timeout in seconds (None waits indefinitely)"
    )
    user_agent: str = Field(
        default="create-obsidian-plugin/0.1.0",
        description="User agent string for template requests"
    )

    # Extraction Settings
    max_workers: int = Field(
        default=4,
        ge=1,
        le=32,
        description="Worker threads used to move extracted entries into place"
    )

    @field_validator('template_url')
    @classmethod
    def validate_template_url(cls, v):
        """Only http(s) archives can be fetched."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Template URL must use http or https: {v}")
        return v

    @field_validator('plugin_id_prefix')
    @classmethod
    def validate_prefix(cls, v):
        """Prefix must itself be kebab-case and end with a dash."""
        if not re.fullmatch(r"[a-z0-9]+(?:-[a-z0-9]+)*-", v):
            raise ValueError(f"Plugin id prefix must be kebab-case ending in '-': {v}")
        return v

    @field_validator('readme_filename')
    @classmethod
    def validate_readme_filename(cls, v):
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"README filename must be a bare file name: {v}")
        return v


class AppConfig(BaseModel):
    """Root application configuration model."""

    scaffold: ScaffoldConfig = Field(
        default_factory=ScaffoldConfig,
        description="Template download and rewrite configuration"
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging output"
    )
