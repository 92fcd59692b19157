"""
Plugin project creation.

``create_plugin`` runs the whole scaffolding sequence: validate the id,
download and unpack the template, then rename the template placeholders.
Each step must finish before the next starts and any failure ends the run.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from create_obsidian_plugin.core.config.models import ScaffoldConfig
from create_obsidian_plugin.naming import PluginDescriptor, build_descriptor
from create_obsidian_plugin.replacements import apply_replacements, build_template_replacements
from create_obsidian_plugin.template import TemplateFetcher, fetch_and_extract


logger = logging.getLogger(__name__)


def create_plugin(
    plugin_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    directory: Optional[Union[str, Path]] = None,
    config: Optional[ScaffoldConfig] = None,
    fetcher: Optional[TemplateFetcher] = None,
) -> PluginDescriptor:
    """
    Create a new plugin project from the sample plugin template.

    Args:
        plugin_id: Kebab-case plugin id; the id prefix is added when missing
        name: Display name (defaults to the capitalized id)
        description: Manifest description (defaults to empty)
        directory: Destination directory (defaults to the id)
        config: Scaffold configuration
        fetcher: Template fetcher, built from ``config`` when omitted

    Returns:
        The descriptor of the created project

    Raises:
        ValidationError: If the id is not kebab-case
        ExistsError: If the destination already exists
        FetchError: If the template cannot be downloaded
        FilesystemError: If extraction or rewriting fails
    """
    config = config or ScaffoldConfig()
    descriptor = build_descriptor(
        plugin_id,
        name=name,
        description=description,
        directory=directory,
        prefix=config.plugin_id_prefix,
    )
    logger.info("Creating %s (%s) in %s", descriptor.name, descriptor.id, descriptor.directory)

    fetch_and_extract(
        config.template_url,
        descriptor.directory,
        fetcher=fetcher or TemplateFetcher(config),
    )

    rules = build_template_replacements(descriptor)
    apply_replacements(descriptor.directory, rules, exclude=(config.readme_filename,))

    return descriptor
