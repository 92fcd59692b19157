"""
Test Configuration and Fixtures

Shared fixtures for the test suite: an in-memory copy of the sample plugin
template, zip archive builders and a fake HTTP session so no test touches
the network.
"""

import io
import zipfile
from typing import Dict, Optional
from unittest.mock import Mock

import pytest
import requests

from create_obsidian_plugin.core.config.models import ScaffoldConfig
from create_obsidian_plugin.template import TemplateFetcher


WRAPPER = "obsidian-sample-plugin-master"

MAIN_TS = """import { App, Modal, Notice, Plugin, PluginSettingTab, Setting } from 'obsidian';

// Remember to rename these classes and interfaces!

interface MyPluginSettings {
\tmySetting: string;
}

const DEFAULT_SETTINGS: MyPluginSettings = {
\tmySetting: 'default'
}

export default class MyPlugin extends Plugin {
\tsettings: MyPluginSettings;

\tasync onload() {
\t\tawait this.loadSettings();
\t\tthis.addSettingTab(new SampleSettingTab(this.app, this));
\t}
}

class SampleSettingTab extends PluginSettingTab {
\tplugin: MyPlugin;

\tconstructor(app: App, plugin: MyPlugin) {
\t\tsuper(app, plugin);
\t\tthis.plugin = plugin;
\t}
}
"""

MANIFEST_JSON = """{
\t"id": "sample-plugin",
\t"name": "Sample Plugin",
\t"version": "1.0.0",
\t"minAppVersion": "0.15.0",
\t"description": "Demonstrates some of the capabilities of the Obsidian API.",
\t"author": "Obsidian",
\t"isDesktopOnly": false
}
"""

PACKAGE_JSON = """{
\t"name": "obsidian-sample-plugin",
\t"version": "1.0.0",
\t"description": "This is a sample plugin for Obsidian (https://obsidian.md)",
\t"main": "main.js",
\t"license": "MIT"
}
"""

README_MD = """# Obsidian Sample Plugin

This is a sample plugin for Obsidian (https://obsidian.md).

- Clone this repo as `obsidian-sample-plugin`.
- Rename `MyPlugin` and `SampleSetting` to match your plugin.
"""


def build_archive(files: Dict[str, str], wrapper: Optional[str] = WRAPPER,
                  directory_entries: bool = True, reverse: bool = False) -> bytes:
    """
    Build a zip archive in memory.

    Args:
        files: Mapping of relative path to text content
        wrapper: Top-level folder wrapping every entry, None for a flat archive
        directory_entries: Also write explicit "folder/" entries
        reverse: Write entries in reverse order
    """
    entries = []
    prefix = f"{wrapper}/" if wrapper else ""
    if directory_entries:
        folders = set()
        if wrapper:
            folders.add(prefix)
        for name in files:
            parts = name.split("/")[:-1]
            for i in range(1, len(parts) + 1):
                folders.add(prefix + "/".join(parts[:i]) + "/")
        entries.extend((folder, None) for folder in sorted(folders))
    entries.extend((prefix + name, content) for name, content in files.items())
    if reverse:
        entries.reverse()

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in entries:
            archive.writestr(name, content or "")
    return buffer.getvalue()


def make_response(content: bytes = b"", status_code: int = 200) -> Mock:
    """A stand-in for requests.Response."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = content
    return response


def make_session(response: Optional[Mock] = None, side_effect: Optional[Exception] = None) -> Mock:
    """A stand-in for requests.Session returning ``response`` from get()."""
    session = Mock()
    session.headers = {}
    if side_effect is not None:
        session.get.side_effect = side_effect
    else:
        session.get.return_value = response
    return session


@pytest.fixture
def template_files() -> Dict[str, str]:
    """The subset of the sample plugin the placeholder rules care about."""
    return {
        "README.md": README_MD,
        "main.ts": MAIN_TS,
        "manifest.json": MANIFEST_JSON,
        "package.json": PACKAGE_JSON,
        ".editorconfig": "# obsidian-sample-plugin\nroot = true\n",
        "src/settings.ts": "export class SampleSetting {}\n// Sample Plugin settings for MyPlugin\n",
        "docs/README.md": "Docs for obsidian-sample-plugin\n",
        "versions.json": '{\n\t"1.0.0": "0.15.0"\n}\n',
    }


@pytest.fixture
def template_archive(template_files) -> bytes:
    """Zip bytes shaped like a GitHub branch archive of the template."""
    return build_archive(template_files)


@pytest.fixture
def fake_session(template_archive) -> Mock:
    """Session whose get() returns the template archive."""
    return make_session(make_response(template_archive))


@pytest.fixture
def fetcher(fake_session) -> TemplateFetcher:
    """TemplateFetcher wired to the fake session."""
    return TemplateFetcher(ScaffoldConfig(), session=fake_session)


# Pytest Configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "cli: marks command-line interface tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks end-to-end scaffolding tests"
    )
