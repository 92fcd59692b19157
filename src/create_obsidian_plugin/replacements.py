"""
Placeholder rewriting for the extracted template.

The sample plugin ships with its own names baked into source, manifest and
package files. The rules below rename them to the new plugin. Rules are
applied in list order: longer placeholders come before the placeholders they
contain, so "obsidian-sample-plugin" never ends up as "obsidian-<id>".
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, Union

from create_obsidian_plugin.core.exceptions import ErrorCode, FilesystemError
from create_obsidian_plugin.naming import PluginDescriptor


logger = logging.getLogger(__name__)

REMINDER_COMMENT = "// Remember to rename these classes and interfaces!"


@dataclass(frozen=True)
class ReplacementRule:
    """A compiled pattern and the literal text that replaces each match."""

    pattern: "re.Pattern[str]"
    replacement: str

    @classmethod
    def literal(cls, text: str, replacement: str) -> "ReplacementRule":
        return cls(re.compile(re.escape(text)), replacement)

    @classmethod
    def regex(cls, pattern: str, replacement: str) -> "ReplacementRule":
        return cls(re.compile(pattern), replacement)

    def apply(self, text: str) -> str:
        # A callable keeps backslashes in the replacement literal
        return self.pattern.sub(lambda _match: self.replacement, text)


def build_template_replacements(descriptor: PluginDescriptor) -> List[ReplacementRule]:
    """
    Ordered rules renaming the sample plugin to ``descriptor``.

    Example, for id "obsidian-my-tool" and name "My Tool":
        obsidian-sample-plugin -> obsidian-my-tool
        Sample Plugin          -> My Tool
        SampleSetting          -> MyToolSetting
        MyPlugin               -> MyTool
    """
    class_name = descriptor.class_name
    description = json.dumps(descriptor.description, ensure_ascii=False)
    return [
        ReplacementRule.literal("obsidian-sample-plugin", descriptor.id),
        ReplacementRule.literal("sample-plugin", descriptor.id),
        ReplacementRule.literal("Sample Plugin", descriptor.name),
        ReplacementRule.literal("SampleSetting", descriptor.setting_class_name),
        ReplacementRule.regex(r'"description": ".*",', f'"description": {description},'),
        ReplacementRule.literal(" MyPlugin ", f" {class_name} "),
        ReplacementRule.literal("MyPlugin", class_name),
        ReplacementRule.regex(r"\r?\n" + re.escape(REMINDER_COMMENT), ""),
    ]


def apply_rules(text: str, rules: Sequence[ReplacementRule]) -> str:
    """Run every rule over ``text`` in order."""
    for rule in rules:
        text = rule.apply(text)
    return text


def iter_template_files(directory: Union[str, Path],
                        exclude: Iterable[str] = ("README.md",)) -> Iterator[Path]:
    """
    Yield every regular file below ``directory`` in sorted order.

    ``exclude`` holds paths relative to ``directory`` using forward slashes.
    Dotfiles are included.
    """
    root = Path(directory)
    excluded = {str(name).replace("\\", "/") for name in exclude}
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if path.relative_to(root).as_posix() in excluded:
            continue
        yield path


def apply_replacements(
    directory: Union[str, Path],
    rules: Sequence[ReplacementRule],
    exclude: Iterable[str] = ("README.md",),
) -> List[Path]:
    """
    Rewrite every template file in place.

    Files are read and written as UTF-8 with their newlines preserved. Only
    files whose content changes are written back.

    Returns:
        The files that were modified

    Raises:
        FilesystemError: If a file cannot be read, decoded or written. Files
            rewritten before the failure keep their new content.
    """
    changed: List[Path] = []
    for path in iter_template_files(directory, exclude):
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                original = f.read()
        except UnicodeDecodeError as e:
            raise FilesystemError(
                f"Failed to decode {path} as UTF-8: {e}",
                error_code=ErrorCode.FS_DECODE_FAILED,
                path=path,
                cause=e
            ) from e
        except OSError as e:
            raise FilesystemError(
                f"Failed to read {path}: {e}",
                error_code=ErrorCode.FS_READ_FAILED,
                path=path,
                cause=e
            ) from e

        updated = apply_rules(original, rules)
        if updated == original:
            continue

        try:
            with open(path, 'w', encoding='utf-8', newline='') as f:
                f.write(updated)
        except OSError as e:
            raise FilesystemError(
                f"Failed to write {path}: {e}",
                error_code=ErrorCode.FS_WRITE_FAILED,
                path=path,
                cause=e
            ) from e

        logger.debug("Rewrote %s", path)
        changed.append(path)

    logger.info("Rewrote placeholders in %d file(s)", len(changed))
    return changed
