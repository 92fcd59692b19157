"""
Tests for placeholder rewriting.
"""

import json
import re

import pytest

from conftest import MAIN_TS, MANIFEST_JSON, PACKAGE_JSON, README_MD
from create_obsidian_plugin.core.exceptions import ErrorCode, FilesystemError
from create_obsidian_plugin.naming import build_descriptor
from create_obsidian_plugin.replacements import (
    REMINDER_COMMENT,
    ReplacementRule,
    apply_replacements,
    apply_rules,
    build_template_replacements,
    iter_template_files,
)


@pytest.fixture
def descriptor(tmp_path):
    return build_descriptor("my-tool", description="Does useful things", directory=tmp_path / "plugin")


@pytest.fixture
def rules(descriptor):
    return build_template_replacements(descriptor)


@pytest.fixture
def project(tmp_path, template_files):
    root = tmp_path / "plugin"
    for name, content in template_files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


class TestReplacementRule:
    """Test single rule behaviour."""

    def test_literal_escapes_metacharacters(self):
        rule = ReplacementRule.literal("a.b", "X")
        assert rule.apply("a.b axb") == "X axb"

    def test_replacement_is_inserted_literally(self):
        rule = ReplacementRule.literal("name", r"C:\new\1")
        assert rule.apply("name") == r"C:\new\1"

    def test_regex_rule(self):
        rule = ReplacementRule.regex(r"\d+", "#")
        assert rule.apply("a1b22") == "a#b#"


class TestBuildTemplateReplacements:
    """Test the ordered rule list."""

    def test_rule_order(self, rules):
        patterns = [rule.pattern.pattern for rule in rules]
        assert patterns == [
            re.escape("obsidian-sample-plugin"),
            re.escape("sample-plugin"),
            re.escape("Sample Plugin"),
            re.escape("SampleSetting"),
            '"description": ".*",',
            re.escape(" MyPlugin "),
            re.escape("MyPlugin"),
            r"\r?\n" + re.escape(REMINDER_COMMENT),
        ]

    def test_replacement_values(self, rules):
        replacements = [rule.replacement for rule in rules]
        assert replacements == [
            "obsidian-my-tool",
            "obsidian-my-tool",
            "My Tool",
            "MyToolSetting",
            '"description": "Does useful things",',
            " MyTool ",
            "MyTool",
            "",
        ]

    def test_full_id_replaced_before_short_id(self, rules):
        text = "obsidian-sample-plugin and sample-plugin"
        assert apply_rules(text, rules) == "obsidian-my-tool and obsidian-my-tool"

    def test_description_is_json_escaped(self, tmp_path):
        descriptor = build_descriptor("my-tool", description='Say "hi" \\ bye', directory=tmp_path)
        text = apply_rules(MANIFEST_JSON, build_template_replacements(descriptor))

        assert json.loads(text)["description"] == 'Say "hi" \\ bye'

    def test_empty_description(self, tmp_path):
        descriptor = build_descriptor("my-tool", directory=tmp_path)
        text = apply_rules(PACKAGE_JSON, build_template_replacements(descriptor))

        assert json.loads(text)["description"] == ""


class TestApplyRules:
    """Test rewriting of realistic template sources."""

    def test_main_ts(self, rules):
        text = apply_rules(MAIN_TS, rules)

        assert "MyPlugin" not in text
        assert "SampleSetting" not in text
        assert REMINDER_COMMENT not in text
        assert "export default class MyTool extends Plugin" in text
        assert "interface MyToolSettings" in text
        assert "class MyToolSettingTab extends PluginSettingTab" in text
        assert "constructor(app: App, plugin: MyTool)" in text

    def test_reminder_line_removed_with_its_newline(self, rules):
        text = apply_rules(f"a\n{REMINDER_COMMENT}\nb", rules)
        assert text == "a\nb"

    def test_reminder_line_removed_with_crlf(self, rules):
        text = apply_rules(f"a\r\n{REMINDER_COMMENT}\r\nb", rules)
        assert text == "a\r\nb"

    def test_manifest(self, rules):
        manifest = json.loads(apply_rules(MANIFEST_JSON, rules))

        assert manifest["id"] == "obsidian-my-tool"
        assert manifest["name"] == "My Tool"
        assert manifest["description"] == "Does useful things"
        assert manifest["author"] == "Obsidian"

    def test_package_json(self, rules):
        package = json.loads(apply_rules(PACKAGE_JSON, rules))

        assert package["name"] == "obsidian-my-tool"
        assert package["description"] == "Does useful things"


class TestIterTemplateFiles:
    """Test file discovery."""

    def test_excludes_root_readme_only(self, project):
        names = [p.relative_to(project).as_posix() for p in iter_template_files(project)]

        assert "README.md" not in names
        assert "docs/README.md" in names
        assert ".editorconfig" in names
        assert "src/settings.ts" in names
        assert names == sorted(names)

    def test_custom_exclusions(self, project):
        names = [
            p.relative_to(project).as_posix()
            for p in iter_template_files(project, exclude=("main.ts", "src/settings.ts"))
        ]

        assert "README.md" in names
        assert "main.ts" not in names
        assert "src/settings.ts" not in names


class TestApplyReplacements:
    """Test in-place rewriting of a project tree."""

    def test_readme_is_untouched(self, project, rules):
        before = (project / "README.md").read_bytes()

        apply_replacements(project, rules)

        assert (project / "README.md").read_bytes() == before
        assert before == README_MD.encode("utf-8")

    def test_placeholders_replaced_everywhere_else(self, project, rules):
        apply_replacements(project, rules)

        for path in iter_template_files(project):
            text = path.read_text(encoding="utf-8")
            assert "obsidian-sample-plugin" not in text
            assert "sample-plugin" not in text
            assert "Sample Plugin" not in text
            assert "MyPlugin" not in text

        assert (project / "src" / "settings.ts").read_text() == (
            "export class MyToolSetting {}\n// My Tool settings for MyTool\n"
        )
        assert (project / "docs" / "README.md").read_text() == "Docs for obsidian-my-tool\n"
        assert (project / ".editorconfig").read_text().startswith("# obsidian-my-tool")

    def test_returns_changed_files_only(self, project, rules):
        changed = apply_replacements(project, rules)
        names = {p.relative_to(project).as_posix() for p in changed}

        assert "versions.json" not in names
        assert {"main.ts", "manifest.json", "package.json", "src/settings.ts"} <= names

    def test_second_pass_changes_nothing(self, project, rules):
        apply_replacements(project, rules)
        assert apply_replacements(project, rules) == []

    def test_preserves_crlf_newlines(self, project, rules):
        (project / "crlf.ts").write_bytes(b"class MyPlugin {}\r\n")

        apply_replacements(project, rules)

        assert (project / "crlf.ts").read_bytes() == b"class MyTool {}\r\n"

    def test_undecodable_file_fails(self, project, rules):
        (project / "logo.bin").write_bytes(b"\xff\xfe\x00binary")

        with pytest.raises(FilesystemError) as exc_info:
            apply_replacements(project, rules)

        assert exc_info.value.error_code == ErrorCode.FS_DECODE_FAILED
        assert exc_info.value.context.file_path.endswith("logo.bin")
