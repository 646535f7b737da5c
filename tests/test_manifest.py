"""
Tests for the manifest update — scripts transform and adapter.
"""

import json
from pathlib import Path

import pytest

from nxdecorate.adapters.base import ExecutionContext
from nxdecorate.adapters.node.manifest import (
    ManifestAdapter,
    ManifestError,
    dump_manifest,
    update_scripts,
)
from nxdecorate.core.models.action import Action

HOOK = "decorate-angular-cli"


def _update(document: dict) -> list[str]:
    return update_scripts(
        document,
        hook_name="postinstall",
        hook_command=HOOK,
        hook_marker=HOOK,
        alias_name="ng",
        alias_value="nx",
    )


def _ctx(root: Path) -> ExecutionContext:
    return ExecutionContext(
        action=Action(
            id="op:manifest",
            adapter="manifest",
            params={
                "path": "package.json",
                "hook_name": "postinstall",
                "hook_command": HOOK,
                "hook_marker": HOOK,
                "alias_name": "ng",
                "alias_value": "nx",
            },
        ),
        project_root=str(root),
    )


class TestUpdateScripts:
    def test_alias_and_new_hook(self):
        document = {"scripts": {"ng": "ng serve"}}
        changes = _update(document)
        assert document["scripts"]["ng"] == "nx"
        assert document["scripts"]["postinstall"] == HOOK
        assert len(changes) == 2

    def test_appends_to_existing_hook(self):
        document = {"scripts": {"postinstall": "ngcc"}}
        _update(document)
        assert document["scripts"]["postinstall"] == f"ngcc && {HOOK}"

    def test_existing_hook_not_duplicated(self):
        document = {"scripts": {"postinstall": f"ngcc && {HOOK}"}}
        changes = _update(document)
        assert changes == []
        assert document["scripts"]["postinstall"].count(HOOK) == 1

    def test_empty_hook_is_replaced(self):
        document = {"scripts": {"postinstall": ""}}
        _update(document)
        assert document["scripts"]["postinstall"] == HOOK

    def test_absent_alias_stays_absent(self):
        document = {"scripts": {"start": "ng serve"}}
        _update(document)
        assert "ng" not in document["scripts"]
        assert document["scripts"]["start"] == "ng serve"

    def test_second_update_is_noop(self):
        document = {"scripts": {"ng": "ng", "postinstall": "ngcc"}}
        _update(document)
        snapshot = json.dumps(document)
        assert _update(document) == []
        assert json.dumps(document) == snapshot

    def test_missing_scripts_raises(self):
        with pytest.raises(ManifestError):
            _update({"name": "demo"})


class TestDumpManifest:
    def test_two_space_indent_and_key_order(self):
        text = dump_manifest({"name": "é", "scripts": {"b": "1", "a": "2"}})
        assert text.endswith("}\n")
        assert '  "name": "é"' in text
        assert text.index('"b"') < text.index('"a"')

    def test_without_trailing_newline(self):
        assert dump_manifest({"a": 1}, trailing_newline=False).endswith("}")

    def test_crlf_line_endings(self):
        text = dump_manifest({"a": "x\ny"}, line_ending="\r\n")
        assert text == '{\r\n  "a": "x\\ny"\r\n}\r\n'


class TestManifestAdapter:
    def test_updates_file(self, workspace: Path, read_manifest):
        receipt = ManifestAdapter().execute(_ctx(workspace))
        assert receipt.ok, receipt.error
        scripts = read_manifest(workspace)["scripts"]
        assert scripts["ng"] == "nx"
        assert scripts["postinstall"] == HOOK
        assert scripts["start"] == "ng serve"
        assert list(read_manifest(workspace))[0] == "name"

    def test_second_run_skips_without_rewriting(self, workspace: Path):
        adapter = ManifestAdapter()
        adapter.execute(_ctx(workspace))
        path = workspace / "package.json"
        before = path.read_text()

        receipt = adapter.execute(_ctx(workspace))
        assert receipt.skipped
        assert path.read_text() == before

    def test_preserves_missing_trailing_newline(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text('{"scripts": {"ng": "ng serve"}}')
        assert ManifestAdapter().execute(_ctx(tmp_path)).ok
        assert not path.read_text().endswith("\n")
        assert json.loads(path.read_text())["scripts"]["ng"] == "nx"

    def test_malformed_json_fails(self, tmp_path: Path):
        (tmp_path / "package.json").write_text("{not json")
        receipt = ManifestAdapter().execute(_ctx(tmp_path))
        assert receipt.failed
        assert "Invalid JSON" in receipt.error

    def test_missing_scripts_fails(self, tmp_path: Path):
        (tmp_path / "package.json").write_text('{"name": "demo"}')
        receipt = ManifestAdapter().execute(_ctx(tmp_path))
        assert receipt.failed
        assert "scripts" in receipt.error

    def test_non_object_document_fails(self, tmp_path: Path):
        (tmp_path / "package.json").write_text("[]")
        receipt = ManifestAdapter().execute(_ctx(tmp_path))
        assert receipt.failed

    def test_missing_file_fails(self, tmp_path: Path):
        receipt = ManifestAdapter().execute(_ctx(tmp_path))
        assert receipt.failed
        assert "Cannot update" in receipt.error

    def test_keeps_crlf_line_endings(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_bytes(b'{\r\n  "scripts": {\r\n    "ng": "ng"\r\n  }\r\n}\r\n')
        assert ManifestAdapter().execute(_ctx(tmp_path)).ok
        data = path.read_bytes()
        assert b"\n" not in data.replace(b"\r\n", b"")
        assert data.endswith(b"}\r\n")
        assert json.loads(data)["scripts"]["ng"] == "nx"

    def test_undecodable_file_fails(self, tmp_path: Path):
        (tmp_path / "package.json").write_bytes(b'{"scripts": {"a": "\xff"}}')
        receipt = ManifestAdapter().execute(_ctx(tmp_path))
        assert receipt.failed
        assert "Cannot update" in receipt.error
