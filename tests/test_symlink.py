"""
Tests for the symlink adapter — both platform branches and the refusal path.
"""

import os
import shutil
from pathlib import Path

import pytest

from nxdecorate.adapters.base import ExecutionContext
from nxdecorate.adapters.shell.symlink import (
    SymlinkAdapter,
    UnsupportedPlatformError,
    platform_family,
)
from nxdecorate.core.models.action import Action

needs_posix = pytest.mark.skipif(os.name == "nt", reason="POSIX symlinks required")
needs_ln = pytest.mark.skipif(shutil.which("ln") is None, reason="ln not installed")


def _ctx(root: Path, link: str = "node_modules/.bin/ng", target: str = "nx") -> ExecutionContext:
    return ExecutionContext(
        action=Action(id="op:symlink", adapter="symlink", params={"link": link, "target": target}),
        project_root=str(root),
    )


class TestPlatformFamily:
    @pytest.mark.parametrize("system", ["Linux", "Darwin", "FreeBSD", "CYGWIN_NT-10.0"])
    def test_posix(self, system):
        assert platform_family(system) == "posix"

    def test_windows(self):
        assert platform_family("Windows") == "windows"

    @pytest.mark.parametrize("system", ["Emscripten", "Java", ""])
    def test_unsupported(self, system):
        with pytest.raises(UnsupportedPlatformError):
            platform_family(system)


class TestValidate:
    def test_missing_target(self, tmp_path: Path):
        valid, msg = SymlinkAdapter().validate(_ctx(tmp_path, target=""))
        assert not valid
        assert "target" in msg

    def test_missing_project_root(self, tmp_path: Path):
        valid, msg = SymlinkAdapter().validate(_ctx(tmp_path / "nope"))
        assert not valid
        assert "does not exist" in msg

    def test_unsupported_platform(self, tmp_path: Path):
        valid, msg = SymlinkAdapter(system="Emscripten").validate(_ctx(tmp_path))
        assert not valid
        assert "Emscripten" in msg


class TestIsAvailable:
    def test_posix_needs_ln(self, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: None)
        assert not SymlinkAdapter(system="Linux").is_available()
        monkeypatch.setattr(shutil, "which", lambda name: "/bin/ln")
        assert SymlinkAdapter(system="Linux").is_available()

    def test_windows_needs_nothing(self, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: None)
        assert SymlinkAdapter(system="Windows").is_available()


@needs_posix
@needs_ln
class TestShellBranch:
    def test_replaces_wrapper(self, workspace: Path):
        link = workspace / "node_modules" / ".bin" / "ng"
        receipt = SymlinkAdapter(system="Linux").execute(_ctx(workspace))
        assert receipt.ok, receipt.error
        assert receipt.metadata["platform"] == "posix"
        assert link.is_symlink()
        assert os.readlink(link) == "nx"
        assert link.resolve() == (workspace / "node_modules" / ".bin" / "nx").resolve()

    def test_recreate_over_existing_link(self, workspace: Path):
        adapter = SymlinkAdapter(system="Linux")
        assert adapter.execute(_ctx(workspace)).ok
        receipt = adapter.execute(_ctx(workspace))
        assert receipt.ok, receipt.error
        assert os.readlink(workspace / "node_modules" / ".bin" / "ng") == "nx"

    def test_missing_link_directory_fails(self, tmp_path: Path):
        receipt = SymlinkAdapter(system="Linux").execute(_ctx(tmp_path))
        assert receipt.failed
        assert receipt.error


@needs_posix
class TestNativeBranch:
    def test_replaces_wrapper(self, workspace: Path):
        link = workspace / "node_modules" / ".bin" / "ng"
        receipt = SymlinkAdapter(system="Windows").execute(_ctx(workspace))
        assert receipt.ok, receipt.error
        assert receipt.metadata["platform"] == "windows"
        assert link.is_symlink()
        assert link.resolve() == (workspace / "node_modules" / ".bin" / "nx").resolve()

    def test_recreate_over_existing_link(self, workspace: Path):
        adapter = SymlinkAdapter(system="Windows")
        assert adapter.execute(_ctx(workspace)).ok
        assert adapter.execute(_ctx(workspace)).ok

    def test_missing_link_directory_fails(self, tmp_path: Path):
        receipt = SymlinkAdapter(system="Windows").execute(_ctx(tmp_path))
        assert receipt.failed
        assert "Unable to link" in receipt.error


class TestUnsupportedPlatform:
    def test_fails_without_touching_link(self, workspace: Path):
        link = workspace / "node_modules" / ".bin" / "ng"
        adapter = SymlinkAdapter(system="Emscripten")
        receipt = adapter.execute(_ctx(workspace))
        assert receipt.failed
        assert "Emscripten" in receipt.error
        assert not link.is_symlink()
        assert not adapter.is_available()
