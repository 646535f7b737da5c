"""
Status use case — read-only view of the three decorated artifacts.

Answers "would a run change anything?" without touching the files:
where the link points, whether the bootstrap file carries the
sentinel, and whether the manifest hook and alias are in place.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from nxdecorate.core.config.loader import ConfigError, resolve_config
from nxdecorate.core.models.config import DecorateConfig

logger = logging.getLogger(__name__)


@dataclass
class ArtifactStatus:
    """State of one artifact."""

    name: str
    path: str
    exists: bool = False
    applied: bool = False
    detail: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "path": self.path,
            "exists": self.exists,
            "applied": self.applied,
            "detail": self.detail,
        }


@dataclass
class StatusResult:
    """Result of inspecting a project."""

    project_root: Path | None = None
    artifacts: list[ArtifactStatus] = field(default_factory=list)
    error: str | None = None

    @property
    def fully_applied(self) -> bool:
        return bool(self.artifacts) and all(a.applied for a in self.artifacts)

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "project_root": str(self.project_root),
            "fully_applied": self.fully_applied,
            "artifacts": [a.to_dict() for a in self.artifacts],
        }


def inspect_link(root: Path, config: DecorateConfig) -> ArtifactStatus:
    link = root / config.link_path
    status = ArtifactStatus(name="symlink", path=config.link_path)
    if not link.is_symlink():
        status.exists = link.exists()
        status.detail = "not a symlink" if status.exists else "missing"
        return status

    status.exists = True
    current = os.readlink(link)
    expected = (link.parent / config.link_target).resolve()
    status.applied = link.resolve() == expected
    status.detail = f"-> {current}"
    return status


def inspect_bootstrap(root: Path, config: DecorateConfig) -> ArtifactStatus:
    path = root / config.bootstrap_path
    status = ArtifactStatus(name="bootstrap", path=config.bootstrap_path)
    if not path.is_file():
        status.detail = "missing"
        return status

    status.exists = True
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        status.detail = f"unreadable: {e}"
        return status

    if config.sentinel_env in content:
        status.applied = True
        status.detail = "patched"
    elif config.anchor in content:
        status.detail = "not patched"
    else:
        status.detail = "anchor not found"
    return status


def inspect_manifest(root: Path, config: DecorateConfig) -> ArtifactStatus:
    path = root / config.manifest_path
    status = ArtifactStatus(name="manifest", path=config.manifest_path)
    if not path.is_file():
        status.detail = "missing"
        return status

    status.exists = True
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        status.detail = f"invalid JSON: {e}"
        return status
    except (OSError, UnicodeDecodeError) as e:
        status.detail = f"unreadable: {e}"
        return status

    scripts = document.get("scripts") if isinstance(document, dict) else None
    if not isinstance(scripts, dict):
        status.detail = "no scripts object"
        return status

    hook = scripts.get(config.hook_name) or ""
    hook_ok = isinstance(hook, str) and config.effective_hook_marker in hook
    alias = scripts.get(config.alias_name)
    alias_ok = not alias or alias == config.alias_value

    status.applied = hook_ok and alias_ok
    problems = []
    if not hook_ok:
        problems.append(f"{config.hook_name} hook missing")
    if not alias_ok:
        problems.append(f"{config.alias_name} not aliased to {config.alias_value}")
    status.detail = "; ".join(problems) or "up to date"
    return status


def get_status(config_path: Path | None = None) -> StatusResult:
    """Inspect the link, bootstrap file and manifest of a project."""
    result = StatusResult()
    try:
        config, root = resolve_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.project_root = root
    result.artifacts = [
        inspect_link(root, config),
        inspect_bootstrap(root, config),
        inspect_manifest(root, config),
    ]
    return result
