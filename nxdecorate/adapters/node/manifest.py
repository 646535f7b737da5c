"""
Manifest adapter — keep package.json in step with the decoration.

Two edits to the ``scripts`` mapping:

    postinstall   runs this tool exactly once (appended with ``&&``)
    ng            aliased to ``nx`` when the alias exists

The document is rewritten in place with two-space indentation, keeping
its key order and line endings. An unchanged document is not rewritten.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from nxdecorate.adapters.base import Adapter, ExecutionContext, require_params
from nxdecorate.core.models.action import Receipt

logger = logging.getLogger(__name__)

# Command-chaining operator used to append to an existing hook
HOOK_SEPARATOR = " && "


class ManifestError(Exception):
    """Raised when the manifest document has an unexpected shape."""


def update_scripts(
    document: dict[str, Any],
    hook_name: str,
    hook_command: str,
    hook_marker: str,
    alias_name: str,
    alias_value: str,
) -> list[str]:
    """Apply the hook and alias edits to a parsed manifest, in place.

    Returns:
        Human-readable list of the changes made (empty if none).

    Raises:
        ManifestError: If the document has no ``scripts`` object.
    """
    scripts = document.get("scripts")
    if not isinstance(scripts, dict):
        raise ManifestError("Manifest has no 'scripts' object")

    changes: list[str] = []

    existing = scripts.get(hook_name)
    if existing:
        if not isinstance(existing, str):
            raise ManifestError(f"scripts.{hook_name} is not a string")
        if hook_marker not in existing:
            scripts[hook_name] = existing + HOOK_SEPARATOR + hook_command
            changes.append(f"appended to scripts.{hook_name}")
    else:
        scripts[hook_name] = hook_command
        changes.append(f"set scripts.{hook_name}")

    if scripts.get(alias_name) and scripts[alias_name] != alias_value:
        scripts[alias_name] = alias_value
        changes.append(f"aliased scripts.{alias_name} to {alias_value}")

    return changes


def dump_manifest(
    document: dict[str, Any],
    trailing_newline: bool = True,
    line_ending: str = "\n",
) -> str:
    """Serialize a manifest the way package managers write it."""
    content = json.dumps(document, indent=2, ensure_ascii=False)
    if trailing_newline:
        content += "\n"
    # json.dumps escapes newlines inside strings, so every "\n" here is a line break
    return content.replace("\n", line_ending)


class ManifestAdapter(Adapter):
    """Update the scripts of a JSON manifest.

    Action params:
        path (str): Manifest file, relative to the project root.
        hook_name (str): Lifecycle hook key (e.g. 'postinstall').
        hook_command (str): Command the hook must run.
        hook_marker (str): Substring proving the hook already runs it.
        alias_name (str): Script alias to rewrite (e.g. 'ng').
        alias_value (str): New value for the alias (e.g. 'nx').
    """

    @property
    def name(self) -> str:
        return "manifest"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return require_params(
            context,
            "path",
            "hook_name",
            "hook_command",
            "hook_marker",
            "alias_name",
            "alias_value",
        )

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        target = context.resolve(params["path"])
        metadata: dict[str, Any] = {"path": str(target)}

        try:
            with open(target, encoding="utf-8", newline="") as fh:
                raw = fh.read()
            document = json.loads(raw)
            if not isinstance(document, dict):
                raise ManifestError(
                    f"Expected a JSON object, got {type(document).__name__}"
                )
            changes = update_scripts(
                document,
                hook_name=params["hook_name"],
                hook_command=params["hook_command"],
                hook_marker=params["hook_marker"],
                alias_name=params["alias_name"],
                alias_value=params["alias_value"],
            )
        except json.JSONDecodeError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Invalid JSON in {target}: {e}",
                metadata=metadata,
            )
        except (OSError, UnicodeDecodeError, ManifestError) as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Cannot update {target}: {e}",
                metadata=metadata,
            )

        metadata["changes"] = changes
        if not changes:
            return Receipt.skip(
                adapter=self.name,
                action_id=context.action.id,
                reason="manifest already up to date",
                metadata=metadata,
            )

        try:
            target.write_text(
                dump_manifest(
                    document,
                    trailing_newline=raw.endswith("\n"),
                    line_ending="\r\n" if "\r\n" in raw else "\n",
                ),
                encoding="utf-8",
                newline="",
            )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Cannot write {target}: {e}",
                metadata=metadata,
            )

        logger.info("Updated %s: %s", target, "; ".join(changes))
        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output="; ".join(changes),
            metadata=metadata,
        )
