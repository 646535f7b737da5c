"""
DecorateConfig — every path, token and command the decoration steps use.

Loaded from decorate.yml when present. The defaults reproduce a stock
Angular workspace that has installed the Nx CLI, so a zero-argument
run needs no configuration file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

# Anchor line in the Angular CLI bootstrap file after which the warning is injected
DEFAULT_ANCHOR = 'require("symbol-observable");'

# Environment flag set by the Nx CLI; its absence means ng was invoked directly
DEFAULT_SENTINEL_ENV = "NX_CLI_SET"

DEFAULT_WARNING_TITLE = (
    "The Angular CLI was invoked instead of the Nx CLI. Use the nx [command] instead"
)

# Console script installed by this package, run by the postinstall hook
DEFAULT_HOOK_COMMAND = "decorate-angular-cli"


class DecorateConfig(BaseModel):
    """Resolved configuration for one decoration run.

    All paths are relative to the project root. ``link_target`` is
    relative to the directory holding ``link_path``, the way ``ln``
    interprets it.
    """

    # ── Symlink ──────────────────────────────────────────────────
    link_path: str = "node_modules/.bin/ng"
    link_target: str = "nx"

    # ── Bootstrap patch ──────────────────────────────────────────
    bootstrap_path: str = "node_modules/@angular/cli/lib/init.js"
    anchor: str = DEFAULT_ANCHOR
    sentinel_env: str = DEFAULT_SENTINEL_ENV
    warning_title: str = DEFAULT_WARNING_TITLE

    # ── Manifest ─────────────────────────────────────────────────
    manifest_path: str = "package.json"
    hook_name: str = "postinstall"
    hook_command: str = DEFAULT_HOOK_COMMAND
    hook_marker: str = ""           # substring that proves the hook is present
    alias_name: str = "ng"
    alias_value: str = "nx"

    @field_validator(
        "link_path",
        "link_target",
        "bootstrap_path",
        "anchor",
        "sentinel_env",
        "warning_title",
        "manifest_path",
        "hook_name",
        "hook_command",
        "alias_name",
        "alias_value",
    )
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def effective_hook_marker(self) -> str:
        """Marker used to detect an existing hook; defaults to the command."""
        return self.hook_marker or self.hook_command
