"""
Symlink adapter — point one installed executable at another.

Replaces whatever sits at the link path with a link to the target:

    windows  native os.symlink, after removing the existing entry
    posix    ``ln -sfn <target> <link>``, which overwrites in one call

Any other platform is refused with UnsupportedPlatformError rather
than silently leaving the wrapper in place.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
import subprocess
import time
from pathlib import Path

from nxdecorate.adapters.base import Adapter, ExecutionContext, require_params
from nxdecorate.core.models.action import Receipt

logger = logging.getLogger(__name__)

_POSIX_SYSTEMS = frozenset({
    "linux", "darwin", "freebsd", "openbsd", "netbsd", "dragonfly", "sunos", "aix",
})

# Cygwin and MSYS report e.g. "CYGWIN_NT-10.0" and ship a real ln
_POSIX_PREFIXES = ("cygwin", "msys", "mingw")

_LN_TIMEOUT = 30


class UnsupportedPlatformError(Exception):
    """Raised when the host has no known way to create the link."""


def platform_family(system: str | None = None) -> str:
    """Map a platform.system() name to 'windows' or 'posix'.

    Raises:
        UnsupportedPlatformError: For any other platform.
    """
    name = (system if system is not None else platform.system()).lower()
    if name == "windows":
        return "windows"
    if name in _POSIX_SYSTEMS or name.startswith(_POSIX_PREFIXES):
        return "posix"
    raise UnsupportedPlatformError(
        f"Cannot create a symlink on platform '{system or platform.system()}'"
    )


class SymlinkAdapter(Adapter):
    """Create or replace a symlink.

    Action params:
        link (str): Link path, relative to the project root.
        target (str): Link target, relative to the link's directory.
    """

    def __init__(self, system: str | None = None):
        # Override only for tests; defaults to the running host
        self._system = system

    @property
    def name(self) -> str:
        return "symlink"

    def is_available(self) -> bool:
        try:
            family = platform_family(self._system)
        except UnsupportedPlatformError:
            return False
        return family == "windows" or shutil.which("ln") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        valid, msg = require_params(context, "link", "target")
        if not valid:
            return valid, msg
        try:
            platform_family(self._system)
        except UnsupportedPlatformError as e:
            return False, str(e)
        if not Path(context.project_root).is_dir():
            return False, f"Project root does not exist: {context.project_root}"
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        link = context.resolve(context.action.params["link"])
        target = context.action.params["target"]

        try:
            family = platform_family(self._system)
        except UnsupportedPlatformError as e:
            logger.error("%s", e)
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=str(e),
                metadata={"link": str(link), "target": target},
            )

        metadata = {"platform": family, "link": str(link), "target": target}
        try:
            if family == "windows":
                self._link_native(link, target)
            else:
                error = self._link_shell(context, link, target)
                if error:
                    return Receipt.failure(
                        adapter=self.name,
                        action_id=context.action.id,
                        error=error,
                        metadata=metadata,
                    )
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Unable to link {link} -> {target}: {e}",
                metadata=metadata,
            )

        logger.debug("Linked %s -> %s (%s)", link, target, family)
        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"{link} -> {target}",
            metadata=metadata,
        )

    # ── Platform branches ───────────────────────────────────────

    def _link_native(self, link: Path, target: str) -> None:
        # Windows links need an absolute target
        absolute = (link.parent / target).resolve()
        if link.is_symlink() or link.exists():
            link.unlink()
        os.symlink(absolute, link)

    def _link_shell(self, ctx: ExecutionContext, link: Path, target: str) -> str | None:
        """Run ln; return an error string on failure, None on success."""
        cmd = ["ln", "-sfn", target, str(link)]
        logger.debug("Executing: %s", " ".join(cmd))
        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                cwd=ctx.project_root,
                capture_output=True,
                text=True,
                timeout=_LN_TIMEOUT,
            )
        except subprocess.TimeoutExpired:
            return f"ln timed out after {_LN_TIMEOUT}s"
        except FileNotFoundError:
            return "ln is not available on this host"

        elapsed_ms = int((time.monotonic() - start) * 1000)
        logger.debug("ln exited %d in %dms", result.returncode, elapsed_ms)
        if result.returncode != 0:
            return result.stderr.strip() or f"ln exited with code {result.returncode}"
        return None
