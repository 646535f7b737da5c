"""
Bootstrap patch adapter — inject a warning into a CLI's entry point.

The Angular CLI runs ``lib/init.js`` on every start. Right after its
``require("symbol-observable");`` line we deposit a JavaScript block
that warns unless the Nx CLI set its environment flag. The block is
written verbatim; evaluating the flag is the patched tool's business.

The flag name doubles as the sentinel: if it already appears in the
file, the patch is considered applied and nothing is written. Line
endings are kept as found.
"""

from __future__ import annotations

import logging

from nxdecorate.adapters.base import Adapter, ExecutionContext, require_params
from nxdecorate.core.models.action import Receipt

logger = logging.getLogger(__name__)

_WARNING_BLOCK = """
  {anchor}
  const {{ output }} = require('@nrwl/workspace');

  if (!process.env['{sentinel}']) {{
    output.warn({{ title: '{title}' }});
  }}
  """


def _js_single_quoted(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def render_warning_block(anchor: str, sentinel: str, title: str) -> str:
    """Build the replacement for the anchor: the anchor itself plus the warning."""
    return _WARNING_BLOCK.format(
        anchor=anchor,
        sentinel=_js_single_quoted(sentinel),
        title=_js_single_quoted(title),
    )


def patch_bootstrap_text(
    content: str,
    anchor: str,
    sentinel: str,
    title: str,
) -> tuple[str | None, str]:
    """Apply the warning patch to bootstrap file content.

    Only the first occurrence of the anchor is replaced.

    Returns:
        (patched_content, reason). patched_content is None when there
        is nothing to do, and reason says why.
    """
    if sentinel in content:
        return None, f"already patched ('{sentinel}' present)"
    if anchor not in content:
        return None, f"anchor not found: {anchor}"
    block = render_warning_block(anchor, sentinel, title)
    return content.replace(anchor, block, 1), ""


class BootstrapPatchAdapter(Adapter):
    """Patch a CLI bootstrap file once.

    Action params:
        path (str): Bootstrap file, relative to the project root.
        anchor (str): Line after which the warning is injected.
        sentinel (str): Environment flag checked by the injected code.
        title (str): Warning message.
    """

    @property
    def name(self) -> str:
        return "bootstrap"

    def is_available(self) -> bool:
        return True

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return require_params(context, "path", "anchor", "sentinel", "title")

    def execute(self, context: ExecutionContext) -> Receipt:
        params = context.action.params
        target = context.resolve(params["path"])
        metadata = {"path": str(target)}

        try:
            with open(target, encoding="utf-8", newline="") as fh:
                content = fh.read()
        except (OSError, UnicodeDecodeError) as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Cannot read {target}: {e}",
                metadata=metadata,
            )

        patched, reason = patch_bootstrap_text(
            content,
            anchor=params["anchor"],
            sentinel=params["sentinel"],
            title=params["title"],
        )
        if patched is None:
            logger.info("Bootstrap %s unchanged: %s", target, reason)
            return Receipt.skip(
                adapter=self.name,
                action_id=context.action.id,
                reason=reason,
                metadata=metadata,
            )

        try:
            target.write_text(patched, encoding="utf-8", newline="")
        except OSError as e:
            return Receipt.failure(
                adapter=self.name,
                action_id=context.action.id,
                error=f"Cannot write {target}: {e}",
                metadata=metadata,
            )

        return Receipt.success(
            adapter=self.name,
            action_id=context.action.id,
            output=f"Patched {target}",
            metadata={**metadata, "size": len(patched)},
        )
