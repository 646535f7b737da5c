"""
Adapter registry — the step boundary between the pipeline and adapters.

Each action names its adapter. The registry looks it up, checks the
action and the host, and turns whatever happens next into a Receipt.
The pipeline never calls an adapter directly.
"""

from __future__ import annotations

import logging
import time

from nxdecorate.adapters.base import Adapter, ExecutionContext
from nxdecorate.core.models.action import Action, Receipt

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Adapters keyed by name, plus the guarded call into them."""

    def __init__(self) -> None:
        self._adapters: dict[str, Adapter] = {}

    def register(self, adapter: Adapter) -> None:
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def get(self, name: str) -> Adapter | None:
        return self._adapters.get(name)

    def execute_action(
        self,
        action: Action,
        project_root: str = ".",
        dry_run: bool = False,
    ) -> Receipt:
        """Run one action and return its receipt. Never raises.

        Order of checks: adapter registered, params valid, adapter
        available on this host. A dry run stops after the checks with
        a skipped receipt.
        """
        start_time = time.monotonic()

        adapter = self._adapters.get(action.adapter)
        if adapter is None:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"No adapter registered for '{action.adapter}'",
            )

        context = ExecutionContext(
            action=action,
            project_root=project_root,
            dry_run=dry_run,
        )

        try:
            is_valid, error_msg = adapter.validate(context)
            available = is_valid and adapter.is_available()
        except Exception as e:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation error: {e}",
            )
        if not is_valid:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Validation failed: {error_msg}",
            )
        if not available:
            return Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Adapter '{action.adapter}' is not available on this host",
            )

        if dry_run:
            return Receipt.skip(
                adapter=action.adapter,
                action_id=action.id,
                reason=f"[dry-run] Would execute {action.adapter}:{action.id}",
                metadata={"dry_run": True},
            )

        try:
            receipt = adapter.execute(context)
        except Exception as e:
            logger.error("Adapter %s raised during execution: %s", action.adapter, e)
            receipt = Receipt.failure(
                adapter=action.adapter,
                action_id=action.id,
                error=f"Unexpected error: {e}",
            )

        receipt.duration_ms = int((time.monotonic() - start_time) * 1000)
        return receipt


def default_registry() -> AdapterRegistry:
    """Registry with the three decoration step adapters registered."""
    from nxdecorate.adapters.node.bootstrap import BootstrapPatchAdapter
    from nxdecorate.adapters.node.manifest import ManifestAdapter
    from nxdecorate.adapters.shell.symlink import SymlinkAdapter

    registry = AdapterRegistry()
    registry.register(SymlinkAdapter())
    registry.register(BootstrapPatchAdapter())
    registry.register(ManifestAdapter())
    return registry
