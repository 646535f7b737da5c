"""
Decorate use case — the whole postinstall run.

Loads config, builds the three-step plan, executes it through the
adapter registry and returns the aggregate report. Configuration
problems are returned as an error, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from nxdecorate.adapters.registry import AdapterRegistry, default_registry
from nxdecorate.core.config.loader import ConfigError, resolve_config
from nxdecorate.core.engine.pipeline import (
    PipelineReport,
    build_decorate_plan,
    execute_plan,
    generate_operation_id,
)
from nxdecorate.core.models.config import DecorateConfig

logger = logging.getLogger(__name__)


@dataclass
class DecorateResult:
    """Result of one decoration run."""

    report: PipelineReport | None = None
    config: DecorateConfig | None = None
    project_root: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.all_ok

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["project_root"] = str(self.project_root)
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def run_decorate(
    config_path: Path | None = None,
    dry_run: bool = False,
    registry: AdapterRegistry | None = None,
) -> DecorateResult:
    """Run the symlink, bootstrap and manifest steps.

    Args:
        config_path: Optional explicit path to decorate.yml.
        dry_run: If True, validate every step but change nothing.
        registry: Optional pre-configured adapter registry.

    Returns:
        DecorateResult with the pipeline report.
    """
    result = DecorateResult()

    try:
        config, project_root = resolve_config(config_path)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.config = config
    result.project_root = project_root

    if registry is None:
        registry = default_registry()

    plan = build_decorate_plan(config, generate_operation_id())
    logger.info(
        "Decorating %s (%d steps%s)",
        project_root,
        plan.total_actions,
        ", dry-run" if dry_run else "",
    )

    result.report = execute_plan(
        plan,
        registry,
        project_root=str(project_root),
        dry_run=dry_run,
    )
    return result
