"""
Decoration pipeline — build the three step actions and run them.

Flow:
    config → plan (symlink, bootstrap, manifest) → execute → report

Every step is attempted exactly once, in order, even when an earlier
one failed. Nothing is rolled back: a partially applied run is an
expected outcome, and each step is safe to re-run.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime

from nxdecorate.adapters.registry import AdapterRegistry
from nxdecorate.core.models.action import Action, Receipt
from nxdecorate.core.models.config import DecorateConfig

logger = logging.getLogger(__name__)

STEP_SYMLINK = "symlink"
STEP_BOOTSTRAP = "bootstrap"
STEP_MANIFEST = "manifest"

STEP_ORDER = (STEP_SYMLINK, STEP_BOOTSTRAP, STEP_MANIFEST)


@dataclass
class ExecutionPlan:
    """The ordered actions for one run."""

    operation_id: str = ""
    actions: list[Action] = field(default_factory=list)

    @property
    def total_actions(self) -> int:
        return len(self.actions)


@dataclass
class PipelineReport:
    """Aggregate outcome of a run."""

    operation_id: str = ""
    dry_run: bool = False
    receipts: list[Receipt] = field(default_factory=list)
    steps: dict[str, Receipt] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.skipped)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.failed < self.total:
            return "partial"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "operation_id": self.operation_id,
            "dry_run": self.dry_run,
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "steps": {
                name: receipt.model_dump(mode="json")
                for name, receipt in self.steps.items()
            },
        }


def build_decorate_plan(config: DecorateConfig, operation_id: str) -> ExecutionPlan:
    """Build the symlink → bootstrap → manifest plan from a config."""
    params_by_step = {
        STEP_SYMLINK: (
            "Link the ng executable to nx",
            {"link": config.link_path, "target": config.link_target},
        ),
        STEP_BOOTSTRAP: (
            "Warn when the Angular CLI is invoked directly",
            {
                "path": config.bootstrap_path,
                "anchor": config.anchor,
                "sentinel": config.sentinel_env,
                "title": config.warning_title,
            },
        ),
        STEP_MANIFEST: (
            "Run the decorator after install and alias ng to nx",
            {
                "path": config.manifest_path,
                "hook_name": config.hook_name,
                "hook_command": config.hook_command,
                "hook_marker": config.effective_hook_marker,
                "alias_name": config.alias_name,
                "alias_value": config.alias_value,
            },
        ),
    }

    plan = ExecutionPlan(operation_id=operation_id)
    for step in STEP_ORDER:
        description, params = params_by_step[step]
        plan.actions.append(
            Action(
                id=f"{operation_id}:{step}",
                name=step,
                adapter=step,
                description=description,
                params=params,
            )
        )
    return plan


def execute_plan(
    plan: ExecutionPlan,
    registry: AdapterRegistry,
    project_root: str = ".",
    dry_run: bool = False,
) -> PipelineReport:
    """Attempt every action in the plan and collect the receipts.

    Args:
        plan: The execution plan.
        registry: Adapter registry for dispatch.
        project_root: Project root directory.
        dry_run: If True, validate but don't execute.

    Returns:
        PipelineReport with one receipt per step.
    """
    report = PipelineReport(operation_id=plan.operation_id, dry_run=dry_run)

    for action in plan.actions:
        receipt = registry.execute_action(
            action=action,
            project_root=project_root,
            dry_run=dry_run,
        )
        report.receipts.append(receipt)
        report.steps[action.name or action.adapter] = receipt

        status_marker = "✓" if receipt.ok else "✗" if receipt.failed else "⊘"
        if receipt.failed:
            logger.error("%s %s → %s", status_marker, action.name, receipt.error)
        else:
            logger.info("%s %s → %s", status_marker, action.name, receipt.status)

    return report


def generate_operation_id() -> str:
    """Generate a unique operation ID."""
    now = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    short = uuid.uuid4().hex[:6]
    return f"op-{now}-{short}"
