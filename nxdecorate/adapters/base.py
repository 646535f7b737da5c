"""
Adapter base — the contract between the pipeline and each step.

Every decoration step (symlink, bootstrap patch, manifest update) is
an adapter. The pipeline only talks to steps through this protocol,
so each one can be validated, dry-run and reported the same way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel

from nxdecorate.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    project_root: str = "."
    dry_run: bool = False

    def resolve(self, raw_path: str) -> Path:
        """Resolve a path relative to the project root (absolute paths pass through)."""
        target = Path(raw_path)
        if not target.is_absolute():
            target = Path(self.project_root) / target
        return target


class Adapter(ABC):
    """Abstract base class for all step adapters.

    Adapters perform filesystem side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.

    To add a step:
        1. Subclass Adapter
        2. Implement name, is_available, validate, execute
        3. Register it in the AdapterRegistry
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'symlink', 'bootstrap')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check that the host has what the adapter needs. Checked before every run."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


def require_params(context: ExecutionContext, *names: str) -> tuple[bool, str]:
    """Check that every named param is present and non-empty."""
    for name in names:
        if not context.action.params.get(name):
            return False, f"Missing required param: '{name}'"
    return True, ""
