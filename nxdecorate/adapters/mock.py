"""
Mock adapter — test double for any step.

Configurable to return success, failure, skip, or to raise, per
action ID, without touching the filesystem.
"""

from __future__ import annotations

from nxdecorate.adapters.base import Adapter, ExecutionContext
from nxdecorate.core.models.action import Receipt


class MockAdapter(Adapter):
    """Universal mock adapter for testing.

    By default, returns success for everything. Can be configured
    with custom responses per action ID.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
    ):
        self._name = adapter_name
        self._available = available
        self._responses: dict[str, Receipt] = {}
        self._raises: dict[str, Exception] = {}
        self._call_log: list[ExecutionContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def is_available(self) -> bool:
        return self._available

    def set_response(self, action_id: str, receipt: Receipt) -> None:
        """Set a custom response for a specific action ID."""
        self._responses[action_id] = receipt

    def set_failure(self, action_id: str, error: str = "Mock failure") -> None:
        """Configure a specific action to fail."""
        self._responses[action_id] = Receipt.failure(
            adapter=self._name,
            action_id=action_id,
            error=error,
        )

    def set_raise(self, action_id: str, exc: Exception) -> None:
        """Configure a specific action to raise, breaking the adapter contract."""
        self._raises[action_id] = exc

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: ExecutionContext) -> Receipt:
        self._call_log.append(context)

        if context.action.id in self._raises:
            raise self._raises[context.action.id]

        if context.action.id in self._responses:
            return self._responses[context.action.id]

        return Receipt.success(
            adapter=self._name,
            action_id=context.action.id,
            output="[mock] executed",
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and custom responses."""
        self._call_log.clear()
        self._responses.clear()
        self._raises.clear()
