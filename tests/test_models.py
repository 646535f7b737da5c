"""
Tests for domain models — Action and Receipt.
"""

from nxdecorate.core.models.action import Action, Receipt


class TestAction:
    def test_minimal(self):
        action = Action(id="op:symlink", adapter="symlink")
        assert action.name == ""
        assert action.params == {}

    def test_params_not_shared(self):
        a = Action(id="a", adapter="x")
        b = Action(id="b", adapter="x")
        a.params["k"] = "v"
        assert b.params == {}


class TestReceipt:
    def test_success(self):
        receipt = Receipt.success(adapter="manifest", action_id="op:manifest", output="done")
        assert receipt.ok
        assert not receipt.failed
        assert not receipt.skipped
        assert receipt.error is None

    def test_failure(self):
        receipt = Receipt.failure(adapter="symlink", action_id="op:symlink", error="EACCES")
        assert receipt.failed
        assert receipt.error == "EACCES"

    def test_skip(self):
        receipt = Receipt.skip(adapter="bootstrap", action_id="op:bootstrap", reason="already patched")
        assert receipt.skipped
        assert receipt.output == "already patched"

    def test_metadata_serializes(self):
        receipt = Receipt.success(
            adapter="manifest",
            action_id="op:manifest",
            metadata={"changes": ["set scripts.postinstall"]},
        )
        data = receipt.model_dump(mode="json")
        assert data["status"] == "ok"
        assert data["metadata"]["changes"] == ["set scripts.postinstall"]
