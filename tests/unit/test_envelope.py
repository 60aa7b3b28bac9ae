"""Tests for the response envelope."""

import pytest

from bfengine.commission.operation import OperationCommissionCalculator
from bfengine.core.envelope import Envelope, enveloped
from bfengine.core.exceptions import ConfigurationError, InvalidInputError


class TestEnvelope:
    """Tests for Envelope."""

    def test_ok_serializes_result(self, galicia):
        result = OperationCommissionCalculator().calculate("BUY", 10_000, galicia)
        payload = Envelope.ok(result).to_dict()
        assert payload["success"] is True
        assert payload["data"]["totalCommission"] == pytest.approx(181.5)
        assert "error" not in payload

    def test_ok_serializes_lists(self, galicia):
        results = [OperationCommissionCalculator().calculate("SELL", 1_000, galicia)]
        assert Envelope.ok(results).data[0]["breakdown"]["operationType"] == "SELL"

    def test_fail(self):
        payload = Envelope.fail(ConfigurationError("No active fee schedule configured")).to_dict()
        assert payload == {
            "success": False,
            "error": {"message": "No active fee schedule configured"},
        }

    def test_fail_includes_details(self):
        error = InvalidInputError("amount cannot be negative", field="amount", value=-5)
        payload = Envelope.fail(error).to_dict()
        assert payload["error"]["details"] == {"field": "amount", "value": -5}


class TestEnveloped:
    """Tests for enveloped."""

    def test_wraps_success(self, galicia):
        envelope = enveloped(OperationCommissionCalculator().calculate, "BUY", 100_000, galicia)
        assert envelope.success is True
        assert envelope.data["netAmount"] == pytest.approx(100_605.0)

    def test_wraps_engine_error(self, galicia):
        envelope = enveloped(OperationCommissionCalculator().calculate, "BUY", -1, galicia)
        assert envelope.success is False
        assert envelope.error["message"] == "total_amount cannot be negative"

    def test_other_errors_propagate(self):
        def broken():
            raise ZeroDivisionError("bug")

        with pytest.raises(ZeroDivisionError):
            enveloped(broken)
