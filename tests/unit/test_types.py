"""Tests for core types."""

import math
from datetime import date

import pytest

from bfengine.core.exceptions import ConfigurationError, InvalidInputError
from bfengine.core.types import (
    BrokerFeeSchedule,
    CommissionAnalysis,
    CustodyFees,
    HistoryFilter,
    OperationFees,
    OperationType,
    TradeRecord,
)


class TestOperationType:
    """Tests for OperationType enum."""

    def test_parse_enum(self):
        assert OperationType.parse(OperationType.SELL) is OperationType.SELL

    def test_parse_case_insensitive(self):
        assert OperationType.parse("buy") is OperationType.BUY
        assert OperationType.parse(" Sell ") is OperationType.SELL

    def test_parse_unknown_raises(self):
        with pytest.raises(InvalidInputError):
            OperationType.parse("HOLD")

    def test_parse_non_string_raises(self):
        with pytest.raises(InvalidInputError):
            OperationType.parse(1)


class TestOperationFees:
    """Tests for OperationFees."""

    def test_effective_rate_includes_iva(self):
        fees = OperationFees(percentage=0.005, minimum=150.0, iva_rate=0.21)
        assert fees.effective_rate == pytest.approx(0.00605)
        assert fees.minimum_with_iva == pytest.approx(181.5)

    def test_rate_above_one_raises(self):
        with pytest.raises(ConfigurationError):
            OperationFees(percentage=1.5, minimum=150.0, iva_rate=0.21)

    def test_negative_rate_raises(self):
        with pytest.raises(ConfigurationError):
            OperationFees(percentage=-0.001, minimum=150.0, iva_rate=0.21)

    def test_negative_minimum_raises(self):
        with pytest.raises(ConfigurationError):
            OperationFees(percentage=0.005, minimum=-1.0, iva_rate=0.21)

    def test_non_finite_rate_raises(self):
        with pytest.raises(ConfigurationError):
            OperationFees(percentage=math.nan, minimum=150.0, iva_rate=0.21)

    def test_all_problems_reported(self):
        with pytest.raises(ConfigurationError) as exc_info:
            OperationFees(percentage=2.0, minimum=-5.0, iva_rate=0.21)
        assert len(exc_info.value.problems) == 2

    def test_boundaries_accepted(self):
        fees = OperationFees(percentage=0.0, minimum=0.0, iva_rate=1.0)
        assert fees.iva_rate == 1.0


class TestCustodyFees:
    """Tests for CustodyFees."""

    def test_negative_exempt_amount_raises(self):
        with pytest.raises(ConfigurationError):
            CustodyFees(exempt_amount=-1.0, monthly_percentage=0.0025, monthly_minimum=500.0, iva_rate=0.21)

    def test_infinite_minimum_raises(self):
        with pytest.raises(ConfigurationError):
            CustodyFees(
                exempt_amount=0.0, monthly_percentage=0.0025, monthly_minimum=math.inf, iva_rate=0.21
            )


class TestBrokerFeeSchedule:
    """Tests for BrokerFeeSchedule."""

    def test_fees_for(self, galicia):
        assert galicia.fees_for(OperationType.BUY) is galicia.buy
        assert galicia.fees_for("sell") is galicia.sell

    def test_blank_name_raises(self, galicia):
        with pytest.raises(ConfigurationError):
            BrokerFeeSchedule(
                name=" ",
                broker_id="x",
                is_active=False,
                buy=galicia.buy,
                sell=galicia.sell,
                custody=galicia.custody,
            )

    def test_blank_broker_id_raises(self, galicia):
        with pytest.raises(ConfigurationError):
            BrokerFeeSchedule(
                name="X",
                broker_id="",
                is_active=False,
                buy=galicia.buy,
                sell=galicia.sell,
                custody=galicia.custody,
            )

    def test_is_frozen(self, galicia):
        with pytest.raises(AttributeError):
            galicia.is_active = False

    def test_dict_roundtrip(self, galicia):
        assert BrokerFeeSchedule.from_dict(galicia.to_dict()) == galicia

    def test_from_dict_accepts_iva_alias(self, galicia):
        data = galicia.to_dict()
        data["buy"] = {"percentage": 0.005, "minimum": 150, "iva": 0.21}
        assert BrokerFeeSchedule.from_dict(data).buy.iva_rate == 0.21

    def test_from_dict_missing_section_raises(self, galicia):
        data = galicia.to_dict()
        del data["custody"]
        with pytest.raises(ConfigurationError) as exc_info:
            BrokerFeeSchedule.from_dict(data)
        assert exc_info.value.broker_id == "galicia"

    def test_from_dict_bad_rate_names_broker(self, galicia):
        data = galicia.to_dict()
        data["sell"]["percentage"] = 5
        with pytest.raises(ConfigurationError) as exc_info:
            BrokerFeeSchedule.from_dict(data)
        assert exc_info.value.broker_id == "galicia"
        assert "galicia" in str(exc_info.value)

    def test_from_dict_non_object_raises(self):
        with pytest.raises(ConfigurationError):
            BrokerFeeSchedule.from_dict(1)

    def test_from_dict_section_not_object_raises(self, galicia):
        data = galicia.to_dict()
        data["buy"] = 5
        with pytest.raises(ConfigurationError) as exc_info:
            BrokerFeeSchedule.from_dict(data)
        assert exc_info.value.broker_id == "galicia"

    @pytest.mark.parametrize("flag", ["false", "true", 0, 1, None])
    def test_from_dict_requires_boolean_active_flag(self, galicia, flag):
        data = galicia.to_dict()
        data["isActive"] = flag
        with pytest.raises(ConfigurationError):
            BrokerFeeSchedule.from_dict(data)

    def test_from_dict_active_flag_defaults_to_false(self, galicia):
        data = galicia.to_dict()
        del data["isActive"]
        assert BrokerFeeSchedule.from_dict(data).is_active is False


class TestTradeRecord:
    """Tests for TradeRecord."""

    def test_string_operation_type_is_parsed(self):
        trade = TradeRecord("sell", 1_000.0, 150.0, 31.5, date(2024, 1, 2))
        assert trade.operation_type is OperationType.SELL

    def test_negative_commission_raises(self):
        with pytest.raises(InvalidInputError):
            TradeRecord(OperationType.BUY, 1_000.0, -1.0, 0.0, date(2024, 1, 2))

    @pytest.mark.parametrize("field_index", [1, 2, 3])
    @pytest.mark.parametrize("bad_value", [math.nan, math.inf])
    def test_non_finite_amounts_raise(self, field_index, bad_value):
        values = [OperationType.BUY, 1_000.0, 150.0, 31.5, date(2024, 1, 2)]
        values[field_index] = bad_value
        with pytest.raises(InvalidInputError):
            TradeRecord(*values)

    def test_from_dict_rejects_nan_commission(self):
        with pytest.raises(InvalidInputError) as exc_info:
            TradeRecord.from_dict({
                "type": "BUY", "amount": 1_000, "commissionPaid": "nan", "date": "2024-01-02",
            })
        assert exc_info.value.field == "commission_paid"

    def test_from_dict(self):
        trade = TradeRecord.from_dict({
            "type": "buy",
            "amount": 10_000,
            "commissionPaid": 150,
            "ivaPaid": 31.5,
            "date": "2024-01-15T10:30:00Z",
            "instrumentId": 3,
        })
        assert trade.trade_date == date(2024, 1, 15)
        assert trade.instrument_id == 3
        assert trade.commission_paid == 150.0


class TestHistoryFilter:
    """Tests for HistoryFilter."""

    def test_inverted_range_raises(self):
        with pytest.raises(InvalidInputError):
            HistoryFilter(from_date=date(2024, 2, 1), to_date=date(2024, 1, 1))


class TestCommissionAnalysis:
    """Tests for CommissionAnalysis defaults."""

    def test_empty_analysis(self):
        analysis = CommissionAnalysis()
        assert analysis.num_trades == 0
        assert analysis.month("2024-01") is None
        assert analysis.to_dict()["monthlyBreakdown"] == []
