"""Core types for the broker fee engine.

This module defines the fundamental data structures used throughout the engine:
- Fee schedule types (OperationFees, CustodyFees, BrokerFeeSchedule) describing
  one broker's rate card
- Result types (OperationCommissionResult, CustodyFeeResult, ProjectionResult,
  BrokerComparison, MinimumInvestmentResult) produced fresh per calculation
- Trade history types (TradeRecord, HistoryFilter, CommissionAnalysis) for
  aggregating recorded commissions

Rates are fractions in [0, 1] (0.005 = 0.5%). Currency amounts are plain
floats in the schedule's currency. Every type is frozen: a schedule is an
immutable snapshot for the duration of a calculation.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any

from bfengine.core.exceptions import ConfigurationError, InvalidInputError
from bfengine.core.validation import require_amount


class OperationType(Enum):
    """Trade direction."""

    BUY = "BUY"
    SELL = "SELL"

    @classmethod
    def parse(cls, value: "OperationType | str") -> "OperationType":
        """Return the operation type for an enum member or a case-insensitive name.

        Raises:
            InvalidInputError: If the value names no operation type
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        raise InvalidInputError(
            f"Unknown operation type: {value!r}", field="operation_type", value=value
        )


def _rate_problem(name: str, value: float) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"{name} must be a number"
    if not math.isfinite(value) or value < 0 or value > 1:
        return f"{name} must be a finite fraction between 0 and 1, got {value}"
    return None


def _currency_problem(name: str, value: float) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"{name} must be a number"
    if not math.isfinite(value) or value < 0:
        return f"{name} must be a finite non-negative amount, got {value}"
    return None


def _raise_if_problems(problems: list[str | None], message: str) -> None:
    found = [p for p in problems if p]
    if found:
        raise ConfigurationError(f"{message}: {'; '.join(found)}", problems=found)


@dataclass(frozen=True)
class OperationFees:
    """Commission terms for one side (buy or sell) of a trade.

    Attributes:
        percentage: Commission rate as a fraction of the trade amount
        minimum: Minimum commission per trade, before IVA
        iva_rate: IVA rate applied on top of the commission
    """

    percentage: float
    minimum: float
    iva_rate: float

    def __post_init__(self) -> None:
        """Validate fee fields."""
        _raise_if_problems(
            [
                _rate_problem("percentage", self.percentage),
                _currency_problem("minimum", self.minimum),
                _rate_problem("iva_rate", self.iva_rate),
            ],
            "Invalid operation fees",
        )

    @property
    def effective_rate(self) -> float:
        """Percentage rate including IVA (the floor of commission / amount)."""
        return self.percentage * (1 + self.iva_rate)

    @property
    def minimum_with_iva(self) -> float:
        """Smallest commission actually charged, IVA included."""
        return self.minimum * (1 + self.iva_rate)

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for JSON serialization."""
        return {
            "percentage": self.percentage,
            "minimum": self.minimum,
            "ivaRate": self.iva_rate,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OperationFees":
        """Create from a JSON dictionary (``iva`` is accepted for ``ivaRate``)."""
        return cls(
            percentage=data["percentage"],
            minimum=data["minimum"],
            iva_rate=data["ivaRate"] if "ivaRate" in data else data["iva"],
        )


@dataclass(frozen=True)
class CustodyFees:
    """Custody (holding) terms of a broker.

    Attributes:
        exempt_amount: Portfolio value that is charged no custody at all
        monthly_percentage: Monthly rate applied to the value above the exemption
        monthly_minimum: Minimum monthly fee once the exemption is exceeded
        iva_rate: IVA rate applied on top of the custody fee
    """

    exempt_amount: float
    monthly_percentage: float
    monthly_minimum: float
    iva_rate: float

    def __post_init__(self) -> None:
        """Validate custody fields."""
        _raise_if_problems(
            [
                _currency_problem("exempt_amount", self.exempt_amount),
                _rate_problem("monthly_percentage", self.monthly_percentage),
                _currency_problem("monthly_minimum", self.monthly_minimum),
                _rate_problem("iva_rate", self.iva_rate),
            ],
            "Invalid custody fees",
        )

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for JSON serialization."""
        return {
            "exemptAmount": self.exempt_amount,
            "monthlyPercentage": self.monthly_percentage,
            "monthlyMinimum": self.monthly_minimum,
            "ivaRate": self.iva_rate,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CustodyFees":
        """Create from a JSON dictionary (``iva`` is accepted for ``ivaRate``)."""
        return cls(
            exempt_amount=data["exemptAmount"],
            monthly_percentage=data["monthlyPercentage"],
            monthly_minimum=data["monthlyMinimum"],
            iva_rate=data["ivaRate"] if "ivaRate" in data else data["iva"],
        )


@dataclass(frozen=True)
class BrokerFeeSchedule:
    """One broker's rate card.

    Attributes:
        name: Display name (e.g. "Banco Galicia")
        broker_id: Short identifier (e.g. "galicia")
        is_active: Whether this is the schedule in use; the repository keeps
            at most one active schedule
        buy: Commission terms for purchases
        sell: Commission terms for sales
        custody: Custody terms
    """

    name: str
    broker_id: str
    is_active: bool
    buy: OperationFees
    sell: OperationFees
    custody: CustodyFees

    def __post_init__(self) -> None:
        """Validate schedule identity."""
        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigurationError("Broker name is required", broker_id=self.broker_id or None)
        if not isinstance(self.broker_id, str) or not self.broker_id.strip():
            raise ConfigurationError(f"Broker id is required for {self.name!r}")

    def fees_for(self, operation_type: "OperationType | str") -> OperationFees:
        """Return the buy or sell terms for an operation type."""
        op = OperationType.parse(operation_type)
        return self.buy if op == OperationType.BUY else self.sell

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "brokerId": self.broker_id,
            "isActive": self.is_active,
            "buy": self.buy.to_dict(),
            "sell": self.sell.to_dict(),
            "custody": self.custody.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BrokerFeeSchedule":
        """Create from a JSON dictionary.

        Raises:
            ConfigurationError: If fields are missing or out of range
        """
        if not isinstance(data, dict):
            raise ConfigurationError(f"Schedule must be an object, got {type(data).__name__}")
        broker_id = data.get("brokerId") or data.get("broker")
        if not isinstance(broker_id, str):
            broker_id = None
        is_active = data.get("isActive", False)
        if not isinstance(is_active, bool):
            raise ConfigurationError(f"isActive must be true or false, got {is_active!r}", broker_id=broker_id)
        try:
            return cls(
                name=data["name"],
                broker_id=broker_id,
                is_active=is_active,
                buy=OperationFees.from_dict(data["buy"]),
                sell=OperationFees.from_dict(data["sell"]),
                custody=CustodyFees.from_dict(data["custody"]),
            )
        except KeyError as e:
            raise ConfigurationError(f"Missing schedule field: {e.args[0]}", broker_id=broker_id) from e
        except (TypeError, AttributeError) as e:
            raise ConfigurationError(f"Malformed schedule section: {e}", broker_id=broker_id) from e
        except ConfigurationError as e:
            if e.broker_id or not broker_id:
                raise
            raise ConfigurationError(e.message, broker_id=broker_id, problems=e.problems) from e


@dataclass(frozen=True)
class CommissionBreakdown:
    """How an operation commission was derived.

    Attributes:
        operation_type: BUY or SELL
        total_amount: Trade amount the commission was computed on
        commission_rate: Percentage rate used
        minimum_applied: True when the minimum commission replaced the
            percentage commission
        iva_rate: IVA rate used
    """

    operation_type: OperationType
    total_amount: float
    commission_rate: float
    minimum_applied: bool
    iva_rate: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "operationType": self.operation_type.value,
            "totalAmount": self.total_amount,
            "commissionRate": self.commission_rate,
            "minimumApplied": self.minimum_applied,
            "ivaRate": self.iva_rate,
        }


@dataclass(frozen=True)
class OperationCommissionResult:
    """Commission charged for a single buy or sell.

    Attributes:
        base_commission: Commission before IVA
        iva_amount: IVA on the commission
        total_commission: base_commission + iva_amount
        net_amount: Cash out for a buy (amount + commission) or cash in for
            a sell (amount - commission)
        breakdown: Inputs the result was derived from
    """

    base_commission: float
    iva_amount: float
    total_commission: float
    net_amount: float
    breakdown: CommissionBreakdown

    @property
    def commission_percentage(self) -> float:
        """Total commission as a percentage of the trade amount (0 for empty trades)."""
        if self.breakdown.total_amount == 0:
            return 0.0
        return self.total_commission / self.breakdown.total_amount * 100

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "baseCommission": self.base_commission,
            "ivaAmount": self.iva_amount,
            "totalCommission": self.total_commission,
            "netAmount": self.net_amount,
            "breakdown": self.breakdown.to_dict(),
        }


@dataclass(frozen=True)
class CustodyFeeResult:
    """Custody charged for holding a portfolio.

    Attributes:
        applicable_amount: Portfolio value above the exemption
        monthly_fee: Monthly fee before IVA
        annual_fee: Twelve months of total_monthly_cost (IVA included)
        iva_amount: Monthly IVA
        total_monthly_cost: monthly_fee + iva_amount
        is_exempt: True when the portfolio does not exceed the exemption
    """

    applicable_amount: float
    monthly_fee: float
    annual_fee: float
    iva_amount: float
    total_monthly_cost: float
    is_exempt: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "applicableAmount": self.applicable_amount,
            "monthlyFee": self.monthly_fee,
            "annualFee": self.annual_fee,
            "ivaAmount": self.iva_amount,
            "totalMonthlyCost": self.total_monthly_cost,
            "isExempt": self.is_exempt,
        }


@dataclass(frozen=True)
class ProjectionResult:
    """First-year cost of an operation plus holding the resulting portfolio.

    Attributes:
        operation: Commission for the operation
        custody: Custody for the portfolio after the operation
        total_first_year_cost: Operation commission + annual custody
        break_even_impact: Extra return (in %) the position must earn to
            cover total_first_year_cost
    """

    operation: OperationCommissionResult
    custody: CustodyFeeResult
    total_first_year_cost: float
    break_even_impact: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "operation": self.operation.to_dict(),
            "custody": self.custody.to_dict(),
            "totalFirstYearCost": self.total_first_year_cost,
            "breakEvenImpact": self.break_even_impact,
        }


@dataclass(frozen=True)
class BrokerComparison:
    """One schedule's cost for a compared operation.

    Attributes:
        broker: Broker id
        name: Broker display name
        ranking: 1-based position, cheapest first
        operation_commission: Commission for the operation
        custody_fee: Custody for the portfolio
        total_first_year_cost: Operation commission + annual custody
    """

    broker: str
    name: str
    ranking: int
    operation_commission: OperationCommissionResult
    custody_fee: CustodyFeeResult
    total_first_year_cost: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "broker": self.broker,
            "name": self.name,
            "ranking": self.ranking,
            "operationCommission": self.operation_commission.to_dict(),
            "custodyFee": self.custody_fee.to_dict(),
            "totalFirstYearCost": self.total_first_year_cost,
        }


@dataclass(frozen=True)
class MinimumInvestmentResult:
    """Smallest trade that keeps commissions at or below a target percentage.

    Attributes:
        minimum_amount: Smallest qualifying trade amount
        commission_percentage: Commission percentage actually charged at
            minimum_amount
        recommendation: Human-readable advice
        regime_boundary: Amount above which the percentage commission
            exceeds the minimum (None when the rate is zero)
    """

    minimum_amount: float
    commission_percentage: float
    recommendation: str
    regime_boundary: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "minimumAmount": self.minimum_amount,
            "commissionPercentage": self.commission_percentage,
            "recommendation": self.recommendation,
            "regimeBoundary": self.regime_boundary,
        }


@dataclass(frozen=True)
class TradeRecord:
    """A trade as recorded in the history, with what was actually paid.

    Attributes:
        operation_type: BUY or SELL
        amount: Trade amount
        commission_paid: Commission paid, before IVA
        iva_paid: IVA paid on the commission
        trade_date: Execution date
        instrument_id: Instrument traded (optional)
    """

    operation_type: OperationType
    amount: float
    commission_paid: float
    iva_paid: float
    trade_date: date
    instrument_id: int | None = None

    def __post_init__(self) -> None:
        """Validate trade fields."""
        if not isinstance(self.operation_type, OperationType):
            object.__setattr__(self, "operation_type", OperationType.parse(self.operation_type))
        # Finite and non-negative
        for name in ("amount", "commission_paid", "iva_paid"):
            object.__setattr__(self, name, require_amount(name, getattr(self, name)))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TradeRecord":
        """Create from a JSON dictionary."""
        d = data["date"]
        return cls(
            operation_type=OperationType.parse(data["type"]),
            amount=float(data["amount"]),
            commission_paid=float(data.get("commissionPaid", 0.0)),
            iva_paid=float(data.get("ivaPaid", 0.0)),
            trade_date=date.fromisoformat(d[:10]) if isinstance(d, str) else d,
            instrument_id=data.get("instrumentId"),
        )


@dataclass(frozen=True)
class HistoryFilter:
    """Optional restrictions applied to a trade history.

    Attributes:
        from_date: First trade date included
        to_date: Last trade date included
        instrument_id: Only trades of this instrument
    """

    from_date: date | None = None
    to_date: date | None = None
    instrument_id: int | None = None

    def __post_init__(self) -> None:
        """Validate the date range."""
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise InvalidInputError("from_date must not be after to_date", field="from_date", value=self.from_date)


@dataclass(frozen=True)
class TypeSummary:
    """Trade count and commission total for one operation type."""

    count: int = 0
    total: float = 0.0

    def to_dict(self) -> dict[str, float | int]:
        """Convert to dictionary."""
        return {"count": self.count, "total": self.total}


@dataclass(frozen=True)
class MonthlySummary:
    """Commissions and taxes paid in one calendar month.

    Attributes:
        month: Calendar month as "YYYY-MM"
        commissions: Commissions paid
        taxes: IVA paid
        trades: Number of trades
    """

    month: str
    commissions: float
    taxes: float
    trades: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "month": self.month,
            "commissions": self.commissions,
            "taxes": self.taxes,
            "trades": self.trades,
        }


@dataclass(frozen=True)
class CommissionAnalysis:
    """Aggregate of commissions recorded in a trade history.

    Attributes:
        total_commissions_paid: Sum of commissions
        total_taxes_paid: Sum of IVA
        average_commission_per_trade: Mean commission (0 with no trades)
        buy: BUY count and commission total
        sell: SELL count and commission total
        monthly_breakdown: Per-month totals, newest month first
    """

    total_commissions_paid: float = 0.0
    total_taxes_paid: float = 0.0
    average_commission_per_trade: float = 0.0
    buy: TypeSummary = field(default_factory=TypeSummary)
    sell: TypeSummary = field(default_factory=TypeSummary)
    monthly_breakdown: tuple[MonthlySummary, ...] = ()

    @property
    def num_trades(self) -> int:
        """Return total number of trades analysed."""
        return self.buy.count + self.sell.count

    def month(self, month: str) -> MonthlySummary | None:
        """Get the summary for a "YYYY-MM" month, if any trades fell in it."""
        for summary in self.monthly_breakdown:
            if summary.month == month:
                return summary
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "totalCommissionsPaid": self.total_commissions_paid,
            "totalTaxesPaid": self.total_taxes_paid,
            "averageCommissionPerTrade": self.average_commission_per_trade,
            "commissionByType": {
                "buy": self.buy.to_dict(),
                "sell": self.sell.to_dict(),
            },
            "monthlyBreakdown": [m.to_dict() for m in self.monthly_breakdown],
        }
