"""Base fee calculator protocols."""

from typing import Protocol, runtime_checkable

from bfengine.core.types import (
    BrokerFeeSchedule,
    CustodyFeeResult,
    OperationCommissionResult,
    OperationType,
)


@runtime_checkable
class OperationFeeModel(Protocol):
    """Protocol for operation commission calculation.

    Calculators that depend on per-trade commissions (projection, comparison,
    minimum investment) accept anything implementing this interface.
    """

    def calculate(
        self,
        operation_type: OperationType | str,
        total_amount: float,
        schedule: BrokerFeeSchedule,
    ) -> OperationCommissionResult:
        """Calculate the commission for a single buy or sell.

        Args:
            operation_type: BUY or SELL
            total_amount: Trade amount
            schedule: Broker fee schedule to apply

        Returns:
            Commission result
        """
        ...


@runtime_checkable
class CustodyFeeModel(Protocol):
    """Protocol for custody fee calculation."""

    def calculate(self, portfolio_value: float, schedule: BrokerFeeSchedule) -> CustodyFeeResult:
        """Calculate the custody fee for holding a portfolio.

        Args:
            portfolio_value: Value of the portfolio held
            schedule: Broker fee schedule to apply

        Returns:
            Custody result
        """
        ...
