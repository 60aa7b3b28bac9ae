"""First-year cost projection for an operation.

Combines the commission of a trade with a year of custody on the resulting
portfolio, and expresses the total as the extra return the position has to
earn just to break even.
"""

import logging
from dataclasses import dataclass, field

from bfengine.commission.base import CustodyFeeModel, OperationFeeModel
from bfengine.commission.custody import CustodyFeeCalculator
from bfengine.commission.operation import OperationCommissionCalculator
from bfengine.core.constants import PERCENT
from bfengine.core.exceptions import InvalidInputError
from bfengine.core.types import BrokerFeeSchedule, OperationType, ProjectionResult
from bfengine.core.validation import require_amount

logger = logging.getLogger(__name__)


def portfolio_value_after(
    operation_type: OperationType | str,
    amount: float,
    current_value: float,
) -> float:
    """Portfolio value custody is projected on after an operation.

    A purchase adds the traded amount to the portfolio. A sale leaves the
    current value as the custody base.
    """
    op = OperationType.parse(operation_type)
    amount = require_amount("amount", amount)
    current_value = require_amount("current_value", current_value)
    if op == OperationType.BUY:
        return current_value + amount
    return current_value


@dataclass(frozen=True)
class ProjectionEngine:
    """Projects the total first-year cost of an operation.

    Attributes:
        operation_calculator: Commission model for the trade
        custody_calculator: Custody model for the resulting portfolio
    """

    operation_calculator: OperationFeeModel = field(default_factory=OperationCommissionCalculator)
    custody_calculator: CustodyFeeModel = field(default_factory=CustodyFeeCalculator)

    def project(
        self,
        operation_type: OperationType | str,
        amount: float,
        portfolio_value_after_operation: float,
        schedule: BrokerFeeSchedule,
    ) -> ProjectionResult:
        """Project the first-year cost of a trade.

        Args:
            operation_type: BUY or SELL
            amount: Trade amount, must be positive
            portfolio_value_after_operation: Portfolio value custody is
                charged on for the year
            schedule: Broker fee schedule to apply

        Returns:
            Projection with commission, custody, total cost and break-even impact

        Raises:
            InvalidInputError: If amount is zero, or any input is negative or
                not finite
        """
        amount = require_amount("amount", amount)
        if amount == 0:
            raise InvalidInputError(
                "Break-even impact is undefined for a zero operation amount",
                field="amount",
                value=amount,
            )

        operation = self.operation_calculator.calculate(operation_type, amount, schedule)
        custody = self.custody_calculator.calculate(portfolio_value_after_operation, schedule)

        total_first_year_cost = operation.total_commission + custody.annual_fee
        break_even_impact = total_first_year_cost / amount * PERCENT

        logger.debug(
            "%s projection for %s %.2f: first-year cost=%.2f break-even=%.4f%%",
            schedule.broker_id, operation.breakdown.operation_type.value, amount,
            total_first_year_cost, break_even_impact,
        )
        return ProjectionResult(
            operation=operation,
            custody=custody,
            total_first_year_cost=total_first_year_cost,
            break_even_impact=break_even_impact,
        )
