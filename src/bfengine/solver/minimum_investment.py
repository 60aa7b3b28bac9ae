"""Minimum trade size for a target commission percentage.

Total commission is ``max(amount * rate, minimum) * (1 + iva)``, so as a
percentage of the amount it is ``max(rate, minimum / amount) * (1 + iva) * 100``.

While the minimum is binding (``minimum / amount > rate``) that percentage
falls strictly as the amount grows, and the smallest qualifying amount is

    amount = minimum * (1 + iva) / (threshold / 100)

Past the regime boundary (``amount = minimum / rate``) the percentage is flat
at ``rate * (1 + iva) * 100``. A threshold at or below that floor is never
reached, whatever the amount.
"""

import logging
from dataclasses import dataclass, field

from bfengine.commission.base import OperationFeeModel
from bfengine.commission.operation import OperationCommissionCalculator
from bfengine.core.constants import (
    HIGH_MINIMUM_INVESTMENT,
    LOW_MINIMUM_INVESTMENT,
    PERCENT,
)
from bfengine.core.exceptions import InvalidInputError, NoSolutionError
from bfengine.core.types import BrokerFeeSchedule, MinimumInvestmentResult, OperationType
from bfengine.core.validation import require_finite

logger = logging.getLogger(__name__)


def recommendation_for(minimum_amount: float) -> str:
    """Advice text for a solved minimum amount."""
    if minimum_amount < LOW_MINIMUM_INVESTMENT:
        return "Very low minimum amount; consider larger operations for cost efficiency"
    if minimum_amount > HIGH_MINIMUM_INVESTMENT:
        return (
            "High minimum amount due to fixed commissions; consider a broker "
            "with lower minimum commissions"
        )
    return "Recommended amount to keep costs under control"


@dataclass(frozen=True)
class MinimumInvestmentSolver:
    """Inverse-solves the smallest trade for a commission percentage target."""

    operation_calculator: OperationFeeModel = field(default_factory=OperationCommissionCalculator)

    def solve(
        self,
        threshold_percent: float,
        schedule: BrokerFeeSchedule,
        operation_type: OperationType | str = OperationType.BUY,
    ) -> MinimumInvestmentResult:
        """Find the smallest amount whose commission stays at or under a target.

        Args:
            threshold_percent: Target commission in percent, 0 < t <= 100
            schedule: Broker fee schedule to apply
            operation_type: Side whose terms are used (default BUY)

        Returns:
            MinimumInvestmentResult with the amount and the percentage actually
            charged there

        Raises:
            InvalidInputError: If the threshold is outside (0, 100]
            NoSolutionError: If the threshold is at or below the schedule's
                percentage floor
        """
        threshold = require_finite("threshold_percent", threshold_percent)
        if not 0 < threshold <= PERCENT:
            raise InvalidInputError(
                "threshold_percent must be greater than 0 and at most 100",
                field="threshold_percent",
                value=threshold_percent,
            )
        op = OperationType.parse(operation_type)
        fees = schedule.fees_for(op)

        floor_percent = fees.effective_rate * PERCENT
        regime_boundary = fees.minimum / fees.percentage if fees.percentage > 0 else None

        if threshold <= floor_percent:
            logger.debug(
                "%s has no %s amount under %.4f%% (floor %.4f%%)",
                schedule.broker_id, op.value, threshold, floor_percent,
            )
            raise NoSolutionError(threshold, floor_percent, regime_boundary)

        if fees.minimum == 0:
            # No fixed fee: every positive amount already pays the floor.
            minimum_amount = 0.0
            commission_percentage = floor_percent
        else:
            minimum_amount = fees.minimum_with_iva / (threshold / PERCENT)
            actual = self.operation_calculator.calculate(op, minimum_amount, schedule)
            commission_percentage = actual.total_commission / minimum_amount * PERCENT

        result = MinimumInvestmentResult(
            minimum_amount=minimum_amount,
            commission_percentage=commission_percentage,
            recommendation=recommendation_for(minimum_amount),
            regime_boundary=regime_boundary,
        )
        logger.debug(
            "%s minimum %s amount for %.4f%%: %.2f (actual %.4f%%)",
            schedule.broker_id, op.value, threshold, minimum_amount, commission_percentage,
        )
        return result
