"""Ranking of broker fee schedules for the same operation and portfolio."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from bfengine.commission.base import CustodyFeeModel, OperationFeeModel
from bfengine.commission.custody import CustodyFeeCalculator
from bfengine.commission.operation import OperationCommissionCalculator
from bfengine.core.types import BrokerComparison, BrokerFeeSchedule, OperationType
from bfengine.core.validation import require_amount

logger = logging.getLogger(__name__)


def _ranking_key(comparison: BrokerComparison) -> tuple[float, str, str]:
    return (
        comparison.total_first_year_cost,
        comparison.name.casefold(),
        comparison.broker,
    )


@dataclass(frozen=True)
class BrokerComparator:
    """Ranks schedules by first-year cost, cheapest first.

    Ties on cost are broken by broker name (case-insensitive), then by
    broker id, so the ranking never depends on the order schedules are given.
    """

    operation_calculator: OperationFeeModel = field(default_factory=OperationCommissionCalculator)
    custody_calculator: CustodyFeeModel = field(default_factory=CustodyFeeCalculator)

    def compare(
        self,
        operation_type: OperationType | str,
        amount: float,
        portfolio_value: float,
        schedules: Iterable[BrokerFeeSchedule],
    ) -> list[BrokerComparison]:
        """Evaluate every schedule and rank them.

        Args:
            operation_type: BUY or SELL
            amount: Trade amount
            portfolio_value: Portfolio value custody is charged on
            schedules: Schedules to compare, active or not

        Returns:
            Comparisons sorted by total first-year cost with 1-based rankings;
            empty when no schedules are given

        Raises:
            InvalidInputError: If an amount is negative or not finite
        """
        op = OperationType.parse(operation_type)
        amount = require_amount("amount", amount)
        portfolio_value = require_amount("portfolio_value", portfolio_value)

        unranked = []
        for schedule in schedules:
            operation = self.operation_calculator.calculate(op, amount, schedule)
            custody = self.custody_calculator.calculate(portfolio_value, schedule)
            unranked.append(
                BrokerComparison(
                    broker=schedule.broker_id,
                    name=schedule.name,
                    ranking=0,
                    operation_commission=operation,
                    custody_fee=custody,
                    total_first_year_cost=operation.total_commission + custody.annual_fee,
                )
            )

        ranked = [
            replace(comparison, ranking=position)
            for position, comparison in enumerate(sorted(unranked, key=_ranking_key), start=1)
        ]
        if ranked:
            logger.debug(
                "Compared %d schedules for %s %.2f: cheapest is %s (%.2f)",
                len(ranked), op.value, amount, ranked[0].name, ranked[0].total_first_year_cost,
            )
        return ranked

    def cheapest(
        self,
        operation_type: OperationType | str,
        amount: float,
        portfolio_value: float,
        schedules: Iterable[BrokerFeeSchedule],
    ) -> BrokerComparison | None:
        """Return the top-ranked comparison, or None with no schedules."""
        ranked = self.compare(operation_type, amount, portfolio_value, schedules)
        return ranked[0] if ranked else None
