"""Fee impact on the return of a position held for several years."""

import logging
from dataclasses import dataclass, field

from bfengine.commission.base import CustodyFeeModel, OperationFeeModel
from bfengine.commission.custody import CustodyFeeCalculator
from bfengine.commission.operation import OperationCommissionCalculator
from bfengine.core.constants import PERCENT
from bfengine.core.exceptions import InvalidInputError
from bfengine.core.types import BrokerFeeSchedule, OperationType
from bfengine.core.validation import require_amount, require_finite

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReturnImpact:
    """Round-trip fees against the gross return of a held position.

    Attributes:
        gross_return: Compounded gain before fees
        buy_commission: Commission to open the position
        sell_commission: Commission to close it at the future value
        total_custody_fees: Custody over the holding period
        net_return: gross_return minus all fees
        return_impact: Fees as a percentage of gross_return
        break_even_return: Fees as a percentage of the initial investment
    """

    gross_return: float
    buy_commission: float
    sell_commission: float
    total_custody_fees: float
    net_return: float
    return_impact: float
    break_even_return: float

    @property
    def total_fees(self) -> float:
        """Return all fees paid over the holding period."""
        return self.buy_commission + self.sell_commission + self.total_custody_fees


@dataclass(frozen=True)
class ReturnImpactAnalyzer:
    """Buy, hold and sell cost analysis.

    Custody is charged each year on the average of the initial and final
    portfolio values.
    """

    operation_calculator: OperationFeeModel = field(default_factory=OperationCommissionCalculator)
    custody_calculator: CustodyFeeModel = field(default_factory=CustodyFeeCalculator)

    def analyze(
        self,
        initial_investment: float,
        expected_annual_return_pct: float,
        holding_period_years: float,
        schedule: BrokerFeeSchedule,
    ) -> ReturnImpact:
        """Analyze fees over a holding period.

        Args:
            initial_investment: Amount bought, must be positive
            expected_annual_return_pct: Expected annual return in percent
            holding_period_years: Years held, must be positive
            schedule: Broker fee schedule to apply

        Returns:
            ReturnImpact for the holding period

        Raises:
            InvalidInputError: If the investment or period is not positive, the
                return is -100% or lower, or the gross return is zero
        """
        initial = require_amount("initial_investment", initial_investment, allow_zero=False)
        years = require_amount("holding_period_years", holding_period_years, allow_zero=False)
        annual_return = require_finite("expected_annual_return_pct", expected_annual_return_pct)
        if annual_return <= -PERCENT:
            raise InvalidInputError(
                "expected_annual_return_pct must be above -100",
                field="expected_annual_return_pct",
                value=expected_annual_return_pct,
            )

        future_value = initial * (1 + annual_return / PERCENT) ** years
        gross_return = future_value - initial
        if gross_return == 0:
            raise InvalidInputError(
                "Return impact is undefined for a zero gross return",
                field="expected_annual_return_pct",
                value=expected_annual_return_pct,
            )

        buy_commission = self.operation_calculator.calculate(
            OperationType.BUY, initial, schedule
        ).total_commission
        sell_commission = self.operation_calculator.calculate(
            OperationType.SELL, future_value, schedule
        ).total_commission

        average_value = (initial + future_value) / 2
        annual_custody = self.custody_calculator.calculate(average_value, schedule).annual_fee
        total_custody_fees = annual_custody * years

        total_fees = buy_commission + sell_commission + total_custody_fees
        impact = ReturnImpact(
            gross_return=gross_return,
            buy_commission=buy_commission,
            sell_commission=sell_commission,
            total_custody_fees=total_custody_fees,
            net_return=gross_return - total_fees,
            return_impact=total_fees / gross_return * PERCENT,
            break_even_return=total_fees / initial * PERCENT,
        )
        logger.debug(
            "%s return impact over %.1f years: fees=%.2f impact=%.2f%% break-even=%.2f%%",
            schedule.broker_id, years, total_fees, impact.return_impact, impact.break_even_return,
        )
        return impact
