"""Monthly and annual custody fee for holding a portfolio."""

import logging
from dataclasses import dataclass

from bfengine.core.constants import MONTHS_PER_YEAR
from bfengine.core.types import BrokerFeeSchedule, CustodyFeeResult
from bfengine.core.validation import require_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustodyFeeCalculator:
    """Custody above an exempt threshold, with a monthly minimum plus IVA.

    The minimum only applies once the portfolio exceeds the exemption; at or
    below the exempt amount the fee is exactly zero.
    """

    def calculate(self, portfolio_value: float, schedule: BrokerFeeSchedule) -> CustodyFeeResult:
        """Calculate the custody fee.

        Args:
            portfolio_value: Value of the portfolio held
            schedule: Broker fee schedule to apply

        Returns:
            Custody result with monthly and annual figures

        Raises:
            InvalidInputError: If the value is negative or not finite
        """
        value = require_amount("portfolio_value", portfolio_value)
        custody = schedule.custody

        is_exempt = value <= custody.exempt_amount
        applicable_amount = max(0.0, value - custody.exempt_amount)

        if is_exempt:
            monthly_fee = 0.0
        else:
            monthly_fee = max(applicable_amount * custody.monthly_percentage, custody.monthly_minimum)

        iva_amount = monthly_fee * custody.iva_rate
        total_monthly_cost = monthly_fee + iva_amount
        annual_fee = total_monthly_cost * MONTHS_PER_YEAR

        logger.debug(
            "%s custody on %.2f: exempt=%s monthly=%.2f annual=%.2f",
            schedule.broker_id, value, is_exempt, monthly_fee, annual_fee,
        )
        return CustodyFeeResult(
            applicable_amount=applicable_amount,
            monthly_fee=monthly_fee,
            annual_fee=annual_fee,
            iva_amount=iva_amount,
            total_monthly_cost=total_monthly_cost,
            is_exempt=is_exempt,
        )
