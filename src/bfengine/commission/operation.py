"""Commission for a single buy or sell operation.

The broker charges a percentage of the trade amount, never less than a flat
minimum, and IVA on top of whatever was charged.
"""

import logging
from dataclasses import dataclass

from bfengine.core.types import (
    BrokerFeeSchedule,
    CommissionBreakdown,
    OperationCommissionResult,
    OperationType,
)
from bfengine.core.validation import require_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationCommissionCalculator:
    """Percentage-with-minimum commission plus IVA.

    Stateless: one instance can be shared by any number of callers.
    """

    def calculate(
        self,
        operation_type: OperationType | str,
        total_amount: float,
        schedule: BrokerFeeSchedule,
    ) -> OperationCommissionResult:
        """Calculate the commission for a trade.

        Args:
            operation_type: BUY or SELL (enum or case-insensitive name)
            total_amount: Trade amount, 0 allowed
            schedule: Broker fee schedule to apply

        Returns:
            Commission result; a zero amount is still charged the minimum

        Raises:
            InvalidInputError: If the amount is negative or not finite, or the
                operation type is unknown
        """
        op = OperationType.parse(operation_type)
        amount = require_amount("total_amount", total_amount)
        fees = schedule.fees_for(op)

        percentage_commission = amount * fees.percentage
        base_commission = max(percentage_commission, fees.minimum)
        minimum_applied = percentage_commission < fees.minimum

        iva_amount = base_commission * fees.iva_rate
        total_commission = base_commission + iva_amount

        if op == OperationType.BUY:
            net_amount = amount + total_commission
        else:
            net_amount = amount - total_commission

        result = OperationCommissionResult(
            base_commission=base_commission,
            iva_amount=iva_amount,
            total_commission=total_commission,
            net_amount=net_amount,
            breakdown=CommissionBreakdown(
                operation_type=op,
                total_amount=amount,
                commission_rate=fees.percentage,
                minimum_applied=minimum_applied,
                iva_rate=fees.iva_rate,
            ),
        )
        logger.debug(
            "%s %s commission on %.2f: base=%.2f iva=%.2f total=%.2f (minimum applied: %s)",
            schedule.broker_id, op.value, amount, base_commission, iva_amount,
            total_commission, minimum_applied,
        )
        return result
