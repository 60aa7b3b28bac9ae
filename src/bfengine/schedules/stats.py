"""Schedule validation and summary statistics."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from bfengine.core.types import BrokerFeeSchedule

_OPERATION_RATE_FIELDS = ("percentage", "ivaRate")
_CUSTODY_RATE_FIELDS = ("monthlyPercentage", "ivaRate")


@dataclass(frozen=True)
class ScheduleStats:
    """Summary over the active schedules.

    Attributes:
        total: Number of schedules
        active: Number of active schedules
        average_buy_rate: Mean buy percentage of the active schedules
        lowest_commission_broker: Name of the active schedule with the lowest
            buy percentage
        highest_exempt_amount: Largest custody exemption among active schedules
    """

    total: int
    active: int
    average_buy_rate: float
    lowest_commission_broker: str
    highest_exempt_amount: float


def schedule_stats(schedules: Iterable[BrokerFeeSchedule]) -> ScheduleStats:
    """Summarize a set of schedules."""
    schedules = list(schedules)
    active = [s for s in schedules if s.is_active]
    if not active:
        return ScheduleStats(
            total=len(schedules),
            active=0,
            average_buy_rate=0.0,
            lowest_commission_broker="",
            highest_exempt_amount=0.0,
        )
    lowest = min(active, key=lambda s: s.buy.percentage)
    return ScheduleStats(
        total=len(schedules),
        active=len(active),
        average_buy_rate=sum(s.buy.percentage for s in active) / len(active),
        lowest_commission_broker=lowest.name,
        highest_exempt_amount=max(s.custody.exempt_amount for s in active),
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _section_problems(
    data: Any,
    section: str,
    rate_fields: tuple[str, ...],
    amount_fields: tuple[str, ...],
) -> list[str]:
    if not isinstance(data, dict):
        return [f"{section} terms are missing"]
    problems = []
    for name in rate_fields:
        value = data.get(name, data.get("iva") if name == "ivaRate" else None)
        if not _is_number(value) or not 0 <= value <= 1:
            problems.append(f"{section}.{name} must be a fraction between 0 and 1")
    for name in amount_fields:
        value = data.get(name)
        if not _is_number(value) or value < 0:
            problems.append(f"{section}.{name} must be a non-negative amount")
    return problems


def validate_schedule_dict(data: dict[str, Any]) -> list[str]:
    """List the problems of a raw JSON schedule.

    Useful for form input, where every problem should be reported at once
    instead of stopping at the first.

    Returns:
        Problem descriptions; empty when the schedule is valid
    """
    problems = []
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        problems.append("name is required")
    broker_id = data.get("brokerId", data.get("broker"))
    if not isinstance(broker_id, str) or not broker_id.strip():
        problems.append("brokerId is required")
    if not isinstance(data.get("isActive", False), bool):
        problems.append("isActive must be true or false")
    problems += _section_problems(data.get("buy"), "buy", _OPERATION_RATE_FIELDS, ("minimum",))
    problems += _section_problems(data.get("sell"), "sell", _OPERATION_RATE_FIELDS, ("minimum",))
    problems += _section_problems(
        data.get("custody"), "custody", _CUSTODY_RATE_FIELDS, ("exemptAmount", "monthlyMinimum")
    )
    return problems
