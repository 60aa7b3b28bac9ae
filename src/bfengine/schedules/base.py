"""Base protocol for fee schedule repositories.

Schedules are stored and edited outside the engine. Calculators only ever
receive a schedule value; the repository is how callers find one.
"""

from typing import Protocol, runtime_checkable

from bfengine.core.types import BrokerFeeSchedule


@runtime_checkable
class ScheduleRepository(Protocol):
    """Protocol for schedule repositories.

    Implementations keep at most one schedule active at a time.
    """

    def get(self, broker_id: str) -> BrokerFeeSchedule | None:
        """Get the schedule of a broker, or None if unknown."""
        ...

    def get_active(self) -> BrokerFeeSchedule | None:
        """Get the active schedule, or None if no schedule is active."""
        ...

    def save(self, schedule: BrokerFeeSchedule) -> BrokerFeeSchedule:
        """Store a schedule, replacing any with the same broker id.

        Saving an active schedule deactivates every other schedule.

        Returns:
            The stored schedule
        """
        ...

    def list(self) -> "list[BrokerFeeSchedule]":
        """Return all stored schedules, active or not."""
        ...
