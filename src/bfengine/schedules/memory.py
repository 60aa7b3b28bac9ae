"""In-memory schedule repository."""

import logging
from collections.abc import Iterable
from dataclasses import replace

from bfengine.core.exceptions import ConfigurationError
from bfengine.core.types import BrokerFeeSchedule

logger = logging.getLogger(__name__)


class InMemoryScheduleRepository:
    """Schedules held in a dict keyed by broker id.

    Keeps at most one schedule active: saving or activating a schedule
    deactivates the previously active one.

    Example:
        repo = InMemoryScheduleRepository(default_schedules())
        repo.activate("santander")
        schedule = repo.get_active()
    """

    def __init__(self, schedules: Iterable[BrokerFeeSchedule] = ()) -> None:
        self._schedules: dict[str, BrokerFeeSchedule] = {}
        for schedule in schedules:
            self._store(schedule)

    def __len__(self) -> int:
        """Return number of stored schedules."""
        return len(self._schedules)

    def __contains__(self, broker_id: object) -> bool:
        return isinstance(broker_id, str) and broker_id.lower() in self._schedules

    def get(self, broker_id: str) -> BrokerFeeSchedule | None:
        """Get the schedule of a broker (case-insensitive id)."""
        return self._schedules.get(broker_id.lower())

    def get_active(self) -> BrokerFeeSchedule | None:
        """Get the active schedule, if any."""
        for schedule in self._schedules.values():
            if schedule.is_active:
                return schedule
        return None

    def save(self, schedule: BrokerFeeSchedule) -> BrokerFeeSchedule:
        """Store a schedule, deactivating the others when it is active."""
        stored = self._store(schedule)
        logger.info("Saved fee schedule %s (active: %s)", schedule.name, schedule.is_active)
        return stored

    def activate(self, broker_id: str) -> BrokerFeeSchedule:
        """Make a stored schedule the active one.

        Raises:
            ConfigurationError: If no schedule exists for the broker
        """
        schedule = self.get(broker_id)
        if schedule is None:
            logger.warning("Cannot activate unknown broker %s", broker_id)
            raise ConfigurationError("No fee schedule for broker", broker_id=broker_id)
        activated = self._store(replace(schedule, is_active=True))
        logger.info("Active fee schedule changed to %s", activated.name)
        return activated

    def _store(self, schedule: BrokerFeeSchedule) -> BrokerFeeSchedule:
        key = schedule.broker_id.lower()
        if schedule.is_active:
            for other_key, other in list(self._schedules.items()):
                if other_key != key and other.is_active:
                    self._schedules[other_key] = replace(other, is_active=False)
        self._schedules[key] = schedule
        return schedule

    def list(self) -> "list[BrokerFeeSchedule]":
        """Return all stored schedules in insertion order."""
        return list(self._schedules.values())
