"""JSON file schedule repository.

Schedules are stored as a single JSON document:

    {"version": 1, "schedules": [{"name": ..., "brokerId": ..., ...}, ...]}
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path

from bfengine.core.exceptions import ConfigurationError
from bfengine.core.types import BrokerFeeSchedule
from bfengine.schedules.memory import InMemoryScheduleRepository

logger = logging.getLogger(__name__)

FILE_VERSION = 1


class JsonScheduleRepository(InMemoryScheduleRepository):
    """Schedule repository persisted to a JSON file.

    The file is read once on construction and rewritten after every change.

    Attributes:
        path: Location of the JSON document
    """

    def __init__(
        self,
        path: str | Path,
        seed: Iterable[BrokerFeeSchedule] = (),
    ) -> None:
        """Open a repository file.

        Args:
            path: JSON file location
            seed: Schedules to start with when the file does not exist yet

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        self.path = Path(path)
        if self.path.exists():
            super().__init__(self._read())
        else:
            super().__init__(seed)

    def save(self, schedule: BrokerFeeSchedule) -> BrokerFeeSchedule:
        """Store a schedule and write the file."""
        stored = super().save(schedule)
        self.flush()
        return stored

    def activate(self, broker_id: str) -> BrokerFeeSchedule:
        """Activate a schedule and write the file."""
        activated = super().activate(broker_id)
        self.flush()
        return activated

    def flush(self) -> None:
        """Write all schedules to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "version": FILE_VERSION,
            "schedules": [s.to_dict() for s in self.list()],
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.debug("Wrote %d fee schedules to %s", len(data["schedules"]), self.path)

    def _read(self) -> "list[BrokerFeeSchedule]":
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Schedule file {self.path} is not valid JSON: {e}") from e

        entries = data.get("schedules") if isinstance(data, dict) else data
        if not isinstance(entries, list):
            raise ConfigurationError(f"Schedule file {self.path} has no schedule list")
        for position, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise ConfigurationError(
                    f"Schedule file {self.path} entry {position} is not an object"
                )

        schedules = [BrokerFeeSchedule.from_dict(entry) for entry in entries]
        logger.debug("Loaded %d fee schedules from %s", len(schedules), self.path)
        return schedules
