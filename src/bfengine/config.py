"""Engine configuration.

Settings come from the constructor or, through :meth:`EngineConfig.from_env`,
from environment variables (a ``.env`` file is loaded first):

- ``BFENGINE_SCHEDULES_PATH``: JSON file holding the fee schedules
- ``BFENGINE_DEFAULT_BROKER``: broker id to activate when seeding presets
- ``BFENGINE_LOG_LEVEL``: level applied by :meth:`EngineConfig.configure_logging`
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from bfengine.core.constants import (
    DEFAULT_BROKER_ID,
    DEFAULT_LOG_LEVEL,
    ENV_DEFAULT_BROKER,
    ENV_LOG_LEVEL,
    ENV_SCHEDULES_PATH,
)
from bfengine.schedules.json_file import JsonScheduleRepository
from bfengine.schedules.memory import InMemoryScheduleRepository
from bfengine.schedules.presets import default_schedules

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class EngineConfig:
    """Configuration for building an engine service.

    Attributes:
        schedules_path: JSON schedule file (None = in-memory presets)
        default_broker: Broker id active when seeding presets
        log_level: Logging level name for the ``bfengine`` logger
    """

    schedules_path: Path | None = None
    default_broker: str = DEFAULT_BROKER_ID
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.schedules_path is not None:
            self.schedules_path = Path(self.schedules_path)
        if not self.default_broker or not self.default_broker.strip():
            raise ValueError("default_broker cannot be empty")
        self.default_broker = self.default_broker.strip().lower()
        self.log_level = self.log_level.upper()
        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a configuration from environment variables and ``.env``."""
        load_dotenv()
        path = os.getenv(ENV_SCHEDULES_PATH)
        return cls(
            schedules_path=Path(path) if path else None,
            default_broker=os.getenv(ENV_DEFAULT_BROKER, DEFAULT_BROKER_ID),
            log_level=os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL),
        )

    def configure_logging(self) -> None:
        """Apply log_level to the package logger."""
        logging.getLogger("bfengine").setLevel(self.log_level)

    def build_repository(self) -> InMemoryScheduleRepository:
        """Create the schedule repository this configuration describes.

        A configured path gives a JSON repository (seeded with the presets
        when the file does not exist yet); otherwise the presets are held in
        memory. In both cases presets are seeded with ``default_broker``
        active.

        Raises:
            ConfigurationError: If presets are seeded and ``default_broker``
                names none of them, or the schedule file is corrupt
        """
        if self.schedules_path is not None and self.schedules_path.exists():
            return JsonScheduleRepository(self.schedules_path)
        seed = default_schedules(active=self.default_broker)
        if self.schedules_path is not None:
            return JsonScheduleRepository(self.schedules_path, seed=seed)
        return InMemoryScheduleRepository(seed)
