"""Fee schedule repositories and presets."""

from bfengine.schedules.base import ScheduleRepository
from bfengine.schedules.json_file import JsonScheduleRepository
from bfengine.schedules.memory import InMemoryScheduleRepository
from bfengine.schedules.presets import GALICIA, MACRO, SANTANDER, default_schedules
from bfengine.schedules.stats import ScheduleStats, schedule_stats, validate_schedule_dict

__all__ = [
    "ScheduleRepository",
    "InMemoryScheduleRepository",
    "JsonScheduleRepository",
    "GALICIA",
    "SANTANDER",
    "MACRO",
    "default_schedules",
    "ScheduleStats",
    "schedule_stats",
    "validate_schedule_dict",
]
