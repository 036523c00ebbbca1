"""
Scheduling Domain Repository Interfaces

Abstract contracts the infrastructure layer implements for day schedules and
the worker action log.
"""

from .action_log_repository import ActionLogRepository
from .schedule_repository import ScheduleRepository

__all__ = [
    "ActionLogRepository",
    "ScheduleRepository",
]
