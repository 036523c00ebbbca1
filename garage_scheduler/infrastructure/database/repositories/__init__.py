"""
Repository implementations for the garage scheduler.

In-memory stores for tests and embedding, JSON-file stores for a single
workstation deployment.
"""

from .action_log_repository import InMemoryActionLogRepository, JsonFileActionLogRepository
from .schedule_repository import InMemoryScheduleRepository, JsonFileScheduleRepository

__all__ = [
    "InMemoryActionLogRepository",
    "InMemoryScheduleRepository",
    "JsonFileActionLogRepository",
    "JsonFileScheduleRepository",
]
