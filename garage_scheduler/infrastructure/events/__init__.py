"""Event bus and event subscribers."""

from .change_history import ChangeType, ScheduleChange, ScheduleChangeHistory
from .event_bus import EventBusInterface, InMemoryEventBus

__all__ = [
    "ChangeType",
    "EventBusInterface",
    "InMemoryEventBus",
    "ScheduleChange",
    "ScheduleChangeHistory",
]
