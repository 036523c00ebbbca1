"""
Scheduling Domain Value Objects
"""

from .capacity import (
    DEFAULT_SECTION_STAFFING,
    CapacityConfig,
    SectionCapacity,
    default_hours_for,
    end_of_day,
    is_short_day,
)
from .enums import (
    ActionKind,
    CapacityField,
    CapacityStatus,
    Priority,
    SectionKind,
    TicketStatus,
)
from .queue import ACTIVE_SLOT_LIMIT, QueuedTicket, SectionQueue

__all__ = [
    "ACTIVE_SLOT_LIMIT",
    "DEFAULT_SECTION_STAFFING",
    "ActionKind",
    "CapacityConfig",
    "CapacityField",
    "CapacityStatus",
    "Priority",
    "QueuedTicket",
    "SectionCapacity",
    "SectionKind",
    "SectionQueue",
    "TicketStatus",
    "default_hours_for",
    "end_of_day",
    "is_short_day",
]
