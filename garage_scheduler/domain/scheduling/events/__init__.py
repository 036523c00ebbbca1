"""
Scheduling Domain Events

Events raised by DaySchedule and published after the day is saved.
"""

from .domain_events import (
    CapacityUpdated,
    TicketAdmitted,
    TicketDetailsChanged,
    TicketRemoved,
    TicketStatusChanged,
)

__all__ = [
    "CapacityUpdated",
    "TicketAdmitted",
    "TicketDetailsChanged",
    "TicketRemoved",
    "TicketStatusChanged",
]
