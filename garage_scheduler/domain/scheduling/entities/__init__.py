"""
Scheduling Domain Entities

DaySchedule is the aggregate root; it owns its Tickets. Action log entries
reference tickets by id.
"""

from .action_log import ActionLogEntry
from .day_schedule import DaySchedule
from .ticket import Ticket, TicketDraft, hours_from_parts

__all__ = [
    "ActionLogEntry",
    "DaySchedule",
    "Ticket",
    "TicketDraft",
    "hours_from_parts",
]
