"""
Domain Events

Raised by the DaySchedule aggregate and published after the owning unit of
work has saved the day. aggregate_id is always the DaySchedule id.
"""

from datetime import date
from uuid import UUID

from ...shared.base import DomainEvent


class TicketAdmitted(DomainEvent):
    """Raised when a ticket is added to a day."""

    day: date
    ticket_id: UUID
    vehicle_code: str
    section: str
    status: str
    via_intake: bool = False


class TicketStatusChanged(DomainEvent):
    """Raised when a ticket's status is overwritten."""

    day: date
    ticket_id: UUID
    vehicle_code: str
    old_status: str
    new_status: str
    changed_by: str | None = None


class TicketDetailsChanged(DomainEvent):
    """Raised when a ticket's assignment or priority changes."""

    day: date
    ticket_id: UUID
    vehicle_code: str
    field_name: str
    old_value: str | None
    new_value: str | None
    changed_by: str | None = None


class TicketRemoved(DomainEvent):
    """Raised when a ticket is hard-deleted from its day."""

    day: date
    ticket_id: UUID
    vehicle_code: str
    status: str


class CapacityUpdated(DomainEvent):
    """Raised when a day's staffing or car ceiling changes."""

    day: date
    field_name: str
    old_value: str | None
    new_value: str | None
    section: str | None = None
