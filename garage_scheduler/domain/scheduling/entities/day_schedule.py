"""
DaySchedule Entity

One calendar day of garage work. Acts as the aggregate root that owns the
day's tickets (in assignment order) and its capacity configuration, and is the
unit of mutual exclusion for every mutation of that day.
"""

import logging
from datetime import date, time
from uuid import UUID

from pydantic import Field

from ...shared.base import AggregateRoot
from ...shared.exceptions import (
    InvalidStatusTransitionError,
    TicketNotFoundError,
    ValidationError,
)
from ...shared.validation import (
    TOTAL_WORKERS_RANGE,
    BusinessRuleValidators,
    DataSanitizer,
    GarageValidators,
)
from ..events.domain_events import (
    CapacityUpdated,
    TicketAdmitted,
    TicketDetailsChanged,
    TicketRemoved,
    TicketStatusChanged,
)
from ..value_objects.capacity import CapacityConfig, default_hours_for, end_of_day
from ..value_objects.enums import CapacityField, Priority, SectionKind, TicketStatus
from .ticket import Ticket

logger = logging.getLogger(__name__)


class DaySchedule(AggregateRoot):
    """
    Garage schedule for one date.

    Tickets are kept in the order they were added; queue admission reads that
    order, so it must never be re-sorted. Days are never deleted, only marked
    unavailable.
    """

    day: date
    start_time: time = time(8, 0)
    end_time: time = time(16, 0)
    available: bool = True
    max_cars_capacity: int = Field(default=7, ge=0)
    current_cars_scheduled: int = Field(default=0, ge=0)
    notes: str = ""
    capacity: CapacityConfig = Field(default_factory=CapacityConfig)
    tickets: list[Ticket] = Field(default_factory=list)

    @classmethod
    def define(
        cls,
        day: date,
        start_time: time | None = None,
        end_time: time | None = None,
        max_cars_capacity: int = 7,
        available: bool = True,
        notes: str = "",
        total_workers: int = 8,
        short_day_weekday: int = 5,
        weekday_hours: int = 8,
        short_day_hours: int = 6,
    ) -> "DaySchedule":
        """Create a day with date-based default hours and the default section staffing."""
        BusinessRuleValidators.validate_range("max_cars_capacity", max_cars_capacity, 0, None)
        hours = default_hours_for(day, short_day_weekday, weekday_hours, short_day_hours)
        start = start_time or time(8, 0)
        return cls(
            day=day,
            start_time=start,
            end_time=end_time or end_of_day(start, hours),
            available=available,
            max_cars_capacity=max_cars_capacity,
            notes=DataSanitizer.sanitize_string(notes, max_length=1000),
            capacity=CapacityConfig(total_workers=total_workers, hours_open=hours),
        )

    def is_valid(self) -> bool:
        return self.current_cars_scheduled >= 0 and self.max_cars_capacity >= 0

    # Ticket queries

    @property
    def is_full(self) -> bool:
        return self.current_cars_scheduled >= self.max_cars_capacity

    @property
    def remaining_cars(self) -> int:
        return max(0, self.max_cars_capacity - self.current_cars_scheduled)

    def find_ticket(self, ticket_id: UUID) -> Ticket | None:
        for ticket in self.tickets:
            if ticket.id == ticket_id:
                return ticket
        return None

    def get_ticket(self, ticket_id: UUID) -> Ticket:
        ticket = self.find_ticket(ticket_id)
        if ticket is None:
            raise TicketNotFoundError(ticket_id)
        return ticket

    def has_vehicle(self, vehicle_code: str) -> bool:
        return any(ticket.vehicle_code == vehicle_code for ticket in self.tickets)

    def tickets_in_section(self, section: SectionKind) -> list[Ticket]:
        """Section tickets in assignment order."""
        return [ticket for ticket in self.tickets if ticket.section == section]

    # Ticket mutations

    def admit_ticket(self, ticket: Ticket, via_intake: bool = False) -> Ticket:
        """
        Append a ticket to the day.

        Raises:
            ValidationError: If the vehicle is already on this day's schedule
        """
        if self.has_vehicle(ticket.vehicle_code):
            raise ValidationError(
                "vehicle_code",
                ticket.vehicle_code,
                f"Vehicle is already scheduled on {self.day.isoformat()}",
                "DUPLICATE_VEHICLE",
            )

        self.tickets.append(ticket)
        self.current_cars_scheduled += 1
        self.mark_updated()

        section_count = len(self.tickets_in_section(ticket.section))
        section_capacity = self.capacity.section(ticket.section).daily_capacity
        if section_count > section_capacity:
            logger.warning(
                f"Section {ticket.section.value} on {self.day} holds {section_count} "
                f"cars against a daily capacity of {section_capacity}"
            )

        self.add_domain_event(
            TicketAdmitted(
                aggregate_id=self.id,
                day=self.day,
                ticket_id=ticket.id,
                vehicle_code=ticket.vehicle_code,
                section=ticket.section.value,
                status=ticket.status.value,
                via_intake=via_intake,
            )
        )
        return ticket

    def remove_ticket(self, ticket_id: UUID) -> Ticket:
        ticket = self.get_ticket(ticket_id)
        self.tickets = [t for t in self.tickets if t.id != ticket_id]
        self.current_cars_scheduled = max(0, self.current_cars_scheduled - 1)
        self.mark_updated()
        self.add_domain_event(
            TicketRemoved(
                aggregate_id=self.id,
                day=self.day,
                ticket_id=ticket.id,
                vehicle_code=ticket.vehicle_code,
                status=ticket.status.value,
            )
        )
        return ticket

    def change_ticket_status(
        self, ticket_id: UUID, new_status: TicketStatus, changed_by: str | None = None
    ) -> Ticket:
        """
        Overwrite a ticket's status.

        Applying the status a ticket already has changes nothing and raises no
        event.

        Raises:
            TicketNotFoundError: If the ticket is not on this day
            InvalidStatusTransitionError: If the transition table forbids the edge
        """
        ticket = self.get_ticket(ticket_id)
        old_status = ticket.status
        if not old_status.can_transition_to(new_status):
            raise InvalidStatusTransitionError(ticket.id, old_status.value, new_status.value)

        if ticket.set_status(new_status):
            self.mark_updated()
            self.add_domain_event(
                TicketStatusChanged(
                    aggregate_id=self.id,
                    day=self.day,
                    ticket_id=ticket.id,
                    vehicle_code=ticket.vehicle_code,
                    old_status=old_status.value,
                    new_status=new_status.value,
                    changed_by=changed_by,
                )
            )
        return ticket

    def assign_worker(
        self, ticket_id: UUID, worker: str, changed_by: str | None = None
    ) -> Ticket:
        ticket = self.get_ticket(ticket_id)
        worker = DataSanitizer.sanitize_string(worker, max_length=100)
        old_worker = ticket.assigned_worker
        if worker != old_worker:
            ticket.assigned_worker = worker
            ticket.mark_updated()
            self.mark_updated()
            self._record_detail_change(ticket, "assigned_worker", old_worker, worker, changed_by)
        return ticket

    def change_priority(
        self,
        ticket_id: UUID,
        priority: Priority,
        reason: str | None = None,
        changed_by: str | None = None,
    ) -> Ticket:
        ticket = self.get_ticket(ticket_id)
        GarageValidators.validate_priority_reason(priority.value, reason)
        old_priority = ticket.priority
        ticket.priority_reason = (reason or "").strip() or None
        ticket.priority = priority
        ticket.mark_updated()
        self.mark_updated()
        if priority != old_priority:
            self._record_detail_change(
                ticket, "priority", old_priority.value, priority.value, changed_by
            )
        return ticket

    def _record_detail_change(
        self,
        ticket: Ticket,
        field_name: str,
        old_value: str | None,
        new_value: str | None,
        changed_by: str | None,
    ) -> None:
        self.add_domain_event(
            TicketDetailsChanged(
                aggregate_id=self.id,
                day=self.day,
                ticket_id=ticket.id,
                vehicle_code=ticket.vehicle_code,
                field_name=field_name,
                old_value=old_value,
                new_value=new_value,
                changed_by=changed_by,
            )
        )

    # Capacity mutations

    def set_hours_open(self, hours: int) -> bool:
        """
        Set hours open (2-12) as a manual override.

        Out of range or non-numeric input is ignored and the previous value
        kept. Returns whether the value was accepted.
        """
        if not GarageValidators.is_valid_hours_open(hours):
            logger.warning(
                f"Ignoring hours_open={hours!r} for {self.day}; "
                f"keeping {self.capacity.hours_open}"
            )
            return False

        old_hours = self.capacity.hours_open
        self.capacity = self.capacity.model_copy(
            update={"hours_open": int(hours), "hours_open_overridden": True}
        )
        self.end_time = end_of_day(self.start_time, int(hours))
        self._record_capacity_change("hours_open", old_hours, int(hours))
        return True

    def apply_default_hours(
        self, short_day_weekday: int = 5, weekday_hours: int = 8, short_day_hours: int = 6
    ) -> bool:
        """
        Recompute hours open from the date unless an operator overrode them.

        Returns whether the default was applied.
        """
        if self.capacity.hours_open_overridden:
            return False
        hours = default_hours_for(self.day, short_day_weekday, weekday_hours, short_day_hours)
        if hours == self.capacity.hours_open:
            return False
        old_hours = self.capacity.hours_open
        self.capacity = self.capacity.model_copy(update={"hours_open": hours})
        self.end_time = end_of_day(self.start_time, hours)
        self._record_capacity_change("hours_open", old_hours, hours)
        return True

    def clear_hours_override(self) -> None:
        self.capacity = self.capacity.model_copy(update={"hours_open_overridden": False})
        self.mark_updated()

    def set_section_value(self, section: SectionKind, field: CapacityField, value: int) -> int:
        """
        Set workers_assigned or daily_capacity for one section, clamped to 0..20.

        Returns the stored value.
        """
        clamped = GarageValidators.clamp_section_value(value)
        if clamped != value:
            logger.warning(
                f"Clamped {section.value}.{field.value}={value!r} to {clamped} for {self.day}"
            )
        old_value = getattr(self.capacity.section(section), field.value)
        self.capacity = self.capacity.with_section_value(section, field, clamped)
        self._record_capacity_change(field.value, old_value, clamped, section=section)
        return clamped

    def set_total_workers(self, total_workers: int) -> bool:
        low, high = TOTAL_WORKERS_RANGE
        if not GarageValidators.is_whole_number(total_workers) or not (
            low <= total_workers <= high
        ):
            logger.warning(
                f"Ignoring total_workers={total_workers!r} for {self.day}; "
                f"keeping {self.capacity.total_workers}"
            )
            return False
        old_value = self.capacity.total_workers
        self.capacity = self.capacity.model_copy(update={"total_workers": int(total_workers)})
        self._record_capacity_change("total_workers", old_value, int(total_workers))
        return True

    def set_special_issues(self, text: str) -> None:
        text = DataSanitizer.sanitize_string(text, max_length=1000)
        old_value = self.capacity.special_issues
        self.capacity = self.capacity.model_copy(update={"special_issues": text})
        self._record_capacity_change("special_issues", old_value, text)

    def set_max_cars_capacity(self, max_cars: int) -> None:
        if not GarageValidators.is_whole_number(max_cars):
            raise ValidationError(
                "max_cars_capacity", max_cars, "Value must be a whole number", "INVALID_TYPE"
            )
        BusinessRuleValidators.validate_range("max_cars_capacity", max_cars, 0, None)
        old_value = self.max_cars_capacity
        self.max_cars_capacity = int(max_cars)
        self._record_capacity_change("max_cars_capacity", old_value, int(max_cars))

    def set_available(self, available: bool) -> None:
        old_value = self.available
        self.available = available
        self._record_capacity_change("available", old_value, available)

    def _record_capacity_change(
        self, field_name: str, old_value, new_value, section: SectionKind | None = None
    ) -> None:
        self.mark_updated()
        self.add_domain_event(
            CapacityUpdated(
                aggregate_id=self.id,
                day=self.day,
                field_name=field_name,
                old_value=None if old_value is None else str(old_value),
                new_value=None if new_value is None else str(new_value),
                section=section.value if section else None,
            )
        )
