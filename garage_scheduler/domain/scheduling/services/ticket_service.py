"""
Ticket Service

Adds, updates and removes tickets on a day's schedule. Status changes are
unconditional overwrites; logging the worker action that caused a change is
the caller's job (see WorkflowService).
"""

import logging
from datetime import date
from typing import Any
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from ...shared.exceptions import DayUnavailableError, TicketNotFoundError, ValidationError
from ..entities.ticket import Ticket, TicketDraft
from ..value_objects.enums import Priority, TicketStatus
from ..value_objects.queue import ACTIVE_SLOT_LIMIT
from .base import ScheduleContext, coerce_priority, coerce_status

logger = logging.getLogger(__name__)


class TicketService:
    """
    Service for ticket lifecycle operations.

    Tickets are located by id across all stored days; each operation then
    runs inside the owning day's unit of work.
    """

    def __init__(self, context: ScheduleContext):
        self._context = context

    def add_ticket(self, day: date, draft: TicketDraft | dict[str, Any]) -> Ticket:
        """
        Schedule a vehicle on a day.

        The ticket starts pending when its section already fills both active
        slots, scheduled otherwise.

        Raises:
            ScheduleNotFoundError: If the day is not defined
            DayUnavailableError: If the day is marked unavailable
            ValidationError: Missing vehicle code, missing high priority
                reason, or the vehicle is already on the day
        """
        if not isinstance(draft, TicketDraft):
            try:
                draft = TicketDraft.model_validate(draft)
            except PydanticValidationError as e:
                raise ValidationError("draft", None, str(e), "INVALID_DRAFT") from e

        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            if not schedule.available:
                raise DayUnavailableError(day)

            in_section = len(schedule.tickets_in_section(draft.section))
            status = (
                TicketStatus.PENDING if in_section >= ACTIVE_SLOT_LIMIT else TicketStatus.SCHEDULED
            )
            ticket = schedule.admit_ticket(Ticket.create(draft, status))

            if schedule.current_cars_scheduled > schedule.max_cars_capacity:
                logger.warning(
                    f"{day} now holds {schedule.current_cars_scheduled} cars, "
                    f"above its maximum of {schedule.max_cars_capacity}"
                )

        logger.info(
            f"Added ticket {ticket.id} ({ticket.vehicle_code}) to {day} "
            f"{ticket.section.value} as {ticket.status.value}"
        )
        return ticket

    def get_ticket(self, ticket_id: UUID) -> Ticket:
        day = self.locate(ticket_id)
        schedule = self._context.repository.get_by_date(day)
        if schedule is None:
            raise TicketNotFoundError(ticket_id)
        return schedule.get_ticket(ticket_id)

    def locate(self, ticket_id: UUID) -> date:
        """Date that owns the ticket."""
        day = self._context.repository.find_date_for_ticket(ticket_id)
        if day is None:
            raise TicketNotFoundError(ticket_id)
        return day

    def update_status(
        self, ticket_id: UUID, new_status: str | TicketStatus, changed_by: str | None = None
    ) -> Ticket:
        """
        Overwrite a ticket's status. Reapplying the current status is a no-op.

        Raises:
            ValidationError: If new_status is not a known status
            TicketNotFoundError: If no day holds the ticket
        """
        new_status = coerce_status(new_status)
        day = self.locate(ticket_id)
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            old_status = schedule.get_ticket(ticket_id).status
            ticket = schedule.change_ticket_status(ticket_id, new_status, changed_by)

        if old_status != new_status:
            logger.info(
                f"Ticket {ticket_id} on {day}: {old_status.value} -> {new_status.value}"
            )
        return ticket

    def remove_ticket(self, ticket_id: UUID) -> Ticket:
        day = self.locate(ticket_id)
        with self._context.unit_of_work(day) as uow:
            ticket = uow.require().remove_ticket(ticket_id)

        logger.info(f"Removed ticket {ticket_id} ({ticket.vehicle_code}) from {day}")
        return ticket

    def assign_worker(self, ticket_id: UUID, worker: str, changed_by: str | None = None) -> Ticket:
        day = self.locate(ticket_id)
        with self._context.unit_of_work(day) as uow:
            return uow.require().assign_worker(ticket_id, worker, changed_by)

    def change_priority(
        self,
        ticket_id: UUID,
        priority: str | Priority,
        reason: str | None = None,
        changed_by: str | None = None,
    ) -> Ticket:
        """
        Change a ticket's priority.

        Raises:
            ValidationError: Unknown priority, or high priority without a reason
        """
        priority = coerce_priority(priority)
        day = self.locate(ticket_id)
        with self._context.unit_of_work(day) as uow:
            return uow.require().change_priority(ticket_id, priority, reason, changed_by)
