"""
Intake Gate

Moves a vehicle from the arrivals pool onto a day's schedule. The gate checks
only day-level limits: the day must exist, operate, and hold fewer cars than
its ceiling. A car admitted here may still wait in its section's pending
queue.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...shared.exceptions import CapacityExceededError, DayUnavailableError, DomainError
from ..entities.ticket import Ticket, TicketDraft
from ..value_objects.enums import Priority, SectionKind, TicketStatus
from .base import ScheduleContext

logger = logging.getLogger(__name__)


class IntakeRequest(BaseModel):
    """What the arrivals process hands over for one vehicle."""

    vehicle_code: str | None = None
    vehicle_model: str = ""
    customer_name: str = ""
    target_date: date
    estimated_duration: Decimal = Field(default=Decimal("2"), alias="estimated_duration_hours")
    section: SectionKind = SectionKind.MECHANICAL
    priority: Priority = Priority.MEDIUM
    priority_reason: str | None = None
    notes: str = ""
    is_special_event: bool = False
    is_owner_request: bool = False
    deadline: date | None = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("section", mode="before")
    @classmethod
    def parse_section(cls, v):
        if isinstance(v, str):
            return SectionKind.parse(v)
        return v

    def to_draft(self) -> TicketDraft:
        return TicketDraft(
            vehicle_code=self.vehicle_code,
            vehicle_model=self.vehicle_model,
            customer_name=self.customer_name,
            section=self.section,
            priority=self.priority,
            priority_reason=self.priority_reason,
            estimated_duration=self.estimated_duration,
            notes=self.notes,
            is_special_event=self.is_special_event,
            is_owner_request=self.is_owner_request,
            deadline=self.deadline,
        )


class IntakeResult(BaseModel):
    """Answer returned to the arrivals process."""

    accepted: bool
    reason: str | None = None
    error: dict[str, Any] | None = None
    ticket: Ticket | None = None


class IntakeGate:
    """
    Day-level admission of arriving vehicles.

    Never creates a day implicitly and never retries; on rejection the caller
    decides whether to try another date.
    """

    def __init__(self, context: ScheduleContext):
        self._context = context

    def submit(self, request: IntakeRequest) -> Ticket:
        """
        Admit a vehicle or raise.

        Raises:
            ScheduleNotFoundError: No schedule for the target date
            DayUnavailableError: The day is marked unavailable
            CapacityExceededError: current_cars_scheduled >= max_cars_capacity
            ValidationError: Bad vehicle data or duplicate vehicle on the day
        """
        day = request.target_date
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            if not schedule.available:
                raise DayUnavailableError(day)
            if schedule.current_cars_scheduled >= schedule.max_cars_capacity:
                raise CapacityExceededError(
                    day, schedule.current_cars_scheduled, schedule.max_cars_capacity
                )
            ticket = Ticket.create(request.to_draft(), TicketStatus.SCHEDULED)
            schedule.admit_ticket(ticket, via_intake=True)
            cars, limit = schedule.current_cars_scheduled, schedule.max_cars_capacity

        logger.info(f"Intake accepted {ticket.vehicle_code} for {day} ({cars}/{limit} cars)")
        return ticket

    def admit(self, request: IntakeRequest) -> IntakeResult:
        """Admit a vehicle, reporting rejection in the result instead of raising."""
        try:
            ticket = self.submit(request)
        except DomainError as e:
            logger.warning(
                f"Intake rejected {request.vehicle_code} for {request.target_date}: {e.message}"
            )
            return IntakeResult(accepted=False, reason=e.message, error=e.to_dict())
        return IntakeResult(accepted=True, ticket=ticket)
