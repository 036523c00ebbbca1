"""
Factories for garage scheduling test data.

Plain functions rather than fixtures so hypothesis tests can call them too.
"""

from datetime import date
from decimal import Decimal

from garage_scheduler.domain.scheduling.entities.day_schedule import DaySchedule
from garage_scheduler.domain.scheduling.entities.ticket import Ticket, TicketDraft
from garage_scheduler.domain.scheduling.services.intake_gate import IntakeRequest
from garage_scheduler.domain.scheduling.value_objects.enums import (
    Priority,
    SectionKind,
    TicketStatus,
)

# 2025-06-02 is a Monday, 2025-06-07 the Saturday of the same week
MONDAY = date(2025, 6, 2)
TUESDAY = date(2025, 6, 3)
SATURDAY = date(2025, 6, 7)


def vehicle_codes(count: int, prefix: str = "VIN") -> list[str]:
    return [f"{prefix}{i:05d}" for i in range(1, count + 1)]


def make_draft(vehicle_code: str | None = "VIN00001", **overrides) -> TicketDraft:
    data = {
        "vehicle_code": vehicle_code,
        "vehicle_model": "Voyah Free",
        "customer_name": "Omar Khalil",
        "section": SectionKind.MECHANICAL,
        "priority": Priority.MEDIUM,
        "estimated_duration": Decimal("2"),
    }
    data.update(overrides)
    return TicketDraft(**data)


def make_ticket(
    vehicle_code: str = "VIN00001",
    status: TicketStatus = TicketStatus.SCHEDULED,
    **overrides,
) -> Ticket:
    return Ticket.create(make_draft(vehicle_code, **overrides), status)


def make_schedule(day: date = MONDAY, **overrides) -> DaySchedule:
    return DaySchedule.define(day, **overrides)


def make_request(vehicle_code: str = "VIN00001", target_date: date = MONDAY, **overrides):
    data = {
        "vehicle_code": vehicle_code,
        "vehicle_model": "Voyah Dreamer",
        "target_date": target_date,
        "estimated_duration": Decimal("3"),
        "section": SectionKind.ELECTRICAL,
        "priority": Priority.MEDIUM,
    }
    data.update(overrides)
    return IntakeRequest(**data)
