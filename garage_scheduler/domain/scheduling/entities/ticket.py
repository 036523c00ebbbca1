"""Ticket entity: one vehicle's work assignment for one day."""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, Field, field_validator

from ...shared.base import Entity, utcnow
from ...shared.exceptions import ValidationError
from ...shared.validation import DataSanitizer, GarageValidators
from ..value_objects.enums import Priority, SectionKind, TicketStatus

TWO_PLACES = Decimal("0.01")


def hours_from_parts(hours: int | float | str, minutes: int | float | str = 0) -> Decimal:
    """Convert an hours + minutes estimate into decimal hours (2 places)."""
    total = Decimal(str(hours)) + Decimal(str(minutes)) / Decimal(60)
    return total.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class TicketDraft(BaseModel):
    """Operator or arrivals input for a new ticket, before validation."""

    vehicle_code: str | None = None
    vehicle_model: str = ""
    customer_name: str = ""
    section: SectionKind = SectionKind.MECHANICAL
    priority: Priority = Priority.MEDIUM
    priority_reason: str | None = None
    estimated_duration: Decimal = Decimal("2")
    assigned_worker: str = ""
    notes: str = ""
    is_special_event: bool = False
    is_owner_request: bool = False
    deadline: date | None = None

    @field_validator("section", mode="before")
    @classmethod
    def parse_section(cls, v):
        if isinstance(v, str):
            return SectionKind.parse(v)
        return v


class Ticket(Entity):
    """
    Ticket (scheduled car) owned by exactly one DaySchedule.

    Status changes are unconditional overwrites checked against the
    TicketStatus transition table. Start and end stamps follow the status so a
    timeline can show when work actually began and finished.
    """

    vehicle_code: str = Field(min_length=1, max_length=64)
    vehicle_model: str = Field(default="", max_length=100)
    customer_name: str = Field(default="", max_length=100)
    section: SectionKind
    priority: Priority = Priority.MEDIUM
    priority_reason: str | None = None
    estimated_duration: Decimal = Field(gt=0, le=24)
    assigned_worker: str = Field(default="", max_length=100)
    notes: str = Field(default="", max_length=1000)
    status: TicketStatus = TicketStatus.SCHEDULED

    is_special_event: bool = False
    is_owner_request: bool = False
    deadline: date | None = None

    actual_start_time: datetime | None = None
    actual_end_time: datetime | None = None

    @field_validator("section", mode="before")
    @classmethod
    def parse_section(cls, v):
        if isinstance(v, str):
            return SectionKind.parse(v)
        return v

    @field_validator("estimated_duration")
    @classmethod
    def round_duration(cls, v: Decimal) -> Decimal:
        rounded = v.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        if rounded <= 0:
            raise ValueError("estimated duration rounds to zero hours")
        return rounded

    @classmethod
    def create(cls, draft: TicketDraft, status: TicketStatus) -> "Ticket":
        """
        Build a ticket from a draft, applying domain validation first.

        Raises:
            ValidationError: missing vehicle code, missing reason for high
                priority, or a non-positive duration
        """
        vehicle_code = DataSanitizer.sanitize_vehicle_code(draft.vehicle_code)
        GarageValidators.validate_priority_reason(draft.priority.value, draft.priority_reason)
        duration = draft.estimated_duration.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        if duration <= 0 or duration > 24:
            raise ValidationError(
                "estimated_duration",
                str(draft.estimated_duration),
                "Estimated duration must be between 0 and 24 hours",
                "INVALID_DURATION",
            )

        return cls(
            vehicle_code=vehicle_code,
            vehicle_model=DataSanitizer.sanitize_string(draft.vehicle_model, max_length=100),
            customer_name=DataSanitizer.sanitize_string(draft.customer_name, max_length=100),
            section=draft.section,
            priority=draft.priority,
            priority_reason=(draft.priority_reason or "").strip() or None,
            estimated_duration=duration,
            assigned_worker=DataSanitizer.sanitize_string(draft.assigned_worker, max_length=100),
            notes=DataSanitizer.sanitize_string(draft.notes, max_length=1000),
            status=status,
            is_special_event=draft.is_special_event,
            is_owner_request=draft.is_owner_request,
            deadline=draft.deadline,
        )

    def is_valid(self) -> bool:
        if not self.vehicle_code:
            return False
        if self.priority == Priority.HIGH and not self.priority_reason:
            return False
        return self.estimated_duration > 0

    def set_status(self, new_status: TicketStatus) -> bool:
        """
        Overwrite the status and keep the work stamps in line with it.

        Returns False, touching nothing, when the ticket already has new_status.
        """
        if new_status == self.status:
            return False
        now = utcnow()
        if new_status == TicketStatus.IN_PROGRESS and self.actual_start_time is None:
            self.actual_start_time = now
        if new_status == TicketStatus.COMPLETED:
            if self.actual_end_time is None:
                self.actual_end_time = now
        elif self.actual_end_time is not None:
            # Reopened after completion
            self.actual_end_time = None
        self.status = new_status
        self.mark_updated()
        return True

    @property
    def is_high_priority(self) -> bool:
        return self.priority == Priority.HIGH

    @property
    def display_duration(self) -> str:
        return f"{self.estimated_duration.normalize():f}h"
