"""
Shared plumbing for the scheduling services.

Every service that mutates a day goes through a DayUnitOfWork built from the
same repository, lock registry and event bus, so all services wired to one
ScheduleContext serialize on the same per-date locks.
"""

from dataclasses import dataclass, field
from datetime import date

from ....core.config import Settings, get_settings
from ....core.unit_of_work import DayLockRegistry, DayUnitOfWork
from ....infrastructure.events.event_bus import EventBusInterface
from ...shared.exceptions import ValidationError
from ..repositories.schedule_repository import ScheduleRepository
from ..value_objects.enums import (
    ActionKind,
    CapacityField,
    Priority,
    SectionKind,
    TicketStatus,
)


@dataclass
class ScheduleContext:
    """Collaborators shared by every service operating on one schedule store."""

    repository: ScheduleRepository
    locks: DayLockRegistry = field(default_factory=DayLockRegistry)
    event_bus: EventBusInterface | None = None
    settings: Settings = field(default_factory=get_settings)

    def unit_of_work(self, day: date) -> DayUnitOfWork:
        return DayUnitOfWork(self.repository, self.locks, day, self.event_bus)


def coerce_section(value: "str | SectionKind") -> SectionKind:
    try:
        return SectionKind.parse(value)
    except ValueError as e:
        raise ValidationError("section", value, "Unknown section", "UNKNOWN_SECTION") from e


def coerce_status(value: "str | TicketStatus") -> TicketStatus:
    try:
        return TicketStatus(value)
    except ValueError as e:
        raise ValidationError("status", value, "Unknown ticket status", "UNKNOWN_STATUS") from e


def coerce_action_kind(value: "str | ActionKind") -> ActionKind:
    try:
        return ActionKind(value)
    except ValueError as e:
        raise ValidationError(
            "action_kind", value, "Unknown action kind", "UNKNOWN_ACTION_KIND"
        ) from e


def coerce_priority(value: "str | Priority") -> Priority:
    try:
        return Priority(value)
    except ValueError as e:
        raise ValidationError("priority", value, "Unknown priority", "UNKNOWN_PRIORITY") from e


def coerce_capacity_field(value: "str | CapacityField") -> CapacityField:
    try:
        return CapacityField.parse(value)
    except ValueError as e:
        raise ValidationError(
            "field", value, "Unknown capacity field", "UNKNOWN_CAPACITY_FIELD"
        ) from e
