"""
Schedule change history.

Subscribes to the scheduling domain events and keeps a from -> to record of
every ticket and capacity change, newest first on read.
"""

import logging
import threading
from datetime import date, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from garage_scheduler.domain.scheduling.events.domain_events import (
    CapacityUpdated,
    TicketAdmitted,
    TicketDetailsChanged,
    TicketRemoved,
    TicketStatusChanged,
)
from garage_scheduler.domain.shared.base import DomainEvent

from .event_bus import EventBusInterface

logger = logging.getLogger(__name__)


class ChangeType(str, Enum):
    ADMISSION = "admission"
    STATUS_CHANGE = "status_change"
    COMPLETION = "completion"
    ASSIGNMENT = "assignment"
    PRIORITY_CHANGE = "priority_change"
    REMOVAL = "removal"
    CAPACITY_CHANGE = "capacity_change"


class ScheduleChange(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    day: date
    change_type: ChangeType
    ticket_id: UUID | None = None
    vehicle_code: str | None = None
    field_name: str
    from_value: str | None = None
    to_value: str | None = None
    changed_by: str | None = None
    timestamp: datetime

    @property
    def description(self) -> str:
        label = self.change_type.value.replace("_", " ")
        return f"{label}: {self.from_value or '-'} -> {self.to_value or '-'}"


class ScheduleChangeHistory:
    """In-memory change history fed by the event bus."""

    def __init__(self, max_records: int = 5000):
        self._records: list[ScheduleChange] = []
        self._max_records = max_records
        self._lock = threading.Lock()

    def register(self, event_bus: EventBusInterface) -> None:
        for event_type in (
            TicketAdmitted,
            TicketStatusChanged,
            TicketDetailsChanged,
            TicketRemoved,
            CapacityUpdated,
        ):
            event_bus.subscribe(event_type, self.handle)

    def handle(self, event: DomainEvent) -> None:
        record = self._to_change(event)
        if record is None:
            return
        with self._lock:
            self._records.append(record)
            if len(self._records) > self._max_records:
                self._records = self._records[-self._max_records :]
        logger.debug(f"Recorded {record.change_type.value} for {record.day}")

    def for_ticket(self, ticket_id: UUID) -> list[ScheduleChange]:
        with self._lock:
            return [r for r in reversed(self._records) if r.ticket_id == ticket_id]

    def for_day(self, day: date) -> list[ScheduleChange]:
        with self._lock:
            return [r for r in reversed(self._records) if r.day == day]

    def recent(self, limit: int = 10) -> list[ScheduleChange]:
        with self._lock:
            return list(reversed(self._records[-limit:])) if limit > 0 else []

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    @staticmethod
    def _to_change(event: DomainEvent) -> ScheduleChange | None:
        if not hasattr(event, "day"):
            return None
        common = {"day": event.day, "timestamp": event.occurred_at}
        if isinstance(event, TicketStatusChanged):
            change_type = (
                ChangeType.COMPLETION
                if event.new_status == "completed"
                else ChangeType.STATUS_CHANGE
            )
            return ScheduleChange(
                change_type=change_type,
                ticket_id=event.ticket_id,
                vehicle_code=event.vehicle_code,
                field_name="status",
                from_value=event.old_status,
                to_value=event.new_status,
                changed_by=event.changed_by,
                **common,
            )
        if isinstance(event, TicketDetailsChanged):
            change_type = (
                ChangeType.PRIORITY_CHANGE
                if event.field_name == "priority"
                else ChangeType.ASSIGNMENT
            )
            return ScheduleChange(
                change_type=change_type,
                ticket_id=event.ticket_id,
                vehicle_code=event.vehicle_code,
                field_name=event.field_name,
                from_value=event.old_value,
                to_value=event.new_value,
                changed_by=event.changed_by,
                **common,
            )
        if isinstance(event, TicketAdmitted):
            return ScheduleChange(
                change_type=ChangeType.ADMISSION,
                ticket_id=event.ticket_id,
                vehicle_code=event.vehicle_code,
                field_name="status",
                to_value=event.status,
                **common,
            )
        if isinstance(event, TicketRemoved):
            return ScheduleChange(
                change_type=ChangeType.REMOVAL,
                ticket_id=event.ticket_id,
                vehicle_code=event.vehicle_code,
                field_name="status",
                from_value=event.status,
                **common,
            )
        if isinstance(event, CapacityUpdated):
            field_name = (
                f"{event.section}.{event.field_name}" if event.section else event.field_name
            )
            return ScheduleChange(
                change_type=ChangeType.CAPACITY_CHANGE,
                field_name=field_name,
                from_value=event.old_value,
                to_value=event.new_value,
                **common,
            )
        return None
