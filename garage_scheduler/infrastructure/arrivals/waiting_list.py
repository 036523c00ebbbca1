"""
Arrivals waiting list.

Cars that have arrived and wait to be scheduled. The list is ordered high
priority first, then longest waiting. A car leaves the list only when the
intake gate accepts it onto a day.
"""

import logging
import threading
from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from garage_scheduler.domain.scheduling.entities.ticket import hours_from_parts
from garage_scheduler.domain.scheduling.services.intake_gate import (
    IntakeGate,
    IntakeRequest,
    IntakeResult,
)
from garage_scheduler.domain.scheduling.value_objects.enums import Priority, SectionKind
from garage_scheduler.domain.shared.exceptions import ValidationError
from garage_scheduler.domain.shared.validation import DataSanitizer

logger = logging.getLogger(__name__)


class WaitingCar(BaseModel):
    """A car in the arrivals pool."""

    id: UUID = Field(default_factory=uuid4)
    vehicle_code: str
    vehicle_model: str = ""
    customer_name: str = ""
    issue: str = ""
    section: SectionKind = SectionKind.MECHANICAL
    priority: Priority = Priority.MEDIUM
    priority_reason: str | None = None
    estimated_duration: Decimal = Decimal("2")
    waiting_since: date = Field(default_factory=date.today)
    location: str = ""
    last_reminder: date | None = None

    @field_validator("section", mode="before")
    @classmethod
    def parse_section(cls, v):
        if isinstance(v, str):
            return SectionKind.parse(v)
        return v

    @field_validator("vehicle_code", mode="before")
    @classmethod
    def normalise_code(cls, v):
        return DataSanitizer.sanitize_vehicle_code(v)

    @classmethod
    def from_form(
        cls, vehicle_code: str, hours: int | float, minutes: int | float = 0, **fields
    ) -> "WaitingCar":
        """Build from the arrivals form, which takes the estimate as hours plus minutes."""
        return cls(
            vehicle_code=vehicle_code,
            estimated_duration=hours_from_parts(hours, minutes),
            **fields,
        )

    @property
    def sort_key(self) -> tuple[int, date]:
        return (self.priority.rank, self.waiting_since)


class WaitingList:
    """
    Arrivals pool in front of the intake gate.
    """

    def __init__(self, intake_gate: IntakeGate):
        self._gate = intake_gate
        self._cars: dict[UUID, WaitingCar] = {}
        self._lock = threading.Lock()

    def add(self, car: WaitingCar) -> WaitingCar:
        """Add a car; if the same vehicle is already waiting, the existing entry is returned."""
        with self._lock:
            existing = self._find_by_code(car.vehicle_code)
            if existing is not None:
                logger.debug(f"{car.vehicle_code} is already waiting as {existing.id}")
                return existing
            self._cars[car.id] = car
        logger.info(f"{car.vehicle_code} added to the waiting list ({car.priority.value})")
        return car

    def remove(self, car_id: UUID) -> WaitingCar | None:
        with self._lock:
            return self._cars.pop(car_id, None)

    def get(self, car_id: UUID) -> WaitingCar | None:
        with self._lock:
            return self._cars.get(car_id)

    def waiting(self) -> list[WaitingCar]:
        """Cars in scheduling order."""
        with self._lock:
            return sorted(self._cars.values(), key=lambda car: car.sort_key)

    def __len__(self) -> int:
        return len(self._cars)

    def schedule_vehicle(
        self,
        car_id: UUID,
        target_date: date,
        section: SectionKind | str | None = None,
        priority_reason: str | None = None,
        notes: str = "",
    ) -> IntakeResult:
        """
        Offer a waiting car to the intake gate for a date.

        The car is removed from the list only when the gate accepts it.

        Raises:
            ValidationError: If car_id is not on the waiting list
        """
        car = self.get(car_id)
        if car is None:
            raise ValidationError(
                "car_id", str(car_id), "Car is not on the waiting list", "NOT_WAITING"
            )

        request = IntakeRequest(
            vehicle_code=car.vehicle_code,
            vehicle_model=car.vehicle_model,
            customer_name=car.customer_name,
            target_date=target_date,
            estimated_duration=car.estimated_duration,
            section=section or car.section,
            priority=car.priority,
            priority_reason=priority_reason or car.priority_reason,
            notes=notes or car.issue,
        )
        result = self._gate.admit(request)
        if result.accepted:
            self.remove(car_id)
            logger.info(f"{car.vehicle_code} moved from the waiting list to {target_date}")
        return result

    def mark_reminded(self, car_id: UUID, on: date | None = None) -> WaitingCar | None:
        with self._lock:
            car = self._cars.get(car_id)
            if car is None:
                return None
            updated = car.model_copy(update={"last_reminder": on or date.today()})
            self._cars[car_id] = updated
            return updated

    def high_priority_needing_reminder(self, today: date | None = None) -> list[WaitingCar]:
        """High priority cars not yet reminded about today."""
        today = today or date.today()
        return [
            car
            for car in self.waiting()
            if car.priority == Priority.HIGH and car.last_reminder != today
        ]

    def _find_by_code(self, vehicle_code: str) -> WaitingCar | None:
        for car in self._cars.values():
            if car.vehicle_code == vehicle_code:
                return car
        return None
