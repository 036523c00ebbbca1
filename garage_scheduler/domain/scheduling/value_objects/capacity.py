"""
Capacity Value Objects

Per-day staffing and throughput limits for the workshop sections. The
capacity numbers are operator-entered planning figures; nothing ties
total_workers to the per-section worker counts.
"""

from datetime import date, datetime, time, timedelta

from pydantic import Field

from ...shared.base import ValueObject
from .enums import CapacityField, SectionKind

# Staffing the console starts every new day with: (workers, daily capacity)
DEFAULT_SECTION_STAFFING: dict[SectionKind, tuple[int, int]] = {
    SectionKind.ELECTRICAL: (2, 6),
    SectionKind.MECHANICAL: (3, 10),
    SectionKind.BODY_WORK: (1, 3),
    SectionKind.PAINTER: (1, 2),
    SectionKind.DETAILER: (1, 4),
}


class SectionCapacity(ValueObject):
    """Workers and daily car capacity of one section."""

    workers_assigned: int = Field(default=0, ge=0, le=20)
    daily_capacity: int = Field(default=0, ge=0, le=20)

    def with_value(self, field: CapacityField, value: int) -> "SectionCapacity":
        return self.model_copy(update={field.value: value})


def default_sections() -> dict[SectionKind, SectionCapacity]:
    return {
        section: SectionCapacity(workers_assigned=workers, daily_capacity=capacity)
        for section, (workers, capacity) in DEFAULT_SECTION_STAFFING.items()
    }


class CapacityConfig(ValueObject):
    """Staffing numbers for one day."""

    total_workers: int = Field(default=8, ge=1, le=20)
    hours_open: int = Field(default=8, ge=2, le=12)
    # Set once an operator edits hours_open so date-based defaults leave it alone
    hours_open_overridden: bool = False
    sections: dict[SectionKind, SectionCapacity] = Field(default_factory=default_sections)
    special_issues: str = ""

    @property
    def total_day_capacity(self) -> int:
        """Sum of daily capacity across all sections."""
        return sum(section.daily_capacity for section in self.sections.values())

    @property
    def total_section_workers(self) -> int:
        return sum(section.workers_assigned for section in self.sections.values())

    def section(self, section: SectionKind) -> SectionCapacity:
        return self.sections.get(section, SectionCapacity())

    def with_section_value(
        self, section: SectionKind, field: CapacityField, value: int
    ) -> "CapacityConfig":
        sections = dict(self.sections)
        sections[section] = self.section(section).with_value(field, value)
        return self.model_copy(update={"sections": sections})


def is_short_day(day: date, short_day_weekday: int = 5) -> bool:
    return day.weekday() == short_day_weekday


def default_hours_for(
    day: date,
    short_day_weekday: int = 5,
    weekday_hours: int = 8,
    short_day_hours: int = 6,
) -> int:
    """Default open hours: 6 on the weekly short day (8AM-2PM), 8 otherwise (8AM-4PM)."""
    return short_day_hours if is_short_day(day, short_day_weekday) else weekday_hours


def end_of_day(start: time, hours_open: int) -> time:
    """Closing time for a day that opens at start and stays open hours_open hours."""
    closing = datetime.combine(date.min, start) + timedelta(hours=hours_open)
    if closing.date() != date.min:
        return time(23, 59)
    return closing.time()
