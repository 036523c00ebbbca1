"""
Capacity Service

Defines garage days and edits their staffing and capacity numbers. Every edit
runs inside the day's unit of work.
"""

import logging
from datetime import date, time, timedelta

from pydantic import BaseModel, Field

from ...shared.exceptions import BusinessRuleError, ScheduleNotFoundError, ValidationError
from ..entities.day_schedule import DaySchedule
from ..value_objects.capacity import SectionCapacity
from ..value_objects.enums import CapacityField, SectionKind
from .base import ScheduleContext, coerce_capacity_field, coerce_section

logger = logging.getLogger(__name__)


class CapacityTemplate(BaseModel):
    """Capacity settings applied to every day of a range. Unset fields are left alone."""

    max_cars_capacity: int | None = Field(default=None, ge=0)
    total_workers: int | None = Field(default=None, ge=1, le=20)
    hours_open: int | None = Field(default=None, ge=2, le=12)
    sections: dict[SectionKind, SectionCapacity] | None = None
    available: bool | None = None
    special_issues: str | None = None


class CapacityService:
    """
    Service for day definition and capacity configuration.
    """

    def __init__(self, context: ScheduleContext):
        self._context = context
        self._settings = context.settings

    def define_day(
        self,
        day: date,
        start_time: time | None = None,
        end_time: time | None = None,
        max_cars_capacity: int | None = None,
        available: bool = True,
        notes: str = "",
    ) -> DaySchedule:
        """
        Create the schedule for a date with the default staffing.

        Raises:
            BusinessRuleError: If the date already has a schedule
        """
        with self._context.unit_of_work(day) as uow:
            if uow.schedule is not None:
                raise BusinessRuleError(
                    f"Garage schedule for {day.isoformat()} is already defined",
                    {"date": day.isoformat()},
                )
            schedule = uow.register(
                self._new_day(day, start_time, end_time, max_cars_capacity, available, notes)
            )

        logger.info(
            f"Defined garage day {day}: {schedule.capacity.hours_open}h open, "
            f"max {schedule.max_cars_capacity} cars"
        )
        return schedule

    def get_day(self, day: date) -> DaySchedule:
        schedule = self._context.repository.get_by_date(day)
        if schedule is None:
            raise ScheduleNotFoundError(day)
        return schedule

    def set_hours_open(self, day: date, hours: int) -> int:
        """
        Manually set hours open for a day.

        Values outside 2-12 (or not whole numbers) are ignored. Returns the
        hours open in effect after the call.
        """
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            schedule.set_hours_open(hours)
            return schedule.capacity.hours_open

    def apply_default_hours(self, day: date) -> int:
        """Recompute hours open from the date unless an operator has overridden them."""
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            schedule.apply_default_hours(
                self._settings.SHORT_DAY_WEEKDAY,
                self._settings.WEEKDAY_HOURS_OPEN,
                self._settings.SHORT_DAY_HOURS_OPEN,
            )
            return schedule.capacity.hours_open

    def reset_hours_to_default(self, day: date) -> int:
        """Drop a manual hours override and go back to the date-based default."""
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            schedule.clear_hours_override()
            schedule.apply_default_hours(
                self._settings.SHORT_DAY_WEEKDAY,
                self._settings.WEEKDAY_HOURS_OPEN,
                self._settings.SHORT_DAY_HOURS_OPEN,
            )
            return schedule.capacity.hours_open

    def set_section_capacity(
        self,
        day: date,
        section: str | SectionKind,
        field: str | CapacityField,
        value: int,
    ) -> SectionCapacity:
        """
        Update workers_assigned or daily_capacity of one section.

        Values are clamped to 0..20.

        Raises:
            ValidationError: Unknown section or field, or a non-numeric value
        """
        section = coerce_section(section)
        field = coerce_capacity_field(field)
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            schedule.set_section_value(section, field, value)
            return schedule.capacity.section(section)

    def total_day_capacity(self, day: date) -> int:
        return self.get_day(day).capacity.total_day_capacity

    def set_max_cars_capacity(self, day: date, max_cars: int) -> DaySchedule:
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            schedule.set_max_cars_capacity(max_cars)
        logger.info(f"Max cars for {day} set to {max_cars}")
        return schedule

    def set_total_workers(self, day: date, total_workers: int) -> int:
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            schedule.set_total_workers(total_workers)
            return schedule.capacity.total_workers

    def set_special_issues(self, day: date, text: str) -> DaySchedule:
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            schedule.set_special_issues(text)
        return schedule

    def mark_unavailable(self, day: date) -> DaySchedule:
        return self._set_available(day, False)

    def mark_available(self, day: date) -> DaySchedule:
        return self._set_available(day, True)

    def apply_template(self, start: date, end: date, template: CapacityTemplate) -> list[DaySchedule]:
        """
        Apply capacity settings to every day from start to end inclusive.

        Days without a schedule are created first. Each day is updated in its
        own unit of work.
        """
        if end < start:
            raise ValidationError(
                "end", end.isoformat(), "Range end is before range start", "INVALID_RANGE"
            )

        updated = []
        day = start
        while day <= end:
            with self._context.unit_of_work(day) as uow:
                schedule = uow.schedule or uow.register(self._new_day(day))
                self._apply_template_to(schedule, template)
            updated.append(schedule)
            day += timedelta(days=1)

        logger.info(f"Applied capacity template to {len(updated)} days ({start} to {end})")
        return updated

    def _set_available(self, day: date, available: bool) -> DaySchedule:
        with self._context.unit_of_work(day) as uow:
            schedule = uow.require()
            schedule.set_available(available)
        logger.info(f"Garage day {day} marked {'available' if available else 'unavailable'}")
        return schedule

    def _new_day(
        self,
        day: date,
        start_time: time | None = None,
        end_time: time | None = None,
        max_cars_capacity: int | None = None,
        available: bool = True,
        notes: str = "",
    ) -> DaySchedule:
        settings = self._settings
        return DaySchedule.define(
            day,
            start_time=start_time or settings.DAY_START,
            end_time=end_time,
            max_cars_capacity=(
                settings.DEFAULT_MAX_CARS_CAPACITY if max_cars_capacity is None else max_cars_capacity
            ),
            available=available,
            notes=notes,
            total_workers=settings.DEFAULT_TOTAL_WORKERS,
            short_day_weekday=settings.SHORT_DAY_WEEKDAY,
            weekday_hours=settings.WEEKDAY_HOURS_OPEN,
            short_day_hours=settings.SHORT_DAY_HOURS_OPEN,
        )

    @staticmethod
    def _apply_template_to(schedule: DaySchedule, template: CapacityTemplate) -> None:
        if template.max_cars_capacity is not None:
            schedule.set_max_cars_capacity(template.max_cars_capacity)
        if template.total_workers is not None:
            schedule.set_total_workers(template.total_workers)
        if template.hours_open is not None:
            schedule.set_hours_open(template.hours_open)
        if template.sections:
            for section, capacity in template.sections.items():
                schedule.set_section_value(
                    section, CapacityField.WORKERS_ASSIGNED, capacity.workers_assigned
                )
                schedule.set_section_value(
                    section, CapacityField.DAILY_CAPACITY, capacity.daily_capacity
                )
        if template.available is not None:
            schedule.set_available(template.available)
        if template.special_issues is not None:
            schedule.set_special_issues(template.special_issues)
