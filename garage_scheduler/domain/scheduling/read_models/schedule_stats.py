"""
Schedule read models.

Derived, read-only views over day schedules for the presentation layer:
utilization, per-section counts, active/pending partitions, capacity bands and
multi-day analytics. Everything is recomputed from a repository snapshot on
each call; nothing is cached.
"""

from datetime import date, timedelta

from pydantic import BaseModel, Field

from ....core.config import Settings, get_settings
from ...shared.exceptions import ScheduleNotFoundError, ValidationError
from ..entities.day_schedule import DaySchedule
from ..entities.ticket import Ticket
from ..repositories.schedule_repository import ScheduleRepository
from ..services.queue_admission import QueueAdmissionService
from ..value_objects.enums import CapacityStatus, SectionKind, TicketStatus
from ..value_objects.queue import SectionQueue


class SectionStats(BaseModel):
    """Ticket counts for one section of one day. Pending-status tickets are not counted."""

    section: SectionKind
    total: int = Field(ge=0, default=0)
    scheduled: int = Field(ge=0, default=0)
    in_progress: int = Field(ge=0, default=0)
    completed: int = Field(ge=0, default=0)
    delayed: int = Field(ge=0, default=0)
    high_priority: int = Field(ge=0, default=0)
    workers_assigned: int = Field(ge=0, default=0)
    daily_capacity: int = Field(ge=0, default=0)

    @property
    def load_percentage(self) -> int:
        if self.daily_capacity <= 0:
            return 0
        return round(self.total / self.daily_capacity * 100)

    @property
    def is_over_capacity(self) -> bool:
        return self.total > self.daily_capacity


class DaySummary(BaseModel):
    """Everything the daily timeline view shows for one date."""

    day: date
    available: bool
    hours_open: int
    utilization: int
    capacity_status: CapacityStatus
    current_cars_scheduled: int
    max_cars_capacity: int
    total_day_capacity: int
    status_counts: dict[TicketStatus, int]
    needs_assignment: list[Ticket] = Field(default_factory=list)
    sections: dict[SectionKind, SectionStats]
    queues: dict[SectionKind, SectionQueue]

    @property
    def ticket_count(self) -> int:
        return sum(self.status_counts.values())

    @property
    def over_capacity(self) -> bool:
        """Admitted tickets exceed the summed section capacity."""
        return self.ticket_count > self.total_day_capacity


class DayAnalytics(BaseModel):
    day: date
    defined: bool
    available: bool
    max_cars_capacity: int
    scheduled_cars: int
    utilization: int
    capacity_status: CapacityStatus


class RangeAnalytics(BaseModel):
    start: date
    end: date
    days: list[DayAnalytics]

    @property
    def total_capacity(self) -> int:
        return sum(d.max_cars_capacity for d in self.days if d.available)

    @property
    def total_scheduled(self) -> int:
        return sum(d.scheduled_cars for d in self.days)

    @property
    def average_utilization(self) -> float:
        if not self.days:
            return 0.0
        return round(sum(d.utilization for d in self.days) / len(self.days), 1)

    @property
    def full_days(self) -> list[date]:
        return [d.day for d in self.days if d.capacity_status == CapacityStatus.FULL]


def _percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round(part / whole * 100)


def _counted(tickets: list[Ticket]) -> list[Ticket]:
    return [t for t in tickets if t.status != TicketStatus.PENDING]


class ScheduleAggregator:
    """
    Read-side queries over the schedule repository.

    The *_of methods work on an already loaded DaySchedule; the date-taking
    methods load a snapshot first and raise ScheduleNotFoundError for
    undefined days.
    """

    def __init__(
        self,
        repository: ScheduleRepository,
        queue_service: QueueAdmissionService | None = None,
        settings: Settings | None = None,
    ):
        self._repository = repository
        self._queues = queue_service or QueueAdmissionService()
        self._settings = settings or get_settings()

    def utilization(self, day: date) -> int:
        """Counted tickets as a percentage of total section capacity (0 when capacity is 0)."""
        return self.utilization_of(self._snapshot(day))

    def section_stats(self, day: date, section: SectionKind) -> SectionStats:
        return self.section_stats_of(self._snapshot(day), section)

    def section_queue(self, day: date, section: SectionKind) -> SectionQueue:
        return self._queues.partition(self._snapshot(day).tickets, section)

    def capacity_status(self, day: date) -> CapacityStatus:
        return self.capacity_status_of(self._snapshot(day))

    def day_summary(self, day: date) -> DaySummary:
        return self.summary_of(self._snapshot(day))

    def range_analytics(self, start: date, end: date) -> RangeAnalytics:
        """
        Per-day car counts and utilization for start..end inclusive.

        Undefined days report the default car ceiling with nothing scheduled.
        """
        if end < start:
            raise ValidationError(
                "end", end.isoformat(), "Range end is before range start", "INVALID_RANGE"
            )

        defined = {s.day: s for s in self._repository.get_range(start, end)}
        days = []
        day = start
        while day <= end:
            schedule = defined.get(day)
            if schedule is None:
                days.append(
                    DayAnalytics(
                        day=day,
                        defined=False,
                        available=True,
                        max_cars_capacity=self._settings.DEFAULT_MAX_CARS_CAPACITY,
                        scheduled_cars=0,
                        utilization=0,
                        capacity_status=CapacityStatus.LOW,
                    )
                )
            else:
                days.append(
                    DayAnalytics(
                        day=day,
                        defined=True,
                        available=schedule.available,
                        max_cars_capacity=schedule.max_cars_capacity,
                        scheduled_cars=schedule.current_cars_scheduled,
                        utilization=_percentage(
                            schedule.current_cars_scheduled, schedule.max_cars_capacity
                        ),
                        capacity_status=self.capacity_status_of(schedule),
                    )
                )
            day += timedelta(days=1)
        return RangeAnalytics(start=start, end=end, days=days)

    # Snapshot computations

    @staticmethod
    def utilization_of(schedule: DaySchedule) -> int:
        return _percentage(
            len(_counted(schedule.tickets)), schedule.capacity.total_day_capacity
        )

    @staticmethod
    def section_stats_of(schedule: DaySchedule, section: SectionKind) -> SectionStats:
        tickets = _counted(schedule.tickets_in_section(section))
        capacity = schedule.capacity.section(section)
        return SectionStats(
            section=section,
            total=len(tickets),
            scheduled=sum(1 for t in tickets if t.status == TicketStatus.SCHEDULED),
            in_progress=sum(1 for t in tickets if t.status == TicketStatus.IN_PROGRESS),
            completed=sum(1 for t in tickets if t.status == TicketStatus.COMPLETED),
            delayed=sum(1 for t in tickets if t.status == TicketStatus.DELAYED),
            high_priority=sum(1 for t in tickets if t.is_high_priority),
            workers_assigned=capacity.workers_assigned,
            daily_capacity=capacity.daily_capacity,
        )

    @staticmethod
    def capacity_status_of(schedule: DaySchedule) -> CapacityStatus:
        if schedule.max_cars_capacity <= 0:
            return CapacityStatus.FULL
        return CapacityStatus.from_percentage(
            schedule.current_cars_scheduled / schedule.max_cars_capacity * 100
        )

    def summary_of(self, schedule: DaySchedule) -> DaySummary:
        status_counts = {status: 0 for status in TicketStatus}
        for ticket in schedule.tickets:
            status_counts[ticket.status] += 1

        return DaySummary(
            day=schedule.day,
            available=schedule.available,
            hours_open=schedule.capacity.hours_open,
            utilization=self.utilization_of(schedule),
            capacity_status=self.capacity_status_of(schedule),
            current_cars_scheduled=schedule.current_cars_scheduled,
            max_cars_capacity=schedule.max_cars_capacity,
            total_day_capacity=schedule.capacity.total_day_capacity,
            status_counts=status_counts,
            needs_assignment=[t for t in schedule.tickets if t.status == TicketStatus.PENDING],
            sections={s: self.section_stats_of(schedule, s) for s in SectionKind},
            queues=self._queues.partition_day(schedule),
        )

    def _snapshot(self, day: date) -> DaySchedule:
        schedule = self._repository.get_by_date(day)
        if schedule is None:
            raise ScheduleNotFoundError(day)
        return schedule
