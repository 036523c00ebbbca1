"""
Per-date Unit of Work.

Each DaySchedule is a unit of mutual exclusion: every mutation of a date runs
inside a DayUnitOfWork, which holds that date's lock for the whole
load-mutate-save cycle. Mutations of different dates never share a lock.
"""

import logging
import threading
from datetime import date

from garage_scheduler.domain.scheduling.entities.day_schedule import DaySchedule
from garage_scheduler.domain.scheduling.repositories.schedule_repository import ScheduleRepository
from garage_scheduler.domain.shared.exceptions import ScheduleNotFoundError
from garage_scheduler.infrastructure.events.event_bus import EventBusInterface

logger = logging.getLogger(__name__)


class DayLockRegistry:
    """Hands out one re-entrant lock per date."""

    def __init__(self):
        self._locks: dict[date, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock_for(self, day: date) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(day)
            if lock is None:
                lock = threading.RLock()
                self._locks[day] = lock
            return lock


class DayUnitOfWork:
    """
    Load, mutate and save one DaySchedule atomically.

    The schedule handed out is a working copy. On a clean exit it is saved and
    its domain events are published; if the block raises, the copy is dropped
    and the stored day is untouched.

    Usage:
        with DayUnitOfWork(repository, locks, day, event_bus) as uow:
            schedule = uow.require()
            schedule.admit_ticket(ticket)
    """

    def __init__(
        self,
        repository: ScheduleRepository,
        locks: DayLockRegistry,
        day: date,
        event_bus: EventBusInterface | None = None,
    ):
        self.repository = repository
        self.day = day
        self.event_bus = event_bus
        self.schedule: DaySchedule | None = None
        self._lock = locks.lock_for(day)
        self._active = False

    def __enter__(self) -> "DayUnitOfWork":
        if self._active:
            raise RuntimeError("DayUnitOfWork is already active")
        self._lock.acquire()
        self._active = True
        try:
            self.schedule = self.repository.get_by_date(self.day)
        except Exception:
            self._release()
            raise
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type:
                logger.debug(f"Discarding changes to {self.day}: {exc_val}")
                self.schedule = None
                return
            self.commit()
        finally:
            self._release()

    def require(self) -> DaySchedule:
        """The day's working copy; raises ScheduleNotFoundError if the day is undefined."""
        if self.schedule is None:
            raise ScheduleNotFoundError(self.day)
        return self.schedule

    def register(self, schedule: DaySchedule) -> DaySchedule:
        """Adopt a newly created schedule for this date so it is saved on commit."""
        if schedule.day != self.day:
            raise ValueError(f"Schedule for {schedule.day} registered in unit of work for {self.day}")
        self.schedule = schedule
        return schedule

    def commit(self) -> None:
        if self.schedule is None:
            return
        events = self.schedule.get_domain_events()
        self.schedule.clear_domain_events()
        self.repository.save(self.schedule)
        if self.event_bus is not None:
            for event in events:
                self.event_bus.publish(event)

    def _release(self) -> None:
        if self._active:
            self._active = False
            self._lock.release()
