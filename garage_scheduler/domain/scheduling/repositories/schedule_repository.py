"""
Schedule Repository Interface

Defines the contract for day schedule persistence. Implementations hand out
copies, so a caller mutating a loaded DaySchedule never affects the stored one
until it is saved.
"""

from abc import ABC, abstractmethod
from datetime import date
from uuid import UUID

from ..entities.day_schedule import DaySchedule


class ScheduleRepository(ABC):
    """
    Abstract repository interface for DaySchedule aggregates, keyed by date.
    """

    @abstractmethod
    def get_by_date(self, day: date) -> DaySchedule | None:
        """
        Retrieve the schedule for a date.

        Args:
            day: Calendar date

        Returns:
            A copy of the stored DaySchedule, or None if the day is not defined

        Raises:
            RepositoryError: If retrieval operation fails
        """
        pass

    @abstractmethod
    def save(self, schedule: DaySchedule) -> DaySchedule:
        """
        Insert or replace the schedule for schedule.day.

        Raises:
            RepositoryError: If save operation fails
        """
        pass

    @abstractmethod
    def exists(self, day: date) -> bool:
        pass

    @abstractmethod
    def find_date_for_ticket(self, ticket_id: UUID) -> date | None:
        """
        Locate the day that owns a ticket.

        Returns:
            The owning date or None if no stored day holds the ticket
        """
        pass

    @abstractmethod
    def list_dates(self) -> list[date]:
        """All defined dates, ascending."""
        pass

    def get_range(self, start: date, end: date) -> list[DaySchedule]:
        """Defined schedules with start <= day <= end, ascending by date."""
        schedules = []
        for day in self.list_dates():
            if start <= day <= end:
                schedule = self.get_by_date(day)
                if schedule is not None:
                    schedules.append(schedule)
        return schedules
