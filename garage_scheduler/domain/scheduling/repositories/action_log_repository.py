"""
Action Log Repository Interface

Append-only storage for worker actions.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from ..entities.action_log import ActionLogEntry


class ActionLogRepository(ABC):
    """Abstract append-only store for ActionLogEntry records."""

    @abstractmethod
    def append(self, entry: ActionLogEntry) -> ActionLogEntry:
        """
        Persist an entry.

        Returns:
            The stored entry, carrying the sequence number assigned by the store

        Raises:
            ActionLogUnavailableError: If the store cannot accept the entry
        """
        pass

    @abstractmethod
    def find_by_ticket(self, ticket_ref: UUID) -> list[ActionLogEntry]:
        """Entries for a ticket ordered by (timestamp, sequence)."""
        pass

    @abstractmethod
    def find_by_vehicle(self, vehicle_code: str) -> list[ActionLogEntry]:
        """Entries for a vehicle across all its tickets, oldest first."""
        pass
