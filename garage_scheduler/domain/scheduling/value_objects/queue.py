"""
Section queue value objects.

A section has at most ACTIVE_SLOT_LIMIT physical working bays. Tickets beyond
that wait in a pending queue. Positions are derived from assignment order on
every computation and never stored.
"""

from uuid import UUID

from pydantic import Field

from ...shared.base import ValueObject
from .enums import SectionKind

# Bays per section, independent of the operator-set daily capacity
ACTIVE_SLOT_LIMIT = 2


class QueuedTicket(ValueObject):
    """A ticket's place in its section queue."""

    ticket_id: UUID
    vehicle_code: str
    position: int = Field(ge=1)  # 1-based position in assignment order
    pending_position: int | None = Field(default=None, ge=1)

    @property
    def is_active(self) -> bool:
        return self.pending_position is None


class SectionQueue(ValueObject):
    """Active/pending split of one section's tickets."""

    section: SectionKind
    active: list[QueuedTicket] = Field(default_factory=list)
    pending: list[QueuedTicket] = Field(default_factory=list)

    @property
    def active_count(self) -> int:
        return len(self.active)

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    @property
    def active_ids(self) -> list[UUID]:
        return [entry.ticket_id for entry in self.active]

    @property
    def pending_ids(self) -> list[UUID]:
        return [entry.ticket_id for entry in self.pending]

    def position_of(self, ticket_id: UUID) -> QueuedTicket | None:
        for entry in self.active + self.pending:
            if entry.ticket_id == ticket_id:
                return entry
        return None
