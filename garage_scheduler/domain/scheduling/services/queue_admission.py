"""
Queue admission.

Splits a section's tickets into active and pending by assignment order. The
first ACTIVE_SLOT_LIMIT tickets hold the section's bays; the rest wait with a
1-based pending position. Section daily capacity plays no part here.
"""

from collections.abc import Iterable

from ..entities.day_schedule import DaySchedule
from ..entities.ticket import Ticket
from ..value_objects.enums import SectionKind
from ..value_objects.queue import ACTIVE_SLOT_LIMIT, QueuedTicket, SectionQueue


class QueueAdmissionService:
    """Pure partitioning over a snapshot of tickets; holds no state."""

    def __init__(self, active_slot_limit: int = ACTIVE_SLOT_LIMIT):
        self.active_slot_limit = active_slot_limit

    def partition(self, tickets: Iterable[Ticket], section: SectionKind) -> SectionQueue:
        """
        Partition the tickets of one section.

        Args:
            tickets: A day's tickets in assignment order (other sections are skipped)
            section: Section to partition

        Returns:
            SectionQueue with active and pending entries
        """
        active: list[QueuedTicket] = []
        pending: list[QueuedTicket] = []
        position = 0
        for ticket in tickets:
            if ticket.section != section:
                continue
            position += 1
            if position <= self.active_slot_limit:
                active.append(
                    QueuedTicket(
                        ticket_id=ticket.id, vehicle_code=ticket.vehicle_code, position=position
                    )
                )
            else:
                pending.append(
                    QueuedTicket(
                        ticket_id=ticket.id,
                        vehicle_code=ticket.vehicle_code,
                        position=position,
                        pending_position=position - self.active_slot_limit,
                    )
                )
        return SectionQueue(section=section, active=active, pending=pending)

    def partition_day(self, schedule: DaySchedule) -> dict[SectionKind, SectionQueue]:
        return {section: self.partition(schedule.tickets, section) for section in SectionKind}
