"""
Action Log Service

Records worker actions against tickets and serves the per-ticket timeline.
The log is advisory: it never changes ticket state.
"""

import logging
from uuid import UUID

from ...shared.exceptions import TicketNotFoundError
from ...shared.validation import BusinessRuleValidators, DataSanitizer
from ..entities.action_log import ActionLogEntry
from ..repositories.action_log_repository import ActionLogRepository
from ..value_objects.enums import ActionKind
from .base import ScheduleContext, coerce_action_kind

logger = logging.getLogger(__name__)


def clean_action_input(actor_id: str, notes: str | None) -> tuple[str, str | None]:
    """
    Validate and sanitize the actor and notes of a worker action.

    Blank notes become None.

    Raises:
        ValidationError: Missing actor, or actor or notes too long
    """
    BusinessRuleValidators.validate_required_field("actor_id", actor_id)
    actor_id = DataSanitizer.sanitize_string(actor_id, max_length=100)
    if notes is not None:
        notes = DataSanitizer.sanitize_string(notes, max_length=1000) or None
    return actor_id, notes


class ActionLogService:
    """
    Service for appending to and reading the worker action log.
    """

    def __init__(self, context: ScheduleContext, log_repository: ActionLogRepository):
        self._context = context
        self._log_repository = log_repository

    def append(
        self,
        ticket_ref: UUID,
        action_kind: str | ActionKind,
        actor_id: str,
        notes: str | None = None,
    ) -> ActionLogEntry:
        """
        Append a worker action for an existing ticket.

        Args:
            ticket_ref: Ticket id
            action_kind: start, pause, resume, test_drive, waiting_parts or complete
            actor_id: Worker recording the action
            notes: Optional free text

        Returns:
            The stored, immutable entry

        Raises:
            ValidationError: Unknown action kind or missing actor
            TicketNotFoundError: If ticket_ref does not resolve to a ticket
            ActionLogUnavailableError: If the log store rejects the write
        """
        action_kind = coerce_action_kind(action_kind)
        actor_id, notes = clean_action_input(actor_id, notes)

        day = self._context.repository.find_date_for_ticket(ticket_ref)
        if day is None:
            raise TicketNotFoundError(ticket_ref)

        with self._context.locks.lock_for(day):
            schedule = self._context.repository.get_by_date(day)
            ticket = schedule.find_ticket(ticket_ref) if schedule else None
            if ticket is None:
                raise TicketNotFoundError(ticket_ref)

            entry = self._log_repository.append(
                ActionLogEntry(
                    ticket_ref=ticket_ref,
                    vehicle_code=ticket.vehicle_code,
                    actor_id=actor_id,
                    action_kind=action_kind,
                    notes=notes,
                )
            )

        logger.debug(f"Logged {action_kind.value} by {actor_id} on ticket {ticket_ref}")
        return entry

    def recent_for(self, ticket_ref: UUID, n: int | None = None) -> list[ActionLogEntry]:
        """Last n entries for a ticket, oldest first. n defaults to RECENT_ACTIONS_LIMIT."""
        if n is None:
            n = self._context.settings.RECENT_ACTIONS_LIMIT
        if n <= 0:
            return []
        return self._log_repository.find_by_ticket(ticket_ref)[-n:]

    def history_for(self, ticket_ref: UUID) -> list[ActionLogEntry]:
        return self._log_repository.find_by_ticket(ticket_ref)

    def history_for_vehicle(self, vehicle_code: str) -> list[ActionLogEntry]:
        vehicle_code = DataSanitizer.sanitize_vehicle_code(vehicle_code)
        return self._log_repository.find_by_vehicle(vehicle_code)
