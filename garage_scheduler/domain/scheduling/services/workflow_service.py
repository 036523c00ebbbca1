"""
Workflow Service

Worker actions from the shop floor. An action moves the ticket to the status
it implies and is then written to the action log. The status change is
authoritative; a failed log write is reported and otherwise ignored.
"""

import logging
from uuid import UUID

from pydantic import BaseModel

from ...shared.exceptions import RepositoryError
from ..entities.action_log import ActionLogEntry
from ..entities.ticket import Ticket
from ..value_objects.enums import ActionKind
from .action_log_service import ActionLogService, clean_action_input
from .base import coerce_action_kind
from .ticket_service import TicketService

logger = logging.getLogger(__name__)


class WorkflowResult(BaseModel):
    ticket: Ticket
    entry: ActionLogEntry | None = None

    @property
    def logged(self) -> bool:
        return self.entry is not None


class WorkflowService:
    def __init__(self, ticket_service: TicketService, action_log: ActionLogService):
        self._tickets = ticket_service
        self._action_log = action_log

    def perform_action(
        self,
        ticket_id: UUID,
        action_kind: str | ActionKind,
        actor_id: str,
        notes: str | None = None,
    ) -> WorkflowResult:
        """
        Apply a worker action to a ticket.

        Raises:
            ValidationError: Unknown action kind, missing actor, or actor or
                notes too long (nothing changes)
            TicketNotFoundError: If the ticket does not exist
        """
        action_kind = coerce_action_kind(action_kind)
        actor_id, notes = clean_action_input(actor_id, notes)

        ticket = self._tickets.update_status(
            ticket_id, action_kind.resulting_status, changed_by=actor_id
        )

        entry = None
        try:
            entry = self._action_log.append(ticket_id, action_kind, actor_id, notes)
        except RepositoryError as e:
            logger.error(
                f"Could not log {action_kind.value} for ticket {ticket_id}; "
                f"status change kept: {e}"
            )

        return WorkflowResult(ticket=ticket, entry=entry)
