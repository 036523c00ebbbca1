"""
Scheduling Domain Services

Operations over day schedules: capacity configuration, ticket lifecycle,
queue admission, worker actions and the intake gate.
"""

from .action_log_service import ActionLogService
from .base import ScheduleContext
from .capacity_service import CapacityService, CapacityTemplate
from .intake_gate import IntakeGate, IntakeRequest, IntakeResult
from .queue_admission import QueueAdmissionService
from .ticket_service import TicketService
from .workflow_service import WorkflowResult, WorkflowService

__all__ = [
    "ActionLogService",
    "CapacityService",
    "CapacityTemplate",
    "IntakeGate",
    "IntakeRequest",
    "IntakeResult",
    "QueueAdmissionService",
    "ScheduleContext",
    "TicketService",
    "WorkflowResult",
    "WorkflowService",
]
