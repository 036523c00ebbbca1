"""
Wiring for the garage scheduler.

Builds the repositories, event bus and services that share one schedule store
and one set of per-date locks. Use build_in_memory for tests and embedding,
build_json_file for a workstation deployment rooted at settings.DATA_DIR.
"""

from dataclasses import dataclass

from garage_scheduler.core.config import Settings, get_settings
from garage_scheduler.core.unit_of_work import DayLockRegistry
from garage_scheduler.domain.scheduling.read_models.schedule_stats import ScheduleAggregator
from garage_scheduler.domain.scheduling.repositories import (
    ActionLogRepository,
    ScheduleRepository,
)
from garage_scheduler.domain.scheduling.services import (
    ActionLogService,
    CapacityService,
    IntakeGate,
    QueueAdmissionService,
    ScheduleContext,
    TicketService,
    WorkflowService,
)
from garage_scheduler.infrastructure.arrivals.waiting_list import WaitingList
from garage_scheduler.infrastructure.events import InMemoryEventBus, ScheduleChangeHistory

from .repositories import (
    InMemoryActionLogRepository,
    InMemoryScheduleRepository,
    JsonFileActionLogRepository,
    JsonFileScheduleRepository,
)


@dataclass
class GarageScheduler:
    """All services of one garage, sharing a store and its locks."""

    context: ScheduleContext
    event_bus: InMemoryEventBus
    history: ScheduleChangeHistory
    capacity: CapacityService
    tickets: TicketService
    queues: QueueAdmissionService
    action_log: ActionLogService
    workflow: WorkflowService
    intake: IntakeGate
    aggregator: ScheduleAggregator
    waiting_list: WaitingList


def build_scheduler(
    schedule_repository: ScheduleRepository,
    action_log_repository: ActionLogRepository,
    settings: Settings | None = None,
) -> GarageScheduler:
    settings = settings or get_settings()
    event_bus = InMemoryEventBus()
    history = ScheduleChangeHistory()
    history.register(event_bus)

    context = ScheduleContext(
        repository=schedule_repository,
        locks=DayLockRegistry(),
        event_bus=event_bus,
        settings=settings,
    )
    queues = QueueAdmissionService()
    tickets = TicketService(context)
    action_log = ActionLogService(context, action_log_repository)
    intake = IntakeGate(context)

    return GarageScheduler(
        context=context,
        event_bus=event_bus,
        history=history,
        capacity=CapacityService(context),
        tickets=tickets,
        queues=queues,
        action_log=action_log,
        workflow=WorkflowService(tickets, action_log),
        intake=intake,
        aggregator=ScheduleAggregator(schedule_repository, queues, settings),
        waiting_list=WaitingList(intake),
    )


def build_in_memory(settings: Settings | None = None) -> GarageScheduler:
    return build_scheduler(InMemoryScheduleRepository(), InMemoryActionLogRepository(), settings)


def build_json_file(settings: Settings | None = None) -> GarageScheduler:
    settings = settings or get_settings()
    return build_scheduler(
        JsonFileScheduleRepository(settings.DATA_DIR),
        JsonFileActionLogRepository(settings.ACTION_LOG_FILE),
        settings,
    )
