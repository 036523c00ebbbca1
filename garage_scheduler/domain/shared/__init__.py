"""Base classes, errors and validators shared across the domain."""

from .base import AggregateRoot, DomainEvent, Entity, ValueObject
from .exceptions import (
    ActionLogUnavailableError,
    BusinessRuleError,
    CapacityExceededError,
    DayUnavailableError,
    DomainError,
    ErrorType,
    InvalidStatusTransitionError,
    RepositoryError,
    ScheduleError,
    ScheduleNotFoundError,
    TicketError,
    TicketNotFoundError,
    ValidationError,
)

__all__ = [
    "ActionLogUnavailableError",
    "AggregateRoot",
    "BusinessRuleError",
    "CapacityExceededError",
    "DayUnavailableError",
    "DomainError",
    "DomainEvent",
    "Entity",
    "ErrorType",
    "InvalidStatusTransitionError",
    "RepositoryError",
    "ScheduleError",
    "ScheduleNotFoundError",
    "TicketError",
    "TicketNotFoundError",
    "ValidationError",
    "ValueObject",
]
