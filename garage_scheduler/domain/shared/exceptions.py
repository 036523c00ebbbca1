"""
Domain Exceptions

Typed errors raised by the garage scheduling core. Each carries an ErrorType
discriminator and a details mapping so callers (UI, arrivals process) can turn
a rejection into an operator-facing message without parsing strings.
"""

from datetime import date
from enum import Enum
from uuid import UUID


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    CAPACITY = "capacity"
    NOT_FOUND = "not_found"
    REPOSITORY = "repository"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for presentation."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when domain validation rules are violated."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
        error_code: str | None = None,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value
        self.error_code = error_code or "VALIDATION_ERROR"

        full_message = f"Validation failed for field '{field_name}': {message}"
        details = details or {}
        details.update(
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
                "error_code": self.error_code,
            }
        )

        super().__init__(full_message, ErrorType.VALIDATION, details)

    def to_dict(self) -> dict[str, str | None]:
        return {
            "type": self.error_type.value,
            "field": self.field_name,
            "value": str(self.value) if self.value is not None else None,
            "message": self.message,
            "error_code": self.error_code,
        }


class BusinessRuleError(DomainError):
    """Raised when business rules are violated."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.BUSINESS_RULE, details)


# Schedule-related exceptions
class ScheduleError(DomainError):
    """Base class for day schedule errors."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.BUSINESS_RULE,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message, error_type, details)


class ScheduleNotFoundError(ScheduleError):
    """Raised when no DaySchedule exists for a date."""

    def __init__(self, day: date) -> None:
        details = {"date": day.isoformat(), "entity_type": "day_schedule"}
        super().__init__(
            f"No garage schedule defined for {day.isoformat()}",
            ErrorType.NOT_FOUND,
            details,
        )
        self.day = day


class CapacityExceededError(ScheduleError):
    """Raised when a day already holds its maximum number of cars."""

    def __init__(self, day: date, current: int, limit: int) -> None:
        details = {"date": day.isoformat(), "current": current, "limit": limit}
        super().__init__(
            f"Garage schedule for {day.isoformat()} is full: "
            f"{current} of {limit} cars already scheduled",
            ErrorType.CAPACITY,
            details,
        )
        self.day = day
        self.current = current
        self.limit = limit


class DayUnavailableError(ScheduleError):
    """Raised when intake targets a day marked as not operating."""

    def __init__(self, day: date) -> None:
        details = {"date": day.isoformat(), "available": False}
        super().__init__(
            f"Garage is not operating on {day.isoformat()}",
            ErrorType.BUSINESS_RULE,
            details,
        )
        self.day = day


# Ticket-related exceptions
class TicketError(DomainError):
    """Base class for ticket errors."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.BUSINESS_RULE,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message, error_type, details)


class TicketNotFoundError(TicketError):
    """Raised when a ticket id does not resolve to a scheduled car."""

    def __init__(self, ticket_id: UUID) -> None:
        details = {"ticket_id": str(ticket_id), "entity_type": "ticket"}
        super().__init__(f"Ticket not found: {ticket_id}", ErrorType.NOT_FOUND, details)
        self.ticket_id = ticket_id


class InvalidStatusTransitionError(TicketError):
    """Raised when the transition table forbids a status change."""

    def __init__(self, ticket_id: UUID, from_status: str, to_status: str) -> None:
        details = {
            "ticket_id": str(ticket_id),
            "from_status": from_status,
            "to_status": to_status,
        }
        super().__init__(
            f"Ticket {ticket_id} cannot move from {from_status} to {to_status}",
            ErrorType.BUSINESS_RULE,
            details,
        )
        self.ticket_id = ticket_id
        self.from_status = from_status
        self.to_status = to_status


# Repository exceptions
class RepositoryError(DomainError):
    """Base class for persistence boundary failures."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.REPOSITORY, details)


class ActionLogUnavailableError(RepositoryError):
    """Raised when the action log store cannot accept an entry."""

    def __init__(self, reason: str = "") -> None:
        message = "Action log is unavailable"
        if reason:
            message += f": {reason}"
        super().__init__(message, {"reason": reason or None})
        self.reason = reason
