"""Domain enums for the garage schedule."""

from enum import Enum


class SectionKind(str, Enum):
    """Workshop discipline a ticket is assigned to."""

    ELECTRICAL = "electrical"
    MECHANICAL = "mechanical"
    BODY_WORK = "body_work"
    PAINTER = "painter"
    DETAILER = "detailer"

    @classmethod
    def parse(cls, value: "str | SectionKind") -> "SectionKind":
        """Accept the console's legacy 'mechanic' spelling as well."""
        if isinstance(value, cls):
            return value
        if value == "mechanic":
            return cls.MECHANICAL
        return cls(value)

    @property
    def display_name(self) -> str:
        return {
            SectionKind.ELECTRICAL: "Electrical Work",
            SectionKind.MECHANICAL: "Mechanical Repair",
            SectionKind.BODY_WORK: "Body Work",
            SectionKind.PAINTER: "Paint Job",
            SectionKind.DETAILER: "Detailing",
        }[self]


class Priority(str, Enum):
    """Ticket priority."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key, high first."""
        return {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}[self]


class TicketStatus(str, Enum):
    """Scheduled car status enumeration."""

    PENDING = "pending"  # Admitted, waiting on a free slot or assignment
    SCHEDULED = "scheduled"  # Planned for the day
    IN_PROGRESS = "in_progress"  # Currently being worked
    COMPLETED = "completed"  # Work finished (terminal by convention only)
    DELAYED = "delayed"  # Paused, waiting on parts, or otherwise held

    @property
    def is_active(self) -> bool:
        """Check if status represents work on the floor."""
        return self in {TicketStatus.SCHEDULED, TicketStatus.IN_PROGRESS}

    @property
    def is_terminal(self) -> bool:
        return self == TicketStatus.COMPLETED

    def can_transition_to(self, target_status: "TicketStatus") -> bool:
        """Check if ticket can transition from current status to target status."""
        return target_status in TICKET_STATUS_TRANSITIONS.get(self, frozenset())


# Operators may need to revert any state, so every edge is open, including
# self-transitions. Tighten by removing targets from these sets.
TICKET_STATUS_TRANSITIONS: dict[TicketStatus, frozenset[TicketStatus]] = {
    status: frozenset(TicketStatus) for status in TicketStatus
}


class ActionKind(str, Enum):
    """Worker action recorded against a ticket."""

    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    TEST_DRIVE = "test_drive"
    WAITING_PARTS = "waiting_parts"
    COMPLETE = "complete"

    @property
    def resulting_status(self) -> TicketStatus:
        """Status a ticket moves to when a worker records this action."""
        return ACTION_STATUS_EFFECTS[self]


ACTION_STATUS_EFFECTS: dict[ActionKind, TicketStatus] = {
    ActionKind.START: TicketStatus.IN_PROGRESS,
    ActionKind.RESUME: TicketStatus.IN_PROGRESS,
    ActionKind.TEST_DRIVE: TicketStatus.IN_PROGRESS,
    ActionKind.PAUSE: TicketStatus.DELAYED,
    ActionKind.WAITING_PARTS: TicketStatus.DELAYED,
    ActionKind.COMPLETE: TicketStatus.COMPLETED,
}


class CapacityField(str, Enum):
    """Editable per-section capacity numbers."""

    WORKERS_ASSIGNED = "workers_assigned"
    DAILY_CAPACITY = "daily_capacity"

    @classmethod
    def parse(cls, value: "str | CapacityField") -> "CapacityField":
        if isinstance(value, cls):
            return value
        aliases = {"workers": cls.WORKERS_ASSIGNED, "capacity": cls.DAILY_CAPACITY}
        return aliases.get(value) or cls(value)


class CapacityStatus(str, Enum):
    """How full a day is relative to its car ceiling."""

    LOW = "low"
    MODERATE = "moderate"
    NEAR_FULL = "near_full"
    FULL = "full"

    @classmethod
    def from_percentage(cls, percentage: float) -> "CapacityStatus":
        if percentage >= 100:
            return cls.FULL
        if percentage >= 80:
            return cls.NEAR_FULL
        if percentage >= 50:
            return cls.MODERATE
        return cls.LOW
