"""Action log entry: one worker event recorded against a ticket."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from ...shared.base import utcnow
from ..value_objects.enums import ActionKind


class ActionLogEntry(BaseModel):
    """
    Immutable worker action.

    Entries order by timestamp; sequence is assigned by the log on append and
    breaks ties between entries written within the same clock tick.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    ticket_ref: UUID
    vehicle_code: str
    actor_id: str
    action_kind: ActionKind
    timestamp: datetime = Field(default_factory=utcnow)
    notes: str | None = None
    sequence: int = Field(default=0, ge=0)

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return (self.timestamp, self.sequence)
