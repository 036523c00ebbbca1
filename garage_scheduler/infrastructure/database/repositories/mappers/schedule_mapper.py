"""
Mappers between scheduling aggregates and JSON-shaped persistence records.

Schedule records are keyed by ISO date; action log records by entry id and
carry the owning ticket id. Both are plain dicts ready for json.dumps.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from garage_scheduler.domain.scheduling.entities.action_log import ActionLogEntry
from garage_scheduler.domain.scheduling.entities.day_schedule import DaySchedule
from garage_scheduler.domain.scheduling.value_objects.enums import SectionKind
from garage_scheduler.domain.shared.exceptions import RepositoryError

RECORD_VERSION = 1


class ScheduleRecordMapper:
    """
    Mapper class for converting DaySchedule aggregates to and from records.

    The record layout mirrors the aggregate with the date stored under "date".
    Section keys are normalised on the way in so records written with the
    console's old "mechanic" key still load.
    """

    @staticmethod
    def to_record(schedule: DaySchedule) -> dict[str, Any]:
        record = schedule.model_dump(mode="json")
        record["date"] = record.pop("day")
        record["record_version"] = RECORD_VERSION
        return record

    @staticmethod
    def from_record(record: dict[str, Any]) -> DaySchedule:
        """
        Rebuild a DaySchedule from a stored record.

        Raises:
            RepositoryError: If the record is malformed
        """
        data = dict(record)
        data.pop("record_version", None)
        if "date" in data:
            data["day"] = data.pop("date")

        capacity = data.get("capacity")
        if isinstance(capacity, dict) and isinstance(capacity.get("sections"), dict):
            try:
                capacity = dict(capacity)
                capacity["sections"] = {
                    SectionKind.parse(key).value: value
                    for key, value in capacity["sections"].items()
                }
                data["capacity"] = capacity
            except ValueError as e:
                raise RepositoryError(
                    f"Unknown section in schedule record: {e}",
                    {"date": str(data.get("day"))},
                ) from e

        try:
            return DaySchedule.model_validate(data)
        except PydanticValidationError as e:
            raise RepositoryError(
                f"Malformed schedule record: {e}", {"date": str(data.get("day"))}
            ) from e


class ActionLogRecordMapper:
    """Mapper class for ActionLogEntry records (one JSON object per line)."""

    @staticmethod
    def to_record(entry: ActionLogEntry) -> dict[str, Any]:
        return entry.model_dump(mode="json")

    @staticmethod
    def from_record(record: dict[str, Any]) -> ActionLogEntry:
        try:
            return ActionLogEntry.model_validate(record)
        except PydanticValidationError as e:
            raise RepositoryError(
                f"Malformed action log record: {e}", {"entry_id": str(record.get("id"))}
            ) from e
