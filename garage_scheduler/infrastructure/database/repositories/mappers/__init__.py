"""Record mappers for the persistence layer."""

from .schedule_mapper import ActionLogRecordMapper, ScheduleRecordMapper

__all__ = ["ActionLogRecordMapper", "ScheduleRecordMapper"]
