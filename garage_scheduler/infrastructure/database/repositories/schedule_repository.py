"""
DaySchedule repository implementations.

InMemoryScheduleRepository keeps deep copies in a dict; JsonFileScheduleRepository
writes one JSON document per date under <data_dir>/schedules/YYYY-MM-DD.json.
Both hand out copies so readers always see a consistent snapshot.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import date
from pathlib import Path
from uuid import UUID

from garage_scheduler.domain.scheduling.entities.day_schedule import DaySchedule
from garage_scheduler.domain.scheduling.repositories.schedule_repository import (
    ScheduleRepository,
)
from garage_scheduler.domain.shared.exceptions import RepositoryError

from .mappers.schedule_mapper import ScheduleRecordMapper

logger = logging.getLogger(__name__)


class InMemoryScheduleRepository(ScheduleRepository):
    """Dict-backed schedule store."""

    def __init__(self):
        self._schedules: dict[date, DaySchedule] = {}
        self._lock = threading.Lock()

    def get_by_date(self, day: date) -> DaySchedule | None:
        with self._lock:
            schedule = self._schedules.get(day)
            return schedule.model_copy(deep=True) if schedule else None

    def save(self, schedule: DaySchedule) -> DaySchedule:
        stored = schedule.model_copy(deep=True)
        stored.clear_domain_events()
        with self._lock:
            self._schedules[schedule.day] = stored
        return schedule

    def exists(self, day: date) -> bool:
        with self._lock:
            return day in self._schedules

    def find_date_for_ticket(self, ticket_id: UUID) -> date | None:
        with self._lock:
            for day, schedule in self._schedules.items():
                if schedule.find_ticket(ticket_id) is not None:
                    return day
        return None

    def list_dates(self) -> list[date]:
        with self._lock:
            return sorted(self._schedules)


class JsonFileScheduleRepository(ScheduleRepository):
    """
    File-backed schedule store.

    Writes go to a temporary file in the same directory and are moved into
    place, so a reader never sees a half-written day.
    """

    def __init__(self, data_dir: Path | str):
        self.schedules_dir = Path(data_dir) / "schedules"
        self.schedules_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path_for(self, day: date) -> Path:
        return self.schedules_dir / f"{day.isoformat()}.json"

    def get_by_date(self, day: date) -> DaySchedule | None:
        path = self._path_for(day)
        with self._lock:
            if not path.exists():
                return None
            try:
                record = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                raise RepositoryError(
                    f"Error reading schedule for {day.isoformat()}: {str(e)}",
                    {"date": day.isoformat()},
                ) from e
        return ScheduleRecordMapper.from_record(record)

    def save(self, schedule: DaySchedule) -> DaySchedule:
        path = self._path_for(schedule.day)
        payload = json.dumps(ScheduleRecordMapper.to_record(schedule), indent=2)
        with self._lock:
            tmp_name = None
            try:
                fd, tmp_name = tempfile.mkstemp(
                    dir=self.schedules_dir, prefix=f".{schedule.day.isoformat()}.", suffix=".tmp"
                )
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except OSError as e:
                if tmp_name is not None and os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise RepositoryError(
                    f"Error saving schedule for {schedule.day.isoformat()}: {str(e)}",
                    {"date": schedule.day.isoformat()},
                ) from e
        logger.debug(f"Saved schedule {schedule.day} to {path}")
        return schedule

    def exists(self, day: date) -> bool:
        return self._path_for(day).exists()

    def find_date_for_ticket(self, ticket_id: UUID) -> date | None:
        for day in self.list_dates():
            schedule = self.get_by_date(day)
            if schedule is not None and schedule.find_ticket(ticket_id) is not None:
                return day
        return None

    def list_dates(self) -> list[date]:
        dates = []
        for path in self.schedules_dir.glob("*.json"):
            try:
                dates.append(date.fromisoformat(path.stem))
            except ValueError:
                logger.warning(f"Skipping unexpected file in schedules directory: {path.name}")
        return sorted(dates)
