"""
Action log repository implementations.

Both stores are append-only. The sequence number assigned on append is the
entry's position in the log and breaks timestamp ties.
"""

import json
import logging
import threading
from pathlib import Path
from uuid import UUID

from garage_scheduler.domain.scheduling.entities.action_log import ActionLogEntry
from garage_scheduler.domain.scheduling.repositories.action_log_repository import (
    ActionLogRepository,
)
from garage_scheduler.domain.shared.exceptions import ActionLogUnavailableError, RepositoryError

from .mappers.schedule_mapper import ActionLogRecordMapper

logger = logging.getLogger(__name__)


def _ordered(entries: list[ActionLogEntry]) -> list[ActionLogEntry]:
    return sorted(entries, key=lambda entry: entry.sort_key)


class InMemoryActionLogRepository(ActionLogRepository):
    """List-backed action log."""

    def __init__(self):
        self._entries: list[ActionLogEntry] = []
        self._lock = threading.Lock()

    def append(self, entry: ActionLogEntry) -> ActionLogEntry:
        with self._lock:
            stored = entry.model_copy(update={"sequence": len(self._entries)})
            self._entries.append(stored)
        return stored

    def find_by_ticket(self, ticket_ref: UUID) -> list[ActionLogEntry]:
        with self._lock:
            return _ordered([e for e in self._entries if e.ticket_ref == ticket_ref])

    def find_by_vehicle(self, vehicle_code: str) -> list[ActionLogEntry]:
        with self._lock:
            return _ordered([e for e in self._entries if e.vehicle_code == vehicle_code])


class JsonFileActionLogRepository(ActionLogRepository):
    """Action log kept as a JSON lines file, one entry per line."""

    def __init__(self, log_file: Path | str):
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._next_sequence: int | None = None

    def append(self, entry: ActionLogEntry) -> ActionLogEntry:
        with self._lock:
            try:
                if self._next_sequence is None:
                    self._next_sequence = len(self._read_all())
                stored = entry.model_copy(update={"sequence": self._next_sequence})
                line = json.dumps(ActionLogRecordMapper.to_record(stored))
                with self.log_file.open("a", encoding="utf-8") as handle:
                    handle.write(line + "\n")
            except OSError as e:
                raise ActionLogUnavailableError(str(e)) from e
            self._next_sequence += 1
        return stored

    def find_by_ticket(self, ticket_ref: UUID) -> list[ActionLogEntry]:
        with self._lock:
            return _ordered([e for e in self._read_all() if e.ticket_ref == ticket_ref])

    def find_by_vehicle(self, vehicle_code: str) -> list[ActionLogEntry]:
        with self._lock:
            return _ordered([e for e in self._read_all() if e.vehicle_code == vehicle_code])

    def _read_all(self) -> list[ActionLogEntry]:
        if not self.log_file.exists():
            return []
        entries = []
        try:
            with self.log_file.open(encoding="utf-8") as handle:
                for line_number, line in enumerate(handle, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        entries.append(ActionLogRecordMapper.from_record(json.loads(line)))
                    except (json.JSONDecodeError, RepositoryError):
                        logger.warning(f"Skipping unreadable action log line {line_number}")
        except OSError as e:
            raise ActionLogUnavailableError(str(e)) from e
        return entries
