"""
Tests for the schedule and action log repositories.
"""

import json
from uuid import uuid4

import pytest

from garage_scheduler.domain.scheduling.entities.action_log import ActionLogEntry
from garage_scheduler.domain.scheduling.value_objects.enums import (
    ActionKind,
    CapacityField,
    SectionKind,
    TicketStatus,
)
from garage_scheduler.domain.shared.exceptions import ActionLogUnavailableError, RepositoryError
from garage_scheduler.infrastructure.database.repositories import (
    InMemoryActionLogRepository,
    InMemoryScheduleRepository,
    JsonFileActionLogRepository,
    JsonFileScheduleRepository,
)
from garage_scheduler.infrastructure.database.repositories import (
    schedule_repository as schedule_repository_module,
)
from garage_scheduler.infrastructure.database.repositories.mappers import (
    ScheduleRecordMapper,
)
from garage_scheduler.tests.fixtures import MONDAY, SATURDAY, TUESDAY, make_schedule, make_ticket


def _entry(ticket_ref, kind=ActionKind.START, code="VIN00001"):
    return ActionLogEntry(
        ticket_ref=ticket_ref, vehicle_code=code, actor_id="worker-1", action_kind=kind
    )


class TestInMemoryScheduleRepository:
    def test_returns_copies(self):
        repo = InMemoryScheduleRepository()
        schedule = make_schedule(MONDAY)
        repo.save(schedule)

        loaded = repo.get_by_date(MONDAY)
        loaded.admit_ticket(make_ticket("CAR1"))

        assert repo.get_by_date(MONDAY).tickets == []

    def test_find_date_for_ticket(self):
        repo = InMemoryScheduleRepository()
        schedule = make_schedule(TUESDAY)
        ticket = schedule.admit_ticket(make_ticket("CAR1"))
        repo.save(schedule)
        repo.save(make_schedule(MONDAY))

        assert repo.find_date_for_ticket(ticket.id) == TUESDAY
        assert repo.find_date_for_ticket(uuid4()) is None

    def test_get_range(self):
        repo = InMemoryScheduleRepository()
        for day in (MONDAY, TUESDAY, SATURDAY):
            repo.save(make_schedule(day))

        assert [s.day for s in repo.get_range(MONDAY, TUESDAY)] == [MONDAY, TUESDAY]
        assert repo.list_dates() == [MONDAY, TUESDAY, SATURDAY]


class TestJsonFileScheduleRepository:
    """Test the one-file-per-date store."""

    def test_round_trip(self, tmp_path):
        repo = JsonFileScheduleRepository(tmp_path)
        schedule = make_schedule(SATURDAY, max_cars_capacity=5)
        ticket = schedule.admit_ticket(
            make_ticket("CAR1", priority="high", priority_reason="Owner waiting")
        )
        schedule.change_ticket_status(ticket.id, TicketStatus.IN_PROGRESS)
        schedule.set_section_value(SectionKind.PAINTER, CapacityField.DAILY_CAPACITY, 5)
        schedule.set_hours_open(7)
        repo.save(schedule)

        loaded = repo.get_by_date(SATURDAY)

        assert loaded.max_cars_capacity == 5
        assert loaded.capacity.hours_open == 7
        assert loaded.capacity.hours_open_overridden
        assert loaded.capacity.section(SectionKind.PAINTER).daily_capacity == 5
        stored_ticket = loaded.get_ticket(ticket.id)
        assert stored_ticket.status == TicketStatus.IN_PROGRESS
        assert stored_ticket.actual_start_time is not None
        assert stored_ticket.priority_reason == "Owner waiting"

    def test_file_layout(self, tmp_path):
        repo = JsonFileScheduleRepository(tmp_path)
        repo.save(make_schedule(MONDAY))

        path = tmp_path / "schedules" / "2025-06-02.json"
        record = json.loads(path.read_text())
        assert record["date"] == "2025-06-02"
        assert record["record_version"] == 1
        assert repo.exists(MONDAY)
        assert not repo.exists(TUESDAY)

    def test_missing_day(self, tmp_path):
        assert JsonFileScheduleRepository(tmp_path).get_by_date(MONDAY) is None

    def test_find_date_for_ticket(self, tmp_path):
        repo = JsonFileScheduleRepository(tmp_path)
        schedule = make_schedule(TUESDAY)
        ticket = schedule.admit_ticket(make_ticket("CAR1"))
        repo.save(make_schedule(MONDAY))
        repo.save(schedule)

        assert repo.find_date_for_ticket(ticket.id) == TUESDAY

    def test_unexpected_files_skipped(self, tmp_path):
        repo = JsonFileScheduleRepository(tmp_path)
        repo.save(make_schedule(MONDAY))
        (tmp_path / "schedules" / "notes.json").write_text("{}")

        assert repo.list_dates() == [MONDAY]

    def test_corrupt_file_raises(self, tmp_path):
        repo = JsonFileScheduleRepository(tmp_path)
        (tmp_path / "schedules" / "2025-06-02.json").write_text("{not json")

        with pytest.raises(RepositoryError):
            repo.get_by_date(MONDAY)

    def test_malformed_record_raises(self, tmp_path):
        repo = JsonFileScheduleRepository(tmp_path)
        (tmp_path / "schedules" / "2025-06-02.json").write_text(
            json.dumps({"date": "2025-06-02", "max_cars_capacity": -1})
        )

        with pytest.raises(RepositoryError):
            repo.get_by_date(MONDAY)

    def test_failed_save_leaves_no_temp_file(self, tmp_path, monkeypatch):
        repo = JsonFileScheduleRepository(tmp_path)

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(schedule_repository_module.os, "replace", failing_replace)

        with pytest.raises(RepositoryError):
            repo.save(make_schedule(MONDAY))

        assert list((tmp_path / "schedules").iterdir()) == []


class TestScheduleRecordMapper:
    def test_legacy_section_key(self):
        schedule = make_schedule(MONDAY)
        schedule.admit_ticket(make_ticket("CAR1"))
        record = ScheduleRecordMapper.to_record(schedule)
        sections = record["capacity"]["sections"]
        sections["mechanic"] = sections.pop("mechanical")
        record["tickets"][0]["section"] = "mechanic"

        loaded = ScheduleRecordMapper.from_record(record)

        assert loaded.capacity.section(SectionKind.MECHANICAL).daily_capacity == 10
        assert loaded.tickets[0].section == SectionKind.MECHANICAL

    def test_unknown_section_raises(self):
        record = ScheduleRecordMapper.to_record(make_schedule(MONDAY))
        record["capacity"]["sections"]["welding"] = {"workers_assigned": 1, "daily_capacity": 1}

        with pytest.raises(RepositoryError):
            ScheduleRecordMapper.from_record(record)


class TestActionLogRepositories:
    @pytest.fixture(params=["memory", "json"])
    def log_repo(self, request, tmp_path):
        if request.param == "memory":
            return InMemoryActionLogRepository()
        return JsonFileActionLogRepository(tmp_path / "action_log.jsonl")

    def test_append_assigns_sequence(self, log_repo):
        ref = uuid4()
        first = log_repo.append(_entry(ref))
        second = log_repo.append(_entry(ref, ActionKind.PAUSE))

        assert (first.sequence, second.sequence) == (0, 1)
        assert [e.id for e in log_repo.find_by_ticket(ref)] == [first.id, second.id]

    def test_filters_by_ticket_and_vehicle(self, log_repo):
        ref_a, ref_b = uuid4(), uuid4()
        log_repo.append(_entry(ref_a, code="CAR1"))
        log_repo.append(_entry(ref_b, code="CAR2"))
        log_repo.append(_entry(ref_a, ActionKind.COMPLETE, code="CAR1"))

        assert len(log_repo.find_by_ticket(ref_a)) == 2
        assert [e.ticket_ref for e in log_repo.find_by_vehicle("CAR2")] == [ref_b]
        assert log_repo.find_by_ticket(uuid4()) == []

    def test_json_sequence_continues_across_instances(self, tmp_path):
        path = tmp_path / "action_log.jsonl"
        ref = uuid4()
        JsonFileActionLogRepository(path).append(_entry(ref))

        reopened = JsonFileActionLogRepository(path)
        entry = reopened.append(_entry(ref, ActionKind.COMPLETE))

        assert entry.sequence == 1
        assert [e.action_kind for e in reopened.find_by_ticket(ref)] == [
            ActionKind.START,
            ActionKind.COMPLETE,
        ]

    def test_json_skips_bad_lines(self, tmp_path):
        path = tmp_path / "action_log.jsonl"
        repo = JsonFileActionLogRepository(path)
        ref = uuid4()
        repo.append(_entry(ref))
        with path.open("a") as handle:
            handle.write("garbage\n")
            handle.write('{"id": "not-a-uuid"}\n')

        assert len(repo.find_by_ticket(ref)) == 1

    def test_json_unwritable_log(self, tmp_path):
        log_dir = tmp_path / "logs"
        repo = JsonFileActionLogRepository(log_dir / "action_log.jsonl")
        # A directory in place of the log file makes every open fail
        (log_dir / "action_log.jsonl").mkdir()

        with pytest.raises(ActionLogUnavailableError):
            repo.append(_entry(uuid4()))
