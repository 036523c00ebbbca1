"""
Tests for TicketService: add, status overwrite, removal, reassignment.
"""

from uuid import uuid4

import pytest

from garage_scheduler.domain.scheduling.events.domain_events import TicketStatusChanged
from garage_scheduler.domain.scheduling.value_objects.enums import (
    Priority,
    SectionKind,
    TicketStatus,
)
from garage_scheduler.domain.shared.exceptions import (
    DayUnavailableError,
    ScheduleNotFoundError,
    TicketNotFoundError,
    ValidationError,
)
from garage_scheduler.tests.fixtures import make_draft


class TestAddTicket:
    """Test adding tickets to a day."""

    def test_first_two_in_section_are_scheduled_then_pending(self, scheduler, defined_monday):
        statuses = [
            scheduler.tickets.add_ticket(defined_monday, make_draft(code)).status
            for code in ("A", "B", "C")
        ]

        assert statuses == [TicketStatus.SCHEDULED, TicketStatus.SCHEDULED, TicketStatus.PENDING]

    def test_sections_are_independent(self, scheduler, defined_monday):
        for code in ("A", "B"):
            scheduler.tickets.add_ticket(defined_monday, make_draft(code))

        ticket = scheduler.tickets.add_ticket(
            defined_monday, make_draft("C", section=SectionKind.PAINTER)
        )

        assert ticket.status == TicketStatus.SCHEDULED

    def test_add_increments_counter(self, scheduler, defined_monday):
        scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        assert scheduler.capacity.get_day(defined_monday).current_cars_scheduled == 1

    def test_add_accepts_plain_mapping(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(
            defined_monday, {"vehicle_code": "xyz 123", "section": "mechanic"}
        )

        assert ticket.vehicle_code == "XYZ123"
        assert ticket.section == SectionKind.MECHANICAL

    def test_malformed_mapping(self, scheduler, defined_monday):
        with pytest.raises(ValidationError) as exc_info:
            scheduler.tickets.add_ticket(
                defined_monday, {"vehicle_code": "A", "section": "upholstery"}
            )

        assert exc_info.value.error_code == "INVALID_DRAFT"

    def test_missing_vehicle_code_leaves_day_unchanged(self, scheduler, defined_monday):
        with pytest.raises(ValidationError) as exc_info:
            scheduler.tickets.add_ticket(defined_monday, make_draft(None))

        assert exc_info.value.error_code == "MISSING_VEHICLE_CODE"
        day = scheduler.capacity.get_day(defined_monday)
        assert day.tickets == []
        assert day.current_cars_scheduled == 0

    def test_high_priority_without_reason(self, scheduler, defined_monday):
        with pytest.raises(ValidationError) as exc_info:
            scheduler.tickets.add_ticket(defined_monday, make_draft("A", priority=Priority.HIGH))

        assert exc_info.value.error_code == "MISSING_PRIORITY_REASON"

    def test_duplicate_vehicle(self, scheduler, defined_monday):
        scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        with pytest.raises(ValidationError) as exc_info:
            scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        assert exc_info.value.error_code == "DUPLICATE_VEHICLE"
        assert scheduler.capacity.get_day(defined_monday).current_cars_scheduled == 1

    def test_same_vehicle_on_another_day(self, scheduler, defined_monday, saturday):
        scheduler.capacity.define_day(saturday)
        scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        ticket = scheduler.tickets.add_ticket(saturday, make_draft("A"))

        assert scheduler.tickets.locate(ticket.id) == saturday

    def test_undefined_day(self, scheduler, monday):
        with pytest.raises(ScheduleNotFoundError):
            scheduler.tickets.add_ticket(monday, make_draft("A"))

    def test_unavailable_day(self, scheduler, defined_monday):
        scheduler.capacity.mark_unavailable(defined_monday)

        with pytest.raises(DayUnavailableError):
            scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

    def test_section_over_daily_capacity_is_admitted(self, scheduler, defined_monday):
        scheduler.capacity.set_section_capacity(defined_monday, "painter", "capacity", 1)

        for code in ("A", "B"):
            scheduler.tickets.add_ticket(defined_monday, make_draft(code, section="painter"))

        assert len(scheduler.capacity.get_day(defined_monday).tickets) == 2


class TestUpdateStatus:
    """Test unconditional status overwrites."""

    @pytest.mark.parametrize(
        "path",
        [
            ["in_progress", "completed", "in_progress", "scheduled", "pending"],
            ["delayed", "completed", "delayed", "scheduled"],
            ["completed", "pending"],
        ],
    )
    def test_any_transition_is_permitted(self, scheduler, defined_monday, path):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        for status in path:
            updated = scheduler.tickets.update_status(ticket.id, status)
            assert updated.status == TicketStatus(status)

        assert scheduler.tickets.get_ticket(ticket.id).status == TicketStatus(path[-1])

    def test_update_is_idempotent(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))
        scheduler.tickets.update_status(ticket.id, TicketStatus.COMPLETED)
        first = scheduler.tickets.get_ticket(ticket.id).model_dump()

        scheduler.tickets.update_status(ticket.id, TicketStatus.COMPLETED)

        assert scheduler.tickets.get_ticket(ticket.id).model_dump() == first
        changes = scheduler.event_bus.get_event_history(TicketStatusChanged)
        assert len(changes) == 1

    def test_unknown_status(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        with pytest.raises(ValidationError) as exc_info:
            scheduler.tickets.update_status(ticket.id, "archived")

        assert exc_info.value.error_code == "UNKNOWN_STATUS"

    def test_unknown_ticket(self, scheduler, defined_monday):
        with pytest.raises(TicketNotFoundError):
            scheduler.tickets.update_status(uuid4(), TicketStatus.COMPLETED)

    def test_status_change_does_not_touch_action_log(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        scheduler.tickets.update_status(ticket.id, TicketStatus.IN_PROGRESS)

        assert scheduler.action_log.history_for(ticket.id) == []


class TestRemoveTicket:
    def test_remove(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        removed = scheduler.tickets.remove_ticket(ticket.id)

        assert removed.id == ticket.id
        day = scheduler.capacity.get_day(defined_monday)
        assert day.tickets == []
        assert day.current_cars_scheduled == 0

    def test_remove_unknown(self, scheduler, defined_monday):
        with pytest.raises(TicketNotFoundError):
            scheduler.tickets.remove_ticket(uuid4())

    def test_removed_ticket_cannot_be_updated(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))
        scheduler.tickets.remove_ticket(ticket.id)

        with pytest.raises(TicketNotFoundError):
            scheduler.tickets.update_status(ticket.id, TicketStatus.COMPLETED)


class TestTicketDetails:
    def test_assign_worker(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        scheduler.tickets.assign_worker(ticket.id, "Mark", changed_by="supervisor")

        assert scheduler.tickets.get_ticket(ticket.id).assigned_worker == "Mark"

    def test_change_priority(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        scheduler.tickets.change_priority(ticket.id, "high", reason="Owner request")

        stored = scheduler.tickets.get_ticket(ticket.id)
        assert stored.priority == Priority.HIGH
        assert stored.priority_reason == "Owner request"

    def test_change_priority_unknown_value(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("A"))

        with pytest.raises(ValidationError) as exc_info:
            scheduler.tickets.change_priority(ticket.id, "urgent")

        assert exc_info.value.error_code == "UNKNOWN_PRIORITY"
