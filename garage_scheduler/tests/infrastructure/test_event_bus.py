"""
Tests for the event bus and the schedule change history.
"""

import threading
from datetime import date
from uuid import uuid4

import pytest

from garage_scheduler.domain.scheduling.events.domain_events import (
    CapacityUpdated,
    TicketAdmitted,
)
from garage_scheduler.domain.scheduling.value_objects.enums import TicketStatus
from garage_scheduler.infrastructure.events import ChangeType, InMemoryEventBus
from garage_scheduler.tests.fixtures import make_draft


def _capacity_event(field_name="max_cars_capacity"):
    return CapacityUpdated(
        aggregate_id=uuid4(),
        day=date(2025, 6, 2),
        field_name=field_name,
        old_value="7",
        new_value="5",
    )


class TestInMemoryEventBus:
    def test_publish_reaches_subscribers(self):
        bus = InMemoryEventBus()
        received = []
        bus.subscribe(CapacityUpdated, received.append)

        event = _capacity_event()
        bus.publish(event)

        assert received == [event]
        assert bus.get_handler_count(CapacityUpdated) == 1

    def test_only_matching_type(self):
        bus = InMemoryEventBus()
        received = []
        bus.subscribe(TicketAdmitted, received.append)

        bus.publish(_capacity_event())

        assert received == []
        assert len(bus.get_event_history()) == 1

    def test_duplicate_subscription_ignored(self):
        bus = InMemoryEventBus()
        received = []
        bus.subscribe(CapacityUpdated, received.append)
        bus.subscribe(CapacityUpdated, received.append)

        bus.publish(_capacity_event())

        assert len(received) == 1

    def test_failing_handler_does_not_stop_others(self, caplog):
        bus = InMemoryEventBus()
        received = []

        def broken(event):
            raise RuntimeError("handler failure")

        bus.subscribe(CapacityUpdated, broken)
        bus.subscribe(CapacityUpdated, received.append)

        bus.publish(_capacity_event())

        assert len(received) == 1
        assert "handler failure" in caplog.text

    def test_unsubscribe_and_clear(self):
        bus = InMemoryEventBus()
        received = []
        bus.subscribe(CapacityUpdated, received.append)
        bus.unsubscribe(CapacityUpdated, received.append)
        bus.publish(_capacity_event())
        assert received == []

        bus.subscribe(CapacityUpdated, received.append)
        bus.clear_handlers()
        assert bus.get_handler_count(CapacityUpdated) == 0

    def test_history_is_bounded(self):
        bus = InMemoryEventBus(max_history_size=3)
        for _ in range(5):
            bus.publish(_capacity_event())

        assert len(bus.get_event_history()) == 3
        assert len(bus.get_event_history(limit=2)) == 2

        bus.clear_history()
        assert bus.get_event_history() == []

    def test_concurrent_publishers_keep_every_event(self):
        bus = InMemoryEventBus(max_history_size=10_000)

        def publish_many():
            for _ in range(500):
                bus.publish(_capacity_event())

        threads = [threading.Thread(target=publish_many) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(bus.get_event_history()) == 4000


class TestScheduleChangeHistory:
    """Test the change history fed by the scheduler's event bus."""

    def test_ticket_changes_newest_first(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("CAR1"))
        scheduler.tickets.update_status(ticket.id, TicketStatus.IN_PROGRESS, "worker-1")
        scheduler.tickets.update_status(ticket.id, TicketStatus.COMPLETED, "worker-1")

        changes = scheduler.history.for_ticket(ticket.id)

        assert [c.change_type for c in changes] == [
            ChangeType.COMPLETION,
            ChangeType.STATUS_CHANGE,
            ChangeType.ADMISSION,
        ]
        assert changes[0].from_value == "in_progress"
        assert changes[0].to_value == "completed"
        assert changes[0].changed_by == "worker-1"
        assert changes[0].description == "completion: in_progress -> completed"

    def test_detail_changes(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("CAR1"))
        scheduler.tickets.assign_worker(ticket.id, "Karim")
        scheduler.tickets.change_priority(ticket.id, "high", "Owner request")

        changes = scheduler.history.for_ticket(ticket.id)

        assert changes[0].change_type == ChangeType.PRIORITY_CHANGE
        assert (changes[0].from_value, changes[0].to_value) == ("medium", "high")
        assert changes[1].change_type == ChangeType.ASSIGNMENT
        assert changes[1].to_value == "Karim"

    def test_capacity_changes_for_day(self, scheduler, defined_monday):
        scheduler.capacity.set_section_capacity(defined_monday, "painter", "workers", 3)
        scheduler.capacity.set_max_cars_capacity(defined_monday, 9)

        changes = scheduler.history.for_day(defined_monday)

        assert [c.field_name for c in changes] == [
            "max_cars_capacity",
            "painter.workers_assigned",
        ]
        assert changes[1].from_value == "1"
        assert changes[1].to_value == "3"

    def test_removal_recorded(self, scheduler, defined_monday):
        ticket = scheduler.tickets.add_ticket(defined_monday, make_draft("CAR1"))
        scheduler.tickets.remove_ticket(ticket.id)

        assert scheduler.history.recent(1)[0].change_type == ChangeType.REMOVAL

    @pytest.mark.parametrize("limit,expected", [(0, 0), (2, 2), (50, 3)])
    def test_recent_limit(self, scheduler, defined_monday, limit, expected):
        for code in ("A", "B", "C"):
            scheduler.tickets.add_ticket(defined_monday, make_draft(code))

        assert len(scheduler.history.recent(limit)) == expected
