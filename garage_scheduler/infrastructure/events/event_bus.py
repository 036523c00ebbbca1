"""
Event bus implementation for domain event publishing and subscription.

The event bus routes events raised by DaySchedule aggregates to registered
handlers once the owning unit of work has saved the day.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Callable

from garage_scheduler.domain.shared.base import DomainEvent

logger = logging.getLogger(__name__)


class EventBusInterface(ABC):
    """
    Abstract interface for event bus implementations.

    Defines the contract for publishing events and subscribing to event types.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all registered handlers.

        Args:
            event: Domain event to publish
        """
        pass

    @abstractmethod
    def subscribe(
        self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]
    ) -> None:
        pass

    @abstractmethod
    def unsubscribe(
        self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]
    ) -> None:
        pass

    @abstractmethod
    def clear_handlers(self, event_type: type[DomainEvent] | None = None) -> None:
        """
        Clear event handlers.

        Args:
            event_type: Optional event type to clear handlers for. If None, clears all.
        """
        pass


class InMemoryEventBus(EventBusInterface):
    """
    In-memory, synchronous event bus.

    Handlers run in subscription order on the publishing thread. A failing
    handler is logged and skipped; it never fails the mutation that raised
    the event.
    """

    def __init__(self, max_history_size: int = 1000):
        self._handlers: dict[type[DomainEvent], list[Callable]] = defaultdict(list)
        self._event_history: list[DomainEvent] = []
        self._max_history_size = max_history_size
        self._history_lock = threading.Lock()

    def publish(self, event: DomainEvent) -> None:
        self._add_to_history(event)

        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug(f"No handlers registered for event type: {event_type.__name__}")
            return

        logger.debug(f"Publishing event {event_type.__name__} to {len(handlers)} handlers")

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error handling event {event_type.__name__} with {handler}: {e}")

    def subscribe(
        self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]
    ) -> None:
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)
            logger.debug(f"Subscribed handler {handler} to event type {event_type.__name__}")
        else:
            logger.warning(
                f"Handler {handler} already subscribed to event type {event_type.__name__}"
            )

    def unsubscribe(
        self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]
    ) -> None:
        if handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)
            logger.debug(
                f"Unsubscribed handler {handler} from event type {event_type.__name__}"
            )

    def clear_handlers(self, event_type: type[DomainEvent] | None = None) -> None:
        if event_type:
            self._handlers[event_type].clear()
        else:
            self._handlers.clear()

    def get_handler_count(self, event_type: type[DomainEvent]) -> int:
        return len(self._handlers.get(event_type, []))

    def get_event_history(
        self, event_type: type[DomainEvent] | None = None, limit: int | None = None
    ) -> list[DomainEvent]:
        """
        Get published events, oldest first.

        Args:
            event_type: Optional filter by event type
            limit: Optional cap, keeping the most recent events
        """
        with self._history_lock:
            history = list(self._event_history)
        if event_type:
            history = [e for e in history if isinstance(e, event_type)]
        if limit:
            history = history[-limit:]
        return list(history)

    def clear_history(self) -> None:
        with self._history_lock:
            self._event_history.clear()

    def _add_to_history(self, event: DomainEvent) -> None:
        with self._history_lock:
            self._event_history.append(event)
            if len(self._event_history) > self._max_history_size:
                self._event_history = self._event_history[-self._max_history_size :]
