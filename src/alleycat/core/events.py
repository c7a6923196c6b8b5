"""
Event bus system for ALLEYCAT.

Provides pub/sub messaging between the host window, the input
collaborator and the game session.
"""

from dataclasses import dataclass, field
from typing import Any, Callable
from enum import Enum, auto
import time
import logging
from collections import defaultdict

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input events
    JUMP_PRESS = auto()
    JUMP_RELEASE = auto()
    CROUCH_PRESS = auto()
    CROUCH_RELEASE = auto()
    START = auto()  # One-shot start/restart edge

    # Session events
    ROUND_STARTED = auto()
    SPEED_UP = auto()
    GAME_OVER = auto()
    NEW_BEST_SCORE = auto()


@dataclass
class Event:
    """
    Event data container.

    Attributes:
        type: Event type (EventType enum or custom string)
        data: Event payload
        source: Component that emitted the event
        timestamp: When event was created
    """
    type: EventType | str
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None]


class EventBus:
    """
    Central event bus for component communication.

    Events can be emitted immediately or queued and drained once per
    frame, so input arriving mid-frame is only seen by the next step.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._handlers: dict[EventType | str, list[Handler]] = defaultdict(list)
        self._queue: list[Event] = []
        self._event_history: list[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType | str,
        handler: Handler
    ) -> Callable[[], None]:
        """
        Subscribe to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Callback function

        Returns:
            Unsubscribe function
        """
        self._handlers[event_type].append(handler)
        logger.debug(f"Handler subscribed to {event_type}")

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)
                logger.debug(f"Handler unsubscribed from {event_type}")

        return unsubscribe

    def emit(self, event: Event) -> None:
        """Emit an event immediately."""
        self._add_to_history(event)
        self._dispatch(event)

    def queue_event(self, event: Event) -> None:
        """Queue an event for later processing."""
        self._queue.append(event)

    def process_queue(self) -> int:
        """Dispatch all queued events in arrival order. Returns the count."""
        pending, self._queue = self._queue, []
        for event in pending:
            self.emit(event)
        return len(pending)

    def _dispatch(self, event: Event) -> None:
        handlers = list(self._handlers.get(event.type, []))

        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error in event handler: {e}")

    def _add_to_history(self, event: Event) -> None:
        """Add event to history, maintaining limit."""
        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

    def get_history(
        self,
        event_type: EventType | str | None = None,
        limit: int = 10
    ) -> list[Event]:
        """Get recent events from history."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        return history[-limit:]

