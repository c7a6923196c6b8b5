"""
Input collaborator.

Key-down/key-up events only toggle flags here; the session reads them
synchronously at the start of the next step, so the last state wins.
"""

from typing import Callable
import logging

from alleycat.core.events import EventBus, EventType

logger = logging.getLogger(__name__)


class Controls:
    """Held jump/crouch keys plus a one-shot start/restart edge."""

    def __init__(self) -> None:
        self.jump_held = False
        self.crouch_held = False
        self._start_requested = False
        self._unsubscribers: list[Callable[[], None]] = []

    def press_jump(self) -> None:
        self.jump_held = True

    def release_jump(self) -> None:
        self.jump_held = False

    def press_crouch(self) -> None:
        self.crouch_held = True

    def release_crouch(self) -> None:
        self.crouch_held = False

    def request_start(self) -> None:
        """Record a start/restart edge for the host to hand to the session."""
        self._start_requested = True

    def consume_start(self) -> bool:
        """Return and clear the pending start edge."""
        requested = self._start_requested
        self._start_requested = False
        return requested

    def bind(self, event_bus: EventBus) -> None:
        """Subscribe to the input events the host window emits."""
        routes: dict[EventType, Callable[[], None]] = {
            EventType.JUMP_PRESS: self.press_jump,
            EventType.JUMP_RELEASE: self.release_jump,
            EventType.CROUCH_PRESS: self.press_crouch,
            EventType.CROUCH_RELEASE: self.release_crouch,
            EventType.START: self.request_start,
        }
        for event_type, action in routes.items():
            self._unsubscribers.append(
                event_bus.subscribe(event_type, lambda _event, action=action: action())
            )
        logger.debug("Controls bound to event bus")

    def unbind(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
