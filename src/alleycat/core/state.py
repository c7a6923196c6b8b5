"""
Phase state machine for a game session.

States:
    IDLE: Before the first round; nothing ticks
    PLAYING: Full simulation active
    GAME_OVER: Round ended on contact; simulation frozen
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Session lifecycle phases."""
    IDLE = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class PhaseContext:
    """Bookkeeping carried across transitions."""
    rounds_started: int = 0
    last_score: int | None = None


Listener = Callable[[Phase, Phase, PhaseContext], None]


class PhaseMachine:
    """
    Tracks the session phase and enforces the legal transitions.

    Listeners are notified after every successful transition.
    """

    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        (Phase.IDLE, Phase.PLAYING),
        (Phase.PLAYING, Phase.GAME_OVER),
        (Phase.GAME_OVER, Phase.PLAYING),  # Restart
    ]

    def __init__(self, initial_phase: Phase = Phase.IDLE) -> None:
        self._phase = initial_phase
        self._context = PhaseContext()
        self._listeners: list[Listener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._phase

    @property
    def context(self) -> PhaseContext:
        return self._context

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase, **context_updates) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_phase: Target phase
            **context_updates: Updates to apply to context

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase

        if to_phase == Phase.PLAYING:
            self._context.rounds_started += 1
        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        for listener in self._listeners:
            try:
                listener(old_phase, to_phase, self._context)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

