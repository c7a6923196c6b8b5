"""
Frame driver.

One ``tick()`` per host frame callback. The driver steps the session only
while a round is being played and hands the resulting snapshot to the
render callbacks afterwards.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable
import logging

from alleycat.core.state import Phase

if TYPE_CHECKING:
    from alleycat.game.controls import Controls
    from alleycat.game.session import GameSession
    from alleycat.game.snapshot import SessionSnapshot

logger = logging.getLogger(__name__)

RenderCallback = Callable[["SessionSnapshot"], None]


class FrameDriver:
    """Drives a GameSession one discrete step at a time."""

    def __init__(self, session: GameSession, controls: Controls | None = None) -> None:
        self.session = session
        self.controls = controls
        self.frames_driven = 0
        self._render_callbacks: list[RenderCallback] = []

    @property
    def is_running(self) -> bool:
        """False while the round is over; steps resume on restart."""
        return self.session.phase != Phase.GAME_OVER

    def add_render_callback(self, callback: RenderCallback) -> None:
        self._render_callbacks.append(callback)

    def tick(self) -> SessionSnapshot:
        """Run one frame: start edge, step, then render."""
        if self.controls is not None and self.controls.consume_start():
            self.session.start()

        if self.session.is_playing:
            self.session.step(self.controls)
            self.frames_driven += 1

        snapshot = self.session.snapshot()
        for callback in self._render_callbacks:
            callback(snapshot)
        return snapshot

    def run(self, frames: int) -> int:
        """Tick up to ``frames`` times, stopping when the round ends.

        Returns:
            Number of ticks performed
        """
        ticks = 0
        while ticks < frames and self.is_running:
            self.tick()
            ticks += 1
        logger.debug(f"Drove {ticks} ticks, phase {self.session.phase.name}")
        return ticks
