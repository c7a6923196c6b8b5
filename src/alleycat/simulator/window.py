"""
Desktop window using pygame.

Maps the keyboard onto the input collaborator, drives one session step
per frame and blits the rendered playfield.
"""

import pygame
import asyncio
import logging

from ..config.settings import Settings
from ..core.clock import FrameDriver
from ..core.events import EventBus, EventType, Event
from ..game.controls import Controls
from ..game.session import GameSession
from ..game.snapshot import SessionSnapshot
from ..graphics.renderer import Renderer
from .display import FieldDisplay

logger = logging.getLogger(__name__)

JUMP_KEYS = (pygame.K_SPACE, pygame.K_UP)
CROUCH_KEYS = (pygame.K_DOWN,)


class GameWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP: Jump (also starts and restarts a round)
        DOWN: Crouch
        D: Toggle debug overlay
        S: Capture screenshot
        ESC / Q: Exit
    """

    def __init__(
        self,
        settings: Settings,
        session: GameSession,
        event_bus: EventBus | None = None,
        controls: Controls | None = None,
    ) -> None:
        self.settings = settings
        self.session = session
        self.event_bus = event_bus or EventBus()
        self.controls = controls or Controls()
        self.controls.bind(self.event_bus)

        self.display = FieldDisplay(settings.playfield.width, settings.playfield.height)
        self.renderer = Renderer(settings.playfield)
        self.driver = FrameDriver(session, self.controls)
        self.driver.add_render_callback(self._render_snapshot)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._show_debug = settings.debug
        self._last_snapshot: SessionSnapshot | None = None

        self.event_bus.subscribe(EventType.NEW_BEST_SCORE, self._on_new_best)

        logger.info("GameWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.settings.simulator.title)

        scale = self.settings.simulator.scale
        flags = pygame.DOUBLEBUF
        if self.settings.simulator.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.display.width * scale, self.display.height * scale),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(None, 16)

        logger.info(f"Pygame initialized: {self._screen.get_width()}x{self._screen.get_height()}")

    def _handle_events(self) -> None:
        """Translate pygame events into bus events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                self._handle_keyup(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_s:
            self._capture_screenshot()

        elif key in JUMP_KEYS:
            self.event_bus.queue_event(Event(EventType.JUMP_PRESS, source="keyboard"))
            # Jump doubles as start/restart outside a round
            if not self.session.is_playing:
                self.event_bus.queue_event(Event(EventType.START, source="keyboard"))
        elif key in CROUCH_KEYS:
            self.event_bus.queue_event(Event(EventType.CROUCH_PRESS, source="keyboard"))

    def _handle_keyup(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in JUMP_KEYS:
            self.event_bus.queue_event(Event(EventType.JUMP_RELEASE, source="keyboard"))
        elif key in CROUCH_KEYS:
            self.event_bus.queue_event(Event(EventType.CROUCH_RELEASE, source="keyboard"))

    def _on_new_best(self, event: Event) -> None:
        logger.info(f"New best score: {event.data.get('best_score')}")

    def _render_snapshot(self, snapshot: SessionSnapshot) -> None:
        self._last_snapshot = snapshot
        self.renderer.render(snapshot, self.display.buffer)

    def _render(self) -> None:
        if not self._screen:
            return

        surface = self.display.render(self.settings.simulator.scale)
        self._screen.blit(surface, (0, 0))

        if self._show_debug:
            self._render_debug_overlay()

        pygame.display.flip()

    def _render_debug_overlay(self) -> None:
        if not self._font or not self._last_snapshot:
            return

        snap = self._last_snapshot
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Phase: {snap.phase.name}",
            f"Frame: {snap.frame}  Driven: {self.driver.frames_driven}",
            f"Speed: {snap.speed:.1f}",
            f"Obstacles: {len(snap.obstacles)}",
        ]
        y = 4
        for line in lines:
            text_surface = self._font.render(line, True, (120, 120, 120))
            self._screen.blit(text_surface, (4, y))
            y += 14

    def _capture_screenshot(self) -> None:
        """Capture and save a screenshot."""
        if self._screen:
            filename = f"screenshot_{self.driver.frames_driven}.png"
            pygame.image.save(self._screen, filename)
            logger.info(f"Screenshot saved: {filename}")

    def advance_frame(self) -> SessionSnapshot:
        """Apply this frame's queued input, then step the session once.

        Errors raised by the step (a failed best-score save) propagate to
        the caller; they are not routed through the event bus.
        """
        self.event_bus.process_queue()
        return self.driver.tick()

    async def run(self) -> None:
        """Main loop."""
        self._init_pygame()
        self._running = True

        logger.info("Game window started")

        try:
            while self._running:
                self._handle_events()
                self.advance_frame()
                self._render()

                if self._clock:
                    self._clock.tick(self.settings.simulator.fps)

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        self.controls.unbind()
        pygame.quit()
        logger.info("Game window stopped")
