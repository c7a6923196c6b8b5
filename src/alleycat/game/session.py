"""Game session: owns the cat, the obstacles, score, speed and phase."""

from __future__ import annotations

import logging
import random

from alleycat.config.settings import Settings
from alleycat.core.events import Event, EventBus, EventType
from alleycat.core.state import Phase, PhaseContext, PhaseMachine
from alleycat.game.agent import Agent
from alleycat.game.collision import check_collision
from alleycat.game.controls import Controls
from alleycat.game.obstacles import Obstacle
from alleycat.game.snapshot import AgentPose, ObstacleView, SessionSnapshot
from alleycat.game.spawner import SpawnPolicy
from alleycat.storage.highscore import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class GameSession:
    """One player's run of rounds.

    Lifecycle:
        IDLE --start()--> PLAYING --collision--> GAME_OVER --start()--> PLAYING

    Only ``step()`` advances the simulation, and only while PLAYING. The
    step that causes a collision still applies its score and speed updates
    before the round ends.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        store: HighScoreStore | None = None,
        rng: random.Random | None = None,
        spawn_policy: SpawnPolicy | None = None,
        event_bus: EventBus | None = None,
    ):
        self.settings = settings or Settings()
        self.store = store or MemoryHighScoreStore()
        self.rng = rng or random.Random(self.settings.seed)
        self.event_bus = event_bus

        playfield = self.settings.playfield
        self.spawn_policy = spawn_policy or SpawnPolicy(
            field_width=playfield.width,
            ground_y=playfield.ground_y,
            rng=self.rng,
            settings=self.settings.spawn,
        )

        self._machine = PhaseMachine()
        self._machine.add_listener(self._on_phase_change)

        self.best_score = self.store.load()
        self.score = 0
        self.speed = self.settings.difficulty.base_speed
        self.frame = 0
        self.obstacles: list[Obstacle] = []
        self.agent = self._new_agent()

    @property
    def phase(self) -> Phase:
        return self._machine.phase

    @property
    def is_playing(self) -> bool:
        return self._machine.phase == Phase.PLAYING

    def _new_agent(self) -> Agent:
        return Agent(self.settings.playfield.ground_y, self.settings.agent)

    def _reset(self) -> None:
        self.score = 0
        self.speed = self.settings.difficulty.base_speed
        self.obstacles = []
        self.frame = 0
        self.agent = self._new_agent()

    def start(self) -> bool:
        """Handle the start/restart edge.

        Returns:
            True if a round started, False if one is already running
        """
        if self.phase == Phase.IDLE:
            return self._machine.transition(Phase.PLAYING)

        if self.phase == Phase.GAME_OVER:
            self._reset()
            return self._machine.transition(Phase.PLAYING)

        logger.debug("Start ignored while playing")
        return False

    def step(self, controls: Controls | None = None) -> bool:
        """Advance one frame.

        Args:
            controls: Held keys for this frame; None means nothing pressed

        Returns:
            True if this step ended the round
        """
        if not self.is_playing:
            return False

        crouch = controls.crouch_held if controls else False
        jump = controls.jump_held if controls else False
        self.agent.update(crouch_held=crouch, jump_held=jump)

        spawned = self.spawn_policy.maybe_spawn(self.obstacles, self.speed)
        if spawned is not None:
            self.obstacles.append(spawned)

        collided = False
        agent_box = self.agent.box
        margins = self.settings.collision
        for obstacle in self.obstacles:
            obstacle.step(self.speed)
            if obstacle.retired:
                continue
            if check_collision(agent_box, obstacle.box, margins.agent_margin, margins.obstacle_margin):
                collided = True

        self.obstacles = [o for o in self.obstacles if not o.retired]

        self._advance_clock()

        if collided:
            self._end_round()
        return collided

    def _advance_clock(self) -> None:
        difficulty = self.settings.difficulty
        self.frame += 1
        if self.frame % difficulty.score_interval == 0:
            self.score += 1
        if self.frame % difficulty.speed_interval == 0:
            self.speed += difficulty.speed_step
            logger.debug(f"Speed up to {self.speed:.1f} at frame {self.frame}")
            self._emit(EventType.SPEED_UP, speed=self.speed, frame=self.frame)

    def _end_round(self) -> None:
        """Enter GAME_OVER, then persist a new best score.

        Raises:
            HighScoreError: If the new best cannot be saved. The round is
                already over and ``best_score`` keeps its previous value.
        """
        self._machine.transition(Phase.GAME_OVER, last_score=self.score)

        new_best = self.score > self.best_score
        if new_best:
            self.store.save(self.score)
            self.best_score = self.score

        self._emit(EventType.GAME_OVER, score=self.score, best_score=self.best_score)
        if new_best:
            logger.info(f"New best score {self.best_score}")
            self._emit(EventType.NEW_BEST_SCORE, best_score=self.best_score)

    def _on_phase_change(self, old: Phase, new: Phase, context: PhaseContext) -> None:
        if new == Phase.PLAYING:
            self._emit(EventType.ROUND_STARTED, round=context.rounds_started)
        elif new == Phase.GAME_OVER:
            logger.info(f"Game over at frame {self.frame}: score {self.score}")

    def _emit(self, event_type: EventType, **data) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(Event(event_type, data=data, source="session"))

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            phase=self.phase,
            frame=self.frame,
            score=self.score,
            best_score=self.best_score,
            speed=self.speed,
            agent=AgentPose.of(self.agent),
            obstacles=tuple(ObstacleView.of(o) for o in self.obstacles),
        )
