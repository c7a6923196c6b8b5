"""Obstacle spawn policy.

At most one candidate per frame. The only backpressure is the minimum
gap to the newest obstacle, which widens as the game speeds up.
"""

import logging
import random
from typing import Sequence

from alleycat.config.settings import SpawnSettings
from alleycat.game.obstacles import Obstacle, ObstacleKind

logger = logging.getLogger(__name__)


class SpawnPolicy:
    """Decides each frame whether to emit an obstacle, and which kind."""

    def __init__(
        self,
        field_width: float,
        ground_y: float,
        rng: random.Random | None = None,
        settings: SpawnSettings | None = None,
    ):
        self.field_width = field_width
        self.ground_y = ground_y
        self.rng = rng or random.Random()
        self.settings = settings or SpawnSettings()

    def min_gap(self, speed: float) -> float:
        """Required distance from the field's right edge to the newest obstacle."""
        s = self.settings
        return s.gap_base + self.rng.random() * s.gap_jitter + speed * s.gap_per_speed

    def gap_floor(self, speed: float) -> float:
        """Smallest value ``min_gap`` can return at this speed."""
        return self.settings.gap_base + speed * self.settings.gap_per_speed

    def choose_kind(self, speed: float) -> ObstacleKind:
        r = self.rng.random()
        if speed > self.settings.flyer_speed_threshold and r > self.settings.flyer_roll:
            return ObstacleKind.BIRD
        if r > self.settings.tall_roll:
            return ObstacleKind.TRASH_CAN
        return ObstacleKind.CACTUS

    def maybe_spawn(self, obstacles: Sequence[Obstacle], speed: float) -> Obstacle | None:
        """Return a new obstacle at the right edge, or None if the gap is too small."""
        gap = self.min_gap(speed)
        if obstacles and self.field_width - obstacles[-1].x <= gap:
            return None

        kind = self.choose_kind(speed)
        obstacle = Obstacle.spawn(kind, self.field_width, self.ground_y, self.rng)
        logger.debug(f"Spawned {obstacle} at speed {speed:.1f}")
        return obstacle
