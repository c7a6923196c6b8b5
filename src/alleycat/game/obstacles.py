"""Scrolling obstacles: cactus clusters, trash cans and birds."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from alleycat.game.collision import Box


@dataclass(frozen=True)
class ObstacleProfile:
    """Per-kind geometry and motion rules."""

    cluster_sizes: tuple[int, ...]
    unit_width: float
    height_range: tuple[float, float]  # [low, high)
    speed_multiplier: float = 1.0
    # Top edge drawn from [ground - high, ground - low); None sits on the ground
    airborne_range: tuple[float, float] | None = None


class ObstacleKind(Enum):
    """Obstacle variants. The value is the name used by logs and snapshots."""

    CACTUS = "cactus"        # Low barrier, jump over
    TRASH_CAN = "trash_can"  # Tall barrier, jump over
    BIRD = "bird"            # Flyer, duck under

    @property
    def profile(self) -> ObstacleProfile:
        return _PROFILES[self]

    @property
    def is_flyer(self) -> bool:
        return self.profile.airborne_range is not None


_PROFILES: dict[ObstacleKind, ObstacleProfile] = {
    ObstacleKind.CACTUS: ObstacleProfile(
        cluster_sizes=(1, 2, 3),
        unit_width=20.0,
        height_range=(35.0, 55.0),
    ),
    ObstacleKind.TRASH_CAN: ObstacleProfile(
        cluster_sizes=(1, 2),
        unit_width=30.0,
        height_range=(30.0, 40.0),
    ),
    ObstacleKind.BIRD: ObstacleProfile(
        cluster_sizes=(1,),
        unit_width=40.0,
        height_range=(25.0, 25.0),
        speed_multiplier=1.2,
        airborne_range=(50.0, 70.0),
    ),
}


def _draw(rng: random.Random, low: float, high: float) -> float:
    """Uniform draw from the half-open range [low, high)."""
    return low + rng.random() * (high - low)


class Obstacle:
    """One obstacle, possibly a cluster of sub-units sharing a single hitbox."""

    def __init__(
        self,
        kind: ObstacleKind,
        x: float,
        y: float,
        width: float,
        height: float,
        cluster_size: int = 1,
    ):
        self.kind = kind
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.cluster_size = cluster_size
        self.retired = False

    @classmethod
    def spawn(
        cls,
        kind: ObstacleKind,
        x: float,
        ground_y: float,
        rng: random.Random,
    ) -> "Obstacle":
        """Build an obstacle at ``x`` with randomized, kind-dependent geometry."""
        profile = kind.profile
        cluster_size = rng.choice(profile.cluster_sizes)
        width = profile.unit_width * cluster_size

        low, high = profile.height_range
        height = low if low == high else _draw(rng, low, high)

        if profile.airborne_range is None:
            y = ground_y - height
        else:
            lift_low, lift_high = profile.airborne_range
            y = _draw(rng, ground_y - lift_high, ground_y - lift_low)

        return cls(kind, x, y, width, height, cluster_size)

    @property
    def box(self) -> Box:
        """Combined hitbox spanning the whole cluster."""
        return Box(self.x, self.y, self.width, self.height)

    @property
    def speed_multiplier(self) -> float:
        return self.kind.profile.speed_multiplier

    def step(self, speed: float) -> None:
        """Scroll left; retire once fully past the left edge of the field."""
        self.x -= speed * self.speed_multiplier
        if self.x + self.width < 0:
            self.retired = True

    def __repr__(self) -> str:
        return (
            f"Obstacle({self.kind.value}, x={self.x:.1f}, y={self.y:.1f}, "
            f"w={self.width:.0f}, h={self.height:.1f}, n={self.cluster_size})"
        )
