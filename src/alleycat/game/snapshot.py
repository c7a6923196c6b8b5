"""Read-only views of session state handed to the renderer after each step."""

from __future__ import annotations

from dataclasses import dataclass

from alleycat.core.state import Phase
from alleycat.game.agent import Agent
from alleycat.game.obstacles import Obstacle, ObstacleKind


@dataclass(frozen=True)
class AgentPose:
    x: float
    y: float
    width: float
    height: float
    crouching: bool
    grounded: bool

    @classmethod
    def of(cls, agent: Agent) -> "AgentPose":
        return cls(agent.x, agent.y, agent.width, agent.height, agent.crouching, agent.grounded)


@dataclass(frozen=True)
class ObstacleView:
    kind: ObstacleKind
    x: float
    y: float
    width: float
    height: float
    cluster_size: int

    @classmethod
    def of(cls, obstacle: Obstacle) -> "ObstacleView":
        return cls(
            obstacle.kind,
            obstacle.x,
            obstacle.y,
            obstacle.width,
            obstacle.height,
            obstacle.cluster_size,
        )

    @property
    def unit_width(self) -> float:
        return self.width / self.cluster_size


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a renderer may read. Obstacles are in spawn order."""

    phase: Phase
    frame: int
    score: int
    best_score: int
    speed: float
    agent: AgentPose
    obstacles: tuple[ObstacleView, ...]

    def animation_phase(self, period: int) -> int:
        """0/1 toggle that flips every ``period`` frames."""
        return (self.frame // period) % 2
