"""Axis-aligned hitboxes and the agent/obstacle overlap test."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Box:
    """Axis-aligned rectangle in field coordinates (y grows downward)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def shrink(self, margin: float) -> "Box":
        """Return the box pulled in by ``margin`` on every side."""
        return Box(
            self.x + margin,
            self.y + margin,
            self.width - 2 * margin,
            self.height - 2 * margin,
        )

    def overlaps(self, other: "Box") -> bool:
        """Strict interval intersection on both axes; shared edges don't count."""
        return (
            self.left < other.right
            and self.right > other.left
            and self.top < other.bottom
            and self.bottom > other.top
        )


AGENT_MARGIN = 5.0
OBSTACLE_MARGIN = 4.0


def check_collision(
    agent_box: Box,
    obstacle_box: Box,
    agent_margin: float = AGENT_MARGIN,
    obstacle_margin: float = OBSTACLE_MARGIN,
) -> bool:
    """Test the agent against one obstacle.

    Both hitboxes are shrunk by their fairness margin before testing, so
    boxes that only graze each other inside the margins are not a hit.
    """
    return agent_box.shrink(agent_margin).overlaps(obstacle_box.shrink(obstacle_margin))
