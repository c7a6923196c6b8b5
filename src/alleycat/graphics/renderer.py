"""Paints session snapshots into an RGB frame buffer.

The renderer only reads snapshots; it never touches the session.
"""

from typing import Callable, Dict
import logging

import numpy as np
from numpy.typing import NDArray

from alleycat.config.settings import FieldSettings
from alleycat.core.state import Phase
from alleycat.game.obstacles import ObstacleKind
from alleycat.game.snapshot import AgentPose, ObstacleView, SessionSnapshot
from alleycat.graphics.primitives import (
    Color, draw_line, draw_rect, draw_text, fill, fill_polygon, measure_text
)

logger = logging.getLogger(__name__)

BACKGROUND: Color = (247, 247, 247)
INK: Color = (83, 83, 83)
INK_LIGHT: Color = (136, 136, 136)

CAT: Color = (51, 51, 51)
CAT_EYES: Color = (255, 215, 0)
CACTUS: Color = (46, 139, 87)
CAN_BODY: Color = (119, 136, 153)
CAN_LID: Color = (102, 102, 102)
CAN_STRIPE: Color = (85, 85, 85)
BIRD: Color = (68, 68, 68)
BIRD_BEAK: Color = (255, 165, 0)

# Frames per animation toggle
RUN_PERIOD = 6
FLAP_PERIOD = 10


class Renderer:
    """Draws the ground, the cat, obstacles and the score line."""

    def __init__(self, playfield: FieldSettings | None = None) -> None:
        self.playfield = playfield or FieldSettings()
        self._obstacle_painters: Dict[ObstacleKind, Callable[[NDArray[np.uint8], ObstacleView, SessionSnapshot], None]] = {
            ObstacleKind.CACTUS: self._draw_cactus,
            ObstacleKind.TRASH_CAN: self._draw_trash_can,
            ObstacleKind.BIRD: self._draw_bird,
        }

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.playfield.height, self.playfield.width, 3)

    def new_buffer(self) -> NDArray[np.uint8]:
        return np.zeros(self.shape, dtype=np.uint8)

    def render(self, snapshot: SessionSnapshot, buffer: NDArray[np.uint8]) -> None:
        """Paint one frame.

        Raises:
            ValueError: If the buffer does not match the playfield size
        """
        if buffer.shape != self.shape:
            raise ValueError(f"Buffer shape {buffer.shape} does not match playfield {self.shape}")

        fill(buffer, BACKGROUND)
        ground = int(self.playfield.ground_y)
        draw_line(buffer, 0, ground, self.playfield.width, ground, INK, thickness=2)

        if snapshot.phase == Phase.IDLE:
            self._draw_cat(buffer, snapshot.agent, snapshot)
            self._draw_centered(buffer, "PRESS SPACE TO START", self.playfield.height // 2 - 10, INK, scale=3)
            return

        for obstacle in snapshot.obstacles:
            self._obstacle_painters[obstacle.kind](buffer, obstacle, snapshot)

        self._draw_cat(buffer, snapshot.agent, snapshot)
        self._draw_score(buffer, snapshot)

        if snapshot.phase == Phase.GAME_OVER:
            mid = self.playfield.height // 2
            self._draw_centered(buffer, "GAME OVER", mid - 10, INK, scale=3)
            self._draw_centered(buffer, "PRESS SPACE TO RESTART", mid + 16, INK_LIGHT, scale=2)

    def _draw_centered(self, buffer, text: str, y: int, color: Color, scale: int) -> None:
        x = (self.playfield.width - measure_text(text, scale)) // 2
        draw_text(buffer, text, x, y, color, scale=scale)

    def _draw_score(self, buffer, snapshot: SessionSnapshot) -> None:
        text = f"HI {snapshot.best_score:05d}  {snapshot.score:05d}"
        x = self.playfield.width - 20 - measure_text(text, scale=3)
        draw_text(buffer, text, x, 12, INK, scale=3)

    def _draw_cat(self, buffer, cat: AgentPose, snapshot: SessionSnapshot) -> None:
        x, y, w, h = cat.x, cat.y, cat.width, cat.height

        draw_rect(buffer, x, y, w, h, CAT)

        # Ears
        if not cat.crouching:
            fill_polygon(buffer, [(x + 5, y), (x + 10, y - 8), (x + 15, y)], CAT)
            fill_polygon(buffer, [(x + w - 15, y), (x + w - 10, y - 8), (x + w - 5, y)], CAT)
        else:
            draw_rect(buffer, x + 5, y - 3, 8, 3, CAT)
            draw_rect(buffer, x + w - 13, y - 3, 8, 3, CAT)

        # Tail
        draw_rect(buffer, x - 5, y + 10, 5, 5, CAT)
        draw_rect(buffer, x - 8, y + 5, 5, 5, CAT)

        eye_y = y + (5 if cat.crouching else 10)
        draw_rect(buffer, x + w - 12, eye_y, 3, 3, CAT_EYES)
        draw_rect(buffer, x + w - 22, eye_y, 3, 3, CAT_EYES)

        # Legs
        if not cat.grounded:
            draw_rect(buffer, x + 10, y + h - 5, 5, 5, CAT)
            draw_rect(buffer, x + w - 15, y + h - 5, 5, 5, CAT)
        elif snapshot.animation_phase(RUN_PERIOD) == 0:
            draw_rect(buffer, x + 5, y + h, 6, 4, CAT)
            draw_rect(buffer, x + w - 11, y + h, 6, 4, CAT)
        else:
            draw_rect(buffer, x, y + h, 6, 4, CAT)
            draw_rect(buffer, x + w - 6, y + h, 6, 4, CAT)

    def _draw_cactus(self, buffer, obstacle: ObstacleView, snapshot: SessionSnapshot) -> None:
        unit = obstacle.unit_width
        y, h = obstacle.y, obstacle.height
        for i in range(obstacle.cluster_size):
            ox = obstacle.x + i * unit
            draw_rect(buffer, ox + unit / 3, y, unit / 3, h, CACTUS)
            # Left arm
            draw_rect(buffer, ox, y + 10, unit / 3, 5, CACTUS)
            draw_rect(buffer, ox, y + 5, 5, 10, CACTUS)
            # Right arm
            draw_rect(buffer, ox + unit * 2 / 3, y + 15, unit / 3, 5, CACTUS)
            draw_rect(buffer, ox + unit - 5, y + 8, 5, 12, CACTUS)

    def _draw_trash_can(self, buffer, obstacle: ObstacleView, snapshot: SessionSnapshot) -> None:
        unit = obstacle.unit_width
        y, h = obstacle.y, obstacle.height
        can_w = unit - 2  # Small gap between cans
        for i in range(obstacle.cluster_size):
            ox = obstacle.x + i * unit
            draw_rect(buffer, ox, y + 5, can_w, h - 5, CAN_BODY)
            draw_rect(buffer, ox - 2, y, can_w + 4, 5, CAN_LID)
            draw_rect(buffer, ox + 5, y + 10, can_w - 10, 2, CAN_STRIPE)
            draw_rect(buffer, ox + 5, y + 18, can_w - 10, 2, CAN_STRIPE)

    def _draw_bird(self, buffer, obstacle: ObstacleView, snapshot: SessionSnapshot) -> None:
        x, y, w = obstacle.x, obstacle.y, obstacle.width

        draw_rect(buffer, x, y + 10, w, 10, BIRD)
        draw_rect(buffer, x, y + 5, 10, 10, BIRD)
        draw_rect(buffer, x - 5, y + 8, 5, 4, BIRD_BEAK)

        if snapshot.animation_phase(FLAP_PERIOD) == 0:
            fill_polygon(buffer, [(x + 15, y + 10), (x + 25, y - 5), (x + 35, y + 10)], BIRD)
        else:
            fill_polygon(buffer, [(x + 15, y + 15), (x + 25, y + 25), (x + 35, y + 15)], BIRD)
