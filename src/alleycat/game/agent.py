"""The player-controlled cat.

The cat never moves horizontally; the world scrolls past it. Vertical
motion is a plain per-frame Euler step with constant gravity.
"""

import logging

from alleycat.config.settings import AgentSettings
from alleycat.game.collision import Box

logger = logging.getLogger(__name__)


class Agent:
    """Cat position, vertical velocity and crouch state.

    Invariant: while grounded, ``y + height == ground_y``. ``height`` is
    always either the stand or the crouch height, chosen by ``crouching``.
    """

    def __init__(self, ground_y: float, settings: AgentSettings | None = None):
        self.settings = settings or AgentSettings()
        self.ground_y = ground_y

        self.x = self.settings.x
        self.width = self.settings.width
        self.height = self.settings.stand_height
        self.y = ground_y - self.height

        self.velocity = 0.0
        self.grounded = True
        self.crouching = False

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.width, self.height)

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def apply_input(self, crouch_held: bool, jump_held: bool) -> None:
        """Apply this frame's held keys.

        Crouching while airborne only changes the profile; the re-anchor to
        the ground happens when grounded.
        """
        self.crouching = crouch_held
        self.height = self.settings.crouch_height if crouch_held else self.settings.stand_height

        if self.grounded:
            self.y = self.ground_y - self.height

        if jump_held and self.grounded:
            self.velocity = -self.settings.jump_force
            self.grounded = False
            logger.debug(f"Jump from y={self.y:.1f}")

    def integrate(self) -> None:
        """Advance one frame of vertical motion."""
        self.y += self.velocity

        if self.y + self.height < self.ground_y:
            # No terminal velocity
            self.velocity += self.settings.gravity
            self.grounded = False
        else:
            self.velocity = 0.0
            self.grounded = True
            self.y = self.ground_y - self.height

    def update(self, crouch_held: bool, jump_held: bool) -> None:
        """Input first, then physics, so a jump moves the cat this frame."""
        self.apply_input(crouch_held, jump_held)
        self.integrate()
