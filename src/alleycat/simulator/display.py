"""
Frame buffer that turns into a pygame surface.

Holds the numpy buffer the renderer paints into each frame.
"""

import pygame
import numpy as np
from numpy.typing import NDArray


class FieldDisplay:
    """
    RGB frame buffer sized to the playfield.

    Uses a numpy buffer and renders to a pygame surface
    with configurable scaling.
    """

    def __init__(self, width: int = 800, height: int = 200) -> None:
        self._width = width
        self._height = height
        self._buffer = np.zeros((height, width, 3), dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def buffer(self) -> NDArray[np.uint8]:
        """The live buffer; renderers paint into it directly."""
        return self._buffer

    def render(self, scale: int = 1) -> pygame.Surface:
        """
        Render buffer to a pygame surface.

        Args:
            scale: Pixel scale factor

        Returns:
            pygame.Surface with rendered display
        """
        # pygame surfaces are indexed (x, y)
        surface = pygame.surfarray.make_surface(self._buffer.swapaxes(0, 1))
        if scale == 1:
            return surface
        return pygame.transform.scale(surface, (self._width * scale, self._height * scale))
