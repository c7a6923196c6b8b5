"""Graphics rendering for ALLEYCAT."""

from alleycat.graphics.renderer import Renderer

__all__ = ["Renderer"]
