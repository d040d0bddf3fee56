"""
Pillow-backed canvas.

Draws the game onto an in-memory RGB image so frames can be saved or encoded
into a replay video without a window.
"""

from typing import Tuple

import numpy as np
from PIL import Image, ImageColor, ImageDraw

from domain.constants import CANVAS_BACKGROUND_COLOR
from .canvas import Canvas


def to_rgb(color: str) -> Tuple[int, int, int]:
    """Convert a CSS colour name or hex string to an RGB tuple"""
    return ImageColor.getrgb(color)[:3]


class ImageCanvas(Canvas):
    """
    Canvas drawing onto a PIL image.

    width/height are in game units; the image is `scale` times larger so that
    small boards stay readable in a video.
    """

    def __init__(self, width: int, height: int, scale: int = 1):
        if scale < 1:
            raise ValueError(f"scale must be >= 1, got {scale}")
        super().__init__(width, height)
        self.scale = scale
        self.image = Image.new('RGB', (width * scale, height * scale), to_rgb(CANVAS_BACKGROUND_COLOR))
        self.draw = ImageDraw.Draw(self.image)

    def _box(self, x, y, w, h):
        s = self.scale
        return [x * s, y * s, (x + w) * s - 1, (y + h) * s - 1]

    def fill_rect(self, x, y, w, h):
        self.draw.rectangle(self._box(x, y, w, h), fill=to_rgb(self.fill_style))

    def stroke_rect(self, x, y, w, h):
        self.draw.rectangle(self._box(x, y, w, h), outline=to_rgb(self.stroke_style), width=1)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """Colour at a game coordinate (top-left pixel of that scaled cell)."""
        return self.image.getpixel((x * self.scale, y * self.scale))

    def to_array(self) -> np.ndarray:
        return np.array(self.image)
