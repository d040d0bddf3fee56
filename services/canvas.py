"""
Drawing surface and score display interfaces.

The game engine only talks to a 2D context with settable fill/stroke colours
and two rectangle primitives, plus a score board it pushes the score into.
Concrete surfaces (Pillow image, pygame window) live in their own modules.
"""

import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple

from domain.constants import (
    GRID_UNIT,
    CANVAS_BACKGROUND_COLOR,
    CANVAS_BORDER_COLOR,
    SNAKE_COLOR,
    SNAKE_BORDER_COLOR,
    FOOD_COLOR,
    FOOD_BORDER_COLOR,
)

logger = logging.getLogger(__name__)


class Canvas:
    """
    Base class/interface for a 2D drawing context.

    Subclasses implement fill_rect and stroke_rect using the colour held in
    fill_style / stroke_style at the time of the call.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.fill_style = CANVAS_BACKGROUND_COLOR
        self.stroke_style = CANVAS_BORDER_COLOR

    def fill_rect(self, x: int, y: int, w: int, h: int) -> None:
        raise NotImplementedError

    def stroke_rect(self, x: int, y: int, w: int, h: int) -> None:
        raise NotImplementedError


class DrawCall(NamedTuple):
    op: str
    color: str
    rect: Tuple[int, int, int, int]


class RecordingCanvas(Canvas):
    """Canvas that keeps every draw call in memory. Used for headless tests."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.calls: List[DrawCall] = []

    def fill_rect(self, x, y, w, h):
        self.calls.append(DrawCall("fill", self.fill_style, (x, y, w, h)))

    def stroke_rect(self, x, y, w, h):
        self.calls.append(DrawCall("stroke", self.stroke_style, (x, y, w, h)))

    def filled_with(self, color: str) -> List[Tuple[int, int, int, int]]:
        """Rectangles filled with the given colour, in draw order."""
        return [c.rect for c in self.calls if c.op == "fill" and c.color == color]

    def reset(self):
        self.calls.clear()


class NullCanvas(Canvas):
    """Canvas that discards everything drawn on it."""

    def fill_rect(self, x, y, w, h):
        pass

    def stroke_rect(self, x, y, w, h):
        pass


# -------------------------------
# Drawing helpers
# -------------------------------

def clear_canvas(canvas: Canvas) -> None:
    """Paint the whole canvas with the background colour and draw a border."""
    canvas.fill_style = CANVAS_BACKGROUND_COLOR
    canvas.stroke_style = CANVAS_BORDER_COLOR
    canvas.fill_rect(0, 0, canvas.width, canvas.height)
    canvas.stroke_rect(0, 0, canvas.width, canvas.height)


def draw_food(canvas: Canvas, food: Optional[Tuple[int, int]], unit: int = GRID_UNIT) -> None:
    if food is None:
        return
    fx, fy = food
    canvas.fill_style = FOOD_COLOR
    canvas.stroke_style = FOOD_BORDER_COLOR
    canvas.fill_rect(fx, fy, unit, unit)
    canvas.stroke_rect(fx, fy, unit, unit)


def draw_snake_part(canvas: Canvas, part: Tuple[int, int], unit: int = GRID_UNIT) -> None:
    x, y = part
    canvas.fill_style = SNAKE_COLOR
    canvas.stroke_style = SNAKE_BORDER_COLOR
    canvas.fill_rect(x, y, unit, unit)
    canvas.stroke_rect(x, y, unit, unit)


def draw_snake(canvas: Canvas, positions: Iterable[Tuple[int, int]], unit: int = GRID_UNIT) -> None:
    for part in positions:
        draw_snake_part(canvas, part, unit)


# -------------------------------
# Score display
# -------------------------------

class ScoreBoard:
    """Receives the current score every time it changes."""

    def update(self, score: int) -> None:
        raise NotImplementedError


class NullScoreBoard(ScoreBoard):
    def update(self, score):
        pass


class LoggingScoreBoard(ScoreBoard):
    """Score board that writes the score to the log and remembers the last value."""

    def __init__(self):
        self.score = 0

    def update(self, score):
        self.score = score
        logger.info("Score: %d", score)
