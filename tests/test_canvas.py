"""
Tests for the canvas interface, drawing helpers and the Pillow canvas.
"""

import logging
import pytest
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import (
    CANVAS_BACKGROUND_COLOR,
    CANVAS_BORDER_COLOR,
    FOOD_COLOR,
    FOOD_BORDER_COLOR,
    SNAKE_COLOR,
    SNAKE_BORDER_COLOR,
)
from services.canvas import (
    Canvas,
    RecordingCanvas,
    NullCanvas,
    LoggingScoreBoard,
    ScoreBoard,
    clear_canvas,
    draw_food,
    draw_snake,
)
from services.image_canvas import ImageCanvas, to_rgb


class TestRecordingCanvas:
    def test_records_colour_in_effect(self):
        canvas = RecordingCanvas(100, 100)
        canvas.fill_style = "red"
        canvas.fill_rect(0, 0, 10, 10)
        canvas.stroke_style = "blue"
        canvas.stroke_rect(10, 10, 10, 10)

        assert canvas.calls[0] == ("fill", "red", (0, 0, 10, 10))
        assert canvas.calls[1] == ("stroke", "blue", (10, 10, 10, 10))

    def test_reset(self):
        canvas = RecordingCanvas(100, 100)
        clear_canvas(canvas)
        canvas.reset()
        assert canvas.calls == []

    def test_base_canvas_is_abstract(self):
        canvas = Canvas(10, 10)
        with pytest.raises(NotImplementedError):
            canvas.fill_rect(0, 0, 1, 1)
        with pytest.raises(NotImplementedError):
            canvas.stroke_rect(0, 0, 1, 1)

    def test_null_canvas(self):
        canvas = NullCanvas(10, 10)
        clear_canvas(canvas)
        draw_snake(canvas, [(0, 0)])


class TestDrawingHelpers:
    def test_clear_canvas(self):
        canvas = RecordingCanvas(200, 100)
        clear_canvas(canvas)
        assert canvas.calls == [
            ("fill", CANVAS_BACKGROUND_COLOR, (0, 0, 200, 100)),
            ("stroke", CANVAS_BORDER_COLOR, (0, 0, 200, 100)),
        ]

    def test_draw_food(self):
        canvas = RecordingCanvas(100, 100)
        draw_food(canvas, (30, 40))
        assert canvas.calls == [
            ("fill", FOOD_COLOR, (30, 40, 10, 10)),
            ("stroke", FOOD_BORDER_COLOR, (30, 40, 10, 10)),
        ]

    def test_draw_food_without_food(self):
        canvas = RecordingCanvas(100, 100)
        draw_food(canvas, None)
        assert canvas.calls == []

    def test_draw_snake(self):
        canvas = RecordingCanvas(100, 100)
        draw_snake(canvas, [(20, 20), (10, 20)])
        assert canvas.filled_with(SNAKE_COLOR) == [(20, 20, 10, 10), (10, 20, 10, 10)]
        strokes = [c for c in canvas.calls if c.op == "stroke"]
        assert all(c.color == SNAKE_BORDER_COLOR for c in strokes)
        assert len(strokes) == 2


class TestScoreBoards:
    def test_logging_score_board(self, caplog):
        board = LoggingScoreBoard()
        with caplog.at_level(logging.INFO, logger="services.canvas"):
            board.update(30)
        assert board.score == 30
        assert "Score: 30" in caplog.text

    def test_base_score_board(self):
        with pytest.raises(NotImplementedError):
            ScoreBoard().update(10)


class TestImageCanvas:
    def test_image_size_is_scaled(self):
        canvas = ImageCanvas(100, 50, scale=3)
        assert canvas.image.size == (300, 150)
        assert canvas.width == 100

    def test_invalid_scale(self):
        with pytest.raises(ValueError):
            ImageCanvas(10, 10, scale=0)

    def test_fill_and_stroke(self):
        canvas = ImageCanvas(30, 30, scale=2)
        canvas.fill_style = FOOD_COLOR
        canvas.stroke_style = FOOD_BORDER_COLOR
        canvas.fill_rect(10, 10, 10, 10)
        canvas.stroke_rect(10, 10, 10, 10)

        assert canvas.pixel(15, 15) == to_rgb(FOOD_COLOR)
        assert canvas.pixel(10, 10) == to_rgb(FOOD_BORDER_COLOR)
        assert canvas.pixel(0, 0) == to_rgb(CANVAS_BACKGROUND_COLOR)

    def test_to_array(self):
        canvas = ImageCanvas(20, 10)
        assert canvas.to_array().shape == (10, 20, 3)

    def test_named_colours(self):
        assert to_rgb("lightgreen") == (144, 238, 144)
        assert to_rgb("#FFFFFF") == (255, 255, 255)
