"""
Domain entities for the snake game engine.

This module contains the core game entities that are independent of
rendering and input concerns (canvas, keyboard, video export).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, GRID_UNIT,
    LEFT_KEY, UP_KEY, RIGHT_KEY, DOWN_KEY, KEY_DIRECTIONS,
)
from .errors import SnakeGameError, BoardFullError
from .snake import Snake
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'GRID_UNIT',
    'LEFT_KEY', 'UP_KEY', 'RIGHT_KEY', 'DOWN_KEY', 'KEY_DIRECTIONS',
    'SnakeGameError', 'BoardFullError',
    'Snake',
    'GameState',
]
