"""
Exceptions raised by the snake game engine.
"""


class SnakeGameError(Exception):
    """Base class for game engine errors."""


class BoardFullError(SnakeGameError):
    """Raised when food cannot be placed because every cell holds the snake."""
