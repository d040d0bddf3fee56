"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Tuple, Optional

from .constants import GRID_UNIT


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        tick: which tick we are in (0-based)
        snake_positions: list of (x, y) from head to tail
        food: (x, y) of the food, or None if none could be placed
        velocity: (dx, dy) the snake moves by on the next tick
        score: current score
        width, height: board dimensions in canvas units
        alive: whether the snake is still alive
        death_reason: why the game ended, if it has
    """

    def __init__(
        self,
        tick: int,
        snake_positions: List[Tuple[int, int]],
        food: Optional[Tuple[int, int]],
        velocity: Tuple[int, int],
        score: int,
        width: int,
        height: int,
        alive: bool = True,
        death_reason: Optional[str] = None,
        grid_unit: int = GRID_UNIT
    ):
        self.tick = tick
        self.snake_positions = snake_positions
        self.food = food
        self.velocity = velocity
        self.score = score
        self.width = width
        self.height = height
        self.alive = alive
        self.death_reason = death_reason
        self.grid_unit = grid_unit

    @property
    def head(self) -> Tuple[int, int]:
        return self.snake_positions[0]

    def in_bounds(self, cell: Tuple[int, int]) -> bool:
        x, y = cell
        return (0 <= x <= self.width - self.grid_unit and
                0 <= y <= self.height - self.grid_unit)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation, used for replays."""
        return {
            "round_number": self.tick,
            "snake_positions": [list(p) for p in self.snake_positions],
            "food": list(self.food) if self.food is not None else None,
            "velocity": list(self.velocity),
            "score": self.score,
            "alive": self.alive,
            "death_reason": self.death_reason,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], grid_unit: int = GRID_UNIT) -> "GameState":
        food = data.get("food")
        return cls(
            tick=data.get("round_number", 0),
            snake_positions=[tuple(p) for p in data.get("snake_positions", [])],
            food=tuple(food) if food is not None else None,
            velocity=tuple(data.get("velocity", (0, 0))),
            score=data.get("score", 0),
            width=data["width"],
            height=data["height"],
            alive=data.get("alive", True),
            death_reason=data.get("death_reason"),
            grid_unit=grid_unit,
        )

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        T = snake tail
        H = snake head
        Row 0 is the top of the canvas; cells are one grid unit wide.
        """
        cols = self.width // self.grid_unit
        rows = self.height // self.grid_unit

        # Create empty board
        board = [['.' for _ in range(cols)] for _ in range(rows)]

        if self.food is not None:
            fx, fy = self.food
            board[fy // self.grid_unit][fx // self.grid_unit] = 'F'

        # Draw the tail first so the head stays visible when they overlap
        for pos_idx in range(len(self.snake_positions) - 1, -1, -1):
            x, y = self.snake_positions[pos_idx]
            if not self.in_bounds((x, y)):
                continue
            board[y // self.grid_unit][x // self.grid_unit] = 'H' if pos_idx == 0 else 'T'

        return "\n".join(f"{r:2d} {' '.join(board[r])}" for r in range(rows))

    def __repr__(self):
        return (
            f"<GameState tick={self.tick}, food={self.food}, "
            f"length={len(self.snake_positions)}, score={self.score}>"
        )
