"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple, Optional


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        alive: whether the snake is still alive
        death_reason: e.g., 'wall', 'self', 'board_full'
        death_tick: the tick number when the snake died
    """

    def __init__(self, positions: List[Tuple[int, int]]):
        if not positions:
            raise ValueError("A snake needs at least one segment.")
        self.positions = deque(positions)
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, cell) -> bool:
        return cell in self.positions

    def advance(self, velocity: Tuple[int, int]) -> Tuple[int, int]:
        """Push a new head one step along velocity and return it."""
        dx, dy = velocity
        hx, hy = self.head
        new_head = (hx + dx, hy + dy)
        self.positions.appendleft(new_head)
        return new_head

    def drop_tail(self) -> Tuple[int, int]:
        return self.positions.pop()

    def hits_itself(self, start_index: int) -> bool:
        """True if the head shares a cell with any segment from start_index on."""
        head = self.head
        for i in range(start_index, len(self.positions)):
            if self.positions[i] == head:
                return True
        return False


def starting_positions(
    width: int,
    height: int,
    preferred: List[Tuple[int, int]],
    unit: int
) -> List[Tuple[int, int]]:
    """
    Return preferred if every segment fits on the board. Otherwise build a
    horizontal snake facing right with its head on the centre cell, as long
    as preferred but cut short where the left wall is reached.
    """
    if all(0 <= x <= width - unit and 0 <= y <= height - unit for x, y in preferred):
        return list(preferred)

    head_col = (width // unit) // 2
    row = (height // unit) // 2
    length = min(len(preferred), head_col + 1)
    return [((head_col - i) * unit, row * unit) for i in range(length)]
