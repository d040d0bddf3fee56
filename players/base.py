"""
Base player interface for the game engine.
"""

from typing import Dict, List, Optional, Tuple

from domain.constants import KEY_DIRECTIONS
from domain.game_state import GameState


class Player:
    """
    Base class/interface for player logic.

    A player stands in for the keyboard: each tick it may return the key
    code it would press, or None to keep the current direction.
    """

    def get_key(self, game_state: GameState) -> Optional[int]:
        """
        Return a key code given the current game state.

        Args:
            game_state: Current state of the game

        Returns:
            One of the arrow key codes (37-40), or None
        """
        raise NotImplementedError

    @staticmethod
    def safe_keys(game_state: GameState) -> Dict[int, Tuple[int, int]]:
        """
        Map each arrow key to the cell it would move the head to, keeping only
        moves that stay on the board, do not reverse, and do not run into the
        body (the tail is excluded since it moves away).
        """
        positions: List[Tuple[int, int]] = game_state.snake_positions
        head_x, head_y = positions[0]
        vx, vy = game_state.velocity

        safe = {}
        for key, (dx, dy) in KEY_DIRECTIONS.items():
            if (dx, dy) == (-vx, -vy):
                continue
            cell = (head_x + dx, head_y + dy)
            if not game_state.in_bounds(cell):
                continue
            if cell in positions[:-1]:
                continue
            safe[key] = cell
        return safe
