"""
Greedy player implementation - heads for the food along safe moves.
"""

from typing import Optional

from domain.game_state import GameState
from .base import Player


class GreedyPlayer(Player):
    """
    Picks the safe move that brings the head closest (Manhattan distance) to
    the food. Ties are broken by key code so the choice is deterministic.
    """

    def get_key(self, game_state: GameState) -> Optional[int]:
        safe = self.safe_keys(game_state)
        if not safe:
            return None

        if game_state.food is None:
            return min(safe)

        fx, fy = game_state.food

        def distance(key):
            x, y = safe[key]
            return abs(x - fx) + abs(y - fy)

        return min(sorted(safe), key=distance)
