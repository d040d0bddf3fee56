"""
Random player implementation - presses random safe keys.
"""

import random
from typing import Optional

from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a key whose move avoids walls and self-collisions.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_key(self, game_state: GameState) -> Optional[int]:
        safe = self.safe_keys(game_state)

        # No safe move: keep going (we'll die anyway)
        if not safe:
            return None

        return self.rng.choice(sorted(safe))
