"""
Registry for autoplay player variants.

Maps variant keys (e.g., 'random', 'greedy') to player classes so the
command line can pick one by name.
"""

from typing import Dict, List, Type

from .base import Player
from .random_player import RandomPlayer
from .greedy_player import GreedyPlayer


PLAYER_VARIANTS: Dict[str, Type[Player]] = {
    "random": RandomPlayer,
    "greedy": GreedyPlayer,
}

AVAILABLE_VARIANTS: List[str] = sorted(PLAYER_VARIANTS)


def get_player_class(variant: str) -> Type[Player]:
    """
    Get the player class for a variant key.

    Raises:
        ValueError: If the variant is unknown
    """
    key = (variant or "").strip().lower()
    if key not in PLAYER_VARIANTS:
        raise ValueError(
            f"Unknown player variant '{variant}'. Available: {', '.join(AVAILABLE_VARIANTS)}"
        )
    return PLAYER_VARIANTS[key]


def list_variants() -> List[str]:
    return list(AVAILABLE_VARIANTS)
