"""
Runtime configuration for the snake game.

Values come from environment variables (a local .env file is loaded first)
and can be overridden from the command line.

Uses environment variables:
- SNAKE_BOARD_WIDTH: board width in canvas units (default 300)
- SNAKE_BOARD_HEIGHT: board height in canvas units (default 300)
- SNAKE_GAME_SPEED_MS: milliseconds between ticks (default 80)
- SNAKE_REPLAY_DIR: where replay JSON files are written (default completed_games)
- SNAKE_LOG_LEVEL: logging level name (default INFO)
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

from domain.constants import GRID_UNIT, GAME_SPEED, DEFAULT_WIDTH, DEFAULT_HEIGHT

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# The board has to hold a snake and one piece of food
MIN_BOARD_CELLS = 2


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class GameConfig:
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    tick_interval_ms: int = GAME_SPEED
    replay_dir: str = "completed_games"
    log_level: str = "INFO"

    def __post_init__(self):
        min_size = MIN_BOARD_CELLS * GRID_UNIT
        if self.width < min_size or self.height < min_size:
            raise ValueError(
                f"Board must be at least {min_size}x{min_size}, got {self.width}x{self.height}"
            )
        if self.tick_interval_ms <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {self.tick_interval_ms}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "GameConfig":
        load_dotenv(dotenv_path)
        return cls(
            width=_int_from_env("SNAKE_BOARD_WIDTH", DEFAULT_WIDTH),
            height=_int_from_env("SNAKE_BOARD_HEIGHT", DEFAULT_HEIGHT),
            tick_interval_ms=_int_from_env("SNAKE_GAME_SPEED_MS", GAME_SPEED),
            replay_dir=os.getenv("SNAKE_REPLAY_DIR", "completed_games"),
            log_level=os.getenv("SNAKE_LOG_LEVEL", "INFO").upper(),
        )

    def with_overrides(self, **overrides) -> "GameConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
