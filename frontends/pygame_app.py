"""
pygame window front end.

Draws the game into a window sized to the board, turns arrow key presses into
the engine's key codes and shows the score in the window caption. Input is
processed while the loop waits between ticks; closing the window (or ESC)
stops the game. When the snake dies the last frame stays up until the window
is closed.
"""

import logging
import random
from typing import Any, Dict, Optional

import pygame

from config import GameConfig
from domain.constants import LEFT_KEY, UP_KEY, RIGHT_KEY, DOWN_KEY
from main import SnakeGame, GameLoop
from players.base import Player
from services.canvas import Canvas, ScoreBoard

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Snake"
IDLE_FPS = 30

PYGAME_KEY_CODES = {
    pygame.K_LEFT: LEFT_KEY,
    pygame.K_UP: UP_KEY,
    pygame.K_RIGHT: RIGHT_KEY,
    pygame.K_DOWN: DOWN_KEY,
}


def translate_key(pygame_key: int) -> Optional[int]:
    """Map a pygame key constant to an arrow key code, or None."""
    return PYGAME_KEY_CODES.get(pygame_key)


class PygameCanvas(Canvas):
    """Canvas drawing straight onto a pygame surface."""

    def __init__(self, surface: pygame.Surface):
        width, height = surface.get_size()
        super().__init__(width, height)
        self.surface = surface

    def fill_rect(self, x, y, w, h):
        pygame.draw.rect(self.surface, pygame.Color(self.fill_style), pygame.Rect(x, y, w, h))

    def stroke_rect(self, x, y, w, h):
        pygame.draw.rect(self.surface, pygame.Color(self.stroke_style), pygame.Rect(x, y, w, h), width=1)


class CaptionScoreBoard(ScoreBoard):
    """Shows the score in the window title."""

    def __init__(self, title: str = WINDOW_TITLE):
        self.title = title
        self.score = 0

    def caption(self) -> str:
        return f"{self.title} - Score: {self.score}"

    def update(self, score):
        self.score = score
        pygame.display.set_caption(self.caption())


class PygameApp:
    def __init__(
        self,
        config: GameConfig,
        player: Optional[Player] = None,
        seed: Optional[int] = None,
        max_ticks: Optional[int] = None
    ):
        self.config = config
        self.player = player
        self.seed = seed
        self.max_ticks = max_ticks
        self.running = True
        self.game: Optional[SnakeGame] = None
        self.loop: Optional[GameLoop] = None

    # ----------------- events -----------------
    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit()
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.quit()
                    continue
                key = translate_key(event.key)
                if key is not None and self.game is not None:
                    self.game.change_direction(key)

    def quit(self):
        self.running = False
        if self.loop is not None:
            self.loop.stop()

    def wait(self, seconds: float):
        """Show the frame just drawn, then process input until the next tick is due."""
        pygame.display.flip()
        deadline = pygame.time.get_ticks() + int(seconds * 1000)
        while self.running:
            self.handle_events()
            remaining = deadline - pygame.time.get_ticks()
            if remaining <= 0:
                break
            pygame.time.wait(min(remaining, 5))

    # ----------------- main loop -----------------
    def run(self, save_replay: bool = False) -> Dict[str, Any]:
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.config.width, self.config.height))
            score_board = CaptionScoreBoard()
            pygame.display.set_caption(score_board.caption())

            self.game = SnakeGame(
                canvas=PygameCanvas(screen),
                score_board=score_board,
                rng=random.Random(self.seed),
                keep_history=save_replay
            )
            self.loop = GameLoop(
                self.game,
                interval=self.config.tick_interval,
                wait=self.wait,
                player=self.player,
                max_ticks=self.max_ticks
            )
            self.loop.run()
            pygame.display.flip()

            if self.game.game_over:
                pygame.display.set_caption(f"{score_board.caption()} - Game Over")

            # keep the final frame until the window is closed
            clock = pygame.time.Clock()
            while self.running:
                self.handle_events()
                clock.tick(IDLE_FPS)
        finally:
            pygame.quit()

        result = self.game.summary()
        if save_replay:
            result["replay_path"] = self.game.save_history_to_json(
                directory=self.config.replay_dir,
                tick_interval_ms=self.config.tick_interval_ms
            )
        return result
