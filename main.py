import os
import json
import time
import uuid
import random
import logging
import argparse
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from config import GameConfig
from domain.constants import (
    GRID_UNIT,
    GAME_SPEED,
    SCORE_PER_FOOD,
    SELF_COLLISION_START_INDEX,
    FOOD_PLACEMENT_ATTEMPTS,
    KEY_DIRECTIONS,
    INITIAL_SNAKE,
    INITIAL_VELOCITY,
    DEATH_WALL,
    DEATH_SELF,
    DEATH_BOARD_FULL,
)
from domain.errors import BoardFullError
from domain.game_state import GameState
from domain.snake import Snake, starting_positions
from players.base import Player
from players.variant_registry import get_player_class, AVAILABLE_VARIANTS
from services.canvas import (
    Canvas,
    NullCanvas,
    ScoreBoard,
    NullScoreBoard,
    LoggingScoreBoard,
    clear_canvas,
    draw_food,
    draw_snake,
)

logger = logging.getLogger(__name__)


class SnakeGame:
    """
    Manages:
      - Board (taken from the canvas size)
      - Snake, velocity and direction lock
      - Food
      - Score
      - Ticks
      - History for replay
    """
    def __init__(
        self,
        canvas: Canvas,
        score_board: Optional[ScoreBoard] = None,
        snake_positions: Optional[List[Tuple[int, int]]] = None,
        velocity: Tuple[int, int] = INITIAL_VELOCITY,
        rng: Optional[random.Random] = None,
        game_id: Optional[str] = None,
        keep_history: bool = True
    ):
        self.canvas = canvas
        self.score_board = score_board or NullScoreBoard()
        self.width = canvas.width
        self.height = canvas.height
        self.rng = rng or random.Random()

        if snake_positions is None:
            snake_positions = starting_positions(self.width, self.height, INITIAL_SNAKE, GRID_UNIT)
        self.snake = Snake(list(snake_positions))
        self.dx, self.dy = velocity
        self.score = 0
        # Set once a direction key has been handled; cleared at the start of each tick
        self.changing_direction = False
        self.food: Optional[Tuple[int, int]] = None

        self.tick_number = 0
        self.game_over = False
        self.start_time = time.time()
        self.end_time: Optional[float] = None
        self.game_id = game_id or str(uuid.uuid4())

        # For replay; stays empty when keep_history is False
        self.keep_history = keep_history
        self.history: List[GameState] = []

        self.create_food()
        self.record_history()
        logger.info("Game %s started on a %dx%d board", self.game_id, self.width, self.height)

    @property
    def velocity(self) -> Tuple[int, int]:
        return (self.dx, self.dy)

    # -------------------------------
    # Food
    # -------------------------------

    def _random_cell(self) -> Tuple[int, int]:
        cols = self.width // GRID_UNIT
        rows = self.height // GRID_UNIT
        return (self.rng.randrange(cols) * GRID_UNIT,
                self.rng.randrange(rows) * GRID_UNIT)

    def _free_cells(self) -> List[Tuple[int, int]]:
        occupied = set(self.snake.positions)
        return [
            (x * GRID_UNIT, y * GRID_UNIT)
            for y in range(self.height // GRID_UNIT)
            for x in range(self.width // GRID_UNIT)
            if (x * GRID_UNIT, y * GRID_UNIT) not in occupied
        ]

    def _random_free_cell(self) -> Tuple[int, int]:
        """
        Return a random grid cell not occupied by the snake.

        Rejection sampling first; once FOOD_PLACEMENT_ATTEMPTS are used up the
        free cells are listed and one is picked directly, so a nearly full
        board still terminates.
        """
        for _ in range(FOOD_PLACEMENT_ATTEMPTS):
            cell = self._random_cell()
            if cell not in self.snake:
                return cell

        free = self._free_cells()
        if not free:
            raise BoardFullError(
                f"No free cell left on a {self.width}x{self.height} board "
                f"for a snake of length {len(self.snake)}"
            )
        return self.rng.choice(free)

    def create_food(self) -> Tuple[int, int]:
        self.food = self._random_free_cell()
        return self.food

    # -------------------------------
    # Input
    # -------------------------------

    def change_direction(self, key_code: int) -> bool:
        """
        Handle a key press. Returns True if the velocity changed.

        Only one direction key is handled per tick; further presses are
        ignored until the next tick clears the lock. Reversing straight into
        the body is refused.
        """
        if self.changing_direction or self.game_over:
            return False

        direction = KEY_DIRECTIONS.get(key_code)
        if direction is None:
            return False

        self.changing_direction = True

        new_dx, new_dy = direction
        if (new_dx, new_dy) == (-self.dx, -self.dy):
            return False
        if (new_dx, new_dy) == (self.dx, self.dy):
            return False

        self.dx, self.dy = new_dx, new_dy
        return True

    # -------------------------------
    # Rules
    # -------------------------------

    def _collision_reason(self) -> Optional[str]:
        if self.snake.hits_itself(SELF_COLLISION_START_INDEX):
            return DEATH_SELF

        x, y = self.snake.head
        hit_left_wall = x < 0
        hit_right_wall = x > self.width - GRID_UNIT
        hit_top_wall = y < 0
        hit_bottom_wall = y > self.height - GRID_UNIT
        if hit_left_wall or hit_right_wall or hit_top_wall or hit_bottom_wall:
            return DEATH_WALL
        return None

    def did_game_end(self) -> bool:
        """True if the head touched the body or left the board."""
        return self.game_over or self._collision_reason() is not None

    def advance_snake(self) -> bool:
        """
        Move the head one step along the velocity. Returns True if food was
        eaten (the snake keeps its tail and grows by one).
        """
        head = self.snake.advance(self.velocity)

        if head != self.food:
            self.snake.drop_tail()
            return False

        self.score += SCORE_PER_FOOD
        self.score_board.update(self.score)
        logger.debug("Food eaten at %s, score %d", head, self.score)
        try:
            self.create_food()
        except BoardFullError as e:
            logger.info("%s", e)
            self.food = None
            self.end_game(DEATH_BOARD_FULL)
        return True

    def tick(self) -> bool:
        """
        Execute one tick:
          1) Stop if the snake hit a wall or itself
          2) Unlock direction changes
          3) Clear the canvas
          4) Draw the food
          5) Advance the snake (grow + score on food)
          6) Draw the snake

        Returns False once the game is over and no further tick should run.
        """
        if self.game_over:
            return False

        reason = self._collision_reason()
        if reason is not None:
            self.end_game(reason)
            return False

        self.changing_direction = False
        self.tick_number += 1
        self.clear_canvas()
        self.draw_food()
        self.advance_snake()
        self.draw_snake()

        if self.game_over:
            return False
        self.record_history()
        return True

    def end_game(self, reason: str):
        if self.game_over:
            return
        self.game_over = True
        self.end_time = time.time()
        self.snake.alive = False
        self.snake.death_reason = reason
        self.snake.death_tick = self.tick_number
        self.record_history()
        logger.info("Game Over: %s after %d ticks. Score: %d", reason, self.tick_number, self.score)

    # -------------------------------
    # Drawing
    # -------------------------------

    def clear_canvas(self):
        clear_canvas(self.canvas)

    def draw_food(self):
        draw_food(self.canvas, self.food, GRID_UNIT)

    def draw_snake(self):
        draw_snake(self.canvas, self.snake.positions, GRID_UNIT)

    # -------------------------------
    # State & replay
    # -------------------------------

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        return GameState(
            tick=self.tick_number,
            snake_positions=list(self.snake.positions),
            food=self.food,
            velocity=self.velocity,
            score=self.score,
            width=self.width,
            height=self.height,
            alive=self.snake.alive,
            death_reason=self.snake.death_reason,
            grid_unit=GRID_UNIT
        )

    def record_history(self):
        if self.keep_history:
            self.history.append(self.get_current_state())

    def print_board(self):
        """
        Logs a visual representation of the current board state.
        """
        logger.info("\n%s\n", self.get_current_state().print_board())

    def summary(self) -> Dict[str, Any]:
        return {
            "game_id": self.game_id,
            "score": self.score,
            "ticks": self.tick_number,
            "length": len(self.snake),
            "game_over": self.game_over,
            "death_reason": self.snake.death_reason,
        }

    def serialize_history(self) -> List[Dict[str, Any]]:
        """
        Convert the list of GameState objects to a JSON-serializable list of dicts.
        """
        return [state.to_dict() for state in self.history]

    def build_replay(self, tick_interval_ms: Optional[int] = None) -> Dict[str, Any]:
        end_time = self.end_time if self.end_time is not None else time.time()
        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.fromtimestamp(end_time, tz=timezone.utc).isoformat(),
            "width": self.width,
            "height": self.height,
            "grid_unit": GRID_UNIT,
            "final_score": self.score,
            "death_reason": self.snake.death_reason,
            "ticks": self.tick_number,
            "tick_interval_ms": tick_interval_ms,
        }
        return {
            "metadata": metadata,
            "rounds": self.serialize_history()
        }

    def save_history_to_json(
        self,
        filename: Optional[str] = None,
        directory: str = "completed_games",
        tick_interval_ms: Optional[int] = None
    ) -> str:
        if not self.keep_history:
            raise ValueError(
                f"Game {self.game_id} was created with keep_history=False; there is no replay to save"
            )
        if filename is None:
            filename = f"snake_game_{self.game_id}.json"

        data = self.build_replay(tick_interval_ms)

        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, filename)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)

        logger.info("Saved replay to %s", path)
        return path


class GameLoop:
    """
    Runs a SnakeGame one tick at a time, waiting `interval` seconds between
    ticks through the `wait` hook.

    The hook defaults to time.sleep. Front ends replace it with one that
    processes input while waiting; tests pass a no-op so no real time passes.
    If a player is given it is asked for a key before every tick.
    """

    def __init__(
        self,
        game: SnakeGame,
        interval: float = GAME_SPEED / 1000,
        wait: Callable[[float], None] = time.sleep,
        player: Optional[Player] = None,
        max_ticks: Optional[int] = None,
        on_tick: Optional[Callable[[SnakeGame], None]] = None
    ):
        self.game = game
        self.interval = interval
        self.wait = wait
        self.player = player
        self.max_ticks = max_ticks
        self.on_tick = on_tick
        self.ticks = 0
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    def stop(self):
        """Stop scheduling ticks. Safe to call from the wait hook."""
        self._stopped = True

    def step(self) -> bool:
        """Run a single tick. Returns False when the loop should end."""
        if self._stopped:
            return False
        if self.max_ticks is not None and self.ticks >= self.max_ticks:
            return False

        if self.player is not None and not self.game.game_over:
            key = self.player.get_key(self.game.get_current_state())
            if key is not None:
                self.game.change_direction(key)

        ticked_before = self.game.tick_number
        running = self.game.tick()
        if self.game.tick_number != ticked_before:
            self.ticks += 1
            if self.on_tick is not None:
                self.on_tick(self.game)
        return running

    def run(self) -> int:
        """Tick until the game ends, the loop is stopped, or max_ticks is hit."""
        while self.step():
            self.wait(self.interval)
            if self._stopped:
                break
        return self.ticks


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(
    config: GameConfig,
    player: Player,
    seed: Optional[int] = None,
    max_ticks: Optional[int] = None,
    save_replay: bool = False
) -> Dict[str, Any]:
    """
    Runs a headless game driven by an autoplay player.

    Args:
        config: Board size, speed and replay directory.
        player: Player that presses keys for the snake.
        seed: Optional seed for food placement.
        max_ticks: Optional cap on the number of ticks.
        save_replay: Write the replay JSON to config.replay_dir.

    Returns:
        A dictionary summarizing the game (game_id, score, ticks, death_reason).
    """
    game = SnakeGame(
        canvas=NullCanvas(config.width, config.height),
        score_board=LoggingScoreBoard(),
        rng=random.Random(seed),
        keep_history=save_replay
    )
    loop = GameLoop(game, interval=0, wait=lambda _: None, player=player, max_ticks=max_ticks)
    loop.run()

    result = game.summary()
    if save_replay:
        result["replay_path"] = game.save_history_to_json(
            directory=config.replay_dir,
            tick_interval_ms=config.tick_interval_ms
        )
    return result


# -------------------------------
# Main Entry Point
# -------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play Snake in a window, or let an autoplay player run it headless."
    )
    parser.add_argument("--width", type=int, default=None,
                        help="Board width in canvas units (default: SNAKE_BOARD_WIDTH or 300)")
    parser.add_argument("--height", type=int, default=None,
                        help="Board height in canvas units (default: SNAKE_BOARD_HEIGHT or 300)")
    parser.add_argument("--speed", type=int, default=None,
                        help="Milliseconds between ticks (default: SNAKE_GAME_SPEED_MS or 80)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement")
    parser.add_argument("--autoplay", type=str, default=None, choices=AVAILABLE_VARIANTS,
                        help="Let a player press the keys")
    parser.add_argument("--headless", action="store_true",
                        help="Run without a window (requires --autoplay)")
    parser.add_argument("--max-ticks", type=int, default=None,
                        help="Stop after this many ticks")
    parser.add_argument("--save-replay", action="store_true",
                        help="Write the replay JSON when the game ends")
    parser.add_argument("--replay-dir", type=str, default=None,
                        help="Directory for replay files (default: SNAKE_REPLAY_DIR or completed_games)")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default: SNAKE_LOG_LEVEL or INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.headless and not args.autoplay:
        parser.error("--headless needs an --autoplay player")

    try:
        config = GameConfig.from_env().with_overrides(
            width=args.width,
            height=args.height,
            tick_interval_ms=args.speed,
            replay_dir=args.replay_dir,
            log_level=args.log_level.upper() if args.log_level else None,
        )
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=config.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    player = get_player_class(args.autoplay)() if args.autoplay else None

    try:
        if args.headless:
            result = run_simulation(
                config,
                player,
                seed=args.seed,
                max_ticks=args.max_ticks,
                save_replay=args.save_replay
            )
        else:
            from frontends.pygame_app import PygameApp

            app = PygameApp(config, player=player, seed=args.seed, max_ticks=args.max_ticks)
            result = app.run(save_replay=args.save_replay)
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        return 1
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return 1

    print("\nGame Summary:")
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
