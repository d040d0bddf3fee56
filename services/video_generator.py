"""
Video Generation Service for Snake Game Replays

This service generates MP4 videos from game replay JSON files by:
1. Rendering each recorded tick with the same drawing routines the game uses,
   onto a Pillow image (ImageCanvas)
2. Adding a footer with the score and tick counter
3. Encoding frames to video using MoviePy/FFmpeg
"""

import os
import json
import logging
import tempfile
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont
from moviepy import ImageSequenceClip

from domain.constants import GRID_UNIT, GAME_SPEED
from domain.game_state import GameState
from .canvas import clear_canvas, draw_food, draw_snake
from .image_canvas import ImageCanvas

logger = logging.getLogger(__name__)

# Video settings
DEFAULT_SCALE = 2  # Pixels per canvas unit
FOOTER_HEIGHT = 40
FOOTER_BACKGROUND = (30, 30, 30)
FOOTER_TEXT = (255, 255, 255)
GAME_OVER_TEXT = (234, 32, 20)


def default_fps(tick_interval_ms: Optional[int]) -> int:
    """Frames per second that play the replay at the speed it was recorded."""
    interval = tick_interval_ms or GAME_SPEED
    return max(1, round(1000 / interval))


class SnakeVideoGenerator:
    """Generate MP4 videos from Snake game replays"""

    def __init__(
        self,
        fps: Optional[int] = None,
        scale: int = DEFAULT_SCALE,
        footer_height: int = FOOTER_HEIGHT
    ):
        self.fps = fps
        self.scale = scale
        self.footer_height = footer_height

        # Try to load a font, fallback to default if not available
        try:
            self.font = ImageFont.truetype("DejaVuSans.ttf", 16)
        except Exception:
            self.font = ImageFont.load_default()

    def _normalize_replay(self, replay_data: Dict[str, Any]) -> Tuple[Dict[str, Any], List[GameState]]:
        """
        Return (metadata, states) from a replay written by
        SnakeGame.save_history_to_json. Board size falls back to the first
        round when the metadata does not carry it.
        """
        metadata = dict(replay_data.get("metadata", {}) or {})
        rounds = replay_data.get("rounds", []) or []
        if not rounds:
            raise ValueError("Replay has no rounds to render")

        metadata.setdefault("width", rounds[0].get("width"))
        metadata.setdefault("height", rounds[0].get("height"))
        grid_unit = metadata.get("grid_unit") or GRID_UNIT

        states = []
        for round_data in rounds:
            round_data = dict(round_data)
            round_data.setdefault("width", metadata["width"])
            round_data.setdefault("height", metadata["height"])
            states.append(GameState.from_dict(round_data, grid_unit=grid_unit))
        return metadata, states

    def render_frame(self, state: GameState, total_ticks: int) -> Image.Image:
        """Render a single frame of the game"""
        board = ImageCanvas(state.width, state.height, scale=self.scale)
        clear_canvas(board)
        draw_food(board, state.food, state.grid_unit)
        draw_snake(board, state.snake_positions, state.grid_unit)

        # libx264 needs even frame dimensions
        frame_width = board.image.width + board.image.width % 2
        frame_height = board.image.height + self.footer_height
        frame_height += frame_height % 2

        img = Image.new('RGB', (frame_width, frame_height), FOOTER_BACKGROUND)
        img.paste(board.image, (0, 0))
        draw = ImageDraw.Draw(img)

        footer_y = board.image.height + (self.footer_height - 16) // 2
        draw.text(
            (10, footer_y),
            f"Score: {state.score}",
            fill=FOOTER_TEXT,
            font=self.font
        )

        if state.alive:
            status_text, status_color = f"Tick {state.tick} / {total_ticks}", FOOTER_TEXT
        else:
            status_text, status_color = f"Game over ({state.death_reason})", GAME_OVER_TEXT
        bbox = draw.textbbox((0, 0), status_text, font=self.font)
        text_width = bbox[2] - bbox[0]
        draw.text(
            (frame_width - text_width - 10, footer_y),
            status_text,
            fill=status_color,
            font=self.font
        )

        return img

    def render_frames(self, replay_data: Dict[str, Any]) -> List[np.ndarray]:
        metadata, states = self._normalize_replay(replay_data)
        total_ticks = metadata.get("ticks") or states[-1].tick

        frames = []
        for i, state in enumerate(states):
            if i % 100 == 0:
                logger.info(f"Rendering frame {i + 1}/{len(states)}")
            frames.append(np.array(self.render_frame(state, total_ticks)))
        return frames

    def generate_video(
        self,
        game_id: str,
        replay_data: Dict[str, Any],
        output_path: Optional[str] = None
    ) -> str:
        """
        Generate a video from a game replay

        Args:
            game_id: The game ID to generate video for
            replay_data: Replay data as written by SnakeGame.save_history_to_json
            output_path: Optional output path (if None, uses temp file)

        Returns:
            Path to the generated video file
        """
        logger.info(f"Starting video generation for game {game_id}")

        frames = self.render_frames(replay_data)
        fps = self.fps or default_fps(replay_data.get("metadata", {}).get("tick_interval_ms"))

        logger.info(f"Rendered {len(frames)} frames, creating video at {fps} fps...")

        # Create output path if not provided
        if output_path is None:
            temp_dir = tempfile.gettempdir()
            output_path = os.path.join(temp_dir, f"{game_id}_replay.mp4")

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        # Create video using MoviePy
        clip = ImageSequenceClip(frames, fps=fps)
        clip.write_videofile(
            output_path,
            codec='libx264',
            audio=False,
            logger=None
        )

        logger.info(f"Video created successfully at {output_path}")
        return output_path


def load_replay(file_path: str) -> Dict[str, Any]:
    """Load replay data from a local JSON file"""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Replay file not found: {file_path}")

    with open(file_path, 'r') as f:
        return json.load(f)


def get_video_local_path(game_id: str, replay_dir: str = "completed_games") -> str:
    """
    Get the local path for a game's video

    Args:
        game_id: The game ID
        replay_dir: Directory holding the replays

    Returns:
        Local path to the video file
    """
    return os.path.join(replay_dir, f"{game_id}_replay.mp4")
