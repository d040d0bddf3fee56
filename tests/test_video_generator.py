"""
Tests for the replay video generator.
"""

import random
import pytest
import sys
import os
from unittest.mock import patch, MagicMock

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import FOOD_COLOR, SNAKE_COLOR, CANVAS_BACKGROUND_COLOR
from domain.game_state import GameState
from main import SnakeGame
from services.canvas import RecordingCanvas
from services.image_canvas import to_rgb
from services.video_generator import (
    SnakeVideoGenerator,
    default_fps,
    get_video_local_path,
    load_replay,
)


def sample_replay():
    game = SnakeGame(
        canvas=RecordingCanvas(100, 60),
        snake_positions=[(50, 30), (40, 30)],
        rng=random.Random(4)
    )
    game.food = (10, 10)
    game.tick()
    game.tick()
    return game.build_replay(tick_interval_ms=80)


def test_normalize_replay():
    """_normalize_replay turns rounds into GameState snapshots."""
    generator = SnakeVideoGenerator(fps=1)
    metadata, states = generator._normalize_replay(sample_replay())

    assert metadata["width"] == 100
    assert metadata["height"] == 60
    assert len(states) == 3
    assert all(isinstance(s, GameState) for s in states)
    assert states[-1].snake_positions[0] == (70, 30)


def test_normalize_replay_fills_board_size_from_rounds():
    """Older replays without width/height in metadata still load."""
    replay = sample_replay()
    del replay["metadata"]["width"]
    del replay["metadata"]["height"]

    metadata, states = SnakeVideoGenerator()._normalize_replay(replay)
    assert metadata["width"] == 100
    assert states[0].height == 60


def test_normalize_replay_without_rounds():
    with pytest.raises(ValueError):
        SnakeVideoGenerator()._normalize_replay({"metadata": {}, "rounds": []})


def test_render_frame_draws_board_and_footer():
    generator = SnakeVideoGenerator(scale=2, footer_height=40)
    state = GameState(
        tick=1,
        snake_positions=[(50, 30), (40, 30)],
        food=(10, 10),
        velocity=(10, 0),
        score=20,
        width=100,
        height=60,
    )

    frame = generator.render_frame(state, total_ticks=5)

    assert frame.size == (200, 160)
    assert frame.getpixel((30, 30)) == to_rgb(FOOD_COLOR)
    assert frame.getpixel((110, 70)) == to_rgb(SNAKE_COLOR)
    assert frame.getpixel((160, 100)) == to_rgb(CANVAS_BACKGROUND_COLOR)


def test_render_frame_even_dimensions():
    """Odd board sizes are padded to even frame sizes for the encoder."""
    generator = SnakeVideoGenerator(scale=1, footer_height=15)
    state = GameState(0, [(0, 0)], None, (10, 0), 0, 35, 20)
    frame = generator.render_frame(state, total_ticks=0)
    assert frame.size[0] % 2 == 0
    assert frame.size[1] % 2 == 0


def test_default_fps():
    assert default_fps(80) == 12
    assert default_fps(500) == 2
    assert default_fps(None) == 12
    assert default_fps(5000) == 1


@patch("services.video_generator.ImageSequenceClip")
def test_generate_video(mock_clip_cls, tmp_path):
    """generate_video encodes one frame per recorded tick."""
    mock_clip = MagicMock()
    mock_clip_cls.return_value = mock_clip
    output_path = str(tmp_path / "videos" / "game.mp4")

    generator = SnakeVideoGenerator()
    result = generator.generate_video("game", sample_replay(), output_path=output_path)

    assert result == output_path
    frames = mock_clip_cls.call_args[0][0]
    assert len(frames) == 3
    assert mock_clip_cls.call_args[1]["fps"] == 12
    mock_clip.write_videofile.assert_called_once()
    assert mock_clip.write_videofile.call_args[0][0] == output_path
    assert os.path.isdir(tmp_path / "videos")


def test_load_replay_round_trip(tmp_path):
    game = SnakeGame(canvas=RecordingCanvas(100, 60), rng=random.Random(4))
    path = game.save_history_to_json(directory=str(tmp_path))

    data = load_replay(path)
    assert data["metadata"]["game_id"] == game.game_id


def test_load_replay_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_replay(str(tmp_path / "missing.json"))


def test_get_video_local_path():
    assert get_video_local_path("abc", "replays") == os.path.join("replays", "abc_replay.mp4")
