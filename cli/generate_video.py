#!/usr/bin/env python3
"""
Turn a saved snake replay into an MP4.

The replay argument is either a path to a replay JSON file or the id of a
game whose snake_game_<id>.json sits in the replay directory
(SNAKE_REPLAY_DIR, default completed_games). The video is written next to
the replays unless --output says otherwise.
"""

import os
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from services.video_generator import SnakeVideoGenerator, get_video_local_path, load_replay

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

REPLAY_PREFIX = "snake_game_"


def extract_game_id_from_filename(file_path: str) -> str:
    """snake_game_<id>.json -> <id>; any other name is used as is."""
    stem = Path(file_path).stem
    return stem[len(REPLAY_PREFIX):] if stem.startswith(REPLAY_PREFIX) else stem


def resolve_replay(replay: str, replay_dir: str) -> Tuple[str, str]:
    """Return (game_id, replay_path) for a file path or a bare game id."""
    if replay.endswith(".json") or os.path.sep in replay:
        return extract_game_id_from_filename(replay), replay
    return replay, os.path.join(replay_dir, f"{REPLAY_PREFIX}{replay}.json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("replay", help="Replay JSON path or game id")
    parser.add_argument("--output", "-o", default=None,
                        help="Video path (default: <replay dir>/<game_id>_replay.mp4)")
    parser.add_argument("--fps", type=int, default=None,
                        help="Frames per second (default: the speed the game was played at)")
    parser.add_argument("--scale", type=int, default=2,
                        help="Pixels per board unit (default: 2)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = GameConfig.from_env()
        game_id, replay_path = resolve_replay(args.replay, config.replay_dir)
        replay_data = load_replay(replay_path)
        output_path = args.output or get_video_local_path(game_id, config.replay_dir)

        generator = SnakeVideoGenerator(fps=args.fps, scale=args.scale)
        video_path = generator.generate_video(
            game_id=game_id,
            replay_data=replay_data,
            output_path=output_path
        )
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        return 1
    except Exception as e:
        logger.error(f"Could not render {args.replay}: {e}", exc_info=True)
        return 1

    logger.info(f"Wrote {video_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
