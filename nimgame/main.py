import argparse
import logging
import random
import sys
from typing import List, Optional

import yaml

import config
from nimgame.config_loader import build_settings, load_and_merge_config
from nimgame.game_runner import GameContext, GameRunner
from nimgame.logging_config import setup_logging
from nimgame.pygame_view import PresentationError, PygameView

logger = logging.getLogger("nimgame")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play Nim against a computer that never misses a winning move.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        dest="config_file",  # Avoid clashing with the config module
        type=str,
        default=None,
        help="Path to a YAML configuration file.",
    )

    window_group = parser.add_argument_group("Window")
    window_group.add_argument("--window-width", type=int, default=config.WINDOW_WIDTH)
    window_group.add_argument("--window-height", type=int, default=config.WINDOW_HEIGHT)
    window_group.add_argument("--fps", type=int, default=config.FRAMES_PER_SECOND, help="Target frame rate")
    window_group.add_argument(
        "--colour-change-ms",
        type=int,
        default=config.COLOUR_CHANGE_MS,
        help="Time for a hovered counter to reach the highlight colour",
    )
    window_group.add_argument(
        "--result-display-ms",
        type=int,
        default=config.RESULT_DISPLAY_MS,
        help="How long the final position stays on screen unless you quit",
    )

    game_group = parser.add_argument_group("Game")
    game_group.add_argument("--heaps", type=int, default=config.HEAPS_COUNT, help="Number of heaps")
    game_group.add_argument(
        "--max-stones", type=int, default=config.MAX_STONES_PER_HEAP, help="Capacity of every heap"
    )
    game_group.add_argument(
        "--ai-delay-ms",
        type=int,
        default=config.AI_MOVE_DELAY_MS,
        help="Minimum time before the computer answers a move",
    )
    game_group.add_argument(
        "--human-player",
        choices=["one", "two"],
        default=config.HUMAN_PLAYER,
        help="Which player the human controls; player one moves first",
    )
    game_group.add_argument("--seed", type=int, default=None, help="Seed for heap sizes and computer tie-breaks")

    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug)

    try:
        merged = load_and_merge_config(parser, args)
        settings = build_settings(merged)
    except (FileNotFoundError, yaml.YAMLError, ValueError, TypeError) as e:
        logger.error(f"Configuration Error: {e}")
        return 1

    if settings.debug != args.debug:
        setup_logging(debug=settings.debug)
        logger.info(f"Logging level updated based on final config (debug={settings.debug}).")

    context = GameContext.create(settings, rng=random.Random(settings.seed))
    try:
        with PygameView(settings) as view:
            result = GameRunner(context, view).run()
    except PresentationError as e:
        logger.error(f"Fatal: {e}")
        return 1

    if result.winner is None:
        logger.info("Game abandoned.")
    else:
        logger.info(f"Winner: player {result.winner.value} ({result.winner_role.value})")
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
