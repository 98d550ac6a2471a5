import argparse
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import yaml

from nimgame.nim_game import Player

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSettings:
    """Startup configuration for one game. Durations are in seconds."""

    window_width: int = 1200
    window_height: int = 800
    frame_interval: float = 1.0 / 60
    ai_move_delay: float = 0.5
    heaps_count: int = 25
    max_stones_per_heap: int = 40
    colour_change_time: float = 0.5
    result_display_time: float = 3.0
    human_player: Player = Player.ONE
    seed: Optional[int] = None
    debug: bool = False


def load_yaml_config(file_path: str) -> Dict[str, Any]:
    """Loads configuration from a YAML file.

    Args:
        file_path: The path to the YAML configuration file.

    Returns:
        A dictionary containing the configuration loaded from the file.
        Returns an empty dictionary if the file is empty.

    Raises:
        FileNotFoundError: If the file_path does not exist.
        yaml.YAMLError: If there is an error parsing the YAML file.
    """
    try:
        with open(file_path, "r") as f:
            config = yaml.safe_load(f)
            return config if config else {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML file {file_path}: {e}")
        raise
    except OSError as e:
        logger.error(f"Error reading configuration file {file_path}: {e}")
        raise


def merge_configs(
    yaml_config: Dict[str, Any],
    args: argparse.Namespace,
    parser: argparse.ArgumentParser,
) -> Dict[str, Any]:
    """Merges YAML configuration with command-line arguments.

    Precedence, highest first: arguments given on the command line (any
    value differing from the parser default), values from the YAML file,
    parser defaults. Keys in the YAML file use the argument ``dest`` names,
    e.g. ``ai_delay_ms``.

    Args:
        yaml_config: Configuration loaded from the YAML file.
        args: Parsed command-line arguments namespace.
        parser: The ArgumentParser instance used to parse args.

    Returns:
        A dictionary containing the final merged configuration.
    """
    merged_config = yaml_config.copy()
    args_dict = vars(args)

    for action in parser._actions:
        arg_name = action.dest
        if arg_name in ("help", "config_file"):
            continue

        cli_value = args_dict.get(arg_name)
        default_value = parser.get_default(arg_name)

        if isinstance(action, argparse._StoreTrueAction):
            is_cli_provided = cli_value is True
        elif isinstance(action, argparse._StoreFalseAction):
            is_cli_provided = cli_value is False
        else:
            is_cli_provided = cli_value != default_value

        if is_cli_provided:
            merged_config[arg_name] = cli_value
        elif arg_name not in yaml_config:
            merged_config[arg_name] = default_value

    logger.debug(f"Final merged config: {merged_config}")
    return merged_config


def load_and_merge_config(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> Dict[str, Any]:
    """Loads the YAML config named by ``--config`` and merges it with CLI arguments.

    Raises:
        FileNotFoundError: If the specified config_file does not exist.
        yaml.YAMLError: If the YAML file cannot be parsed.
    """
    yaml_config: Dict[str, Any] = {}
    config_file_path = getattr(args, "config_file", None)

    if config_file_path:
        logger.info(f"Loading configuration from: {config_file_path}")
        yaml_config = load_yaml_config(config_file_path)
    else:
        logger.debug("No configuration file specified (--config). Using command-line arguments and defaults.")

    return merge_configs(yaml_config, args, parser)


def _setting(config: Dict[str, Any], key: str, default: Any, convert: Callable[[Any], Any]) -> Any:
    value = config.get(key)
    if value is None:
        return default
    return convert(value)


def build_settings(config: Dict[str, Any]) -> GameSettings:
    """Turn a merged configuration dictionary into GameSettings.

    Numbers may come from YAML as strings and are converted; missing or
    null values fall back to the defaults. Beyond that values are taken as
    given; only ``human_player`` is checked because it has to name one of
    the two players.

    Raises:
        ValueError: If human_player is not "one" or "two", or a number
            cannot be parsed.
        TypeError: If a value has a type that cannot become a number.
    """
    defaults = GameSettings()
    human_player = str(config.get("human_player") or defaults.human_player.value).lower()
    try:
        player = Player(human_player)
    except ValueError:
        raise ValueError(f"human_player must be 'one' or 'two', got {human_player!r}") from None

    fps = _setting(config, "fps", None, float)
    ai_delay_ms = _setting(config, "ai_delay_ms", None, float)
    colour_change_ms = _setting(config, "colour_change_ms", None, float)
    result_display_ms = _setting(config, "result_display_ms", None, float)
    seed = _setting(config, "seed", None, int)

    return GameSettings(
        window_width=_setting(config, "window_width", defaults.window_width, int) or defaults.window_width,
        window_height=_setting(config, "window_height", defaults.window_height, int) or defaults.window_height,
        frame_interval=1.0 / fps if fps else defaults.frame_interval,
        ai_move_delay=ai_delay_ms / 1000.0 if ai_delay_ms is not None else defaults.ai_move_delay,
        heaps_count=_setting(config, "heaps", defaults.heaps_count, int),
        max_stones_per_heap=_setting(config, "max_stones", defaults.max_stones_per_heap, int),
        colour_change_time=(
            colour_change_ms / 1000.0 if colour_change_ms is not None else defaults.colour_change_time
        ),
        result_display_time=(
            result_display_ms / 1000.0 if result_display_ms is not None else defaults.result_display_time
        ),
        human_player=player,
        seed=seed,
        debug=bool(config.get("debug", False)),
    )
