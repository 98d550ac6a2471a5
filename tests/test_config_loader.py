import os
import tempfile
import argparse
from typing import Any, Dict

import pytest
import yaml

from nimgame.config_loader import (
    GameSettings,
    build_settings,
    load_and_merge_config,
    load_yaml_config,
    merge_configs,
)
from nimgame.main import build_parser
from nimgame.nim_game import Player


@pytest.fixture
def sample_parser():
    """Create a sample ArgumentParser for testing config merging."""
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", dest="config_file", default=None)
    parser.add_argument("--heaps", type=int, default=25)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--human-player", choices=["one", "two"], default="one")
    parser.add_argument("--debug", action="store_true", default=False)
    return parser


def create_yaml_file(content: Dict[str, Any]) -> str:
    """Create a temporary YAML file with given content."""
    with tempfile.NamedTemporaryFile(mode='w', delete=False, suffix='.yaml') as temp_file:
        yaml.safe_dump(content, temp_file)
        temp_file_path = temp_file.name
    return temp_file_path


def test_load_yaml_config_valid():
    """Test loading a valid YAML configuration file."""
    yaml_content = {"heaps": 5, "human_player": "two"}
    yaml_path = create_yaml_file(yaml_content)

    try:
        assert load_yaml_config(yaml_path) == yaml_content
    finally:
        os.unlink(yaml_path)


def test_load_yaml_config_empty():
    """Test loading an empty YAML configuration file."""
    yaml_path = create_yaml_file({})

    try:
        assert load_yaml_config(yaml_path) == {}
    finally:
        os.unlink(yaml_path)


def test_load_yaml_config_nonexistent():
    """Test loading a non-existent YAML configuration file."""
    with pytest.raises(FileNotFoundError):
        load_yaml_config("/path/to/nonexistent/config.yaml")


def test_load_yaml_config_invalid(tmp_path):
    """Test loading a file that is not valid YAML."""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("heaps: [1, 2\n")
    with pytest.raises(yaml.YAMLError):
        load_yaml_config(str(bad_file))


def test_merge_configs_yaml_only(sample_parser):
    """YAML values win over parser defaults."""
    args = sample_parser.parse_args([])
    merged = merge_configs({"heaps": 5}, args, sample_parser)

    assert merged["heaps"] == 5
    assert merged["fps"] == 60  # Default from parser
    assert merged["human_player"] == "one"
    assert merged["debug"] is False
    assert "config_file" not in merged


def test_merge_configs_cli_overrides_yaml(sample_parser):
    """Explicit command-line values win over YAML values."""
    args = sample_parser.parse_args(["--heaps", "7", "--debug"])
    merged = merge_configs({"heaps": 5, "debug": False, "fps": 30}, args, sample_parser)

    assert merged["heaps"] == 7
    assert merged["debug"] is True
    assert merged["fps"] == 30


def test_merge_configs_keeps_unknown_yaml_keys(sample_parser):
    args = sample_parser.parse_args([])
    merged = merge_configs({"seed": 42}, args, sample_parser)
    assert merged["seed"] == 42


def test_load_and_merge_config_with_file(sample_parser):
    yaml_path = create_yaml_file({"human_player": "two"})
    try:
        args = sample_parser.parse_args(["--config", yaml_path])
        merged = load_and_merge_config(sample_parser, args)
    finally:
        os.unlink(yaml_path)

    assert merged["human_player"] == "two"
    assert merged["heaps"] == 25


def test_load_and_merge_config_without_file(sample_parser):
    args = sample_parser.parse_args(["--fps", "30"])
    merged = load_and_merge_config(sample_parser, args)
    assert merged["fps"] == 30


def test_build_settings_from_parser_defaults():
    parser = build_parser()
    args = parser.parse_args([])
    settings = build_settings(merge_configs({}, args, parser))

    assert isinstance(settings, GameSettings)
    assert settings.window_width == parser.get_default("window_width")
    assert settings.heaps_count == parser.get_default("heaps")
    assert settings.frame_interval == pytest.approx(1.0 / parser.get_default("fps"))
    assert settings.seed is None


def test_build_settings_converts_units():
    settings = build_settings(
        {
            "window_width": 640,
            "window_height": 480,
            "fps": 30,
            "ai_delay_ms": 250,
            "colour_change_ms": 0,
            "heaps": 4,
            "max_stones": 9,
            "human_player": "TWO",
            "seed": 3,
            "debug": True,
        }
    )

    assert settings == GameSettings(
        window_width=640,
        window_height=480,
        frame_interval=1.0 / 30,
        ai_move_delay=0.25,
        heaps_count=4,
        max_stones_per_heap=9,
        colour_change_time=0.0,
        human_player=Player.TWO,
        seed=3,
        debug=True,
    )


def test_build_settings_empty_config_uses_defaults():
    assert build_settings({}) == GameSettings()


def test_build_settings_rejects_unknown_player():
    with pytest.raises(ValueError, match="human_player"):
        build_settings({"human_player": "three"})


def test_build_settings_accepts_numbers_as_strings():
    settings = build_settings(
        {"fps": "30", "ai_delay_ms": "500", "heaps": "4", "max_stones": "9", "result_display_ms": "1500"}
    )

    assert settings.frame_interval == 1.0 / 30
    assert settings.ai_move_delay == 0.5
    assert settings.heaps_count == 4
    assert settings.max_stones_per_heap == 9
    assert settings.result_display_time == 1.5


def test_build_settings_null_values_use_defaults():
    assert build_settings({"heaps": None, "fps": None, "ai_delay_ms": None, "seed": None}) == GameSettings()


@pytest.mark.parametrize(
    "config, error",
    [
        ({"ai_delay_ms": [500]}, TypeError),
        ({"heaps": {"count": 3}}, TypeError),
        ({"fps": "fast"}, ValueError),
    ],
)
def test_build_settings_rejects_values_that_are_not_numbers(config, error):
    with pytest.raises(error):
        build_settings(config)
