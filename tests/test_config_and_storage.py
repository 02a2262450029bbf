"""
Tests for configuration loading and high score persistence.
"""

import math
import sys

import pytest
import yaml

from daruma.core.config_loader import (
    DEFAULT_CONFIG_PATH,
    get_config,
    load_config,
    reload_config,
)
from daruma.core.high_score import load_high_score, save_high_score


@pytest.fixture
def raw_config():
    with open(DEFAULT_CONFIG_PATH, "r") as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(raw, f)
    return str(path)


class TestConfig:
    """Test config parsing and validation."""

    def test_default_values(self):
        config = load_config()
        lane = config.lane

        assert lane.side_wall_width == pytest.approx(0.1)
        assert lane.player_pos_y == pytest.approx(0.2)
        assert lane.hole_width == pytest.approx(0.25)
        assert lane.barrier_interval == pytest.approx(0.5)
        assert lane.window_size == 3
        assert config.player.max_direction == 3
        assert config.player.steering_angles[-1] == pytest.approx(math.pi / 3)

    def test_score_for(self):
        config = load_config()
        assert config.score_for(0.0) == 0
        assert config.score_for(0.39) == 1
        assert config.score_for(20.0) == 100

    def test_cached_config(self):
        assert get_config() is get_config()
        assert reload_config() is get_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_hole_must_fit_between_walls(self, tmp_path, raw_config):
        raw_config["lane"]["hole_width"] = 0.7
        with pytest.raises(ValueError, match="hole_width"):
            load_config(write_config(tmp_path, raw_config))

    def test_heights_must_be_positive(self, tmp_path, raw_config):
        raw_config["lane"]["initial_barrier_height"] = 0.0
        with pytest.raises(ValueError, match="initial_barrier_height"):
            load_config(write_config(tmp_path, raw_config))

    def test_max_height_not_below_initial(self, tmp_path, raw_config):
        raw_config["lane"]["max_barrier_height"] = 0.05
        with pytest.raises(ValueError, match="max_barrier_height"):
            load_config(write_config(tmp_path, raw_config))

    def test_angles_must_start_at_zero(self, tmp_path, raw_config):
        raw_config["player"]["steering_angles_deg"] = [10.0, 30.0]
        with pytest.raises(ValueError, match="steering angle"):
            load_config(write_config(tmp_path, raw_config))

    def test_observation_must_hold_window(self, tmp_path, raw_config):
        raw_config["observation"]["max_barriers"] = 2
        with pytest.raises(ValueError, match="max_barriers"):
            load_config(write_config(tmp_path, raw_config))

    def test_overrides_are_applied(self, tmp_path, raw_config):
        raw_config["caps"]["max_ticks"] = 5
        raw_config["scoring"]["score_scale"] = 10.0
        config = load_config(write_config(tmp_path, raw_config))

        assert config.caps.max_ticks == 5
        assert config.score_for(1.0) == 10


class TestHighScoreFile:
    """Test the 4-byte native-endian score file."""

    def test_missing_file_is_zero(self, tmp_path):
        assert load_high_score(tmp_path / "score") == 0

    def test_roundtrip(self, tmp_path):
        path = tmp_path / "score"
        save_high_score(path, 1234)

        assert load_high_score(path) == 1234
        assert path.read_bytes() == (1234).to_bytes(4, sys.byteorder, signed=True)

    def test_reads_existing_file(self, tmp_path):
        path = tmp_path / "score"
        path.write_bytes((987).to_bytes(4, sys.byteorder, signed=True))
        assert load_high_score(path) == 987

    def test_short_file_is_zero(self, tmp_path):
        path = tmp_path / "score"
        path.write_bytes(b"\x01\x02")
        assert load_high_score(path) == 0

    def test_negative_is_zero(self, tmp_path):
        path = tmp_path / "score"
        path.write_bytes((-5).to_bytes(4, sys.byteorder, signed=True))
        assert load_high_score(path) == 0

    def test_overwrites_and_clips(self, tmp_path):
        path = tmp_path / "score"
        save_high_score(path, 50)
        save_high_score(path, 2 ** 40)

        assert len(path.read_bytes()) == 4
        assert load_high_score(path) == 2 ** 31 - 1

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "saves" / "score"
        save_high_score(path, 7)
        assert load_high_score(path) == 7
