"""Tests for YAML configuration loading."""

import pytest
from pydantic import ValidationError

from goap_kernel.config import DEFAULT_CONFIG_PATH, load_config
from goap_kernel.models.simulation import SimulationConfig


class TestLoadConfig:
    def test_default_file_matches_model_defaults(self):
        assert DEFAULT_CONFIG_PATH.exists()
        assert load_config() == SimulationConfig()

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "small.yaml"
        path.write_text(
            "seats: 8\n"
            "seed: 3\n"
            "scheduler:\n"
            "  replan_cooldown_min: 0.1\n"
            "  replan_cooldown_max: 0.2\n"
        )

        config = load_config(path)

        assert config.seats == 8
        assert config.seed == 3
        assert config.scheduler.replan_cooldown_max == 0.2
        assert config.scheduler.arrival_slack == 0.5
        assert config.cooktops == 2

    def test_menu_from_yaml(self, tmp_path):
        path = tmp_path / "menu.yaml"
        path.write_text("menu:\n  items:\n    1: Tacos\n    2: Nachos\n")
        assert load_config(str(path)).menu.items == {1: "Tacos", 2: "Nachos"}

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == SimulationConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_values_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("wrong_order_probability: 1.5\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_inverted_spawn_interval_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("spawn:\n  min_interval: 9\n  max_interval: 3\n")
        with pytest.raises(ValidationError):
            load_config(path)
