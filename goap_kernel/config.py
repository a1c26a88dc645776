"""
Configuration loader for the restaurant simulation.

Values come from a YAML file and are validated with pydantic, so typos and
out-of-range values fail at load time.

Usage:
    from goap_kernel.config import load_config

    config = load_config("config/restaurant.yaml")
    simulation = Simulation(config)
"""

from pathlib import Path
from typing import Any, Optional, Union

import yaml

from goap_kernel.models.simulation import SimulationConfig

DEFAULT_CONFIG_PATH: Path = Path(__file__).parent.parent / "config" / "restaurant.yaml"


def load_config(config_path: Optional[Union[str, Path]] = None) -> SimulationConfig:
    """
    Load and validate a simulation config.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        pydantic.ValidationError: If the config is invalid.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        loaded: Any = yaml.safe_load(f)

    if not isinstance(loaded, dict):
        loaded = {}
    return SimulationConfig.model_validate(loaded)
