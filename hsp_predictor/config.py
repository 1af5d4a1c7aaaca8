"""
Configuration loading for the HSP engine.

Defaults live in ``DEFAULT_CONFIG``; a YAML file only needs to list the
values it overrides.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError


DEFAULT_CONFIG: Dict[str, Any] = {
    "engine": {
        "disable_rdkit_log": True,
    },
    "fragmentation": {
        "add_hydrogens": True,
    },
    "methods": {
        "volume_epsilon": 1e-6,
        "temperature_k": 298.15,
        "round_digits": 2,
    },
    "selection": {
        "complex_smiles_length": 15,
        "max_workers": 4,
    },
    "distance": {
        "miscibility_threshold": 8.0,
    },
    "logging": {
        "level": "INFO",
    },
}


class Config:
    """
    Configuration container with dot-notation access to nested dictionaries.

    Allows ``config.methods.temperature_k`` instead of
    ``config['methods']['temperature_k']``.
    """

    def __init__(self, config_dict: Dict[str, Any]):
        self._config = config_dict
        self._convert_nested(config_dict)

    def _convert_nested(self, data: Any) -> None:
        """Recursively convert nested dictionaries to Config objects."""
        for key, value in data.items():
            if isinstance(value, dict):
                setattr(self, key, Config(value))
            else:
                setattr(self, key, value)

    def __getitem__(self, key: str) -> Any:
        return self._config[key]

    def get(self, key: str, default: Any = None) -> Any:
        """Get value with default fallback."""
        return self._config.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to nested dictionary."""
        return copy.deepcopy(self._config)

    def __repr__(self) -> str:
        return f"Config({self._config})"


def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def default_config() -> Config:
    return Config(copy.deepcopy(DEFAULT_CONFIG))


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load a YAML configuration file on top of the defaults.

    Args:
        config_path: Path to YAML file. None returns the defaults.

    Returns:
        Config object with hierarchical access to parameters

    Raises:
        ConfigError: If the file is missing, malformed or not a mapping

    Example:
        >>> config = load_config("configs/default.yaml")
        >>> config.distance.miscibility_threshold
        8.0
    """
    if config_path is None:
        return default_config()

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}", str(config_path))

    try:
        with open(config_path, "r") as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file: {e}", str(config_path)) from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError("Config file must contain a mapping", str(config_path))

    return Config(_merge(DEFAULT_CONFIG, loaded))


def update_config(base_config: Config, updates: Dict[str, Any]) -> Config:
    """
    Return a new Config with dotted-key updates applied.

    Example:
        >>> cfg = update_config(default_config(), {"methods.temperature_k": 323.15})
    """
    config_dict = base_config.to_dict()

    for key, value in updates.items():
        keys = key.split(".")
        current = config_dict

        for k in keys[:-1]:
            if k not in current:
                current[k] = {}
            current = current[k]

        current[keys[-1]] = value

    return Config(config_dict)
