"""YAML configuration loader with inheritance support.

Supports:
- Loading YAML config files
- Config inheritance via 'extends' key
- Deep merging of nested config
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from . import (
    HabitFlowConfig,
    InsightConfig,
    LoggingConfig,
    ReportConfig,
    StorageConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "dev"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Values from override take precedence. Nested dicts are merged recursively.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_yaml_with_inheritance(path: Path) -> dict[str, Any]:
    """Load YAML file with inheritance support.

    If the file contains an 'extends' key, the base config is loaded first
    and merged with the current config.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        config = yaml.safe_load(f) or {}

    if "extends" in config:
        base_name = config.pop("extends")
        base_config = load_yaml_with_inheritance(path.parent / base_name)
        config = deep_merge(base_config, config)

    return config


def dict_to_config(data: dict[str, Any]) -> HabitFlowConfig:
    """Convert raw dict to typed HabitFlowConfig dataclass."""
    root = data.get("habitflow", {}) or {}

    # YAML sections that are present but empty load as None
    def safe_get(key: str) -> dict[str, Any]:
        value = root.get(key, {})
        return value if value is not None else {}

    return HabitFlowConfig(
        storage=StorageConfig(**safe_get("storage")),
        insights=InsightConfig(**safe_get("insights")),
        report=ReportConfig(**safe_get("report")),
        logging=LoggingConfig(**safe_get("logging")),
    )


class YAMLConfigLoader:
    """YAML configuration loader implementation."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize loader with optional config directory.

        Args:
            config_dir: Directory containing config files.
                        Defaults to 'config' relative to project root.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent.parent / "config"
        self._config_dir = config_dir

    def load(self, path: Path) -> HabitFlowConfig:
        """Load configuration from file path.

        Args:
            path: Path to YAML config file

        Returns:
            Parsed HabitFlowConfig
        """
        return dict_to_config(load_yaml_with_inheritance(path))

    def load_profile(self, profile: str) -> HabitFlowConfig:
        """Load configuration by profile name.

        Args:
            profile: Profile name (e.g., 'dev', 'prod')

        Returns:
            Parsed HabitFlowConfig for the profile
        """
        return self.load(self._config_dir / f"{profile}.yaml")

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        return self._config_dir


def load_config(
    path: str | Path | None = None,
    profile: str | None = None,
    config_dir: Path | None = None,
) -> HabitFlowConfig:
    """Load HabitFlow configuration.

    An explicit path or profile must exist. With neither, the dev profile is
    used when present and built-in defaults otherwise (installed packages do
    not ship the config directory).

    Examples:
        >>> config = load_config(profile="dev")
        >>> config = load_config(path="/path/to/config.yaml")
    """
    loader = YAMLConfigLoader(config_dir)

    if path is not None:
        return loader.load(Path(path))
    if profile is not None:
        return loader.load_profile(profile)

    default_path = loader.get_config_dir() / f"{DEFAULT_PROFILE}.yaml"
    if not default_path.exists():
        logger.debug(f"No config at {default_path}, using defaults")
        return HabitFlowConfig()
    return loader.load(default_path)


__all__ = [
    "YAMLConfigLoader",
    "deep_merge",
    "dict_to_config",
    "load_config",
    "load_yaml_with_inheritance",
]
