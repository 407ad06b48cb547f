"""Configuration module for HabitFlow.

This module provides the typed configuration sections and the loader entry point.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


@dataclass
class StorageConfig:
    """Persisted state configuration."""

    data_path: str = "~/.habitflow/state.json"

    @property
    def resolved_path(self) -> Path:
        """Data path with the user directory expanded."""
        return Path(self.data_path).expanduser()


@dataclass
class InsightConfig:
    """Text-generation configuration for tips and insight bundles."""

    model: str = "claude-3-haiku-20240307"
    max_tokens: int = 1024
    temperature: float = 0.7
    refresh_interval_minutes: int = 15
    history_days: int = 15


@dataclass
class ReportConfig:
    """PDF export configuration."""

    output_dir: str = "."
    default_months: int = 1


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class HabitFlowConfig:
    """Main HabitFlow configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    insights: InsightConfig = field(default_factory=InsightConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader(Protocol):
    """Protocol for configuration loading."""

    def load(self, path: Path) -> HabitFlowConfig:
        """Load configuration from file path."""
        ...

    def load_profile(self, profile: str) -> HabitFlowConfig:
        """Load configuration by profile name (dev, prod)."""
        ...

    def get_config_dir(self) -> Path:
        """Get the configuration directory path."""
        ...


__all__ = [
    "ConfigLoader",
    "HabitFlowConfig",
    "InsightConfig",
    "LoggingConfig",
    "ReportConfig",
    "StorageConfig",
]
