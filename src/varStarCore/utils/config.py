"""
Configuration management for varStarCore.

This module contains configuration loading and management utilities.
"""

from typing import Any, Dict, Union
import logging
import yaml
import json
from pathlib import Path
from dataclasses import dataclass, asdict

from .logger import get_logger, setup_logging
from ..core.base import DistanceConfig, ExperimentConfig, KernelType, SplitConfig, VectorDistanceType


@dataclass
class Config:
    """Flat, file-friendly configuration for varStarCore."""

    # Dataset
    description: str = ""

    # Split configuration
    holdout_fraction: float = 0.25
    n_folds: int = 5
    random_state: int = 42

    # Distance/kernel configuration
    distance_type: str = VectorDistanceType.EUCLIDEAN_DISTANCE.value
    kernel_type: str = KernelType.GAUSSIAN.value
    n_jobs: int = 1

    # Logging
    log_level: str = "INFO"
    log_file: str = None
    verbose: bool = True


class ConfigManager:
    """Configuration manager for varStarCore."""

    def __init__(self):
        self.logger = get_logger("ConfigManager")
        self.config = Config()

    def load_from_file(self, config_path: Union[str, Path]) -> 'ConfigManager':
        """
        Load configuration from a file.

        Args:
            config_path: Path to a YAML or JSON configuration file

        Returns:
            Self for method chaining
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.logger.info(f"Loading configuration from {config_path}")

        suffix = config_path.suffix.lower()
        if suffix in ('.yaml', '.yml'):
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}
        elif suffix == '.json':
            with open(config_path, 'r') as f:
                config_data = json.load(f)
        else:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(config_data).__name__}")

        self._update_config(config_data)
        return self

    def _update_config(self, config_data: Dict[str, Any]) -> None:
        """Update configuration with loaded data."""
        self._set_values(config_data)
        self.logger.info("Configuration loaded successfully")

    def _set_values(self, config_data: Dict[str, Any]) -> None:
        # 'split', 'distance' and 'logging' sections are flattened into Config
        for key, value in config_data.items():
            if isinstance(value, dict) and key in ('split', 'distance', 'logging'):
                self._set_values(value)
            elif hasattr(self.config, key):
                setattr(self.config, key, value)
            else:
                self.logger.warning(f"Unknown configuration key: {key}")

    def save_to_file(self, config_path: Union[str, Path]) -> None:
        """
        Save configuration to a file.

        Args:
            config_path: Path to save configuration file
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        self.logger.info(f"Saving configuration to {config_path}")

        config_data = asdict(self.config)

        suffix = config_path.suffix.lower()
        if suffix in ('.yaml', '.yml'):
            with open(config_path, 'w') as f:
                yaml.dump(config_data, f, default_flow_style=False, indent=2)
        elif suffix == '.json':
            with open(config_path, 'w') as f:
                json.dump(config_data, f, indent=2)
        else:
            raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

    def get_config(self) -> Config:
        return self.config

    def update_config(self, **kwargs) -> 'ConfigManager':
        """
        Update configuration with new values.

        Args:
            **kwargs: Configuration parameters to update

        Returns:
            Self for method chaining
        """
        self._update_config(kwargs)
        return self

    def split_config(self) -> SplitConfig:
        return SplitConfig(
            holdout_fraction=float(self.config.holdout_fraction),
            n_folds=int(self.config.n_folds),
            random_state=int(self.config.random_state),
        )

    def distance_config(self) -> DistanceConfig:
        return DistanceConfig(
            distance_type=VectorDistanceType(self.config.distance_type),
            kernel_type=KernelType(str(self.config.kernel_type).lower()),
            n_jobs=int(self.config.n_jobs),
        )

    def experiment_config(self) -> ExperimentConfig:
        return ExperimentConfig(
            split=self.split_config(),
            distance=self.distance_config(),
            description=self.config.description,
            verbose=bool(self.config.verbose),
        )

    def load_defaults(self) -> 'ConfigManager':
        """Reset to the packaged DEFAULT_CONFIG."""
        from ..config.default_config import DEFAULT_CONFIG

        self.config = Config()
        self._update_config(DEFAULT_CONFIG)
        return self

    def apply_logging(self) -> None:
        """Configure application logging from the loaded settings."""
        level = logging.getLevelName(str(self.config.log_level).upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {self.config.log_level}")
        setup_logging(level=level, log_file=self.config.log_file)
