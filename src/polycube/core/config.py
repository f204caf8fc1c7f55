"""
Configuration management for polycube.

This module handles loading and validation of YAML configuration files and
provides typed configuration objects.
"""

import os
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml

from polycube.core.registry import COLLISION_STRATEGY_REGISTRY

# Above this many placements the nested comparison gets slow per input event
PAIRWISE_PLACEMENT_LIMIT = 500


@dataclass
class SceneConfig:
    """Configuration for the scene owner."""
    collision_strategy: str = "hashed"
    ground_level: int = 0
    max_placements: int = 100

    def __post_init__(self):
        if not isinstance(self.collision_strategy, str) or not self.collision_strategy:
            raise ValueError("collision_strategy must be a non-empty string")
        if isinstance(self.ground_level, bool) or not isinstance(self.ground_level, int):
            raise ValueError("ground_level must be an integer")
        if not isinstance(self.max_placements, int) or self.max_placements <= 0:
            raise ValueError("max_placements must be a positive integer")

        if self.collision_strategy == "pairwise" and self.max_placements > PAIRWISE_PLACEMENT_LIMIT:
            warnings.warn(
                f"max_placements={self.max_placements} with the pairwise collision strategy. "
                f"Consider collision_strategy: hashed for large scenes."
            )


@dataclass
class LoggingConfig:
    """Configuration for session logging."""
    log_dir: str = "logs"
    session_name: str = "session"
    verbose: bool = True
    save_snapshots: bool = False

    def __post_init__(self):
        if not isinstance(self.log_dir, str) or not self.log_dir:
            raise ValueError("log_dir must be a non-empty string")
        if not isinstance(self.session_name, str) or not self.session_name:
            raise ValueError("session_name must be a non-empty string")


@dataclass
class Config:
    """Main configuration object."""
    scene: SceneConfig = field(default_factory=SceneConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        scene_data = data.get("scene") or {}
        logging_data = data.get("logging") or {}
        return cls(
            scene=SceneConfig(**scene_data),
            logging=LoggingConfig(**logging_data),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        return {
            "scene": {k: v for k, v in self.scene.__dict__.items()},
            "logging": {k: v for k, v in self.logging.__dict__.items()},
        }


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
        ValueError: If fields are missing or invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML config: {e}")

    if not data:
        raise ValueError("Configuration file is empty")

    try:
        return Config.from_dict(data)
    except Exception as e:
        raise ValueError(f"Error creating config from data: {e}")


def create_default_config(output_path: str = "polycube.yaml") -> Config:
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the default config

    Returns:
        Default Config object
    """
    config = Config(
        scene=SceneConfig(),
        logging=LoggingConfig(session_name="default_session"),
    )

    with open(output_path, 'w', encoding='utf-8') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)

    return config


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation messages
    """
    # Strategies register themselves on import
    import polycube.geometry.collision  # noqa: F401

    issues = []

    if config.scene.collision_strategy not in COLLISION_STRATEGY_REGISTRY:
        issues.append(
            f"ERROR: Unknown collision strategy '{config.scene.collision_strategy}'. "
            f"Available: {', '.join(sorted(COLLISION_STRATEGY_REGISTRY))}"
        )

    if config.scene.collision_strategy == "pairwise" and config.scene.max_placements > PAIRWISE_PLACEMENT_LIMIT:
        issues.append("WARNING: pairwise collision checks on large scenes may lag; use 'hashed'")

    if config.logging.save_snapshots and not config.logging.verbose:
        issues.append("WARNING: save_snapshots is enabled while verbose output is off")

    if os.path.exists(config.logging.log_dir) and not os.path.isdir(config.logging.log_dir):
        issues.append(f"ERROR: log_dir exists and is not a directory: {config.logging.log_dir}")

    return issues
