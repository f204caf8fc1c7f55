"""
Core modules for polycube.

This package contains:
- Configuration management
- Registry for collision strategy discovery
"""

from polycube.core.config import (
    Config, SceneConfig, LoggingConfig,
    load_config, create_default_config, validate_config
)

from polycube.core.registry import (
    COLLISION_STRATEGY_REGISTRY, register_collision_strategy, get_collision_strategy
)

__all__ = [
    "Config",
    "SceneConfig",
    "LoggingConfig",
    "load_config",
    "create_default_config",
    "validate_config",
    "COLLISION_STRATEGY_REGISTRY",
    "register_collision_strategy",
    "get_collision_strategy",
]
