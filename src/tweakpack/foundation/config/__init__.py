"""Configuration management for Tweakpack."""

from tweakpack.foundation.config.loader import (
    LimitsConfig,
    PathsConfig,
    TweakpackConfig,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)

__all__ = [
    "LimitsConfig",
    "PathsConfig",
    "TweakpackConfig",
    "get_config",
    "load_config",
    "reset_config",
    "save_default_config",
]
