"""Tweakpack configuration management.

Loads application settings from .tweakpack/config.yaml with sensible defaults.
All settings can be overridden via environment variables (TWEAKPACK_*).

These are settings of the tool itself (command limits, where the bundle and
mapping live). The lobby configuration that gets translated into commands is
a separate document, see ``tweakpack.configuration``.

Config locations (in priority order):
1. Explicit path passed to load_config()
2. .tweakpack/config.yaml (project-local)
3. ~/.tweakpack/config.yaml (user-global)
4. Built-in defaults

Thread Safety:
    Uses threading.Lock for thread-safe lazy initialization.
"""


import logging
import os
import threading
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

from tweakpack.configuration.mapping import MAX_COMMAND_LENGTH, MAX_SLOTS_PER_TYPE
from tweakpack.foundation.errors import ErrorCode, config_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LimitsConfig:
    """Protocol limits honoured by the packing engine and section builder."""

    max_command_length: int = MAX_COMMAND_LENGTH
    """Maximum characters per emitted command and per section."""

    max_slots_per_type: int = MAX_SLOTS_PER_TYPE
    """Maximum tweakdefs/tweakunits slots per category."""


@dataclass(frozen=True, slots=True)
class PathsConfig:
    """Locations of build inputs."""

    bundle: str | None = None
    """Lua bundle directory or JSON file (None = packaged sample bundle)."""

    mapping: str | None = None
    """Configuration mapping YAML (None = packaged mapping)."""


@dataclass(frozen=True, slots=True)
class TweakpackConfig:
    """Root configuration for Tweakpack."""

    limits: LimitsConfig = field(default_factory=LimitsConfig)
    """Command and slot limits."""

    paths: PathsConfig = field(default_factory=PathsConfig)
    """Input locations."""

    debug: bool = False
    """Enable debug logging by default."""


# Global config instance (lazy-loaded, thread-safe)
_config: TweakpackConfig | None = None
_config_lock = threading.Lock()

# Environment variable -> (section, key)
_ENV_OVERRIDES: dict[str, tuple[str | None, str]] = {
    "TWEAKPACK_LIMITS_MAX_COMMAND_LENGTH": ("limits", "max_command_length"),
    "TWEAKPACK_LIMITS_MAX_SLOTS_PER_TYPE": ("limits", "max_slots_per_type"),
    "TWEAKPACK_PATHS_BUNDLE": ("paths", "bundle"),
    "TWEAKPACK_PATHS_MAPPING": ("paths", "mapping"),
    "TWEAKPACK_DEBUG": (None, "debug"),
}


def _deep_update(base: dict, updates: dict) -> dict:
    """Recursively update a dict with another dict."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_update(base[key], value)
        else:
            base[key] = value
    return base


def _coerce(value: str) -> Any:
    """Coerce an environment string to bool/int/str."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    return value


def _apply_env_overrides(config_dict: dict) -> dict:
    """Apply environment variable overrides.

    Examples:
        TWEAKPACK_LIMITS_MAX_COMMAND_LENGTH=20000
        TWEAKPACK_PATHS_BUNDLE=build/bundle.json
    """
    for env_key, (section, key) in _ENV_OVERRIDES.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        target = config_dict if section is None else config_dict.setdefault(section, {})
        target[key] = _coerce(value)
    return config_dict


def _limits_from_dict(data: Any) -> LimitsConfig:
    """Build LimitsConfig from a mapping of positive integers.

    Raises:
        TweakpackError: SETTINGS_INVALID naming the offending key
    """
    if not isinstance(data, dict):
        raise config_error(ErrorCode.SETTINGS_INVALID, key="limits", detail="must be a mapping")

    known = LimitsConfig.__dataclass_fields__
    for key, value in data.items():
        if key not in known:
            raise config_error(
                ErrorCode.SETTINGS_INVALID, key=f"limits.{key}", detail="unknown setting"
            )
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise config_error(
                ErrorCode.SETTINGS_INVALID,
                key=f"limits.{key}",
                detail=f"expected a positive integer, got {value!r}",
            )
    return LimitsConfig(**data)


def _dict_to_config(data: dict) -> TweakpackConfig:
    """Convert a dict to TweakpackConfig."""
    return TweakpackConfig(
        limits=_limits_from_dict(data.get("limits", {})),
        paths=PathsConfig(**data.get("paths", {})),
        debug=bool(data.get("debug", False)),
    )


def load_config(path: str | Path | None = None) -> TweakpackConfig:
    """Load configuration from file with defaults and env overrides.

    Priority (highest to lowest):
    1. Environment variables (TWEAKPACK_*)
    2. Explicit path if provided
    3. .tweakpack/config.yaml (project-local)
    4. ~/.tweakpack/config.yaml (user-global)
    5. Built-in defaults

    Args:
        path: Optional explicit config file path.

    Returns:
        Merged TweakpackConfig instance.
    """
    global _config

    config_dict: dict[str, Any] = asdict(TweakpackConfig())

    config_paths = []
    if path:
        config_paths.append(Path(path))
    config_paths.extend([
        Path(".tweakpack/config.yaml"),
        Path.home() / ".tweakpack" / "config.yaml",
    ])

    for config_path in config_paths:
        if config_path.exists():
            try:
                with open(config_path) as f:
                    file_config = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Skipping unreadable config file %s: %s", config_path, e)
                continue
            if isinstance(file_config, dict):
                _deep_update(config_dict, file_config)
                break  # Use first found config
            logger.warning("Skipping config file %s: top level is not a mapping", config_path)

    config_dict = _apply_env_overrides(config_dict)

    _config = _dict_to_config(config_dict)
    return _config


def get_config() -> TweakpackConfig:
    """Get the current configuration, loading if needed.

    Thread-safe with double-check locking.
    """
    global _config

    if _config is not None:
        return _config

    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def reset_config() -> None:
    """Reset the global config (useful for testing)."""
    global _config
    with _config_lock:
        _config = None


def save_default_config(path: str | Path = ".tweakpack/config.yaml") -> Path:
    """Save the default configuration to a file.

    Args:
        path: Where to save the config.

    Returns:
        Path to the saved config file.
    """
    config_content = f'''# Tweakpack Configuration

# Limits enforced on generated lobby commands
limits:
  # Maximum characters per command and per transmitted section
  max_command_length: {MAX_COMMAND_LENGTH}

  # Maximum slots per category (tweakdefs, tweakdefs1, ... tweakdefs9)
  max_slots_per_type: {MAX_SLOTS_PER_TYPE}

# Build inputs (null = use the data shipped with tweakpack)
paths:
  # Directory of Lua files or a bundle JSON file ({{"files": {{path: source}}}})
  bundle: null

  # Configuration mapping YAML
  mapping: null

# Global settings
debug: false
'''

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(config_content)
    return path
