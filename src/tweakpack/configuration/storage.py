"""Reading and writing lobby configuration documents.

Stored documents may predate settings added later, so every load merges the
document over ``DEFAULT_CONFIGURATION``: missing keys take their defaults and
keys the schema no longer knows are dropped with a warning.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tweakpack.configuration.schema import (
    DEFAULT_CONFIGURATION,
    SETTING_KEYS,
    Configuration,
    to_camel,
)
from tweakpack.foundation.errors import ErrorCode, TweakpackError, config_error

logger = logging.getLogger(__name__)


def merge_with_defaults(data: Mapping[str, Any]) -> Configuration:
    """Merge a stored document over the defaults.

    Keys may be camelCase (as stored) or snake_case.

    Args:
        data: Partial configuration document

    Returns:
        A complete, validated Configuration

    Raises:
        TweakpackError: CONFIG_INVALID if a value fails validation
    """
    merged: dict[str, Any] = DEFAULT_CONFIGURATION.model_dump(by_alias=True)
    for key, value in data.items():
        camel = to_camel(str(key))
        if camel not in SETTING_KEYS:
            logger.warning("Ignoring unknown configuration key: %s", key)
            continue
        merged[camel] = value

    try:
        return Configuration.model_validate(merged)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
        raise config_error(
            ErrorCode.CONFIG_INVALID,
            key=key,
            detail=first.get("msg", str(e)),
            cause=e,
        ) from e


def load_configuration_file(path: str | Path) -> Configuration:
    """Load a YAML or JSON configuration document and merge it with defaults.

    Raises:
        TweakpackError: FILE_NOT_FOUND, CONFIG_PARSE_ERROR or CONFIG_INVALID
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise TweakpackError(code=ErrorCode.FILE_NOT_FOUND, context={"path": str(config_path)})

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise config_error(
            ErrorCode.CONFIG_PARSE_ERROR, path=str(config_path), detail=str(e), cause=e
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise config_error(
            ErrorCode.CONFIG_PARSE_ERROR,
            path=str(config_path),
            detail="top level must be a mapping of setting keys",
        )
    # Documents wrapped as {"configuration": {...}} are accepted too
    if isinstance(data.get("configuration"), dict):
        data = data["configuration"]

    return merge_with_defaults(data)


def save_configuration_file(configuration: Configuration, path: str | Path) -> Path:
    """Write a configuration document with camelCase keys in schema order."""
    config_path = Path(path)
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(
            dump_configuration(configuration),
            encoding="utf-8",
        )
    except OSError as e:
        raise TweakpackError(
            code=ErrorCode.FILE_WRITE_FAILED, context={"path": str(config_path)}, cause=e
        ) from e
    return config_path


def dump_configuration(configuration: Configuration) -> str:
    """Render a configuration as YAML."""
    return yaml.safe_dump(
        configuration.model_dump(by_alias=True),
        sort_keys=False,
        allow_unicode=True,
    )
