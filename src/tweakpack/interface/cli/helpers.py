"""Shared helpers for CLI commands."""

import logging
from collections.abc import Mapping
from pathlib import Path

from tweakpack.bundle import load_bundle
from tweakpack.configuration import (
    DEFAULT_CONFIGURATION,
    Configuration,
    ConfigurationMapping,
    load_configuration_file,
    load_configuration_mapping,
)
from tweakpack.foundation.config import TweakpackConfig

logger = logging.getLogger(__name__)


def load_inputs(
    cfg: TweakpackConfig,
    config_file: str | None,
    bundle_path: str | None,
    mapping_path: str | None,
) -> tuple[Configuration, Mapping[str, str], ConfigurationMapping | None]:
    """Load the lobby configuration, bundle and mapping for a command.

    Command-line paths win over ``paths.*`` from the app config; None for
    both means the packaged data.

    Returns:
        (configuration, bundle, mapping), mapping None for the packaged one
    """
    if config_file:
        configuration = load_configuration_file(config_file)
    else:
        logger.debug("No configuration file given, using defaults")
        configuration = DEFAULT_CONFIGURATION

    bundle = load_bundle(bundle_path or cfg.paths.bundle)

    mapping_source = mapping_path or cfg.paths.mapping
    mapping = load_configuration_mapping(Path(mapping_source)) if mapping_source else None
    return configuration, bundle, mapping


def preview(text: str, width: int = 60) -> str:
    """First non-blank line of ``text``, shortened to ``width`` characters."""
    for line in text.splitlines():
        if line.strip():
            line = line.strip()
            return line if len(line) <= width else line[: width - 1] + "…"
    return ""
