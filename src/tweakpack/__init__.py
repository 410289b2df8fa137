"""Tweakpack - raptors lobby configurator.

Turns a lobby configuration into the ``!bset`` chat commands a Beyond All
Reason lobby accepts, packing Lua tweak fragments into base64 slots and
grouping everything into transmission sections.
"""

from tweakpack.bundle import load_bundle
from tweakpack.commands import (
    LobbySections,
    TweakItem,
    build_lobby_sections,
    collect_tweak_items,
    decode,
    encode,
)
from tweakpack.configuration import (
    DEFAULT_CONFIGURATION,
    Configuration,
    get_configuration_mapping,
    load_configuration_file,
    merge_with_defaults,
)
from tweakpack.foundation import Diagnostics, ErrorCode, TweakpackError

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "LobbySections",
    "TweakItem",
    "build_lobby_sections",
    "collect_tweak_items",
    "decode",
    "encode",
    "load_bundle",
    # Configuration
    "Configuration",
    "DEFAULT_CONFIGURATION",
    "get_configuration_mapping",
    "load_configuration_file",
    "merge_with_defaults",
    # Foundation
    "Diagnostics",
    "ErrorCode",
    "TweakpackError",
]
