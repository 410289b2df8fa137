"""Lobby configuration: schema, mapping table, mapper and storage."""

from tweakpack.configuration.mapper import MappedTweaks, map_to_tweaks
from tweakpack.configuration.mapping import (
    MAX_COMMAND_LENGTH,
    MAX_SLOTS_PER_TYPE,
    TWEAK_CATEGORIES,
    ConfigurationMapping,
    SettingMapping,
    TweakValue,
    build_configuration_mapping,
    get_configuration_mapping,
    load_configuration_mapping,
    reset_configuration_mapping,
)
from tweakpack.configuration.schema import (
    DEFAULT_CONFIGURATION,
    SETTING_KEYS,
    Configuration,
    stringify_setting_value,
)
from tweakpack.configuration.storage import (
    dump_configuration,
    load_configuration_file,
    merge_with_defaults,
    save_configuration_file,
)

__all__ = [
    # Schema
    "Configuration",
    "DEFAULT_CONFIGURATION",
    "SETTING_KEYS",
    "stringify_setting_value",
    # Mapping
    "ConfigurationMapping",
    "SettingMapping",
    "TweakValue",
    "MAX_COMMAND_LENGTH",
    "MAX_SLOTS_PER_TYPE",
    "TWEAK_CATEGORIES",
    "build_configuration_mapping",
    "get_configuration_mapping",
    "load_configuration_mapping",
    "reset_configuration_mapping",
    # Mapper
    "MappedTweaks",
    "map_to_tweaks",
    # Storage
    "dump_configuration",
    "load_configuration_file",
    "merge_with_defaults",
    "save_configuration_file",
]
