"""Configuration mapper: lobby configuration -> commands and Lua references."""

import logging
from dataclasses import dataclass

from tweakpack.configuration.mapping import ConfigurationMapping, get_configuration_mapping
from tweakpack.configuration.schema import Configuration, stringify_setting_value
from tweakpack.foundation.diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MappedTweaks:
    """Ordered output of the mapper.

    Attributes:
        commands: Literal lobby commands (baseline first)
        tweakdefs: References destined for tweakdefs slots
        tweakunits: References destined for tweakunits slots
    """

    commands: tuple[str, ...] = ()
    tweakdefs: tuple[str, ...] = ()
    tweakunits: tuple[str, ...] = ()

    def references(self, category: str) -> tuple[str, ...]:
        return self.tweakdefs if category == "tweakdefs" else self.tweakunits


def map_to_tweaks(
    configuration: Configuration,
    mapping: ConfigurationMapping | None = None,
    diagnostics: Diagnostics | None = None,
) -> MappedTweaks:
    """Collect the commands and references a configuration implies.

    The baseline comes first. Settings are then visited in schema order; a
    value with no entry in the mapping (the usual case for defaults)
    contributes nothing. For settings mapped from a range every valid value
    has an entry, so a miss there is reported as UNMAPPED_VALUE.

    Args:
        configuration: Validated lobby configuration (not modified)
        mapping: Mapping table (None = packaged mapping)
        diagnostics: Sink for unmapped ranged values (a new one if None)

    Returns:
        MappedTweaks with deterministic ordering
    """
    mapping = mapping if mapping is not None else get_configuration_mapping()
    sink = diagnostics if diagnostics is not None else Diagnostics()

    commands = list(mapping.base.command)
    tweakdefs = list(mapping.base.tweakdefs)
    tweakunits = list(mapping.base.tweakunits)

    for key, value in configuration.setting_items():
        setting = mapping.get(key)
        if setting is None:
            continue
        entry = setting.lookup(value)
        if entry is None:
            if setting.ranged:
                text = stringify_setting_value(value)
                sink.warn(
                    DiagnosticKind.UNMAPPED_VALUE,
                    f"Value {text} for {key} is not a step of its mapped range; setting ignored",
                    f"{key}={text}",
                    log=logger,
                )
            continue
        logger.debug("Setting %s=%r contributes %s", key, value, entry)
        commands.extend(entry.command)
        tweakdefs.extend(entry.tweakdefs)
        tweakunits.extend(entry.tweakunits)

    return MappedTweaks(
        commands=tuple(commands),
        tweakdefs=tuple(tweakdefs),
        tweakunits=tuple(tweakunits),
    )
