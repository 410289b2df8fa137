"""Lobby command builder.

Runs the whole pipeline for one configuration:

    map_to_tweaks -> process_lua_reference -> annotate_source
        -> pack_category (tweakdefs, then tweakunits) -> group_into_sections

The output order is literal commands, tweakdefs slots, tweakunits slots.
Sections are what gets transmitted, one after another.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

from tweakpack.commands.lua_comments import annotate_source
from tweakpack.commands.packing import pack_category
from tweakpack.commands.resolver import process_lua_reference
from tweakpack.configuration.mapper import map_to_tweaks
from tweakpack.configuration.mapping import (
    MAX_COMMAND_LENGTH,
    MAX_SLOTS_PER_TYPE,
    TWEAK_CATEGORIES,
    ConfigurationMapping,
)
from tweakpack.configuration.schema import Configuration
from tweakpack.foundation.diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n"

TweakType = Literal["command", "tweakdefs", "tweakunits"]


@dataclass(frozen=True, slots=True)
class LobbySections:
    """Result of a build.

    Attributes:
        sections: Newline-joined command groups, in transmission order
        commands: The flat command list the sections were grouped from
        diagnostics: Everything recoverable that went wrong on the way
    """

    sections: tuple[str, ...]
    commands: tuple[str, ...]
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


@dataclass(frozen=True, slots=True)
class TweakItem:
    """One command or Lua reference as shown in a listing.

    Attributes:
        type: "command", "tweakdefs" or "tweakunits"
        source: Reference token for Lua items, None for commands
        data: Command text or resolved Lua source
        is_missing: True when a reference could not be resolved
    """

    type: TweakType
    source: str | None
    data: str
    is_missing: bool = False

    @property
    def file_name(self) -> str | None:
        """File name of the referenced Lua file (without directories or variables)."""
        if self.source is None:
            return None
        return self.source.split("{", 1)[0].rsplit("/", 1)[-1]


def resolve_fragments(
    references: Sequence[str],
    bundle: Mapping[str, str],
    diagnostics: Diagnostics,
) -> list[str]:
    """Resolve and annotate references, skipping the ones that fail."""
    fragments = []
    for ref in references:
        source = process_lua_reference(ref, bundle, diagnostics)
        if source is None:
            continue
        fragments.append(annotate_source(source, ref))
    return fragments


def group_into_sections(
    commands: Sequence[str],
    max_command_length: int = MAX_COMMAND_LENGTH,
    diagnostics: Diagnostics | None = None,
) -> list[str]:
    """Group consecutive commands into sections of bounded length.

    A command longer than the limit on its own is passed through as a
    single section and reported.
    """
    sink = diagnostics if diagnostics is not None else Diagnostics()
    sections: list[str] = []
    current: list[str] = []
    current_length = 0

    for command in commands:
        if len(command) > max_command_length:
            sink.warn(
                DiagnosticKind.OVERSIZED_COMMAND,
                f"Command exceeds {max_command_length} characters ({len(command)}): {command[:60]}",
                command[:60],
                log=logger,
            )
            if current:
                sections.append(SECTION_SEPARATOR.join(current))
                current, current_length = [], 0
            sections.append(command)
            continue

        added = len(command) + (len(SECTION_SEPARATOR) if current else 0)
        if current and current_length + added > max_command_length:
            sections.append(SECTION_SEPARATOR.join(current))
            current, current_length = [], 0
            added = len(command)
        current.append(command)
        current_length += added

    if current:
        sections.append(SECTION_SEPARATOR.join(current))
    return sections


def build_lobby_sections(
    configuration: Configuration,
    bundle: Mapping[str, str],
    *,
    mapping: ConfigurationMapping | None = None,
    diagnostics: Diagnostics | None = None,
    max_command_length: int | None = None,
    max_slots_per_type: int | None = None,
) -> LobbySections:
    """Build the lobby sections for a configuration.

    Args:
        configuration: Lobby configuration (not modified)
        bundle: Bundle path -> Lua source (only read during this call)
        mapping: Mapping table (None = packaged mapping)
        diagnostics: Sink for recoverable problems (a new one if None)
        max_command_length: Command/section limit (None = MAX_COMMAND_LENGTH)
        max_slots_per_type: Slot limit per category (None = MAX_SLOTS_PER_TYPE)

    Returns:
        LobbySections with sections, flat commands and diagnostics

    Raises:
        TweakpackError: On capacity errors from the packing engine
    """
    sink = diagnostics if diagnostics is not None else Diagnostics()
    limit = max_command_length if max_command_length is not None else MAX_COMMAND_LENGTH
    slots = max_slots_per_type if max_slots_per_type is not None else MAX_SLOTS_PER_TYPE

    mapped = map_to_tweaks(configuration, mapping, sink)

    commands = list(mapped.commands)
    for category in TWEAK_CATEGORIES:
        fragments = resolve_fragments(mapped.references(category), bundle, sink)
        commands.extend(
            pack_category(category, fragments, max_command_length=limit, max_slots=slots)
        )

    sections = group_into_sections(commands, limit, sink)
    logger.debug(
        "Built %d commands in %d sections (%d diagnostics)",
        len(commands),
        len(sections),
        len(sink),
    )
    return LobbySections(sections=tuple(sections), commands=tuple(commands), diagnostics=sink)


def collect_tweak_items(
    configuration: Configuration,
    bundle: Mapping[str, str],
    *,
    mapping: ConfigurationMapping | None = None,
    diagnostics: Diagnostics | None = None,
) -> list[TweakItem]:
    """List every command and Lua reference a configuration implies.

    References are resolved individually so that missing files show up as
    items flagged ``is_missing`` instead of vanishing from the listing.
    """
    sink = diagnostics if diagnostics is not None else Diagnostics()
    mapped = map_to_tweaks(configuration, mapping, sink)

    items = [TweakItem(type="command", source=None, data=command) for command in mapped.commands]
    for category in TWEAK_CATEGORIES:
        for ref in mapped.references(category):
            source = process_lua_reference(ref, bundle, sink)
            items.append(
                TweakItem(
                    type=category,  # type: ignore[arg-type]
                    source=ref,
                    data=source if source is not None else "",
                    is_missing=source is None,
                )
            )
    return items
