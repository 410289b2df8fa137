"""End-to-end tests for the lobby section builder.

Every tweak command is decoded again and the ``-- Source:`` headers inside
are compared with what the configuration mapping says should be there.
"""

import pytest

from tweakpack.commands.builder import (
    TweakItem,
    build_lobby_sections,
    collect_tweak_items,
    group_into_sections,
)
from tweakpack.commands.encoding import decode
from tweakpack.commands.lua_comments import extract_source_references
from tweakpack.configuration import (
    DEFAULT_CONFIGURATION,
    MAX_COMMAND_LENGTH,
    MAX_SLOTS_PER_TYPE,
    Configuration,
    map_to_tweaks,
)
from tweakpack.foundation.diagnostics import DiagnosticKind, Diagnostics
from tweakpack.foundation.errors import ErrorCode, TweakpackError

FULL_CONFIGURATION = Configuration(
    game_map="Raptor Crater",
    start="Surrounded",
    difficulty="Very hard",
    income_mult=2.5,
    build_dist_mult=3,
    build_power_mult=0.5,
    queen_count=20,
    raptor_health_mult=1.5,
    evolving_commanders=True,
    t4_units=True,
    lrpc_rebalance=True,
)


def _tweak_commands(commands, category: str) -> list[str]:
    return [c for c in commands if c.split(" ", 2)[1].startswith(category)]


def _decoded_sources(commands, category: str) -> list[str]:
    sources: list[str] = []
    for command in _tweak_commands(commands, category):
        sources.extend(extract_source_references(decode(command.split(" ", 2)[2])))
    return sources


class TestBuildLobbySections:
    """Tests for build_lobby_sections with the packaged mapping and bundle."""

    @pytest.mark.parametrize("configuration", [DEFAULT_CONFIGURATION, FULL_CONFIGURATION])
    def test_completeness(self, configuration, packaged_bundle, packaged_mapping) -> None:
        """Every mapped command and reference ends up in the output."""
        result = build_lobby_sections(configuration, packaged_bundle)
        mapped = map_to_tweaks(configuration, packaged_mapping)

        for command in mapped.commands:
            assert command in result.commands
        assert _decoded_sources(result.commands, "tweakdefs") == list(mapped.tweakdefs)
        assert _decoded_sources(result.commands, "tweakunits") == list(mapped.tweakunits)
        assert len(result.diagnostics) == 0

    def test_command_order(self, packaged_bundle, packaged_mapping) -> None:
        """Literal commands first, then tweakdefs slots, then tweakunits slots."""
        result = build_lobby_sections(FULL_CONFIGURATION, packaged_bundle)
        literal = list(map_to_tweaks(FULL_CONFIGURATION, packaged_mapping).commands)

        assert list(result.commands[: len(literal)]) == literal
        rest = [c.split(" ", 2)[1] for c in result.commands[len(literal):]]
        assert rest == sorted(rest, key=lambda name: not name.startswith("tweakdefs"))
        assert rest[0] == "tweakdefs"

    def test_sections_join_commands(self, packaged_bundle) -> None:
        result = build_lobby_sections(FULL_CONFIGURATION, packaged_bundle)

        assert "\n".join(result.sections).split("\n") == list(result.commands)
        assert all(len(section) <= MAX_COMMAND_LENGTH for section in result.sections)

    def test_default_fits_single_section(self, packaged_bundle) -> None:
        result = build_lobby_sections(DEFAULT_CONFIGURATION, packaged_bundle)

        assert len(result.sections) == 1
        assert len(_tweak_commands(result.commands, "tweakdefs")) <= MAX_SLOTS_PER_TYPE

    def test_deterministic(self, packaged_bundle) -> None:
        first = build_lobby_sections(FULL_CONFIGURATION, packaged_bundle)
        second = build_lobby_sections(FULL_CONFIGURATION, packaged_bundle)

        assert first.sections == second.sections

    def test_template_values_interpolated(self, packaged_bundle) -> None:
        result = build_lobby_sections(FULL_CONFIGURATION, packaged_bundle)

        lua = "\n".join(
            decode(c.split(" ", 2)[2]) for c in _tweak_commands(result.commands, "tweakdefs")
        )
        assert "(8 / 20)" not in lua
        assert "(0.4)" in lua
        assert "(0.5)" in lua
        assert "$" not in lua

    def test_small_limit_splits_slots(self, packaged_bundle) -> None:
        """A tighter limit spreads fragments over numbered slots."""
        result = build_lobby_sections(
            DEFAULT_CONFIGURATION, packaged_bundle, max_command_length=1000
        )

        names = [c.split(" ", 2)[1] for c in _tweak_commands(result.commands, "tweakdefs")]
        assert names[:2] == ["tweakdefs", "tweakdefs1"]
        assert all(len(s) <= 1000 for s in result.sections)
        assert _decoded_sources(result.commands, "tweakdefs") == [
            "~lua/main-defs.lua",
            "~lua/no-rush-defs.lua",
            "~lua/queen-hp-template.lua{QUEEN_COUNT=8}",
        ]

    def test_slot_overflow_raises(self, packaged_bundle) -> None:
        with pytest.raises(TweakpackError) as exc_info:
            build_lobby_sections(
                DEFAULT_CONFIGURATION,
                packaged_bundle,
                max_command_length=1000,
                max_slots_per_type=1,
            )

        assert exc_info.value.code == ErrorCode.PACK_SLOT_LIMIT_EXCEEDED
        assert exc_info.value.context["category"] == "tweakdefs"

    def test_oversized_fragment_raises(self, packaged_bundle) -> None:
        with pytest.raises(TweakpackError) as exc_info:
            build_lobby_sections(DEFAULT_CONFIGURATION, packaged_bundle, max_command_length=500)

        assert exc_info.value.code == ErrorCode.PACK_FRAGMENT_TOO_LARGE
        assert exc_info.value.context["source"] == "~lua/main-defs.lua"

    def test_missing_file_skipped_with_diagnostic(self, small_mapping) -> None:
        configuration = Configuration(raptor_health_mult=1.5)

        result = build_lobby_sections(configuration, {"lua/plain.lua": "x = 1"}, mapping=small_mapping)

        assert result.diagnostics.kinds() == [DiagnosticKind.LOOKUP]
        assert _decoded_sources(result.commands, "tweakdefs") == ["~lua/plain.lua"]

    def test_diagnostics_sink_is_used(self, small_bundle, small_mapping) -> None:
        diagnostics = Diagnostics()

        result = build_lobby_sections(
            Configuration(raptor_health_mult=1.5),
            small_bundle,
            mapping=small_mapping,
            diagnostics=diagnostics,
        )

        assert result.diagnostics is diagnostics

    def test_nothing_mapped_only_base(self, small_bundle, small_mapping) -> None:
        result = build_lobby_sections(DEFAULT_CONFIGURATION, small_bundle, mapping=small_mapping)

        assert result.commands[0] == "!preset coop"
        assert len(result.commands) == 2
        assert result.commands[1].startswith("!bset tweakdefs ")


class TestGroupIntoSections:
    """Tests for group_into_sections."""

    def test_greedy_grouping(self) -> None:
        commands = ["a" * 40, "b" * 40, "c" * 40]

        sections = group_into_sections(commands, 100)

        assert sections == ["a" * 40 + "\n" + "b" * 40, "c" * 40]

    def test_exact_fit(self) -> None:
        assert group_into_sections(["a" * 49, "b" * 50], 100) == ["a" * 49 + "\n" + "b" * 50]

    def test_oversized_command_alone(self) -> None:
        diagnostics = Diagnostics()

        sections = group_into_sections(["a", "x" * 150, "b"], 100, diagnostics)

        assert sections == ["a", "x" * 150, "b"]
        assert diagnostics.kinds() == [DiagnosticKind.OVERSIZED_COMMAND]

    def test_empty(self) -> None:
        assert group_into_sections([]) == []


class TestCollectTweakItems:
    """Tests for collect_tweak_items."""

    def test_items_for_configuration(self, small_bundle, small_mapping) -> None:
        items = collect_tweak_items(
            Configuration(difficulty="Hard", raptor_health_mult=1.5),
            small_bundle,
            mapping=small_mapping,
        )

        assert items == [
            TweakItem(type="command", source=None, data="!preset coop"),
            TweakItem(type="command", source=None, data="!bset raptor_difficulty hard"),
            TweakItem(type="tweakdefs", source="~lua/plain.lua", data="x = 1"),
            TweakItem(
                type="tweakdefs",
                source="~lua/hp.lua{HP=1.5}",
                data="unitDef.metalcost = unitDef.health * (0.5)",
            ),
        ]

    def test_missing_reference_flagged(self, small_mapping) -> None:
        items = collect_tweak_items(DEFAULT_CONFIGURATION, {}, mapping=small_mapping)

        missing = [item for item in items if item.is_missing]
        assert len(missing) == 1
        assert missing[0].source == "~lua/plain.lua"
        assert missing[0].file_name == "plain.lua"

    def test_file_name(self) -> None:
        item = TweakItem(type="tweakdefs", source="~lua/sub/hp.lua{HP=2}", data="")

        assert item.file_name == "hp.lua"
        assert TweakItem(type="command", source=None, data="!x").file_name is None
