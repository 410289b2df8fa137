"""Lobby command generation pipeline."""

from tweakpack.commands.builder import (
    LobbySections,
    TweakItem,
    build_lobby_sections,
    collect_tweak_items,
    group_into_sections,
)
from tweakpack.commands.encoding import decode, encode
from tweakpack.commands.interpolator import (
    Division,
    Multiplication,
    Unsupported,
    classify_expression,
    evaluate_expression,
    interpolate_template,
)
from tweakpack.commands.lua_comments import (
    annotate_source,
    extract_source_references,
    strip_comment_prefix,
)
from tweakpack.commands.packing import pack_category, slot_name
from tweakpack.commands.reference import ParsedReference, parse_reference
from tweakpack.commands.resolver import process_lua_reference

__all__ = [
    # Builder
    "LobbySections",
    "TweakItem",
    "build_lobby_sections",
    "collect_tweak_items",
    "group_into_sections",
    # Encoding
    "decode",
    "encode",
    # Interpolation
    "Division",
    "Multiplication",
    "Unsupported",
    "classify_expression",
    "evaluate_expression",
    "interpolate_template",
    # Lua comments
    "annotate_source",
    "extract_source_references",
    "strip_comment_prefix",
    # Packing
    "pack_category",
    "slot_name",
    # References
    "ParsedReference",
    "parse_reference",
    "process_lua_reference",
]
