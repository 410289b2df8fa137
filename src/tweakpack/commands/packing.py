"""Packing annotated Lua fragments into tweakdefs/tweakunits slots.

Each category's fragments are concatenated in arrival order and encoded into
``!bset <slot> <payload>`` commands. When one command would exceed the
command limit, fragments are split into contiguous groups, first fit by
arrival: a slot is closed only when the next fragment does not fit, and a
fragment is never split across slots. Slot numbering therefore depends only
on the input order.

Slot names: slot 0 is the bare category (``tweakdefs``), later slots carry
their index (``tweakdefs1``, ``tweakdefs2``, ...).
"""

import logging
from collections.abc import Sequence

from tweakpack.commands.encoding import encode, encoded_length
from tweakpack.commands.lua_comments import LUA_LINE_TERMINATOR, extract_source_references
from tweakpack.configuration.mapping import (
    MAX_COMMAND_LENGTH,
    MAX_SLOTS_PER_TYPE,
    TWEAK_CATEGORIES,
)
from tweakpack.foundation.errors import ErrorCode, pack_error

logger = logging.getLogger(__name__)

BSET_COMMAND = "!bset"

_SEPARATOR_BYTES = len(LUA_LINE_TERMINATOR.encode("utf-8"))


def slot_name(category: str, index: int) -> str:
    """Name of slot ``index`` of a category.

    >>> slot_name("tweakdefs", 0)
    'tweakdefs'
    >>> slot_name("tweakunits", 3)
    'tweakunits3'
    """
    return category if index == 0 else f"{category}{index}"


def format_slot_command(category: str, index: int, payload: str) -> str:
    return f"{BSET_COMMAND} {slot_name(category, index)} {payload}"


def _command_length(category: str, index: int, payload_bytes: int) -> int:
    prefix = len(BSET_COMMAND) + 1 + len(slot_name(category, index)) + 1
    return prefix + encoded_length(payload_bytes)


def _describe_fragment(fragment: str) -> str:
    first_line = fragment.split(LUA_LINE_TERMINATOR, 1)[0]
    references = extract_source_references(first_line)
    return references[0] if references else first_line[:60]


def group_fragments(
    category: str,
    fragments: Sequence[str],
    *,
    max_command_length: int = MAX_COMMAND_LENGTH,
) -> list[list[str]]:
    """Split fragments into the contiguous groups that become slots.

    Raises:
        TweakpackError: PACK_FRAGMENT_TOO_LARGE if a fragment does not fit
            in an otherwise empty slot
    """
    groups: list[list[str]] = []
    current: list[str] = []
    current_bytes = 0

    for fragment in fragments:
        size = len(fragment.encode("utf-8"))

        if current:
            joined = current_bytes + _SEPARATOR_BYTES + size
            if _command_length(category, len(groups), joined) <= max_command_length:
                current.append(fragment)
                current_bytes = joined
                continue
            groups.append(current)

        required = _command_length(category, len(groups), size)
        if required > max_command_length:
            raise pack_error(
                ErrorCode.PACK_FRAGMENT_TOO_LARGE,
                category=category,
                limit=max_command_length,
                source=_describe_fragment(fragment),
                length=required,
            )
        current = [fragment]
        current_bytes = size

    if current:
        groups.append(current)
    return groups


def pack_category(
    category: str,
    fragments: Sequence[str],
    *,
    max_command_length: int = MAX_COMMAND_LENGTH,
    max_slots: int = MAX_SLOTS_PER_TYPE,
) -> list[str]:
    """Pack a category's annotated fragments into slot commands.

    Args:
        category: "tweakdefs" or "tweakunits"
        fragments: Annotated Lua fragments, in emission order
        max_command_length: Maximum characters per command
        max_slots: Maximum slots for the category

    Returns:
        One ``!bset`` command per slot, in slot order (empty if no fragments)

    Raises:
        TweakpackError: PACK_UNKNOWN_CATEGORY, PACK_FRAGMENT_TOO_LARGE or
            PACK_SLOT_LIMIT_EXCEEDED. Content is never dropped silently.
    """
    if category not in TWEAK_CATEGORIES:
        raise pack_error(ErrorCode.PACK_UNKNOWN_CATEGORY, category=category)

    if not fragments:
        return []

    groups = group_fragments(category, fragments, max_command_length=max_command_length)
    if len(groups) > max_slots:
        raise pack_error(
            ErrorCode.PACK_SLOT_LIMIT_EXCEEDED,
            category=category,
            limit=max_slots,
            slots=len(groups),
        )

    commands = [
        format_slot_command(category, index, encode(LUA_LINE_TERMINATOR.join(group)))
        for index, group in enumerate(groups)
    ]
    logger.debug(
        "Packed %d %s fragments into %d slot(s): %s",
        len(fragments),
        category,
        len(commands),
        [len(c) for c in commands],
    )
    return commands
