"""Lua comment helpers used to keep packed payloads traceable."""

LUA_COMMENT_PREFIX = "--"
LUA_LINE_TERMINATOR = "\n"
SOURCE_MARKER = "Source: "


def to_comment(text: str) -> str:
    """Render text as a single-line Lua comment."""
    return f"{LUA_COMMENT_PREFIX} {text}"


def strip_comment_prefix(line: str) -> str:
    """Remove the leading ``--`` from a Lua comment line.

    Lines that are not comments are returned unchanged.
    """
    stripped = line.lstrip()
    if stripped.startswith(LUA_COMMENT_PREFIX):
        return stripped[len(LUA_COMMENT_PREFIX):]
    return line


def annotate_source(source: str, reference: str) -> str:
    """Prefix Lua source with a comment naming the reference it came from.

    >>> annotate_source("x = 1", "~lua/x.lua")
    '-- Source: ~lua/x.lua\\nx = 1'
    """
    return f"{to_comment(SOURCE_MARKER + reference)}{LUA_LINE_TERMINATOR}{source}"


def extract_source_references(lua: str) -> list[str]:
    """Recover the references recorded by ``annotate_source``, in order."""
    marker_line = to_comment(SOURCE_MARKER)
    references = []
    for line in lua.split(LUA_LINE_TERMINATOR):
        if line.startswith(marker_line):
            references.append(strip_comment_prefix(line).strip().removeprefix(SOURCE_MARKER))
    return references
