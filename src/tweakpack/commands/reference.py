"""Extended Lua file references.

Syntax: ``~lua/file.lua`` or ``~lua/file.lua{VAR1=val1,VAR2=val2}``.
"""

import logging
import re
from dataclasses import dataclass, field

from tweakpack.foundation.diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)

REFERENCE_SIGIL = "~"

# Group 1: path/to/file.lua, group 2: VAR1=val1,VAR2=val2 (optional)
_REFERENCE_PATTERN = re.compile(r"~([^{]+)(?:\{([^}]+)\})?")


@dataclass(frozen=True, slots=True)
class ParsedReference:
    """A parsed reference token.

    Attributes:
        file_path: Bundle path of the Lua file
        variables: Template variable name -> replacement text
    """

    file_path: str
    variables: dict[str, str] = field(default_factory=dict)


def parse_reference(
    ref: str,
    diagnostics: Diagnostics | None = None,
) -> ParsedReference | None:
    """Parse an extended Lua file reference into its components.

    Malformed tokens are rejected as a whole. A malformed ``key=value`` pair
    inside an otherwise valid token is skipped and the rest still parses.

    Args:
        ref: The reference string to parse
        diagnostics: Sink for parse problems

    Returns:
        Parsed components, or None if the token is not a valid reference

    Example:
        >>> parse_reference("~lua/raptor-hp-template.lua{HP_MULTIPLIER=1.5}")
        ParsedReference(file_path='lua/raptor-hp-template.lua', variables={'HP_MULTIPLIER': '1.5'})
    """
    sink = diagnostics if diagnostics is not None else Diagnostics()

    if not ref.startswith(REFERENCE_SIGIL):
        sink.warn(
            DiagnosticKind.PARSE,
            f"Invalid Lua reference (missing {REFERENCE_SIGIL} prefix): {ref}",
            ref,
            log=logger,
        )
        return None

    match = _REFERENCE_PATTERN.fullmatch(ref)
    if not match:
        sink.warn(DiagnosticKind.PARSE, f"Malformed Lua reference syntax: {ref}", ref, log=logger)
        return None

    file_path, variables_string = match.group(1), match.group(2)

    variables: dict[str, str] = {}
    if variables_string:
        for pair in variables_string.split(","):
            key, sep, value = pair.partition("=")
            key = key.strip()
            if not key or not sep:
                sink.warn(
                    DiagnosticKind.PARSE,
                    f'Invalid variable pair in reference {ref}: "{pair}"',
                    ref,
                    log=logger,
                )
                continue
            variables[key] = value.strip()

    return ParsedReference(file_path=file_path, variables=variables)
