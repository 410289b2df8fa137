"""Reference resolution: token + bundle -> ready-to-pack Lua source."""

import logging
from collections.abc import Mapping

from tweakpack.commands.interpolator import interpolate_template
from tweakpack.commands.reference import parse_reference
from tweakpack.foundation.diagnostics import DiagnosticKind, Diagnostics

logger = logging.getLogger(__name__)


def process_lua_reference(
    ref: str,
    bundle: Mapping[str, str],
    diagnostics: Diagnostics | None = None,
) -> str | None:
    """Process a Lua file reference with optional variable interpolation.

    Handles both standard references (``~lua/file.lua``) and template
    references (``~lua/template.lua{VAR=value}``).

    Args:
        ref: The Lua file reference
        bundle: Bundle path -> Lua source (read only)
        diagnostics: Sink for parse, lookup and template problems

    Returns:
        Lua source, or None if the reference is malformed or the file is
        not in the bundle
    """
    sink = diagnostics if diagnostics is not None else Diagnostics()

    parsed = parse_reference(ref, sink)
    if parsed is None:
        return None

    template = bundle.get(parsed.file_path)
    if template is None:
        sink.warn(
            DiagnosticKind.LOOKUP,
            f"Lua file not found in bundle: {parsed.file_path} (from reference: {ref})",
            ref,
            log=logger,
        )
        return None

    if not parsed.variables:
        return template

    return interpolate_template(template, parsed.variables, sink)
