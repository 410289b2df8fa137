"""CLI Error Handler.

Provides unified error handling for the CLI with support for:
- Human-readable output (default)
- JSON output for machine consumption (scripts piping ``build --json``)
"""

import json
import sys
from typing import NoReturn

from rich.console import Console
from rich.text import Text

from tweakpack.foundation.errors import ErrorCode, TweakpackError

_CATEGORY_ICONS = {
    "config": "⚙️",
    "mapping": "🗺️",
    "bundle": "📦",
    "packing": "📏",
    "encoding": "🔣",
    "runtime": "⚡",
    "io": "📁",
}


def _as_tweakpack_error(error: TweakpackError | Exception) -> TweakpackError:
    if isinstance(error, TweakpackError):
        return error
    return TweakpackError(
        code=ErrorCode.RUNTIME_STATE_INVALID,
        context={"detail": str(error)},
        cause=error,
    )


def handle_error(
    error: TweakpackError | Exception,
    json_output: bool = False,
) -> NoReturn:
    """Handle an error with optional JSON output for machine consumption.

    Args:
        error: The error to handle (TweakpackError or generic Exception)
        json_output: If True, output JSON to stderr

    Raises:
        SystemExit: Always exits with code 1
    """
    error = _as_tweakpack_error(error)

    if json_output:
        print(format_error_for_json(error), file=sys.stderr)
        sys.exit(1)

    _print_human_error(error)
    sys.exit(1)


def _print_human_error(error: TweakpackError) -> None:
    """Print error in human-readable format."""
    console = Console(stderr=True)

    header = Text()
    header.append(f"{_CATEGORY_ICONS.get(error.category, '❌')} ", style="bold")
    header.append(error.error_id, style="bold red")
    header.append(f" {error.message}")
    console.print(header)

    if error.recovery_hints:
        console.print("\n[bold]What you can do:[/]")
        for i, hint in enumerate(error.recovery_hints, 1):
            console.print(f"  {i}. {hint}")


def format_error_for_json(error: TweakpackError | Exception) -> str:
    """Format an error as JSON string.

    Args:
        error: The error to format

    Returns:
        JSON string representation of the error
    """
    error = _as_tweakpack_error(error)
    error_dict = error.to_dict()
    if error.cause:
        error_dict["cause"] = str(error.cause)
    return json.dumps(error_dict, default=str)


def parse_error_from_json(json_str: str) -> TweakpackError | None:
    """Parse a TweakpackError from JSON string.

    Returns:
        TweakpackError if parsing succeeded, None otherwise
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError:
        return None

    if not isinstance(data, dict) or not all(k in data for k in ("error_id", "code", "message")):
        return None

    try:
        code = ErrorCode(data["code"])
    except ValueError:
        code = ErrorCode.RUNTIME_STATE_INVALID

    return TweakpackError(code=code, context=data.get("context") or {})
