"""Decode command - show the Lua inside a tweakdefs/tweakunits command."""

import sys

import click
from rich.console import Console
from rich.syntax import Syntax

from tweakpack.commands import decode as decode_payload
from tweakpack.commands import extract_source_references
from tweakpack.commands.packing import BSET_COMMAND
from tweakpack.configuration import TWEAK_CATEGORIES
from tweakpack.foundation.errors import ErrorCode, TweakpackError
from tweakpack.interface.cli.error_handler import handle_error

console = Console()


def extract_payload(text: str) -> str:
    """Get the payload from ``!bset tweakdefsN <payload>`` or a bare payload.

    Raises:
        TweakpackError: PAYLOAD_DECODE_FAILED for a non-tweak ``!bset`` command
    """
    text = text.strip()
    if not text.startswith(BSET_COMMAND):
        return text

    parts = text.split(maxsplit=2)
    if len(parts) != 3 or not parts[1].startswith(TWEAK_CATEGORIES):
        raise TweakpackError(
            code=ErrorCode.PAYLOAD_DECODE_FAILED,
            context={"detail": f"not a tweakdefs/tweakunits command: {text[:60]}"},
        )
    return parts[2]


@click.command()
@click.argument("command_or_payload")
@click.option("--raw", is_flag=True, help="Print the Lua source only")
def decode(command_or_payload: str, raw: bool) -> None:
    """Decode a packed slot back to Lua.

    Accepts a whole ``!bset tweakdefs1 ...`` line or just the payload. Use
    ``-`` to read from stdin.

    Examples:

        tweakpack decode "!bset tweakdefs LS0gU291cmNl..."
        tweakpack build --raw | grep tweakunits | tweakpack decode -
    """
    if command_or_payload == "-":
        command_or_payload = sys.stdin.read()

    try:
        lua = decode_payload(extract_payload(command_or_payload))
    except TweakpackError as e:
        handle_error(e)

    if raw:
        click.echo(lua)
        return

    console.print(Syntax(lua, "lua", word_wrap=True))
    sources = extract_source_references(lua)
    if sources:
        console.print("\n[dim]Sources:[/dim]")
        for source in sources:
            console.print(f"  {source}", markup=False)
