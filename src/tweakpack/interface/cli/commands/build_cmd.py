"""Build command - turn a lobby configuration into lobby commands."""

import json

import click
from rich.console import Console
from rich.table import Table

from tweakpack.commands import LobbySections, build_lobby_sections
from tweakpack.foundation.config import get_config
from tweakpack.foundation.errors import TweakpackError
from tweakpack.interface.cli.error_handler import handle_error
from tweakpack.interface.cli.helpers import load_inputs

console = Console()


@click.command()
@click.argument("config_file", required=False, type=click.Path(dir_okay=False))
@click.option("--bundle", "bundle_path", type=click.Path(), help="Lua bundle directory or JSON file")
@click.option("--mapping", "mapping_path", type=click.Path(), help="Configuration mapping YAML")
@click.option(
    "--max-length",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum characters per command and section (default: from config)",
)
@click.option(
    "--max-slots",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum slots per tweak category (default: from config)",
)
@click.option("--raw", is_flag=True, help="Print sections only, separated by blank lines")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def build(
    config_file: str | None,
    bundle_path: str | None,
    mapping_path: str | None,
    max_length: int | None,
    max_slots: int | None,
    raw: bool,
    json_output: bool,
) -> None:
    """Build lobby sections for a configuration.

    CONFIG_FILE is a YAML or JSON lobby configuration with camelCase keys.
    Missing keys take their defaults; without a file the default
    configuration is built.

    Each section is one chat message: paste them into the lobby in order.

    Examples:

        tweakpack build                       # Default configuration
        tweakpack build lobby.yaml --raw      # Copy-paste friendly
        tweakpack build lobby.yaml --json     # For scripts
    """
    cfg = get_config()
    try:
        configuration, bundle, mapping = load_inputs(cfg, config_file, bundle_path, mapping_path)
        result = build_lobby_sections(
            configuration,
            bundle,
            mapping=mapping,
            max_command_length=max_length or cfg.limits.max_command_length,
            max_slots_per_type=max_slots or cfg.limits.max_slots_per_type,
        )
    except TweakpackError as e:
        handle_error(e, json_output=json_output)

    if json_output:
        click.echo(json.dumps(_to_json(result), indent=2))
    elif raw:
        click.echo("\n\n".join(result.sections))
    else:
        _print_sections(result)


def _to_json(result: LobbySections) -> dict:
    return {
        "sections": list(result.sections),
        "commands": list(result.commands),
        "diagnostics": [d.to_dict() for d in result.diagnostics.entries],
    }


def _print_sections(result: LobbySections) -> None:
    table = Table(title="Lobby sections", show_header=True)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Commands", justify="right")
    table.add_column("Characters", justify="right")
    for i, section in enumerate(result.sections, 1):
        table.add_row(str(i), str(section.count("\n") + 1), str(len(section)))
    console.print(table)

    for i, section in enumerate(result.sections, 1):
        console.print(f"\n[bold cyan]Section {i}/{len(result.sections)}[/bold cyan]")
        console.print(section, soft_wrap=True, markup=False, highlight=False)

    if len(result.diagnostics):
        console.print(f"\n[yellow]⚠[/yellow] {len(result.diagnostics)} warning(s) while building")
