"""Inspect command - list every command and Lua file a configuration uses."""

import click
from rich.console import Console
from rich.table import Table

from tweakpack.commands import collect_tweak_items
from tweakpack.foundation.config import get_config
from tweakpack.foundation.errors import TweakpackError
from tweakpack.interface.cli.error_handler import handle_error
from tweakpack.interface.cli.helpers import load_inputs, preview

console = Console()

_TYPE_STYLES = {
    "command": "cyan",
    "tweakdefs": "magenta",
    "tweakunits": "green",
}


@click.command()
@click.argument("config_file", required=False, type=click.Path(dir_okay=False))
@click.option("--bundle", "bundle_path", type=click.Path(), help="Lua bundle directory or JSON file")
@click.option("--mapping", "mapping_path", type=click.Path(), help="Configuration mapping YAML")
def inspect(config_file: str | None, bundle_path: str | None, mapping_path: str | None) -> None:
    """List the commands and Lua references a configuration implies.

    Unresolvable references are listed as missing instead of being skipped.

    Examples:

        tweakpack inspect
        tweakpack inspect lobby.yaml --bundle build/bundle.json
    """
    cfg = get_config()
    try:
        configuration, bundle, mapping = load_inputs(cfg, config_file, bundle_path, mapping_path)
        items = collect_tweak_items(configuration, bundle, mapping=mapping)
    except TweakpackError as e:
        handle_error(e)

    table = Table(title="Tweak items", show_header=True)
    table.add_column("Type")
    table.add_column("File")
    table.add_column("Status")
    table.add_column("Preview", overflow="fold")

    for item in items:
        style = _TYPE_STYLES.get(item.type, "white")
        status = "[red]missing[/red]" if item.is_missing else "[green]ok[/green]"
        table.add_row(
            f"[{style}]{item.type}[/{style}]",
            item.file_name or "-",
            status,
            preview(item.data),
        )
    console.print(table)

    missing = [item.source for item in items if item.is_missing]
    if missing:
        console.print(f"\n[red]✗[/red] {len(missing)} reference(s) not found in bundle:")
        for source in missing:
            console.print(f"  {source}", markup=False)
