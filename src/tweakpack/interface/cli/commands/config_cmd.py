"""Config command - manage tweakpack settings and lobby configuration files."""

from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from tweakpack.configuration import (
    DEFAULT_CONFIGURATION,
    dump_configuration,
    save_configuration_file,
)
from tweakpack.foundation.config import get_config, load_config, save_default_config
from tweakpack.foundation.errors import TweakpackError
from tweakpack.interface.cli.error_handler import handle_error

console = Console()


@click.group()
def config() -> None:
    """Manage tweakpack configuration.

    Settings are loaded from (in priority order):
    1. Environment variables (TWEAKPACK_*)
    2. .tweakpack/config.yaml (project-local)
    3. ~/.tweakpack/config.yaml (user-global)
    4. Built-in defaults

    Examples:

        tweakpack config show              # Show current settings
        tweakpack config init              # Create default settings file
        tweakpack config defaults          # Print the default lobby configuration
        tweakpack config new lobby.yaml    # Start a lobby configuration file

    Environment overrides:

        TWEAKPACK_LIMITS_MAX_COMMAND_LENGTH=20000 tweakpack build ...
        TWEAKPACK_PATHS_BUNDLE=build/bundle.json tweakpack build ...
    """


@config.command()
@click.option("--path", type=click.Path(), help="Config file path to show")
def show(path: str | None) -> None:
    """Show current settings and which config files are active."""
    cfg = load_config(path) if path else get_config()

    console.print(Panel("[bold]Tweakpack Configuration[/bold]", border_style="cyan"))

    console.print("\n[cyan]Limits[/cyan]")
    console.print(f"  Max command length: {cfg.limits.max_command_length}")
    console.print(f"  Max slots per type: {cfg.limits.max_slots_per_type}")

    console.print("\n[cyan]Paths[/cyan]")
    console.print(f"  Bundle: {cfg.paths.bundle or '(packaged)'}")
    console.print(f"  Mapping: {cfg.paths.mapping or '(packaged)'}")

    console.print(f"\n[cyan]Debug[/cyan]: {cfg.debug}")

    console.print("\n[dim]Config sources:[/dim]")
    for candidate in (Path(".tweakpack/config.yaml"), Path.home() / ".tweakpack" / "config.yaml"):
        if candidate.exists():
            console.print(f"  [green]✓[/green] {candidate}")
        else:
            console.print(f"  [dim]○[/dim] {candidate} (not found)")


@config.command()
@click.option(
    "--path",
    type=click.Path(),
    default=".tweakpack/config.yaml",
    help="Config file path (default: .tweakpack/config.yaml)",
)
@click.option("--global", "global_config", is_flag=True, help="Create in ~/.tweakpack/ instead")
def init(path: str, global_config: bool) -> None:
    """Create a default settings file.

    Examples:
        tweakpack config init
        tweakpack config init --global
    """
    config_path = Path.home() / ".tweakpack" / "config.yaml" if global_config else path
    saved_path = save_default_config(config_path)
    console.print(f"[green]✓[/green] Config file created: {saved_path}")


@config.command()
def defaults() -> None:
    """Print the default lobby configuration as YAML."""
    click.echo(dump_configuration(DEFAULT_CONFIGURATION), nl=False)


@config.command()
@click.argument("path", type=click.Path(dir_okay=False))
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def new(path: str, force: bool) -> None:
    """Write the default lobby configuration to PATH for editing."""
    if Path(path).exists() and not force:
        console.print(f"[red]✗[/red] File already exists: {path} (use --force to overwrite)")
        raise SystemExit(1)
    try:
        saved_path = save_configuration_file(DEFAULT_CONFIGURATION, path)
    except TweakpackError as e:
        handle_error(e)
    console.print(f"[green]✓[/green] Lobby configuration created: {saved_path}")
