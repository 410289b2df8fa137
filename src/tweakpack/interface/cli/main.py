"""Main CLI entry point.

    tweakpack build lobby.yaml
    tweakpack inspect lobby.yaml
    tweakpack decode "!bset tweakdefs1 ..."
    tweakpack config show
"""

import sys

import click
from rich.console import Console

from tweakpack import __version__
from tweakpack.foundation.config import get_config
from tweakpack.foundation.logging import configure_logging
from tweakpack.interface.cli.commands import build_cmd, config_cmd, decode_cmd, inspect_cmd
from tweakpack.interface.cli.error_handler import handle_error

console = Console(stderr=True)


def cli_entrypoint() -> None:
    """Wrapped entrypoint with global error handling.

    Catches anything a command lets escape and prints it as a structured
    error instead of a traceback. Called from pyproject.toml [project.scripts].
    """
    try:
        main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        console.print("\n[dim]Aborted[/dim]")
        sys.exit(130)
    except Exception as e:
        handle_error(e, json_output="--json" in sys.argv)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__, prog_name="tweakpack")
def main(debug: bool) -> None:
    """Tweakpack - raptors lobby configurator.

    \b
    Turns a lobby configuration into !bset commands, packing Lua tweaks
    into tweakdefs/tweakunits slots and grouping everything into
    sections you paste into the lobby one by one.

    \b
    EXAMPLES:
        tweakpack build                   Default configuration
        tweakpack build lobby.yaml --raw  Sections only
        tweakpack inspect lobby.yaml      What goes into the lobby
        tweakpack decode "!bset tweakdefs ..."
    """
    cfg = get_config()
    configure_logging(debug=debug, config_debug=cfg.debug)


main.add_command(build_cmd.build)
main.add_command(inspect_cmd.inspect)
main.add_command(decode_cmd.decode)
main.add_command(config_cmd.config)
