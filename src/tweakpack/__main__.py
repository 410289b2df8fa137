"""Allow ``python -m tweakpack``."""

from tweakpack.interface.cli.main import cli_entrypoint

cli_entrypoint()
