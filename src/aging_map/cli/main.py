"""Main entry point for the aging map CLI."""

import click

from aging_map import __version__
from aging_map.cli.commands import bench, scenario
from aging_map.cli.output import setup_logging
from aging_map.utils.logger import LoggingConfiguration


@click.group()
@click.version_option(version=__version__, prog_name="aging-map")
@click.option("--log-config", default=None, help="YAML logging configuration file.")
@click.option(
    "-v", "--verbose", count=True,
    help="Increase verbosity level (-v, -vv). Ignored when --log-config is given.",
)
def cli(log_config, verbose):
    """Aging map utility - inspect and load-test a TTL dictionary.

    A --log-config file takes precedence over -v.
    """
    if log_config:
        LoggingConfiguration.setup_logging(log_config)
    else:
        setup_logging(verbose)


cli.add_command(scenario)
cli.add_command(bench)


def main():
    """Main entry point function."""
    cli(prog_name="aging-map")


if __name__ == "__main__":
    main()
