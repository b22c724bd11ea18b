"""
Config Subcommand Module

Prints the default configuration file with comments, to be saved as
`.enrichment-lookup/config.yaml`.
"""

import click

from enrichment_lookup.config.manager import ConfigurationManager


@click.command(help="Print the default configuration file")
def config():
    """Print the default configuration file.

    Example:
        enrichment-lookup config > .enrichment-lookup/config.yaml
    """
    click.echo(ConfigurationManager().generate_default_config(), nl=False)
