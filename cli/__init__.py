"""
CLI Package for Enrichment Lookup

This package provides a modular CLI architecture using Click groups and subcommands.
Each subcommand is implemented in its own module for better maintainability and testing.

The main entry point is the main() function which creates a Click group and registers
all available subcommands. The cli() function serves as the console script entry point
for setup.py.
"""

import os
import click
from dotenv import load_dotenv
from enrichment_lookup.utils.logging_config import configure_logging

# Load environment variables from .env files
# Priority: .env.dev (if exists) overrides .env
if os.path.exists('.env.dev'):
    load_dotenv('.env.dev')
elif os.path.exists('.env'):
    load_dotenv('.env')
from .resolve import resolve
from .config import config

# Configure logging when CLI package is imported
configure_logging(level="warning")

@click.group()
@click.version_option(version='1.0.0', prog_name='enrichment-lookup')
def main():
    """Enrichment Lookup CLI - Resolve enrichment declarations of schema files.

    Reads descriptor sets of proto-style schema files and prints the map from
    each enrichment type to the event types it enriches, as consumed by the
    code generator.
    """
    pass

# Register subcommands
main.add_command(resolve)
main.add_command(config)

# Entry point for setup.py console script
def cli():
    """Console script entry point.

    This function is called when the enrichment-lookup command is executed
    from the command line after installation via pip.
    """
    main()
