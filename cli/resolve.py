"""
Resolve Subcommand Module

Loads descriptor sets, resolves the enrichment declarations of all their
schema files and prints the build-wide enrichment map to stdout. Per-file
problems go to stderr and make the command exit with status 1.
"""

import glob
import logging
import sys
from typing import Optional, Tuple

import click

from enrichment_lookup.config.manager import ConfigurationManager
from enrichment_lookup.config.schema import CollisionPolicy, OutputFormat
from enrichment_lookup.errors import EnrichmentLookupError
from enrichment_lookup.lookup.engine import EnrichmentLookup
from enrichment_lookup.utils.logging_config import configure_logging, logging_config
from .shared_options import batch_option, config_option, input_option, log_file_option, log_level_option


logger = logging.getLogger(__name__)


@click.command(help="Resolve enrichment declarations of schema descriptor sets")
@input_option()
@batch_option()
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
    default=None,
    help="Rendering of the enrichment map (default: properties)",
)
@click.option(
    "--collision-policy",
    type=click.Choice([p.value for p in CollisionPolicy], case_sensitive=False),
    default=None,
    help="Handling of enrichments declared by several files (default: last-wins)",
)
@click.option(
    "--exclude-package", "-x",
    "exclude_packages",
    multiple=True,
    help="Package to skip, may be repeated (replaces configured exclusions)",
)
@click.option(
    "--fail-fast",
    is_flag=True,
    help="Abort on the first invalid schema file",
)
@click.option(
    "--summary",
    is_flag=True,
    help="Print a per-file summary to stderr",
)
@config_option()
@log_level_option()
@log_file_option()
def resolve(
    input_paths: Tuple[str, ...],
    batch: Optional[str],
    output_format: Optional[str],
    collision_policy: Optional[str],
    exclude_packages: Tuple[str, ...],
    fail_fast: bool,
    summary: bool,
    config: Optional[str],
    log_level: Optional[str],
    log_file: Optional[str],
):
    """Resolve enrichment declarations of schema descriptor sets.

    Examples:
        # Print enrichments.properties content of one descriptor set
        enrichment-lookup resolve --input build/descriptors.yaml

        # Several descriptor sets, JSON output
        enrichment-lookup resolve -i main.yaml -i test.yaml --format json

        # All descriptor sets of a directory, fail on conflicting declarations
        enrichment-lookup resolve --batch "build/*.yaml" --collision-policy error
    """
    paths = list(input_paths)
    if batch:
        paths.extend(sorted(glob.glob(batch, recursive=True)))

    if not paths:
        click.echo("Error: --input or --batch is required", err=True)
        click.echo("Run 'enrichment-lookup resolve --help' for usage", err=True)
        sys.exit(1)

    cli_overrides = {
        'log_level': log_level.lower() if log_level else None,
        'output_format': output_format,
        'collision_policy': collision_policy,
        'exclude_packages': list(exclude_packages) or None,
        'fail_fast': True if fail_fast else None,
    }

    try:
        lookup_config = ConfigurationManager().load_configuration(config, cli_overrides)
    except EnrichmentLookupError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        sys.exit(1)

    configure_logging(level=lookup_config.log_level, log_file=log_file, force=True)
    logging_config.log_configuration_details(cli_overrides)

    try:
        report = EnrichmentLookup(lookup_config).resolve_paths(paths)
    except EnrichmentLookupError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    if lookup_config.output_format == OutputFormat.JSON.value:
        click.echo(report.enrichments.to_json())
    else:
        click.echo(report.enrichments.to_properties(), nl=False)

    if summary:
        click.echo(report.format_human(), err=True)

    for failed in report.failed:
        click.echo(click.style(f"❌ {failed.file_name}: {failed.error}", fg="red"), err=True)

    if not report.is_valid:
        sys.exit(1)
