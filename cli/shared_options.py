"""
Shared CLI Option Decorators

This module provides reusable Click decorators for common CLI options,
ensuring consistency across subcommands.
"""

import click


def input_option(help=None):
    """Decorator for descriptor set input options."""
    def decorator(f):
        return click.option(
            '--input', '-i',
            'input_paths',
            multiple=True,
            type=click.Path(dir_okay=False),
            help=help or 'Descriptor set file (YAML or JSON), may be repeated'
        )(f)
    return decorator

def batch_option(help=None):
    """Decorator for glob pattern options."""
    def decorator(f):
        return click.option(
            '--batch', '-b',
            default=None,
            help=help or "Glob pattern of descriptor sets (e.g., 'build/descriptors/*.yaml')"
        )(f)
    return decorator

def config_option(help=None):
    """Decorator for configuration file options."""
    def decorator(f):
        return click.option(
            '--config',
            default=None,
            help=help or 'Path to configuration file'
        )(f)
    return decorator

def log_level_option(help=None):
    """Decorator for logging level options."""
    def decorator(f):
        return click.option(
            '--log-level',
            default=None,
            type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
            help=help or 'Logging level (overrides config)'
        )(f)
    return decorator

def log_file_option(help=None):
    """Decorator for log file options."""
    def decorator(f):
        return click.option(
            '--log-file',
            default=None,
            type=click.Path(dir_okay=False),
            help=help or 'Also write logs to this file'
        )(f)
    return decorator
