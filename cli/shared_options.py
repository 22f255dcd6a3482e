"""
Shared CLI Option Decorators

This module provides reusable Click decorators for common CLI options,
ensuring consistency across subcommands.
"""

import click


def config_option(help=None):
    """Decorator for configuration file options."""
    def decorator(f):
        return click.option(
            '--config',
            default=None,
            type=click.Path(dir_okay=False),
            help=help or 'Path to configuration file'
        )(f)
    return decorator


def input_option(help=None):
    """Decorator for input text file options."""
    def decorator(f):
        return click.option(
            '--input', '-i',
            'input_path',
            default=None,
            type=click.Path(dir_okay=False),
            help=help or 'Input text file'
        )(f)
    return decorator


def output_option(help=None):
    """Decorator for output file options."""
    def decorator(f):
        return click.option(
            '--output', '-o',
            'output_path',
            default=None,
            type=click.Path(dir_okay=False),
            help=help or 'Output file path'
        )(f)
    return decorator


def bucket_option(help=None):
    """Decorator for S3 bucket options."""
    def decorator(f):
        return click.option(
            '--bucket', '-b',
            default=None,
            help=help or 'S3 bucket name'
        )(f)
    return decorator


def log_level_option(help=None):
    """Decorator for logging level options."""
    def decorator(f):
        return click.option(
            '--log-level',
            default=None,
            type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
            help=help or 'Logging level'
        )(f)
    return decorator


def log_file_option(help=None):
    """Decorator for log file options."""
    def decorator(f):
        return click.option(
            '--log-file',
            default=None,
            type=click.Path(dir_okay=False),
            help=help or 'Log file path'
        )(f)
    return decorator
