"""
Check Subcommand Module

Validates configuration and probes each AWS service with a read-only call
so credential or permission problems show up before a run.
"""

import sys
from typing import Optional

import click

from relay.errors import ConfigurationError
from relay.providers.factory import ClientBundleFactory
from relay.utils.logging_config import logging_config

from .help_texts import BUCKET_HELP, CHECK_HELP, CONFIG_HELP, LOG_LEVEL_HELP, ExitCodes
from .run import load_config_or_exit
from .shared_options import bucket_option, config_option, log_level_option


@click.command(help=CHECK_HELP)
@config_option(help=CONFIG_HELP)
@bucket_option(help=BUCKET_HELP)
@log_level_option(help=LOG_LEVEL_HELP)
def check(config: Optional[str], bucket: Optional[str], log_level: Optional[str]):
    """Validate configuration and AWS service access."""
    relay_config = load_config_or_exit(config)
    if bucket:
        relay_config.storage.bucket = bucket
    logging_config.configure_logging(level=(log_level or relay_config.run.log_level).lower())

    errors = relay_config.validate()
    if errors:
        click.echo("Configuration errors:")
        for error in errors:
            click.echo(f"  - {error}")
        sys.exit(ExitCodes.INVALID_CONFIGURATION)
    click.echo("Configuration OK")

    try:
        results = ClientBundleFactory(relay_config).validate_requirements()
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(ExitCodes.INVALID_CONFIGURATION)

    failed = False
    for service, service_errors in results.items():
        if service_errors:
            failed = True
            click.echo(f"{service}: FAILED")
            for error in service_errors:
                click.echo(f"  - {error}")
        else:
            click.echo(f"{service}: OK")

    if failed:
        sys.exit(ExitCodes.REQUIREMENTS_NOT_MET)
