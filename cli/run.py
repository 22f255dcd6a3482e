"""
Run Subcommand Module

This module implements the run subcommand: it loads configuration, builds
the AWS client bundle and drives the pipeline orchestrator over the input
file. Any stage failure ends the run with exit code 1.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from relay.config import RelayConfig
from relay.errors import ConfigurationError
from relay.orchestrator import PipelineOrchestrator
from relay.providers.factory import ClientBundleFactory
from relay.utils.logging_config import logging_config

from .help_texts import (
    BUCKET_HELP, CONFIG_HELP, INPUT_HELP, LOG_FILE_HELP, LOG_LEVEL_HELP,
    OUTPUT_HELP, REPORT_HELP, RUN_HELP, UPLOAD_TRANSLATIONS_HELP, ExitCodes,
)
from .shared_options import (
    bucket_option, config_option, input_option, log_file_option,
    log_level_option, output_option,
)


@click.command(help=RUN_HELP)
@input_option(help=INPUT_HELP)
@output_option(help=OUTPUT_HELP)
@bucket_option(help=BUCKET_HELP)
@config_option(help=CONFIG_HELP)
@log_level_option(help=LOG_LEVEL_HELP)
@log_file_option(help=LOG_FILE_HELP)
@click.option(
    "--upload-translations/--no-upload-translations",
    default=None,
    help=UPLOAD_TRANSLATIONS_HELP,
)
@click.option("--report", "report_path", default=None, type=click.Path(dir_okay=False), help=REPORT_HELP)
def run(
    input_path: Optional[str],
    output_path: Optional[str],
    bucket: Optional[str],
    config: Optional[str],
    log_level: Optional[str],
    log_file: Optional[str],
    upload_translations: Optional[bool],
    report_path: Optional[str],
):
    """Run the translate/speak/store/transcribe pipeline over an input file."""
    relay_config = load_config_or_exit(config)
    relay_config = _override_config_with_cli_params(
        relay_config, input_path, output_path, bucket, log_level, log_file, upload_translations
    )

    logging_config.configure_logging(level=relay_config.run.log_level, log_file=relay_config.run.log_file)
    logger = logging.getLogger(__name__)
    logging_config.log_configuration_details(relay_config.describe())

    errors = relay_config.validate()
    if errors:
        for error in errors:
            click.echo(f"Configuration error: {error}", err=True)
        sys.exit(ExitCodes.INVALID_CONFIGURATION)

    try:
        clients = ClientBundleFactory(relay_config).create_bundle()
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(ExitCodes.INVALID_CONFIGURATION)

    logger.info(f"Processing {relay_config.run.input_path}")
    report = PipelineOrchestrator(clients, relay_config).run()

    if report_path:
        try:
            Path(report_path).write_text(report.model_dump_json(indent=2), encoding="utf-8")
            logger.debug(f"Run report written to {report_path}")
        except OSError as e:
            click.echo(f"Could not write run report to {report_path}: {e}", err=True)

    if not report.succeeded:
        click.echo(f"Pipeline stopped at {report.failure.stage}: {report.failure.message}", err=True)
        sys.exit(ExitCodes.PIPELINE_FAILURE)

    click.echo(
        f"Processed {report.records_completed} records "
        f"({report.blank_lines_skipped} blank lines skipped)"
    )
    for outcome in report.outcomes:
        click.echo(f"  line {outcome.index}: {outcome.audio_key} -> {outcome.job_name}")
    if report.translations_key:
        click.echo(f"Translations uploaded to s3://{relay_config.storage.bucket}/{report.translations_key}")


def load_config_or_exit(config_path: Optional[str]) -> RelayConfig:
    """Load configuration, exiting with INVALID_CONFIGURATION on failure."""
    try:
        return RelayConfig.load(config_path)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(ExitCodes.INVALID_CONFIGURATION)


def _override_config_with_cli_params(
    config: RelayConfig,
    input_path: Optional[str],
    output_path: Optional[str],
    bucket: Optional[str],
    log_level: Optional[str],
    log_file: Optional[str],
    upload_translations: Optional[bool],
) -> RelayConfig:
    """Apply command line options on top of loaded configuration."""
    if input_path:
        config.run.input_path = input_path
    if output_path:
        config.run.output_path = output_path
    if bucket:
        config.storage.bucket = bucket
    if log_level:
        config.run.log_level = log_level.lower()
    if log_file:
        config.run.log_file = log_file
    if upload_translations is not None:
        config.storage.upload_translations = upload_translations
    return config
