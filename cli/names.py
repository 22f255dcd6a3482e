"""
Names Subcommand Module

Prints the names the pipeline would generate for a given second. Useful for
locating audio objects and transcription jobs from a past run.
"""

from datetime import datetime
from typing import Optional

import click

from relay.naming import ArtifactNamer, media_uri

from .help_texts import AT_HELP, CONFIG_HELP, NAMES_HELP
from .run import load_config_or_exit
from .shared_options import config_option


def _parse_timestamp(ctx, param, value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y%m%d%H%M%S")
    except ValueError:
        raise click.BadParameter("expected YYYYMMDDHHMMSS, e.g. 20240102030405")


@click.command(help=NAMES_HELP)
@config_option(help=CONFIG_HELP)
@click.option("--at", "at", default=None, callback=_parse_timestamp, help=AT_HELP)
def names(config: Optional[str], at: Optional[datetime]):
    """Show generated audio object and job names."""
    relay_config = load_config_or_exit(config)
    namer = ArtifactNamer(relay_config.naming, relay_config.speech.output_format)
    now = at or datetime.now()

    audio_name = namer.next_audio_name(now)
    click.echo(f"audio: {audio_name}")
    click.echo(f"job:   {namer.next_job_name(now)}")
    if relay_config.storage.bucket:
        click.echo(f"uri:   {media_uri(relay_config.storage.bucket, audio_name)}")
