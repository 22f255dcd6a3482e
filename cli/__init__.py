"""
CLI Package for Speech Relay

This package provides a modular CLI architecture using Click groups and subcommands.
Each subcommand is implemented in its own module for better maintainability and testing.

The main entry point is the main() function which creates a Click group and registers
all available subcommands. The cli() function serves as the console script entry point
for setup.py.
"""

import os
import click
from dotenv import load_dotenv
from relay.utils.logging_config import configure_logging

# Load environment variables from .env files
# Priority: .env.dev (if exists) overrides .env
if os.path.exists('.env.dev'):
    load_dotenv('.env.dev')
elif os.path.exists('.env'):
    load_dotenv('.env')
from .run import run
from .check import check
from .names import names

# Configure logging when CLI package is imported
configure_logging()

@click.group()
@click.version_option(version='0.1.0', prog_name='speech-relay')
def main():
    """Speech Relay CLI - Translate text, speak it, store it and transcribe it.

    Each non-blank input line is translated with Amazon Translate, voiced with
    Amazon Polly, uploaded to S3 and submitted to Amazon Transcribe.
    """
    pass

# Register subcommands
main.add_command(run)
main.add_command(check)
main.add_command(names)

# Entry point for setup.py console script
def cli():
    """Console script entry point.

    This function is called when the speech-relay command is executed
    from the command line after installation via pip.
    """
    main()
