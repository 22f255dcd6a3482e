"""
Centralized Help Text Constants

This module provides all CLI help text constants for commands and options,
ensuring consistency across subcommands.
"""

# Exit codes. Every pipeline stage failure maps to PIPELINE_FAILURE:
# callers do not distinguish translation, synthesis, upload or submission errors.
class ExitCodes:
    SUCCESS = 0
    PIPELINE_FAILURE = 1
    MISSING_REQUIRED_OPTION = 2
    INVALID_CONFIGURATION = 3
    REQUIREMENTS_NOT_MET = 4

# Command help texts
RUN_HELP = (
    "Translate each line of the input file, synthesize speech for it, upload the "
    "audio to S3 and start a transcription job."
)
CHECK_HELP = "Validate configuration and check that every AWS service is reachable."
NAMES_HELP = "Show the audio object and transcription job names generated for a moment in time."

# Option help texts
INPUT_HELP = (
    "Path to a UTF-8 text file with one record per line. Blank lines are skipped. "
    "Defaults to run.input_path (./input.txt)."
)

OUTPUT_HELP = (
    "Path of the temporary file collecting translated lines. The file is deleted "
    "when the run ends. Defaults to run.output_path (translated_text.txt)."
)

BUCKET_HELP = "S3 bucket for audio objects and transcripts. Overrides storage.bucket / RELAY_BUCKET."

UPLOAD_TRANSLATIONS_HELP = (
    "Upload the translated lines to the bucket before the local file is deleted."
)

REPORT_HELP = "Write a JSON report of the run to this path."

CONFIG_HELP = (
    "Path to configuration file (.yaml). If not specified, looks for:\n"
    "  1. ./.speech-relay/config.yaml (project config)\n"
    "  2. ~/.speech-relay/config.yaml (user config)\n"
    "  3. Environment variables and built-in defaults"
)

LOG_LEVEL_HELP = "Logging level for detailed output. Use DEBUG for troubleshooting."

LOG_FILE_HELP = "Also write logs to this file (rotated at 10MB)."

AT_HELP = "Timestamp to generate names for, as YYYYMMDDHHMMSS. Defaults to now."
