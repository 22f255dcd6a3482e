"""
Relay Error Classes

This module defines the exception hierarchy for the speech relay pipeline.
Every remote or local failure that can stop a run is represented by one
stage-specific error, all sharing the PipelineError base so the orchestrator
can treat them uniformly.

Error Hierarchy:
    RelayError (base)
    ├── ConfigurationError (invalid/missing configuration)
    └── PipelineError (a pipeline stage failed)
        ├── LocalFileError (local open/read/write/delete failures)
        ├── TranslationError
        ├── SynthesisError
        ├── StorageError
        └── SubmissionError

Remote causes (authentication, throttling, validation, network) are not
distinguished: each stage collapses them into its own error kind.

Usage:
    >>> from relay.errors import TranslationError
    >>>
    >>> try:
    >>>     translator.translate(text, "ja", "en")
    >>> except TranslationError as e:
    >>>     logger.error(f"{e.stage} failed: {e}")
"""

from typing import Optional


class RelayError(Exception):
    """Base exception for all speech relay errors."""
    pass


class ConfigurationError(RelayError):
    """Raised when relay configuration is invalid or missing.

    Example:
        >>> raise ConfigurationError(
        >>>     "S3 bucket not configured. "
        >>>     "Set RELAY_BUCKET environment variable or storage.bucket in config.yaml."
        >>> )
    """
    pass


class PipelineError(RelayError):
    """Raised when a pipeline stage fails.

    Attributes:
        stage: Name of the stage that failed (e.g. "translate", "upload")
        cause: Underlying exception, if any
    """

    stage = "pipeline"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause

    def describe(self) -> str:
        """Return a one-line description naming the stage and cause."""
        if self.cause is not None and str(self.cause) not in str(self):
            return f"{self.stage}: {self} ({self.cause})"
        return f"{self.stage}: {self}"


class LocalFileError(PipelineError):
    """Raised when a local file cannot be opened, read, written or deleted.

    Common scenarios:
    - Input file does not exist or is unreadable
    - Output sink cannot be created
    - Staging file cannot be written
    """

    stage = "local-file"


class TranslationError(PipelineError):
    """Raised when the translation service fails for any reason."""

    stage = "translate"


class SynthesisError(PipelineError):
    """Raised when the speech synthesis service fails for any reason."""

    stage = "synthesize"


class StorageError(PipelineError):
    """Raised when the object store rejects or fails an upload."""

    stage = "upload"


class SubmissionError(PipelineError):
    """Raised when a transcription job is not accepted.

    Common scenarios:
    - Malformed media URI
    - Duplicate job name (two submissions within the same second)
    - Remote rejection (permissions, quota)
    """

    stage = "submit"
