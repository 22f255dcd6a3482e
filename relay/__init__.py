"""
Speech Relay

Reads lines of source-language text and, for each line, translates it,
synthesizes speech from the translation, stores the audio in object storage
and submits it for transcription.

Architecture:
    Provider Layer (providers/: Translate, Polly, S3, Transcribe adapters)
        ↓
    Orchestration Layer (orchestrator.py, staging.py, sink.py, naming.py)
        ↓
    Application Layer (CLI)

Usage:
    >>> from relay import RelayConfig, ClientBundleFactory, PipelineOrchestrator
    >>>
    >>> config = RelayConfig.load_from_yaml('relay.yaml')
    >>> clients = ClientBundleFactory(config).create_bundle()
    >>> report = PipelineOrchestrator(clients, config).run('input.txt')
"""

from relay.config import RelayConfig
from relay.errors import (
    ConfigurationError,
    LocalFileError,
    PipelineError,
    RelayError,
    StorageError,
    SubmissionError,
    SynthesisError,
    TranslationError,
)
from relay.models import PipelineRunReport, RecordState, Stage
from relay.naming import ArtifactNamer
from relay.orchestrator import PipelineOrchestrator
from relay.providers.factory import ClientBundle, ClientBundleFactory

__version__ = "0.1.0"

__all__ = [
    "RelayConfig",
    "ArtifactNamer",
    "PipelineOrchestrator",
    "ClientBundle",
    "ClientBundleFactory",
    "PipelineRunReport",
    "RecordState",
    "Stage",
    "RelayError",
    "ConfigurationError",
    "PipelineError",
    "LocalFileError",
    "TranslationError",
    "SynthesisError",
    "StorageError",
    "SubmissionError",
]
