"""
Relay Provider Protocols

Defines the narrow contracts the orchestrator depends on for each external
service. Concrete implementations live beside this module following the
{deployment}_{provider}_{service}.py naming pattern.

Every protocol method raises the stage-specific PipelineError subclass on
failure and never retries.
"""
from typing import BinaryIO, List, Optional, Protocol, Tuple, runtime_checkable

from relay.models import StoredObject, TranscriptionJob


@runtime_checkable
class Translator(Protocol):
    """Translates a single line of text."""

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        """
        Translate ``text`` from ``source_language`` to ``target_language``.

        Args:
            text: Non-empty, single-line text
            source_language: ISO language code of the input (e.g. 'ja')
            target_language: ISO language code of the output (e.g. 'en')

        Returns:
            Exactly one translated string

        Raises:
            TranslationError: On any remote failure
        """
        ...

    def validate_requirements(self) -> List[str]:
        ...


@runtime_checkable
class SpeechSynthesizer(Protocol):
    """Converts text into an encoded audio stream."""

    def synthesize(self, text: str, voice_id: str, output_format: str) -> BinaryIO:
        """
        Synthesize speech for ``text``.

        The returned stream is forward-only and must be drained before the
        bytes can be uploaded.

        Raises:
            SynthesisError: On any remote failure
        """
        ...

    def validate_requirements(self) -> List[str]:
        ...


@runtime_checkable
class ObjectStore(Protocol):
    """Durable object storage."""

    def put(self, bucket: str, key: str, content: BinaryIO, content_type: Optional[str] = None) -> StoredObject:
        """
        Store ``content`` under ``bucket``/``key``, overwriting silently.

        Raises:
            StorageError: On any remote failure
        """
        ...

    def validate_requirements(self) -> List[str]:
        ...


@runtime_checkable
class TranscriptionSubmitter(Protocol):
    """Submits asynchronous transcription jobs."""

    def submit(
        self,
        job_name: str,
        media_uri: str,
        language_code: str,
        media_format: str,
        output_bucket: str,
    ) -> TranscriptionJob:
        """
        Submit a transcription job without waiting for it to finish.

        Success only confirms the job was accepted.

        Raises:
            SubmissionError: On rejection or remote failure
        """
        ...

    def validate_requirements(self) -> List[str]:
        ...

    def get_engine_info(self) -> Tuple[str, str]:
        ...
