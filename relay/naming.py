"""
Artifact Naming

Generates object keys for synthesized audio and names for transcription
jobs from a timestamp with one-second resolution:

    audioFile-20240102030405-output.mp3
    transcription-job-20240102030405

Two calls within the same second produce the same name. An uploaded audio
object is then silently overwritten and the second transcription job is
rejected as a duplicate. Setting ``unique_suffix`` appends a random
component to every name to avoid this.
"""

import uuid
from datetime import datetime
from typing import Callable, Optional

from relay.config import NamingConfig


class ArtifactNamer:
    """Builds audio, job and translation object names.

    Example:
        >>> namer = ArtifactNamer()
        >>> namer.next_audio_name(datetime(2024, 1, 2, 3, 4, 5))
        'audioFile-20240102030405-output.mp3'
        >>> namer.next_job_name(datetime(2024, 1, 2, 3, 4, 5))
        'transcription-job-20240102030405'
    """

    def __init__(
        self,
        config: Optional[NamingConfig] = None,
        output_format: str = "mp3",
        token_factory: Optional[Callable[[], str]] = None,
    ):
        self.config = config or NamingConfig()
        self.output_format = output_format
        self._token_factory = token_factory or (lambda: uuid.uuid4().hex[:8])

    def timestamp(self, now: datetime) -> str:
        return now.strftime(self.config.timestamp_format)

    def next_audio_name(self, now: datetime) -> str:
        stem = f"{self.config.audio_prefix}-{self.timestamp(now)}-{self.config.audio_suffix}"
        return f"{self._with_token(stem)}.{self.extension}"

    def next_job_name(self, now: datetime) -> str:
        return self._with_token(f"{self.config.job_prefix}-{self.timestamp(now)}")

    def transcript_name(self, now: datetime) -> str:
        """Object name for the uploaded copy of the translated lines."""
        return f"{self._with_token(f'{self.config.translations_prefix}-{self.timestamp(now)}')}.txt"

    @property
    def extension(self) -> str:
        # Polly reports ogg_vorbis as a format; the file is still .ogg
        return {"ogg_vorbis": "ogg"}.get(self.output_format, self.output_format)

    def _with_token(self, name: str) -> str:
        if not self.config.unique_suffix:
            return name
        return f"{name}-{self._token_factory()}"


def media_uri(bucket: str, key: str, scheme: str = "s3") -> str:
    """Build the URI the transcription service reads media from."""
    return f"{scheme}://{bucket}/{key}"
