"""
Cloud AWS Polly Provider

Implements the SpeechSynthesizer protocol on top of Amazon Polly.
"""
import logging
from typing import BinaryIO, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from relay.errors import SynthesisError

logger = logging.getLogger(__name__)


class CloudAWSPollyProvider:
    """
    Synthesizes speech with Amazon Polly's SynthesizeSpeech API.

    The returned AudioStream is a botocore StreamingBody: it can be read
    once, front to back.
    """

    SUPPORTED_FORMATS = ['mp3', 'ogg_vorbis', 'pcm']

    def __init__(self, client, engine: Optional[str] = None):
        self.client = client
        self.engine = engine

    def synthesize(self, text: str, voice_id: str, output_format: str) -> BinaryIO:
        if output_format not in self.SUPPORTED_FORMATS:
            raise SynthesisError(
                f"Unsupported output format: {output_format}. "
                f"Supported formats: {', '.join(self.SUPPORTED_FORMATS)}"
            )

        request = {
            'Text': text,
            'VoiceId': voice_id,
            'OutputFormat': output_format,
        }
        if self.engine:
            request['Engine'] = self.engine

        logger.debug(f"Synthesizing {len(text)} characters with voice {voice_id}")
        try:
            response = self.client.synthesize_speech(**request)
        except (ClientError, BotoCoreError) as e:
            raise SynthesisError(f"Amazon Polly request failed: {e}", cause=e) from e

        stream = response.get('AudioStream')
        if stream is None:
            raise SynthesisError("Amazon Polly response did not include an AudioStream")
        return stream

    def validate_requirements(self, voice_id: Optional[str] = None) -> List[str]:
        """Check that Polly is reachable and, if given, that the voice exists."""
        try:
            response = self.client.describe_voices()
        except (ClientError, BotoCoreError) as e:
            return [f"Failed to connect to Amazon Polly: {e}"]

        if voice_id:
            voices = {voice.get('Id') for voice in response.get('Voices', [])}
            if voice_id not in voices:
                return [f"Polly voice '{voice_id}' is not available in this region"]
        return []

    def get_engine_info(self) -> Tuple[str, str]:
        return ("cloud-aws-polly", self.engine or "standard")
