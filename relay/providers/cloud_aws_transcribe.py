"""
Cloud AWS Transcribe Provider

Implements the TranscriptionSubmitter protocol on top of Amazon Transcribe.

Jobs are started and left running: this provider never polls for
completion and never downloads transcripts. The transcript lands in the
output bucket when the service finishes.
"""
import logging
from typing import List, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from relay.errors import SubmissionError
from relay.models import TranscriptionJob

logger = logging.getLogger(__name__)


class CloudAWSTranscribeProvider:
    """
    Submits transcription jobs with StartTranscriptionJob.

    Example:
        >>> provider = CloudAWSTranscribeProvider(session.client("transcribe"))
        >>> job = provider.submit(
        ...     "transcription-job-20240102030405",
        ...     "s3://bucket/audioFile-20240102030405-output.mp3",
        ...     "en-US", "mp3", "bucket",
        ... )
        >>> job.status
        'IN_PROGRESS'
    """

    # Supported audio formats by AWS Transcribe
    SUPPORTED_FORMATS = ['mp3', 'mp4', 'wav', 'flac', 'ogg', 'amr', 'webm']

    def __init__(self, client):
        self.client = client

    def submit(
        self,
        job_name: str,
        media_uri: str,
        language_code: str,
        media_format: str,
        output_bucket: str,
    ) -> TranscriptionJob:
        if not media_uri.startswith("s3://") or "/" not in media_uri[len("s3://"):]:
            raise SubmissionError(f"Malformed media URI: {media_uri}")
        if media_format not in self.SUPPORTED_FORMATS:
            raise SubmissionError(
                f"Unsupported media format: {media_format}. "
                f"Supported formats: {', '.join(self.SUPPORTED_FORMATS)}"
            )

        try:
            response = self.client.start_transcription_job(
                TranscriptionJobName=job_name,
                LanguageCode=language_code,
                MediaFormat=media_format,
                Media={'MediaFileUri': media_uri},
                OutputBucketName=output_bucket,
            )
        except (ClientError, BotoCoreError) as e:
            raise SubmissionError(
                f"AWS Transcribe rejected job {job_name}: {e}", cause=e
            ) from e

        status = response.get('TranscriptionJob', {}).get('TranscriptionJobStatus')
        logger.info(f"Transcription job started: {job_name}")
        return TranscriptionJob(
            job_name=job_name,
            media_uri=media_uri,
            language_code=language_code,
            media_format=media_format,
            output_bucket=output_bucket,
            status=status,
        )

    def validate_requirements(self) -> List[str]:
        """Check that AWS Transcribe is reachable with the current credentials."""
        try:
            self.client.list_transcription_jobs(MaxResults=1)
        except (ClientError, BotoCoreError) as e:
            error_msg = str(e)
            if 'credentials' in error_msg.lower() or 'access' in error_msg.lower():
                return [
                    "AWS credentials not found or invalid. Provide credentials using one of:\n"
                    "  1. AWS CLI: Run 'aws configure' to set up credentials\n"
                    "  2. Environment variables: AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY\n"
                    "  3. Configuration file: Set aws.access_key_id and aws.secret_access_key in config.yaml"
                ]
            return [f"Failed to connect to AWS Transcribe: {e}"]
        return []

    def get_engine_info(self) -> Tuple[str, str]:
        return ("cloud-aws-transcribe", self.client.meta.region_name)
