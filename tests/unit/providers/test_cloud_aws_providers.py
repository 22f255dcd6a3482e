"""
Unit tests for the AWS providers

Each provider is exercised against a Mock boto3 client; remote failures
are simulated with botocore ClientError.
"""

import io
from typing import Optional, get_type_hints
from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from relay.errors import StorageError, SubmissionError, SynthesisError, TranslationError
from relay.providers.base import ObjectStore, SpeechSynthesizer, TranscriptionSubmitter, Translator
from relay.providers.cloud_aws_polly import CloudAWSPollyProvider
from relay.providers.cloud_aws_s3 import CloudAWSS3Provider
from relay.providers.cloud_aws_transcribe import CloudAWSTranscribeProvider
from relay.providers.cloud_aws_translate import CloudAWSTranslateProvider


def client_error(code, message, operation):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def test_providers_satisfy_protocols():
    client = Mock()

    assert isinstance(CloudAWSTranslateProvider(client), Translator)
    assert isinstance(CloudAWSPollyProvider(client), SpeechSynthesizer)
    assert isinstance(CloudAWSS3Provider(client), ObjectStore)
    assert isinstance(CloudAWSTranscribeProvider(client), TranscriptionSubmitter)


def test_object_store_content_type_is_optional():
    hints = get_type_hints(ObjectStore.put)

    assert hints["content_type"] == Optional[str]
    assert hints["content_type"] == get_type_hints(CloudAWSS3Provider.put)["content_type"]


# ============================================================================
# Test: Translate
# ============================================================================

class TestCloudAWSTranslateProvider:

    def test_translate_calls_translate_text(self):
        client = Mock()
        client.translate_text.return_value = {"TranslatedText": "Hello"}

        result = CloudAWSTranslateProvider(client).translate("こんにちは", "ja", "en")

        assert result == "Hello"
        client.translate_text.assert_called_once_with(
            Text="こんにちは", SourceLanguageCode="ja", TargetLanguageCode="en"
        )

    def test_client_error_becomes_translation_error(self):
        client = Mock()
        error = client_error("ThrottlingException", "Rate exceeded", "TranslateText")
        client.translate_text.side_effect = error

        with pytest.raises(TranslationError) as exc_info:
            CloudAWSTranslateProvider(client).translate("こんにちは", "ja", "en")

        assert exc_info.value.cause is error
        assert "Rate exceeded" in str(exc_info.value)

    def test_network_error_becomes_translation_error(self):
        client = Mock()
        client.translate_text.side_effect = EndpointConnectionError(endpoint_url="https://translate")

        with pytest.raises(TranslationError):
            CloudAWSTranslateProvider(client).translate("こんにちは", "ja", "en")

    @pytest.mark.parametrize("text", ["", "   ", "line one\nline two"])
    def test_rejects_blank_or_multiline_text(self, text):
        client = Mock()

        with pytest.raises(TranslationError):
            CloudAWSTranslateProvider(client).translate(text, "ja", "en")

        client.translate_text.assert_not_called()

    def test_missing_translated_text(self):
        client = Mock()
        client.translate_text.return_value = {}

        with pytest.raises(TranslationError, match="TranslatedText"):
            CloudAWSTranslateProvider(client).translate("こんにちは", "ja", "en")

    def test_validate_requirements(self):
        client = Mock()
        assert CloudAWSTranslateProvider(client).validate_requirements() == []

        client.list_terminologies.side_effect = client_error(
            "AccessDeniedException", "not authorized", "ListTerminologies"
        )
        errors = CloudAWSTranslateProvider(client).validate_requirements()
        assert len(errors) == 1
        assert "Amazon Translate" in errors[0]


# ============================================================================
# Test: Polly
# ============================================================================

class TestCloudAWSPollyProvider:

    def test_synthesize_returns_audio_stream(self):
        client = Mock()
        stream = io.BytesIO(b"ID3")
        client.synthesize_speech.return_value = {"AudioStream": stream}

        result = CloudAWSPollyProvider(client).synthesize("Hello", "Joanna", "mp3")

        assert result is stream
        client.synthesize_speech.assert_called_once_with(
            Text="Hello", VoiceId="Joanna", OutputFormat="mp3"
        )

    def test_engine_is_passed_when_configured(self):
        client = Mock()
        client.synthesize_speech.return_value = {"AudioStream": io.BytesIO(b"")}

        CloudAWSPollyProvider(client, engine="neural").synthesize("Hello", "Joanna", "mp3")

        assert client.synthesize_speech.call_args.kwargs["Engine"] == "neural"

    def test_client_error_becomes_synthesis_error(self):
        client = Mock()
        client.synthesize_speech.side_effect = client_error(
            "InvalidSampleRateException", "bad rate", "SynthesizeSpeech"
        )

        with pytest.raises(SynthesisError) as exc_info:
            CloudAWSPollyProvider(client).synthesize("Hello", "Joanna", "mp3")

        assert isinstance(exc_info.value.cause, ClientError)

    def test_missing_audio_stream(self):
        client = Mock()
        client.synthesize_speech.return_value = {"ContentType": "audio/mpeg"}

        with pytest.raises(SynthesisError, match="AudioStream"):
            CloudAWSPollyProvider(client).synthesize("Hello", "Joanna", "mp3")

    def test_unsupported_format(self):
        client = Mock()

        with pytest.raises(SynthesisError, match="Unsupported output format"):
            CloudAWSPollyProvider(client).synthesize("Hello", "Joanna", "wma")

        client.synthesize_speech.assert_not_called()

    def test_validate_requirements_checks_voice(self):
        client = Mock()
        client.describe_voices.return_value = {"Voices": [{"Id": "Joanna"}, {"Id": "Mizuki"}]}
        provider = CloudAWSPollyProvider(client)

        assert provider.validate_requirements("Joanna") == []
        assert "Brian" in provider.validate_requirements("Brian")[0]


# ============================================================================
# Test: S3
# ============================================================================

class TestCloudAWSS3Provider:

    def test_put_uploads_with_content_type(self):
        client = Mock()
        client.put_object.return_value = {"ETag": '"abc123"'}
        body = io.BytesIO(b"ID3")

        stored = CloudAWSS3Provider(client).put("bucket", "audioFile-20240102030405-output.mp3", body)

        client.put_object.assert_called_once_with(
            Bucket="bucket",
            Key="audioFile-20240102030405-output.mp3",
            Body=body,
            ContentType="audio/mpeg",
        )
        assert stored.bucket == "bucket"
        assert stored.key == "audioFile-20240102030405-output.mp3"
        assert stored.etag == '"abc123"'

    def test_explicit_content_type_wins(self):
        client = Mock()
        client.put_object.return_value = {}

        CloudAWSS3Provider(client).put("bucket", "notes.txt", io.BytesIO(b""), "text/markdown")

        assert client.put_object.call_args.kwargs["ContentType"] == "text/markdown"

    def test_unknown_extension_has_no_content_type(self):
        client = Mock()
        client.put_object.return_value = {}

        CloudAWSS3Provider(client).put("bucket", "blob", io.BytesIO(b""))

        assert "ContentType" not in client.put_object.call_args.kwargs

    def test_client_error_becomes_storage_error(self):
        client = Mock()
        client.put_object.side_effect = client_error("AccessDenied", "Access Denied", "PutObject")

        with pytest.raises(StorageError) as exc_info:
            CloudAWSS3Provider(client).put("bucket", "key.mp3", io.BytesIO(b""))

        assert exc_info.value.stage == "upload"
        assert "s3://bucket/key.mp3" in str(exc_info.value)

    def test_validate_requirements(self):
        client = Mock()
        provider = CloudAWSS3Provider(client)

        assert provider.validate_requirements("bucket") == []
        client.head_bucket.assert_called_once_with(Bucket="bucket")
        assert provider.validate_requirements(None) == ["No S3 bucket configured"]

        client.head_bucket.side_effect = client_error("404", "Not Found", "HeadBucket")
        assert "not accessible" in provider.validate_requirements("bucket")[0]


# ============================================================================
# Test: Transcribe
# ============================================================================

class TestCloudAWSTranscribeProvider:

    def test_submit_starts_job(self):
        client = Mock()
        client.start_transcription_job.return_value = {
            "TranscriptionJob": {"TranscriptionJobStatus": "IN_PROGRESS"}
        }

        job = CloudAWSTranscribeProvider(client).submit(
            "transcription-job-20240102030405",
            "s3://bucket/audioFile-20240102030405-output.mp3",
            "en-US",
            "mp3",
            "bucket",
        )

        client.start_transcription_job.assert_called_once_with(
            TranscriptionJobName="transcription-job-20240102030405",
            LanguageCode="en-US",
            MediaFormat="mp3",
            Media={"MediaFileUri": "s3://bucket/audioFile-20240102030405-output.mp3"},
            OutputBucketName="bucket",
        )
        assert job.status == "IN_PROGRESS"
        assert job.job_name == "transcription-job-20240102030405"

    @pytest.mark.parametrize("uri", ["bucket/key.mp3", "s3://bucket", "https://bucket/key.mp3"])
    def test_malformed_media_uri(self, uri):
        client = Mock()

        with pytest.raises(SubmissionError, match="Malformed media URI"):
            CloudAWSTranscribeProvider(client).submit("job", uri, "en-US", "mp3", "bucket")

        client.start_transcription_job.assert_not_called()

    def test_unsupported_media_format(self):
        with pytest.raises(SubmissionError, match="Unsupported media format"):
            CloudAWSTranscribeProvider(Mock()).submit(
                "job", "s3://bucket/key.pcm", "en-US", "pcm", "bucket"
            )

    def test_duplicate_job_name_becomes_submission_error(self):
        client = Mock()
        client.start_transcription_job.side_effect = client_error(
            "ConflictException",
            "The requested job name already exists. Use a different job name.",
            "StartTranscriptionJob",
        )

        with pytest.raises(SubmissionError) as exc_info:
            CloudAWSTranscribeProvider(client).submit(
                "transcription-job-20240102030405", "s3://bucket/key.mp3", "en-US", "mp3", "bucket"
            )

        assert "already exists" in str(exc_info.value)
        assert exc_info.value.stage == "submit"

    def test_validate_requirements_reports_credentials(self):
        client = Mock()
        client.list_transcription_jobs.side_effect = client_error(
            "AccessDeniedException", "Access denied", "ListTranscriptionJobs"
        )

        errors = CloudAWSTranscribeProvider(client).validate_requirements()

        assert "AWS credentials not found or invalid" in errors[0]

    def test_validate_requirements_reports_connection_failure(self):
        client = Mock()
        client.list_transcription_jobs.side_effect = client_error(
            "ServiceUnavailable", "try later", "ListTranscriptionJobs"
        )

        errors = CloudAWSTranscribeProvider(client).validate_requirements()

        assert errors[0].startswith("Failed to connect to AWS Transcribe")
