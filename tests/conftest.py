"""
Pytest configuration and shared fixtures.

Provides in-memory fakes for the four external services so orchestrator
tests can observe every call without touching AWS.
"""
import io
import os
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from botocore.exceptions import ResponseStreamingError

from relay.config import RelayConfig
from relay.errors import StorageError, SubmissionError, SynthesisError, TranslationError
from relay.models import StoredObject, TranscriptionJob
from relay.providers.factory import ClientBundle


class FakeTranslator:
    """Prefixes text with the target language; optionally fails on the Nth call."""

    def __init__(self, fail_on_call=None):
        self.calls = []
        self.fail_on_call = fail_on_call

    def translate(self, text, source_language, target_language):
        self.calls.append((text, source_language, target_language))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise TranslationError("Rate exceeded")
        return f"{target_language.upper()}:{text}"

    def validate_requirements(self):
        return []


class BrokenAudioStream:
    """Audio stream whose connection drops on the first read."""

    def __init__(self):
        self.closed = False

    def read(self, size=-1):
        raise ResponseStreamingError(error="Connection broken: IncompleteRead(512 bytes read)")

    def close(self):
        self.closed = True


class FakeSynthesizer:
    def __init__(self, fail=False, broken_stream=False):
        self.calls = []
        self.fail = fail
        self.broken_stream = broken_stream

    def synthesize(self, text, voice_id, output_format):
        self.calls.append((text, voice_id, output_format))
        if self.fail:
            raise SynthesisError("Voice not available")
        if self.broken_stream:
            return BrokenAudioStream()
        return io.BytesIO(b"ID3" + text.encode("utf-8"))

    def validate_requirements(self, voice_id=None):
        return []


class FakeStore:
    """Records puts, including whether the staging file existed at upload time."""

    def __init__(self, fail=False):
        self.puts = []
        self.fail = fail

    def put(self, bucket, key, content, content_type=None):
        local_name = getattr(content, "name", None)
        self.puts.append({
            "bucket": bucket,
            "key": key,
            "body": content.read(),
            "content_type": content_type,
            "local_path": local_name,
            "local_exists": bool(local_name) and os.path.exists(local_name),
        })
        if self.fail:
            raise StorageError(f"Access Denied for s3://{bucket}/{key}")
        return StoredObject(bucket=bucket, key=key, etag='"etag"')

    @property
    def keys(self):
        return [put["key"] for put in self.puts]

    def validate_requirements(self, bucket=None):
        return []


class FakeSubmitter:
    def __init__(self, fail=False, reject_duplicates=False):
        self.calls = []
        self.fail = fail
        self.reject_duplicates = reject_duplicates

    def submit(self, job_name, media_uri, language_code, media_format, output_bucket):
        if self.fail:
            raise SubmissionError("Service unavailable")
        if self.reject_duplicates and job_name in [call[0] for call in self.calls]:
            raise SubmissionError(f"The requested job name already exists: {job_name}")
        self.calls.append((job_name, media_uri, language_code, media_format, output_bucket))
        return TranscriptionJob(
            job_name=job_name,
            media_uri=media_uri,
            language_code=language_code,
            media_format=media_format,
            output_bucket=output_bucket,
            status="IN_PROGRESS",
        )

    def validate_requirements(self):
        return []

    def get_engine_info(self):
        return ("fake-transcribe", "test")


@pytest.fixture(autouse=True, scope="function")
def reset_environment(monkeypatch):
    """Keep RELAY_* and AWS_* variables from leaking into configuration tests."""
    for name in list(os.environ):
        if name.startswith("RELAY_") or name.startswith("AWS_"):
            monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def fake_clients():
    return ClientBundle(
        translator=FakeTranslator(),
        synthesizer=FakeSynthesizer(),
        store=FakeStore(),
        submitter=FakeSubmitter(),
    )


@pytest.fixture
def relay_config(tmp_path):
    """Configuration writing every local file under tmp_path."""
    config = RelayConfig()
    config.storage.bucket = "test-bucket"
    config.run.input_path = str(tmp_path / "input.txt")
    config.run.output_path = str(tmp_path / "translated_text.txt")
    config.run.staging_dir = str(tmp_path / "staging")
    Path(config.run.staging_dir).mkdir()
    return config


@pytest.fixture
def ticking_clock():
    """Clock advancing one second per call, starting at 2024-01-02 03:04:05."""
    start = datetime(2024, 1, 2, 3, 4, 5)
    state = {"calls": 0}

    def clock():
        now = start + timedelta(seconds=state["calls"])
        state["calls"] += 1
        return now

    return clock


@pytest.fixture
def write_input(relay_config):
    """Write lines to the configured input file and return its path."""
    def _write(lines):
        path = Path(relay_config.run.input_path)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return str(path)
    return _write
