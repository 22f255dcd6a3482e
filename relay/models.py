"""
Relay Data Models

Domain entities passed between the pipeline components. Records and
artifacts are frozen dataclasses; the run report types are pydantic models
so a finished run can be emitted as JSON by the CLI.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class RecordState(Enum):
    """Per-record progress through the pipeline."""
    START = "start"
    TRANSLATED = "translated"
    SYNTHESIZED = "synthesized"
    UPLOADED = "uploaded"
    SUBMITTED = "submitted"
    DONE = "done"
    FAILED = "failed"


class Stage(Enum):
    """Pipeline stages a failure can be attributed to."""
    READ = "read"
    SINK = "sink"
    TRANSLATE = "translate"
    SYNTHESIZE = "synthesize"
    STAGE = "stage"
    UPLOAD = "upload"
    SUBMIT = "submit"
    FINALIZE = "finalize"


@dataclass(frozen=True)
class TextRecord:
    """One line of source input.

    Attributes:
        index: 1-based line number in the input file
        text: Raw line text without the trailing newline
    """
    index: int
    text: str

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class TranslatedRecord:
    """Result of translating one TextRecord."""
    index: int
    source_text: str
    translated_text: str
    source_language: str
    target_language: str


@dataclass(frozen=True)
class AudioArtifact:
    """Synthesized speech for one record.

    The local path is only valid between materialization and upload; the
    remote copy at bucket/key is owned by the object store afterwards.
    """
    name: str
    output_format: str
    local_path: str
    bucket: str
    key: str
    size: int = 0


@dataclass(frozen=True)
class StoredObject:
    """Acknowledgement returned by the object store after a put."""
    bucket: str
    key: str
    etag: Optional[str] = None


@dataclass(frozen=True)
class TranscriptionJob:
    """A transcription job accepted by the transcription service."""
    job_name: str
    media_uri: str
    language_code: str
    media_format: str
    output_bucket: str
    status: Optional[str] = None


class StageFailure(BaseModel):
    """Description of the failure that halted a run."""
    stage: str = Field(..., description="Stage that failed")
    error_type: str = Field(..., description="Exception class name")
    message: str = Field(..., description="Human readable description")
    record_index: Optional[int] = Field(
        default=None,
        description="Line number of the record being processed, if any"
    )


class RecordOutcome(BaseModel):
    """Outcome of one record's pass through the pipeline."""
    index: int = Field(..., description="1-based input line number", ge=1)
    source_text: str
    state: RecordState = RecordState.START
    translated_text: Optional[str] = None
    audio_key: Optional[str] = None
    job_name: Optional[str] = None


class PipelineRunReport(BaseModel):
    """Summary of one run of the orchestrator."""
    input_path: str
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    lines_read: int = Field(default=0, ge=0)
    blank_lines_skipped: int = Field(default=0, ge=0)
    outcomes: List[RecordOutcome] = Field(default_factory=list)
    translated_lines: List[str] = Field(default_factory=list)
    translations_key: Optional[str] = Field(
        default=None,
        description="Object key of the uploaded translations, when enabled"
    )
    failure: Optional[StageFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    @property
    def records_completed(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.state == RecordState.DONE)
