"""
Pipeline Orchestrator

Drives each non-blank input line through Translate → Synthesize → Store →
Submit, one record at a time.

Per-record states:

    START → TRANSLATED → SYNTHESIZED → UPLOADED → SUBMITTED → DONE
      └──────────┴────────────┴────────────┴───────────┴──→ FAILED

Every stage returns a StageResult that is checked before the next stage
runs. The first failure ends the whole run: later records are never
attempted and the translation sink is discarded without being flushed.
Local files (the sink and each record's staging audio) are removed on
both the success and failure paths.
"""

import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

from relay.config import RelayConfig
from relay.errors import SynthesisError
from relay.models import (
    AudioArtifact,
    PipelineRunReport,
    RecordOutcome,
    RecordState,
    Stage,
    StageFailure,
    TextRecord,
    TranslatedRecord,
)
from relay.naming import ArtifactNamer, media_uri
from relay.providers.factory import ClientBundle
from relay.result import StageResult, run_stage
from relay.sink import ResultSink
from relay.sources import read_lines
from relay.staging import StagingFile
from relay.utils.error_messages import format_stage_failure
from relay.utils.logging_config import logging_config

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Runs the translate/speak/store/transcribe pipeline over an input file.

    Example:
        >>> clients = ClientBundleFactory(config).create_bundle()
        >>> orchestrator = PipelineOrchestrator(clients, config)
        >>> report = orchestrator.run("input.txt")
        >>> report.succeeded
        True
    """

    def __init__(
        self,
        clients: ClientBundle,
        config: RelayConfig,
        namer: Optional[ArtifactNamer] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.clients = clients
        self.config = config
        self.namer = namer or ArtifactNamer(config.naming, config.speech.output_format)
        self.clock = clock

    def run(self, input_path: Optional[str] = None) -> PipelineRunReport:
        """Process every non-blank line of ``input_path``.

        Args:
            input_path: Input text file; defaults to config.run.input_path

        Returns:
            PipelineRunReport; ``report.failure`` is set if the run stopped early
        """
        input_path = input_path or self.config.run.input_path
        report = PipelineRunReport(input_path=str(input_path))
        start_time = time.time()

        # Drain the source first so a read error leaves nothing half-processed
        lines = run_stage(Stage.READ, lambda: list(read_lines(input_path)))
        if not lines.ok:
            return self._finish(report, lines, start_time)

        records: List[TextRecord] = lines.value
        report.lines_read = len(records)
        logger.info(f"Read {len(records)} lines from {input_path}")

        sink = ResultSink(self.config.run.output_path)
        opened = run_stage(Stage.SINK, sink.open)
        if not opened.ok:
            return self._finish(report, opened, start_time)

        with sink:
            for record in records:
                if record.is_blank:
                    report.blank_lines_skipped += 1
                    continue

                outcome = RecordOutcome(index=record.index, source_text=record.text)
                report.outcomes.append(outcome)

                failed = self._process_record(record, outcome, sink)
                report.translated_lines = list(sink.entries)
                if failed is not None:
                    outcome.state = RecordState.FAILED
                    return self._finish(report, failed, start_time, record.index)

            finalized = run_stage(Stage.FINALIZE, self._finalize, sink)
            if not finalized.ok:
                return self._finish(report, finalized, start_time)
            report.translations_key = finalized.value

        return self._finish(report, None, start_time)

    def _process_record(
        self,
        record: TextRecord,
        outcome: RecordOutcome,
        sink: ResultSink,
    ) -> Optional[StageResult]:
        """Run one record through every stage.

        Returns:
            The failed StageResult, or None once the record is DONE
        """
        translate = self.config.translate
        translated = run_stage(
            Stage.TRANSLATE,
            self.clients.translator.translate,
            record.text,
            translate.source_language,
            translate.target_language,
        )
        if not translated.ok:
            return translated

        logger.info(f"Translated text: {translated.value}")
        translation = TranslatedRecord(
            index=record.index,
            source_text=record.text,
            translated_text=translated.value,
            source_language=translate.source_language,
            target_language=translate.target_language,
        )
        appended = run_stage(Stage.SINK, sink.append, translation)
        if not appended.ok:
            return appended
        outcome.translated_text = translation.translated_text
        outcome.state = RecordState.TRANSLATED

        uploaded = self._synthesize_and_upload(translation, outcome)
        if not uploaded.ok:
            return uploaded
        artifact: AudioArtifact = uploaded.value

        job_name = self.namer.next_job_name(self.clock())
        transcribe = self.config.transcribe
        submitted = run_stage(
            Stage.SUBMIT,
            self.clients.submitter.submit,
            job_name,
            media_uri(artifact.bucket, artifact.key),
            transcribe.language_code,
            transcribe.media_format,
            self.config.output_bucket,
        )
        if not submitted.ok:
            return submitted
        outcome.job_name = job_name
        outcome.state = RecordState.SUBMITTED

        outcome.state = RecordState.DONE
        return None

    def _synthesize_and_upload(
        self,
        translation: TranslatedRecord,
        outcome: RecordOutcome,
    ) -> StageResult:
        """Synthesize speech, stage it locally and upload it.

        The staging file is deleted before this returns, on every path.
        """
        speech = self.config.speech
        synthesized = run_stage(
            Stage.SYNTHESIZE,
            self.clients.synthesizer.synthesize,
            translation.translated_text,
            speech.voice_id,
            speech.output_format,
        )
        if not synthesized.ok:
            return synthesized

        name = self.namer.next_audio_name(self.clock())
        bucket = self.config.storage.bucket
        local_path = Path(self.config.run.staging_dir) / name

        with StagingFile(str(local_path)) as staging:
            staged = run_stage(Stage.STAGE, staging.materialize, synthesized.value)
            if not staged.ok:
                # The audio is streamed from Polly while it is staged
                if isinstance(staged.error, SynthesisError):
                    return StageResult.failure(Stage.SYNTHESIZE, staged.error)
                return staged
            outcome.state = RecordState.SYNTHESIZED

            stored = run_stage(Stage.UPLOAD, self.clients.store.put, bucket, name, staging.handle)
            if not stored.ok:
                return stored

        outcome.audio_key = name
        outcome.state = RecordState.UPLOADED
        return StageResult.success(Stage.UPLOAD, AudioArtifact(
            name=name,
            output_format=speech.output_format,
            local_path=str(local_path),
            bucket=bucket,
            key=name,
            size=staged.value,
        ))

    def _finalize(self, sink: ResultSink) -> Optional[str]:
        """Flush the sink and, if enabled, upload its content.

        Returns:
            Object key of the uploaded translations, or None
        """
        sink.flush()
        if not self.config.storage.upload_translations:
            return None

        key = self.namer.transcript_name(self.clock())
        with open(sink.path, "rb") as handle:
            self.clients.store.put(
                self.config.storage.bucket, key, handle, "text/plain; charset=utf-8"
            )
        return key

    def _finish(
        self,
        report: PipelineRunReport,
        failed: Optional[StageResult],
        start_time: float,
        record_index: Optional[int] = None,
    ) -> PipelineRunReport:
        report.finished_at = datetime.now()
        logging_config.log_operation_timing("Pipeline run", time.time() - start_time)

        if failed is None:
            logger.info(
                f"Processed {report.records_completed} records "
                f"({report.blank_lines_skipped} blank lines skipped)"
            )
            return report

        message = format_stage_failure(failed.stage, failed.error, record_index)
        logger.error(message)
        report.failure = StageFailure(
            stage=failed.stage.value,
            error_type=type(failed.error).__name__,
            message=failed.error.describe(),
            record_index=record_index,
        )
        return report
