"""
Error Message Templates

Consistent, human readable messages for the failure that stops a run.
Every message names the failing stage and the underlying cause, followed
by a short list of things to check.
"""

from typing import Dict, List, Optional

from relay.errors import PipelineError
from relay.models import Stage


STAGE_SUGGESTIONS: Dict[Stage, List[str]] = {
    Stage.READ: [
        "Check that the input file exists and is readable",
        "Input must be UTF-8 encoded text, one record per line",
    ],
    Stage.SINK: [
        "Check that the output directory exists, is writable and has free space",
    ],
    Stage.TRANSLATE: [
        "Verify the source/target language pair is supported by Amazon Translate",
        "Check AWS credentials and the translate:TranslateText permission",
    ],
    Stage.SYNTHESIZE: [
        "Verify the Polly voice exists in the configured region",
        "Check AWS credentials and the polly:SynthesizeSpeech permission",
    ],
    Stage.STAGE: [
        "Check that the staging directory exists and has free space",
    ],
    Stage.UPLOAD: [
        "Verify the bucket exists and s3:PutObject is allowed",
    ],
    Stage.SUBMIT: [
        "Job names have one-second resolution; enable naming.unique_suffix "
        "if records finish within the same second",
        "Check the transcribe:StartTranscriptionJob permission and the output bucket",
    ],
    Stage.FINALIZE: [
        "Check that the output file is still readable and the bucket is writable",
    ],
}


def format_stage_failure(
    stage: Stage,
    error: PipelineError,
    record_index: Optional[int] = None,
) -> str:
    """Build the user-facing description of a stage failure.

    Example:
        >>> format_stage_failure(Stage.TRANSLATE, TranslationError("throttled"), 2)
        'Error translating text (line 2): translate: throttled\\n...'
    """
    location = f" (line {record_index})" if record_index is not None else ""
    lines = [f"Error {STAGE_TITLES[stage]}{location}: {error.describe()}"]

    suggestions = STAGE_SUGGESTIONS.get(stage, [])
    if suggestions:
        lines.append("Suggestions:")
        lines.extend(f"  - {suggestion}" for suggestion in suggestions)

    return "\n".join(lines)


STAGE_TITLES: Dict[Stage, str] = {
    Stage.READ: "reading input file",
    Stage.SINK: "writing output file",
    Stage.TRANSLATE: "translating text",
    Stage.SYNTHESIZE: "synthesizing audio file",
    Stage.STAGE: "saving audio file",
    Stage.UPLOAD: "uploading audio file",
    Stage.SUBMIT: "transcribing audio file",
    Stage.FINALIZE: "finalizing translated text",
}
