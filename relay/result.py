"""
Stage Results

Each pipeline stage returns a StageResult: either a value or the
PipelineError that stopped it. The orchestrator checks every result before
moving on and stops the run at the first failure.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from relay.errors import LocalFileError, PipelineError
from relay.models import Stage

T = TypeVar("T")


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of a single stage call."""
    stage: Stage
    value: Optional[T] = None
    error: Optional[PipelineError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, stage: Stage, value: T) -> "StageResult[T]":
        return cls(stage=stage, value=value)

    @classmethod
    def failure(cls, stage: Stage, error: PipelineError) -> "StageResult[T]":
        return cls(stage=stage, error=error)


def run_stage(stage: Stage, func: Callable[..., T], *args, **kwargs) -> StageResult[T]:
    """Call ``func`` and capture pipeline failures as a StageResult.

    PipelineError subclasses become failures; a bare OSError from local
    file handling becomes a LocalFileError failure. Anything else is a
    programming error and propagates.
    """
    try:
        return StageResult.success(stage, func(*args, **kwargs))
    except PipelineError as e:
        return StageResult.failure(stage, e)
    except OSError as e:
        return StageResult.failure(stage, LocalFileError(str(e), cause=e))
