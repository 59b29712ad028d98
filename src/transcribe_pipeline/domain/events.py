"""Events emitted by a transcription run."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError

from .models import TranscriptResult


class ProgressEvent(BaseModel, frozen=True):
    type: Literal["progress"] = "progress"
    percent: int = Field(ge=0, le=100)
    message: str


class SuccessEvent(BaseModel, frozen=True):
    type: Literal["success"] = "success"
    result: TranscriptResult


class ErrorEvent(BaseModel, frozen=True, arbitrary_types_allowed=True):
    type: Literal["error"] = "error"
    kind: ErrorKind
    message: str
    detail: str | None = None
    reason: str | None = None
    cause: Exception | None = Field(default=None, exclude=True)

    @classmethod
    def from_error(cls, error: TranscriptionError) -> "ErrorEvent":
        return cls(
            kind=error.kind,
            message=error.message,
            detail=error.detail,
            reason=error.reason,
            cause=error.cause,
        )

    def to_error(self) -> TranscriptionError:
        return TranscriptionError(
            self.kind, detail=self.detail, cause=self.cause, reason=self.reason
        )


class CancelledEvent(BaseModel, frozen=True):
    type: Literal["cancelled"] = "cancelled"
    message: str = "Transcription cancelled"


PipelineEvent = Annotated[
    Union[ProgressEvent, SuccessEvent, ErrorEvent, CancelledEvent],
    Field(discriminator="type"),
]
TerminalEvent = Union[SuccessEvent, ErrorEvent, CancelledEvent]


def terminal_event_for(error: TranscriptionError) -> ErrorEvent | CancelledEvent:
    """Turns a raised error into the run's terminal event."""
    if error.is_cancellation:
        return CancelledEvent()
    return ErrorEvent.from_error(error)


def is_terminal(event: BaseModel) -> bool:
    return not isinstance(event, ProgressEvent)
