"""Remote transcription job pipeline."""

from transcribe_pipeline.domain import (
    AudioSource,
    CancellationToken,
    CancelledEvent,
    ErrorEvent,
    ProgressEvent,
    SuccessEvent,
    TranscriptResult,
    TranscriptSegment,
)
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError

__all__ = [
    "AudioSource",
    "CancellationToken",
    "CancelledEvent",
    "ErrorEvent",
    "ErrorKind",
    "ProgressEvent",
    "SuccessEvent",
    "TranscriptResult",
    "TranscriptSegment",
    "TranscriptionError",
]
