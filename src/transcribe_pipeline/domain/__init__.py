"""Domain layer exports."""

from .cancellation import CancellationToken
from .events import (
    CancelledEvent,
    ErrorEvent,
    PipelineEvent,
    ProgressEvent,
    SuccessEvent,
    TerminalEvent,
    is_terminal,
    terminal_event_for,
)
from .models import (
    AudioMessage,
    AudioSource,
    JobStatus,
    RemoteJob,
    TranscriptionJob,
    TranscriptionOutput,
    TranscriptResult,
    TranscriptSegment,
)
from .transcript_builder import TranscriptBuilder
from .transcript_parser import TranscriptParser

__all__ = [
    "AudioMessage",
    "AudioSource",
    "CancellationToken",
    "CancelledEvent",
    "ErrorEvent",
    "JobStatus",
    "PipelineEvent",
    "ProgressEvent",
    "RemoteJob",
    "SuccessEvent",
    "TerminalEvent",
    "TranscriptBuilder",
    "TranscriptParser",
    "TranscriptResult",
    "TranscriptSegment",
    "TranscriptionJob",
    "TranscriptionOutput",
    "is_terminal",
    "terminal_event_for",
]
