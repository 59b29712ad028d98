"""Domain models for the transcription pipeline."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

_CONTENT_TYPES = {
    "m4a": "audio/mp4",
    "mp4": "audio/mp4",
    "wav": "audio/wav",
    "mp3": "audio/mpeg",
    "aac": "audio/aac",
    "flac": "audio/flac",
}
DEFAULT_CONTENT_TYPE = "audio/mp4"
FALLBACK_SPEAKER = "Speaker"


class AudioSource(BaseModel, frozen=True):
    """A readable audio file handed to a transcription engine."""

    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".").lower()

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES.get(self.extension, DEFAULT_CONTENT_TYPE)

    def exists(self) -> bool:
        return self.path.is_file()

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


class JobStatus(str, Enum):
    """Local view of a remote transcription job's status."""

    QUEUED = "QUEUED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @classmethod
    def from_remote(cls, value: str | None) -> "JobStatus | None":
        """Maps a remote status string, returning None when unrecognized."""
        if not value:
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return None

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class RemoteJob(BaseModel, frozen=True):
    """Job description exactly as reported by the remote service."""

    job_name: str
    status: str | None = None
    failure_reason: str | None = None
    result_uri: str | None = None


class TranscriptionJob(BaseModel, frozen=True):
    """A remote transcription job observed by the poller."""

    job_name: str
    status: JobStatus
    failure_reason: str | None = None
    result_location: str | None = None


class TranscriptSegment(BaseModel, frozen=True):
    """A timed, optionally speaker-tagged piece of a transcript."""

    text: str
    start_seconds: float = Field(ge=0.0)
    end_seconds: float = Field(ge=0.0)
    speaker_label: str | None = None
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "TranscriptSegment":
        if self.start_seconds > self.end_seconds:
            raise ValueError(
                f"segment starts at {self.start_seconds} after it ends at {self.end_seconds}"
            )
        return self


class TranscriptResult(BaseModel, frozen=True):
    """A normalized transcript produced by any engine."""

    full_text: str
    segments: list[TranscriptSegment]
    overall_confidence: float = Field(ge=0.0, le=1.0)

    @property
    def speakers(self) -> list[str]:
        seen: list[str] = []
        for segment in self.segments:
            if segment.speaker_label and segment.speaker_label not in seen:
                seen.append(segment.speaker_label)
        return seen


class AudioMessage(BaseModel, frozen=True):
    """Represents an incoming audio extraction completed event."""

    file_name: str
    bucket_name: str
    language_code: str | None = None


class TranscriptionOutput(BaseModel, frozen=True):
    """Location of a stored transcript produced by the worker."""

    transcription_object_name: str
    bucket_name: str
    content_type: str = "text/plain"
    segment_count: int = 0
    overall_confidence: float = 0.0
