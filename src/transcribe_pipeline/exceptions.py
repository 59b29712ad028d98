"""Custom exceptions for the transcription pipeline."""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds surfaced to callers."""

    CONFIGURATION_MISSING = "configuration_missing"
    UPLOAD_FAILED = "upload_failed"
    JOB_START_FAILED = "job_start_failed"
    JOB_MONITORING_FAILED = "job_monitoring_failed"
    JOB_FAILED = "job_failed"
    JOB_NOT_FOUND = "job_not_found"
    UNKNOWN_JOB_STATUS = "unknown_job_status"
    TIMEOUT = "timeout"
    NO_TRANSCRIPT_AVAILABLE = "no_transcript_available"
    INVALID_RESULT_LOCATION = "invalid_result_location"
    INVALID_RESULT_FORMAT = "invalid_result_format"
    CANCELLED = "cancelled"


_MESSAGES = {
    ErrorKind.CONFIGURATION_MISSING: "Transcription configuration is missing",
    ErrorKind.UPLOAD_FAILED: "Failed to upload audio to storage",
    ErrorKind.JOB_START_FAILED: "Failed to start transcription job",
    ErrorKind.JOB_MONITORING_FAILED: "Failed to monitor transcription job",
    ErrorKind.JOB_FAILED: "Transcription job failed",
    ErrorKind.JOB_NOT_FOUND: "Transcription job not found",
    ErrorKind.UNKNOWN_JOB_STATUS: "Unknown transcription job status",
    ErrorKind.TIMEOUT: "Transcription job timed out",
    ErrorKind.NO_TRANSCRIPT_AVAILABLE: "No transcript available for the completed job",
    ErrorKind.INVALID_RESULT_LOCATION: "Invalid transcript location",
    ErrorKind.INVALID_RESULT_FORMAT: "Invalid transcript format",
    ErrorKind.CANCELLED: "Transcription cancelled",
}

CANCELLED_BY_USER = "cancelled by user"
UNKNOWN_ERROR = "Unknown error"


class TranscriptionError(Exception):
    """
    Raised by every transcription engine for every failure it surfaces.

    Callers dispatch on ``kind``; there are no subclasses. ``reason`` holds
    the remote-supplied failure reason for ``JOB_FAILED``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        detail: str | None = None,
        cause: Exception | None = None,
        reason: str | None = None,
    ):
        self.kind = kind
        self.detail = detail
        self.cause = cause
        self.reason = reason
        message = _MESSAGES[kind]
        extra = reason if reason is not None else detail
        if extra is None and cause is not None:
            extra = str(cause) or type(cause).__name__
        if extra:
            message = f"{message}: {extra}"
        self.message = message
        super().__init__(message)

    @classmethod
    def job_failed(cls, reason: str | None) -> "TranscriptionError":
        return cls(ErrorKind.JOB_FAILED, reason=reason or UNKNOWN_ERROR)

    @property
    def is_cancellation(self) -> bool:
        """True for an explicit cancellation or a job failed by user cancellation."""
        if self.kind is ErrorKind.CANCELLED:
            return True
        return self.kind is ErrorKind.JOB_FAILED and self.reason == CANCELLED_BY_USER


class StorageDownloadError(Exception):
    """Raised when downloading a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to download '{object_name}' from storage")


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")


class StorageDeleteError(Exception):
    """Raised when deleting a file from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to delete '{object_name}' from storage")


class EventPublishError(Exception):
    """Raised when publishing an event to the message broker fails."""

    def __init__(self, routing_key: str, cause: Exception | None = None):
        self.routing_key = routing_key
        self.cause = cause
        super().__init__(f"Failed to publish event with routing key '{routing_key}'")
