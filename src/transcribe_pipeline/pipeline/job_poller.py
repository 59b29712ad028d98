"""Fixed-interval polling of remote transcription jobs."""

from collections.abc import Generator

from transcribe_pipeline.domain import CancellationToken, JobStatus, TranscriptionJob
from transcribe_pipeline.exceptions import (
    CANCELLED_BY_USER,
    ErrorKind,
    TranscriptionError,
)
from transcribe_pipeline.infrastructure.interfaces import TranscriptionJobClient
from transcribe_pipeline.logging import setup_logging

logger = setup_logging()

POLL_PROGRESS_START = 40
POLL_PROGRESS_END = 75
_POLL_PROGRESS_SPAN = 35


class JobPoller:
    """
    Polls a job until it completes, fails, times out or the run is cancelled.

    The interval between polls is constant. ``poll`` is a generator: it
    yields a progress percentage after every non-terminal status and returns
    the completed ``TranscriptionJob``.
    """

    def __init__(
        self,
        client: TranscriptionJobClient,
        poll_interval_seconds: float = 5.0,
        max_attempts: int = 360,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._client = client
        self._poll_interval_seconds = poll_interval_seconds
        self._max_attempts = max_attempts

    def progress_for(self, attempts: int) -> int:
        """Interpolated progress while a job is in progress, clamped to [40, 75]."""
        percent = POLL_PROGRESS_START + (
            attempts * _POLL_PROGRESS_SPAN // self._max_attempts
        )
        return max(POLL_PROGRESS_START, min(percent, POLL_PROGRESS_END))

    def poll(
        self, job_name: str, cancellation: CancellationToken
    ) -> Generator[int, None, TranscriptionJob]:
        """
        Polls ``job_name`` until it reaches a terminal state.

        Raises:
            TranscriptionError: ``JOB_FAILED`` with the remote reason, or with
                reason "cancelled by user" when the run is cancelled;
                ``TIMEOUT`` once every attempt is used up;
                ``UNKNOWN_JOB_STATUS``, ``JOB_NOT_FOUND`` or
                ``JOB_MONITORING_FAILED`` from the status query.
        """
        attempts = 0

        while attempts < self._max_attempts:
            if cancellation.is_cancelled:
                break

            job = self.check(job_name)

            logger.info(
                "Job status",
                extra={
                    "job_name": job_name,
                    "status": job.status.value,
                    "attempt": attempts + 1,
                    "max_attempts": self._max_attempts,
                },
            )

            if job.status is JobStatus.COMPLETED:
                return job
            if job.status is JobStatus.FAILED:
                raise TranscriptionError.job_failed(job.failure_reason)
            if job.status is JobStatus.IN_PROGRESS:
                yield self.progress_for(attempts)
            else:
                yield POLL_PROGRESS_START

            if cancellation.wait(self._poll_interval_seconds):
                break
            attempts += 1

        if cancellation.is_cancelled:
            logger.info("Job polling cancelled", extra={"job_name": job_name})
            raise TranscriptionError.job_failed(CANCELLED_BY_USER)

        logger.error(
            "Job polling timed out",
            extra={"job_name": job_name, "attempts": attempts},
        )
        raise TranscriptionError(
            ErrorKind.TIMEOUT,
            detail=f"job '{job_name}' not finished after {attempts} polls",
        )

    def wait(
        self, job_name: str, cancellation: CancellationToken | None = None
    ) -> TranscriptionJob:
        """Polls to a terminal state, discarding progress."""
        polling = self.poll(job_name, cancellation or CancellationToken())
        while True:
            try:
                next(polling)
            except StopIteration as done:
                return done.value

    def check(self, job_name: str) -> TranscriptionJob:
        """Fetches the job once and maps its remote status to ``JobStatus``."""
        try:
            remote = self._client.get_job(job_name)
        except TranscriptionError:
            raise
        except Exception as e:
            logger.exception("Job monitoring failed", extra={"job_name": job_name})
            raise TranscriptionError(ErrorKind.JOB_MONITORING_FAILED, cause=e) from e

        status = JobStatus.from_remote(remote.status)
        if status is None:
            raise TranscriptionError(
                ErrorKind.UNKNOWN_JOB_STATUS, detail=str(remote.status)
            )

        return TranscriptionJob(
            job_name=remote.job_name,
            status=status,
            failure_reason=remote.failure_reason,
            result_location=remote.result_uri,
        )
