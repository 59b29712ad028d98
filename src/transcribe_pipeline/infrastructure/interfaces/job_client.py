"""Abstract interface for remote transcription job operations."""

from abc import ABC, abstractmethod

from transcribe_pipeline.domain.models import RemoteJob


class TranscriptionJobClient(ABC):
    """Abstract base class for asynchronous transcription job backends."""

    @abstractmethod
    def submit_job(
        self,
        job_name: str,
        language_code: str,
        media_uri: str,
        output_bucket: str,
        output_key: str,
    ) -> None:
        """
        Starts a transcription job for media already in object storage.

        Args:
            job_name: Unique job name for this run.
            language_code: BCP-47 language code of the audio.
            media_uri: ``s3://bucket/key`` location of the uploaded audio.
            output_bucket: Bucket the service writes the result into.
            output_key: Key of the result document inside ``output_bucket``.

        Raises:
            TranscriptionError: ``JOB_START_FAILED`` if the service rejects the job.
        """

    @abstractmethod
    def get_job(self, job_name: str) -> RemoteJob:
        """
        Fetches the current state of a job.

        Raises:
            TranscriptionError: ``JOB_NOT_FOUND`` or ``JOB_MONITORING_FAILED``.
        """
