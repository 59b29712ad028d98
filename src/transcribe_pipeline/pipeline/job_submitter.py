"""Submission of remote transcription jobs."""

import uuid

from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.infrastructure.interfaces import TranscriptionJobClient
from transcribe_pipeline.logging import setup_logging

logger = setup_logging()


class JobSubmitter:
    """Starts a transcription job that reads staged audio and writes its result beside it."""

    def __init__(
        self, client: TranscriptionJobClient, bucket_name: str, output_prefix: str
    ):
        self._client = client
        self._bucket_name = bucket_name
        self._output_prefix = output_prefix.strip("/")

    def output_key(self, job_name: str) -> str:
        return f"{self._output_prefix}/{job_name}.json"

    def submit(self, media_uri: str, language_code: str) -> str:
        """
        Starts a job and returns its name.

        Raises:
            TranscriptionError: ``JOB_START_FAILED`` if the service rejects the job.
        """
        job_name = f"transcription-{uuid.uuid4()}"

        try:
            self._client.submit_job(
                job_name=job_name,
                language_code=language_code,
                media_uri=media_uri,
                output_bucket=self._bucket_name,
                output_key=self.output_key(job_name),
            )
        except TranscriptionError:
            raise
        except Exception as e:
            raise TranscriptionError(ErrorKind.JOB_START_FAILED, cause=e) from e

        logger.info(
            "Transcription job submitted",
            extra={"job_name": job_name, "language_code": language_code},
        )
        return job_name
