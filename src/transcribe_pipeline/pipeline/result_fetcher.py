"""Retrieval of completed transcription results."""

from urllib.parse import unquote, urlparse

from transcribe_pipeline.domain import (
    TranscriptionJob,
    TranscriptParser,
    TranscriptResult,
)
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.infrastructure.interfaces import StorageClient
from transcribe_pipeline.logging import setup_logging

logger = setup_logging()


def resolve_result_key(location: str) -> str:
    """
    Extracts the storage key from a path-style result URI.

    ``https://s3.us-east-1.amazonaws.com/bucket/transcripts/job.json`` resolves
    to ``transcripts/job.json``: the first path segment names the bucket.

    Raises:
        TranscriptionError: ``INVALID_RESULT_LOCATION`` if the URI is malformed.
    """
    try:
        parsed = urlparse(location)
    except ValueError as e:
        raise TranscriptionError(
            ErrorKind.INVALID_RESULT_LOCATION, detail=location, cause=e
        ) from e

    if not parsed.scheme or not parsed.netloc:
        raise TranscriptionError(ErrorKind.INVALID_RESULT_LOCATION, detail=location)

    parts = [unquote(part) for part in parsed.path.split("/") if part]
    if len(parts) < 2:
        raise TranscriptionError(ErrorKind.INVALID_RESULT_LOCATION, detail=location)

    return "/".join(parts[1:])


class ResultFetcher:
    """Downloads a completed job's result document and parses it."""

    def __init__(
        self,
        storage: StorageClient,
        bucket_name: str,
        parser: TranscriptParser | None = None,
    ):
        self._storage = storage
        self._bucket_name = bucket_name
        self._parser = parser or TranscriptParser()

    def fetch(self, job: TranscriptionJob) -> bytes:
        """
        Downloads the raw result document of a completed job.

        Raises:
            TranscriptionError: ``NO_TRANSCRIPT_AVAILABLE`` when the job has no
                result location, ``INVALID_RESULT_LOCATION`` when the location
                is malformed or cannot be read.
        """
        if not job.result_location:
            raise TranscriptionError(
                ErrorKind.NO_TRANSCRIPT_AVAILABLE, detail=job.job_name
            )

        key = resolve_result_key(job.result_location)

        try:
            data = self._storage.download(self._bucket_name, key)
        except Exception as e:
            raise TranscriptionError(
                ErrorKind.INVALID_RESULT_LOCATION, detail=job.result_location, cause=e
            ) from e

        logger.info(
            "Transcript downloaded",
            extra={"job_name": job.job_name, "object_key": key, "size": len(data)},
        )
        return data

    def parse(self, raw: bytes) -> TranscriptResult:
        return self._parser.parse(raw)
