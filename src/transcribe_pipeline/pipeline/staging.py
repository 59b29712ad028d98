"""Staging of audio files in object storage for remote transcription."""

import io
import uuid

from transcribe_pipeline.domain import AudioSource
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.infrastructure.interfaces import StorageClient
from transcribe_pipeline.logging import setup_logging

logger = setup_logging()


class AudioStager:
    """Uploads audio under collision-free keys and removes it afterwards."""

    def __init__(self, storage: StorageClient, bucket_name: str, prefix: str):
        self._storage = storage
        self._bucket_name = bucket_name
        self._prefix = prefix.strip("/")

    def object_key(self, file_name: str) -> str:
        """Builds ``prefix/<uuid>-<file_name>``, keeping the extension intact."""
        return f"{self._prefix}/{uuid.uuid4()}-{file_name}"

    def media_uri(self, object_key: str) -> str:
        return f"s3://{self._bucket_name}/{object_key}"

    def stage(self, source: AudioSource) -> str:
        """
        Uploads the audio file and returns its object key.

        Raises:
            TranscriptionError: ``UPLOAD_FAILED`` if the file cannot be read
                or the store rejects the upload.
        """
        object_key = self.object_key(source.name)

        try:
            data = source.read_bytes()
        except OSError as e:
            raise TranscriptionError(ErrorKind.UPLOAD_FAILED, cause=e) from e

        try:
            self._storage.upload(
                bucket_name=self._bucket_name,
                object_name=object_key,
                data=io.BytesIO(data),
                size=len(data),
                content_type=source.content_type,
            )
        except Exception as e:
            raise TranscriptionError(ErrorKind.UPLOAD_FAILED, cause=e) from e

        logger.info(
            "Audio staged",
            extra={"object_key": object_key, "size": len(data)},
        )
        return object_key

    def discard(self, object_key: str) -> None:
        """Deletes staged audio. Failures are logged and never raised."""
        try:
            self._storage.delete(self._bucket_name, object_key)
        except Exception:
            logger.warning(
                "Staged audio cleanup failed",
                extra={"object_key": object_key},
                exc_info=True,
            )
