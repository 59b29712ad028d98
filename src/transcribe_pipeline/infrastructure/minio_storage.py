"""MinIO implementation of the StorageClient interface."""

from typing import BinaryIO

from minio import Minio

from transcribe_pipeline.exceptions import (
    StorageDeleteError,
    StorageDownloadError,
    StorageUploadError,
)
from transcribe_pipeline.logging import setup_logging

from .interfaces import StorageClient

logger = setup_logging()


class MinioStorageClient(StorageClient):
    """
    Handles file storage operations using MinIO.

    Works against any S3-compatible endpoint, including AWS S3 itself, which
    is where audio is staged for AWS Transcribe.
    """

    def __init__(self, client: Minio):
        self._client = client

    def download(self, bucket_name: str, object_name: str) -> bytes:
        response = None
        try:
            response = self._client.get_object(bucket_name, object_name)
            data = response.data
            logger.info(
                "File downloaded",
                extra={
                    "bucket_name": bucket_name,
                    "object_name": object_name,
                    "size": len(data),
                },
            )
            return data
        except Exception as e:
            logger.exception(
                "Storage download failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e
        finally:
            if response is not None:
                response.close()
                response.release_conn()

    def upload(
        self,
        bucket_name: str,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> None:
        try:
            self._client.put_object(
                bucket_name=bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
            logger.info(
                "File uploaded",
                extra={
                    "bucket_name": bucket_name,
                    "object_name": object_name,
                    "content_type": content_type,
                },
            )
        except Exception as e:
            logger.exception(
                "Storage upload failed",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

    def delete(self, bucket_name: str, object_name: str) -> None:
        try:
            self._client.remove_object(bucket_name, object_name)
            logger.info(
                "File deleted",
                extra={"bucket_name": bucket_name, "object_name": object_name},
            )
        except Exception as e:
            raise StorageDeleteError(object_name, e) from e

    def bucket_exists(self, bucket_name: str) -> bool:
        return self._client.bucket_exists(bucket_name)

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        if not self._client.bucket_exists(bucket_name):
            self._client.make_bucket(bucket_name)
            logger.info("Bucket created", extra={"bucket_name": bucket_name})
        else:
            logger.info("Bucket already exists", extra={"bucket_name": bucket_name})
