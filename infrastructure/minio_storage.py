"""MinIO implementation of the StorageClient interface."""

from pathlib import Path

from minio import Minio

from exceptions import StorageDownloadError, StorageUploadError
from utils import setup_logging

from .interfaces import StorageClient

logger = setup_logging()


class MinioStorageClient(StorageClient):
    """Handles file storage operations using MinIO."""

    def __init__(self, client: Minio):
        self._client = client

    def download(self, container_name: str, object_name: str, destination: Path) -> None:
        try:
            self._client.fget_object(
                bucket_name=container_name,
                object_name=object_name,
                file_path=str(destination),
            )
            logger.info(
                "File downloaded from MinIO",
                extra={"bucket_name": container_name, "object_name": object_name},
            )
        except Exception as e:
            logger.exception(
                "MinIO download failed",
                extra={"bucket_name": container_name, "object_name": object_name},
            )
            raise StorageDownloadError(object_name, e) from e

    def upload(
        self,
        container_name: str,
        object_name: str,
        source: Path,
        content_type: str,
    ) -> None:
        try:
            self._client.fput_object(
                bucket_name=container_name,
                object_name=object_name,
                file_path=str(source),
                content_type=content_type,
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "bucket_name": container_name,
                    "object_name": object_name,
                },
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": container_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

    def ensure_container_exists(self, container_name: str) -> None:
        if not self._client.bucket_exists(bucket_name=container_name):
            self._client.make_bucket(bucket_name=container_name)
            logger.info("Bucket created", extra={"bucket_name": container_name})
        else:
            logger.info("Bucket already exists", extra={"bucket_name": container_name})
