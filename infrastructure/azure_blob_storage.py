"""Azure Blob Storage implementation of the StorageClient interface."""

from pathlib import Path

from azure.storage.blob import BlobServiceClient, ContentSettings

from exceptions import StorageDownloadError, StorageUploadError
from utils import setup_logging

from .interfaces import StorageClient

logger = setup_logging()


class AzureBlobStorageClient(StorageClient):
    """Handles file storage operations using Azure Blob Storage."""

    def __init__(self, client: BlobServiceClient):
        self._client = client

    def download(self, container_name: str, object_name: str, destination: Path) -> None:
        try:
            blob_client = self._client.get_blob_client(
                container=container_name, blob=object_name
            )
            with open(destination, "wb") as f:
                size = blob_client.download_blob().readinto(f)
            logger.info(
                "File downloaded from Azure Blob Storage",
                extra={
                    "container_name": container_name,
                    "object_name": object_name,
                    "size": size,
                },
            )
        except Exception as e:
            logger.exception(
                "Azure Blob Storage download failed",
                extra={"container_name": container_name, "object_name": object_name},
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
            blob_client = self._client.get_blob_client(
                container=container_name, blob=object_name
            )
            with open(source, "rb") as f:
                blob_client.upload_blob(
                    f,
                    overwrite=True,
                    content_settings=ContentSettings(content_type=content_type),
                )
            logger.info(
                "File uploaded to Azure Blob Storage",
                extra={"container_name": container_name, "object_name": object_name},
            )
        except Exception as e:
            logger.exception(
                "Azure Blob Storage upload failed",
                extra={"container_name": container_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

    def ensure_container_exists(self, container_name: str) -> None:
        container_client = self._client.get_container_client(container_name)
        if not container_client.exists():
            container_client.create_container()
            logger.info("Container created", extra={"container_name": container_name})
        else:
            logger.info(
                "Container already exists", extra={"container_name": container_name}
            )
