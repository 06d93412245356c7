"""Abstract interface for file storage operations."""

from abc import ABC, abstractmethod
from pathlib import Path


class StorageClient(ABC):
    """Abstract base class for blob storage backends."""

    @abstractmethod
    def download(self, container_name: str, object_name: str, destination: Path) -> None:
        """
        Downloads an object from storage into a local file.

        Args:
            container_name: The storage container (bucket) name.
            object_name: The object name in the container.
            destination: Local file to write; created or truncated.

        Raises:
            StorageDownloadError: If the download fails.
        """

    @abstractmethod
    def upload(
        self,
        container_name: str,
        object_name: str,
        source: Path,
        content_type: str,
    ) -> None:
        """
        Uploads a local file to storage, replacing any existing object.

        Args:
            container_name: The storage container (bucket) name.
            object_name: The destination object name.
            source: Local file to read.
            content_type: MIME type of the object.

        Raises:
            StorageUploadError: If the upload fails.
        """

    @abstractmethod
    def ensure_container_exists(self, container_name: str) -> None:
        """
        Ensures a container exists, creating it if necessary.

        Args:
            container_name: The container name to ensure exists.
        """
