"""Domain models for the audio2text service."""

import posixpath
from enum import Enum
from urllib.parse import unquote_plus

from pydantic import BaseModel, Field, field_validator

from exceptions import InvalidUploadEventError

AUDIO_EXTENSION = ".wav"
TRANSCRIPT_EXTENSION = ".txt"


class S3Bucket(BaseModel, frozen=True):
    name: str


class S3Object(BaseModel, frozen=True):
    key: str


class S3Entity(BaseModel, frozen=True):
    bucket: S3Bucket
    object_: S3Object = Field(alias="object")


class NotificationRecord(BaseModel, frozen=True):
    s3: S3Entity


class S3Notification(BaseModel, frozen=True):
    """S3-style bucket notification, as published by MinIO."""

    key: str = Field("", alias="Key")
    records: list[NotificationRecord] = Field(alias="Records")


class UploadEvent(BaseModel, frozen=True):
    """A newly stored audio object, identified by its base name."""

    name: str

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value or value.endswith("/"):
            raise ValueError("name must reference an object, not a folder")
        return value

    @property
    def audio_object_name(self) -> str:
        return self.name + AUDIO_EXTENSION

    @property
    def transcript_object_name(self) -> str:
        return self.name + TRANSCRIPT_EXTENSION

    @classmethod
    def from_object_key(cls, object_key: str, container: str | None = None) -> "UploadEvent":
        """
        Builds an event from a storage object key such as 'greeting.wav'.

        Args:
            object_key: Key of the uploaded object, optionally prefixed with
                its container (e.g. 'audio/greeting.wav').
            container: Container prefix to strip from the key, if present.

        Raises:
            InvalidUploadEventError: If the key does not reference a .wav object.
        """
        key = object_key.lstrip("/")
        if container and key.startswith(container + "/"):
            key = key[len(container) + 1 :]

        stem, extension = posixpath.splitext(key)
        if extension != AUDIO_EXTENSION:
            raise InvalidUploadEventError(object_key, "not a .wav object")
        if not stem or stem.endswith("/"):
            raise InvalidUploadEventError(object_key, "empty object name")
        return cls(name=stem)

    @classmethod
    def from_notification(
        cls, notification: S3Notification, container: str
    ) -> "UploadEvent":
        """
        Builds an event from the first record of a bucket notification that
        belongs to container.

        Raises:
            InvalidUploadEventError: If no record belongs to the container, or
                the object is not a .wav file.
        """
        for record in notification.records:
            if record.s3.bucket.name == container:
                return cls.from_object_key(unquote_plus(record.s3.object_.key))
        raise InvalidUploadEventError(
            notification.key, f"no object record for container '{container}'"
        )


class TranscriptionStatus(str, Enum):
    """How a recognition session ended."""

    COMPLETED = "completed"
    CANCELED = "canceled"
    SKIPPED = "skipped"


class TranscriptionOutcome(BaseModel, frozen=True):
    """Result of running the recognition engine over one audio file."""

    status: TranscriptionStatus
    segment_count: int = 0


class TranscriptionResult(BaseModel, frozen=True):
    """Result of processing one upload event."""

    transcript_object_name: str
    container_name: str
    outcome: TranscriptionOutcome
    uploaded: bool
    content_type: str = "text/plain; charset=utf-8"
