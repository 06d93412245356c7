"""Application configuration loaded from environment variables."""

import os
import tempfile
from collections.abc import Mapping
from pathlib import Path
from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from exceptions import ConfigurationError

SPEECH_ENDPOINT_SCHEMES = ("https", "http", "wss", "ws")


class StorageConfig(BaseModel, frozen=True):
    """Blob storage configuration."""

    backend: Literal["azure", "minio"] = "azure"
    connection_string: str = ""
    input_container: str = "audio"
    output_container: str = "text"
    minio_endpoint: str = "minio:9000"
    minio_user: str = ""
    minio_password: str = ""
    minio_secure: bool = False

    @model_validator(mode="after")
    def _check_backend_settings(self) -> "StorageConfig":
        if self.backend == "azure" and not self.connection_string:
            raise ValueError("a connection string is required for the azure backend")
        if self.backend == "minio" and not (self.minio_user and self.minio_password):
            raise ValueError("MinIO credentials are required for the minio backend")
        return self


class SpeechServiceConfig(BaseModel, frozen=True):
    """Speech recognition service configuration."""

    api_key: str
    endpoint: str
    language: str = "ja-JP"

    @field_validator("api_key")
    @classmethod
    def _require_key(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("endpoint")
    @classmethod
    def _require_absolute_url(cls, value: str) -> str:
        if not is_valid_endpoint(value):
            raise ValueError(
                f"'{value}' is not an absolute "
                f"{'/'.join(SPEECH_ENDPOINT_SCHEMES)} URL"
            )
        return value


class QueueConfig(BaseModel, frozen=True):
    """RabbitMQ queue configuration."""

    name: str
    queue_type: str = "quorum"
    max_delivery_count: int = 3
    expected_routing_key: str
    dlq_name: str
    dlq_exchange_name: str = "dead_letter_exchange"
    dlq_routing_key: str


class RabbitMQConfig(BaseModel, frozen=True):
    """RabbitMQ connection configuration."""

    host: str
    user: str
    password: str
    exchange_name: str = "events"
    queue_config: QueueConfig = QueueConfig(
        name="audio2text_queue",
        expected_routing_key="audio.uploaded",
        dlq_name="dlq_audio2text",
        dlq_routing_key="audio.transcription.failed",
    )


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    scratch_dir: Path
    storage: StorageConfig
    speech: SpeechServiceConfig
    rabbitmq: RabbitMQConfig

    @field_validator("scratch_dir")
    @classmethod
    def _require_directory(cls, value: Path) -> Path:
        if not value.is_dir():
            raise ValueError(f"'{value}' is not an existing directory")
        return value


def is_valid_endpoint(value: str) -> bool:
    """Returns True if value is an absolute URL the speech SDK can connect to."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme.lower() in SPEECH_ENDPOINT_SCHEMES and bool(parts.netloc)


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Loads configuration from environment variables.

    Raises:
        ConfigurationError: If any value is missing or malformed.
    """
    env = os.environ if environ is None else environ
    scratch_dir = env.get("SCRATCH_DIR") or env.get("TMP") or tempfile.gettempdir()
    try:
        return AppConfig(
            scratch_dir=Path(scratch_dir),
            storage=StorageConfig(
                backend=env.get("STORAGE_BACKEND", "azure"),
                connection_string=env.get("AudioStorage", ""),
                input_container=env.get("INPUT_CONTAINER", "audio"),
                output_container=env.get("OUTPUT_CONTAINER", "text"),
                minio_endpoint=env.get("MINIO_ENDPOINT", "minio:9000"),
                minio_user=env.get("MINIO_USER", ""),
                minio_password=env.get("MINIO_PASSWORD", ""),
                minio_secure=env.get("MINIO_SECURE", "false"),
            ),
            speech=SpeechServiceConfig(
                api_key=env.get("CognitiveServiceApiKey", ""),
                endpoint=env.get("CognitiveEndpoint", ""),
                language=env.get("SPEECH_LANGUAGE", "ja-JP"),
            ),
            rabbitmq=RabbitMQConfig(
                host=env.get("RABBITMQ_HOST", "rabbitmq"),
                user=env.get("RABBITMQ_USER", ""),
                password=env.get("RABBITMQ_PASSWORD", ""),
            ),
        )
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(loc) for loc in error['loc']) or error['type']}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError(problems, e) from e
