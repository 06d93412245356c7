"""Dependency injection configuration for the audio2text service."""

import pika
from azure.storage.blob import BlobServiceClient
from minio import Minio

from config import AppConfig, load_config
from handlers import UploadEventHandler
from infrastructure import (
    AzureBlobStorageClient,
    ContinuousTranscriber,
    MinioStorageClient,
    RabbitMQBroker,
)
from infrastructure.azure_speech_engine import AzureSpeechEngine
from infrastructure.interfaces import StorageClient, TranscriptionService
from utils import setup_logging
from worker import Worker

logger = setup_logging()

_config = load_config()


def _build_storage(config: AppConfig) -> StorageClient:
    if config.storage.backend == "minio":
        minio_client = Minio(
            endpoint=config.storage.minio_endpoint,
            access_key=config.storage.minio_user,
            secret_key=config.storage.minio_password,
            secure=config.storage.minio_secure,
        )
        return MinioStorageClient(minio_client)

    blob_service_client = BlobServiceClient.from_connection_string(
        config.storage.connection_string
    )
    return AzureBlobStorageClient(blob_service_client)


# Storage setup
_storage = _build_storage(_config)
_storage.ensure_container_exists(_config.storage.output_container)

# Speech setup
_transcription_service = ContinuousTranscriber(AzureSpeechEngine(_config.speech))

logger.info(
    "Dependencies configured",
    extra={
        "storage_backend": _config.storage.backend,
        "input_container": _config.storage.input_container,
        "output_container": _config.storage.output_container,
        "language": _config.speech.language,
    },
)


def get_storage() -> StorageClient:
    """Returns the configured storage client."""
    return _storage


def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription service."""
    return _transcription_service


def get_handler() -> UploadEventHandler:
    """Returns the configured upload event handler."""
    return UploadEventHandler(
        storage=_storage,
        transcription_service=_transcription_service,
        scratch_dir=_config.scratch_dir,
        input_container=_config.storage.input_container,
        output_container=_config.storage.output_container,
    )


def get_worker() -> Worker:
    """Connects to RabbitMQ and returns the configured worker."""
    credentials = pika.PlainCredentials(
        _config.rabbitmq.user, _config.rabbitmq.password
    )
    parameters = pika.ConnectionParameters(
        host=_config.rabbitmq.host,
        credentials=credentials,
        heartbeat=0,
    )
    rabbit_connection = pika.BlockingConnection(parameters)
    rabbit_channel = rabbit_connection.channel()

    broker = RabbitMQBroker(rabbit_channel, _config.rabbitmq)
    broker.setup()

    return Worker(broker, get_handler(), _config)
