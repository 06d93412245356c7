"""
Infrastructure layer exports.

AzureSpeechEngine is imported from infrastructure.azure_speech_engine directly,
so the speech SDK's native library is only loaded by the entry points.
"""

from .azure_blob_storage import AzureBlobStorageClient
from .continuous_transcriber import ContinuousTranscriber
from .minio_storage import MinioStorageClient
from .rabbitmq_broker import RabbitMQBroker

__all__ = [
    "AzureBlobStorageClient",
    "ContinuousTranscriber",
    "MinioStorageClient",
    "RabbitMQBroker",
]
