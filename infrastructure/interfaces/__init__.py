"""Infrastructure interface exports."""

from .message_broker import MessageBroker
from .recognition_engine import EventSink, RecognitionEngine, RecognitionSession
from .storage_client import StorageClient
from .transcription_service import TranscriptionService

__all__ = [
    "EventSink",
    "MessageBroker",
    "RecognitionEngine",
    "RecognitionSession",
    "StorageClient",
    "TranscriptionService",
]
