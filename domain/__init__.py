"""Domain layer exports."""

from .events import (
    Canceled,
    CompletionSignal,
    NoMatch,
    Recognized,
    RecognitionEvent,
    RecognitionEventChannel,
    SessionStopped,
)
from .models import (
    S3Notification,
    TranscriptionOutcome,
    TranscriptionResult,
    TranscriptionStatus,
    UploadEvent,
)
from .scratch import ScratchFiles

__all__ = [
    "Canceled",
    "CompletionSignal",
    "NoMatch",
    "Recognized",
    "RecognitionEvent",
    "RecognitionEventChannel",
    "S3Notification",
    "SessionStopped",
    "ScratchFiles",
    "TranscriptionOutcome",
    "TranscriptionResult",
    "TranscriptionStatus",
    "UploadEvent",
]
