"""Abstract interface for streaming speech recognition engines."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path

from domain.events import RecognitionEvent

EventSink = Callable[[RecognitionEvent], object]


class RecognitionSession(ABC):
    """
    One continuous recognition run over a single audio file.

    Sessions are context managers; leaving the block releases every
    engine-held resource, whether or not recognition was started.
    """

    @abstractmethod
    def start(self, sink: EventSink) -> None:
        """
        Subscribes sink to the engine's events and starts recognition.

        Returns immediately; sink is called from the engine's own threads
        until a Canceled or SessionStopped event has been delivered.
        """

    @abstractmethod
    def close(self) -> None:
        """Stops recognition if running and releases the engine's resources."""

    def __enter__(self) -> "RecognitionSession":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()


class RecognitionEngine(ABC):
    """Abstract base class for speech recognition backends."""

    @abstractmethod
    def open_session(self, audio_path: Path) -> RecognitionSession:
        """
        Prepares a continuous recognition session for a WAV file.

        Raises:
            RecognitionSetupError: If the endpoint, credentials or audio input
                cannot be turned into a session.
        """
