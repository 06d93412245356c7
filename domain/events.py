"""Recognition events and the channel that delivers them to the transcriber."""

import queue
import threading
from collections.abc import Iterator

from pydantic import BaseModel


class Recognized(BaseModel, frozen=True):
    """A segment of speech recognized by the engine."""

    text: str


class NoMatch(BaseModel, frozen=True):
    """The engine heard audio but could not recognize speech in it."""


class Canceled(BaseModel, frozen=True):
    """The session was canceled, by an error or by reaching the end of the audio."""

    reason: str
    error_code: str | None = None
    error_details: str | None = None

    @property
    def is_error(self) -> bool:
        return self.reason.lower() == "error"


class SessionStopped(BaseModel, frozen=True):
    """The engine finished the recognition session."""


RecognitionEvent = Recognized | NoMatch | Canceled | SessionStopped

TERMINAL_EVENTS = (Canceled, SessionStopped)


class CompletionSignal:
    """One-shot notification; only the first fire() has any effect."""

    def __init__(self):
        self._lock = threading.Lock()
        self._event = threading.Event()

    def fire(self) -> bool:
        """Sets the signal. Returns True only for the call that set it."""
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            return True

    def is_set(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)


class RecognitionEventChannel:
    """
    Hands events from the engine's callback threads to the consuming thread.

    Events are delivered in publish order. The first terminal event fires the
    completion signal and closes the channel; anything published afterwards is
    dropped.
    """

    def __init__(self):
        self._queue: queue.Queue[RecognitionEvent] = queue.Queue()
        self.completed = CompletionSignal()

    def publish(self, event: RecognitionEvent) -> bool:
        """Queues an event. Returns False if the channel was already closed."""
        if isinstance(event, TERMINAL_EVENTS):
            if not self.completed.fire():
                return False
        elif self.completed.is_set():
            return False
        self._queue.put(event)
        return True

    def __iter__(self) -> Iterator[RecognitionEvent]:
        """Yields events until, and including, the terminal event."""
        while True:
            event = self._queue.get()
            yield event
            if isinstance(event, TERMINAL_EVENTS):
                return
