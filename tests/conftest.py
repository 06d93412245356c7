import threading
import time
from pathlib import Path

import pytest

from config import load_config
from domain import TranscriptionOutcome, TranscriptionStatus
from exceptions import RecognitionSetupError, StorageDownloadError, StorageUploadError
from infrastructure.interfaces import (
    RecognitionEngine,
    RecognitionSession,
    StorageClient,
    TranscriptionService,
)


class FakeStorage(StorageClient):
    """In-memory blob store keyed by (container, object name)."""

    def __init__(self, objects=None, fail_uploads=False):
        self.objects = dict(objects or {})
        self.fail_uploads = fail_uploads
        self.uploads = []
        self.containers = set()

    def download(self, container_name, object_name, destination):
        try:
            data = self.objects[(container_name, object_name)]
        except KeyError as e:
            raise StorageDownloadError(object_name, e) from e
        Path(destination).write_bytes(data)

    def upload(self, container_name, object_name, source, content_type):
        if self.fail_uploads:
            raise StorageUploadError(object_name, RuntimeError("storage unavailable"))
        self.objects[(container_name, object_name)] = Path(source).read_bytes()
        self.uploads.append((container_name, object_name, content_type))

    def ensure_container_exists(self, container_name):
        self.containers.add(container_name)


class FakeSession(RecognitionSession):
    """Replays scripted events, optionally from a background thread."""

    def __init__(self, events, threaded=False, start_error=None):
        self._events = list(events)
        self._threaded = threaded
        self._start_error = start_error
        self._thread = None
        self.started = False
        self.closed = False

    def start(self, sink):
        if self._start_error is not None:
            raise self._start_error
        self.started = True
        if self._threaded:
            self._thread = threading.Thread(target=self._replay, args=(sink,))
            self._thread.start()
        else:
            self._replay(sink)

    def _replay(self, sink):
        for event in self._events:
            if self._threaded:
                time.sleep(0.01)
            sink(event)

    def close(self):
        if self._thread is not None:
            self._thread.join()
        self.closed = True


class FakeEngine(RecognitionEngine):
    def __init__(self, events=(), threaded=False, setup_error=False, start_error=None):
        self._events = events
        self._threaded = threaded
        self._setup_error = setup_error
        self._start_error = start_error
        self.sessions = []
        self.audio_seen = []

    def open_session(self, audio_path):
        if self._setup_error:
            raise RecognitionSetupError(
                str(audio_path), ValueError("Invalid speech endpoint 'not-a-url'")
            )
        self.audio_seen.append(Path(audio_path).read_bytes())
        session = FakeSession(self._events, self._threaded, self._start_error)
        self.sessions.append(session)
        return session


class SkippingTranscriptionService(TranscriptionService):
    """Behaves like a transcriber that could not open its output file."""

    def __init__(self):
        self.calls = 0

    def transcribe(self, audio_path, transcript_path):
        self.calls += 1
        return TranscriptionOutcome(status=TranscriptionStatus.SKIPPED)


@pytest.fixture
def base_env(tmp_path):
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return {
        "SCRATCH_DIR": str(scratch),
        "AudioStorage": "DefaultEndpointsProtocol=https;AccountName=acct;AccountKey=a2V5;EndpointSuffix=core.windows.net",
        "CognitiveServiceApiKey": "speech-key",
        "CognitiveEndpoint": "https://japaneast.api.cognitive.microsoft.com/sts/v1.0/issuetoken",
    }


@pytest.fixture
def app_config(base_env):
    return load_config(base_env)


@pytest.fixture
def scratch_dir(app_config):
    return app_config.scratch_dir
