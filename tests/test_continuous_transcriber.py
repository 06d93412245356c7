import io
import logging

import pytest

from domain import (
    Canceled,
    NoMatch,
    Recognized,
    SessionStopped,
    TranscriptionStatus,
)
from infrastructure import ContinuousTranscriber, continuous_transcriber

from conftest import FakeEngine


@pytest.fixture
def paths(tmp_path):
    audio = tmp_path / "greeting.wav"
    audio.write_bytes(b"RIFF....WAVE")
    return audio, tmp_path / "greeting.txt"


def test_segments_are_concatenated_without_separators(paths):
    audio, transcript = paths
    engine = FakeEngine(
        [Recognized(text="今日は"), Recognized(text="晴れです。"), Recognized(text="ok"), SessionStopped()]
    )

    outcome = ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert transcript.read_bytes() == "今日は晴れです。ok".encode("utf-8")
    assert outcome.status == TranscriptionStatus.COMPLETED
    assert outcome.segment_count == 3
    assert engine.sessions[0].closed


def test_greeting_scenario(paths):
    audio, transcript = paths
    engine = FakeEngine([Recognized(text="こんにちは"), SessionStopped()])

    ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert transcript.read_bytes() == "こんにちは".encode("utf-8")


def test_events_delivered_from_engine_thread(paths):
    audio, transcript = paths
    engine = FakeEngine(
        [Recognized(text="a"), NoMatch(), Recognized(text="b"), Recognized(text="c"), SessionStopped()],
        threaded=True,
    )

    outcome = ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert transcript.read_bytes() == b"abc"
    assert outcome.segment_count == 3


def test_no_match_contributes_nothing(paths, caplog):
    audio, transcript = paths
    engine = FakeEngine([NoMatch(), NoMatch(), SessionStopped()])

    with caplog.at_level(logging.INFO):
        outcome = ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert transcript.read_bytes() == b""
    assert outcome.segment_count == 0
    assert "NOMATCH: Speech could not be recognized" in caplog.messages


def test_only_first_terminal_event_counts(paths):
    audio, transcript = paths
    engine = FakeEngine(
        [
            Recognized(text="a"),
            SessionStopped(),
            Recognized(text="late"),
            Canceled(reason="Error", error_code="ServiceTimeout"),
        ]
    )

    outcome = ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert transcript.read_bytes() == b"a"
    assert outcome.status == TranscriptionStatus.COMPLETED


def test_cancellation_with_error_logs_details(paths, caplog):
    audio, transcript = paths
    engine = FakeEngine(
        [
            Recognized(text="partial"),
            Canceled(
                reason="Error",
                error_code="AuthenticationFailure",
                error_details="401 Unauthorized",
            ),
            SessionStopped(),
        ]
    )

    with caplog.at_level(logging.INFO):
        outcome = ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert outcome.status == TranscriptionStatus.CANCELED
    assert transcript.read_bytes() == b"partial"
    error_records = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert error_records[0].error_code == "AuthenticationFailure"
    assert error_records[0].error_details == "401 Unauthorized"


def test_end_of_stream_cancellation_is_not_an_error(paths, caplog):
    audio, transcript = paths
    engine = FakeEngine([Recognized(text="x"), Canceled(reason="EndOfStream")])

    with caplog.at_level(logging.INFO):
        outcome = ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert outcome.status == TranscriptionStatus.CANCELED
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_setup_failure_leaves_empty_transcript(paths, caplog):
    audio, transcript = paths
    engine = FakeEngine([Recognized(text="never"), SessionStopped()], setup_error=True)

    outcome = ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert outcome.status == TranscriptionStatus.SKIPPED
    assert engine.sessions == []
    assert transcript.read_bytes() == b""
    assert "Recognition setup failed" in caplog.messages


def test_unopenable_transcript_skips_engine(paths, tmp_path):
    audio, _ = paths
    engine = FakeEngine([SessionStopped()])

    outcome = ContinuousTranscriber(engine).transcribe(
        audio, tmp_path / "missing" / "greeting.txt"
    )

    assert outcome.status == TranscriptionStatus.SKIPPED
    assert engine.audio_seen == []


def test_segment_write_failure_does_not_stop_session(paths, caplog, monkeypatch):
    audio, transcript = paths
    engine = FakeEngine([Recognized(text="lost"), Recognized(text="ok"), SessionStopped()])

    class FlakyFile(io.FileIO):
        failed = False

        def write(self, data):
            if not FlakyFile.failed:
                FlakyFile.failed = True
                raise OSError(28, "No space left on device")
            return super().write(data)

    monkeypatch.setattr(
        continuous_transcriber, "open", lambda path, mode: FlakyFile(path, mode), raising=False
    )

    outcome = ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert transcript.read_bytes() == b"ok"
    assert outcome.segment_count == 1
    assert "Failed to write recognized segment" in caplog.messages


def test_start_failure_propagates_and_closes_session(paths):
    audio, transcript = paths
    engine = FakeEngine(start_error=RuntimeError("callback registration failed"))

    with pytest.raises(RuntimeError):
        ContinuousTranscriber(engine).transcribe(audio, transcript)

    assert engine.sessions[0].closed
