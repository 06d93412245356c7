"""Transcription service that streams a WAV file through a recognition engine."""

from pathlib import Path

from domain.events import (
    Canceled,
    NoMatch,
    Recognized,
    RecognitionEventChannel,
    SessionStopped,
)
from domain.models import TranscriptionOutcome, TranscriptionStatus
from exceptions import RecognitionSetupError
from utils import setup_logging

from .interfaces import RecognitionEngine, TranscriptionService

logger = setup_logging()


class ContinuousTranscriber(TranscriptionService):
    """Writes every recognized segment of a recording to a transcript file."""

    def __init__(self, engine: RecognitionEngine):
        self._engine = engine

    def transcribe(self, audio_path: Path, transcript_path: Path) -> TranscriptionOutcome:
        """
        Runs continuous recognition over audio_path until the session ends.

        Recognized segments are appended to transcript_path as UTF-8, in the
        order the engine reports them, with nothing inserted between them.
        Blocks until the engine reports cancellation or the end of the session.
        """
        try:
            transcript = open(transcript_path, "wb")
        except OSError as e:
            logger.warning(
                "Cannot open transcript file",
                extra={"path": str(transcript_path), "error": str(e)},
            )
            return TranscriptionOutcome(status=TranscriptionStatus.SKIPPED)

        with transcript:
            try:
                session = self._engine.open_session(audio_path)
            except RecognitionSetupError as e:
                logger.warning(
                    "Recognition setup failed",
                    extra={"audio_file": str(audio_path), "error": str(e.cause or e)},
                )
                return TranscriptionOutcome(status=TranscriptionStatus.SKIPPED)

            channel = RecognitionEventChannel()
            segment_count = 0
            status = TranscriptionStatus.COMPLETED

            with session:
                session.start(channel.publish)

                for event in channel:
                    if isinstance(event, Recognized):
                        if self._append(transcript, event.text):
                            segment_count += 1
                    elif isinstance(event, NoMatch):
                        logger.info("NOMATCH: Speech could not be recognized")
                    elif isinstance(event, Canceled):
                        status = TranscriptionStatus.CANCELED
                        self._log_cancellation(event)
                    elif isinstance(event, SessionStopped):
                        logger.info("Session stopped")

        logger.info(
            "Transcription finished",
            extra={
                "audio_file": str(audio_path),
                "status": status.value,
                "segment_count": segment_count,
            },
        )
        return TranscriptionOutcome(status=status, segment_count=segment_count)

    def _append(self, transcript, text: str) -> bool:
        """Writes one segment; failures are logged and do not end the session."""
        logger.info("RECOGNIZED", extra={"text": text})
        try:
            transcript.write(text.encode("utf-8"))
            transcript.flush()
        except (OSError, UnicodeError) as e:
            logger.warning("Failed to write recognized segment", extra={"error": str(e)})
            return False
        return True

    def _log_cancellation(self, event: Canceled) -> None:
        logger.info("CANCELED", extra={"reason": event.reason})
        if event.is_error:
            logger.warning(
                "CANCELED with error, check the speech service key and endpoint",
                extra={
                    "reason": event.reason,
                    "error_code": event.error_code,
                    "error_details": event.error_details,
                },
            )
