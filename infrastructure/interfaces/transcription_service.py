"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from domain.models import TranscriptionOutcome


class TranscriptionService(ABC):
    """Abstract base class for audio transcription backends."""

    @abstractmethod
    def transcribe(self, audio_path: Path, transcript_path: Path) -> TranscriptionOutcome:
        """
        Transcribes a WAV file into a UTF-8 text file.

        Args:
            audio_path: Local WAV file to transcribe.
            transcript_path: Local file that receives the transcript.

        Returns:
            How the recognition session ended. Setup failures are reported as
            a skipped outcome rather than raised.
        """
