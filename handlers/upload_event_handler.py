"""Handler for transcribing newly uploaded audio files."""

from pathlib import Path

from domain import ScratchFiles, TranscriptionResult, UploadEvent
from exceptions import InvalidUploadEventError
from infrastructure.interfaces import StorageClient, TranscriptionService
from utils import setup_logging

logger = setup_logging()


class UploadEventHandler:
    """Orchestrates download, transcription, upload and cleanup for one upload."""

    def __init__(
        self,
        storage: StorageClient,
        transcription_service: TranscriptionService,
        scratch_dir: Path,
        input_container: str = "audio",
        output_container: str = "text",
    ):
        self._storage = storage
        self._transcription_service = transcription_service
        self._scratch_dir = scratch_dir
        self._input_container = input_container
        self._output_container = output_container

    def process(self, event: UploadEvent) -> TranscriptionResult:
        """
        Transcribes name.wav from the input container into name.txt in the
        output container. Scratch files are removed before returning, whether
        or not any step succeeded.

        Args:
            event: The upload event naming the audio object.

        Returns:
            TranscriptionResult describing the transcript object.

        Raises:
            StorageDownloadError: If the audio download fails.
            StorageUploadError: If the transcript upload fails.
        """
        logger.info(
            "Processing audio",
            extra={
                "object_name": event.audio_object_name,
                "container_name": self._input_container,
            },
        )

        with ScratchFiles(self._scratch_dir, event.name) as scratch:
            self._storage.download(
                self._input_container, event.audio_object_name, scratch.audio
            )

            outcome = self._transcription_service.transcribe(
                scratch.audio, scratch.transcript
            )

            result = TranscriptionResult(
                transcript_object_name=event.transcript_object_name,
                container_name=self._output_container,
                outcome=outcome,
                uploaded=scratch.transcript.exists(),
            )

            if not result.uploaded:
                logger.warning(
                    "No transcript was produced, skipping upload",
                    extra={
                        "object_name": event.audio_object_name,
                        "status": outcome.status.value,
                    },
                )
                return result

            self._storage.upload(
                container_name=result.container_name,
                object_name=result.transcript_object_name,
                source=scratch.transcript,
                content_type=result.content_type,
            )

        logger.info(
            "Audio processed",
            extra={
                "audio_file": event.audio_object_name,
                "transcription_file": result.transcript_object_name,
                "status": outcome.status.value,
                "segment_count": outcome.segment_count,
            },
        )

        return result

    def process_object_key(self, object_key: str) -> TranscriptionResult:
        """
        Parses a blob path from the input container and processes it.

        Raises:
            InvalidUploadEventError: If the key does not name a .wav object.
        """
        try:
            event = UploadEvent.from_object_key(
                object_key, container=self._input_container
            )
        except InvalidUploadEventError:
            logger.exception(
                "Invalid blob trigger payload",
                extra={"object_key": object_key},
            )
            raise

        return self.process(event)
