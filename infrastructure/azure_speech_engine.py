"""Azure Speech implementation of the RecognitionEngine interface."""

from pathlib import Path

import azure.cognitiveservices.speech as speechsdk

from config import SpeechServiceConfig, is_valid_endpoint
from domain.events import Canceled, NoMatch, Recognized, SessionStopped
from exceptions import RecognitionSetupError
from utils import setup_logging

from .interfaces import EventSink, RecognitionEngine, RecognitionSession

logger = setup_logging()


class AzureSpeechSession(RecognitionSession):
    """Continuous recognition of one WAV file with the Azure Speech SDK."""

    def __init__(
        self,
        recognizer: speechsdk.SpeechRecognizer,
        audio_config: speechsdk.audio.AudioConfig,
    ):
        self._recognizer = recognizer
        self._audio_config = audio_config
        self._started = False

    def start(self, sink: EventSink) -> None:
        self._recognizer.recognized.connect(self._forward(sink, self._on_recognized))
        self._recognizer.canceled.connect(
            self._forward(sink, self._on_canceled, terminal=True)
        )
        self._recognizer.session_stopped.connect(
            self._forward(sink, self._on_session_stopped, terminal=True)
        )

        self._recognizer.start_continuous_recognition()
        self._started = True
        logger.info("Continuous recognition started")

    def close(self) -> None:
        if self._recognizer is None:
            return
        try:
            if self._started:
                self._recognizer.stop_continuous_recognition()
            self._recognizer.recognized.disconnect_all()
            self._recognizer.canceled.disconnect_all()
            self._recognizer.session_stopped.disconnect_all()
        except Exception:
            logger.exception("Failed to stop speech recognizer")
        finally:
            # The SDK releases native handles when the last reference goes away.
            self._recognizer = None
            self._audio_config = None

    @staticmethod
    def _forward(sink: EventSink, translate, terminal: bool = False):
        """
        Wraps a translator as an SDK callback. A failed terminal translation
        is still published, as an error cancellation; a failed recognized
        translation is logged and dropped.
        """

        def callback(evt) -> None:
            try:
                event = translate(evt)
            except Exception as e:
                logger.exception(
                    "Failed to translate recognition event",
                    extra={"callback": translate.__name__, "terminal": terminal},
                )
                if not terminal:
                    return
                event = Canceled(reason="Error", error_details=str(e))
            sink(event)

        return callback

    @staticmethod
    def _on_session_stopped(evt: speechsdk.SessionEventArgs) -> SessionStopped:
        return SessionStopped()

    @staticmethod
    def _on_recognized(evt: speechsdk.SpeechRecognitionEventArgs):
        if evt.result.reason == speechsdk.ResultReason.RecognizedSpeech:
            return Recognized(text=evt.result.text)
        return NoMatch()

    @staticmethod
    def _on_canceled(evt: speechsdk.SpeechRecognitionCanceledEventArgs) -> Canceled:
        details = evt.cancellation_details
        if details.reason == speechsdk.CancellationReason.Error:
            return Canceled(
                reason=details.reason.name,
                error_code=details.code.name,
                error_details=details.error_details,
            )
        return Canceled(reason=details.reason.name)


class AzureSpeechEngine(RecognitionEngine):
    """Creates Azure Speech recognition sessions for a fixed endpoint and language."""

    def __init__(self, config: SpeechServiceConfig):
        self._config = config

    def open_session(self, audio_path: Path) -> AzureSpeechSession:
        if not is_valid_endpoint(self._config.endpoint):
            raise RecognitionSetupError(
                str(audio_path),
                ValueError(f"Invalid speech endpoint '{self._config.endpoint}'"),
            )

        try:
            speech_config = speechsdk.SpeechConfig(
                endpoint=self._config.endpoint,
                subscription=self._config.api_key,
            )
            speech_config.speech_recognition_language = self._config.language
            audio_config = speechsdk.audio.AudioConfig(filename=str(audio_path))
            recognizer = speechsdk.SpeechRecognizer(
                speech_config=speech_config,
                audio_config=audio_config,
            )
        except Exception as e:
            logger.exception(
                "Speech recognizer construction failed",
                extra={"audio_file": str(audio_path)},
            )
            raise RecognitionSetupError(str(audio_path), e) from e

        logger.info(
            "Speech recognizer created",
            extra={"audio_file": str(audio_path), "language": self._config.language},
        )
        return AzureSpeechSession(recognizer, audio_config)
