"""Worker that consumes storage notifications and runs the handler."""

import json
from typing import Any

from pydantic import ValidationError

from config import AppConfig
from domain import S3Notification, UploadEvent
from exceptions import InvalidUploadEventError
from handlers import UploadEventHandler
from infrastructure.interfaces import MessageBroker
from utils import setup_logging

logger = setup_logging()


class Worker:
    """Consumes object-created notifications and transcribes each upload."""

    def __init__(
        self,
        broker: MessageBroker,
        handler: UploadEventHandler,
        config: AppConfig,
    ):
        self._broker = broker
        self._handler = handler
        self._config = config

    def start(self) -> None:
        """Starts consuming messages from the queue."""
        logger.info("Worker initialized, starting message consumption")
        self._broker.consume(self._on_message)

    def _on_message(
        self, body: bytes, delivery_tag: int, headers: dict[str, Any] | None
    ) -> None:
        """Callback for each received message."""
        delivery_count = headers.get("x-delivery-count", 1) if headers else 1

        logger.info(
            "Message received",
            extra={
                "attempt": delivery_count,
                "max_attempts": self._config.rabbitmq.queue_config.max_delivery_count,
            },
        )

        try:
            notification = S3Notification.model_validate(json.loads(body))
            event = UploadEvent.from_notification(
                notification, self._config.storage.input_container
            )
        except (ValueError, ValidationError, InvalidUploadEventError) as e:
            logger.exception("Invalid message format", extra={"error": str(e)})
            self._broker.reject(delivery_tag)
            return

        try:
            result = self._handler.process(event)

            self._broker.acknowledge(delivery_tag)

            logger.info(
                "Message processed successfully",
                extra={
                    "audio_file": event.audio_object_name,
                    "transcription_file": result.transcript_object_name,
                    "uploaded": result.uploaded,
                },
            )

        except Exception:
            logger.exception(
                "Message processing failed",
                extra={"audio_file": event.audio_object_name},
            )
            self._broker.reject(delivery_tag)
