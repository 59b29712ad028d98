"""Worker that handles queue message consumption and orchestration."""

import json
from typing import Any

from pydantic import ValidationError

from transcribe_pipeline.config import RabbitMQConfig
from transcribe_pipeline.domain import AudioMessage, CancellationToken
from transcribe_pipeline.handlers import AudioMessageHandler
from transcribe_pipeline.infrastructure.interfaces import MessageBroker
from transcribe_pipeline.logging import setup_logging

logger = setup_logging()


class Worker:
    """Consumes messages from the queue and orchestrates processing."""

    def __init__(
        self,
        broker: MessageBroker,
        handler: AudioMessageHandler,
        config: RabbitMQConfig,
    ):
        self._broker = broker
        self._handler = handler
        self._config = config
        self._cancellation = CancellationToken()

    def start(self) -> None:
        """Starts consuming messages from the queue."""
        logger.info("Worker initialized, starting message consumption")
        self._broker.consume(self._on_message)

    def stop(self) -> None:
        """Cancels the in-flight transcription and stops consuming."""
        logger.info("Worker stopping")
        self._cancellation.cancel()
        self._broker.stop()

    def _on_message(
        self, body: bytes, delivery_tag: int, headers: dict[str, Any] | None
    ) -> None:
        """Callback for each received message."""
        delivery_count = headers.get("x-delivery-count", 1) if headers else 1

        logger.info(
            "Message received",
            extra={
                "attempt": delivery_count,
                "max_attempts": self._config.queue_config.max_delivery_count,
            },
        )

        try:
            message = AudioMessage.model_validate(json.loads(body))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.exception("Invalid message format", extra={"error": str(e)})
            self._broker.reject(delivery_tag)
            return

        try:
            result = self._handler.process(message, self._cancellation)

            self._broker.acknowledge(delivery_tag)

            self._broker.publish(
                routing_key=self._config.queue_config.success_routing_key,
                payload={
                    "file_name": result.transcription_object_name,
                    "bucket_name": result.bucket_name,
                    "content_type": result.content_type,
                    "segment_count": result.segment_count,
                    "overall_confidence": result.overall_confidence,
                },
            )

            logger.info(
                "Message processed successfully",
                extra={
                    "audio_file": message.file_name,
                    "transcription_file": result.transcription_object_name,
                },
            )

        except Exception:
            logger.exception(
                "Message processing failed",
                extra={"file_name": message.file_name},
            )
            self._broker.reject(delivery_tag)
