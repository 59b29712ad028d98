"""RabbitMQ message broker implementation."""

import json
from collections.abc import Callable
from typing import Any

import pika
from pika.channel import Channel

from transcribe_pipeline.config import QueueConfig, RabbitMQConfig
from transcribe_pipeline.exceptions import EventPublishError
from transcribe_pipeline.logging import setup_logging

from .interfaces import MessageBroker

logger = setup_logging()

# Transcription jobs run for minutes; take one message at a time.
PREFETCH_COUNT = 1


class RabbitMQBroker(MessageBroker):
    """Message broker implementation using RabbitMQ."""

    def __init__(self, channel: Channel, config: RabbitMQConfig):
        self._channel = channel
        self._config = config

    def publish(self, routing_key: str, payload: dict) -> None:
        """
        Publishes a persistent JSON message to the configured exchange.

        Raises:
            EventPublishError: If publishing fails.
        """
        try:
            self._channel.basic_publish(
                exchange=self._config.exchange_name,
                routing_key=routing_key,
                body=json.dumps(payload),
                properties=pika.BasicProperties(
                    content_type="application/json",
                    delivery_mode=pika.DeliveryMode.Persistent,
                ),
            )
            logger.info(
                "Event published",
                extra={
                    "exchange": self._config.exchange_name,
                    "routing_key": routing_key,
                },
            )
        except Exception as e:
            logger.exception(
                "Failed to publish event", extra={"routing_key": routing_key}
            )
            raise EventPublishError(routing_key, cause=e) from e

    def acknowledge(self, delivery_tag: int) -> None:
        self._channel.basic_ack(delivery_tag=delivery_tag)

    def reject(self, delivery_tag: int) -> None:
        """Rejects a message; the quorum queue dead-letters it after the delivery limit."""
        self._channel.basic_nack(delivery_tag=delivery_tag, requeue=True)

    def consume(
        self, callback: Callable[[bytes, int, dict[str, Any] | None], None]
    ) -> None:
        def on_message(ch, method, properties, body):
            headers = properties.headers if properties else None
            callback(body, method.delivery_tag, headers)

        queue_name = self._config.queue_config.name
        self._channel.basic_qos(prefetch_count=PREFETCH_COUNT)
        self._channel.basic_consume(queue=queue_name, on_message_callback=on_message)
        logger.info("Started consuming", extra={"queue": queue_name})
        self._channel.start_consuming()

    def stop(self) -> None:
        self._channel.stop_consuming()

    def setup(self) -> None:
        """Sets up exchanges, queues, and bindings for this service."""
        queue_config: QueueConfig = self._config.queue_config

        # Dead letter exchange and queue
        self._channel.exchange_declare(
            exchange=queue_config.dlq_exchange_name,
            exchange_type="direct",
            durable=True,
        )
        self._channel.queue_declare(queue=queue_config.dlq_name, durable=True)
        self._channel.queue_bind(
            queue=queue_config.dlq_name,
            exchange=queue_config.dlq_exchange_name,
            routing_key=queue_config.dlq_routing_key,
        )

        self._channel.exchange_declare(
            exchange=self._config.exchange_name,
            exchange_type="topic",
            durable=True,
        )

        arguments = {
            "x-queue-type": queue_config.queue_type,
            "x-delivery-limit": queue_config.max_delivery_count,
            "x-dead-letter-exchange": queue_config.dlq_exchange_name,
            "x-dead-letter-routing-key": queue_config.dlq_routing_key,
        }
        self._channel.queue_declare(
            queue=queue_config.name,
            durable=True,
            arguments=arguments,
        )
        self._channel.queue_bind(
            queue=queue_config.name,
            exchange=self._config.exchange_name,
            routing_key=queue_config.expected_routing_key,
        )

        logger.info(
            "Queue infrastructure ready",
            extra={"queue": queue_config.name, "exchange": self._config.exchange_name},
        )
