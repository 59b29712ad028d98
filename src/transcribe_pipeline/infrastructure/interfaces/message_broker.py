"""Abstract interfaces for message broker operations."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class MessagePublisher(ABC):
    """Abstract base class for publishing messages to a broker."""

    @abstractmethod
    def publish(self, routing_key: str, payload: dict) -> None:
        """
        Publishes a message to the broker.

        Raises:
            EventPublishError: If publishing fails.
        """


class MessageBroker(MessagePublisher, ABC):
    """Publish plus consume, with explicit acknowledgement."""

    @abstractmethod
    def acknowledge(self, delivery_tag: int) -> None:
        """Acknowledges successful processing of a message."""

    @abstractmethod
    def reject(self, delivery_tag: int) -> None:
        """Rejects a message, triggering redelivery or dead-lettering."""

    @abstractmethod
    def consume(
        self, callback: Callable[[bytes, int, dict[str, Any] | None], None]
    ) -> None:
        """
        Blocks consuming messages from the configured queue.

        Args:
            callback: Called for each message with (body, delivery_tag, headers).
        """

    @abstractmethod
    def stop(self) -> None:
        """Stops a running ``consume`` loop."""

    @abstractmethod
    def setup(self) -> None:
        """Sets up the required infrastructure (exchanges, queues, bindings)."""
