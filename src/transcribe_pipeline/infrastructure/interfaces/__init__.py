"""Infrastructure interface exports."""

from .job_client import TranscriptionJobClient
from .message_broker import MessageBroker, MessagePublisher
from .storage_client import StorageClient
from .transcription_service import TranscriptionService

__all__ = [
    "MessageBroker",
    "MessagePublisher",
    "StorageClient",
    "TranscriptionJobClient",
    "TranscriptionService",
]
