"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .aws_transcribe_jobs import AWSTranscribeJobClient
from .minio_storage import MinioStorageClient
from .rabbitmq_broker import RabbitMQBroker

__all__ = [
    "AWSTranscribeJobClient",
    "AssemblyAITranscriber",
    "MinioStorageClient",
    "RabbitMQBroker",
]
