"""Application configuration loaded from environment variables."""

import os
from typing import Literal

from pydantic import BaseModel


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "sessions"
    secure: bool = False


class QueueConfig(BaseModel, frozen=True):
    """RabbitMQ queue configuration."""

    name: str
    queue_type: str = "quorum"
    max_delivery_count: int = 3
    expected_routing_key: str
    success_routing_key: str
    dlq_name: str
    dlq_exchange_name: str = "dead_letter_exchange"
    dlq_routing_key: str


class RabbitMQConfig(BaseModel, frozen=True):
    """RabbitMQ connection configuration."""

    host: str
    user: str
    password: str
    exchange_name: str = "events"
    queue_config: QueueConfig = QueueConfig(
        name="audio_transcription_queue",
        expected_routing_key="audio.extraction.completed",
        success_routing_key="audio.transcription.completed",
        dlq_name="dlq_audio_transcriber",
        dlq_routing_key="audio.transcription.failed",
    )


class AWSTranscribeConfig(BaseModel, frozen=True):
    """AWS Transcribe and S3 staging configuration."""

    region: str
    access_key_id: str
    secret_access_key: str
    bucket_name: str
    language_code: str = "en-US"
    upload_prefix: str = "audio-files"
    output_prefix: str = "transcripts"
    poll_interval_seconds: float = 5.0
    max_poll_attempts: int = 360  # 30 minutes at the default interval
    speaker_labels: bool = True
    max_speaker_labels: int = 2

    @property
    def s3_endpoint(self) -> str:
        return f"s3.{self.region}.amazonaws.com"

    def missing_fields(self) -> list[str]:
        """Returns the names of required fields that are blank."""
        required = {
            "region": self.region,
            "access_key_id": self.access_key_id,
            "secret_access_key": self.secret_access_key,
            "bucket_name": self.bucket_name,
        }
        return [name for name, value in required.items() if not value.strip()]


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    speaker_labels: bool = True


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    engine: Literal["aws", "assemblyai"] = "aws"
    minio: MinioConfig
    rabbitmq: RabbitMQConfig
    aws: AWSTranscribeConfig
    assemblyai: AssemblyAIConfig


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        engine=os.getenv("TRANSCRIPTION_ENGINE", "aws"),
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
        ),
        rabbitmq=RabbitMQConfig(
            host=os.getenv("RABBITMQ_HOST", "rabbitmq"),
            user=os.getenv("RABBITMQ_USER", ""),
            password=os.getenv("RABBITMQ_PASSWORD", ""),
        ),
        aws=AWSTranscribeConfig(
            region=os.getenv("AWS_REGION", "us-east-1"),
            access_key_id=os.getenv("AWS_ACCESS_KEY_ID", ""),
            secret_access_key=os.getenv("AWS_SECRET_ACCESS_KEY", ""),
            bucket_name=os.getenv("TRANSCRIBE_BUCKET", ""),
            language_code=os.getenv("TRANSCRIBE_LANGUAGE_CODE", "en-US"),
            poll_interval_seconds=float(
                os.getenv("TRANSCRIBE_POLL_INTERVAL_SECONDS", "5")
            ),
            max_poll_attempts=int(os.getenv("TRANSCRIBE_MAX_POLL_ATTEMPTS", "360")),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
        ),
    )
