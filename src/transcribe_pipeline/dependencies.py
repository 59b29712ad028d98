"""Dependency wiring for the audio transcription service."""

import assemblyai as aai
import boto3
import pika
from minio import Minio

from transcribe_pipeline.config import AppConfig, load_config
from transcribe_pipeline.domain import TranscriptBuilder, TranscriptParser
from transcribe_pipeline.handlers import AudioMessageHandler
from transcribe_pipeline.infrastructure import (
    AssemblyAITranscriber,
    AWSTranscribeJobClient,
    MinioStorageClient,
    RabbitMQBroker,
)
from transcribe_pipeline.infrastructure.interfaces import (
    StorageClient,
    TranscriptionService,
)
from transcribe_pipeline.logging import setup_logging
from transcribe_pipeline.pipeline import AWSTranscribePipeline
from transcribe_pipeline.worker import Worker

logger = setup_logging()


def get_storage(config: AppConfig) -> StorageClient:
    """Returns the storage client holding incoming audio and stored transcripts."""
    client = Minio(
        endpoint=config.minio.endpoint,
        access_key=config.minio.user,
        secret_key=config.minio.password,
        secure=config.minio.secure,
    )
    storage = MinioStorageClient(client)
    storage.ensure_bucket_exists(config.minio.bucket_name)
    return storage


def get_transcription_service(config: AppConfig) -> TranscriptionService:
    """Returns the configured transcription engine."""
    if config.engine == "assemblyai":
        aai.settings.api_key = config.assemblyai.api_key
        transcriber = aai.Transcriber()
        return AssemblyAITranscriber(
            transcriber, speaker_labels=config.assemblyai.speaker_labels
        )

    aws = config.aws
    # Staged audio and job results live in S3, reached through the same
    # S3-compatible client used for MinIO.
    staging_storage = MinioStorageClient(
        Minio(
            endpoint=aws.s3_endpoint,
            access_key=aws.access_key_id,
            secret_key=aws.secret_access_key,
            region=aws.region,
            secure=True,
        )
    )
    transcribe_client = boto3.client(
        "transcribe",
        region_name=aws.region,
        aws_access_key_id=aws.access_key_id,
        aws_secret_access_key=aws.secret_access_key,
    )
    job_client = AWSTranscribeJobClient(
        transcribe_client,
        speaker_labels=aws.speaker_labels,
        max_speaker_labels=aws.max_speaker_labels,
    )
    return AWSTranscribePipeline(aws, staging_storage, job_client, TranscriptParser())


def get_broker(config: AppConfig) -> RabbitMQBroker:
    """Returns a connected broker with its queue topology declared."""
    credentials = pika.PlainCredentials(config.rabbitmq.user, config.rabbitmq.password)
    parameters = pika.ConnectionParameters(
        host=config.rabbitmq.host,
        credentials=credentials,
        heartbeat=0,
    )
    connection = pika.BlockingConnection(parameters)
    broker = RabbitMQBroker(connection.channel(), config.rabbitmq)
    broker.setup()
    return broker


def get_worker(config: AppConfig | None = None) -> Worker:
    """Returns a fully wired worker."""
    config = config or load_config()
    logger.info("Wiring transcription worker", extra={"engine": config.engine})

    handler = AudioMessageHandler(
        get_storage(config),
        get_transcription_service(config),
        TranscriptBuilder(),
    )
    return Worker(get_broker(config), handler, config.rabbitmq)
