"""Handler for processing audio files."""

import io
import os
import tempfile

from transcribe_pipeline.domain import (
    AudioMessage,
    AudioSource,
    CancellationToken,
    CancelledEvent,
    ErrorEvent,
    ProgressEvent,
    SuccessEvent,
    TranscriptBuilder,
    TranscriptionOutput,
    TranscriptResult,
)
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.infrastructure.interfaces import (
    StorageClient,
    TranscriptionService,
)
from transcribe_pipeline.logging import setup_logging

logger = setup_logging()


class AudioMessageHandler:
    """Orchestrates audio-to-transcription operations."""

    def __init__(
        self,
        storage: StorageClient,
        transcription_service: TranscriptionService,
        transcript_builder: TranscriptBuilder,
    ):
        self._storage = storage
        self._transcription_service = transcription_service
        self._transcript_builder = transcript_builder

    def process(
        self, message: AudioMessage, cancellation: CancellationToken | None = None
    ) -> TranscriptionOutput:
        """
        Processes an audio file by transcribing and storing the result.

        Args:
            message: The audio message containing file location.
            cancellation: Token that aborts the transcription run.

        Returns:
            TranscriptionOutput with the uploaded transcription details.

        Raises:
            StorageDownloadError: If audio download fails.
            TranscriptionError: If transcription fails or is cancelled.
            StorageUploadError: If transcription upload fails.
        """
        logger.info(
            "Processing audio",
            extra={"file_name": message.file_name, "bucket_name": message.bucket_name},
        )

        audio_data = self._storage.download(message.bucket_name, message.file_name)

        result = self._transcribe(audio_data, message, cancellation)

        transcript_text, transcription_object_name = self._transcript_builder.build(
            result, message.file_name
        )

        output = TranscriptionOutput(
            transcription_object_name=transcription_object_name,
            bucket_name=message.bucket_name,
            segment_count=len(result.segments),
            overall_confidence=result.overall_confidence,
        )

        transcript_bytes = transcript_text.encode("utf-8")
        self._storage.upload(
            bucket_name=output.bucket_name,
            object_name=output.transcription_object_name,
            data=io.BytesIO(transcript_bytes),
            size=len(transcript_bytes),
            content_type=output.content_type,
        )

        logger.info(
            "Audio processed",
            extra={
                "audio_file": message.file_name,
                "transcription_file": output.transcription_object_name,
            },
        )

        return output

    def _transcribe(
        self,
        audio_data: bytes,
        message: AudioMessage,
        cancellation: CancellationToken | None,
    ) -> TranscriptResult:
        """Runs the engine on a temp copy of the audio and returns its transcript."""
        # Keep the original name so the engine sees the real extension.
        base_name = os.path.basename(message.file_name)

        with tempfile.TemporaryDirectory() as temp_dir:
            path = os.path.join(temp_dir, base_name)
            with open(path, "wb") as temp_file:
                temp_file.write(audio_data)

            events = self._transcription_service.transcribe(
                AudioSource(path=path), message.language_code, cancellation
            )
            for event in events:
                if isinstance(event, ProgressEvent):
                    logger.info(
                        "Transcription progress",
                        extra={
                            "file_name": message.file_name,
                            "percent": event.percent,
                            "status": event.message,
                        },
                    )
                elif isinstance(event, SuccessEvent):
                    return event.result
                elif isinstance(event, ErrorEvent):
                    raise event.to_error()
                elif isinstance(event, CancelledEvent):
                    raise TranscriptionError(ErrorKind.CANCELLED)

        raise TranscriptionError(
            ErrorKind.NO_TRANSCRIPT_AVAILABLE, detail="engine produced no outcome"
        )
