"""AWS Transcribe pipeline: stage, submit, poll, fetch, parse, clean up."""

from collections.abc import Generator, Iterator

from transcribe_pipeline.config import AWSTranscribeConfig
from transcribe_pipeline.domain import (
    AudioSource,
    CancellationToken,
    CancelledEvent,
    ProgressEvent,
    SuccessEvent,
    TranscriptParser,
    terminal_event_for,
)
from transcribe_pipeline.domain.events import PipelineEvent
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.infrastructure.aws_transcribe_jobs import SUPPORTED_LANGUAGES
from transcribe_pipeline.infrastructure.interfaces import (
    StorageClient,
    TranscriptionJobClient,
    TranscriptionService,
)
from transcribe_pipeline.logging import setup_logging

from .job_poller import JobPoller
from .job_submitter import JobSubmitter
from .result_fetcher import ResultFetcher
from .staging import AudioStager

logger = setup_logging()

PROGRESS_VALIDATED = 10
PROGRESS_UPLOADED = 30
PROGRESS_SUBMITTED = 40
PROGRESS_FETCHED = 80
PROGRESS_PARSED = 95
PROGRESS_DONE = 100


class _ProgressTracker:
    """Keeps reported progress non-decreasing within one run."""

    def __init__(self):
        self._percent = 0

    def advance(self, percent: int, message: str) -> ProgressEvent:
        self._percent = max(self._percent, min(percent, PROGRESS_DONE))
        return ProgressEvent(percent=self._percent, message=message)

    def relay(self, updates: Generator[int, None, object], message: str):
        """Re-emits a generator's percentages as events and returns its result."""
        while True:
            try:
                percent = next(updates)
            except StopIteration as done:
                return done.value
            yield self.advance(percent, message)


class AWSTranscribePipeline(TranscriptionService):
    """
    Transcribes audio with an AWS Transcribe batch job.

    A run walks through validation, upload to the staging bucket, job
    submission, polling, result download and parsing. Each step that
    finishes is reported as progress: 10% validated, 30% uploaded, 40%
    submitted, 40-75% while the job runs, 80% result downloaded, 95%
    parsed, 100% done. Cancellation is checked between steps and inside the
    poll loop; a cancelled run issues no further calls and leaves the staged
    audio in place. Staged audio is deleted only after a successful run.
    """

    def __init__(
        self,
        config: AWSTranscribeConfig,
        storage: StorageClient,
        job_client: TranscriptionJobClient,
        parser: TranscriptParser | None = None,
    ):
        self._config = config
        self._storage = storage
        self._stager = AudioStager(storage, config.bucket_name, config.upload_prefix)
        self._submitter = JobSubmitter(
            job_client, config.bucket_name, config.output_prefix
        )
        self._poller = JobPoller(
            job_client,
            poll_interval_seconds=config.poll_interval_seconds,
            max_attempts=config.max_poll_attempts,
        )
        self._fetcher = ResultFetcher(storage, config.bucket_name, parser)

    def transcribe(
        self,
        source: AudioSource,
        language_hint: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[PipelineEvent]:
        cancellation = cancellation or CancellationToken()
        progress = _ProgressTracker()

        logger.info(
            "Starting transcription",
            extra={"file_name": source.name, "language_hint": language_hint},
        )

        try:
            language_code = self._validate(source, language_hint)
            yield progress.advance(PROGRESS_VALIDATED, "Uploading audio...")

            cancellation.raise_if_cancelled()
            object_key = self._stager.stage(source)
            yield progress.advance(PROGRESS_UPLOADED, "Starting transcription job...")

            cancellation.raise_if_cancelled()
            job_name = self._submitter.submit(
                self._stager.media_uri(object_key), language_code
            )
            yield progress.advance(
                PROGRESS_SUBMITTED, "Monitoring transcription job..."
            )

            cancellation.raise_if_cancelled()
            job = yield from progress.relay(
                self._poller.poll(job_name, cancellation), "Transcribing audio..."
            )

            cancellation.raise_if_cancelled()
            raw = self._fetcher.fetch(job)
            yield progress.advance(PROGRESS_FETCHED, "Processing results...")

            cancellation.raise_if_cancelled()
            result = self._fetcher.parse(raw)
            yield progress.advance(PROGRESS_PARSED, "Finalizing transcript...")

            cancellation.raise_if_cancelled()
        except TranscriptionError as e:
            if e.is_cancellation or cancellation.is_cancelled:
                logger.info("Transcription cancelled", extra={"file_name": source.name})
                yield CancelledEvent()
            else:
                logger.error(
                    "Transcription failed",
                    extra={"file_name": source.name, "kind": e.kind.value},
                )
                yield terminal_event_for(e)
            return

        yield progress.advance(PROGRESS_DONE, "Transcription complete")
        self._stager.discard(object_key)

        logger.info(
            "Transcription complete",
            extra={
                "file_name": source.name,
                "job_name": job_name,
                "segment_count": len(result.segments),
            },
        )
        yield SuccessEvent(result=result)

    def check_connection(self) -> None:
        """
        Verifies credentials and that the staging bucket is reachable.

        Raises:
            TranscriptionError: ``CONFIGURATION_MISSING`` or ``UPLOAD_FAILED``.
        """
        self._check_config()
        try:
            exists = self._storage.bucket_exists(self._config.bucket_name)
        except Exception as e:
            raise TranscriptionError(ErrorKind.UPLOAD_FAILED, cause=e) from e
        if not exists:
            raise TranscriptionError(
                ErrorKind.CONFIGURATION_MISSING,
                detail=f"bucket '{self._config.bucket_name}' does not exist",
            )

    def supported_languages(self) -> list[str]:
        return list(SUPPORTED_LANGUAGES)

    def _check_config(self) -> None:
        missing = self._config.missing_fields()
        if missing:
            raise TranscriptionError(
                ErrorKind.CONFIGURATION_MISSING,
                detail=f"blank {', '.join(missing)}",
            )

    def _validate(self, source: AudioSource, language_hint: str | None) -> str:
        self._check_config()
        if not source.exists():
            raise TranscriptionError(
                ErrorKind.CONFIGURATION_MISSING,
                detail=f"audio file not found: {source.path}",
            )
        language_code = (language_hint or "").strip() or self._config.language_code
        if not language_code.strip():
            raise TranscriptionError(
                ErrorKind.CONFIGURATION_MISSING, detail="blank language code"
            )
        return language_code.strip()
