"""AssemblyAI implementation of the TranscriptionService interface."""

from collections.abc import Iterator

import assemblyai as aai

from transcribe_pipeline.domain import (
    AudioSource,
    CancellationToken,
    ProgressEvent,
    SuccessEvent,
    TranscriptResult,
    TranscriptSegment,
    terminal_event_for,
)
from transcribe_pipeline.domain.events import PipelineEvent
from transcribe_pipeline.domain.models import FALLBACK_SPEAKER
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.logging import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()

SUPPORTED_LANGUAGES = [
    "en-US",
    "en-GB",
    "en-AU",
    "es-ES",
    "fr-FR",
    "de-DE",
    "it-IT",
    "pt-BR",
    "nl-NL",
    "ja-JP",
    "ko-KR",
    "zh-CN",
]
_REGIONAL_ENGLISH = {"en_us": "en_us", "en_gb": "en_uk", "en_uk": "en_uk", "en_au": "en_au"}


def to_assemblyai_language(language_code: str) -> str:
    """Maps a BCP-47 code such as ``pt-BR`` to AssemblyAI's code (``pt``)."""
    normalized = language_code.strip().lower().replace("-", "_")
    if normalized in _REGIONAL_ENGLISH:
        return _REGIONAL_ENGLISH[normalized]
    return normalized.split("_")[0]


class AssemblyAITranscriber(TranscriptionService):
    """
    Handles audio transcription using AssemblyAI.

    The SDK uploads, waits and returns in a single blocking call, so only
    coarse progress is reported and cancellation is observed before and
    after that call.
    """

    def __init__(self, transcriber: aai.Transcriber, speaker_labels: bool = True):
        self._transcriber = transcriber
        self._speaker_labels = speaker_labels

    def transcribe(
        self,
        source: AudioSource,
        language_hint: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[PipelineEvent]:
        cancellation = cancellation or CancellationToken()

        try:
            if not aai.settings.api_key:
                raise TranscriptionError(
                    ErrorKind.CONFIGURATION_MISSING, detail="blank AssemblyAI API key"
                )
            if not source.exists():
                raise TranscriptionError(
                    ErrorKind.CONFIGURATION_MISSING,
                    detail=f"audio file not found: {source.path}",
                )
            yield ProgressEvent(percent=10, message="Uploading audio to AssemblyAI...")

            cancellation.raise_if_cancelled()
            transcript = self._run(source, language_hint)

            cancellation.raise_if_cancelled()
            yield ProgressEvent(percent=80, message="Processing results...")

            result = self._to_result(transcript)
            yield ProgressEvent(percent=95, message="Finalizing transcript...")
        except TranscriptionError as e:
            if cancellation.is_cancelled:
                e = TranscriptionError(ErrorKind.CANCELLED)
            yield terminal_event_for(e)
            return

        logger.info(
            "Audio transcription successful",
            extra={"segment_count": len(result.segments)},
        )
        yield ProgressEvent(percent=100, message="Transcription complete")
        yield SuccessEvent(result=result)

    def supported_languages(self) -> list[str]:
        return list(SUPPORTED_LANGUAGES)

    def _run(self, source: AudioSource, language_hint: str | None) -> aai.Transcript:
        config = aai.TranscriptionConfig(speaker_labels=self._speaker_labels)
        if language_hint and language_hint.strip():
            config.language_code = to_assemblyai_language(language_hint)

        try:
            transcript = self._transcriber.transcribe(str(source.path), config=config)
        except Exception as e:
            logger.exception("AssemblyAI transcription failed")
            raise TranscriptionError(ErrorKind.JOB_START_FAILED, cause=e) from e

        if transcript.status == aai.TranscriptStatus.error:
            raise TranscriptionError.job_failed(transcript.error)

        if transcript.text is None:
            raise TranscriptionError(
                ErrorKind.NO_TRANSCRIPT_AVAILABLE, detail=transcript.id
            )
        return transcript

    def _to_result(self, transcript: aai.Transcript) -> TranscriptResult:
        try:
            if transcript.utterances:
                segments = [
                    TranscriptSegment(
                        text=u.text,
                        start_seconds=u.start / 1000,
                        end_seconds=u.end / 1000,
                        speaker_label=u.speaker,
                        confidence=u.confidence,
                    )
                    for u in transcript.utterances
                ]
            else:
                segments = [
                    TranscriptSegment(
                        text=transcript.text,
                        start_seconds=0.0,
                        end_seconds=0.0,
                        speaker_label=FALLBACK_SPEAKER,
                    )
                ]

            scored = [s.confidence for s in segments if s.confidence is not None]
            overall = transcript.confidence
            if overall is None:
                overall = sum(scored) / len(scored) if scored else 0.0

            return TranscriptResult(
                full_text=transcript.text,
                segments=segments,
                overall_confidence=overall,
            )
        except (TypeError, ValueError) as e:
            raise TranscriptionError(ErrorKind.INVALID_RESULT_FORMAT, cause=e) from e
