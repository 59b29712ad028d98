"""Parsing of AWS Transcribe result documents."""

import json
from typing import Any

from pydantic import ValidationError

from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.logging import setup_logging

from .models import FALLBACK_SPEAKER, TranscriptResult, TranscriptSegment

logger = setup_logging()


class TranscriptParser:
    """
    Converts a raw result payload into a ``TranscriptResult``.

    Two payload shapes are accepted. A diarized payload carries
    ``results.speaker_labels.segments``, one entry per speaker turn, and is
    mapped to one segment per turn in array order. A flat payload only has
    ``results.transcripts[0].transcript`` and becomes a single segment with
    a placeholder speaker and a (0.0, 0.0) time span, since the flat shape
    carries no timing for the whole transcript.

    ``full_text`` always comes from the flat transcript field, never from
    the joined segment text.
    """

    def parse(self, raw: bytes | str) -> TranscriptResult:
        """
        Parses a result payload.

        Raises:
            TranscriptionError: ``INVALID_RESULT_FORMAT`` for any malformed
                payload, ``JOB_FAILED`` if the payload is a service error
                document.
        """
        payload = self._load(raw)

        if "results" not in payload and isinstance(payload.get("Message"), str):
            logger.error("Result payload is an error document")
            raise TranscriptionError.job_failed(payload["Message"])

        try:
            results = payload["results"]
            full_text = results["transcripts"][0]["transcript"]
            if not isinstance(full_text, str):
                raise TypeError("transcript is not a string")

            speaker_segments = self._speaker_segments(results)
            if speaker_segments is None:
                segments = [
                    TranscriptSegment(
                        text=full_text,
                        start_seconds=0.0,
                        end_seconds=0.0,
                        speaker_label=FALLBACK_SPEAKER,
                    )
                ]
                overall = 0.0
            else:
                segments, overall = self._parse_speaker_segments(speaker_segments)

            result = TranscriptResult(
                full_text=full_text,
                segments=segments,
                overall_confidence=overall,
            )
        except (KeyError, IndexError, TypeError, ValueError, ValidationError) as e:
            logger.exception("Failed to parse transcript payload")
            raise TranscriptionError(ErrorKind.INVALID_RESULT_FORMAT, cause=e) from e

        logger.info(
            "Transcript parsed",
            extra={
                "segment_count": len(result.segments),
                "overall_confidence": result.overall_confidence,
            },
        )
        return result

    def _load(self, raw: bytes | str) -> dict[str, Any]:
        if not raw:
            raise TranscriptionError(
                ErrorKind.INVALID_RESULT_FORMAT, detail="empty payload"
            )
        try:
            payload = json.loads(raw)
        except (ValueError, UnicodeDecodeError) as e:
            raise TranscriptionError(ErrorKind.INVALID_RESULT_FORMAT, cause=e) from e
        if not isinstance(payload, dict):
            raise TranscriptionError(
                ErrorKind.INVALID_RESULT_FORMAT, detail="payload is not an object"
            )
        return payload

    def _speaker_segments(self, results: dict[str, Any]) -> list[Any] | None:
        speaker_labels = results.get("speaker_labels")
        if not isinstance(speaker_labels, dict):
            return None
        segments = speaker_labels.get("segments")
        if segments is None:
            return None
        if not isinstance(segments, list):
            raise TypeError("speaker_labels.segments is not a list")
        return segments

    def _parse_speaker_segments(
        self, raw_segments: list[Any]
    ) -> tuple[list[TranscriptSegment], float]:
        segments = []
        scored = []

        for raw_segment in raw_segments:
            text = ""
            confidence_total = 0.0
            item_count = 0

            for item in raw_segment["items"]:
                if not isinstance(item, dict):
                    raise TypeError("segment item is not an object")
                alternatives = item.get("alternatives")
                if not alternatives:
                    continue
                alternative = alternatives[0]
                if not isinstance(alternative, dict):
                    raise TypeError("item alternative is not an object")
                content = alternative["content"]
                if not isinstance(content, str):
                    raise TypeError("alternative content is not a string")
                text += f"{content} "
                confidence_total += float(alternative.get("confidence", 0.0))
                item_count += 1

            confidence = None
            if item_count:
                confidence = confidence_total / item_count
                scored.append(confidence)

            segments.append(
                TranscriptSegment(
                    text=text.strip(),
                    start_seconds=float(raw_segment["start_time"]),
                    end_seconds=float(raw_segment["end_time"]),
                    speaker_label=raw_segment["speaker_label"],
                    confidence=confidence,
                )
            )

        overall = sum(scored) / len(scored) if scored else 0.0
        return segments, overall
