"""Core business logic for transcript building."""

import os

from .models import FALLBACK_SPEAKER, TranscriptResult, TranscriptSegment


class TranscriptBuilder:
    """Builds formatted transcripts from transcript results."""

    def build(self, result: TranscriptResult, audio_file_name: str) -> tuple[str, str]:
        """
        Builds a formatted transcript and derives the output path.

        Args:
            result: Parsed transcript with speaker-tagged segments.
            audio_file_name: Original audio file path.

        Returns:
            Tuple of (transcript_text, transcription_object_name).
        """
        transcript_text = self._format(result.segments)
        object_name = self._derive_path(audio_file_name)
        return transcript_text, object_name

    def _format(self, segments: list[TranscriptSegment]) -> str:
        """Formats segments into a readable transcript."""
        return "\n".join(self._format_line(s) for s in segments)

    def _format_line(self, segment: TranscriptSegment) -> str:
        label = segment.speaker_label or FALLBACK_SPEAKER
        prefix = "Speaker" if label == FALLBACK_SPEAKER else f"Speaker {label}"
        # Untimed fallback segments carry a 0.0-0.0 span.
        if segment.end_seconds > 0:
            prefix += (
                f" [{_timestamp(segment.start_seconds)}-{_timestamp(segment.end_seconds)}]"
            )
        return f"{prefix}: {segment.text}"

    def _derive_path(self, audio_file_name: str) -> str:
        """Converts audio path to transcription path."""
        name = audio_file_name.replace("/audio/", "/transcription/")
        return os.path.splitext(name)[0] + ".txt"


def _timestamp(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
