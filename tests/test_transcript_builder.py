"""Tests for TranscriptBuilder."""

import pytest

from transcribe_pipeline.domain import (
    TranscriptBuilder,
    TranscriptResult,
    TranscriptSegment,
)


@pytest.fixture
def builder():
    return TranscriptBuilder()


def _result(*segments):
    return TranscriptResult(
        full_text=" ".join(s.text for s in segments),
        segments=list(segments),
        overall_confidence=0.5,
    )


def test_build_formats_timed_speaker_lines(builder):
    result = _result(
        TranscriptSegment(
            text="Hello.", start_seconds=0, end_seconds=4.2, speaker_label="spk_0"
        ),
        TranscriptSegment(
            text="Hi.", start_seconds=62.5, end_seconds=125, speaker_label="spk_1"
        ),
    )

    text, _ = builder.build(result, "s1/audio/a.wav")

    assert text == (
        "Speaker spk_0 [00:00-00:04]: Hello.\n" "Speaker spk_1 [01:02-02:05]: Hi."
    )


def test_build_untimed_fallback_segment(builder):
    """Test the 0.0-0.0 fallback segment is written without a time span."""
    result = _result(
        TranscriptSegment(
            text="Plain text.", start_seconds=0, end_seconds=0, speaker_label="Speaker"
        )
    )

    text, _ = builder.build(result, "s1/audio/a.wav")

    assert text == "Speaker: Plain text."


@pytest.mark.parametrize(
    "audio_name,expected",
    [
        ("session-1/audio/recording.m4a", "session-1/transcription/recording.txt"),
        ("session-1/audio/take.2.wav", "session-1/transcription/take.2.txt"),
        ("plain.mp3", "plain.txt"),
    ],
)
def test_build_derives_object_name(builder, audio_name, expected):
    _, object_name = builder.build(_result(), audio_name)

    assert object_name == expected
