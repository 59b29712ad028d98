"""Tests for transcript_parser module."""

import json

import pytest

from transcribe_pipeline.domain import TranscriptParser
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError

from conftest import diarized_payload, flat_payload


@pytest.fixture
def parser():
    return TranscriptParser()


def _encode(payload):
    return json.dumps(payload).encode("utf-8")


def test_parse_diarized_payload(parser):
    """Test speaker segments become ordered, timed segments."""
    result = parser.parse(_encode(diarized_payload()))

    assert [s.speaker_label for s in result.segments] == ["spk_0", "spk_1"]
    assert [s.text for s in result.segments] == ["Hi", "There"]
    assert [(s.start_seconds, s.end_seconds) for s in result.segments] == [
        (0.0, 2.0),
        (2.0, 5.0),
    ]
    assert result.segments[0].confidence == pytest.approx(0.9)
    assert result.segments[1].confidence == pytest.approx(0.7)
    assert result.overall_confidence == pytest.approx(0.8)


def test_full_text_comes_from_flat_transcript(parser):
    """Test full text is the transcript field, not the joined segments."""
    payload = diarized_payload()
    payload["results"]["transcripts"][0]["transcript"] = "Completely different."

    result = parser.parse(_encode(payload))

    assert result.full_text == "Completely different."


def test_segment_text_joins_item_contents(parser):
    """Test every item's content is concatenated and trimmed."""
    payload = diarized_payload()
    payload["results"]["speaker_labels"]["segments"][0]["items"] = [
        {"alternatives": [{"content": "Good", "confidence": 1.0}]},
        {"alternatives": [{"content": "morning", "confidence": 0.5}]},
    ]

    result = parser.parse(_encode(payload))

    assert result.segments[0].text == "Good morning"
    assert result.segments[0].confidence == pytest.approx(0.75)


def test_parse_flat_payload(parser):
    """Test a payload without speaker labels yields one fallback segment."""
    result = parser.parse(_encode(flat_payload("Hello world.")))

    assert len(result.segments) == 1
    segment = result.segments[0]
    assert segment.text == "Hello world."
    assert segment.confidence is None
    assert segment.speaker_label == "Speaker"
    assert result.overall_confidence == 0.0


def test_flat_payload_uses_zero_time_sentinel(parser):
    """Known sentinel: the flat shape has no timing, so the span is 0.0-0.0."""
    segment = parser.parse(_encode(flat_payload())).segments[0]

    assert (segment.start_seconds, segment.end_seconds) == (0.0, 0.0)


def test_missing_confidence_defaults_to_zero(parser):
    """Test an item without confidence counts as a zero score."""
    payload = diarized_payload()
    payload["results"]["speaker_labels"]["segments"][0]["items"] = [
        {"alternatives": [{"content": "Hi", "confidence": 0.8}]},
        {"alternatives": [{"content": "."}]},
    ]

    result = parser.parse(_encode(payload))

    assert result.segments[0].confidence == pytest.approx(0.4)


def test_string_confidence_is_accepted(parser):
    """Test confidences encoded as strings are parsed to floats."""
    payload = diarized_payload()
    payload["results"]["speaker_labels"]["segments"][1]["items"][0]["alternatives"][
        0
    ]["confidence"] = "0.5"

    result = parser.parse(_encode(payload))

    assert result.segments[1].confidence == pytest.approx(0.5)


def test_unscored_segment_is_excluded_from_average(parser):
    """Test a segment with no scored items is left out of the overall mean."""
    payload = diarized_payload()
    payload["results"]["speaker_labels"]["segments"].append(
        {
            "start_time": "5.0",
            "end_time": "6.0",
            "speaker_label": "spk_0",
            "items": [],
        }
    )

    result = parser.parse(_encode(payload))

    assert len(result.segments) == 3
    assert result.segments[2].confidence is None
    assert result.segments[2].text == ""
    assert result.overall_confidence == pytest.approx(0.8)


def test_missing_transcripts_is_invalid_format(parser):
    """Test a payload without results.transcripts raises a typed error."""
    with pytest.raises(TranscriptionError) as exc_info:
        parser.parse(_encode({"results": {"items": []}}))

    assert exc_info.value.kind is ErrorKind.INVALID_RESULT_FORMAT


def test_empty_transcripts_is_invalid_format(parser):
    with pytest.raises(TranscriptionError) as exc_info:
        parser.parse(_encode({"results": {"transcripts": []}}))

    assert exc_info.value.kind is ErrorKind.INVALID_RESULT_FORMAT


@pytest.mark.parametrize("raw", [b"", b"not json", b"[1, 2]", b"\xff\xfe"])
def test_malformed_payload_is_invalid_format(parser, raw):
    """Test unreadable payloads never leak a raw decoding error."""
    with pytest.raises(TranscriptionError) as exc_info:
        parser.parse(raw)

    assert exc_info.value.kind is ErrorKind.INVALID_RESULT_FORMAT


@pytest.mark.parametrize(
    "items",
    [
        [None],
        ["word"],
        [42],
        [{"alternatives": [None]}],
        [{"alternatives": ["word"]}],
        [{"alternatives": [{"content": None, "confidence": 0.9}]}],
        [{"alternatives": [{"content": 7, "confidence": 0.9}]}],
        [{"alternatives": [{"confidence": 0.9}]}],
    ],
)
def test_malformed_items_are_invalid_format(parser, items):
    """Test item entries that are not well-formed never reach segment text."""
    payload = diarized_payload()
    payload["results"]["speaker_labels"]["segments"][0]["items"] = items

    with pytest.raises(TranscriptionError) as exc_info:
        parser.parse(_encode(payload))

    assert exc_info.value.kind is ErrorKind.INVALID_RESULT_FORMAT


def test_segment_missing_speaker_label_is_invalid_format(parser):
    payload = diarized_payload()
    del payload["results"]["speaker_labels"]["segments"][0]["speaker_label"]

    with pytest.raises(TranscriptionError) as exc_info:
        parser.parse(_encode(payload))

    assert exc_info.value.kind is ErrorKind.INVALID_RESULT_FORMAT


def test_segment_ending_before_start_is_invalid_format(parser):
    payload = diarized_payload()
    payload["results"]["speaker_labels"]["segments"][0]["end_time"] = "-1.0"

    with pytest.raises(TranscriptionError) as exc_info:
        parser.parse(_encode(payload))

    assert exc_info.value.kind is ErrorKind.INVALID_RESULT_FORMAT


def test_error_document_is_job_failure(parser):
    """Test an error document surfaces the service message."""
    with pytest.raises(TranscriptionError) as exc_info:
        parser.parse(_encode({"Message": "Access Denied"}))

    assert exc_info.value.kind is ErrorKind.JOB_FAILED
    assert exc_info.value.reason == "Access Denied"
