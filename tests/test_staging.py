"""Tests for audio staging and job submission helpers."""

import re
from unittest.mock import MagicMock

import pytest

from transcribe_pipeline.domain import AudioSource
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.infrastructure.interfaces import TranscriptionJobClient
from transcribe_pipeline.pipeline import AudioStager, JobSubmitter


def test_object_keys_are_unique(storage):
    stager = AudioStager(storage, "bucket", "audio-files/")

    first = stager.object_key("a.wav")
    second = stager.object_key("a.wav")

    assert first != second
    assert re.fullmatch(r"audio-files/[0-9a-f-]{36}-a\.wav", first)


@pytest.mark.parametrize(
    "name,content_type",
    [("a.WAV", "audio/wav"), ("a.mp3", "audio/mpeg"), ("a.ogg", "audio/mp4")],
)
def test_content_type_from_extension(storage, tmp_path, name, content_type):
    path = tmp_path / name
    path.write_bytes(b"x")

    AudioStager(storage, "bucket", "audio-files").stage(AudioSource(path=path))

    assert storage.upload.call_args.kwargs["content_type"] == content_type


def test_stage_unreadable_file(storage, tmp_path):
    stager = AudioStager(storage, "bucket", "audio-files")

    with pytest.raises(TranscriptionError) as exc_info:
        stager.stage(AudioSource(path=tmp_path / "gone.wav"))

    assert exc_info.value.kind is ErrorKind.UPLOAD_FAILED
    storage.upload.assert_not_called()


def test_discard_swallows_failures(storage):
    storage.delete.side_effect = RuntimeError("denied")

    AudioStager(storage, "bucket", "audio-files").discard("audio-files/x-a.wav")

    storage.delete.assert_called_once_with("bucket", "audio-files/x-a.wav")


def test_submit_returns_generated_job_name():
    client = MagicMock(spec=TranscriptionJobClient)
    submitter = JobSubmitter(client, "bucket", "transcripts")

    job_name = submitter.submit("s3://bucket/audio-files/x-a.wav", "de-DE")

    assert re.fullmatch(r"transcription-[0-9a-f-]{36}", job_name)
    client.submit_job.assert_called_once_with(
        job_name=job_name,
        language_code="de-DE",
        media_uri="s3://bucket/audio-files/x-a.wav",
        output_bucket="bucket",
        output_key=f"transcripts/{job_name}.json",
    )
