"""Shared fixtures for the transcription pipeline tests."""

import json
from unittest.mock import MagicMock

import pytest

from transcribe_pipeline.config import AWSTranscribeConfig
from transcribe_pipeline.domain import AudioSource, RemoteJob
from transcribe_pipeline.infrastructure.interfaces import (
    StorageClient,
    TranscriptionJobClient,
)

RESULT_URI = "https://s3.us-east-1.amazonaws.com/test-bucket/transcripts/job.json"


def remote_job(status, failure_reason=None, result_uri=None, job_name="job"):
    """Builds a remote job snapshot as the job client would return it."""
    return RemoteJob(
        job_name=job_name,
        status=status,
        failure_reason=failure_reason,
        result_uri=result_uri,
    )


def diarized_payload():
    """Two speaker turns, matching the shape AWS Transcribe writes."""
    return {
        "results": {
            "transcripts": [{"transcript": "Hi there."}],
            "speaker_labels": {
                "segments": [
                    {
                        "start_time": "0.0",
                        "end_time": "2.0",
                        "speaker_label": "spk_0",
                        "items": [
                            {"alternatives": [{"content": "Hi ", "confidence": 0.9}]}
                        ],
                    },
                    {
                        "start_time": "2.0",
                        "end_time": "5.0",
                        "speaker_label": "spk_1",
                        "items": [
                            {
                                "alternatives": [
                                    {"content": "There ", "confidence": 0.7}
                                ]
                            }
                        ],
                    },
                ]
            },
        }
    }


def flat_payload(text="Hello world."):
    return {"results": {"transcripts": [{"transcript": text}]}}


@pytest.fixture
def aws_config():
    """Create a test config with an instant poll interval."""
    return AWSTranscribeConfig(
        region="us-east-1",
        access_key_id="AKIATEST",
        secret_access_key="secret",
        bucket_name="test-bucket",
        poll_interval_seconds=0,
        max_poll_attempts=10,
    )


@pytest.fixture
def audio_file(tmp_path):
    """Create a small audio file on disk."""
    path = tmp_path / "meeting.m4a"
    path.write_bytes(b"\x00\x01fake-audio")
    return AudioSource(path=path)


@pytest.fixture
def storage():
    """Create a mock storage client serving a diarized result."""
    client = MagicMock(spec=StorageClient)
    client.download.return_value = json.dumps(diarized_payload()).encode("utf-8")
    client.bucket_exists.return_value = True
    return client


@pytest.fixture
def job_client():
    """Create a mock job client whose job completes on the third poll."""
    client = MagicMock(spec=TranscriptionJobClient)
    client.get_job.side_effect = [
        remote_job("QUEUED"),
        remote_job("IN_PROGRESS"),
        remote_job("COMPLETED", result_uri=RESULT_URI),
    ]
    return client
