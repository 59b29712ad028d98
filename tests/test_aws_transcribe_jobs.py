"""Tests for the boto3-backed job client."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.infrastructure import AWSTranscribeJobClient


def _client_error(code, message="", operation="GetTranscriptionJob"):
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


@pytest.fixture
def boto_client():
    return MagicMock()


def test_submit_job_with_speaker_labels(boto_client):
    """Test submission requests diarization with the configured speaker cap."""
    client = AWSTranscribeJobClient(boto_client, max_speaker_labels=3)

    client.submit_job(
        job_name="transcription-1",
        language_code="en-US",
        media_uri="s3://bucket/audio-files/x-a.wav",
        output_bucket="bucket",
        output_key="transcripts/transcription-1.json",
    )

    boto_client.start_transcription_job.assert_called_once_with(
        TranscriptionJobName="transcription-1",
        LanguageCode="en-US",
        Media={"MediaFileUri": "s3://bucket/audio-files/x-a.wav"},
        OutputBucketName="bucket",
        OutputKey="transcripts/transcription-1.json",
        Settings={"ShowSpeakerLabels": True, "MaxSpeakerLabels": 3},
    )


def test_submit_job_without_speaker_labels(boto_client):
    client = AWSTranscribeJobClient(boto_client, speaker_labels=False)

    client.submit_job("job", "en-US", "s3://b/k", "b", "transcripts/job.json")

    assert "Settings" not in boto_client.start_transcription_job.call_args.kwargs


def test_submit_job_rejected(boto_client):
    boto_client.start_transcription_job.side_effect = _client_error(
        "LimitExceededException", operation="StartTranscriptionJob"
    )
    client = AWSTranscribeJobClient(boto_client)

    with pytest.raises(TranscriptionError) as exc_info:
        client.submit_job("job", "en-US", "s3://b/k", "b", "transcripts/job.json")

    assert exc_info.value.kind is ErrorKind.JOB_START_FAILED
    assert isinstance(exc_info.value.cause, ClientError)


def test_get_job_maps_response(boto_client):
    boto_client.get_transcription_job.return_value = {
        "TranscriptionJob": {
            "TranscriptionJobName": "job",
            "TranscriptionJobStatus": "COMPLETED",
            "Transcript": {"TranscriptFileUri": "https://s3.amazonaws.com/b/k.json"},
        }
    }
    client = AWSTranscribeJobClient(boto_client)

    job = client.get_job("job")

    boto_client.get_transcription_job.assert_called_once_with(
        TranscriptionJobName="job"
    )
    assert job.status == "COMPLETED"
    assert job.result_uri == "https://s3.amazonaws.com/b/k.json"
    assert job.failure_reason is None


def test_get_job_failed_reason(boto_client):
    boto_client.get_transcription_job.return_value = {
        "TranscriptionJob": {
            "TranscriptionJobName": "job",
            "TranscriptionJobStatus": "FAILED",
            "FailureReason": "Invalid sample rate",
        }
    }

    job = AWSTranscribeJobClient(boto_client).get_job("job")

    assert job.status == "FAILED"
    assert job.failure_reason == "Invalid sample rate"
    assert job.result_uri is None


@pytest.mark.parametrize(
    "error",
    [
        _client_error("NotFoundException"),
        _client_error(
            "BadRequestException",
            "The requested job couldn't be found. Check the job name and try again.",
        ),
    ],
)
def test_get_job_not_found(boto_client, error):
    boto_client.get_transcription_job.side_effect = error

    with pytest.raises(TranscriptionError) as exc_info:
        AWSTranscribeJobClient(boto_client).get_job("job")

    assert exc_info.value.kind is ErrorKind.JOB_NOT_FOUND


def test_get_job_empty_response(boto_client):
    boto_client.get_transcription_job.return_value = {}

    with pytest.raises(TranscriptionError) as exc_info:
        AWSTranscribeJobClient(boto_client).get_job("job")

    assert exc_info.value.kind is ErrorKind.JOB_NOT_FOUND


@pytest.mark.parametrize(
    "error",
    [
        _client_error("ThrottlingException", "Rate exceeded"),
        _client_error("BadRequestException", "Malformed request"),
        EndpointConnectionError(endpoint_url="https://transcribe.us-east-1"),
    ],
)
def test_get_job_monitoring_failure(boto_client, error):
    """Test transport and service errors other than not-found."""
    boto_client.get_transcription_job.side_effect = error

    with pytest.raises(TranscriptionError) as exc_info:
        AWSTranscribeJobClient(boto_client).get_job("job")

    assert exc_info.value.kind is ErrorKind.JOB_MONITORING_FAILED
    assert exc_info.value.cause is error
