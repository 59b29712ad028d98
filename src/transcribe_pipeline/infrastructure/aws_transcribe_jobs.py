"""AWS Transcribe implementation of the TranscriptionJobClient interface."""

from botocore.exceptions import BotoCoreError, ClientError

from transcribe_pipeline.domain.models import RemoteJob
from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError
from transcribe_pipeline.logging import setup_logging

from .interfaces import TranscriptionJobClient

logger = setup_logging()

SUPPORTED_LANGUAGES = [
    "en-US",
    "en-GB",
    "en-AU",
    "es-US",
    "es-ES",
    "fr-FR",
    "fr-CA",
    "de-DE",
    "it-IT",
    "pt-BR",
    "pt-PT",
    "ja-JP",
    "ko-KR",
    "zh-CN",
]


class AWSTranscribeJobClient(TranscriptionJobClient):
    """Starts and inspects batch jobs using a boto3 ``transcribe`` client."""

    def __init__(
        self, client, speaker_labels: bool = True, max_speaker_labels: int = 2
    ):
        self._client = client
        self._speaker_labels = speaker_labels
        self._max_speaker_labels = max_speaker_labels

    def submit_job(
        self,
        job_name: str,
        language_code: str,
        media_uri: str,
        output_bucket: str,
        output_key: str,
    ) -> None:
        request = {
            "TranscriptionJobName": job_name,
            "LanguageCode": language_code,
            "Media": {"MediaFileUri": media_uri},
            "OutputBucketName": output_bucket,
            "OutputKey": output_key,
        }
        if self._speaker_labels:
            request["Settings"] = {
                "ShowSpeakerLabels": True,
                "MaxSpeakerLabels": self._max_speaker_labels,
            }

        try:
            self._client.start_transcription_job(**request)
        except (BotoCoreError, ClientError) as e:
            logger.exception(
                "Failed to start transcription job", extra={"job_name": job_name}
            )
            raise TranscriptionError(ErrorKind.JOB_START_FAILED, cause=e) from e

        logger.info(
            "Transcription job started",
            extra={"job_name": job_name, "media_uri": media_uri},
        )

    def get_job(self, job_name: str) -> RemoteJob:
        try:
            response = self._client.get_transcription_job(TranscriptionJobName=job_name)
        except ClientError as e:
            if _is_not_found(e):
                raise TranscriptionError(
                    ErrorKind.JOB_NOT_FOUND, detail=job_name, cause=e
                ) from e
            raise TranscriptionError(ErrorKind.JOB_MONITORING_FAILED, cause=e) from e
        except BotoCoreError as e:
            raise TranscriptionError(ErrorKind.JOB_MONITORING_FAILED, cause=e) from e

        job = response.get("TranscriptionJob")
        if not job:
            raise TranscriptionError(ErrorKind.JOB_NOT_FOUND, detail=job_name)

        return RemoteJob(
            job_name=job.get("TranscriptionJobName", job_name),
            status=job.get("TranscriptionJobStatus"),
            failure_reason=job.get("FailureReason"),
            result_uri=(job.get("Transcript") or {}).get("TranscriptFileUri"),
        )


def _is_not_found(error: ClientError) -> bool:
    details = error.response.get("Error", {})
    if details.get("Code") == "NotFoundException":
        return True
    # Transcribe reports unknown job names as a BadRequestException.
    return details.get("Code") == "BadRequestException" and "couldn't be found" in (
        details.get("Message") or ""
    )
