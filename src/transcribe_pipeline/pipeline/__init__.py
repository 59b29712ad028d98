"""Remote transcription pipeline stages."""

from .job_poller import JobPoller
from .job_submitter import JobSubmitter
from .orchestrator import AWSTranscribePipeline
from .result_fetcher import ResultFetcher, resolve_result_key
from .staging import AudioStager

__all__ = [
    "AWSTranscribePipeline",
    "AudioStager",
    "JobPoller",
    "JobSubmitter",
    "ResultFetcher",
    "resolve_result_key",
]
