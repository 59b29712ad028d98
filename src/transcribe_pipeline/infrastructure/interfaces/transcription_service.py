"""Abstract interface for transcription engines."""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from transcribe_pipeline.domain import AudioSource, CancellationToken
from transcribe_pipeline.domain.events import PipelineEvent


class TranscriptionService(ABC):
    """Abstract base class for audio transcription backends."""

    @abstractmethod
    def transcribe(
        self,
        source: AudioSource,
        language_hint: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Iterator[PipelineEvent]:
        """
        Transcribes an audio file, reporting progress as it goes.

        The returned iterator is lazy: no work starts until the first event is
        requested. It yields any number of ``ProgressEvent`` values followed by
        exactly one terminal ``SuccessEvent``, ``ErrorEvent`` or
        ``CancelledEvent``. It is single use.

        Args:
            source: The audio file to transcribe.
            language_hint: Language code overriding the configured default.
            cancellation: Token scoped to this run. A fresh token is used
                when omitted.
        """

    @abstractmethod
    def supported_languages(self) -> list[str]:
        """Returns the language codes this engine accepts."""

    def is_supported(self) -> bool:
        return True
