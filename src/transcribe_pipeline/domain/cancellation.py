"""Cooperative cancellation scoped to a single transcription run."""

import threading

from transcribe_pipeline.exceptions import ErrorKind, TranscriptionError


class CancellationToken:
    """
    Flag checked by a run at every stage boundary and inside the poll loop.

    Cancelling never interrupts a network call already in flight; the run
    notices the flag at its next check. Waiting on the token doubles as the
    poll-loop sleep so a cancelled run wakes up immediately.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float) -> bool:
        """Sleeps up to ``timeout`` seconds; returns True if cancelled."""
        if timeout <= 0:
            return self._event.is_set()
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise TranscriptionError(ErrorKind.CANCELLED)
