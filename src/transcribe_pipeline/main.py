"""
Audio Transcriber Service.

Entry point for the audio transcription service.
"""

import signal

from ddtrace import patch_all

from transcribe_pipeline.dependencies import get_worker

patch_all()


def main():
    """Starts the worker and stops it cleanly on SIGTERM."""
    worker = get_worker()
    signal.signal(signal.SIGTERM, lambda signum, frame: worker.stop())
    worker.start()


if __name__ == "__main__":
    main()
