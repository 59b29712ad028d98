"""Message handler exports."""

from .audio_message_handler import AudioMessageHandler

__all__ = ["AudioMessageHandler"]
