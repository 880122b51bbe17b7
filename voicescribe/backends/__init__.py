"""Transcription backend selection."""

from voicescribe.backends.base import TranscriptionBackend, UnsupportedBackendError
from voicescribe.config import Settings


def get_backend(name: str, settings: Settings | None = None) -> TranscriptionBackend:
    settings = settings or Settings()
    cfg = settings.transcription

    if name == "mock":
        from voicescribe.backends.mock import MockBackend
        return MockBackend(delay=cfg.mock_delay)
    if name == "whisper":
        from voicescribe.backends.whisper import WhisperBackend
        return WhisperBackend(model=cfg.model, sample_rate=settings.audio.sample_rate)

    raise UnsupportedBackendError(f"Unsupported speech service: {name}")
