"""Transcription backend interface."""

from pathlib import Path
from typing import Protocol

from voicescribe.models import TranscriptResult


class UnsupportedBackendError(ValueError):
    """Raised when settings name a backend that does not exist."""
    pass


class TranscriptionBackend(Protocol):
    def transcribe(
        self,
        audio_path: Path,
        language: str | None = None,
        model: str | None = None,
    ) -> TranscriptResult:
        """Transcribe audio and return text with optional timed segments."""
