"""Orchestrator: upload, transcription, edits and export of transcripts."""

import logging
import uuid
from dataclasses import dataclass

from voicescribe.backends.base import TranscriptionBackend
from voicescribe.config import Settings
from voicescribe.exporters import ExportResult, export_filename, export_transcript
from voicescribe.models import Transcript
from voicescribe.storage import AudioStorage
from voicescribe.store import TranscriptStore, utc_now

logger = logging.getLogger(__name__)


class UploadRejectedError(ValueError):
    """Raised when an upload fails the size or type checks."""
    pass


class TranscriptNotFoundError(LookupError):
    pass


@dataclass
class Services:
    """The collaborators a request needs, bundled for the web layer."""

    settings: Settings
    backend: TranscriptionBackend
    storage: AudioStorage
    store: TranscriptStore


def validate_upload(data: bytes, content_type: str | None, settings: Settings) -> None:
    audio = settings.audio
    if len(data) > audio.max_upload_bytes:
        raise UploadRejectedError(f"File size exceeds limit ({audio.max_upload_size_mb}MB)")
    if not audio.accepts(content_type):
        raise UploadRejectedError("Invalid file type. Please upload an audio file")


def transcribe_audio(
    data: bytes,
    filename: str,
    content_type: str | None,
    services: Services,
    language: str | None = None,
    model: str | None = None,
) -> Transcript:
    """Store an uploaded recording, transcribe it and keep the result.

    Args:
        data: Raw audio bytes as uploaded.
        filename: Client-side filename, used for logging only.
        content_type: MIME type reported by the client.
        services: Backend, storage and transcript store to use.
        language: Language hint; defaults to the configured language.
        model: Model name; defaults to the configured model.
    """
    validate_upload(data, content_type, services.settings)

    cfg = services.settings.transcription
    transcript_id = str(uuid.uuid4())
    logger.info("Starting transcription %s (%s, %d bytes)", transcript_id, filename, len(data))

    audio_url = services.storage.save(data, transcript_id, content_type)
    audio_path = services.storage.path_for(transcript_id)

    try:
        result = services.backend.transcribe(
            audio_path,
            language=language or cfg.language,
            model=model or cfg.model,
        )
    except Exception:
        logger.exception("Transcription %s failed, removing stored audio", transcript_id)
        services.storage.delete(transcript_id)
        raise

    transcript = Transcript(
        id=transcript_id,
        text=result.text,
        segments=list(result.segments),
        duration=result.duration,
        audio_url=audio_url,
        confidence=result.confidence,
        language=result.language or language or cfg.language,
        created_at=utc_now(),
    )
    services.store.add(transcript)

    logger.info("Transcription %s completed (%d segments)", transcript_id, len(transcript.segments))
    return transcript


def get_transcript(store: TranscriptStore, transcript_id: str) -> Transcript:
    transcript = store.get(transcript_id)
    if transcript is None:
        raise TranscriptNotFoundError(f"Transcription {transcript_id} not found")
    return transcript


def update_transcript(store: TranscriptStore, transcript_id: str, text: object) -> Transcript:
    if text is not None and not isinstance(text, str):
        raise ValueError("Transcript text must be a string")
    if not text:
        raise ValueError("No text provided for update")
    transcript = store.update_text(transcript_id, text)
    if transcript is None:
        raise TranscriptNotFoundError(f"Transcription {transcript_id} not found")
    logger.info("Transcription %s updated", transcript_id)
    return transcript


def export(store: TranscriptStore, transcript_id: str, fmt: str | None) -> tuple[ExportResult, str]:
    """Render a stored transcript and name the download file."""
    transcript = get_transcript(store, transcript_id)
    logger.info("Exporting transcription %s as %s", transcript_id, fmt)
    result = export_transcript(transcript, fmt)
    return result, export_filename(transcript_id, result.extension)
