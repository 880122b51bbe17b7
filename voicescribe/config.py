"""Application settings: JSON file plus environment overrides."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_ALLOWED_TYPES = [
    "audio/mp3",
    "audio/mpeg",
    "audio/wav",
    "audio/webm",
    "audio/ogg",
    "video/mp4",
]


@dataclass
class AudioConfig:
    """Limits applied to uploaded audio."""

    max_upload_size_mb: int = 50
    allowed_file_types: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_TYPES))
    sample_rate: int = 16000

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    def accepts(self, content_type: str | None) -> bool:
        if not content_type:
            return False
        return content_type in self.allowed_file_types or content_type.startswith("audio/")


@dataclass
class TranscriptionConfig:
    """Which backend transcribes uploads, and with what defaults."""

    backend: str = "mock"
    model: str = "base"
    language: str = "en"
    mock_delay: float = 1.5


@dataclass
class Settings:
    """Top-level application settings."""

    storage_dir: Path = field(default_factory=lambda: Path("storage"))
    max_cached_files: int = 256
    max_transcripts: int = 1000
    log_level: str = "INFO"
    audio: AudioConfig = field(default_factory=AudioConfig)
    transcription: TranscriptionConfig = field(default_factory=TranscriptionConfig)


def _apply_env(settings: Settings, env: dict[str, str]) -> Settings:
    if "VOICESCRIBE_MAX_UPLOAD_SIZE_MB" in env:
        settings.audio.max_upload_size_mb = int(env["VOICESCRIBE_MAX_UPLOAD_SIZE_MB"])
    if "VOICESCRIBE_ALLOWED_FILE_TYPES" in env:
        settings.audio.allowed_file_types = [
            t.strip() for t in env["VOICESCRIBE_ALLOWED_FILE_TYPES"].split(",") if t.strip()
        ]
    if "VOICESCRIBE_BACKEND" in env:
        settings.transcription.backend = env["VOICESCRIBE_BACKEND"]
    if "VOICESCRIBE_STORAGE_DIR" in env:
        settings.storage_dir = Path(env["VOICESCRIBE_STORAGE_DIR"])
    if "VOICESCRIBE_LOG_LEVEL" in env:
        settings.log_level = env["VOICESCRIBE_LOG_LEVEL"].upper()
    return settings


def load_settings(path: str | Path | None = None, env: dict[str, str] | None = None) -> Settings:
    """Load settings from an optional JSON file, then apply environment overrides."""
    env = dict(os.environ) if env is None else env

    if path is None:
        return _apply_env(Settings(), env)

    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("Settings file must contain a JSON object")

    audio = AudioConfig(**data["audio"]) if "audio" in data else AudioConfig()
    transcription = (
        TranscriptionConfig(**data["transcription"]) if "transcription" in data else TranscriptionConfig()
    )

    settings = Settings(
        storage_dir=Path(data.get("storage_dir", "storage")),
        max_cached_files=int(data.get("max_cached_files", 256)),
        max_transcripts=int(data.get("max_transcripts", 1000)),
        log_level=str(data.get("log_level", "INFO")).upper(),
        audio=audio,
        transcription=transcription,
    )
    return _apply_env(settings, env)
