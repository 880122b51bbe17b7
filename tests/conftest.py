"""Shared test fixtures."""

import random
from pathlib import Path

import pytest

from voicescribe.backends.mock import MockBackend
from voicescribe.config import Settings
from voicescribe.models import Transcript, TranscriptResult, TranscriptSegment

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_settings_path() -> Path:
    return FIXTURES_DIR / "sample_settings.json"


@pytest.fixture
def sample_transcript_path() -> Path:
    return FIXTURES_DIR / "sample_transcript.json"


@pytest.fixture
def segments() -> list[TranscriptSegment]:
    return [
        TranscriptSegment(id=1, start=0, end=3.2, text="This is a sample transcription."),
        TranscriptSegment(id=2, start=3.5, end=8.1, text="In a real application, this would be fetched from a database"),
        TranscriptSegment(id=3, start=8.4, end=10.9, text="based on the transcription ID."),
    ]


@pytest.fixture
def transcript(segments) -> Transcript:
    return Transcript(
        id="abc123",
        text=" ".join(s.text for s in segments),
        segments=segments,
        duration=65.4,
    )


@pytest.fixture
def settings(tmp_path) -> Settings:
    s = Settings(storage_dir=tmp_path / "storage")
    s.transcription.mock_delay = 0.0
    return s


@pytest.fixture
def mock_backend() -> MockBackend:
    sample = TranscriptResult(
        text="Hello there.\nGeneral Kenobi.",
        confidence=0.9,
        language="en",
        duration=4.0,
        segments=[
            TranscriptSegment(id=1, start=0.0, end=1.5, text="Hello there."),
            TranscriptSegment(id=2, start=1.5, end=4.0, text="General Kenobi."),
        ],
    )
    return MockBackend(samples=[sample], delay=0.0, rng=random.Random(0))
