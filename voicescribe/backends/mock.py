"""Canned-sample backend for development and tests."""

import logging
import random
import time
from pathlib import Path

from voicescribe.models import TranscriptResult, TranscriptSegment

logger = logging.getLogger(__name__)

DEFAULT_SAMPLES: list[TranscriptResult] = [
    TranscriptResult(
        text=(
            "This is a simulated transcription. In a real application, this would be "
            "the actual transcribed text from the audio recording or file."
        ),
        confidence=0.95,
        language="en",
        duration=7.2,
        segments=[
            TranscriptSegment(id=1, start=0.0, end=2.5, text="This is a simulated transcription."),
            TranscriptSegment(
                id=2,
                start=2.6,
                end=7.2,
                text="In a real application, this would be the actual transcribed text from the audio recording or file.",
            ),
        ],
    ),
    TranscriptResult(
        text=(
            "Welcome to the weekly team meeting.\n"
            "Let's start with a quick round of updates.\n"
            "Then we will review the open action items."
        ),
        confidence=0.91,
        language="en",
        duration=12.0,
    ),
    TranscriptResult(
        text="Testing, one, two, three.\nThe microphone appears to be working.",
        confidence=0.88,
        language="en",
        duration=4.0,
    ),
]


class MockBackend:
    """Returns a randomly chosen sample after a simulated processing delay."""

    def __init__(
        self,
        samples: list[TranscriptResult] | None = None,
        delay: float = 1.5,
        rng: random.Random | None = None,
    ) -> None:
        self.samples = samples if samples is not None else DEFAULT_SAMPLES
        if not self.samples:
            raise ValueError("MockBackend needs at least one sample")
        self.delay = delay
        self.rng = rng or random.Random()

    def transcribe(
        self,
        audio_path: Path,
        language: str | None = None,
        model: str | None = None,
    ) -> TranscriptResult:
        logger.debug("Mock transcription of %s (delay %.1fs)", audio_path, self.delay)
        if self.delay > 0:
            time.sleep(self.delay)

        sample = self.rng.choice(self.samples)
        return TranscriptResult(
            text=sample.text,
            confidence=sample.confidence,
            language=sample.language or language,
            duration=sample.duration,
            segments=list(sample.segments),
        )
