"""Speech-to-text backend using OpenAI Whisper."""

import logging
import tempfile
import threading
from pathlib import Path

from voicescribe import ffutil
from voicescribe.models import TranscriptResult, TranscriptSegment

logger = logging.getLogger(__name__)


class WhisperBackend:
    def __init__(self, model: str = "base", sample_rate: int = 16000) -> None:
        self.model = model
        self.sample_rate = sample_rate
        self._models: dict[str, object] = {}
        self._lock = threading.Lock()

    def _load(self, name: str):
        import whisper

        with self._lock:
            if name not in self._models:
                logger.info("Loading Whisper %s model", name)
                self._models[name] = whisper.load_model(name)
            return self._models[name]

    def transcribe(
        self,
        audio_path: Path,
        language: str | None = None,
        model: str | None = None,
    ) -> TranscriptResult:
        """Extract audio, run Whisper, and return timed transcript segments."""
        ffutil.check_ffmpeg()
        duration = ffutil.probe(audio_path).duration

        with tempfile.TemporaryDirectory() as tmpdir:
            wav_path = Path(tmpdir) / "audio.wav"
            ffutil.extract_audio(audio_path, wav_path, sample_rate=self.sample_rate)

            result = self._load(model or self.model).transcribe(
                str(wav_path),
                language=language,
            )

        segments: list[TranscriptSegment] = []
        for i, seg in enumerate(result["segments"]):
            segments.append(
                TranscriptSegment(
                    id=i + 1,
                    start=seg["start"],
                    end=seg["end"],
                    text=seg["text"].strip(),
                )
            )

        return TranscriptResult(
            text=result["text"].strip(),
            # Whisper reports no overall confidence
            confidence=0.9,
            language=result.get("language") or language,
            duration=duration,
            segments=segments,
        )
