"""FFmpeg/ffprobe subprocess helpers."""

import json
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path


class FFmpegNotFoundError(RuntimeError):
    pass


class NoAudioStreamError(ValueError):
    """Raised when the input file has no audio stream."""
    pass


@dataclass
class AudioProbe:
    """Metadata extracted from an audio file via ffprobe.

    ``duration`` is None when neither the container nor the stream reports one.
    """

    duration: float | None
    sample_rate: int
    codec: str
    channels: int


def check_ffmpeg() -> None:
    """Raise FFmpegNotFoundError if ffmpeg/ffprobe are not on PATH."""
    for cmd in ("ffmpeg", "ffprobe"):
        if shutil.which(cmd) is None:
            raise FFmpegNotFoundError(f"{cmd} not found on PATH")


def probe(input_path: Path) -> AudioProbe:
    """Extract audio metadata via ffprobe."""
    cmd = [
        "ffprobe",
        "-v", "quiet",
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        str(input_path),
    ]
    result = subprocess.run(cmd, capture_output=True, text=True, check=True)
    data = json.loads(result.stdout)

    audio_stream = next(
        (s for s in data.get("streams", []) if s["codec_type"] == "audio"), None
    )
    if audio_stream is None:
        raise NoAudioStreamError(f"No audio stream found in {input_path}")

    # Browser recordings (webm/opus) often omit format.duration
    duration = data.get("format", {}).get("duration", audio_stream.get("duration"))

    return AudioProbe(
        duration=float(duration) if duration not in (None, "N/A") else None,
        sample_rate=int(audio_stream.get("sample_rate", 0)),
        codec=audio_stream.get("codec_name", "unknown"),
        channels=int(audio_stream.get("channels", 1)),
    )


def extract_audio(
    input_path: Path, output_path: Path, sample_rate: int = 16000
) -> Path:
    """Extract audio as mono WAV at the given sample rate (for Whisper)."""
    cmd = [
        "ffmpeg", "-y",
        "-i", str(input_path),
        "-vn",
        "-acodec", "pcm_s16le",
        "-ar", str(sample_rate),
        "-ac", "1",
        str(output_path),
    ]
    subprocess.run(cmd, capture_output=True, check=True)
    return output_path
