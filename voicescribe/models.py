"""Shared data types used across VoiceScribe."""

import math
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class TranscriptSegment:
    """A timed span of transcript text, offsets in seconds."""

    id: int
    start: float
    end: float
    text: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class TranscriptResult:
    """What a transcription backend hands back for one audio file."""

    text: str
    confidence: float = 0.85
    language: str | None = None
    duration: float | None = None
    segments: list[TranscriptSegment] = field(default_factory=list)


@dataclass
class Transcript:
    """A stored transcript record, the input to every export."""

    id: str
    text: str
    segments: list[TranscriptSegment] = field(default_factory=list)
    duration: float | None = None
    audio_url: str | None = None
    confidence: float | None = None
    language: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["audioUrl"] = data.pop("audio_url")
        data["createdAt"] = data.pop("created_at")
        data["updatedAt"] = data.pop("updated_at")
        if data["updatedAt"] is None:
            del data["updatedAt"]
        if not data["segments"]:
            del data["segments"]
        return data


@dataclass
class StoredFile:
    """Metadata for an audio file kept by AudioStorage."""

    file_id: str
    path: Path
    content_type: str
    extension: str


def _number(value: Any, name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Segment {name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Segment {name} must be finite, got {value!r}")
    return number


def segment_from_dict(data: dict[str, Any]) -> TranscriptSegment:
    """Build a TranscriptSegment from a JSON mapping, validating its timing."""
    if not isinstance(data, dict):
        raise ValueError(f"Segment must be a JSON object, got {data!r}")
    missing = [k for k in ("id", "start", "end", "text") if k not in data]
    if missing:
        raise ValueError(f"Segment is missing fields: {', '.join(missing)}")

    if isinstance(data["id"], bool) or not isinstance(data["id"], int):
        raise ValueError(f"Segment id must be an integer, got {data['id']!r}")
    if not isinstance(data["text"], str):
        raise ValueError(f"Segment {data['id']} text must be a string")

    seg = TranscriptSegment(
        id=data["id"],
        start=_number(data["start"], "start"),
        end=_number(data["end"], "end"),
        text=data["text"],
    )
    if seg.id < 1:
        raise ValueError(f"Segment id must be positive, got {seg.id}")
    if seg.start < 0:
        raise ValueError(f"Segment {seg.id} starts before 0: {seg.start}")
    if seg.end < seg.start:
        raise ValueError(f"Segment {seg.id} ends before it starts: {seg.start} > {seg.end}")
    return seg


def transcript_from_dict(data: dict[str, Any]) -> Transcript:
    """Load a Transcript from a JSON mapping (camelCase or snake_case keys)."""
    if not isinstance(data, dict):
        raise ValueError("Transcript must be a JSON object")
    if "text" not in data:
        raise ValueError("Transcript must contain a 'text' field")
    if not isinstance(data["text"], str):
        raise ValueError("Transcript 'text' must be a string")

    raw_segments = data.get("segments") or []
    if not isinstance(raw_segments, list):
        raise ValueError("Transcript 'segments' must be a list")
    segments = [segment_from_dict(s) for s in raw_segments]

    duration = data.get("duration")
    if duration is not None:
        try:
            duration = float(duration)
        except (TypeError, ValueError):
            raise ValueError(f"Transcript duration must be a number, got {duration!r}") from None

    return Transcript(
        id=str(data.get("id", "")),
        text=data["text"],
        segments=segments,
        duration=duration,
        audio_url=data.get("audioUrl", data.get("audio_url")),
        confidence=data.get("confidence"),
        language=data.get("language"),
        created_at=data.get("createdAt", data.get("created_at")),
        updated_at=data.get("updatedAt", data.get("updated_at")),
    )
