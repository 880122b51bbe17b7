"""Transcript exporters: plain text, SubRip, WebVTT and JSON."""

import json
import logging
from dataclasses import dataclass
from typing import Callable

from voicescribe.models import Transcript, TranscriptSegment

logger = logging.getLogger(__name__)

DEFAULT_DURATION = 60.0


@dataclass(frozen=True)
class ExportResult:
    content: str
    content_type: str
    extension: str


def _format_timestamp(seconds: float, separator: str) -> str:
    ms_total = max(0, int(round(seconds * 1000)))
    h = ms_total // 3_600_000
    remainder = ms_total % 3_600_000
    m = remainder // 60_000
    remainder %= 60_000
    s = remainder // 1000
    ms = remainder % 1000
    return f"{h:02d}:{m:02d}:{s:02d}{separator}{ms:03d}"


def format_srt_time(seconds: float) -> str:
    return _format_timestamp(seconds, ",")


def format_vtt_time(seconds: float) -> str:
    return _format_timestamp(seconds, ".")


def synthesize_segments(text: str, duration: float = DEFAULT_DURATION) -> list[TranscriptSegment]:
    """Spread the non-blank lines of *text* evenly over *duration* seconds.

    Lines keep their original (untrimmed) content. Text with no non-blank
    lines yields an empty list.
    """
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        return []

    step = duration / len(lines)
    return [
        TranscriptSegment(id=i + 1, start=i * step, end=(i + 1) * step, text=line)
        for i, line in enumerate(lines)
    ]


def _cue_blocks(segments: list[TranscriptSegment], fmt_time: Callable[[float], str]) -> str:
    # Numbered by list position, not by segment id
    blocks = [
        f"{i}\n{fmt_time(seg.start)} --> {fmt_time(seg.end)}\n{seg.text}\n"
        for i, seg in enumerate(segments, 1)
    ]
    return "\n".join(blocks)


def format_text(transcript: Transcript) -> str:
    return transcript.text


def format_srt(segments: list[TranscriptSegment]) -> str:
    return _cue_blocks(segments, format_srt_time)


def format_vtt(segments: list[TranscriptSegment]) -> str:
    return "WEBVTT\n\n" + _cue_blocks(segments, format_vtt_time)


def format_json(segments: list[TranscriptSegment]) -> str:
    return json.dumps([seg.to_dict() for seg in segments], indent=2, ensure_ascii=False)


_SEGMENT_FORMATS: dict[str, tuple[Callable[[list[TranscriptSegment]], str], str, str]] = {
    "srt": (format_srt, "application/x-subrip", "srt"),
    "vtt": (format_vtt, "text/vtt", "vtt"),
    "json": (format_json, "application/json", "json"),
}

SUPPORTED_FORMATS = ("text", *_SEGMENT_FORMATS)


def resolve_format(fmt: str | None) -> str:
    """Normalize a format selector; anything unrecognized resolves to "text"."""
    kind = (fmt or "text").strip().lower()
    if kind not in SUPPORTED_FORMATS:
        logger.warning("Unknown export format %r, falling back to plain text", fmt)
        return "text"
    return kind


def transcript_segments(transcript: Transcript) -> list[TranscriptSegment]:
    """Return the transcript's own segments, or synthesize them from its text."""
    if transcript.segments:
        return transcript.segments
    duration = transcript.duration if transcript.duration is not None else DEFAULT_DURATION
    return synthesize_segments(transcript.text, duration)


def export_transcript(transcript: Transcript, fmt: str | None = "text") -> ExportResult:
    """Render *transcript* in the requested format.

    Returns the body together with the MIME type and file extension to
    deliver it with.
    """
    kind = resolve_format(fmt)
    if kind == "text":
        return ExportResult(format_text(transcript), "text/plain", "txt")

    formatter, content_type, extension = _SEGMENT_FORMATS[kind]
    return ExportResult(formatter(transcript_segments(transcript)), content_type, extension)


def export_filename(transcript_id: str, extension: str) -> str:
    return f"transcription-{transcript_id}.{extension}"
