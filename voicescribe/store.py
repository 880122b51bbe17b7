"""In-memory transcript store."""

from dataclasses import replace
from datetime import datetime, timezone

from voicescribe.models import Transcript
from voicescribe.storage import BoundedCache


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TranscriptStore:
    """Keeps the most recent transcripts; older ones are evicted first."""

    def __init__(self, max_entries: int = 1000) -> None:
        self._items: BoundedCache[str, Transcript] = BoundedCache(max_entries)

    def add(self, transcript: Transcript) -> Transcript:
        self._items.put(transcript.id, transcript)
        return transcript

    def get(self, transcript_id: str) -> Transcript | None:
        return self._items.get(transcript_id)

    def update_text(self, transcript_id: str, text: str) -> Transcript | None:
        """Replace a transcript's text.

        The old segments no longer match the edited text, so they are dropped
        and timed exports fall back to synthesized segments.
        """
        transcript = self._items.get(transcript_id)
        if transcript is None:
            return None
        updated = replace(transcript, text=text, segments=[], updated_at=utc_now())
        self._items.put(transcript_id, updated)
        return updated

    def __len__(self) -> int:
        return len(self._items)
