"""Tests for the bounded cache, audio storage and transcript store."""

import pytest

from voicescribe.models import Transcript, TranscriptSegment
from voicescribe.storage import AudioStorage, BoundedCache, extension_for
from voicescribe.store import TranscriptStore


class TestBoundedCache:
    def test_put_get(self):
        c = BoundedCache(2)
        c.put("a", 1)
        assert c.get("a") == 1
        assert c.get("missing") is None
        assert "a" in c
        assert len(c) == 1

    def test_evicts_least_recently_used(self):
        c = BoundedCache(2)
        c.put("a", 1)
        c.put("b", 2)
        c.get("a")
        c.put("c", 3)
        assert "b" not in c
        assert "a" in c and "c" in c
        assert len(c) == 2

    def test_put_existing_refreshes(self):
        c = BoundedCache(2)
        c.put("a", 1)
        c.put("b", 2)
        c.put("a", 10)
        c.put("c", 3)
        assert c.get("a") == 10
        assert "b" not in c

    def test_pop(self):
        c = BoundedCache(1)
        c.put("a", 1)
        assert c.pop("a") == 1
        assert c.pop("a") is None

    def test_invalid_capacity(self):
        with pytest.raises(ValueError, match="at least 1"):
            BoundedCache(0)


class TestExtensionFor:
    @pytest.mark.parametrize(
        "content_type,ext",
        [
            ("audio/wav", "wav"),
            ("audio/webm;codecs=opus", "webm"),
            ("video/mp4", "mp4"),
            (None, "webm"),
            ("garbage", "webm"),
            ("audio/../../etc", "webm"),
        ],
    )
    def test_mapping(self, content_type, ext):
        assert extension_for(content_type) == ext


class TestAudioStorage:
    def test_save_and_get(self, tmp_path):
        storage = AudioStorage(tmp_path / "files")
        url = storage.save(b"RIFF", "f1", "audio/wav")

        assert url == "/api/storage?id=f1"
        assert (tmp_path / "files" / "f1.wav").read_bytes() == b"RIFF"
        info, data = storage.get("f1")
        assert data == b"RIFF"
        assert info.content_type == "audio/wav"
        assert info.extension == "wav"

    def test_get_missing(self, tmp_path):
        assert AudioStorage(tmp_path).get("nope") is None

    def test_get_missing_root(self, tmp_path):
        assert AudioStorage(tmp_path / "absent").get("nope") is None

    def test_directory_scan_fallback(self, tmp_path):
        AudioStorage(tmp_path).save(b"OGG", "f2", "audio/ogg")

        fresh = AudioStorage(tmp_path)
        info, data = fresh.get("f2")
        assert data == b"OGG"
        assert info.content_type == "audio/ogg"
        assert fresh.path_for("f2") == tmp_path / "f2.ogg"

    def test_evicted_entry_still_found_on_disk(self, tmp_path):
        storage = AudioStorage(tmp_path, max_entries=1)
        storage.save(b"one", "a", "audio/wav")
        storage.save(b"two", "b", "audio/wav")
        assert storage.get("a")[1] == b"one"

    def test_delete(self, tmp_path):
        storage = AudioStorage(tmp_path)
        storage.save(b"x", "f3", "audio/webm")
        assert storage.delete("f3") is True
        assert not (tmp_path / "f3.webm").exists()
        assert storage.delete("f3") is False
        assert storage.get("f3") is None

    def test_file_removed_behind_cache(self, tmp_path):
        storage = AudioStorage(tmp_path)
        storage.save(b"x", "f4", "audio/wav")
        (tmp_path / "f4.wav").unlink()
        assert storage.get("f4") is None

    @pytest.mark.parametrize("bad_id", ["", "../etc", "a/b", "a\\b"])
    def test_rejects_bad_ids(self, tmp_path, bad_id):
        storage = AudioStorage(tmp_path)
        with pytest.raises(ValueError, match="Invalid file id"):
            storage.get(bad_id)
        with pytest.raises(ValueError, match="Invalid file id"):
            storage.save(b"x", bad_id, "audio/wav")


class TestTranscriptStore:
    def test_add_get(self, transcript):
        store = TranscriptStore()
        store.add(transcript)
        assert store.get("abc123") is transcript
        assert store.get("other") is None
        assert len(store) == 1

    def test_update_text_clears_segments(self, transcript):
        store = TranscriptStore()
        store.add(transcript)
        updated = store.update_text("abc123", "new\ntext")

        assert updated.text == "new\ntext"
        assert updated.segments == []
        assert updated.updated_at is not None
        assert store.get("abc123") == updated
        assert transcript.segments, "original record must not be mutated"

    def test_update_missing(self):
        assert TranscriptStore().update_text("nope", "x") is None

    def test_bounded(self):
        store = TranscriptStore(max_entries=2)
        for i in range(3):
            store.add(Transcript(id=str(i), text="t", segments=[TranscriptSegment(1, 0, 1, "t")]))
        assert store.get("0") is None
        assert len(store) == 2
