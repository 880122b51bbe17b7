"""Audio file storage: a directory on disk fronted by a bounded LRU index."""

import logging
import re
import threading
from collections import OrderedDict
from pathlib import Path
from typing import Generic, TypeVar

from voicescribe.models import StoredFile

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class BoundedCache(Generic[K, V]):
    """Thread-safe least-recently-used map holding at most ``max_entries`` items."""

    def __init__(self, max_entries: int) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self._data: OrderedDict[K, V] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: K) -> V | None:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def put(self, key: K, value: V) -> None:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            while len(self._data) > self.max_entries:
                evicted, _ = self._data.popitem(last=False)
                logger.debug("Evicted %r from cache", evicted)

    def pop(self, key: K) -> V | None:
        with self._lock:
            return self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


_FILE_ID = re.compile(r"[A-Za-z0-9_-]+")


def _check_file_id(file_id: str) -> None:
    if not _FILE_ID.fullmatch(file_id or ""):
        raise ValueError(f"Invalid file id: {file_id!r}")


def extension_for(content_type: str | None) -> str:
    """Derive a file extension from a MIME type ("audio/wav" -> "wav")."""
    if not content_type or "/" not in content_type:
        return "webm"
    subtype = content_type.split("/", 1)[1].split(";", 1)[0].strip()
    return subtype if _FILE_ID.fullmatch(subtype) else "webm"


class AudioStorage:
    """Stores uploaded audio as ``<root>/<file_id>.<ext>``.

    Metadata for recently used files is cached in memory; a miss falls back to
    scanning the directory, so files written by an earlier process are still
    found.
    """

    def __init__(self, root: Path, max_entries: int = 256) -> None:
        self.root = Path(root)
        self._index: BoundedCache[str, StoredFile] = BoundedCache(max_entries)

    def _ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def _scan(self, file_id: str) -> StoredFile | None:
        if not self.root.is_dir():
            return None
        for path in sorted(self.root.glob(f"{file_id}.*")):
            ext = path.suffix.lstrip(".")
            return StoredFile(
                file_id=file_id,
                path=path,
                content_type=f"audio/{ext}",
                extension=ext,
            )
        return None

    def _lookup(self, file_id: str) -> StoredFile | None:
        _check_file_id(file_id)
        info = self._index.get(file_id)
        if info is None:
            info = self._scan(file_id)
            if info is not None:
                self._index.put(file_id, info)
        return info

    def save(self, data: bytes, file_id: str, content_type: str | None) -> str:
        """Write *data* to disk and return the URL it can be fetched from."""
        _check_file_id(file_id)
        self._ensure_root()

        ext = extension_for(content_type)
        path = self.root / f"{file_id}.{ext}"
        path.write_bytes(data)

        self._index.put(
            file_id,
            StoredFile(
                file_id=file_id,
                path=path,
                content_type=content_type or f"audio/{ext}",
                extension=ext,
            ),
        )
        logger.debug("Saved %d bytes to %s", len(data), path)
        return f"/api/storage?id={file_id}"

    def path_for(self, file_id: str) -> Path | None:
        info = self._lookup(file_id)
        return info.path if info else None

    def get(self, file_id: str) -> tuple[StoredFile, bytes] | None:
        info = self._lookup(file_id)
        if info is None:
            return None
        try:
            return info, info.path.read_bytes()
        except FileNotFoundError:
            self._index.pop(file_id)
            return None

    def delete(self, file_id: str) -> bool:
        info = self._lookup(file_id)
        if info is None:
            return False
        self._index.pop(file_id)
        try:
            info.path.unlink()
        except FileNotFoundError:
            return False
        logger.debug("Deleted %s", info.path)
        return True
