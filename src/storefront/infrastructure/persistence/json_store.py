"""Shared JSON-file plumbing for the repositories.

Each data file has a sibling ``<name>.lock`` file.  Every read, write
and read-check-write transaction holds that lock, so checkouts running
in separate CLI processes are serialized just like threads in one
process.  Writes go to a temporary file that then replaces the data
file, so a reader never sees half-written JSON.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout

from storefront.domain.exceptions import StorageError

LOCK_TIMEOUT = 30  # seconds

_locks: dict[Path, tuple[threading.RLock, FileLock]] = {}
_locks_guard = threading.Lock()


def _locks_for(path: Path) -> tuple[threading.RLock, FileLock]:
    key = path.resolve()
    with _locks_guard:
        if key not in _locks:
            lock_path = key.with_name(key.name + ".lock")
            _locks[key] = (threading.RLock(), FileLock(str(lock_path), timeout=LOCK_TIMEOUT))
        return _locks[key]


class JsonFile:

    def __init__(self, file_path: Path, empty: Any) -> None:
        self._file_path = file_path
        self._empty = empty
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._thread_lock, self._file_lock = _locks_for(file_path)
        self._ensure_file()

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold this file's lock against other threads and processes."""
        with self._thread_lock:
            try:
                self._file_lock.acquire()
            except Timeout as exc:
                raise StorageError(
                    f"Timed out waiting for the lock on {self._file_path.name}"
                ) from exc
            try:
                yield
            finally:
                self._file_lock.release()

    def load(self) -> Any:
        with self.locked():
            text = self._file_path.read_text(encoding="utf-8")
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageError(f"Data file {self._file_path} is not valid JSON") from exc

    def persist(self, data: Any) -> None:
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
        with self.locked():
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self._file_path.parent,
                prefix=self._file_path.name + ".", suffix=".tmp", delete=False,
            ) as tmp:
                tmp.write(text)
            try:
                os.replace(tmp.name, self._file_path)
            except OSError:
                os.unlink(tmp.name)
                raise

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        """Yield the loaded data; write it back if the block completes."""
        with self.locked():
            data = self.load()
            yield data
            self.persist(data)

    def _ensure_file(self) -> None:
        with self.locked():
            if not self._file_path.exists():
                self.persist(self._empty)


def dump_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def load_datetime(raw: str | None) -> datetime | None:
    return datetime.fromisoformat(raw) if raw else None
