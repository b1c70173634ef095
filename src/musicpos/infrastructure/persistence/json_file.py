"""Shared file handling for the JSON-backed repositories.

Every file holds a JSON list of records. Read-modify-write cycles on one
file are serialized by a lock file next to it (``<name>.lock``), which
holds across threads and processes alike. Writes go to a temporary file
that then replaces the previous one, so readers always see either the
old or the new content and never need the lock.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from musicpos.domain.exceptions import StorageError

logger = logging.getLogger(__name__)

LOCK_TIMEOUT_SECONDS = 30


class LockFile:
    """Reentrant lock backed by a file, shared by threads and processes.

    Re-entering from the thread that already holds it does not block.
    """

    def __init__(self, path: Path, timeout: float = LOCK_TIMEOUT_SECONDS) -> None:
        self._lock = FileLock(str(path), timeout=timeout)

    def __enter__(self) -> LockFile:
        try:
            self._lock.acquire()
        except Timeout as exc:
            raise StorageError(f"Timed out waiting for {self._lock.lock_file}") from exc
        except OSError as exc:
            raise StorageError(f"Cannot lock {self._lock.lock_file}: {exc}") from exc
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._lock.release()


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = LockFile(self._file_path.with_name(f"{self._file_path.name}.lock"))
        self._ensure_file()

    def read(self) -> list[dict]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Cannot read {self._file_path}: {exc}") from exc
        if not isinstance(raw, list):
            raise StorageError(f"Cannot read {self._file_path}: expected a JSON list")
        return raw

    @contextmanager
    def update(self) -> Iterator[list[dict]]:
        """Yield the current records; persist them if the block completes."""
        with self._lock:
            records = self.read()
            yield records
            self._write(records)

    # --- File helpers ---------------------------------------------------------

    def _write(self, records: list[dict]) -> None:
        directory = self._file_path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._file_path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(json.dumps(records, indent=2) + "\n")
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageError(f"Cannot write {self._file_path}: {exc}") from exc
        logger.debug("Wrote %d record(s) to %s", len(records), self._file_path)

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create {self._file_path.parent}: {exc}") from exc
        with self._lock:
            if not self._file_path.exists():
                self._write([])
