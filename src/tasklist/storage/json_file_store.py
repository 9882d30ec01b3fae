"""JSON-file-backed persistent task store."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tasklist.exceptions import StorageError
from tasklist.models.task import Task
from tasklist.storage._base import BaseTaskStoreMixin

logger = logging.getLogger(__name__)


class JsonFileTaskStore(BaseTaskStoreMixin):
    """Persistent task store backed by a single JSON file.

    Implements the ``TaskStore`` protocol.  Suitable for development and
    single-process deployments; not suitable for concurrent multi-process
    access.

    By default (``auto_save=True``), every mutation is written to disk
    immediately.  Set ``auto_save=False`` for batch imports and call
    ``flush()`` explicitly when ready.

    The file holds ``{"next_id": int, "tasks": [...]}`` so ids are never
    reused across restarts.

    Example::

        store = JsonFileTaskStore("tasks.json")
        task = store.add(owner_id=1, title="Buy milk")
    """

    __slots__ = ("_auto_save", "_dirty", "_file_path", "_lock", "_next_id", "_tasks")

    def __init__(self, file_path: str | Path, *, auto_save: bool = True) -> None:
        self._file_path = Path(file_path).resolve()
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._lock = threading.RLock()
        self._dirty = False
        self._auto_save = auto_save
        if self._file_path.exists():
            self.load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def dirty(self) -> bool:
        """Whether in-memory state has changed since the last flush or load."""
        return self._dirty

    def _after_mutation(self) -> None:
        self._dirty = True
        if self._auto_save:
            self.flush()

    # ------------------------------------------------------------------
    # Persistence methods
    # ------------------------------------------------------------------

    def flush(self) -> None:
        """Flush all tasks to the JSON file on disk.

        Uses atomic write (temp file + rename) to prevent corruption.
        """
        with self._lock:
            data: dict[str, Any] = {
                "next_id": self._next_id,
                "tasks": [t.model_dump(mode="json") for t in self._tasks.values()],
            }
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            content = json.dumps(data, indent=2)

            fd, tmp_path = tempfile.mkstemp(dir=self._file_path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                Path(tmp_path).replace(self._file_path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise

            self._dirty = False
            logger.debug("Saved %d tasks to %s", len(self._tasks), self._file_path)

    def load(self) -> None:
        """Reload tasks from the JSON file on disk.

        Raises:
            StorageError: If the file is not valid JSON or has the wrong shape.
        """
        with self._lock:
            if not self._file_path.exists():
                self._tasks.clear()
                self._dirty = False
                return

            text = self._file_path.read_text(encoding="utf-8")
            if not text.strip():
                self._tasks.clear()
                self._dirty = False
                return

            try:
                raw = json.loads(text)
            except json.JSONDecodeError as e:
                msg = f"Failed to load task store from {self._file_path}: invalid JSON"
                raise StorageError(msg) from e
            if not isinstance(raw, dict) or not isinstance(raw.get("tasks"), list):
                msg = f"Failed to load task store from {self._file_path}: unexpected layout"
                raise StorageError(msg)

            self._tasks.clear()
            for item in raw["tasks"]:
                try:
                    task = Task.model_validate(item)
                except ValidationError:
                    logger.warning(
                        "Skipping malformed task in %s: %s",
                        self._file_path,
                        item.get("id", "<unknown>") if isinstance(item, dict) else item,
                    )
                    continue
                self._tasks[task.id] = task

            highest = max(self._tasks, default=0)
            self._next_id = max(int(raw.get("next_id", 1)), highest + 1)
            self._dirty = False
            logger.debug("Loaded %d tasks from %s", len(self._tasks), self._file_path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={str(self._file_path)!r}, tasks={len(self._tasks)})"
