"""Task repository backed by a flat JSON file.

The repository owns the task collection. Every read and write goes through a
single re-entrant lock, and every mutation rewrites the whole file.

Persistence is best-effort: if the file cannot be written the error is logged
and the in-memory change is kept, so the process and the file can drift apart
until the next successful write.
"""

import copy
import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from django.utils import timezone

from .models import DEFAULT_PROJECT, Task, new_task_id

logger = logging.getLogger(__name__)


class TaskNotFound(LookupError):
    def __init__(self, task_id: str):
        super().__init__(task_id)
        self.task_id = task_id


class InvalidTask(ValueError):
    pass


def _clean_title(title: Any) -> str:
    cleaned = str(title).strip()
    if not cleaned:
        raise InvalidTask("title: This field may not be blank.")
    return cleaned


class TaskRepository:
    """Insertion-ordered task collection persisted to `storage_path`.

    Callers always receive copies; the stored `Task` objects never leave the
    lock.
    """

    def __init__(self, storage_path: Union[str, Path], load: bool = True):
        self.storage_path = Path(storage_path)
        self._lock = threading.RLock()
        self._tasks: List[Task] = []
        if load:
            self.load()

    # -------------------- persistence --------------------
    def load(self) -> int:
        """Replace the in-memory collection with the file contents.

        A missing, unreadable or malformed file yields an empty collection.
        Returns the number of tasks loaded.
        """
        with self._lock:
            self._tasks = []
            if not self.storage_path.exists():
                logger.info("No task file at %s; starting empty", self.storage_path)
                return 0
            try:
                raw = json.loads(self.storage_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.warning("Failed to load tasks from %s: %s", self.storage_path, exc)
                return 0
            if not isinstance(raw, list):
                logger.warning("Ignoring %s: expected a JSON array, got %s",
                               self.storage_path, type(raw).__name__)
                return 0

            seen = set()
            for idx, item in enumerate(raw):
                if not isinstance(item, dict):
                    logger.warning("Skipping entry %d in %s: not an object", idx, self.storage_path)
                    continue
                task = Task.from_dict(item)
                if task.id in seen:
                    logger.warning("Skipping entry %d in %s: duplicate id %s",
                                   idx, self.storage_path, task.id)
                    continue
                seen.add(task.id)
                self._tasks.append(task)
            logger.info("Loaded %d tasks from %s", len(self._tasks), self.storage_path)
            return len(self._tasks)

    def _persist(self) -> bool:
        # caller holds the lock
        payload = json.dumps([t.to_dict() for t in self._tasks], indent=2, ensure_ascii=False)
        tmp_name: Optional[str] = None
        try:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=self.storage_path.name + ".", suffix=".tmp", dir=str(self.storage_path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.storage_path)
            return True
        except OSError as exc:
            logger.error("Failed to persist %d tasks to %s: %s", len(self._tasks), self.storage_path, exc)
            if tmp_name and os.path.exists(tmp_name):
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug("Could not remove temp file %s", tmp_name)
            return False

    # -------------------- queries --------------------
    def _find(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFound(task_id)

    def list_tasks(self) -> List[Task]:
        with self._lock:
            return [copy.copy(t) for t in self._tasks]

    def get(self, task_id: str) -> Task:
        with self._lock:
            return copy.copy(self._find(task_id))

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    # -------------------- mutations --------------------
    def create(self, data: Mapping[str, Any]) -> Task:
        """Append a task built from `data` and persist.

        Fills in a fresh id, a creation timestamp and the default project when
        they are missing. An explicit id already in use is rejected.
        """
        with self._lock:
            ids = {t.id for t in self._tasks}
            task_id = data.get("id")
            if task_id in (None, ""):
                task_id = new_task_id()
                while task_id in ids:
                    task_id = new_task_id()
            elif str(task_id) in ids:
                raise InvalidTask(f"id: A task with id {task_id!r} already exists.")

            project = data.get("project")
            priority = data.get("priority")
            task = Task(
                id=str(task_id),
                title=_clean_title(data.get("title") or ""),
                project=project if project is not None else DEFAULT_PROJECT,
                priority=int(priority) if priority is not None else 0,
                due=data.get("due"),
                done=bool(data.get("done") or False),
                created_at=data.get("createdAt") or timezone.now().isoformat(),
            )
            self._tasks.append(task)
            self._persist()
            logger.debug("Created task %s in project %s", task.id, task.project)
            return copy.copy(task)

    def update(self, task_id: str, data: Mapping[str, Any]) -> Task:
        """Overwrite fields of an existing task and persist.

        `title` and `project` change only when present and not null.
        `done`, `priority` and `due` are always overwritten, falling back to
        False, 0 and None when absent.
        """
        with self._lock:
            task = self._find(task_id)
            title = data.get("title")
            new_title = _clean_title(title) if title is not None else task.title

            task.title = new_title
            task.done = bool(data.get("done") or False)
            if data.get("project") is not None:
                task.project = data["project"]
            priority = data.get("priority")
            task.priority = int(priority) if priority is not None else 0
            task.due = data.get("due")
            self._persist()
            return copy.copy(task)

    def modify(self, task_id: str, change: Callable[[Task], Mapping[str, Any]]) -> Task:
        """Read a task and apply `change(task)` as an update, both under the lock."""
        with self._lock:
            current = copy.copy(self._find(task_id))
            return self.update(task_id, change(current))

    def delete(self, task_id: str) -> None:
        with self._lock:
            task = self._find(task_id)
            self._tasks.remove(task)
            self._persist()

    def delete_where(self, project: str) -> int:
        """Remove every task in `project`; returns how many were removed."""
        with self._lock:
            kept = [t for t in self._tasks if t.project != project]
            removed = len(self._tasks) - len(kept)
            if removed:
                self._tasks = kept
                self._persist()
            return removed

    def clear(self) -> None:
        with self._lock:
            self._tasks = []
            self._persist()

    def replace_all(self, tasks: Iterable[Task]) -> int:
        """Swap the whole collection for `tasks` (ids must be unique)."""
        incoming = [copy.copy(t) for t in tasks]
        ids: Dict[str, int] = {}
        for idx, task in enumerate(incoming):
            if task.id in ids:
                raise InvalidTask(f"Duplicate task id {task.id!r} at positions {ids[task.id]} and {idx}")
            ids[task.id] = idx
        with self._lock:
            self._tasks = incoming
            self._persist()
            return len(incoming)
