from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
import uuid

DEFAULT_PROJECT = "Inbox"


def new_task_id() -> str:
    return str(uuid.uuid4())


def _as_int(value: Any, default: int = 0) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass
class Task:
    """A single to-do item.

    Attribute names are snake_case; `to_dict` produces the wire/file shape
    (`createdAt` in camelCase) shared by the API, the JSON store and the
    board export format.
    """

    id: str
    title: str
    project: str = DEFAULT_PROJECT
    priority: int = 0
    due: Optional[str] = None
    done: bool = False
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "project": self.project,
            "priority": self.priority,
            "due": self.due,
            "done": self.done,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        """Build a task from a stored or imported mapping.

        Missing fields take their defaults, a missing id gets a fresh one and
        a non-numeric priority becomes 0.
        """
        raw_id = data.get("id")
        due = data.get("due")
        created = data.get("createdAt")
        project = data.get("project")
        return cls(
            id=str(raw_id) if raw_id not in (None, "") else new_task_id(),
            title=str(data.get("title") or "").strip(),
            project=str(project) if project is not None else DEFAULT_PROJECT,
            priority=_as_int(data.get("priority")),
            due=str(due) if due is not None else None,
            done=bool(data.get("done", False)),
            created_at=str(created) if created is not None else None,
        )
