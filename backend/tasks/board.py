"""Board: the project-aware view of the task store.

Mirrors what the browser page does: an ordered project list with "Inbox"
always first, an active project, task operations scoped to it, analytics over
every task, and the `{tasks, projects}` document used for export and import.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .analytics import Analytics, compute_analytics, filter_by_project
from .models import DEFAULT_PROJECT, Task
from .repository import TaskRepository


class InvalidDocument(ValueError):
    pass


class Board:
    def __init__(self, repository: TaskRepository, projects: Optional[Iterable[str]] = None,
                 current_project: str = DEFAULT_PROJECT):
        self.repository = repository
        self.projects: List[str] = [DEFAULT_PROJECT]
        for name in projects or ():
            self._remember_project(name)
        for task in repository.list_tasks():
            self._remember_project(task.project)
        self.current_project = current_project
        self._remember_project(current_project)

    def _remember_project(self, name: str) -> None:
        if name and name not in self.projects:
            self.projects.append(name)

    # -------------------- projects --------------------
    def add_project(self, name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValueError("Project name may not be blank")
        if name in self.projects:
            raise ValueError("Project already exists")
        self.projects.append(name)
        return name

    def switch_project(self, name: str) -> None:
        if name not in self.projects:
            raise ValueError(f"Unknown project: {name}")
        self.current_project = name

    def visible_tasks(self) -> List[Task]:
        return filter_by_project(self.repository.list_tasks(), self.current_project)

    # -------------------- tasks --------------------
    def add_task(self, title: str, priority: int = 0, due: Optional[str] = None) -> Optional[Task]:
        """Add a task to the active project; a blank title is a no-op."""
        title = (title or "").strip()
        if not title:
            return None
        return self.repository.create({
            "title": title,
            "project": self.current_project,
            "priority": priority,
            "due": due or None,
            "done": False,
        })

    @staticmethod
    def _full_update(task: Task, **changes: Any) -> Dict[str, Any]:
        data = {"title": task.title, "project": task.project, "priority": task.priority,
                "due": task.due, "done": task.done}
        data.update(changes)
        return data

    def edit_task(self, task_id: str, title: str, priority: int, due: Optional[str]) -> Task:
        return self.repository.modify(
            task_id, lambda t: self._full_update(t, title=title, priority=priority, due=due)
        )

    def toggle_done(self, task_id: str) -> Task:
        return self.repository.modify(task_id, lambda t: self._full_update(t, done=not t.done))

    def delete_task(self, task_id: str) -> None:
        self.repository.delete(task_id)

    def clear_project(self) -> int:
        """Remove the active project's tasks only."""
        return self.repository.delete_where(self.current_project)

    # -------------------- analytics --------------------
    def analytics(self) -> Analytics:
        return compute_analytics(self.repository.list_tasks())

    # -------------------- export / import --------------------
    def export_document(self) -> Dict[str, Any]:
        return {
            "tasks": [t.to_dict() for t in self.repository.list_tasks()],
            "projects": list(self.projects),
        }

    def import_document(self, doc: Any) -> int:
        """Replace tasks (and projects, when given) from a board document.

        Nothing changes when the document is malformed.
        """
        if not isinstance(doc, Mapping):
            raise InvalidDocument("Expected a JSON object with 'tasks' and 'projects'")
        raw_tasks = doc.get("tasks") or []
        raw_projects = doc.get("projects")
        if not isinstance(raw_tasks, list) or not all(isinstance(t, Mapping) for t in raw_tasks):
            raise InvalidDocument("'tasks' must be a list of objects")
        if raw_projects is not None and (
            not isinstance(raw_projects, list) or not all(isinstance(p, str) for p in raw_projects)
        ):
            raise InvalidDocument("'projects' must be a list of names")

        tasks = [Task.from_dict(t) for t in raw_tasks]
        if any(not t.title for t in tasks):
            raise InvalidDocument("Every task needs a non-blank title")
        ids = [t.id for t in tasks]
        if len(set(ids)) != len(ids):
            raise InvalidDocument("Task ids must be unique")

        count = self.repository.replace_all(tasks)
        if raw_projects is not None:
            self.projects = [DEFAULT_PROJECT]
            for name in raw_projects:
                self._remember_project(name)
        for task in tasks:
            self._remember_project(task.project)
        if self.current_project not in self.projects:
            self.current_project = DEFAULT_PROJECT
        return count
