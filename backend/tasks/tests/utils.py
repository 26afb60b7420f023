import tempfile
from pathlib import Path
from unittest import mock

from django.apps import apps

from tasks.repository import TaskRepository


class TempRepositoryMixin:
    """Gives each test its own repository in a throwaway directory."""

    def make_tmpdir(self) -> Path:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        return Path(tmp.name)

    def make_repository(self, name: str = "tasks.json") -> TaskRepository:
        return TaskRepository(self.make_tmpdir() / name)

    def use_repository(self, repository: TaskRepository) -> TaskRepository:
        """Make `repository` the one the tasks app hands to views and commands."""
        patcher = mock.patch.object(apps.get_app_config("tasks"), "repository", repository)
        patcher.start()
        self.addCleanup(patcher.stop)
        return repository
