import logging

from django.apps import AppConfig
from django.conf import settings

from .repository import TaskRepository

logger = logging.getLogger(__name__)


class TasksConfig(AppConfig):
    name = "tasks"
    verbose_name = "Tasks"

    repository = None

    def ready(self):
        # loaded once per process; views fall back to this instance
        path = settings.TASKMASTER_STORAGE_FILE
        self.repository = TaskRepository(path)
        logger.info("Task storage file = %s", path)
        logger.info("Web root = %s", settings.TASKMASTER_WEB_ROOT)
