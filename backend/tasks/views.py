# views.py
import logging
from pathlib import Path
from typing import Optional

from django.apps import apps
from django.conf import settings
from django.http import HttpResponse

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from .board import Board
from .exceptions import error_body
from .repository import TaskRepository
from .serializers import TaskInputSerializer, TaskUpdateSerializer

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(filename: str) -> str:
    return CONTENT_TYPES.get(Path(filename).suffix.lower(), DEFAULT_CONTENT_TYPE)


class RepositoryMixin:
    """Gives a view its task repository.

    Pass one explicitly with `as_view(repository=...)`; otherwise the
    repository the `tasks` app created at startup is used.
    """

    repository: Optional[TaskRepository] = None

    def get_repository(self) -> TaskRepository:
        if self.repository is not None:
            return self.repository
        return apps.get_app_config("tasks").repository


class TaskCollection(RepositoryMixin, APIView):
    """
    GET    /api/tasks  -> every task, in insertion order
    POST   /api/tasks  -> create a task (201)
    PUT    /api/tasks  -> replace every task with a JSON array
    DELETE /api/tasks  -> remove every task
    """

    def get(self, request):
        tasks = self.get_repository().list_tasks()
        return Response([t.to_dict() for t in tasks], status=status.HTTP_200_OK)

    def post(self, request):
        serializer = TaskInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        task = self.get_repository().create(serializer.validated_data)
        logger.info("Created task %s", task.id)
        return Response(task.to_dict(), status=status.HTTP_201_CREATED)

    def put(self, request):
        """Replace every task in one step; nothing changes if any task is invalid."""
        if not isinstance(request.data, list):
            return Response(error_body("Expected a JSON array of tasks"), status=status.HTTP_400_BAD_REQUEST)
        repository = self.get_repository()
        count = Board(repository).import_document({"tasks": request.data})
        logger.info("Replaced all tasks (%d)", count)
        return Response([t.to_dict() for t in repository.list_tasks()], status=status.HTTP_200_OK)

    def delete(self, request):
        self.get_repository().clear()
        logger.info("Cleared all tasks")
        return Response({"status": "cleared"}, status=status.HTTP_200_OK)


class TaskDetail(RepositoryMixin, APIView):
    """
    GET    /api/tasks/{id}  -> one task or 404
    PUT    /api/tasks/{id}  -> update an existing task; never creates one
    DELETE /api/tasks/{id}  -> remove a task or 404
    """

    def get(self, request, task_id):
        task = self.get_repository().get(task_id)
        return Response(task.to_dict(), status=status.HTTP_200_OK)

    def put(self, request, task_id):
        serializer = TaskUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        task = self.get_repository().update(task_id, serializer.validated_data)
        return Response(task.to_dict(), status=status.HTTP_200_OK)

    def delete(self, request, task_id):
        self.get_repository().delete(task_id)
        logger.info("Deleted task %s", task_id)
        return Response({"status": "deleted"}, status=status.HTTP_200_OK)


def static_asset(request, filename):
    """Serve one of the client files from the web root."""
    path = Path(settings.TASKMASTER_WEB_ROOT) / filename
    if not path.is_file():
        logger.warning("Static asset missing: %s", path)
        return HttpResponse(f"404 Not Found: {filename}", status=404,
                            content_type="text/plain; charset=utf-8")
    return HttpResponse(path.read_bytes(), content_type=content_type_for(filename))


def favicon(request):
    return HttpResponse(status=204)


def not_found(request, exception=None):
    return HttpResponse(f"404 Not Found: {request.path}", status=404,
                        content_type="text/plain; charset=utf-8")
