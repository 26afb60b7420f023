import logging
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import MethodNotAllowed, NotFound, ParseError, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .board import InvalidDocument
from .repository import InvalidTask, TaskNotFound

logger = logging.getLogger(__name__)


def _first_error(detail: Any, field: Optional[str] = None) -> str:
    """Flatten a DRF error detail into one 'field: message' line."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            name = None if key == "non_field_errors" else key
            return _first_error(value, name)
        return "Invalid input"
    if isinstance(detail, (list, tuple)):
        if not detail:
            return "Invalid input"
        return _first_error(detail[0], field)
    return f"{field}: {detail}" if field else str(detail)


def error_body(message: str) -> Dict[str, str]:
    return {"error": message}


def api_exception_handler(exc, context):
    """DRF exception handler: every error body is a single `error` field.

    Exceptions DRF does not know about become a generic 500; the traceback
    goes to the log and never into the response.
    """
    if isinstance(exc, TaskNotFound):
        return Response(error_body("Task not found"), status=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, (InvalidTask, InvalidDocument)):
        return Response(error_body(str(exc)), status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.error("Unhandled error in %s", type(view).__name__ if view else "view", exc_info=exc)
        return Response(error_body("Server error"), status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, ParseError):
        message = "Invalid JSON"
    elif isinstance(exc, MethodNotAllowed):
        message = "Method not allowed"
    elif isinstance(exc, NotFound):
        message = "Not found"
    elif isinstance(exc, ValidationError):
        message = _first_error(exc.detail)
    else:
        message = _first_error(getattr(exc, "detail", str(exc)))
    response.data = error_body(message)
    return response
