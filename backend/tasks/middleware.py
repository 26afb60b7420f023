import logging

from django.core.exceptions import PermissionDenied
from django.http import Http404, HttpResponse, JsonResponse

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class CorsMiddleware:
    """Answers preflight requests and adds permissive CORS headers everywhere."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.method == "OPTIONS":
            response = HttpResponse(status=204)
        else:
            response = self.get_response(request)
        for header, value in CORS_HEADERS.items():
            response[header] = value
        return response


class ServerErrorMiddleware:
    """Turns exceptions escaping plain Django views into a JSON 500."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, (Http404, PermissionDenied)):
            return None
        logger.error("Unhandled error serving %s %s", request.method, request.path, exc_info=exception)
        return JsonResponse({"error": "Server error"}, status=500)
