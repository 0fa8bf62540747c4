from rest_framework.response import Response

from utils.service_base import ServiceResult, status_for


def error_response(result: ServiceResult) -> Response:
    """Translate a failed ServiceResult into ``{"detail": ...}`` with the mapped status."""
    return Response({"detail": result.error_detail}, status=status_for(result.error))
