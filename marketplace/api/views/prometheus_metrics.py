from django.http import HttpResponse
from prometheus_client import generate_latest
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

import marketplace.infra.observability.metrics  # noqa: F401  registers the collectors


@api_view(["GET"])
@permission_classes([AllowAny])
def prometheus_metrics(request):
    """
    Exposes Prometheus metrics for the whole backend.
    """
    metrics_content = generate_latest()
    return HttpResponse(metrics_content, content_type="text/plain; version=0.0.4; charset=utf-8")
