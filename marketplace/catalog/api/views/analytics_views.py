from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.catalog.api.serializers import AnalyticsDashboardSerializer
from utils.api import error_response


class AnalyticsDashboardView(APIView):
    """
    Provider dashboard for the authenticated user: overview totals, review
    stats, recent activity, twelve months of history, top services and
    per-listing performance.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(operation_id="analytics_dashboard", responses={200: AnalyticsDashboardSerializer}, tags=["Analytics"])
    def get(self, request):
        result = container.analytics_service().get_dashboard(request.user)
        if not result.ok:
            return error_response(result)
        return Response(result.value)
