from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.api.serializers import (
    GalleryImageSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
    UserSummarySerializer,
)
from infrastructure.container import container
from utils.api import error_response


class MeView(APIView):
    """The authenticated user's own account."""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(responses={200: UserSerializer}, tags=["Accounts"])
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(request=ProfileUpdateSerializer, responses={200: UserSerializer}, tags=["Accounts"])
    def patch(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        result = container.profile_service().update_profile(request.user, serializer.validated_data)
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value).data, status=status.HTTP_200_OK)


class MyGalleryView(APIView):
    """Add images to, or remove them from, the signed-in user's profile gallery."""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(request=GalleryImageSerializer, responses={200: UserSerializer}, tags=["Accounts"])
    def post(self, request):
        result = container.profile_service().add_gallery_image(request.user, request.data.get("image"))
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value).data)

    @extend_schema(
        parameters=[OpenApiParameter(name="image_index", type=int, required=True)],
        responses={200: UserSerializer},
        tags=["Accounts"],
    )
    def delete(self, request):
        result = container.profile_service().remove_gallery_image(
            request.user, request.query_params.get("image_index")
        )
        if not result.ok:
            return error_response(result)
        return Response(UserSerializer(result.value).data)


class ProfileDetailView(APIView):
    """Public profile page with counts, listings, shops and recent posts."""

    permission_classes = [permissions.AllowAny]

    @extend_schema(operation_id="accounts_profile_detail", tags=["Accounts"])
    def get(self, request, user_id):
        result = container.profile_service().get_profile(user_id, viewer=request.user)
        if not result.ok:
            return error_response(result)
        return Response(result.value)


class UserSearchView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        parameters=[
            OpenApiParameter(name="q", type=str, description="Name, email or username fragment (min 2 chars)"),
            OpenApiParameter(name="limit", type=int, description="Max results (default: 10)"),
        ],
        responses={200: UserSummarySerializer(many=True)},
        tags=["Accounts"],
    )
    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", 10))
        except ValueError:
            return Response({"detail": "limit must be an integer"}, status=status.HTTP_400_BAD_REQUEST)

        result = container.profile_service().search_users(request.query_params.get("q", ""), limit=limit)
        if not result.ok:
            return error_response(result)
        return Response({"results": result.value})
