from .user_serializers import (
    FollowToggleSerializer,
    GalleryImageSerializer,
    PlanSelectionSerializer,
    ProfileUpdateSerializer,
    UserSerializer,
    UserSummarySerializer,
)


__all__ = [
    "FollowToggleSerializer",
    "GalleryImageSerializer",
    "PlanSelectionSerializer",
    "ProfileUpdateSerializer",
    "UserSerializer",
    "UserSummarySerializer",
]
