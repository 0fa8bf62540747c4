from .follow_views import FollowToggleView
from .profile_views import MeView, MyGalleryView, ProfileDetailView, UserSearchView
from .subscription_views import SubscriptionSelectView


__all__ = [
    "FollowToggleView",
    "MeView",
    "MyGalleryView",
    "ProfileDetailView",
    "UserSearchView",
    "SubscriptionSelectView",
]
