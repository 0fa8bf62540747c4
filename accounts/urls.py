from django.urls import path

from .api.views import (
    FollowToggleView,
    MeView,
    MyGalleryView,
    ProfileDetailView,
    SubscriptionSelectView,
    UserSearchView,
)

app_name = "accounts"

urlpatterns = [
    path("me/", MeView.as_view(), name="me"),
    path("me/gallery/", MyGalleryView.as_view(), name="me-gallery"),
    path("search/", UserSearchView.as_view(), name="user-search"),
    path("profiles/<uuid:user_id>/", ProfileDetailView.as_view(), name="profile-detail"),
    path("follow/<uuid:target_id>/", FollowToggleView.as_view(), name="follow-toggle"),
    path("subscription/select/", SubscriptionSelectView.as_view(), name="subscription-select"),
]
