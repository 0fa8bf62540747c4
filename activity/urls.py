from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api.views import NotificationViewSet, PostViewSet

app_name = "activity"

router = DefaultRouter()
router.register(r"posts", PostViewSet, basename="post")
router.register(r"notifications", NotificationViewSet, basename="notification")

urlpatterns = [
    path("", include(router.urls)),
]
