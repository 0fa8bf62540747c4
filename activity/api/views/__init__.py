from .feed_views import PostViewSet
from .notification_views import NotificationViewSet


__all__ = ["NotificationViewSet", "PostViewSet"]
