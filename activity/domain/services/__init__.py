from .comment_service import CommentService
from .feed_service import FeedService
from .notification_service import NotificationService


__all__ = ["CommentService", "FeedService", "NotificationService"]
