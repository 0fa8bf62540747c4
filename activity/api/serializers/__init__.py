from .feed_serializers import (
    CommentCreateSerializer,
    CommentSerializer,
    MentionInputSerializer,
    PostAuthorSerializer,
    PostCreateSerializer,
    PostMentionSerializer,
    PostSerializer,
)
from .notification_serializers import NotificationSerializer


__all__ = [
    "CommentCreateSerializer",
    "CommentSerializer",
    "MentionInputSerializer",
    "NotificationSerializer",
    "PostAuthorSerializer",
    "PostCreateSerializer",
    "PostMentionSerializer",
    "PostSerializer",
]
