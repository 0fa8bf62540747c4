from activity.domain.models import Comment, Notification, Post, PostMention


__all__ = ["Post", "PostMention", "Comment", "Notification"]
