from .feed import Comment, Post, PostMention
from .notification import Notification


__all__ = ["Post", "PostMention", "Comment", "Notification"]
