from typing import List

from activity.domain.models import Comment, Post
from infrastructure.events import EventBus, EventTypes, get_event_bus
from utils.lookups import get_or_none
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class CommentService(BaseService):
    """Comments on feed posts. A new comment notifies the post author."""

    def __init__(self, event_bus: EventBus = None):
        super().__init__()
        self.event_bus = event_bus or get_event_bus()

    @BaseService.log_performance
    def create(self, user, post_id, content: str) -> ServiceResult[Comment]:
        if not (content or "").strip():
            return service_err(ErrorCodes.INVALID_INPUT, "Comment content is required")

        post = get_or_none(Post, pk=post_id)
        if post is None:
            return service_err(ErrorCodes.POST_NOT_FOUND, "Post not found")

        try:
            comment = Comment.objects.create(post=post, author=user, content=content)
        except Exception as e:
            self.logger.error(f"Error creating comment on {post_id}: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        if post.author_id != user.pk:
            self.event_bus.publish(
                EventTypes.COMMENT_CREATED,
                {
                    "comment_id": str(comment.pk),
                    "post_id": str(post.pk),
                    "actor_id": str(user.pk),
                    "actor_name": user.name,
                    "author_id": str(post.author_id),
                },
            )
        return service_ok(comment)

    @BaseService.log_performance
    def list(self, post_id) -> ServiceResult[List[Comment]]:
        """Comments on a post, oldest first."""
        post = get_or_none(Post, pk=post_id)
        if post is None:
            return service_err(ErrorCodes.POST_NOT_FOUND, "Post not found")
        return service_ok(list(post.comments.select_related("author").order_by("created_at")))
