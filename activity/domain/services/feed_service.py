"""
FeedService - the social feed.

Posts are filtered by author, category, location and creation window, and
per viewer: posts the viewer hid are dropped, and the ``following``,
``likes`` and ``bookmarks`` filters narrow the feed to the viewer's graph.
Likes and bookmarks are toggles; adding one notifies the post author
through a domain event.
"""

from typing import List

from django.db import transaction
from django.db.models import Count, Q, QuerySet
from django.utils.dateparse import parse_date, parse_datetime

from activity.domain.models import Post, PostMention
from infrastructure.events import EventBus, EventTypes, get_event_bus
from utils.lookups import get_or_none, parse_json_value
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

VIEWER_FILTERS = ("following", "likes", "bookmarks")
MEDIA_TYPES = ("image", "video", "gif")
MENTION_TYPES = ("user", "listing", "shop")
UNSET_CATEGORIES = ("All", "Default")


def _parse_bound(value, end_of_day: bool = False) -> dict:
    """Lookup for one end of the creation window. Plain dates cover the whole day."""
    day = parse_date(value)
    if day is not None:
        return {"date__lte" if end_of_day else "date__gte": day}
    parsed = parse_datetime(value)
    if parsed is None:
        raise ValueError(f"Invalid date '{value}'")
    return {"lte" if end_of_day else "gte": parsed}


def _valid_mention(mention) -> bool:
    return (
        isinstance(mention, dict)
        and isinstance(mention.get("id"), str)
        and mention.get("type") in MENTION_TYPES
        and isinstance(mention.get("title"), str)
    )


class FeedService(BaseService):
    def __init__(self, event_bus: EventBus = None):
        super().__init__()
        self.event_bus = event_bus or get_event_bus()

    def base_queryset(self) -> QuerySet:
        return (
            Post.objects.select_related("author")
            .prefetch_related("likes", "bookmarks", "mentions")
            .annotate(comments_count=Count("comments", distinct=True))
        )

    @BaseService.log_performance
    def get_posts(self, viewer=None, params: dict = None) -> ServiceResult[List[Post]]:
        """
        Args:
            viewer: the requesting user, or None / AnonymousUser
            params: user_id, category, location_value, state, city,
                    start_date, end_date, order ("asc" | "desc"),
                    filter ("following" | "likes" | "bookmarks")
        """
        params = params or {}
        authenticated = bool(getattr(viewer, "is_authenticated", False))
        feed_filter = params.get("filter")

        if feed_filter and feed_filter not in VIEWER_FILTERS:
            return service_err(ErrorCodes.INVALID_INPUT, f"filter must be one of {', '.join(VIEWER_FILTERS)}")
        if feed_filter and not authenticated:
            return service_ok([])

        queryset = self.base_queryset()

        if params.get("user_id"):
            queryset = queryset.filter(author_id=params["user_id"])
        if params.get("category"):
            queryset = queryset.filter(category=params["category"])

        location_filter = params.get("state") or params.get("city")
        if location_filter:
            queryset = queryset.filter(location__icontains=location_filter)
        elif params.get("location_value"):
            queryset = queryset.filter(location=params["location_value"])

        # A creation window needs both ends
        if params.get("start_date") and params.get("end_date"):
            try:
                start = _parse_bound(params["start_date"])
                end = _parse_bound(params["end_date"], end_of_day=True)
            except ValueError as e:
                return service_err(ErrorCodes.INVALID_INPUT, str(e))
            queryset = queryset.filter(**{f"created_at__{key}": value for key, value in {**start, **end}.items()})

        if authenticated:
            queryset = queryset.exclude(hidden_by=viewer)
            if feed_filter == "following":
                queryset = queryset.filter(Q(author__in=viewer.following.all()) | Q(author=viewer))
            elif feed_filter == "likes":
                queryset = queryset.filter(likes=viewer)
            elif feed_filter == "bookmarks":
                queryset = queryset.filter(bookmarks=viewer)

        queryset = queryset.order_by("created_at" if params.get("order") == "asc" else "-created_at")

        try:
            posts = list(queryset)
            self.logger.debug(f"Feed query returned {len(posts)} posts for params {params}")
            return service_ok(posts)
        except Exception as e:
            self.logger.error(f"Error loading feed: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

    @BaseService.log_performance
    def get_post(self, post_id) -> ServiceResult[Post]:
        post = get_or_none(self.base_queryset(), pk=post_id)
        if post is None:
            return service_err(ErrorCodes.POST_NOT_FOUND, "Post not found")
        return service_ok(post)

    @BaseService.log_performance
    def create_post(self, user, data: dict) -> ServiceResult[Post]:
        # Empty content is allowed for media-only posts
        if data.get("content") is None:
            return service_err(ErrorCodes.INVALID_INPUT, "Missing required field: content")

        media_type = data.get("media_type") or ""
        if media_type and media_type not in MEDIA_TYPES:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid media type. Must be 'image', 'video', or 'gif'")

        try:
            mentions = parse_json_value(data.get("mentions"), [])
            media_overlay = parse_json_value(data.get("media_overlay"), None)
        except ValueError:
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid JSON in mentions or media_overlay")

        if not isinstance(mentions, list) or not all(_valid_mention(mention) for mention in mentions):
            return service_err(ErrorCodes.INVALID_INPUT, "Invalid mentions format")

        category = data.get("category") or ""
        if category in UNSET_CATEGORIES:
            category = ""

        try:
            with transaction.atomic():
                post = Post.objects.create(
                    author=user,
                    content=data["content"],
                    image_src=data.get("image_src") or "",
                    media_url=data.get("media_url") or "",
                    media_type=media_type,
                    media_overlay=media_overlay or None,
                    location=data.get("location") or "",
                    tag=data.get("tag") or "",
                    category=category,
                    post_type=data.get("post_type") or "",
                )
                PostMention.objects.bulk_create(
                    [
                        PostMention(
                            post=post,
                            entity_id=mention["id"],
                            entity_type=mention["type"],
                            entity_title=mention["title"],
                            entity_subtitle=mention.get("subtitle") or "",
                            entity_image=mention.get("image") or "",
                        )
                        for mention in mentions
                    ]
                )
        except Exception as e:
            self.logger.error(f"Error creating post: {e}", exc_info=True)
            return service_err(ErrorCodes.INTERNAL_ERROR, str(e))

        self.logger.info(f"Post {post.pk} created by {user.pk} with {len(mentions)} mentions")
        return self.get_post(post.pk)

    @BaseService.log_performance
    def toggle_like(self, user, post_id) -> ServiceResult[dict]:
        return self._toggle(user, post_id, "likes", EventTypes.POST_LIKED, "liked")

    @BaseService.log_performance
    def toggle_bookmark(self, user, post_id) -> ServiceResult[dict]:
        return self._toggle(user, post_id, "bookmarks", EventTypes.POST_BOOKMARKED, "bookmarked")

    @BaseService.log_performance
    def hide_post(self, user, post_id) -> ServiceResult[dict]:
        post = get_or_none(Post, pk=post_id)
        if post is None:
            return service_err(ErrorCodes.POST_NOT_FOUND, "Post not found")
        post.hidden_by.add(user)
        return service_ok({"hidden": True, "post_id": str(post.pk)})

    @BaseService.log_performance
    def unhide_post(self, user, post_id) -> ServiceResult[dict]:
        post = get_or_none(Post, pk=post_id)
        if post is None:
            return service_err(ErrorCodes.POST_NOT_FOUND, "Post not found")
        post.hidden_by.remove(user)
        return service_ok({"hidden": False, "post_id": str(post.pk)})

    @BaseService.log_performance
    def delete_post(self, user, post_id) -> ServiceResult[bool]:
        post = get_or_none(Post, pk=post_id)
        if post is None:
            return service_err(ErrorCodes.POST_NOT_FOUND, "Post not found")
        if post.author_id != user.pk:
            return service_err(ErrorCodes.PERMISSION_DENIED, "You can only delete your own posts")

        post.delete()
        self.logger.info(f"Post {post_id} deleted by {user.pk}")
        return service_ok(True)

    def _toggle(self, user, post_id, relation: str, event_type: str, flag: str) -> ServiceResult[dict]:
        post = get_or_none(Post, pk=post_id)
        if post is None:
            return service_err(ErrorCodes.POST_NOT_FOUND, "Post not found")

        members = getattr(post, relation)
        added = not members.filter(pk=user.pk).exists()
        if added:
            members.add(user)
            if post.author_id != user.pk:
                self.event_bus.publish(
                    event_type,
                    {
                        "post_id": str(post.pk),
                        "actor_id": str(user.pk),
                        "actor_name": user.name,
                        "author_id": str(post.author_id),
                    },
                )
        else:
            members.remove(user)

        return service_ok({flag: added, f"{relation}_count": members.count(), "post_id": str(post.pk)})
