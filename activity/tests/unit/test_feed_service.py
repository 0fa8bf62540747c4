from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from django.contrib.auth.models import AnonymousUser
from django.utils import timezone

from activity.domain.services import FeedService
from activity.models import Post
from activity.tests.factories import CommentFactory, PostFactory
from accounts.tests.factories import UserFactory
from infrastructure.events import EventTypes
from utils.service_base import ErrorCodes


@pytest.fixture
def event_bus():
    return MagicMock()


@pytest.fixture
def feed_service(event_bus):
    return FeedService(event_bus=event_bus)


def ids(posts):
    return {post.pk for post in posts}


@pytest.mark.unit
@pytest.mark.django_db
class TestGetPosts:
    def test_hidden_posts_are_dropped_for_viewer_only(self, feed_service):
        viewer = UserFactory()
        hidden = PostFactory()
        visible = PostFactory()
        hidden.hidden_by.add(viewer)

        assert ids(feed_service.get_posts(viewer).value) == {visible.pk}
        assert ids(feed_service.get_posts(AnonymousUser()).value) == {hidden.pk, visible.pk}

    def test_following_includes_own_posts(self, feed_service):
        viewer = UserFactory()
        followed = UserFactory()
        viewer.following.add(followed)
        theirs = PostFactory(author=followed)
        mine = PostFactory(author=viewer)
        PostFactory()

        result = feed_service.get_posts(viewer, {"filter": "following"})

        assert ids(result.value) == {theirs.pk, mine.pk}

    def test_likes_and_bookmarks_filters(self, feed_service):
        viewer = UserFactory()
        liked = PostFactory()
        bookmarked = PostFactory()
        liked.likes.add(viewer)
        bookmarked.bookmarks.add(viewer)

        assert ids(feed_service.get_posts(viewer, {"filter": "likes"}).value) == {liked.pk}
        assert ids(feed_service.get_posts(viewer, {"filter": "bookmarks"}).value) == {bookmarked.pk}

    def test_anonymous_viewer_with_personal_filter_gets_nothing(self, feed_service):
        PostFactory()

        result = feed_service.get_posts(AnonymousUser(), {"filter": "following"})

        assert result.ok is True
        assert result.value == []

    def test_unknown_filter(self, feed_service):
        result = feed_service.get_posts(UserFactory(), {"filter": "trending"})

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_location_and_category(self, feed_service):
        match = PostFactory(location="Denver, CO", category="Fitness")
        PostFactory(location="Denver, CO", category="Beauty")
        PostFactory(location="Austin, TX", category="Fitness")

        result = feed_service.get_posts(None, {"state": "co", "category": "Fitness"})

        assert ids(result.value) == {match.pk}

    def test_date_window_needs_both_ends(self, feed_service):
        old = PostFactory()
        Post.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(days=30))
        recent = PostFactory()
        today = timezone.now().date()

        windowed = feed_service.get_posts(
            None, {"start_date": (today - timedelta(days=1)).isoformat(), "end_date": today.isoformat()}
        )
        half_open = feed_service.get_posts(None, {"start_date": today.isoformat()})

        assert ids(windowed.value) == {recent.pk}
        assert ids(half_open.value) == {old.pk, recent.pk}

    def test_bad_date(self, feed_service):
        result = feed_service.get_posts(None, {"start_date": "soon", "end_date": "later"})

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_order_and_comment_count(self, feed_service):
        first = PostFactory()
        Post.objects.filter(pk=first.pk).update(created_at=timezone.now() - timedelta(hours=1))
        second = PostFactory()
        CommentFactory(post=second)
        CommentFactory(post=second)

        newest_first = feed_service.get_posts(None).value
        oldest_first = feed_service.get_posts(None, {"order": "asc"}).value

        assert [post.pk for post in newest_first] == [second.pk, first.pk]
        assert [post.pk for post in oldest_first] == [first.pk, second.pk]
        assert newest_first[0].comments_count == 2


@pytest.mark.unit
@pytest.mark.django_db
class TestCreatePost:
    def test_creates_post_with_mentions(self, feed_service):
        author = UserFactory()
        mentioned = UserFactory(name="Casey Quinn")

        result = feed_service.create_post(
            author,
            {
                "content": "Fresh cut by @Casey",
                "media_type": "image",
                "media_url": "https://cdn.example.com/p.jpg",
                "category": "All",
                "mentions": [{"id": str(mentioned.pk), "type": "user", "title": "Casey Quinn"}],
            },
        )

        assert result.ok is True
        post = result.value
        assert post.category == ""
        assert post.mentions.get().entity_title == "Casey Quinn"

    def test_empty_content_is_allowed(self, feed_service):
        result = feed_service.create_post(UserFactory(), {"content": "", "media_type": "video"})

        assert result.ok is True

    def test_missing_content(self, feed_service):
        result = feed_service.create_post(UserFactory(), {"media_type": "image"})

        assert result.error == ErrorCodes.INVALID_INPUT
        assert result.error_detail == "Missing required field: content"

    def test_invalid_media_type(self, feed_service):
        result = feed_service.create_post(UserFactory(), {"content": "hi", "media_type": "audio"})

        assert result.error == ErrorCodes.INVALID_INPUT

    def test_invalid_mentions(self, feed_service):
        result = feed_service.create_post(
            UserFactory(), {"content": "hi", "mentions": [{"id": 5, "type": "user", "title": "x"}]}
        )

        assert result.error_detail == "Invalid mentions format"
        assert Post.objects.count() == 0


@pytest.mark.unit
@pytest.mark.django_db
class TestReactions:
    def test_like_toggle_publishes_once(self, feed_service, event_bus):
        post = PostFactory()
        fan = UserFactory(name="Jordan")

        liked = feed_service.toggle_like(fan, post.pk)
        unliked = feed_service.toggle_like(fan, post.pk)

        assert liked.value["liked"] is True
        assert liked.value["likes_count"] == 1
        assert unliked.value == {"liked": False, "likes_count": 0, "post_id": str(post.pk)}
        event_bus.publish.assert_called_once()
        event_type, payload = event_bus.publish.call_args[0]
        assert event_type == EventTypes.POST_LIKED
        assert payload["actor_name"] == "Jordan"
        assert payload["author_id"] == str(post.author_id)

    def test_own_bookmark_is_silent(self, feed_service, event_bus):
        post = PostFactory()

        result = feed_service.toggle_bookmark(post.author, post.pk)

        assert result.value["bookmarked"] is True
        event_bus.publish.assert_not_called()

    def test_hide_and_delete(self, feed_service):
        post = PostFactory()
        stranger = UserFactory()

        assert feed_service.hide_post(stranger, post.pk).value["hidden"] is True
        assert post.hidden_by.filter(pk=stranger.pk).exists()
        assert feed_service.delete_post(stranger, post.pk).error == ErrorCodes.PERMISSION_DENIED
        assert feed_service.delete_post(post.author, post.pk).ok is True
        assert feed_service.get_post(post.pk).error == ErrorCodes.POST_NOT_FOUND

    def test_unhide_returns_post_to_the_feed(self, feed_service):
        post = PostFactory()
        viewer = UserFactory()
        feed_service.hide_post(viewer, post.pk)

        result = feed_service.unhide_post(viewer, post.pk)

        assert result.value == {"hidden": False, "post_id": str(post.pk)}
        assert not post.hidden_by.filter(pk=viewer.pk).exists()
        assert [p.pk for p in feed_service.get_posts(viewer).value] == [post.pk]

    def test_unhide_missing_post(self, feed_service):
        result = feed_service.unhide_post(UserFactory(), "00000000-0000-0000-0000-000000000000")

        assert result.error == ErrorCodes.POST_NOT_FOUND
