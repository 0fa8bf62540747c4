from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from django.utils import timezone

from accounts.tests.factories import UserFactory
from activity.domain.services import CommentService, NotificationService
from activity.models import Comment, Notification
from activity.tests.factories import CommentFactory, NotificationFactory, PostFactory
from infrastructure.events import EventTypes
from utils.service_base import ErrorCodes


@pytest.mark.unit
@pytest.mark.django_db
class TestCommentService:
    def setup_method(self):
        self.event_bus = MagicMock()
        self.service = CommentService(event_bus=self.event_bus)

    def test_comment_notifies_author(self):
        post = PostFactory()
        commenter = UserFactory()

        result = self.service.create(commenter, post.pk, "Love this")

        assert result.ok is True
        event_type, payload = self.event_bus.publish.call_args[0]
        assert event_type == EventTypes.COMMENT_CREATED
        assert payload["author_id"] == str(post.author_id)

    def test_own_post_comment_is_silent(self):
        post = PostFactory()

        self.service.create(post.author, post.pk, "Thanks all")

        self.event_bus.publish.assert_not_called()

    def test_blank_content(self):
        result = self.service.create(UserFactory(), PostFactory().pk, "   ")

        assert result.error == ErrorCodes.INVALID_INPUT
        assert Comment.objects.count() == 0

    def test_list_oldest_first(self):
        post = PostFactory()
        older = CommentFactory(post=post)
        Comment.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(minutes=5))
        newer = CommentFactory(post=post)

        result = self.service.list(post.pk)

        assert [comment.pk for comment in result.value] == [older.pk, newer.pk]

    def test_unknown_post(self):
        assert self.service.list("00000000-0000-0000-0000-000000000000").error == ErrorCodes.POST_NOT_FOUND


@pytest.mark.unit
@pytest.mark.django_db
class TestNotificationService:
    def setup_method(self):
        self.service = NotificationService()

    def test_list_is_limited_and_newest_first(self):
        user = UserFactory()
        for _ in range(3):
            NotificationFactory(recipient=user)
        NotificationFactory()

        result = self.service.list_for(user, limit=2)

        assert len(result.value) == 2
        assert result.value[0].created_at >= result.value[1].created_at

    def test_mark_read_only_for_recipient(self):
        notification = NotificationFactory()

        assert self.service.mark_read(UserFactory(), notification.pk).error == ErrorCodes.NOT_FOUND
        assert self.service.mark_read(notification.recipient, notification.pk).value.is_read is True

    def test_mark_all_read(self):
        user = UserFactory()
        NotificationFactory(recipient=user)
        NotificationFactory(recipient=user, is_read=True)

        assert self.service.mark_all_read(user).value == {"updated": 1}
        assert self.service.unread_count(user) == 0

    def test_delete_only_for_recipient(self):
        notification = NotificationFactory()

        assert self.service.delete(UserFactory(), notification.pk).error == ErrorCodes.NOT_FOUND
        assert self.service.delete(notification.recipient, notification.pk).ok is True
        assert not Notification.objects.filter(pk=notification.pk).exists()

    def test_notify_validates_type_and_recipient(self):
        user = UserFactory()

        assert self.service.notify(user.pk, "NEW_LIKE", "Ana liked your post").ok is True
        assert self.service.notify(user.pk, "SPAM", "Buy now").error == ErrorCodes.INVALID_INPUT
        assert (
            self.service.notify("00000000-0000-0000-0000-000000000000", "NEW_LIKE", "x").error
            == ErrorCodes.USER_NOT_FOUND
        )
