from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.tests.factories import UserFactory
from activity.models import Post
from activity.tests.factories import CommentFactory, NotificationFactory, PostFactory
from infrastructure.container import container


class PostViewIntegrationTest(TestCase):
    def setUp(self):
        container.reset()
        self.client = APIClient()
        self.user = UserFactory()
        self.list_url = reverse("activity:post-list")

    def test_feed_is_public(self):
        post = PostFactory(content="Morning run")
        CommentFactory(post=post)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data[0]["content"], "Morning run")
        self.assertEqual(response.data[0]["comments_count"], 1)
        self.assertEqual(str(response.data[0]["user"]["id"]), str(post.author.pk))

    def test_anonymous_following_feed_is_empty(self):
        PostFactory()

        response = self.client.get(self.list_url, {"filter": "following"})

        self.assertEqual(response.data, [])

    def test_default_bio_in_author_summary(self):
        PostFactory(author=UserFactory(bio=""))

        response = self.client.get(self.list_url)

        self.assertEqual(response.data[0]["user"]["bio"], "No Bio Provided Yet..")

    def test_create_requires_auth(self):
        response = self.client.post(self.list_url, {"content": "hi"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_create_post(self):
        self.client.force_authenticate(user=self.user)

        response = self.client.post(
            self.list_url,
            {"content": "New chair", "category": "Default", "mentions": []},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["category"], "")
        self.assertEqual(response.data["likes"], [])

    def test_like_and_comment(self):
        post = PostFactory()
        self.client.force_authenticate(user=self.user)

        liked = self.client.post(reverse("activity:post-like", args=[post.pk]))
        commented = self.client.post(
            reverse("activity:post-comments", args=[post.pk]), {"content": "Great"}, format="json"
        )
        comments = self.client.get(reverse("activity:post-comments", args=[post.pk]))

        self.assertTrue(liked.data["liked"])
        self.assertEqual(commented.status_code, status.HTTP_201_CREATED)
        self.assertEqual(comments.data[0]["content"], "Great")

    def test_delete_other_users_post(self):
        post = PostFactory()
        self.client.force_authenticate(user=self.user)

        response = self.client.delete(reverse("activity:post-detail", args=[post.pk]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Post.objects.filter(pk=post.pk).exists())

    def test_hide_then_unhide(self):
        post = PostFactory()
        self.client.force_authenticate(user=self.user)
        hide_url = reverse("activity:post-hide", args=[post.pk])

        self.client.post(hide_url)
        hidden_feed = self.client.get(self.list_url)
        response = self.client.delete(hide_url)
        restored_feed = self.client.get(self.list_url)

        self.assertEqual(hidden_feed.data, [])
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["hidden"])
        self.assertEqual(len(restored_feed.data), 1)


class NotificationViewIntegrationTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = UserFactory()
        self.client.force_authenticate(user=self.user)

    def test_list_mark_and_delete(self):
        notification = NotificationFactory(recipient=self.user)
        NotificationFactory()
        detail_url = reverse("activity:notification-detail", args=[notification.pk])

        listed = self.client.get(reverse("activity:notification-list"))
        marked = self.client.patch(detail_url)
        unread = self.client.get(reverse("activity:notification-unread-count"))
        deleted = self.client.delete(detail_url)

        self.assertEqual(len(listed.data), 1)
        self.assertTrue(marked.data["is_read"])
        self.assertEqual(unread.data, {"unread": 0})
        self.assertEqual(deleted.status_code, status.HTTP_204_NO_CONTENT)

    def test_cannot_touch_someone_elses_notification(self):
        other = NotificationFactory()

        response = self.client.delete(reverse("activity:notification-detail", args=[other.pk]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_mark_all_read(self):
        NotificationFactory(recipient=self.user)
        NotificationFactory(recipient=self.user)

        response = self.client.post(reverse("activity:notification-mark-all-read"))

        self.assertEqual(response.data, {"updated": 2})
