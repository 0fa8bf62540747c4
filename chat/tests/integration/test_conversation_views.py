from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.tests.factories import UserFactory
from infrastructure.container import container


class ConversationViewIntegrationTest(TestCase):
    def setUp(self):
        container.reset()
        self.client = APIClient()
        self.user = UserFactory()
        self.other = UserFactory(name="Morgan")
        self.client.force_authenticate(user=self.user)
        self.list_url = reverse("chat:conversation-list")

    def start(self):
        return self.client.post(self.list_url, {"user_id": str(self.other.pk)}, format="json")

    def test_start_conversation_is_idempotent(self):
        first = self.start()
        second = self.start()

        self.assertEqual(first.status_code, status.HTTP_201_CREATED)
        self.assertTrue(first.data["is_new"])
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(second.data["conversation_id"], first.data["conversation_id"])

    def test_send_and_read_messages(self):
        conversation_id = self.start().data["conversation_id"]
        messages_url = reverse("chat:conversation-messages", args=[conversation_id])

        sent = self.client.post(messages_url, {"body": "Are you open Sunday?"}, format="json")
        listed = self.client.get(messages_url)
        inbox = self.client.get(self.list_url)

        self.assertEqual(sent.status_code, status.HTTP_201_CREATED)
        self.assertEqual(listed.data[0]["body"], "Are you open Sunday?")
        self.assertEqual(inbox.data[0]["other_user"]["name"], "Morgan")
        self.assertEqual(inbox.data[0]["unread_count"], 0)

    def test_mark_read(self):
        conversation_id = self.start().data["conversation_id"]
        container.chat_service().send_message(self.other, conversation_id, "ping")

        response = self.client.post(reverse("chat:conversation-mark-read", args=[conversation_id]))

        self.assertEqual(response.data, {"marked_read": 1})

    def test_outsider_cannot_read(self):
        conversation_id = self.start().data["conversation_id"]
        self.client.force_authenticate(user=UserFactory())

        response = self.client.get(reverse("chat:conversation-messages", args=[conversation_id]))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_start_with_yourself(self):
        response = self.client.post(self.list_url, {"user_id": str(self.user.pk)}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
